"""
Tests for deterministic player personalities
"""

import pytest

from player_management.player_personality import (
    PlayerPersonality,
    PlayerPersonalityGenerator,
    TeamPriority,
    generate_personality,
)


@pytest.fixture
def generator():
    return PlayerPersonalityGenerator()


class TestGeneration:

    def test_same_id_same_personality(self, generator):
        assert generator.generate_personality("4046") == generator.generate_personality("4046")

    def test_default_generator_matches_instance(self, generator):
        assert generate_personality("4046") == generator.generate_personality("4046")

    def test_different_ids_differ(self, generator):
        assert generator.generate_personality("4046") != generator.generate_personality("4047")

    @pytest.mark.parametrize("player_id", ["1", "4046", "player_abc", "9999"])
    def test_traits_within_ranges(self, generator, player_id):
        personality = generator.generate_personality(player_id)
        for trait, (low, high) in PlayerPersonalityGenerator.TRAIT_RANGES.items():
            assert low <= getattr(personality, trait) <= high

    def test_priorities_come_from_rules(self, generator):
        known = {(c, p, w) for c, p, w, _ in PlayerPersonalityGenerator.PRIORITY_RULES}
        for player_id in ("1", "2", "3", "4", "5", "6"):
            for priority in generator.generate_personality(player_id).priorities:
                assert (priority.category, priority.preference, priority.weight) in known

    def test_numeric_ids_are_stringified(self, generator):
        assert generator.generate_personality(123).player_id == "123"


class TestPlayerPersonality:

    @pytest.fixture
    def personality(self):
        return PlayerPersonality(
            player_id="p1",
            risk_tolerance=0.4,
            security_preference=0.8,
            agent_quality=0.6,
            loyalty=0.3,
            money_vs_role=0.5,
            market_savvy=0.7,
            priorities=[TeamPriority("role", "starter", 0.8)],
        )

    def test_primary_trait(self, personality):
        assert personality.primary_trait == "security_preference"

    def test_priority_lookup(self, personality):
        assert personality.priority_for("role").preference == "starter"
        assert personality.priority_for("location") is None

    def test_priorities_stored_as_tuple(self, personality):
        assert isinstance(personality.priorities, tuple)

    def test_dict_round_trip(self, personality):
        assert PlayerPersonality.from_dict(personality.to_dict()) == personality

    def test_out_of_range_trait(self):
        with pytest.raises(ValueError):
            PlayerPersonality("p1", 1.2, 0.5, 0.5, 0.5, 0.5, 0.5)
