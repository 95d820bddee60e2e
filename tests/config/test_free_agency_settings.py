"""
Tests for FreeAgencySettings
"""

import pytest

from config.free_agency_settings import FreeAgencySettings


class TestDefaults:

    def test_defaults(self):
        settings = FreeAgencySettings()
        assert settings.shortlist_size == 3
        assert settings.max_concurrent_offers == 6
        assert settings.evaluation_frequency == "weekly"
        assert settings.open_fa_discount == 20.0
        assert settings.trust_penalty == 0.2
        assert settings.market_ripple_enabled is True


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        {"shortlist_size": -1},
        {"max_concurrent_offers": 0},
        {"evaluation_frequency": "monthly"},
        {"open_fa_discount": 120},
        {"trust_penalty": 1.5},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ValueError):
            FreeAgencySettings(**kwargs)

    def test_zero_shortlist_is_allowed(self):
        assert FreeAgencySettings(shortlist_size=0).shortlist_size == 0


class TestSerialization:

    def test_from_camel_case_document(self):
        settings = FreeAgencySettings.from_dict({
            "shortlistSize": 2,
            "maxConcurrentOffers": 4,
            "evaluationFrequency": "daily",
            "openFADiscount": 15,
            "marketRippleEnabled": False,
        })
        assert settings.shortlist_size == 2
        assert settings.max_concurrent_offers == 4
        assert settings.evaluation_frequency == "daily"
        assert settings.open_fa_discount == 15
        assert settings.trust_penalty == 0.2
        assert settings.market_ripple_enabled is False

    def test_snake_case_wins(self):
        settings = FreeAgencySettings.from_dict({"shortlist_size": 5, "shortlistSize": 1})
        assert settings.shortlist_size == 5

    def test_round_trip(self):
        settings = FreeAgencySettings(shortlist_size=4, trust_penalty=0.3)
        assert FreeAgencySettings.from_dict(settings.to_dict()) == settings
