"""
Decision rationale text.

Player and agent explanations attached to each PlayerDecision. Text depends
only on the decision branch and on how far the candidate offer sits from the
player's expected value, so identical inputs always produce identical text.
"""

from typing import Tuple

from free_agency.models import ContractAnalysis, ContractOffer


# Offer APY / expected AAV bands
STRONG_OFFER_RATIO = 1.1
FAIR_OFFER_RATIO = 0.9
WEAK_OFFER_RATIO = 0.7


def _value_gap(offer: ContractOffer, analysis: ContractAnalysis) -> float:
    if analysis.expected_aav <= 0:
        return 1.0
    return offer.apy / analysis.expected_aav


def _millions(amount: int) -> str:
    return f"${amount / 1_000_000:.1f}M"


def build_rationale(
    accepted: bool,
    offer: ContractOffer,
    analysis: ContractAnalysis,
    week_number: int,
    shortlisted_count: int
) -> Tuple[str, str]:
    """
    Build (player_rationale, agent_rationale) for a decision.

    Args:
        accepted: Whether the candidate bid was accepted
        offer: Candidate bid's terms
        analysis: Candidate bid's analysis
        week_number: FA week of the decision
        shortlisted_count: Bids kept alive on the shortlist

    Returns:
        Tuple of player and agent rationale strings
    """
    ratio = _value_gap(offer, analysis)
    apy = _millions(offer.apy)
    expected = _millions(analysis.expected_aav)

    if accepted:
        if ratio >= STRONG_OFFER_RATIO:
            player_text = f"This offer at {apy} per year beats what I expected. I'm ready to sign."
        elif ratio >= FAIR_OFFER_RATIO:
            player_text = f"{apy} per year is a fair deal for me. Let's get it done."
        else:
            player_text = (
                f"It's below the {expected} I was hoping for, but after {week_number} "
                f"week(s) on the market the {offer.years}-year deal makes sense."
            )
        agent_text = (
            f"Score {analysis.total_score:.2f} cleared the week {week_number} "
            f"threshold of {analysis.threshold:.2f}. Recommending my client accept."
        )
        return player_text, agent_text

    if ratio >= FAIR_OFFER_RATIO:
        player_text = (
            f"The money is close to what I want, but I'd like to see the rest of "
            f"my options before committing."
        )
    elif ratio >= WEAK_OFFER_RATIO:
        player_text = f"I'm looking for something closer to {expected} per year."
    else:
        player_text = f"At {apy} per year this offer is well short of my value."

    agent_text = (
        f"Best offer scored {analysis.total_score:.2f} against a threshold of "
        f"{analysis.threshold:.2f}. Keeping {shortlisted_count} offer(s) on the "
        f"shortlist while the market develops."
    )
    return player_text, agent_text
