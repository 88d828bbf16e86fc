"""Dynasty adjustment factors applied on top of the VBD dollar value.

Each factor is computed independently and defaults to 1.0 when the player
record lacks the data it needs.
"""

from __future__ import annotations

from mfldash.config.valuation import (
    DRAFT_CAPITAL_TIERS,
    ELITE_OFFENSES,
    EXPIRING_CONTRACT_MULTIPLIER,
    GOOD_SITUATIONS,
    LATE_ROUND_MULTIPLIER,
    OLD_AGE_CUTOFF,
    OLD_AGE_MULTIPLIER,
    PICKS_PER_ROUND,
    RANK_VALUE_BRACKETS,
    ROOKIE_MULTIPLIER,
    TEAM_BONUS,
    TEAM_MULTIPLIER_CAP,
    YOUNG_AGE_CUTOFF,
    YOUNG_AGE_MULTIPLIER,
    get_aging_curve,
)
from mfldash.models import PlayerRecord
from mfldash.teams import canonical_team


def dynasty_multiplier(player: PlayerRecord, current_year: int) -> float:
    """Age-curve multiplier; age is ``current_year`` minus the birth year."""

    if player.birthdate is None:
        return 1.0
    try:
        curve = get_aging_curve(player.position_code)
    except KeyError:
        return 1.0

    age = current_year - player.birthdate.year
    if curve.in_peak(age):
        return 1.0
    if age in curve.youth_bonus:
        return curve.youth_bonus[age]
    if age in curve.decline_penalty:
        return curve.decline_penalty[age]
    if age < YOUNG_AGE_CUTOFF:
        return YOUNG_AGE_MULTIPLIER
    if age > OLD_AGE_CUTOFF:
        return OLD_AGE_MULTIPLIER
    return 1.0


def overall_pick(player: PlayerRecord) -> int | None:
    if not player.draft_round or not player.draft_pick:
        return None
    return (player.draft_round - 1) * PICKS_PER_ROUND + player.draft_pick


def draft_capital_multiplier(player: PlayerRecord) -> float:
    pick = overall_pick(player)
    if pick is None:
        return 1.0
    for max_pick, multiplier in DRAFT_CAPITAL_TIERS:
        if pick <= max_pick:
            return multiplier
    return LATE_ROUND_MULTIPLIER


def team_multiplier(player: PlayerRecord) -> float:
    if not player.team:
        return 1.0
    team = canonical_team(player.team)
    multiplier = 1.0
    if team in ELITE_OFFENSES:
        multiplier *= TEAM_BONUS
    if team in GOOD_SITUATIONS.get(player.position_code, frozenset()):
        multiplier *= TEAM_BONUS
    return min(multiplier, TEAM_MULTIPLIER_CAP)


def rookie_multiplier(player: PlayerRecord, current_year: int) -> float:
    return ROOKIE_MULTIPLIER if player.draft_year == str(current_year) else 1.0


def contract_multiplier(player: PlayerRecord) -> float:
    status = (player.contract_status or "").strip().lower()
    return EXPIRING_CONTRACT_MULTIPLIER if status == "expiring" else 1.0


def rank_value(rank: int, total_budget: int) -> int:
    """Dollar value implied by a consensus rank bracket."""

    for max_rank, share in RANK_VALUE_BRACKETS:
        if rank <= max_rank:
            return int(total_budget * share)
    return 1
