from datetime import date

import pytest
from pydantic import ValidationError

from mfldash.models import PlayerRecord, ValuationSettings
from mfldash.valuation import calculate_auction_value, round_half_up, value_pool


SMALL_LEAGUE = ValuationSettings(total_budget=100, num_teams=1, roster_size=2, current_year=2024)


def _qb(player_id: str, points: float, **kwargs) -> PlayerRecord:
    return PlayerRecord(player_id=player_id, name=f"Quarterback {player_id}", position="QB", projected_points=points, **kwargs)


def _small_pool(**overrides) -> list[PlayerRecord]:
    star = _qb("A", 300)
    second = _qb("B", 250, **overrides)
    depth = [_qb(f"D{index}", 200) for index in range(22)]
    return [star, second, *depth]


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(0.5) == 1


def test_base_values_and_clamp():
    pool = _small_pool()
    results = {result.player.player_id: result for result in value_pool(pool, SMALL_LEAGUE)}

    # A: round(18 * 98 / 27) = 65, clamped to 40% of the budget.
    assert results["A"].auction_value == 40
    assert results["A"].breakdown.base_value == 65
    assert results["B"].auction_value == 33
    assert results["D0"].auction_value == 1
    assert results["D0"].vbd == 0.0


def test_young_quarterback_gets_dynasty_bonus():
    pool = _small_pool(birthdate=date(2002, 6, 1))
    result = calculate_auction_value(pool[1], pool, SMALL_LEAGUE)

    assert result.dynasty_multiplier == pytest.approx(1.08)
    assert result.auction_value == 36


def test_rank_blend_when_enabled():
    pool = _small_pool(rank=5)
    blended = SMALL_LEAGUE.model_copy(update={"include_rankings": True})

    result = calculate_auction_value(pool[1], pool, blended)
    assert result.breakdown.rank_value == 12
    assert result.auction_value == 27

    unblended = calculate_auction_value(pool[1], pool, SMALL_LEAGUE)
    assert unblended.auction_value == 33
    assert unblended.breakdown.rank_value is None


def test_replacement_player_is_worth_one_dollar_with_defaults():
    settings = ValuationSettings(total_budget=500, num_teams=12, roster_size=26)
    pool = [_qb(str(index), 400 - 5 * index) for index in range(30)]

    result = calculate_auction_value(pool[23], pool, settings)
    assert result.vbd == 0.0
    assert result.auction_value == 1
    assert result.breakdown.total_multiplier == 1.0


def test_value_pool_matches_single_player_calls():
    pool = _small_pool()
    batch = value_pool(pool, SMALL_LEAGUE)
    singles = [calculate_auction_value(player, pool, SMALL_LEAGUE) for player in pool]
    assert [result.auction_value for result in batch] == [result.auction_value for result in singles]


def test_clamp_holds_for_every_player():
    settings = ValuationSettings(total_budget=200, num_teams=4, roster_size=5, current_year=2024)
    pool = [
        PlayerRecord(
            player_id=str(index),
            name=f"Player {index}",
            position=position,
            team="KC",
            projected_points=500 - 7 * index,
            birthdate=date(2003, 1, 1),
            draft_year="2024",
            draft_round=1,
            draft_pick=1,
        )
        for index, position in enumerate(["QB", "RB", "WR", "TE", "LB", "PK"] * 10)
    ]
    for result in value_pool(pool, settings):
        assert 1 <= result.auction_value <= settings.max_value


def test_empty_pool_values_nothing():
    assert value_pool([], SMALL_LEAGUE) == []


def test_budget_below_three_dollars_is_rejected():
    # 40% of a $2 budget rounds down to a $0 cap, below the $1 minimum bid.
    with pytest.raises(ValidationError):
        ValuationSettings(total_budget=2, num_teams=1, roster_size=1)


def test_minimum_budget_values_every_player_at_one_dollar():
    settings = ValuationSettings(total_budget=3, num_teams=1, roster_size=1, current_year=2024)
    assert settings.max_value == 1
    results = value_pool([_qb("A", 10), _qb("B", 5)], settings)
    assert [result.auction_value for result in results] == [1, 1]
