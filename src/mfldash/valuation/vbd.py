"""Value-based drafting against positional replacement levels."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from mfldash.config.valuation import DEFAULT_POSITION_WEIGHT
from mfldash.models import PlayerRecord, Position, ValuationSettings


def _position_players(position: Position, pool: Sequence[PlayerRecord]) -> List[PlayerRecord]:
    # sorted() is stable, so equal projections keep pool order.
    return sorted(
        (player for player in pool if player.position_code is position),
        key=lambda player: player.projected_points,
        reverse=True,
    )


def replacement_points(
    position: Position,
    pool: Sequence[PlayerRecord],
    settings: Optional[ValuationSettings] = None,
) -> Optional[float]:
    """Projected points of the replacement-level player at ``position``.

    Returns None when the position has no configured replacement level and
    0.0 when the pool is too shallow to reach it.
    """

    settings = settings or ValuationSettings()
    level = settings.replacement_levels.get(position)
    if not level:
        return None
    ranked = _position_players(position, pool)
    if len(ranked) < level:
        return 0.0
    return ranked[level - 1].projected_points


def weighted_vbd(player: PlayerRecord, replacement: Optional[float], settings: ValuationSettings) -> float:
    if replacement is None:
        return 0.0
    base = max(0.0, player.projected_points - replacement)
    weight = settings.position_weights.get(player.position_code, DEFAULT_POSITION_WEIGHT)
    return base * weight


def calculate_vbd(
    player: PlayerRecord,
    pool: Sequence[PlayerRecord],
    settings: Optional[ValuationSettings] = None,
) -> float:
    """Weighted value over replacement for ``player`` within ``pool``."""

    settings = settings or ValuationSettings()
    replacement = replacement_points(player.position_code, pool, settings)
    return weighted_vbd(player, replacement, settings)


def replacement_table(
    pool: Sequence[PlayerRecord],
    settings: ValuationSettings,
) -> Dict[Position, Optional[float]]:
    return {
        position: replacement_points(position, pool, settings)
        for position in settings.replacement_levels
    }


def positional_scarcity(
    position: Position | str,
    pool: Sequence[PlayerRecord],
    settings: Optional[ValuationSettings] = None,
) -> float:
    """How steeply a position drops from its top tier to replacement level."""

    settings = settings or ValuationSettings()
    key = position if isinstance(position, Position) else Position.parse(position)
    level = settings.replacement_levels.get(key)
    if not level:
        return 1.0

    ranked = _position_players(key, pool)
    if len(ranked) < level:
        return 1.5

    top_tier = ranked[: level // 3]
    if not top_tier:
        return 1.0
    average_top = sum(player.projected_points for player in top_tier) / len(top_tier)
    drop_off = average_top - ranked[level - 1].projected_points

    if drop_off > 100:
        return 1.3
    if drop_off > 75:
        return 1.2
    if drop_off > 50:
        return 1.1
    return 1.0
