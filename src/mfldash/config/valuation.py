"""Valuation tables for a 12-team, two-QB, IDP dynasty auction league."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Mapping, Tuple

from mfldash.positions import Position


@dataclass(frozen=True)
class AgingCurve:
    position: Position
    peak: Tuple[int, int]
    youth_bonus: Mapping[int, float]
    decline_penalty: Mapping[int, float]

    def in_peak(self, age: int) -> bool:
        return self.peak[0] <= age <= self.peak[1]


# Rank of the replacement-level player; counts reflect starters plus flex depth.
REPLACEMENT_LEVELS: Dict[Position, int] = {
    Position.QB: 24,
    Position.RB: 48,
    Position.WR: 60,
    Position.TE: 24,
    Position.PK: 12,
    Position.DEF: 12,
    Position.DT: 24,
    Position.DE: 24,
    Position.LB: 36,
    Position.CB: 24,
    Position.S: 24,
}

# Roster-slot scarcity weights; not required to sum to 1.
POSITION_WEIGHTS: Dict[Position, float] = {
    Position.QB: 0.18,
    Position.RB: 0.25,
    Position.WR: 0.35,
    Position.TE: 0.12,
    Position.PK: 0.02,
    Position.DEF: 0.03,
    Position.DT: 0.01,
    Position.DE: 0.01,
    Position.LB: 0.015,
    Position.CB: 0.01,
    Position.S: 0.01,
}

DEFAULT_POSITION_WEIGHT = 0.01

AGING_CURVES: Dict[Position, AgingCurve] = {
    Position.QB: AgingCurve(
        position=Position.QB,
        peak=(26, 32),
        youth_bonus={21: 1.1, 22: 1.08, 23: 1.06, 24: 1.04, 25: 1.02},
        decline_penalty={33: 0.98, 34: 0.95, 35: 0.92, 36: 0.88, 37: 0.82, 38: 0.75},
    ),
    Position.RB: AgingCurve(
        position=Position.RB,
        peak=(23, 26),
        youth_bonus={21: 1.15, 22: 1.1},
        decline_penalty={27: 0.92, 28: 0.85, 29: 0.75, 30: 0.65, 31: 0.5, 32: 0.35},
    ),
    Position.WR: AgingCurve(
        position=Position.WR,
        peak=(25, 29),
        youth_bonus={21: 1.2, 22: 1.15, 23: 1.1, 24: 1.05},
        decline_penalty={30: 0.95, 31: 0.9, 32: 0.85, 33: 0.75, 34: 0.65},
    ),
    Position.TE: AgingCurve(
        position=Position.TE,
        peak=(26, 30),
        youth_bonus={21: 1.25, 22: 1.2, 23: 1.15, 24: 1.1, 25: 1.05},
        decline_penalty={31: 0.95, 32: 0.9, 33: 0.8, 34: 0.7},
    ),
}

# Untabulated ages outside these bounds get the flat bonus/penalty.
YOUNG_AGE_CUTOFF = 21
YOUNG_AGE_MULTIPLIER = 1.3
OLD_AGE_CUTOFF = 34
OLD_AGE_MULTIPLIER = 0.6

ELITE_OFFENSES: FrozenSet[str] = frozenset({"KC", "BUF", "MIA", "PHI", "SF", "CIN", "DAL"})

GOOD_SITUATIONS: Mapping[Position, FrozenSet[str]] = {
    Position.QB: frozenset({"KC", "BUF", "CIN", "LAC", "JAX"}),
    Position.RB: frozenset({"SF", "MIA", "ATL", "DET", "BAL"}),
    Position.WR: frozenset({"KC", "MIA", "CIN", "MIN", "PHI"}),
}

TEAM_BONUS = 1.05
TEAM_MULTIPLIER_CAP = 1.10

# (max overall pick, multiplier), checked in order.
DRAFT_CAPITAL_TIERS: Tuple[Tuple[int, float], ...] = (
    (10, 1.2),
    (32, 1.1),
    (64, 1.05),
    (96, 1.0),
    (160, 0.95),
)
LATE_ROUND_MULTIPLIER = 0.9
PICKS_PER_ROUND = 32

# (max consensus rank, share of budget), checked in order.
RANK_VALUE_BRACKETS: Tuple[Tuple[int, float], ...] = (
    (12, 0.12),
    (24, 0.08),
    (50, 0.05),
    (100, 0.02),
    (200, 0.01),
)

ROOKIE_MULTIPLIER = 1.15
EXPIRING_CONTRACT_MULTIPLIER = 0.95


def iter_aging_curves() -> Iterable[AgingCurve]:
    """Return an iterator of all configured aging curves."""

    return AGING_CURVES.values()


def get_aging_curve(position: Position | str) -> AgingCurve:
    """Fetch the aging curve for a position, raising KeyError if none is tabulated."""

    key = position if isinstance(position, Position) else Position.parse(position)
    if key not in AGING_CURVES:
        raise KeyError(f"No aging curve configured for position={position!r}")
    return AGING_CURVES[key]
