"""Data models shared across the package."""

from .player import PlayerRecord, Position, RankingRecord, parse_birthdate
from .match import MatchResult, MatchStrategy
from .valuation import ValuationBreakdown, ValuationResult, ValuationSettings

__all__ = [
    "MatchResult",
    "MatchStrategy",
    "PlayerRecord",
    "Position",
    "RankingRecord",
    "ValuationBreakdown",
    "ValuationResult",
    "ValuationSettings",
    "parse_birthdate",
]
