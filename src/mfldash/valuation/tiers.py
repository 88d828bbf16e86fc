"""Partition valued players into auction-strategy dollar bands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from mfldash.models import PlayerRecord, ValuationResult, ValuationSettings
from mfldash.valuation.auction import value_pool


# (tier name, minimum auction value), highest band first.
TIER_BANDS: Tuple[Tuple[str, int], ...] = (
    ("elite", 40),
    ("premium", 25),
    ("starter", 10),
    ("value", 5),
    ("bargain", 2),
    ("dollar", 1),
)


def tier_for_value(value: int) -> str:
    for name, minimum in TIER_BANDS:
        if value >= minimum:
            return name
    return TIER_BANDS[-1][0]


@dataclass(frozen=True)
class AuctionTiers:
    elite: List[ValuationResult] = field(default_factory=list)
    premium: List[ValuationResult] = field(default_factory=list)
    starter: List[ValuationResult] = field(default_factory=list)
    value: List[ValuationResult] = field(default_factory=list)
    bargain: List[ValuationResult] = field(default_factory=list)
    dollar: List[ValuationResult] = field(default_factory=list)

    def iter_tiers(self) -> Iterator[Tuple[str, List[ValuationResult]]]:
        for name, _ in TIER_BANDS:
            yield name, getattr(self, name)

    def as_dict(self) -> Dict[str, List[ValuationResult]]:
        return dict(self.iter_tiers())

    def __len__(self) -> int:
        return sum(len(results) for _, results in self.iter_tiers())


def partition_results(results: Sequence[ValuationResult]) -> AuctionTiers:
    """Bucket already-valued players; every result lands in exactly one tier."""

    buckets: Dict[str, List[ValuationResult]] = {name: [] for name, _ in TIER_BANDS}
    for result in results:
        buckets[tier_for_value(result.auction_value)].append(result)
    for members in buckets.values():
        members.sort(key=lambda result: result.auction_value, reverse=True)
    return AuctionTiers(**buckets)


def tier_players(
    players: Sequence[PlayerRecord],
    settings: Optional[ValuationSettings] = None,
) -> AuctionTiers:
    """Value ``players`` against themselves and split them into dollar bands."""

    return partition_results(value_pool(players, settings))
