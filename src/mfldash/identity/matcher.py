"""Cross-source matching of league players against ranking rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from mfldash.identity.names import first_last_initial, labelled_variations, variations
from mfldash.models import MatchResult, MatchStrategy, PlayerRecord, Position, RankingRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupCollision:
    """Two ranking rows produced the same lookup key; ``winner`` was kept."""

    key: str
    replaced: RankingRecord
    winner: RankingRecord


def build_ranking_lookup(
    rankings: Sequence[RankingRecord],
    *,
    collisions: Optional[List[LookupCollision]] = None,
) -> Dict[str, RankingRecord]:
    """Map every name variation of every ranking to that ranking.

    Later rankings overwrite earlier ones on a shared key. Pass a list as
    ``collisions`` to record each overwrite; the resolved lookup is the same
    either way.
    """

    lookup: Dict[str, RankingRecord] = {}
    for ranking in rankings:
        for key in variations(ranking.name):
            previous = lookup.get(key)
            if previous is not None and previous is not ranking:
                logger.debug("Ranking key %r: %s replaced by %s", key, previous.name, ranking.name)
                if collisions is not None:
                    collisions.append(LookupCollision(key=key, replaced=previous, winner=ranking))
            lookup[key] = ranking
    return lookup


def match_player(player: PlayerRecord, lookup: Dict[str, RankingRecord]) -> MatchResult:
    for key, strategy in labelled_variations(player.name):
        ranking = lookup.get(key)
        if ranking is not None:
            return MatchResult(player=player, ranking=ranking, strategy=strategy, matched_key=key)

    if player.position_code is not Position.DEF:
        initial_key = first_last_initial(player.name)
        if initial_key:
            ranking = lookup.get(initial_key)
            if ranking is not None:
                return MatchResult(
                    player=player,
                    ranking=ranking,
                    strategy=MatchStrategy.FIRST_LAST_INITIAL,
                    matched_key=initial_key,
                )

    return MatchResult(player=player)


def match(
    players: Sequence[PlayerRecord],
    rankings: Sequence[RankingRecord],
    *,
    collisions: Optional[List[LookupCollision]] = None,
) -> List[MatchResult]:
    """Pair each player with at most one ranking.

    Unmatched players come back with ``ranking=None``. Results follow the
    order of ``players``; reproducible output needs a stably ordered
    ``rankings`` list because of last-write-wins on key collisions.
    """

    lookup = build_ranking_lookup(rankings, collisions=collisions)
    results = [match_player(player, lookup) for player in players]
    matched = sum(1 for result in results if result.matched)
    logger.debug("Matched %d/%d players against %d rankings", matched, len(results), len(rankings))
    return results


def apply_matches(results: Sequence[MatchResult]) -> List[PlayerRecord]:
    """Return fresh player records carrying rank, tier and bye week of their match."""

    records: List[PlayerRecord] = []
    for result in results:
        if result.ranking is None:
            records.append(result.player)
            continue
        ranking = result.ranking
        records.append(
            result.player.model_copy(
                update={
                    "rank": ranking.rank,
                    "tier": ranking.tier,
                    "bye_week": ranking.bye_week,
                }
            )
        )
    return records
