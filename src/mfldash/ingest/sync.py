"""Build a league's resolved player pool from MFL exports and rankings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from mfldash.identity import apply_matches, match
from mfldash.ingest.mfl import parse_player_catalog, parse_rosters, rostered_player_ids
from mfldash.models import PlayerRecord, RankingRecord


logger = logging.getLogger(__name__)

_UNMATCHED_SAMPLE = 10


@dataclass(frozen=True)
class SyncReport:
    total_players: int
    rostered_players: int
    free_agents: int
    rankings_fetched: int
    matched_players: int
    unmatched_players: List[str]


def resolve_league(
    players_payload: Any,
    rosters_payload: Any,
    rankings: Sequence[RankingRecord],
    *,
    projections: Optional[Mapping[str, float]] = None,
    today: Optional[date] = None,
) -> Tuple[List[PlayerRecord], SyncReport]:
    """Parse rosters and the player catalog, then merge ranking data by name.

    Returns the fresh pool (catalog order) and a summary of the merge.
    """

    rosters = parse_rosters(rosters_payload)
    records = parse_player_catalog(
        players_payload,
        rosters=rosters,
        projections=projections,
        today=today,
    )
    results = match(records, rankings)
    pool = apply_matches(results)

    unmatched = [result.player.name for result in results if not result.matched]
    rostered = rostered_player_ids(rosters)
    report = SyncReport(
        total_players=len(pool),
        rostered_players=sum(1 for record in pool if record.player_id in rostered),
        free_agents=sum(1 for record in pool if record.is_free_agent),
        rankings_fetched=len(rankings),
        matched_players=len(pool) - len(unmatched),
        unmatched_players=unmatched,
    )
    logger.info(
        "Resolved %d players (%d rostered, %d free agents); matched %d of them to %d rankings",
        report.total_players,
        report.rostered_players,
        report.free_agents,
        report.matched_players,
        report.rankings_fetched,
    )
    if unmatched:
        logger.info("Sample unmatched players: %s", ", ".join(unmatched[:_UNMATCHED_SAMPLE]))
    return pool, report
