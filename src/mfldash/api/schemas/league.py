from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from mfldash.models import PlayerRecord, RankingRecord


class SyncRequest(BaseModel):
    """MFL export payloads for one league.

    Omitted ``players``/``rosters`` are fetched from MFL for ``year``; with
    ``fetch_rankings`` set, consensus rankings are fetched from FantasyPros
    for every position present in the pool.
    """

    year: int | None = None
    players: Any = None
    rosters: Any = None
    rankings: List[RankingRecord] = Field(default_factory=list)
    projections: Dict[str, float] | None = None
    fetch_rankings: bool = False
    today: date | None = None


class SyncResponse(BaseModel):
    league_id: str
    total_players: int
    rostered_players: int
    free_agents: int
    rankings_fetched: int
    matched_players: int
    unmatched_players: List[str]


class LeaguePlayersResponse(BaseModel):
    league_id: str
    total_players: int
    players: List[PlayerRecord]
