from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from mfldash.models import MatchStrategy, PlayerRecord, RankingRecord


class MatchRequest(BaseModel):
    players: List[PlayerRecord]
    rankings: List[RankingRecord] = Field(default_factory=list)


class MatchResultResponse(BaseModel):
    player_id: str
    name: str
    matched: bool
    strategy: MatchStrategy | None = None
    matched_key: str | None = None
    ranking: RankingRecord | None = None


class MatchResponse(BaseModel):
    total_players: int
    matched_players: int
    unmatched_players: List[str]
    results: List[MatchResultResponse]
