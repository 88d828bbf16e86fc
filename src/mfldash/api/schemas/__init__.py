"""Pydantic models for API I/O."""

from .league import LeaguePlayersResponse, SyncRequest, SyncResponse
from .matching import MatchRequest, MatchResponse, MatchResultResponse
from .valuation import TiersResponse, ValuationRequest, ValuationResponse

__all__ = [
    "LeaguePlayersResponse",
    "SyncRequest",
    "SyncResponse",
    "MatchRequest",
    "MatchResponse",
    "MatchResultResponse",
    "TiersResponse",
    "ValuationRequest",
    "ValuationResponse",
]
