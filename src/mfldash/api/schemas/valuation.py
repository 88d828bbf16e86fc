from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from mfldash.models import PlayerRecord, ValuationResult, ValuationSettings


class ValuationRequest(BaseModel):
    players: List[PlayerRecord]
    settings: ValuationSettings = Field(default_factory=ValuationSettings)


class ValuationResponse(BaseModel):
    settings: ValuationSettings
    results: List[ValuationResult]
    cached: bool = False
    created_at: datetime | None = None


class TiersResponse(BaseModel):
    settings: ValuationSettings
    counts: Dict[str, int]
    scarcity: Dict[str, float] = Field(default_factory=dict)
    tiers: Dict[str, List[ValuationResult]]
