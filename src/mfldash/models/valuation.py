"""Settings and result models for auction valuation."""

from __future__ import annotations

from datetime import date
from typing import Dict, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from mfldash.config.valuation import POSITION_WEIGHTS, REPLACEMENT_LEVELS
from mfldash.models.player import PlayerRecord
from mfldash.positions import Position


class ValuationSettings(BaseModel):
    """League economics plus the replacement/weight tables used for VBD."""

    total_budget: int = Field(default=500, ge=3)
    num_teams: int = Field(default=12, ge=1)
    roster_size: int = Field(default=26, ge=1)
    current_year: int = Field(default_factory=lambda: date.today().year)
    include_rankings: bool = False
    replacement_levels: Dict[Position, int] = Field(default_factory=lambda: dict(REPLACEMENT_LEVELS))
    position_weights: Dict[Position, float] = Field(default_factory=lambda: dict(POSITION_WEIGHTS))

    model_config = ConfigDict(frozen=True)

    @property
    def draftable_slots(self) -> int:
        return self.roster_size * self.num_teams

    @property
    def total_dollars(self) -> int:
        # Every roster slot reserves a $1 minimum bid.
        return self.total_budget * self.num_teams - self.draftable_slots

    @property
    def max_value(self) -> int:
        return self.total_budget * 2 // 5


class ValuationBreakdown(BaseModel):
    base_value: int
    age_adjustment: float = 1.0
    draft_capital: float = 1.0
    team_situation: float = 1.0
    rookie_bonus: float = 1.0
    contract_status: float = 1.0
    total_multiplier: float = 1.0
    rank_value: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class ValuationResult(BaseModel):
    player: PlayerRecord
    auction_value: int = Field(..., ge=1)
    vbd: float = 0.0
    dynasty_multiplier: float = 1.0
    draft_capital_multiplier: float = 1.0
    team_multiplier: float = 1.0
    rookie_multiplier: float = 1.0
    contract_multiplier: float = 1.0
    breakdown: ValuationBreakdown

    model_config = ConfigDict(frozen=True)
