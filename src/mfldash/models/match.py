"""Identity match results pairing league players with ranking rows."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel
from pydantic.config import ConfigDict

from mfldash.models.player import PlayerRecord, RankingRecord


class MatchStrategy(str, Enum):
    """Which kind of name key produced a match."""

    EXACT = "exact"
    REORDERED_NAME = "reordered_name"
    NAME_VARIATION = "name_variation"
    FIRST_LAST_INITIAL = "first_last_initial"


class MatchResult(BaseModel):
    player: PlayerRecord
    ranking: Optional[RankingRecord] = None
    strategy: Optional[MatchStrategy] = None
    matched_key: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def matched(self) -> bool:
        return self.ranking is not None
