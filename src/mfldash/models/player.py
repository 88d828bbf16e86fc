"""Canonical player models shared across ingestion, identity and valuation layers."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic.config import ConfigDict

from mfldash.positions import Position


_EPOCH_PATTERN = re.compile(r"^-?\d+$")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_birthdate(value: Any) -> Optional[date]:
    """Coerce MFL epoch seconds, ISO strings or date objects to a ``date``."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = value
    else:
        text = str(value).strip()
        if not _EPOCH_PATTERN.match(text):
            try:
                return date.fromisoformat(text[:10])
            except ValueError:
                return None
        seconds = int(text)
    try:
        return (_EPOCH + timedelta(seconds=seconds)).date()
    except (OverflowError, ValueError):
        return None


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return None


class PlayerRecord(BaseModel):
    """Resolved player used by identity matching and auction valuation."""

    player_id: str = Field(..., min_length=1)
    name: str
    position: str = ""
    team: Optional[str] = None
    age: Optional[int] = None
    birthdate: Optional[date] = None
    draft_year: Optional[str] = None
    draft_round: Optional[int] = None
    draft_pick: Optional[int] = None
    is_free_agent: bool = False
    projected_points: float = Field(default=0.0, ge=0.0)
    rank: Optional[int] = None
    tier: Optional[int] = None
    bye_week: Optional[int] = None
    contract_status: Optional[str] = None
    salary: Optional[float] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("team", mode="before")
    @classmethod
    def _blank_team(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("birthdate", mode="before")
    @classmethod
    def _coerce_birthdate(cls, value: Any) -> Optional[date]:
        return parse_birthdate(value)

    @field_validator("draft_year", mode="before")
    @classmethod
    def _coerce_draft_year(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("draft_round", "draft_pick", "rank", "tier", "bye_week", "age", mode="before")
    @classmethod
    def _coerce_optional_int(cls, value: Any) -> Optional[int]:
        return _optional_int(value)

    @field_validator("projected_points", mode="before")
    @classmethod
    def _coerce_points(cls, value: Any) -> float:
        if value is None or value == "":
            return 0.0
        return max(0.0, float(value))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def normalized_key(self) -> str:
        from mfldash.identity.names import normalize

        return normalize(self.name)

    @property
    def position_code(self) -> Position:
        return Position.parse(self.position)


class RankingRecord(BaseModel):
    """Single row of a consensus ranking feed."""

    name: str
    position: str = ""
    team: Optional[str] = None
    rank: int = Field(..., ge=1)
    tier: Optional[int] = None
    position_rank: Optional[str] = None
    bye_week: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("tier", "bye_week", mode="before")
    @classmethod
    def _coerce_optional_int(cls, value: Any) -> Optional[int]:
        return _optional_int(value)

    @field_validator("position_rank", mode="before")
    @classmethod
    def _coerce_position_rank(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)
