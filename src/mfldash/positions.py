"""Closed set of roster position codes used as table keys."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Position(str, Enum):
    """Position codes the valuation tables know about.

    Anything the league host or rankings feed sends that is not listed here
    parses to ``OTHER`` so table lookups have an explicit fallback branch.
    """

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    PK = "PK"
    DEF = "DEF"
    DT = "DT"
    DE = "DE"
    LB = "LB"
    CB = "CB"
    S = "S"
    DL = "DL"
    DB = "DB"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, code: Optional[str]) -> "Position":
        if not code:
            return cls.OTHER
        token = code.strip().upper()
        token = _POSITION_ALIASES.get(token, token)
        try:
            return cls(token)
        except ValueError:
            return cls.OTHER


_POSITION_ALIASES = {
    "K": "PK",
    "DST": "DEF",
    "D/ST": "DEF",
}
