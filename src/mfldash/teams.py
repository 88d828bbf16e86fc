"""NFL team code aliases across MFL, FantasyPros and long-form names."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

NFL_TEAM_ALIAS_GROUPS: Dict[str, List[str]] = {
    "ARI": ["ARI", "ARZ", "ARIZONA", "ARIZONA CARDINALS", "CARDINALS"],
    "ATL": ["ATL", "ATLANTA", "ATLANTA FALCONS", "FALCONS"],
    "BAL": ["BAL", "BLT", "BALTIMORE", "BALTIMORE RAVENS", "RAVENS"],
    "BUF": ["BUF", "BUFFALO", "BUFFALO BILLS", "BILLS"],
    "CAR": ["CAR", "CAROLINA", "CAROLINA PANTHERS", "PANTHERS"],
    "CHI": ["CHI", "CHICAGO", "CHICAGO BEARS", "BEARS"],
    "CIN": ["CIN", "CINCINNATI", "CINCINNATI BENGALS", "BENGALS"],
    "CLE": ["CLE", "CLV", "CLEVELAND", "CLEVELAND BROWNS", "BROWNS"],
    "DAL": ["DAL", "DALLAS", "DALLAS COWBOYS", "COWBOYS"],
    "DEN": ["DEN", "DENVER", "DENVER BRONCOS", "BRONCOS"],
    "DET": ["DET", "DETROIT", "DETROIT LIONS", "LIONS"],
    "GB": ["GB", "GBP", "GNB", "GREEN BAY", "GREEN BAY PACKERS", "PACKERS"],
    "HOU": ["HOU", "HST", "HOUSTON", "HOUSTON TEXANS", "TEXANS"],
    "IND": ["IND", "INDIANAPOLIS", "INDIANAPOLIS COLTS", "COLTS"],
    "JAX": ["JAX", "JAC", "JACKSONVILLE", "JACKSONVILLE JAGUARS", "JAGUARS"],
    "KC": ["KC", "KCC", "KAN", "KANSAS CITY", "KANSAS CITY CHIEFS", "CHIEFS"],
    "LAC": ["LAC", "LACH", "LOS ANGELES CHARGERS", "LA CHARGERS", "SAN DIEGO CHARGERS", "CHARGERS"],
    "LAR": ["LAR", "LA", "LOS ANGELES RAMS", "LA RAMS", "ST LOUIS RAMS", "RAMS"],
    "LV": ["LV", "LVR", "LAS VEGAS", "LAS VEGAS RAIDERS", "OAKLAND RAIDERS", "OAK", "RAIDERS"],
    "MIA": ["MIA", "MIAMI", "MIAMI DOLPHINS", "DOLPHINS"],
    "MIN": ["MIN", "MINNESOTA", "MINNESOTA VIKINGS", "VIKINGS"],
    "NE": ["NE", "NEP", "NWE", "NEW ENGLAND", "NEW ENGLAND PATRIOTS", "PATRIOTS"],
    "NO": ["NO", "NOS", "NOR", "NEW ORLEANS", "NEW ORLEANS SAINTS", "SAINTS"],
    "NYG": ["NYG", "NEW YORK GIANTS", "NY GIANTS", "GIANTS"],
    "NYJ": ["NYJ", "NEW YORK JETS", "NY JETS", "JETS"],
    "PHI": ["PHI", "PHILADELPHIA", "PHILADELPHIA EAGLES", "EAGLES"],
    "PIT": ["PIT", "PITTSBURGH", "PITTSBURGH STEELERS", "STEELERS"],
    "SEA": ["SEA", "SEATTLE", "SEATTLE SEAHAWKS", "SEAHAWKS"],
    "SF": ["SF", "SFO", "SAN FRANCISCO", "SAN FRANCISCO 49ERS", "49ERS"],
    "TB": ["TB", "TBB", "TAM", "TAMPA BAY", "TAMPA BAY BUCCANEERS", "BUCCANEERS", "BUCS"],
    "TEN": ["TEN", "TENNESSEE", "TENNESSEE TITANS", "TITANS"],
    "WAS": ["WAS", "WSH", "WASHINGTON", "WASHINGTON COMMANDERS", "COMMANDERS"],
}

FREE_AGENT_CODES = frozenset({"FA", "FA*"})


def _team_token(value: str) -> str:
    return re.sub(r"[^A-Z0-9]", "", value.upper())


def _build_alias_lookup() -> Dict[str, str]:
    lookup: Dict[str, str] = {}
    for abbr, variants in NFL_TEAM_ALIAS_GROUPS.items():
        for variant in variants:
            key = _team_token(variant)
            if key:
                lookup.setdefault(key, abbr)
    return lookup


TEAM_ALIAS_LOOKUP = _build_alias_lookup()


def canonical_team(team: Optional[str]) -> Optional[str]:
    """Return the canonical abbreviation for ``team``; None for blank/free-agent codes."""

    if team is None:
        return None
    text = team.strip()
    if not text or text.upper() in FREE_AGENT_CODES:
        return None
    token = _team_token(text)
    return TEAM_ALIAS_LOOKUP.get(token, text.upper())
