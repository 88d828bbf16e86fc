"""MyFantasyLeague (MFL) export adapter.

MFL's JSON export is shape-shifting: a list with one element is sent as a
bare object, and roster players arrive either as ``{"id": ...}`` objects or
bare id strings. Everything here flattens those shapes into uniform records
before they reach the identity and valuation layers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

import httpx

from mfldash.cache import TTLCache
from mfldash.models import PlayerRecord, Position, parse_birthdate
from mfldash.teams import canonical_team


logger = logging.getLogger(__name__)

MFL_BASE_URL = "https://api.myfantasyleague.com"
MFL_USER_AGENT = "MFLCLIENTAGENT"

# Team-level and administrative codes in the MFL player catalog.
EXCLUDED_POSITIONS = frozenset(
    {
        "Off", "PN", "ST", "XX", "Def", "Coach", "HC",
        "TMDB", "TMDL", "TMLB", "TMPK", "TMPN", "TMQB", "TMRB", "TMTE", "TMWR",
    }
)

FREE_AGENT_EXCLUDED_POSITIONS = frozenset({Position.PK, Position.DEF})


class MFLError(RuntimeError):
    """Raised when the MFL export API returns an error."""


def as_list(value: Any) -> List[Any]:
    """Wrap MFL's single-object/scalar/None variants into a list."""

    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


@dataclass(frozen=True)
class RosterEntry:
    player_id: str
    status: Optional[str] = None
    salary: Optional[float] = None
    contract_status: Optional[str] = None


@dataclass(frozen=True)
class FranchiseRoster:
    franchise_id: str
    players: Tuple[RosterEntry, ...]


def _parse_salary(value: Any) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _roster_entry(raw: Any) -> Optional[RosterEntry]:
    if isinstance(raw, (str, int)):
        player_id = str(raw).strip()
        return RosterEntry(player_id=player_id) if player_id else None
    if not isinstance(raw, Mapping):
        return None
    player_id = raw.get("id") or raw.get("player_id") or raw.get("playerId")
    if not player_id:
        return None
    contract_status = raw.get("contractStatus") or raw.get("contract_status")
    return RosterEntry(
        player_id=str(player_id),
        status=raw.get("status") or None,
        salary=_parse_salary(raw.get("salary")),
        contract_status=str(contract_status).strip().lower() if contract_status else None,
    )


def _franchises(payload: Any) -> List[Any]:
    if isinstance(payload, Mapping):
        if "rosters" in payload:
            return _franchises(payload["rosters"])
        if "franchise" in payload:
            return as_list(payload["franchise"])
    return as_list(payload)


def parse_rosters(payload: Any) -> List[FranchiseRoster]:
    """Parse a ``TYPE=rosters`` export (or its inner franchise list)."""

    rosters: List[FranchiseRoster] = []
    for franchise in _franchises(payload):
        if not isinstance(franchise, Mapping):
            continue
        entries = [_roster_entry(raw) for raw in as_list(franchise.get("player"))]
        rosters.append(
            FranchiseRoster(
                franchise_id=str(franchise.get("id", "")),
                players=tuple(entry for entry in entries if entry is not None),
            )
        )
    return rosters


def rostered_player_ids(rosters: Iterable[FranchiseRoster]) -> Set[str]:
    return {entry.player_id for roster in rosters for entry in roster.players}


def age_on(birthdate: date, today: date) -> int:
    """Whole years between ``birthdate`` and ``today``."""

    age = today.year - birthdate.year
    if (today.month, today.day) < (birthdate.month, birthdate.day):
        age -= 1
    return age


def _catalog_entries(payload: Any) -> List[Any]:
    if isinstance(payload, Mapping):
        if "players" in payload:
            return _catalog_entries(payload["players"])
        if "player" in payload:
            return as_list(payload["player"])
    return as_list(payload)


def parse_projected_scores(payload: Any) -> Dict[str, float]:
    """Parse a ``TYPE=projectedScores`` export into ``{player_id: points}``."""

    if isinstance(payload, Mapping) and "projectedScores" in payload:
        payload = payload["projectedScores"]
    if isinstance(payload, Mapping):
        payload = payload.get("playerScore")
    scores: Dict[str, float] = {}
    for row in as_list(payload):
        if not isinstance(row, Mapping) or not row.get("id"):
            continue
        try:
            scores[str(row["id"])] = max(0.0, float(row.get("score") or 0))
        except (TypeError, ValueError):
            logger.debug("Skipping unparsable projected score %r", row)
    return scores


def parse_player_catalog(
    payload: Any,
    *,
    rosters: Optional[Sequence[FranchiseRoster]] = None,
    projections: Optional[Mapping[str, float]] = None,
    today: Optional[date] = None,
) -> List[PlayerRecord]:
    """Turn a ``TYPE=players`` export into player records.

    Entries without an id, name or position, and administrative positions,
    are skipped. ``is_free_agent`` is true for players on no roster.
    """

    today = today or date.today()
    rosters = rosters or []
    roster_entries = {entry.player_id: entry for roster in rosters for entry in roster.players}
    projections = projections or {}

    records: List[PlayerRecord] = []
    skipped = 0
    for raw in _catalog_entries(payload):
        if not isinstance(raw, Mapping):
            skipped += 1
            continue
        player_id = str(raw.get("id") or "").strip()
        name = str(raw.get("name") or "").strip()
        position = str(raw.get("position") or "").strip()
        if not player_id or not name or not position or position in EXCLUDED_POSITIONS:
            skipped += 1
            continue

        birthdate = parse_birthdate(raw.get("birthdate"))
        roster_entry = roster_entries.get(player_id)
        records.append(
            PlayerRecord(
                player_id=player_id,
                name=name,
                position=position,
                team=canonical_team(raw.get("team")),
                birthdate=birthdate,
                age=age_on(birthdate, today) if birthdate else None,
                draft_year=raw.get("draft_year"),
                draft_round=raw.get("draft_round"),
                draft_pick=raw.get("draft_pick"),
                is_free_agent=roster_entry is None,
                projected_points=projections.get(player_id, 0.0),
                contract_status=roster_entry.contract_status if roster_entry else None,
                salary=roster_entry.salary if roster_entry else None,
                metadata={"roster_status": roster_entry.status} if roster_entry and roster_entry.status else {},
            )
        )
    if skipped:
        logger.debug("Skipped %d MFL catalog entries without usable id/name/position", skipped)
    return records


def free_agent_pool(records: Iterable[PlayerRecord]) -> List[PlayerRecord]:
    """Free agents signed to an NFL team, excluding kickers and team defenses."""

    return [
        record
        for record in records
        if record.is_free_agent
        and record.team
        and record.position_code not in FREE_AGENT_EXCLUDED_POSITIONS
    ]


class MFLClient:
    """Thin httpx wrapper over ``/{year}/export``."""

    def __init__(
        self,
        year: int | str,
        *,
        client: Optional[httpx.Client] = None,
        cache: Optional[TTLCache] = None,
        base_url: str = MFL_BASE_URL,
    ) -> None:
        self.year = str(year)
        self._client = client or httpx.Client(timeout=30.0)
        self._cache = cache
        self._base_url = base_url.rstrip("/")

    def export(self, export_type: str, **params: Any) -> Dict[str, Any]:
        query = {key: str(value) for key, value in params.items() if value is not None}
        query["TYPE"] = export_type
        query["JSON"] = "1"
        cache_key = ("mfl", self.year, tuple(sorted(query.items())))
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                logger.debug("Using cached MFL %s export", export_type)
                return cached

        url = f"{self._base_url}/{self.year}/export"
        try:
            response = self._client.get(
                url,
                params=query,
                headers={"User-Agent": MFL_USER_AGENT, "Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise MFLError(f"MFL request failed: {exc}") from exc
        if response.status_code >= 400:
            raise MFLError(f"MFL API error: {response.status_code}")
        data = response.json()
        if isinstance(data, Mapping) and data.get("error"):
            error = data["error"]
            message = error.get("$t", error) if isinstance(error, Mapping) else error
            raise MFLError(str(message))

        if self._cache is not None:
            self._cache.set(cache_key, data)
        return data

    def players(self) -> Dict[str, Any]:
        return self.export("players", DETAILS="1")

    def rosters(self, league_id: str) -> Dict[str, Any]:
        return self.export("rosters", L=league_id)

    def projected_scores(self, league_id: str, week: Optional[int] = None) -> Dict[str, Any]:
        return self.export("projectedScores", L=league_id, W=week)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "MFLClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
