"""FantasyPros consensus-rankings adapter."""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

import httpx

from mfldash.cache import TTLCache
from mfldash.models import RankingRecord
from mfldash.teams import canonical_team


logger = logging.getLogger(__name__)

FANTASYPROS_BASE_URL = "https://api.fantasypros.com/public/v2/json/nfl"
API_KEY_ENV = "FANTASYPROS_API_KEY"

RANKING_POSITIONS: Tuple[str, ...] = ("QB", "RB", "WR", "TE", "DL", "LB", "DB")

# MFL position code -> FantasyPros ranking bucket.
POSITION_MAPPING: Dict[str, str] = {
    "QB": "QB",
    "RB": "RB",
    "WR": "WR",
    "TE": "TE",
    "DT": "DL",
    "DE": "DL",
    "DL": "DL",
    "LB": "LB",
    "CB": "DB",
    "S": "DB",
    "FS": "DB",
    "SS": "DB",
    "DB": "DB",
}


class FantasyProsError(RuntimeError):
    """Raised when FantasyPros rejects a request or retries are exhausted."""


def ranking_positions_for(positions: Iterable[str]) -> List[str]:
    """Distinct FantasyPros buckets covering ``positions``, in ranking order."""

    wanted = {POSITION_MAPPING.get(str(code).upper()) for code in positions}
    return [position for position in RANKING_POSITIONS if position in wanted]


def _rows(payload: Any) -> List[Any]:
    if isinstance(payload, Mapping):
        return list(payload.get("players") or [])
    if isinstance(payload, list):
        return payload
    return []


def parse_rankings(payload: Any, position: Optional[str] = None) -> List[RankingRecord]:
    """Convert a consensus-rankings response into ranking records.

    Rows missing a name or a usable ECR rank are dropped.
    """

    rankings: List[RankingRecord] = []
    for row in _rows(payload):
        if not isinstance(row, Mapping):
            continue
        name = str(row.get("player_name") or "").strip()
        rank = row.get("rank_ecr")
        if not name or rank in (None, ""):
            continue
        try:
            rank_value = int(float(rank))
        except (TypeError, ValueError, OverflowError):
            logger.debug("Skipping ranking row with unusable rank %r", row)
            continue
        if rank_value < 1:
            continue
        rankings.append(
            RankingRecord(
                name=name,
                position=str(row.get("player_position_id") or position or ""),
                team=canonical_team(row.get("player_team_id")),
                rank=rank_value,
                tier=row.get("tier"),
                position_rank=row.get("pos_rank"),
                bye_week=row.get("player_bye_week"),
            )
        )
    return rankings


class FantasyProsClient:
    """Fetch consensus rankings with 429 backoff and optional caching."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        client: Optional[httpx.Client] = None,
        cache: Optional[TTLCache] = None,
        sleep: Callable[[float], None] = time.sleep,
        max_retries: int = 3,
        base_url: str = FANTASYPROS_BASE_URL,
    ) -> None:
        self.api_key = api_key if api_key is not None else os.environ.get(API_KEY_ENV)
        self._client = client or httpx.Client(timeout=30.0)
        self._cache = cache
        self._sleep = sleep
        self._max_retries = max_retries
        self._base_url = base_url.rstrip("/")

    def consensus_rankings(self, position: str, season: int | str, scoring: str = "PPR") -> List[RankingRecord]:
        if not self.api_key:
            raise FantasyProsError(f"FantasyPros API key missing; set {API_KEY_ENV}")

        params = {"position": position, "scoring": scoring, "type": "draft"}
        cache_key = ("fantasypros", str(season), position, scoring)
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return cached

        url = f"{self._base_url}/{season}/consensus-rankings"
        for attempt in range(self._max_retries + 1):
            try:
                response = self._client.get(url, params=params, headers={"x-api-key": self.api_key})
            except httpx.HTTPError as exc:
                raise FantasyProsError(f"FantasyPros request failed: {exc}") from exc
            if response.status_code == 429 and attempt < self._max_retries:
                delay = 2 ** (attempt + 1)
                logger.warning("FantasyPros rate limited (%s); retrying in %ss", position, delay)
                self._sleep(delay)
                continue
            if response.status_code >= 400:
                raise FantasyProsError(f"FantasyPros API error: {response.status_code}")
            rankings = parse_rankings(response.json(), position)
            if self._cache is not None:
                self._cache.set(cache_key, rankings)
            return rankings

        raise FantasyProsError("FantasyPros rate limit retries exhausted")

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "FantasyProsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def fetch_all_rankings(
    client: FantasyProsClient,
    positions: Iterable[str],
    season: int | str,
    *,
    scoring: str = "PPR",
) -> List[RankingRecord]:
    """Concatenate rankings for every position; failed positions are skipped."""

    rankings: List[RankingRecord] = []
    for position in positions:
        try:
            rows = client.consensus_rankings(position, season, scoring)
        except FantasyProsError as exc:
            logger.warning("Skipping %s rankings: %s", position, exc)
            continue
        logger.info("Fetched %d %s rankings", len(rows), position)
        rankings.extend(rows)
    return rankings
