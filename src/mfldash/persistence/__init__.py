"""SQLite store for synced league pools and cached valuations."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from mfldash.models import PlayerRecord, ValuationResult, ValuationSettings


logger = logging.getLogger(__name__)

DB_PATH_ENV = "MFLDASH_DB_PATH"
DEFAULT_DB_PATH = Path("data") / "mfldash.sqlite"


@dataclass
class ValuationSnapshot:
    league_id: str
    created_at: datetime
    settings: ValuationSettings
    results: List[ValuationResult]


class PlayerStore:
    """League player pools keyed by league id, plus the last valuation run."""

    def __init__(self, db_path: Path | str | None = None):
        self._use_uri = False
        location = db_path if db_path is not None else os.getenv(DB_PATH_ENV)
        if location is None:
            self.db_path: Path | str = DEFAULT_DB_PATH
        elif isinstance(location, str) and location.startswith("file:"):
            self.db_path = location
            self._use_uri = True
        else:
            self.db_path = Path(location)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS league_players (
                    league_id TEXT NOT NULL,
                    player_id TEXT NOT NULL,
                    position TEXT NOT NULL,
                    is_free_agent INTEGER NOT NULL,
                    sort_order INTEGER NOT NULL,
                    record_json TEXT NOT NULL,
                    synced_at TEXT NOT NULL,
                    PRIMARY KEY (league_id, player_id)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS league_valuations (
                    league_id TEXT PRIMARY KEY,
                    settings_json TEXT NOT NULL,
                    results_json TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.commit()

    def save_players(self, league_id: str, records: Iterable[PlayerRecord]) -> int:
        """Replace the stored pool for ``league_id``; returns the stored count.

        Cached valuations for the league are dropped since they describe the
        previous pool.
        """

        now = datetime.now(timezone.utc).isoformat()
        rows = [
            (
                league_id,
                record.player_id,
                record.position,
                int(record.is_free_agent),
                index,
                record.model_dump_json(),
                now,
            )
            for index, record in enumerate(records)
        ]
        with self._connect() as conn:
            conn.execute("DELETE FROM league_players WHERE league_id = ?", (league_id,))
            conn.execute("DELETE FROM league_valuations WHERE league_id = ?", (league_id,))
            conn.executemany(
                """
                INSERT OR REPLACE INTO league_players (
                    league_id, player_id, position, is_free_agent,
                    sort_order, record_json, synced_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            conn.commit()
        logger.info("Stored %d players for league %s", len(rows), league_id)
        return len(rows)

    def list_players(self, league_id: str, *, free_agents_only: bool = False) -> List[PlayerRecord]:
        query = "SELECT record_json FROM league_players WHERE league_id = ?"
        if free_agents_only:
            query += " AND is_free_agent = 1"
        query += " ORDER BY sort_order"
        with self._connect() as conn:
            rows = conn.execute(query, (league_id,)).fetchall()
        return [PlayerRecord.model_validate_json(row["record_json"]) for row in rows]

    def has_league(self, league_id: str) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM league_players WHERE league_id = ? LIMIT 1",
                (league_id,),
            ).fetchone()
        return row is not None

    def save_valuations(
        self,
        league_id: str,
        results: Iterable[ValuationResult],
        settings: ValuationSettings,
    ) -> None:
        payload = json.dumps([result.model_dump(mode="json") for result in results])
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO league_valuations (
                    league_id, settings_json, results_json, created_at
                ) VALUES (?, ?, ?, ?)
                """,
                (
                    league_id,
                    settings.model_dump_json(),
                    payload,
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            conn.commit()

    def get_valuations(self, league_id: str) -> Optional[ValuationSnapshot]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM league_valuations WHERE league_id = ?",
                (league_id,),
            ).fetchone()
        if row is None:
            return None
        return ValuationSnapshot(
            league_id=row["league_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            settings=ValuationSettings.model_validate_json(row["settings_json"]),
            results=[ValuationResult.model_validate(item) for item in json.loads(row["results_json"])],
        )


__all__ = ["DB_PATH_ENV", "PlayerStore", "ValuationSnapshot"]
