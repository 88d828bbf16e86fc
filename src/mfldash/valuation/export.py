"""CSV and JSON dumps of valuation results for spreadsheets and the UI."""

from __future__ import annotations

import csv
import json
from io import StringIO
from typing import Any, Callable, Dict, List, Mapping, Sequence

from mfldash.models import ValuationResult
from mfldash.valuation.tiers import tier_for_value


class ExportError(RuntimeError):
    """Raised when valuation results cannot be exported as requested."""


_COLUMNS: Mapping[str, Callable[[ValuationResult], Any]] = {
    "player_id": lambda result: result.player.player_id,
    "name": lambda result: result.player.name,
    "position": lambda result: result.player.position,
    "team": lambda result: result.player.team or "",
    "age": lambda result: "" if result.player.age is None else result.player.age,
    "free_agent": lambda result: "Y" if result.player.is_free_agent else "N",
    "rank": lambda result: "" if result.player.rank is None else result.player.rank,
    "projected_points": lambda result: f"{result.player.projected_points:.1f}",
    "vbd": lambda result: f"{result.vbd:.2f}",
    "auction_value": lambda result: result.auction_value,
    "tier": lambda result: tier_for_value(result.auction_value),
    "base_value": lambda result: result.breakdown.base_value,
    "dynasty_multiplier": lambda result: f"{result.dynasty_multiplier:.2f}",
    "draft_capital_multiplier": lambda result: f"{result.draft_capital_multiplier:.2f}",
    "team_multiplier": lambda result: f"{result.team_multiplier:.2f}",
    "rookie_multiplier": lambda result: f"{result.rookie_multiplier:.2f}",
    "contract_multiplier": lambda result: f"{result.contract_multiplier:.2f}",
}

DEFAULT_COLUMNS = tuple(_COLUMNS)


def export_valuations_to_csv(
    results: Sequence[ValuationResult],
    *,
    columns: Sequence[str] = DEFAULT_COLUMNS,
) -> str:
    """Render results as CSV, highest auction value first."""

    if not columns:
        raise ExportError("at least one column is required")
    unknown = [column for column in columns if column not in _COLUMNS]
    if unknown:
        raise ExportError(f"unknown export columns: {', '.join(unknown)}")

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(columns)
    ordered = sorted(results, key=lambda result: result.auction_value, reverse=True)
    for result in ordered:
        writer.writerow([_COLUMNS[column](result) for column in columns])
    return buffer.getvalue()


def valuations_to_json(results: Sequence[ValuationResult]) -> str:
    payload: List[Dict[str, Any]] = [result.model_dump(mode="json") for result in results]
    return json.dumps(payload, indent=2)


__all__ = [
    "DEFAULT_COLUMNS",
    "ExportError",
    "export_valuations_to_csv",
    "valuations_to_json",
]
