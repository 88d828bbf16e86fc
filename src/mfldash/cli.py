"""Command-line interface for valuing an MFL player pool."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, List, Optional, Sequence

from mfldash.config_loader import SettingsProfile, load_settings
from mfldash.identity import apply_matches, match
from mfldash.ingest import free_agent_pool, parse_projected_scores, parse_rankings, resolve_league
from mfldash.ingest.sync import SyncReport
from mfldash.models import PlayerRecord, RankingRecord
from mfldash.valuation import export_valuations_to_csv, partition_results, positional_scarcity, value_pool


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute dynasty auction values for an MFL league")
    parser.add_argument(
        "players",
        type=Path,
        help="MFL players export JSON (TYPE=players) or a JSON list of player records",
    )
    parser.add_argument("--rosters", type=Path, default=None, help="MFL rosters export JSON")
    parser.add_argument(
        "--projections",
        type=Path,
        default=None,
        help="MFL projectedScores export JSON or a {player_id: points} object",
    )
    parser.add_argument(
        "--rankings",
        type=Path,
        action="append",
        default=[],
        help="FantasyPros consensus-rankings JSON (repeatable)",
    )
    parser.add_argument("--budget", type=int, default=None, help="Auction budget per team")
    parser.add_argument("--teams", type=int, default=None, help="Number of teams in the league")
    parser.add_argument("--roster-size", type=int, default=None, help="Roster slots per team")
    parser.add_argument("--year", type=int, default=None, help="Season used for ages and rookies")
    parser.add_argument(
        "--include-rankings",
        action="store_true",
        default=None,
        help="Blend consensus rank value into auction values",
    )
    parser.add_argument("--free-agents", action="store_true", help="Only output free agents")
    parser.add_argument("--load-settings", type=Path, default=None, help="Load settings profile JSON")
    parser.add_argument("--save-settings", type=Path, default=None, help="Save resolved settings to profile JSON")
    parser.add_argument("--profile", default="default", help="Profile name inside the settings file")
    parser.add_argument("--output", type=Path, default=Path("valuations.csv"), help="Output CSV path")
    parser.add_argument("--report", type=Path, default=None, help="Optional path to write sync summary JSON")
    parser.add_argument("--tiers", action="store_true", help="Print players grouped by auction tier")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _load_rankings(paths: Sequence[Path]) -> List[RankingRecord]:
    rankings: List[RankingRecord] = []
    for path in paths:
        payload = _read_json(path)
        if isinstance(payload, list) and payload and "rank" in payload[0]:
            rankings.extend(RankingRecord.model_validate(row) for row in payload)
        else:
            rankings.extend(parse_rankings(payload))
    return rankings


def _load_projections(path: Optional[Path]) -> Optional[dict[str, float]]:
    if path is None:
        return None
    payload = _read_json(path)
    if isinstance(payload, dict) and "projectedScores" not in payload:
        return {str(key): float(value) for key, value in payload.items()}
    return parse_projected_scores(payload)


def _preview(names: Sequence[str], limit: int = 5) -> str:
    preview = ", ".join(names[:limit])
    more = len(names) - limit
    return f"{preview}, +{more} more" if more > 0 else preview


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings(
        args.load_settings,
        profile=args.profile,
        overrides={
            "total_budget": args.budget,
            "num_teams": args.teams,
            "roster_size": args.roster_size,
            "current_year": args.year,
            "include_rankings": args.include_rankings,
        },
    )
    if args.save_settings:
        profile = SettingsProfile.load(args.save_settings) if args.save_settings.exists() else SettingsProfile()
        profile.put(args.profile, settings)
        profile.save(args.save_settings)
        print(f"Saved settings profile '{args.profile}' to {args.save_settings}")

    players_payload = _read_json(args.players)
    rankings = _load_rankings(args.rankings)

    records: List[PlayerRecord]
    if isinstance(players_payload, list) and players_payload and "player_id" in players_payload[0]:
        records = [PlayerRecord.model_validate(row) for row in players_payload]
        matches = match(records, rankings)
        records = apply_matches(matches)
        unmatched = [result.player.name for result in matches if not result.matched]
        report = SyncReport(
            total_players=len(records),
            rostered_players=sum(1 for record in records if not record.is_free_agent),
            free_agents=sum(1 for record in records if record.is_free_agent),
            rankings_fetched=len(rankings),
            matched_players=len(records) - len(unmatched),
            unmatched_players=unmatched,
        )
    else:
        rosters_payload = _read_json(args.rosters) if args.rosters else None
        records, report = resolve_league(
            players_payload,
            rosters_payload,
            rankings,
            projections=_load_projections(args.projections),
        )

    print(f"Loaded {report.total_players} players ({report.free_agents} free agents)")
    if rankings:
        print(f"Matched {report.matched_players}/{report.total_players} players with {report.rankings_fetched} rankings")
        if report.unmatched_players:
            print(f"Players without rankings: {_preview(report.unmatched_players)}")
    if args.report:
        args.report.write_text(json.dumps(asdict(report), indent=2), encoding="utf-8")
        print(f"Wrote sync report to {args.report}")

    results = value_pool(records, settings)
    if args.free_agents:
        eligible = {record.player_id for record in free_agent_pool(records)}
        results = [result for result in results if result.player.player_id in eligible]

    args.output.write_text(export_valuations_to_csv(results), encoding="utf-8")
    print(f"Wrote {len(results)} valuations to {args.output}")

    if args.tiers:
        for name, members in partition_results(results).iter_tiers():
            if not members:
                continue
            listing = ", ".join(f"{result.player.name} ${result.auction_value}" for result in members[:10])
            print(f"{name.title()} ({len(members)}): {listing}")
        scarcity = ", ".join(
            f"{position.value} x{positional_scarcity(position, records, settings):.1f}"
            for position in settings.replacement_levels
        )
        print(f"Positional scarcity: {scarcity}")


if __name__ == "__main__":
    main()
