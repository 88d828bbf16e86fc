"""Lightweight REST client for the mfldash API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_json(path: Path | None):
    if path is None:
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the mfldash REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("league_id", help="MFL league id")
    parser.add_argument("--year", type=int, help="Season to fetch from MFL when payloads are omitted")
    parser.add_argument("--players", type=Path, help="MFL players export JSON")
    parser.add_argument("--rosters", type=Path, help="MFL rosters export JSON")
    parser.add_argument("--rankings", type=Path, help="JSON list of ranking records")
    parser.add_argument("--fetch-rankings", action="store_true", help="Have the server fetch FantasyPros rankings")
    parser.add_argument("--skip-sync", action="store_true", help="Use the pool already stored on the server")
    parser.add_argument("--free-agents", action="store_true", help="Only request free-agent valuations")
    parser.add_argument("--budget", type=int, help="Auction budget per team")
    parser.add_argument("--teams", type=int, help="Number of teams")
    parser.add_argument("--roster-size", type=int, help="Roster slots per team")
    parser.add_argument("--export-path", type=Path, help="Download valuations CSV to this path")
    args = parser.parse_args()

    params = {
        "total_budget": args.budget,
        "num_teams": args.teams,
        "roster_size": args.roster_size,
        "free_agents": str(args.free_agents).lower(),
    }
    params = {key: value for key, value in params.items() if value is not None}

    with httpx.Client(base_url=args.base_url, timeout=60.0) as client:
        if not args.skip_sync:
            body = {
                "year": args.year,
                "players": load_json(args.players),
                "rosters": load_json(args.rosters),
                "rankings": load_json(args.rankings) or [],
                "fetch_rankings": args.fetch_rankings,
            }
            resp = client.post(f"/leagues/{args.league_id}/sync", json=body)
            resp.raise_for_status()
            print("Sync report:", json.dumps(resp.json(), indent=2))

        if args.export_path:
            resp = client.get(f"/leagues/{args.league_id}/valuations/export.csv", params=params)
            if resp.status_code == 404:
                raise SystemExit(f"league {args.league_id} has no stored players")
            resp.raise_for_status()
            args.export_path.write_text(resp.text, encoding="utf-8")
            print(f"CSV export saved to {args.export_path}")
            return

        resp = client.get(f"/leagues/{args.league_id}/valuations", params=params)
        if resp.status_code == 404:
            raise SystemExit(f"league {args.league_id} has no stored players")
        resp.raise_for_status()
        payload = resp.json()
        print(f"Received {len(payload['results'])} valuations (cached={payload['cached']})")
        for result in payload["results"][:20]:
            player = result["player"]
            print(f"${result['auction_value']:>3}  {player['name']} ({player['position']}, {player.get('team') or 'FA'})")


if __name__ == "__main__":
    main()
