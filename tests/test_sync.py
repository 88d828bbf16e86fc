from datetime import date

from mfldash.ingest import resolve_league
from mfldash.models import RankingRecord


PLAYERS = {
    "players": {
        "player": [
            {"id": "1", "name": "Hill, Tyreek", "position": "WR", "team": "MIA"},
            {"id": "2", "name": "Moore, D.J.", "position": "WR", "team": "CHI"},
            {"id": "3", "name": "Unknown, Guy", "position": "RB", "team": "NYJ"},
            {"id": "4", "name": "Bills, Buffalo", "position": "Def", "team": "BUF"},
        ]
    }
}

ROSTERS = {"rosters": {"franchise": {"id": "0001", "player": {"id": "1", "status": "ROSTER"}}}}

RANKINGS = [
    RankingRecord(name="Tyreek Hill", position="WR", rank=2, tier=1, bye_week=6),
    RankingRecord(name="DJ Moore", position="WR", rank=21, tier=4, bye_week=7),
]


def test_resolve_league_merges_rankings():
    pool, report = resolve_league(PLAYERS, ROSTERS, RANKINGS, today=date(2024, 8, 1))

    assert [record.player_id for record in pool] == ["1", "2", "3"]
    assert pool[0].rank == 2
    assert pool[0].is_free_agent is False
    assert pool[1].rank == 21
    assert pool[1].bye_week == 7
    assert pool[2].rank is None

    assert report.total_players == 3
    assert report.rostered_players == 1
    assert report.free_agents == 2
    assert report.rankings_fetched == 2
    assert report.matched_players == 2
    assert report.unmatched_players == ["Unknown, Guy"]


def test_resolve_league_without_rankings_or_rosters():
    pool, report = resolve_league(PLAYERS, None, [])

    assert all(record.is_free_agent for record in pool)
    assert report.matched_players == 0
    assert len(report.unmatched_players) == 3


def test_resolve_league_applies_projections():
    pool, _ = resolve_league(PLAYERS, ROSTERS, [], projections={"3": 150.0})
    assert pool[2].projected_points == 150.0
