import httpx
import pytest

from mfldash.ingest import (
    FantasyProsClient,
    FantasyProsError,
    fetch_all_rankings,
    parse_rankings,
    ranking_positions_for,
)


def _payload() -> dict:
    return {
        "players": [
            {
                "player_name": "Tyreek Hill",
                "player_team_id": "MIA",
                "player_position_id": "WR",
                "rank_ecr": 2,
                "tier": 1,
                "pos_rank": "WR2",
                "player_bye_week": "6",
            },
            {"player_name": "DJ Moore", "player_team_id": "CHI", "player_position_id": "WR", "rank_ecr": "21.0"},
            {"player_name": "", "rank_ecr": 4},
            {"player_name": "No Rank"},
            {"player_name": "Bad Rank", "rank_ecr": "n/a"},
            {"player_name": "Huge Rank", "rank_ecr": "1e400"},
        ]
    }


def test_parse_rankings_skips_incomplete_rows():
    rankings = parse_rankings(_payload(), "WR")

    assert [ranking.name for ranking in rankings] == ["Tyreek Hill", "DJ Moore"]
    assert rankings[0].rank == 2
    assert rankings[0].bye_week == 6
    assert rankings[0].position_rank == "WR2"
    assert rankings[1].rank == 21
    assert rankings[1].tier is None


def test_parse_rankings_skips_out_of_range_ranks():
    payload = {"players": [{"player_name": "Endless Rank", "rank_ecr": float("inf")}, {"player_name": "Tyreek Hill", "rank_ecr": 2}]}

    assert [ranking.name for ranking in parse_rankings(payload)] == ["Tyreek Hill"]


def test_parse_rankings_empty_payload():
    assert parse_rankings({}) == []
    assert parse_rankings(None) == []


def test_ranking_positions_for_maps_idp_codes():
    assert ranking_positions_for(["CB", "QB", "DE", "S", "PK", "dt"]) == ["QB", "DL", "DB"]


def _client(handler, **kwargs) -> FantasyProsClient:
    return FantasyProsClient(
        "test-key",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
        **kwargs,
    )


def test_client_sends_key_and_parameters():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_payload())

    rankings = _client(handler).consensus_rankings("WR", 2024)

    assert len(rankings) == 2
    request = seen[0]
    assert request.url.path == "/public/v2/json/nfl/2024/consensus-rankings"
    assert request.url.params["position"] == "WR"
    assert request.url.params["scoring"] == "PPR"
    assert request.headers["x-api-key"] == "test-key"


def test_client_backs_off_on_rate_limit():
    responses = iter([httpx.Response(429), httpx.Response(429), httpx.Response(200, json=_payload())])
    delays = []

    client = _client(lambda request: next(responses), sleep=delays.append)
    rankings = client.consensus_rankings("WR", 2024)

    assert delays == [2, 4]
    assert len(rankings) == 2


def test_client_gives_up_after_max_retries():
    delays = []
    client = _client(lambda request: httpx.Response(429), sleep=delays.append, max_retries=2)

    with pytest.raises(FantasyProsError):
        client.consensus_rankings("WR", 2024)
    assert delays == [2, 4]


def test_client_requires_api_key(monkeypatch):
    monkeypatch.delenv("FANTASYPROS_API_KEY", raising=False)
    client = FantasyProsClient(client=httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200))))
    with pytest.raises(FantasyProsError, match="FANTASYPROS_API_KEY"):
        client.consensus_rankings("QB", 2024)


def test_client_reads_key_from_environment(monkeypatch):
    monkeypatch.setenv("FANTASYPROS_API_KEY", "env-key")
    assert FantasyProsClient(client=httpx.Client()).api_key == "env-key"


def test_fetch_all_rankings_skips_failed_positions(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["position"] == "TE":
            return httpx.Response(500)
        return httpx.Response(200, json=_payload())

    rankings = fetch_all_rankings(_client(handler), ["WR", "TE"], 2024)

    assert len(rankings) == 2
    assert "Skipping TE rankings" in caplog.text


def test_client_closes_http_client_when_used_as_context_manager():
    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=_payload())))
    with FantasyProsClient("test-key", client=http) as client:
        assert len(client.consensus_rankings("WR", 2024)) == 2
    assert http.is_closed
