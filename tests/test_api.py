import csv
from io import StringIO

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from mfldash.api import create_app
from mfldash.ingest import FantasyProsClient, MFLClient
from mfldash.persistence import PlayerStore


def _players_payload() -> dict:
    player = [
        {"id": "1", "name": "Hill, Tyreek", "position": "WR", "team": "MIA"},
        {"id": "2", "name": "Moore, D.J.", "position": "WR", "team": "CHI"},
        {"id": "3", "name": "Mahomes, Patrick", "position": "QB", "team": "KCC"},
    ]
    player.extend(
        {"id": f"10{index}", "name": f"Depth, Quarterback{index}", "position": "QB", "team": "NYJ"}
        for index in range(23)
    )
    return {"players": {"player": player}}


def _rosters_payload() -> dict:
    return {"rosters": {"franchise": [{"id": "0001", "player": [{"id": "1"}, {"id": "3"}]}]}}


def _projections() -> dict[str, float]:
    projections = {"1": 260.0, "2": 180.0, "3": 380.0}
    projections.update({f"10{index}": 200.0 for index in range(23)})
    return projections


def _sync_body(**overrides) -> dict:
    body = {
        "players": _players_payload(),
        "rosters": _rosters_payload(),
        "rankings": [
            {"name": "Tyreek Hill", "position": "WR", "rank": 2},
            {"name": "Patrick Mahomes", "position": "QB", "rank": 1},
        ],
        "projections": _projections(),
    }
    body.update(overrides)
    return body


@pytest.fixture
async def client(tmp_path):
    app = create_app(PlayerStore(tmp_path / "api.sqlite"))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_match_endpoint(client: AsyncClient):
    resp = await client.post(
        "/match",
        json={
            "players": [
                {"player_id": "1", "name": "Hill, Tyreek", "position": "WR"},
                {"player_id": "2", "name": "Nobody Anybody", "position": "WR"},
            ],
            "rankings": [{"name": "Tyreek Hill", "position": "WR", "rank": 2}],
        },
    )
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["matched_players"] == 1
    assert payload["unmatched_players"] == ["Nobody Anybody"]
    assert payload["results"][0]["strategy"] == "reordered_name"
    assert payload["results"][0]["ranking"]["rank"] == 2
    assert payload["results"][1]["ranking"] is None


@pytest.mark.anyio
async def test_valuations_and_tiers_endpoints(client: AsyncClient):
    players = [
        {"player_id": str(index), "name": f"Quarterback {index}", "position": "QB", "projected_points": points}
        for index, points in enumerate([300, 250] + [200] * 22)
    ]
    settings = {"total_budget": 100, "num_teams": 1, "roster_size": 2, "current_year": 2024}

    resp = await client.post("/valuations", json={"players": players, "settings": settings})
    assert resp.status_code == 200
    values = [result["auction_value"] for result in resp.json()["results"]]
    assert values[:2] == [40, 33]
    assert values == sorted(values, reverse=True)

    resp = await client.post("/tiers", json={"players": players, "settings": settings})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["counts"] == {"elite": 1, "premium": 1, "starter": 0, "value": 0, "bargain": 0, "dollar": 22}
    assert payload["scarcity"]["QB"] == 1.0
    assert payload["scarcity"]["RB"] == 1.5


@pytest.mark.anyio
async def test_valuations_rejects_invalid_settings(client: AsyncClient):
    resp = await client.post(
        "/valuations",
        json={"players": [], "settings": {"total_budget": 0}},
    )
    assert resp.status_code == 422

    # A $2 budget would cap every player below the $1 minimum bid.
    resp = await client.post(
        "/valuations",
        json={"players": [], "settings": {"total_budget": 2, "num_teams": 1, "roster_size": 1}},
    )
    assert resp.status_code == 422

    await client.post("/leagues/12345/sync", json=_sync_body())
    resp = await client.get("/leagues/12345/valuations", params={"total_budget": 2})
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_sync_then_players_and_valuations(client: AsyncClient):
    resp = await client.post("/leagues/12345/sync", json=_sync_body())
    assert resp.status_code == 200
    report = resp.json()
    assert report["total_players"] == 26
    assert report["rostered_players"] == 2
    assert report["free_agents"] == 24
    assert report["matched_players"] == 2

    resp = await client.get("/leagues/12345/players", params={"free_agents": "true"})
    assert resp.status_code == 200
    assert resp.json()["total_players"] == 24

    params = {"total_budget": 100, "num_teams": 1, "roster_size": 2, "current_year": 2024}
    first = await client.get("/leagues/12345/valuations", params=params)
    assert first.status_code == 200
    assert first.json()["cached"] is False
    results = first.json()["results"]
    assert results[0]["player"]["name"] == "Hill, Tyreek"
    assert results[0]["auction_value"] == 40
    mahomes = next(result for result in results if result["player"]["player_id"] == "3")
    assert mahomes["player"]["team"] == "KC"
    assert mahomes["team_multiplier"] == pytest.approx(1.10)

    second = await client.get("/leagues/12345/valuations", params=params)
    assert second.json()["cached"] is True
    assert [r["auction_value"] for r in second.json()["results"]] == [r["auction_value"] for r in first.json()["results"]]

    free_agents = await client.get("/leagues/12345/valuations", params={**params, "free_agents": "true"})
    assert all(result["player"]["is_free_agent"] for result in free_agents.json()["results"])


@pytest.mark.anyio
async def test_export_csv(client: AsyncClient):
    await client.post("/leagues/12345/sync", json=_sync_body())
    resp = await client.get("/leagues/12345/valuations/export.csv", params={"current_year": 2024})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    rows = list(csv.DictReader(StringIO(resp.text)))
    assert len(rows) == 26
    assert rows[0]["name"] == "Hill, Tyreek"
    assert rows[0]["auction_value"] == "200"


@pytest.mark.anyio
async def test_unknown_league_is_404(client: AsyncClient):
    assert (await client.get("/leagues/nope/players")).status_code == 404
    assert (await client.get("/leagues/nope/valuations")).status_code == 404
    assert (await client.get("/leagues/nope/valuations/export.csv")).status_code == 404


@pytest.mark.anyio
async def test_sync_requires_year_to_fetch(client: AsyncClient):
    resp = await client.post("/leagues/12345/sync", json={"rankings": []})
    assert resp.status_code == 400


class _FetchingAdapters:
    """Adapter factories over mock transports that count requests and keep their clients."""

    def __init__(self, mfl_status: int = 200):
        self.mfl_status = mfl_status
        self.mfl_requests = 0
        self.rankings_requests = 0
        self.http_clients: list[httpx.Client] = []

    def _http(self, handler) -> httpx.Client:
        http = httpx.Client(transport=httpx.MockTransport(handler))
        self.http_clients.append(http)
        return http

    def _mfl_handler(self, request: httpx.Request) -> httpx.Response:
        self.mfl_requests += 1
        if self.mfl_status >= 400:
            return httpx.Response(self.mfl_status)
        if request.url.params["TYPE"] == "players":
            return httpx.Response(200, json=_players_payload())
        return httpx.Response(200, json=_rosters_payload())

    def _rankings_handler(self, request: httpx.Request) -> httpx.Response:
        self.rankings_requests += 1
        rows = {"WR": [{"player_name": "DJ Moore", "player_position_id": "WR", "rank_ecr": 21}]}
        return httpx.Response(200, json={"players": rows.get(request.url.params["position"], [])})

    def mfl(self, year, cache=None) -> MFLClient:
        return MFLClient(year, client=self._http(self._mfl_handler), cache=cache)

    def rankings(self, cache=None) -> FantasyProsClient:
        return FantasyProsClient("key", client=self._http(self._rankings_handler), cache=cache)

    def create_app(self, tmp_path):
        return create_app(
            PlayerStore(tmp_path / "api.sqlite"),
            mfl_client_factory=self.mfl,
            rankings_client_factory=self.rankings,
        )


@pytest.mark.anyio
async def test_sync_fetches_from_mfl_and_fantasypros(tmp_path):
    adapters = _FetchingAdapters()
    app = adapters.create_app(tmp_path)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        resp = await client.post("/leagues/12345/sync", json={"year": 2024, "fetch_rankings": True})

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["total_players"] == 26
    assert payload["rankings_fetched"] == 1
    assert payload["matched_players"] == 1
    assert len(adapters.http_clients) == 2
    assert all(http.is_closed for http in adapters.http_clients)


@pytest.mark.anyio
async def test_repeat_sync_is_served_from_the_response_cache(tmp_path):
    adapters = _FetchingAdapters()
    app = adapters.create_app(tmp_path)
    body = {"year": 2024, "fetch_rankings": True}
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        first = await client.post("/leagues/12345/sync", json=body)
        mfl_requests, rankings_requests = adapters.mfl_requests, adapters.rankings_requests
        second = await client.post("/leagues/12345/sync", json=body)

    assert first.status_code == second.status_code == 200
    assert mfl_requests == 2
    assert rankings_requests > 0
    assert adapters.mfl_requests == mfl_requests
    assert adapters.rankings_requests == rankings_requests
    assert second.json() == first.json()
    assert len(app.state.response_cache) == mfl_requests + rankings_requests


@pytest.mark.anyio
async def test_sync_maps_mfl_errors_to_502(tmp_path):
    adapters = _FetchingAdapters(mfl_status=500)
    app = adapters.create_app(tmp_path)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        resp = await client.post("/leagues/12345/sync", json={"year": 2024})
    assert resp.status_code == 502
    assert len(adapters.http_clients) == 1
    assert adapters.http_clients[0].is_closed
