"""REST API for league sync, name matching and auction valuation."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response

from mfldash.api.schemas import (
    LeaguePlayersResponse,
    MatchRequest,
    MatchResponse,
    MatchResultResponse,
    SyncRequest,
    SyncResponse,
    TiersResponse,
    ValuationRequest,
    ValuationResponse,
)
from mfldash.cache import TTLCache
from mfldash.identity import match
from mfldash.ingest import (
    FantasyProsClient,
    FantasyProsError,
    MFLClient,
    MFLError,
    fetch_all_rankings,
    parse_player_catalog,
    ranking_positions_for,
    resolve_league,
)
from mfldash.models import PlayerRecord, ValuationResult, ValuationSettings
from mfldash.persistence import PlayerStore
from mfldash.valuation import (
    ExportError,
    export_valuations_to_csv,
    partition_results,
    positional_scarcity,
    value_pool,
)


logger = logging.getLogger(__name__)


def _settings_from_query(
    total_budget: Optional[int],
    num_teams: Optional[int],
    roster_size: Optional[int],
    current_year: Optional[int],
    include_rankings: bool,
) -> ValuationSettings:
    overrides = {
        "total_budget": total_budget,
        "num_teams": num_teams,
        "roster_size": roster_size,
        "current_year": current_year,
    }
    return ValuationSettings(
        include_rankings=include_rankings,
        **{key: value for key, value in overrides.items() if value is not None},
    )


def _tiers_response(
    results: List[ValuationResult],
    pool: List[PlayerRecord],
    settings: ValuationSettings,
) -> TiersResponse:
    tiers = partition_results(results).as_dict()
    return TiersResponse(
        settings=settings,
        counts={name: len(members) for name, members in tiers.items()},
        scarcity={
            position.value: positional_scarcity(position, pool, settings)
            for position in settings.replacement_levels
        },
        tiers=tiers,
    )


def create_app(
    store: PlayerStore | None = None,
    *,
    cache: TTLCache | None = None,
    mfl_client_factory: Callable[..., MFLClient] = MFLClient,
    rankings_client_factory: Callable[..., FantasyProsClient] = FantasyProsClient,
) -> FastAPI:
    app = FastAPI(title="mfldash")
    store = store or PlayerStore()
    if cache is None:
        cache = TTLCache()
    app.state.player_store = store
    app.state.response_cache = cache

    def _pool_or_404(league_id: str) -> List[PlayerRecord]:
        players = store.list_players(league_id)
        if not players:
            raise HTTPException(status_code=404, detail=f"No players stored for league {league_id}")
        return players

    def _league_valuations(
        league_id: str,
        settings: ValuationSettings,
        free_agents: bool,
    ) -> ValuationResponse:
        pool = _pool_or_404(league_id)
        snapshot = store.get_valuations(league_id)
        if snapshot is not None and snapshot.settings == settings:
            results = snapshot.results
            cached, created_at = True, snapshot.created_at
        else:
            # Free agents are valued against the whole league pool.
            results = value_pool(pool, settings)
            store.save_valuations(league_id, results, settings)
            cached, created_at = False, None
        if free_agents:
            results = [result for result in results if result.player.is_free_agent]
        return ValuationResponse(settings=settings, results=results, cached=cached, created_at=created_at)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/match", response_model=MatchResponse)
    async def match_players(payload: MatchRequest) -> MatchResponse:
        results = match(payload.players, payload.rankings)
        unmatched = [result.player.name for result in results if not result.matched]
        return MatchResponse(
            total_players=len(results),
            matched_players=len(results) - len(unmatched),
            unmatched_players=unmatched,
            results=[
                MatchResultResponse(
                    player_id=result.player.player_id,
                    name=result.player.name,
                    matched=result.matched,
                    strategy=result.strategy,
                    matched_key=result.matched_key,
                    ranking=result.ranking,
                )
                for result in results
            ],
        )

    @app.post("/valuations", response_model=ValuationResponse)
    async def valuations(payload: ValuationRequest) -> ValuationResponse:
        results = value_pool(payload.players, payload.settings)
        results.sort(key=lambda result: result.auction_value, reverse=True)
        return ValuationResponse(settings=payload.settings, results=results)

    @app.post("/tiers", response_model=TiersResponse)
    async def tiers(payload: ValuationRequest) -> TiersResponse:
        return _tiers_response(value_pool(payload.players, payload.settings), payload.players, payload.settings)

    @app.post("/leagues/{league_id}/sync", response_model=SyncResponse)
    def sync_league(league_id: str, payload: SyncRequest) -> SyncResponse:
        players_payload = payload.players
        rosters_payload = payload.rosters
        rankings = list(payload.rankings)
        season = payload.year or date.today().year
        try:
            if players_payload is None or rosters_payload is None:
                if payload.year is None:
                    raise HTTPException(status_code=400, detail="year is required to fetch MFL exports")
                with mfl_client_factory(payload.year, cache=cache) as client:
                    if players_payload is None:
                        players_payload = client.players()
                    if rosters_payload is None:
                        rosters_payload = client.rosters(league_id)
            if payload.fetch_rankings:
                catalog = parse_player_catalog(players_payload)
                positions = ranking_positions_for({record.position for record in catalog})
                with rankings_client_factory(cache=cache) as rankings_client:
                    rankings.extend(fetch_all_rankings(rankings_client, positions, season))
            pool, report = resolve_league(
                players_payload,
                rosters_payload,
                rankings,
                projections=payload.projections,
                today=payload.today,
            )
        except (MFLError, FantasyProsError) as exc:
            logger.warning("League %s sync failed: %s", league_id, exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        if not pool:
            raise HTTPException(status_code=400, detail="MFL player payload produced no players")
        store.save_players(league_id, pool)
        return SyncResponse(
            league_id=league_id,
            total_players=report.total_players,
            rostered_players=report.rostered_players,
            free_agents=report.free_agents,
            rankings_fetched=report.rankings_fetched,
            matched_players=report.matched_players,
            unmatched_players=report.unmatched_players,
        )

    @app.get("/leagues/{league_id}/players", response_model=LeaguePlayersResponse)
    async def league_players(league_id: str, free_agents: bool = False) -> LeaguePlayersResponse:
        _pool_or_404(league_id)
        players = store.list_players(league_id, free_agents_only=free_agents)
        return LeaguePlayersResponse(league_id=league_id, total_players=len(players), players=players)

    @app.get("/leagues/{league_id}/valuations", response_model=ValuationResponse)
    async def league_valuations(
        league_id: str,
        total_budget: Optional[int] = Query(None, ge=3),
        num_teams: Optional[int] = Query(None, ge=1),
        roster_size: Optional[int] = Query(None, ge=1),
        current_year: Optional[int] = Query(None),
        include_rankings: bool = False,
        free_agents: bool = False,
    ) -> ValuationResponse:
        settings = _settings_from_query(total_budget, num_teams, roster_size, current_year, include_rankings)
        response = _league_valuations(league_id, settings, free_agents)
        response.results.sort(key=lambda result: result.auction_value, reverse=True)
        return response

    @app.get("/leagues/{league_id}/valuations/export.csv")
    async def league_valuations_csv(
        league_id: str,
        total_budget: Optional[int] = Query(None, ge=3),
        num_teams: Optional[int] = Query(None, ge=1),
        roster_size: Optional[int] = Query(None, ge=1),
        current_year: Optional[int] = Query(None),
        include_rankings: bool = False,
        free_agents: bool = False,
    ):
        settings = _settings_from_query(total_budget, num_teams, roster_size, current_year, include_rankings)
        response = _league_valuations(league_id, settings, free_agents)
        try:
            csv_text = export_valuations_to_csv(response.results)
        except ExportError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={league_id}-valuations.csv"},
        )

    return app
