"""Input adapters for league exports and consensus rankings."""

from .fantasypros import (
    POSITION_MAPPING,
    RANKING_POSITIONS,
    FantasyProsClient,
    FantasyProsError,
    fetch_all_rankings,
    parse_rankings,
    ranking_positions_for,
)
from .mfl import (
    FranchiseRoster,
    MFLClient,
    MFLError,
    RosterEntry,
    as_list,
    free_agent_pool,
    parse_player_catalog,
    parse_projected_scores,
    parse_rosters,
    rostered_player_ids,
)
from .sync import SyncReport, resolve_league

__all__ = [
    "POSITION_MAPPING",
    "RANKING_POSITIONS",
    "FantasyProsClient",
    "FantasyProsError",
    "fetch_all_rankings",
    "parse_rankings",
    "ranking_positions_for",
    "FranchiseRoster",
    "MFLClient",
    "MFLError",
    "RosterEntry",
    "as_list",
    "free_agent_pool",
    "parse_player_catalog",
    "parse_projected_scores",
    "parse_rosters",
    "rostered_player_ids",
    "SyncReport",
    "resolve_league",
]
