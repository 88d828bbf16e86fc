"""VBD, dynasty multipliers, auction values and tiers."""

from .auction import PoolContext, calculate_auction_value, round_half_up, value_pool
from .multipliers import (
    contract_multiplier,
    draft_capital_multiplier,
    dynasty_multiplier,
    rank_value,
    rookie_multiplier,
    team_multiplier,
)
from .export import ExportError, export_valuations_to_csv, valuations_to_json
from .tiers import AuctionTiers, partition_results, tier_for_value, tier_players
from .vbd import calculate_vbd, positional_scarcity, replacement_points

__all__ = [
    "AuctionTiers",
    "ExportError",
    "PoolContext",
    "calculate_auction_value",
    "calculate_vbd",
    "contract_multiplier",
    "draft_capital_multiplier",
    "dynasty_multiplier",
    "export_valuations_to_csv",
    "partition_results",
    "positional_scarcity",
    "rank_value",
    "replacement_points",
    "rookie_multiplier",
    "round_half_up",
    "team_multiplier",
    "tier_for_value",
    "tier_players",
    "value_pool",
    "valuations_to_json",
]
