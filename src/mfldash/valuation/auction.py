"""Dynasty-aware auction values derived from VBD."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from mfldash.models import (
    PlayerRecord,
    Position,
    ValuationBreakdown,
    ValuationResult,
    ValuationSettings,
)
from mfldash.valuation.multipliers import (
    contract_multiplier,
    draft_capital_multiplier,
    dynasty_multiplier,
    rank_value,
    rookie_multiplier,
    team_multiplier,
)
from mfldash.valuation.vbd import replacement_table, weighted_vbd


logger = logging.getLogger(__name__)

_CURRENT_WEIGHT = 0.7
_RANK_WEIGHT = 0.3


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class PoolContext:
    """Per-pool quantities shared by every player's valuation."""

    settings: ValuationSettings
    replacement: Dict[Position, Optional[float]]
    total_vbd: float

    @classmethod
    def build(cls, pool: Sequence[PlayerRecord], settings: ValuationSettings) -> "PoolContext":
        replacement = replacement_table(pool, settings)
        vbds = sorted(
            (weighted_vbd(player, replacement.get(player.position_code), settings) for player in pool),
            reverse=True,
        )
        # Players outside the draftable universe do not move the dollar-per-VBD rate.
        total_vbd = sum(vbds[: settings.draftable_slots])
        return cls(settings=settings, replacement=replacement, total_vbd=total_vbd)

    def vbd(self, player: PlayerRecord) -> float:
        return weighted_vbd(player, self.replacement.get(player.position_code), self.settings)

    def value(self, player: PlayerRecord) -> ValuationResult:
        settings = self.settings
        vbd = self.vbd(player)

        base_value = 1
        if self.total_vbd > 0 and vbd > 0:
            base_value = round_half_up(vbd * settings.total_dollars / self.total_vbd)

        age = dynasty_multiplier(player, settings.current_year)
        draft = draft_capital_multiplier(player)
        team = team_multiplier(player)
        rookie = rookie_multiplier(player, settings.current_year)
        contract = contract_multiplier(player)
        total_multiplier = age * draft * team * rookie * contract

        auction_value = round_half_up(base_value * total_multiplier)

        rank_dollars: Optional[int] = None
        if settings.include_rankings and player.rank is not None:
            rank_dollars = rank_value(player.rank, settings.total_budget)
            auction_value = round_half_up(auction_value * _CURRENT_WEIGHT + rank_dollars * _RANK_WEIGHT)

        auction_value = min(max(1, auction_value), settings.max_value)

        return ValuationResult(
            player=player,
            auction_value=auction_value,
            vbd=vbd,
            dynasty_multiplier=age,
            draft_capital_multiplier=draft,
            team_multiplier=team,
            rookie_multiplier=rookie,
            contract_multiplier=contract,
            breakdown=ValuationBreakdown(
                base_value=base_value,
                age_adjustment=age,
                draft_capital=draft,
                team_situation=team,
                rookie_bonus=rookie,
                contract_status=contract,
                total_multiplier=total_multiplier,
                rank_value=rank_dollars,
            ),
        )


def calculate_auction_value(
    player: PlayerRecord,
    pool: Sequence[PlayerRecord],
    settings: Optional[ValuationSettings] = None,
) -> ValuationResult:
    """Value a single player against ``pool``."""

    settings = settings or ValuationSettings()
    return PoolContext.build(pool, settings).value(player)


def value_pool(
    pool: Sequence[PlayerRecord],
    settings: Optional[ValuationSettings] = None,
) -> List[ValuationResult]:
    """Value every player in ``pool``; equivalent to calling
    ``calculate_auction_value`` per player but builds the pool context once."""

    settings = settings or ValuationSettings()
    context = PoolContext.build(pool, settings)
    results = [context.value(player) for player in pool]
    logger.debug(
        "Valued %d players (total VBD %.2f, %d dollars above minimum bids)",
        len(results),
        context.total_vbd,
        settings.total_dollars,
    )
    return results
