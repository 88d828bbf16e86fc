"""Configuration tables for replacement levels, weights and dynasty curves."""

from .valuation import (
    AGING_CURVES,
    POSITION_WEIGHTS,
    REPLACEMENT_LEVELS,
    AgingCurve,
    get_aging_curve,
    iter_aging_curves,
)

__all__ = [
    "AGING_CURVES",
    "AgingCurve",
    "POSITION_WEIGHTS",
    "REPLACEMENT_LEVELS",
    "get_aging_curve",
    "iter_aging_curves",
]
