"""Player identity resolution across league and ranking sources."""

from .names import first_last_initial, labelled_variations, normalize, toggle_dj, variations
from .matcher import LookupCollision, apply_matches, build_ranking_lookup, match, match_player

__all__ = [
    "LookupCollision",
    "apply_matches",
    "build_ranking_lookup",
    "first_last_initial",
    "labelled_variations",
    "match",
    "match_player",
    "normalize",
    "toggle_dj",
    "variations",
]
