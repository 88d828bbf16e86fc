"""Player name normalization and candidate-key generation.

League hosts, ranking feeds and roster hosts disagree on name formatting:
``"McCaffrey, Christian"`` vs ``"Christian McCaffrey"``, ``"D.J. Moore"`` vs
``"DJ Moore"``, ``"Kenneth Walker III"`` vs ``"Kenneth Walker"``. ``normalize``
folds these into one comparable key and ``variations`` lists every key worth
trying when a single normalization is not enough.

Apostrophes and hyphens are removed outright, so ``"Ja'Marr"`` becomes
``"jamarr"`` and ``"Amon-Ra"`` becomes ``"amonra"``. Downstream matching was
tuned against exactly this behavior.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from mfldash.models.match import MatchStrategy


_SUFFIX_PATTERNS = (
    re.compile(r"\s+jr\.?$"),
    re.compile(r"\s+sr\.?$"),
    re.compile(r"\s+i{1,3}$"),
    re.compile(r"\s+iv$"),
)
_NON_LETTERS = re.compile(r"[^a-z\s]")
_WHITESPACE = re.compile(r"\s+")
_DOTTED_DJ = re.compile(r"D\.J\.", re.IGNORECASE)
_PLAIN_DJ = re.compile(r"\bDJ\b", re.IGNORECASE)


def _reorder_comma(name: str) -> Optional[str]:
    """Turn ``"Last, First"`` into ``"First Last"``; None unless exactly one comma."""

    parts = [part.strip() for part in name.split(",")]
    if len(parts) != 2:
        return None
    return f"{parts[1]} {parts[0]}"


def _strip_suffixes(text: str) -> str:
    for pattern in _SUFFIX_PATTERNS:
        text = pattern.sub("", text)
    return text


def normalize(name: Optional[str]) -> str:
    """Return the canonical comparable key for a raw player name.

    Never fails on string input; ``None`` yields ``""``. Passing anything else
    is a caller bug and raises ``TypeError``. The result is idempotent:
    ``normalize(normalize(x)) == normalize(x)``.
    """

    if name is None:
        return ""
    if not isinstance(name, str):
        raise TypeError(f"player name must be a str, got {type(name).__name__}")

    reordered = _reorder_comma(name)
    if reordered is not None:
        name = reordered

    text = _strip_suffixes(name.lower().strip())
    text = _NON_LETTERS.sub("", text)
    text = _WHITESPACE.sub(" ", text).strip()

    # Punctuation can hide a suffix ("II.") and suffixes can stack ("Jr. III").
    while True:
        stripped = _strip_suffixes(text).strip()
        if stripped == text:
            return text
        text = stripped


def toggle_dj(name: str) -> str:
    """Swap ``D.J.`` and ``DJ`` spellings of a name."""

    if _DOTTED_DJ.search(name):
        return _DOTTED_DJ.sub("DJ", name)
    return _PLAIN_DJ.sub("D.J.", name)


def first_last_initial(name: Optional[str]) -> Optional[str]:
    """Lossy ``"{first} {last initial}"`` key, or None for single-token names.

    Two different players can share this key, so it is only a fallback.
    """

    tokens = normalize(name).split(" ")
    if len(tokens) < 2:
        return None
    return f"{tokens[0]} {tokens[-1][0]}"


def labelled_variations(name: Optional[str]) -> List[Tuple[str, MatchStrategy]]:
    """Ordered candidate keys for ``name`` with the strategy each one represents."""

    if name is None:
        return []
    if not isinstance(name, str):
        raise TypeError(f"player name must be a str, got {type(name).__name__}")

    reordered = _reorder_comma(name)
    candidates: List[Tuple[str, MatchStrategy]] = [
        (name.lower(), MatchStrategy.EXACT),
        (normalize(name), MatchStrategy.REORDERED_NAME if reordered else MatchStrategy.EXACT),
    ]
    if reordered is not None:
        candidates.append((reordered.lower(), MatchStrategy.REORDERED_NAME))
        candidates.append((normalize(reordered), MatchStrategy.REORDERED_NAME))

    toggled = toggle_dj(name)
    candidates.append((toggled.lower(), MatchStrategy.NAME_VARIATION))
    candidates.append((normalize(toggled), MatchStrategy.NAME_VARIATION))

    initial_key = first_last_initial(name)
    if initial_key:
        candidates.append((initial_key, MatchStrategy.FIRST_LAST_INITIAL))

    seen: set[str] = set()
    ordered: List[Tuple[str, MatchStrategy]] = []
    for key, strategy in candidates:
        if not key or key in seen:
            continue
        seen.add(key)
        ordered.append((key, strategy))
    return ordered


def variations(name: Optional[str]) -> Tuple[str, ...]:
    """Every distinct key worth trying when matching ``name``, in try order."""

    return tuple(key for key, _ in labelled_variations(name))
