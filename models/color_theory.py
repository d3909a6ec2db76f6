"""Color affinity table used to score outfit color harmony deterministically."""
from __future__ import annotations

import logging
from itertools import combinations
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from models.taxonomy import normalize_color_name

logger = logging.getLogger(__name__)

IDENTICAL_AFFINITY = 1.0
DEFAULT_AFFINITY = 0.6

# Classic pairings that read as deliberate.
_COMPLEMENTARY_PAIRS: Dict[Tuple[str, str], float] = {
    ("black", "white"): 0.9,
    ("navy", "white"): 0.9,
    ("navy", "beige"): 0.85,
    ("blue", "white"): 0.85,
    ("blue", "beige"): 0.8,
    ("brown", "beige"): 0.85,
    ("brown", "white"): 0.8,
    ("gray", "white"): 0.8,
    ("green", "beige"): 0.8,
    ("pink", "gray"): 0.75,
    ("yellow", "navy"): 0.75,
    ("neutral", "black"): 0.7,
    ("neutral", "white"): 0.7,
}

# Pairs that fight each other.
_CLASHING_PAIRS: Dict[Tuple[str, str], float] = {
    ("red", "pink"): 0.1,
    ("red", "orange"): 0.15,
    ("orange", "pink"): 0.1,
    ("orange", "purple"): 0.15,
    ("red", "purple"): 0.2,
    ("green", "pink"): 0.2,
    ("brown", "black"): 0.3,
}


def _pair_key(color1: str, color2: str) -> frozenset:
    return frozenset((normalize_color_name(color1), normalize_color_name(color2)))


class ColorAffinityTable:
    """Symmetric lookup of compatibility between two color tokens.

    Identical colors score 1.0, curated pairs use their table value and every
    other pair falls back to ``default``. The table is read-only once built.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[Tuple[str, str], float]] = None,
        default: float = DEFAULT_AFFINITY,
    ) -> None:
        if not 0.0 <= default <= 1.0:
            raise ValueError("default affinity must be within [0, 1]")
        values: Dict[frozenset, float] = {}
        for source in (_COMPLEMENTARY_PAIRS, _CLASHING_PAIRS, overrides or {}):
            for (color1, color2), value in source.items():
                if not 0.0 <= float(value) <= 1.0:
                    raise ValueError(f"affinity for ({color1}, {color2}) must be within [0, 1]")
                values[_pair_key(color1, color2)] = float(value)
        self._values = MappingProxyType(values)
        self.default = float(default)

    def affinity(self, color1: str, color2: str) -> float:
        key = _pair_key(color1, color2)
        if len(key) == 1:
            return IDENTICAL_AFFINITY
        return self._values.get(key, self.default)

    def mean_affinity(self, color: str, others: Iterable[str]) -> float:
        """Average affinity of ``color`` against each of ``others``."""

        others = list(others)
        if not others:
            return IDENTICAL_AFFINITY
        return sum(self.affinity(color, other) for other in others) / len(others)

    def pairwise(self, colors: Sequence[str]) -> List[Tuple[str, str, float]]:
        """Return ``(color1, color2, affinity)`` for every pair of distinct colors."""

        distinct: List[str] = []
        for color in colors:
            key = normalize_color_name(color)
            if key and key not in distinct:
                distinct.append(key)
        pairs = [(c1, c2, self.affinity(c1, c2)) for c1, c2 in combinations(distinct, 2)]
        logger.debug("pairwise affinity %s -> %s", distinct, pairs)
        return pairs


DEFAULT_TABLE = ColorAffinityTable()


__all__ = [
    "ColorAffinityTable",
    "DEFAULT_TABLE",
    "DEFAULT_AFFINITY",
    "IDENTICAL_AFFINITY",
]
