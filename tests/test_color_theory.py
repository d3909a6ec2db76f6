"""Color affinity table tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models.color_theory import DEFAULT_TABLE, ColorAffinityTable


def test_identical_colors_score_one() -> None:
    assert DEFAULT_TABLE.affinity("navy", "navy") == 1.0
    assert DEFAULT_TABLE.affinity("Navy Blue", "navy") == 1.0


def test_lookup_is_symmetric() -> None:
    assert DEFAULT_TABLE.affinity("white", "black") == DEFAULT_TABLE.affinity("black", "white") == 0.9
    assert DEFAULT_TABLE.affinity("pink", "red") == DEFAULT_TABLE.affinity("red", "pink")


def test_unlisted_pairs_default_to_neutral() -> None:
    assert DEFAULT_TABLE.affinity("navy", "gray") == 0.6
    assert DEFAULT_TABLE.affinity("navy", "black") == 0.6
    assert DEFAULT_TABLE.affinity("gray", "black") == 0.6


def test_clashing_pairs_score_near_zero() -> None:
    assert DEFAULT_TABLE.affinity("red", "pink") == pytest.approx(0.1)
    assert DEFAULT_TABLE.affinity("orange", "pink") < 0.2
    assert DEFAULT_TABLE.affinity("navy", "white") > DEFAULT_TABLE.default


def test_pairwise_uses_distinct_colors_only() -> None:
    pairs = DEFAULT_TABLE.pairwise(["navy", "gray", "navy", "black"])
    assert [(c1, c2) for c1, c2, _ in pairs] == [("navy", "gray"), ("navy", "black"), ("gray", "black")]
    assert DEFAULT_TABLE.pairwise(["white", "white"]) == []


def test_overrides_and_default_are_configurable() -> None:
    table = ColorAffinityTable(overrides={("navy", "gray"): 0.95}, default=0.5)
    assert table.affinity("gray", "navy") == 0.95
    assert table.affinity("green", "yellow") == 0.5
    assert table.affinity("red", "pink") == DEFAULT_TABLE.affinity("red", "pink")


def test_out_of_range_values_are_rejected() -> None:
    with pytest.raises(ValueError):
        ColorAffinityTable(overrides={("red", "blue"): 1.5})
    with pytest.raises(ValueError):
        ColorAffinityTable(default=-0.1)


def test_mean_affinity_over_an_outfit() -> None:
    assert DEFAULT_TABLE.mean_affinity("white", []) == 1.0
    assert DEFAULT_TABLE.mean_affinity("white", ["black", "navy"]) == pytest.approx(0.9)
    assert DEFAULT_TABLE.mean_affinity("red", ["Red", "pink"]) == pytest.approx(0.55)
