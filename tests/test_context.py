"""Context and option validation tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models.context import Context, RecommendOptions


def test_context_canonicalises_aliases() -> None:
    context = Context(temperature_c=3, condition="Thunderstorm", season="Autumn", occasion="gym")
    assert context.temperature_c == 3.0
    assert context.condition == "extreme"
    assert context.season == "fall"
    assert context.occasion == "athletic"


def test_blank_occasion_means_unconstrained() -> None:
    assert Context(temperature_c=20, condition="clear", season="summer", occasion="  ").occasion is None


@pytest.mark.parametrize("temperature", ["cold", None, True])
def test_non_numeric_temperature_is_a_type_error(temperature) -> None:
    with pytest.raises(TypeError):
        Context(temperature_c=temperature, condition="clear", season="summer")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"condition": "hail", "season": "summer"},
        {"condition": "clear", "season": "monsoon"},
        {"condition": "clear", "season": "summer", "occasion": "wedding"},
    ],
)
def test_unknown_labels_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        Context(temperature_c=10, **kwargs)


def test_options_must_be_positive() -> None:
    assert RecommendOptions() == RecommendOptions(max_results=5, max_skeletons=200)
    with pytest.raises(ValueError):
        RecommendOptions(max_results=0)
    with pytest.raises(ValueError):
        RecommendOptions(max_skeletons=0)
