from __future__ import annotations

import logging

import pytest

from forestplot import (
    DegenerateDomain,
    EffectTriple,
    IntervalEffect,
    MissingEffectData,
    Row,
    SdEffect,
    compute_domain,
    format_effect_label,
    normalize_effect,
)
from forestplot.effects import format_fixed, parse_effect


def test_interval_effect_is_returned_unmodified() -> None:
    row = Row("a", effect=parse_effect({"effect": 0.5, "low": 0.1, "high": 2.0, "sd": 9.0}))
    assert isinstance(row.effect, IntervalEffect)
    assert normalize_effect(row) == EffectTriple(low=0.1, mid=0.5, high=2.0)


def test_sd_effect_is_expanded_symmetrically() -> None:
    row = Row("b", effect=parse_effect({"effect": 2.0, "sd": 0.5}))
    assert isinstance(row.effect, SdEffect)
    assert normalize_effect(row) == EffectTriple(low=1.5, mid=2.0, high=2.5)


@pytest.mark.parametrize(
    "raw",
    [None, {}, {"effect": 1.0}, {"effect": 1.0, "low": 0.5}, {"low": 0.5, "high": 1.5, "sd": 0.1}],
)
def test_unrecognised_effect_shapes_are_missing(raw: object) -> None:
    row = Row("c", effect=parse_effect(raw))
    assert row.effect is None
    result = normalize_effect(row)
    assert isinstance(result, MissingEffectData)
    assert "c" in result.reason


@pytest.mark.parametrize(
    "raw",
    [
        "n/a",
        [1, 2, 3],
        {"effect": "high", "sd": 0.1},
        {"effect": 0.9, "sd": "n/a"},
        {"effect": 10**400, "sd": 1},
        {"effect": 0.9, "low": float("nan"), "high": 1.0},
        {"effect": True, "sd": 0.1},
    ],
)
def test_unusable_effect_values_parse_to_no_effect(raw: object) -> None:
    assert parse_effect(raw, row_index=1) is None


def test_complete_interval_ignores_unusable_sd() -> None:
    effect = parse_effect({"effect": 0.9, "low": 0.8, "high": 1.0, "sd": "n/a"})
    assert effect == IntervalEffect(effect=0.9, low=0.8, high=1.0)


def test_incomplete_interval_falls_back_to_sd() -> None:
    effect = parse_effect({"effect": 1.0, "low": "?", "high": 1.2, "sd": 0.1})
    assert effect == SdEffect(effect=1.0, sd=0.1)



def test_domain_padding_scales_with_magnitude() -> None:
    rows = [
        Row("a", effect=IntervalEffect(effect=0.92, low=0.88, high=0.95)),
        Row("b"),
        Row("c", effect=IntervalEffect(effect=0.99, low=0.96, high=1.03)),
    ]
    low, high = compute_domain(rows)
    assert low == pytest.approx(0.792)
    assert high == pytest.approx(1.133)


def test_domain_padding_is_sign_correct() -> None:
    rows = [Row("a", effect=IntervalEffect(effect=0.0, low=-2.0, high=-1.0))]
    low, high = compute_domain(rows)
    assert low == pytest.approx(-2.2)
    assert high == pytest.approx(-0.9)


def test_domain_without_any_effect_is_degenerate() -> None:
    with pytest.raises(DegenerateDomain) as exc_info:
        compute_domain([Row("a"), Row("b", effect=parse_effect({"effect": 1.0}))])
    assert exc_info.value.code == "E1200_DEGENERATE_DOMAIN"


def test_effect_label_uses_two_decimals() -> None:
    label = format_effect_label(EffectTriple(low=0.88, mid=0.92, high=0.95))
    assert label == "0.92 (0.88, 0.95)"


def test_fixed_formatting_rounds_ties_away_from_zero() -> None:
    assert format_fixed(0.125) == "0.13"
    assert format_fixed(-0.125) == "-0.13"
    assert format_fixed(2.675) == "2.67"
    assert format_fixed(-0.0) == "0.00"
    assert format_fixed(3) == "3.00"


def test_rows_skipped_by_domain_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    rows = [Row("a", effect=IntervalEffect(effect=1.0, low=0.5, high=2.0)), Row("b")]
    with caplog.at_level(logging.DEBUG, logger="forestplot.effects"):
        compute_domain(rows)
    assert "Skipping row 1" in caplog.text
