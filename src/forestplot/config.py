from __future__ import annotations

import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from common.yaml_utils import load_yaml_mapping
from forestplot.errors import MalformedInput


@dataclass(frozen=True)
class Margin:
    left: float = 20
    top: float = 20


@dataclass(frozen=True)
class PlotConfig:
    mount_node: str = "#svg"
    width: float = 800
    margin: Margin = Margin()
    effect_label: str = "Effect"
    font_size: float = 12
    font_family: str = "Helvetica"
    n_ticks: int = 5
    # None means no reference line; 0 is a valid reference value.
    v_bar: float | None = None


@dataclass(frozen=True)
class LayoutTheme:
    row_height: float = 26
    tab_width: float = 12
    square_full_size: float = 24
    table_width: float = 0.3
    plot_width: float = 0.4
    label_width: float = 0.3
    padding_left: float = 5
    padding_top: float = 10
    label_gutter: float = 15
    axis_offset: float = 5
    even_row_fill: str = "#f2f1f1"
    odd_row_fill: str = "#ffffff"
    tree_stroke: str = "#000000"
    v_bar_stroke: str = "#444444"
    v_bar_dasharray: str = "5,5"


DEFAULT_THEME = LayoutTheme()


def as_finite_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None`` if it is not one.

    JSON integers beyond float range count as non-finite.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _invalid(key: str, expected: str) -> MalformedInput:
    return MalformedInput(
        code="E1110_CONFIG_VALUE",
        message=f"plotConfig.{key} must be {expected}.",
        hint=f"Fix or omit plotConfig.{key} to use the default.",
    )


def _positive_number(raw: dict[str, Any], key: str, default: float) -> float:
    value = raw.get(key)
    if value is None:
        return default
    number = as_finite_number(value)
    if number is None or number <= 0:
        raise _invalid(key, "a positive number")
    return value


def _text(raw: dict[str, Any], key: str, default: str) -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise _invalid(key, "a string")
    return value


def _resolve_margin(value: Any) -> Margin:
    if value is None:
        return Margin()
    if not isinstance(value, dict):
        raise _invalid("margin", "an object with left and top")
    resolved = {}
    for key in ("left", "top"):
        side = value.get(key)
        if side is None:
            continue
        if as_finite_number(side) is None:
            raise _invalid(f"margin.{key}", "numeric")
        resolved[key] = side
    return Margin(**resolved)


def _resolve_v_bar(value: Any) -> float | None:
    if value is None:
        return None
    number = as_finite_number(value)
    if number is None:
        raise _invalid("vBar", "numeric")
    return number


def resolve_config(overrides: Any) -> PlotConfig:
    """Merge caller overrides over the defaults.

    Keys that are missing or ``null`` fall back to their default value.
    """
    if overrides is None:
        overrides = {}
    if not isinstance(overrides, dict):
        raise MalformedInput(
            code="E1103_CONFIG_TYPE",
            message="plotConfig must be an object.",
            hint="Use {} to render with every default.",
        )
    n_ticks = overrides.get("nTicks")
    if n_ticks is not None and (
        isinstance(n_ticks, bool) or not isinstance(n_ticks, int) or n_ticks < 0
    ):
        raise _invalid("nTicks", "a non-negative integer")
    return PlotConfig(
        mount_node=_text(overrides, "mountNode", PlotConfig.mount_node),
        width=_positive_number(overrides, "width", PlotConfig.width),
        margin=_resolve_margin(overrides.get("margin")),
        effect_label=_text(overrides, "effectLabel", PlotConfig.effect_label),
        font_size=_positive_number(overrides, "fontSize", PlotConfig.font_size),
        font_family=_text(overrides, "fontFamily", PlotConfig.font_family),
        n_ticks=PlotConfig.n_ticks if n_ticks is None else n_ticks,
        v_bar=_resolve_v_bar(overrides.get("vBar")),
    )


def load_theme(path: Path) -> LayoutTheme:
    data = load_yaml_mapping(path)
    layout = data.get("layout", {}) or {}
    colors = data.get("colors", {}) or {}
    known = {field.name for field in fields(LayoutTheme)}
    values: dict[str, Any] = {}
    for section in (layout, colors):
        for key, value in section.items():
            if key not in known or value is None:
                continue
            default = getattr(DEFAULT_THEME, key)
            try:
                values[key] = str(value) if isinstance(default, str) else float(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Invalid layout theme value for {key}: {value!r}") from exc
    return LayoutTheme(**values)
