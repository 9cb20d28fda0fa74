"""Forest plot layout and rendering library."""

from .config import LayoutTheme, Margin, PlotConfig, load_theme, resolve_config
from .effects import (
    EffectTriple,
    IntervalEffect,
    MissingEffectData,
    SdEffect,
    compute_domain,
    format_effect_label,
    normalize_effect,
)
from .errors import DegenerateDomain, ForestPlotError, MalformedInput
from .layout import Layout, compute_layout
from .models import Row, parse_payload, parse_rows
from .mount import MountPoint
from .renderer import render_forest_plot, render_payload, render_svg
from .scale import LinearScale, build_scale

__all__ = [
    "DegenerateDomain",
    "EffectTriple",
    "ForestPlotError",
    "IntervalEffect",
    "Layout",
    "LayoutTheme",
    "LinearScale",
    "MalformedInput",
    "Margin",
    "MissingEffectData",
    "MountPoint",
    "PlotConfig",
    "Row",
    "SdEffect",
    "build_scale",
    "compute_domain",
    "compute_layout",
    "format_effect_label",
    "load_theme",
    "normalize_effect",
    "parse_payload",
    "parse_rows",
    "render_forest_plot",
    "render_payload",
    "render_svg",
    "resolve_config",
]
