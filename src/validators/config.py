from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from common.yaml_utils import load_yaml_mapping


@dataclass(frozen=True)
class FigureContract:
    forbid_elements: list[str]
    required_groups: list[str]
    require_text_elements: bool
    allowed_font_families: list[str]
    required_classes: list[str]
    geometry_tolerance: float


def load_contract(path: Path) -> FigureContract:
    data = load_yaml_mapping(path)
    svg = data.get("svg", {}) or {}
    text = data.get("text", {}) or {}
    typography = data.get("typography", {}) or {}
    geometry = data.get("geometry", {}) or {}

    return FigureContract(
        forbid_elements=list(svg.get("forbid_elements", []) or []),
        required_groups=list(svg.get("required_groups", []) or []),
        require_text_elements=bool(text.get("require_text_elements", False)),
        allowed_font_families=list(typography.get("allowed_font_families_any_of", []) or []),
        required_classes=list(svg.get("required_classes", []) or []),
        geometry_tolerance=float(geometry.get("tolerance", 0.5)),
    )
