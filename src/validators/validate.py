from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from .config import FigureContract, load_contract
from .report import ValidationReport
from .svg_checks import element_classes, local_name, parse_number, resolve_property

E1000_PARSE_ERROR = "E1000_PARSE_ERROR"
E1001_CONFIG_ERROR = "E1001_CONFIG_ERROR"
E2001_FORBIDDEN_ELEMENT = "E2001_FORBIDDEN_ELEMENT"
E2003_MISSING_GROUP = "E2003_MISSING_GROUP"
E2004_BAD_FONT_FAMILY = "E2004_BAD_FONT_FAMILY"
E2005_MISSING_CLASS = "E2005_MISSING_CLASS"
E2008_TEXT_MISSING = "E2008_TEXT_MISSING"
E2013_DASHED_MISSING_DASHARRAY = "E2013_DASHED_MISSING_DASHARRAY"
W2201_TREE_OUTSIDE_PLOT = "W2201_TREE_OUTSIDE_PLOT"


def _font_family_candidates(value: str) -> list[str]:
    return [item.strip().strip("'\"").lower() for item in value.split(",") if item.strip()]


def _font_family_ok(value: str, allowed: list[str]) -> bool:
    if not value:
        return False
    allowed_set = {item.strip().strip("'\"").lower() for item in allowed}
    return any(candidate in allowed_set for candidate in _font_family_candidates(value))


def _check_elements(root: ET.Element, contract: FigureContract, report: ValidationReport) -> None:
    forbidden = {name.lower() for name in contract.forbid_elements}
    seen_ids: set[str] = set()
    seen_classes: set[str] = set()
    for node in root.iter():
        name = local_name(node.tag).lower()
        if name in forbidden:
            report.error(
                E2001_FORBIDDEN_ELEMENT,
                f"Forbidden element <{name}> found.",
                "Forest plots are drawn with rect, line, path, text and g only.",
                element=name,
            )
        if node.get("id"):
            seen_ids.add(node.get("id"))
        seen_classes |= element_classes(node)
    for group_id in contract.required_groups:
        if group_id not in seen_ids:
            report.error(
                E2003_MISSING_GROUP,
                f"Required group '{group_id}' is missing.",
                "Render through SvgBuilder so every column group exists.",
                group=group_id,
            )
    for class_name in contract.required_classes:
        if class_name not in seen_classes:
            report.error(
                E2005_MISSING_CLASS,
                f"No element with class '{class_name}' found.",
                "Check that the chart has rows and an axis.",
                class_name=class_name,
            )


def _check_text(
    root: ET.Element,
    parent_map: dict[ET.Element, ET.Element],
    contract: FigureContract,
    report: ValidationReport,
) -> int:
    texts = [node for node in root.iter() if local_name(node.tag) == "text"]
    with_content = [node for node in texts if "".join(node.itertext()).strip()]
    if contract.require_text_elements and not with_content:
        report.error(
            E2008_TEXT_MISSING,
            "No text elements with content found.",
            "Descriptions, labels and tick values must be real <text> elements.",
        )
    if contract.allowed_font_families:
        for node in texts:
            family = resolve_property(node, parent_map, "font-family")
            if not _font_family_ok(family, contract.allowed_font_families):
                report.error(
                    E2004_BAD_FONT_FAMILY,
                    f"Font family '{family}' is not allowed.",
                    "Use one of: " + ", ".join(contract.allowed_font_families),
                    text="".join(node.itertext())[:40],
                )
    return len(with_content)


def _check_reference_line(root: ET.Element, report: ValidationReport) -> None:
    for node in root.iter():
        if local_name(node.tag) != "line" or "vbar" not in element_classes(node):
            continue
        if not node.get("stroke-dasharray"):
            report.error(
                E2013_DASHED_MISSING_DASHARRAY,
                "Reference line has no stroke-dasharray.",
                "The vBar line is drawn dashed.",
            )


def _check_trees(
    root: ET.Element, contract: FigureContract, report: ValidationReport
) -> int:
    plot_width = None
    for node in root.iter():
        if local_name(node.tag) == "path" and "domain" in element_classes(node):
            # The axis domain path ends at "H<width + 0.5>V6".
            d = node.get("d", "")
            if "H" in d:
                end = parse_number(d.split("H", 1)[1])
                plot_width = end - 0.5 if end is not None else None
    trees = [
        node
        for node in root.iter()
        if local_name(node.tag) == "g" and "tree" in element_classes(node)
    ]
    if plot_width is None:
        return len(trees)
    tolerance = contract.geometry_tolerance
    for idx, tree in enumerate(trees):
        xs: list[float] = []
        for child in tree:
            if local_name(child.tag) == "line":
                xs.extend(
                    value
                    for value in (parse_number(child.get("x1")), parse_number(child.get("x2")))
                    if value is not None
                )
        if any(x < -tolerance or x > plot_width + tolerance for x in xs):
            report.warn(
                W2201_TREE_OUTSIDE_PLOT,
                f"Tree {idx} extends outside the plot column.",
                "Check the effect values against the axis domain.",
                tree=idx,
                x=xs,
                plot_width=plot_width,
            )
    return len(trees)


def validate_svg(svg_path: Path, contract_path: Path) -> ValidationReport:
    report = ValidationReport()
    try:
        contract = load_contract(contract_path)
    except (OSError, ValueError) as exc:
        report.error(
            E1001_CONFIG_ERROR,
            f"Failed to load figure contract: {exc}",
            "Check the contract YAML path and content.",
        )
        return report
    try:
        root = ET.parse(svg_path).getroot()
    except (OSError, ET.ParseError) as exc:
        report.error(
            E1000_PARSE_ERROR,
            f"Failed to parse SVG: {exc}",
            "Ensure the file is well-formed SVG.",
        )
        return report

    parent_map = {child: parent for parent in root.iter() for child in parent}
    _check_elements(root, contract, report)
    text_count = _check_text(root, parent_map, contract, report)
    _check_reference_line(root, report)
    tree_count = _check_trees(root, contract, report)

    report.stats = {
        "rows": sum(
            1
            for node in root.iter()
            if local_name(node.tag) == "g" and "row" in element_classes(node)
        ),
        "trees": tree_count,
        "labels": sum(
            1
            for node in root.iter()
            if local_name(node.tag) == "g" and "label" in element_classes(node)
        ),
        "texts": text_count,
    }
    return report
