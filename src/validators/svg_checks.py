from __future__ import annotations

import re
import xml.etree.ElementTree as ET

NUMBER_RE = re.compile(r"^\s*([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)")
TRANSLATE_RE = re.compile(r"translate\(\s*([^,\s)]+)(?:[\s,]+([^)\s]+))?\s*\)")


def local_name(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def parse_style(style: str) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for chunk in style.split(";"):
        chunk = chunk.strip()
        if not chunk or ":" not in chunk:
            continue
        key, value = chunk.split(":", 1)
        parsed[key.strip().lower()] = value.strip()
    return parsed


def parse_number(value: str | None) -> float | None:
    if value is None:
        return None
    match = NUMBER_RE.match(value)
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


def parse_translate(transform: str | None) -> tuple[float, float]:
    if not transform:
        return (0.0, 0.0)
    match = TRANSLATE_RE.search(transform)
    if not match:
        return (0.0, 0.0)
    x = parse_number(match.group(1)) or 0.0
    y = parse_number(match.group(2)) or 0.0
    return (x, y)


def element_classes(node: ET.Element) -> set[str]:
    return set((node.get("class") or "").split())


def resolve_property(
    node: ET.Element, parent_map: dict[ET.Element, ET.Element], prop: str
) -> str:
    current: ET.Element | None = node
    while current is not None:
        direct = current.get(prop)
        if direct:
            return direct
        styled = parse_style(current.get("style", "")).get(prop)
        if styled:
            return styled
        current = parent_map.get(current)
    return ""
