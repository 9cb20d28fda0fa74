from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from forestplot.config import PlotConfig, as_finite_number, resolve_config
from forestplot.effects import Effect, parse_effect
from forestplot.errors import MalformedInput


@dataclass(frozen=True)
class Row:
    description: str
    description_offset: int = 0
    effect: Effect | None = None
    marker_size: float = 1.0
    override_label: str | None = None


def _parse_offset(raw: Any, index: int) -> int:
    if raw is None:
        return 0
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise MalformedInput(
            code="E1122_ROW_OFFSET",
            message=f"Row {index}: descriptionOffset must be a non-negative integer.",
            hint="Use 0 for top-level rows and 1, 2, ... for nested rows.",
        )
    return raw


def _parse_marker_size(raw: Any, index: int) -> float:
    if raw is None:
        return 1.0
    size = as_finite_number(raw)
    if size is None or size <= 0:
        raise MalformedInput(
            code="E1123_ROW_MARKER_SIZE",
            message=f"Row {index}: markerSize must be a positive number.",
            hint="Omit markerSize or use a positive scale factor such as 0.5.",
        )
    return size


def _parse_override_label(raw: Any, index: int) -> str | None:
    # Empty or falsy labels count as absent.
    if not raw:
        return None
    if not isinstance(raw, str):
        raise MalformedInput(
            code="E1124_ROW_LABEL",
            message=f"Row {index}: overrideLabel must be a string.",
            hint="Quote the label text, e.g. \"n = 120\".",
        )
    return raw


def parse_row(raw: Any, index: int) -> Row:
    if not isinstance(raw, dict):
        raise MalformedInput(
            code="E1121_ROW_TYPE",
            message=f"Row {index} must be an object.",
            hint="Each data entry needs at least a description.",
        )
    description = raw.get("description")
    return Row(
        description="" if description is None else str(description),
        description_offset=_parse_offset(raw.get("descriptionOffset"), index),
        effect=parse_effect(raw.get("effect"), index),
        marker_size=_parse_marker_size(raw.get("markerSize"), index),
        override_label=_parse_override_label(raw.get("overrideLabel"), index),
    )


def parse_rows(raw_rows: Any) -> list[Row]:
    if not isinstance(raw_rows, list):
        raise MalformedInput(
            code="E1120_DATA_TYPE",
            message="data must be a list of rows.",
            hint="Provide data as a JSON array of row objects.",
        )
    return [parse_row(raw, index) for index, raw in enumerate(raw_rows)]


def parse_payload(payload: Any) -> tuple[PlotConfig, list[Row]]:
    if not isinstance(payload, dict):
        raise MalformedInput(
            code="E1101_PAYLOAD_TYPE",
            message="Input must contain a JSON object at the top level.",
            hint="Wrap the input as {\"plotConfig\": {...}, \"data\": [...]}.",
        )
    for key in ("plotConfig", "data"):
        if key not in payload:
            raise MalformedInput(
                code="E1102_PAYLOAD_KEY",
                message=f"Input missing required '{key}' field.",
                hint="Provide both plotConfig and data.",
            )
    rows = parse_rows(payload["data"])
    return resolve_config(payload["plotConfig"]), rows
