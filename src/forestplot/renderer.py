from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from common.svg_builder import AXIS_FONT_FAMILY, SvgBuilder, translate
from forestplot.config import DEFAULT_THEME, LayoutTheme, PlotConfig, load_theme
from forestplot.effects import (
    EffectTriple,
    MissingEffectData,
    compute_domain,
    format_effect_label,
    normalize_effect,
)
from forestplot.errors import MalformedInput
from forestplot.layout import Layout, compute_layout
from forestplot.models import Row, parse_payload
from forestplot.scale import LinearScale, build_scale

logger = logging.getLogger(__name__)

TICK_SIZE = 6
TICK_PADDING = 3
TICK_FONT_SIZE = 10
# Half-pixel offset keeps 1px axis strokes crisp.
AXIS_PIXEL_OFFSET = 0.5


def _draw_table_cell(
    builder: SvgBuilder, config: PlotConfig, layout: Layout, row: Row, index: int
) -> None:
    theme = layout.theme
    group = builder.drawing.g(class_="row", transform=translate(0, layout.row_y(index)))
    group.add(
        builder.drawing.rect(
            insert=(0, 0),
            size=("100%", layout.row_height),
            fill=theme.even_row_fill if index % 2 == 0 else theme.odd_row_fill,
        )
    )
    builder.add_text(
        group,
        row.description,
        layout.description_x(row.description_offset),
        layout.text_baseline,
        font_size=config.font_size,
        font_family=config.font_family,
    )
    builder.groups["g_table"].add(group)


def _draw_tree(
    builder: SvgBuilder,
    layout: Layout,
    scale: LinearScale,
    row: Row,
    triple: EffectTriple,
    index: int,
) -> None:
    theme = layout.theme
    center_y = layout.row_center
    group = builder.drawing.g(class_="tree", transform=translate(0, layout.row_y(index)))
    group.add(
        builder.drawing.line(
            start=(scale(triple.low), center_y),
            end=(scale(triple.high), center_y),
            stroke=theme.tree_stroke,
            stroke_width=1,
        )
    )
    side = row.marker_size * theme.square_full_size
    group.add(
        builder.drawing.rect(
            insert=(scale(triple.mid) - side / 2, center_y - side / 2),
            size=(side, side),
            fill=theme.tree_stroke,
        )
    )
    builder.groups["g_plot"].add(group)


def _draw_label(
    builder: SvgBuilder,
    config: PlotConfig,
    layout: Layout,
    row: Row,
    result: EffectTriple | MissingEffectData,
    index: int,
) -> None:
    if row.override_label is not None:
        content = row.override_label
    elif isinstance(result, EffectTriple):
        content = format_effect_label(result)
    else:
        return
    group = builder.drawing.g(
        class_="label", transform=translate(layout.label.x, layout.row_y(index))
    )
    builder.add_text(
        group,
        content,
        layout.theme.padding_left,
        layout.text_baseline,
        font_size=config.font_size,
        font_family=config.font_family,
    )
    builder.groups["g_labels"].add(group)


def _draw_axis(
    builder: SvgBuilder, config: PlotConfig, layout: Layout, scale: LinearScale
) -> None:
    offset = AXIS_PIXEL_OFFSET
    axis = builder.drawing.g(
        class_="axis",
        transform=translate(0, layout.rows_height + layout.theme.axis_offset),
        fill="none",
        font_size=TICK_FONT_SIZE,
        font_family=AXIS_FONT_FAMILY,
        text_anchor="middle",
    )
    r0, r1 = scale.range
    axis.add(
        builder.drawing.path(
            d=f"M{r0 + offset},{TICK_SIZE}V{offset}H{r1 + offset}V{TICK_SIZE}",
            class_="domain",
            stroke="#000000",
        )
    )
    fmt = scale.tick_format(config.n_ticks)
    for value in scale.ticks(config.n_ticks):
        tick = builder.drawing.g(class_="tick", transform=translate(scale(value) + offset, 0))
        tick.add(builder.drawing.line(start=(0, 0), end=(0, TICK_SIZE), stroke="#000000"))
        tick.add(
            builder.drawing.text(
                fmt(value),
                insert=(0, TICK_SIZE + TICK_PADDING),
                dy=["0.71em"],
                fill="#000000",
            )
        )
        axis.add(tick)

    label = builder.drawing.g(
        transform=translate(0, layout.row_height + layout.theme.padding_top)
    )
    builder.add_text(
        label,
        config.effect_label,
        layout.plot.width / 2,
        0,
        font_size=config.font_size,
        font_family=AXIS_FONT_FAMILY,
        font_weight="bold",
        anchor="middle",
    )
    axis.add(label)
    builder.groups["g_plot"].add(axis)


def _draw_reference_line(
    builder: SvgBuilder, config: PlotConfig, layout: Layout, scale: LinearScale
) -> None:
    if config.v_bar is None:
        return
    x = scale(config.v_bar)
    builder.groups["g_plot"].add(
        builder.drawing.line(
            start=(x, 0),
            end=(x, layout.rows_height),
            stroke=layout.theme.v_bar_stroke,
            stroke_width=1,
            stroke_dasharray=layout.theme.v_bar_dasharray,
            class_="vbar",
        )
    )


def render_forest_plot(
    config: PlotConfig, rows: Sequence[Row], theme: LayoutTheme | None = None
) -> SvgBuilder:
    """Build a fresh forest plot scene.

    Raises ``DegenerateDomain`` when no row has usable effect data.
    """
    theme = theme or DEFAULT_THEME
    layout = compute_layout(len(rows), config, theme)
    scale = build_scale(compute_domain(rows), layout)

    builder = SvgBuilder.create(
        width=config.width,
        height=layout.height,
        offset=(config.margin.left, config.margin.top),
    )
    builder.groups["g_plot"].update(
        {"class": "plot", "transform": translate(layout.plot.x, 0)}
    )

    trees = 0
    for index, row in enumerate(rows):
        _draw_table_cell(builder, config, layout, row, index)
        result = normalize_effect(row)
        if isinstance(result, EffectTriple):
            _draw_tree(builder, layout, scale, row, result, index)
            trees += 1
        _draw_label(builder, config, layout, row, result, index)

    _draw_axis(builder, config, layout, scale)
    _draw_reference_line(builder, config, layout, scale)
    logger.debug(
        "Rendered %d rows (%d trees) on domain %.4g..%.4g, size %sx%s",
        len(rows),
        trees,
        scale.domain[0],
        scale.domain[1],
        config.width,
        layout.height,
    )
    return builder


def render_payload(payload: Any, theme: LayoutTheme | None = None) -> SvgBuilder:
    config, rows = parse_payload(payload)
    return render_forest_plot(config, rows, theme)


def load_payload(input_json: Path) -> Any:
    try:
        return json.loads(input_json.read_text())
    except json.JSONDecodeError as exc:
        raise MalformedInput(
            code="E1100_PAYLOAD_INVALID",
            message=f"Failed to parse input JSON: {exc}",
            hint="Ensure the input file is valid JSON.",
        ) from exc


def render_svg(input_json: Path, output_svg: Path, theme_path: Path | None = None) -> SvgBuilder:
    theme = load_theme(theme_path) if theme_path is not None else None
    builder = render_payload(load_payload(input_json), theme)
    builder.save(output_svg)
    return builder
