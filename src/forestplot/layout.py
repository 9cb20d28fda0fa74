from __future__ import annotations

from dataclasses import dataclass

from forestplot.config import DEFAULT_THEME, LayoutTheme, PlotConfig

# Rows reserved below the data for the axis and its label.
EXTRA_ROWS = 3


@dataclass(frozen=True)
class Column:
    x: float
    width: float


@dataclass(frozen=True)
class Layout:
    width: float
    height: float
    row_count: int
    row_height: float
    table: Column
    plot: Column
    label: Column
    text_baseline: float
    theme: LayoutTheme

    def row_y(self, index: int) -> float:
        return index * self.row_height

    @property
    def rows_height(self) -> float:
        return self.row_count * self.row_height

    @property
    def row_center(self) -> float:
        return self.row_height / 2

    def description_x(self, offset: int) -> float:
        return self.theme.padding_left + offset * self.theme.tab_width


def compute_layout(
    row_count: int, config: PlotConfig, theme: LayoutTheme = DEFAULT_THEME
) -> Layout:
    """Fixed-fraction column layout; text length never affects widths."""
    width = config.width
    table_width = theme.table_width * width
    plot_width = theme.plot_width * width
    return Layout(
        width=width,
        height=(row_count + EXTRA_ROWS) * theme.row_height,
        row_count=row_count,
        row_height=theme.row_height,
        table=Column(x=0.0, width=table_width),
        plot=Column(x=table_width, width=plot_width),
        label=Column(
            x=(theme.table_width + theme.plot_width) * width + theme.label_gutter,
            width=theme.label_width * width,
        ),
        text_baseline=(theme.row_height - config.font_size) / 2 + 10,
        theme=theme,
    )
