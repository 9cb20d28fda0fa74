from __future__ import annotations

import pytest

from forestplot import LayoutTheme, compute_layout, resolve_config


def test_height_reserves_three_extra_rows() -> None:
    layout = compute_layout(6, resolve_config({}))
    assert layout.height == 234
    assert layout.rows_height == 156


def test_columns_are_fixed_fractions_of_width() -> None:
    layout = compute_layout(2, resolve_config({"width": 1000}))
    assert layout.table.x == 0
    assert layout.table.width == pytest.approx(300)
    assert layout.plot.x == pytest.approx(300)
    assert layout.plot.width == pytest.approx(400)
    assert layout.label.x == pytest.approx(715)
    assert layout.label.width == pytest.approx(300)


def test_row_offsets_follow_row_order() -> None:
    layout = compute_layout(4, resolve_config({}))
    assert [layout.row_y(i) for i in range(4)] == [0, 26, 52, 78]
    assert layout.row_center == 13


def test_description_indent_uses_tab_width() -> None:
    layout = compute_layout(1, resolve_config({}))
    assert layout.description_x(0) == 5
    assert layout.description_x(2) == 29


def test_text_baseline_depends_on_font_size() -> None:
    assert compute_layout(1, resolve_config({})).text_baseline == 17
    assert compute_layout(1, resolve_config({"fontSize": 16})).text_baseline == 15


def test_theme_changes_row_height() -> None:
    layout = compute_layout(2, resolve_config({}), LayoutTheme(row_height=30))
    assert layout.height == 150
    assert layout.row_y(1) == 30
