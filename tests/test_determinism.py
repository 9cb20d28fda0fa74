from __future__ import annotations

from pathlib import Path

from forestplot import render_svg

ROOT = Path(__file__).resolve().parents[1]
SAMPLE = ROOT / "samples" / "default.json"


def test_svg_output_is_deterministic(tmp_path: Path) -> None:
    output_a = tmp_path / "out_a.svg"
    output_b = tmp_path / "out_b.svg"

    render_svg(SAMPLE, output_a)
    render_svg(SAMPLE, output_b)

    assert output_a.read_bytes() == output_b.read_bytes()


def test_theme_file_changes_output(tmp_path: Path) -> None:
    theme = tmp_path / "theme.yaml"
    theme.write_text("layout:\n  row_height: 30\n")
    output = tmp_path / "themed.svg"

    render_svg(SAMPLE, output, theme_path=theme)

    assert 'height="270"' in output.read_text()
