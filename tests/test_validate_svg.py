from __future__ import annotations

from pathlib import Path

from forestplot import render_svg
from validators.validate import (
    E1000_PARSE_ERROR,
    E2001_FORBIDDEN_ELEMENT,
    E2003_MISSING_GROUP,
    E2004_BAD_FONT_FAMILY,
    E2013_DASHED_MISSING_DASHARRAY,
    W2201_TREE_OUTSIDE_PLOT,
    validate_svg,
)

ROOT = Path(__file__).resolve().parents[1]
CONTRACT = ROOT / "config" / "figure_contract.v1.yaml"
SAMPLE = ROOT / "samples" / "default.json"


def _build_svg(
    font_family: str = "Helvetica",
    extra: str = "",
    missing_group: str | None = None,
    vbar_dasharray: str | None = "5,5",
    tree_x2: float = 120,
) -> str:
    groups = ["g_table", "g_plot", "g_labels"]
    if missing_group and missing_group in groups:
        groups.remove(missing_group)
    dash = f' stroke-dasharray="{vbar_dasharray}"' if vbar_dasharray else ""
    markup = []
    for group in groups:
        if group == "g_table":
            markup.append(
                '<g id="g_table"><g class="row"><rect width="100%" height="26" />'
                f'<text font-family="{font_family}">Study</text></g></g>'
            )
        elif group == "g_plot":
            markup.append(
                '<g id="g_plot"><g class="axis" font-family="sans-serif">'
                '<path class="domain" d="M0.5,6V0.5H320.5V6" />'
                '<g class="tick"><text>1.0</text></g></g>'
                f'<g class="tree"><line x1="10" x2="{tree_x2}" y1="13" y2="13" /></g>'
                f'<line class="vbar" x1="50" x2="50" y1="0" y2="26"{dash} /></g>'
            )
        else:
            markup.append(f'<g id="{group}" />')
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="800" height="104">
  <g id="figure_root">
{"".join(markup)}
  </g>
  {extra}
</svg>
"""


def _write_svg(tmp_path: Path, svg_text: str) -> Path:
    svg_path = tmp_path / "input.svg"
    svg_path.write_text(svg_text)
    return svg_path


def test_rendered_sample_passes_contract(tmp_path: Path) -> None:
    output = tmp_path / "forest.svg"
    render_svg(SAMPLE, output)
    report = validate_svg(output, CONTRACT)
    assert report.status == "pass", report.to_dict()
    assert report.warnings == []
    assert report.stats["rows"] == 6
    assert report.stats["trees"] == 5
    assert report.stats["labels"] == 5


def test_hand_built_svg_passes(tmp_path: Path) -> None:
    report = validate_svg(_write_svg(tmp_path, _build_svg()), CONTRACT)
    assert report.status == "pass", report.to_dict()


def test_forbids_image_element(tmp_path: Path) -> None:
    svg_text = _build_svg(
        extra='<image href="x.png" x="0" y="0" width="10" height="10" />'
    )
    report = validate_svg(_write_svg(tmp_path, svg_text), CONTRACT)
    assert E2001_FORBIDDEN_ELEMENT in report.codes


def test_missing_required_group(tmp_path: Path) -> None:
    svg_text = _build_svg(missing_group="g_labels")
    report = validate_svg(_write_svg(tmp_path, svg_text), CONTRACT)
    assert E2003_MISSING_GROUP in report.codes


def test_bad_font_family(tmp_path: Path) -> None:
    svg_text = _build_svg(font_family="Comic Sans MS")
    report = validate_svg(_write_svg(tmp_path, svg_text), CONTRACT)
    assert E2004_BAD_FONT_FAMILY in report.codes


def test_reference_line_must_be_dashed(tmp_path: Path) -> None:
    svg_text = _build_svg(vbar_dasharray=None)
    report = validate_svg(_write_svg(tmp_path, svg_text), CONTRACT)
    assert E2013_DASHED_MISSING_DASHARRAY in report.codes


def test_tree_outside_plot_is_a_warning(tmp_path: Path) -> None:
    svg_text = _build_svg(tree_x2=400)
    report = validate_svg(_write_svg(tmp_path, svg_text), CONTRACT)
    assert report.status == "pass"
    assert W2201_TREE_OUTSIDE_PLOT in report.codes


def test_unparseable_svg(tmp_path: Path) -> None:
    report = validate_svg(_write_svg(tmp_path, "<svg"), CONTRACT)
    assert report.status == "fail"
    assert E1000_PARSE_ERROR in report.codes
