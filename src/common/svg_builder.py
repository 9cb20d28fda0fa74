from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import svgwrite

REQUIRED_GROUP_IDS = [
    "figure_root",
    "g_table",
    "g_plot",
    "g_labels",
]

DEFAULT_FONT_FAMILY = "Helvetica"
DEFAULT_TEXT_ANCHOR = "start"
AXIS_FONT_FAMILY = "sans-serif"


def translate(x: float, y: float) -> str:
    return f"translate({_num(x)}, {_num(y)})"


def _num(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


@dataclass
class SvgBuilder:
    drawing: svgwrite.Drawing
    root: svgwrite.container.Group
    groups: dict[str, svgwrite.container.Group]
    width: float
    height: float

    @classmethod
    def create(
        cls, width: float, height: float, offset: tuple[float, float] = (0, 0)
    ) -> "SvgBuilder":
        drawing = svgwrite.Drawing(size=(_num(width), _num(height)), profile="full")
        root = drawing.g(id="figure_root", transform=translate(*offset))
        drawing.add(root)

        groups: dict[str, svgwrite.container.Group] = {}
        for group_id in REQUIRED_GROUP_IDS:
            if group_id == "figure_root":
                continue
            group = drawing.g(id=group_id)
            root.add(group)
            groups[group_id] = group

        return cls(
            drawing=drawing,
            root=root,
            groups=groups,
            width=width,
            height=height,
        )

    def add_text(
        self,
        parent: svgwrite.container.Group,
        content: str,
        x: float,
        y: float,
        font_size: float | None = None,
        font_family: str | None = None,
        font_weight: str | None = None,
        anchor: str | None = None,
        fill: str = "#000000",
    ) -> svgwrite.text.Text:
        kwargs = {
            "insert": (x, y),
            "font_family": font_family or DEFAULT_FONT_FAMILY,
            "text_anchor": anchor or DEFAULT_TEXT_ANCHOR,
            "fill": fill,
        }
        if font_size is not None:
            kwargs["font_size"] = float(font_size)
        if font_weight:
            kwargs["font_weight"] = font_weight
        text = self.drawing.text(content, **kwargs)
        parent.add(text)
        return text

    def tostring(self) -> str:
        return self.drawing.tostring()

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.drawing.saveas(str(path))
