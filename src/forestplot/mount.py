from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from common.svg_builder import SvgBuilder
from forestplot.config import LayoutTheme
from forestplot.renderer import render_payload

logger = logging.getLogger(__name__)


@dataclass
class MountPoint:
    """Display target that holds at most one rendered chart.

    A new scene is built completely before the old one is cleared, so a
    failing render leaves the previous chart in place.
    """

    node_id: str
    children: list[SvgBuilder] = field(default_factory=list)

    @property
    def scene(self) -> SvgBuilder | None:
        return self.children[0] if self.children else None

    def clear(self) -> None:
        self.children.clear()

    def attach(self, scene: SvgBuilder) -> None:
        self.clear()
        self.children.append(scene)

    def render(self, payload: Any, theme: LayoutTheme | None = None) -> SvgBuilder:
        scene = render_payload(payload, theme)
        self.attach(scene)
        logger.debug("Mounted chart on %s", self.node_id)
        return scene

    def tostring(self) -> str:
        return "".join(child.tostring() for child in self.children)
