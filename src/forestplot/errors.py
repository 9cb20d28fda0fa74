from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ForestPlotError(Exception):
    code: str
    message: str
    hint: str

    def __str__(self) -> str:
        return self.message


class MalformedInput(ForestPlotError):
    """Payload, config or rows do not have the expected shape."""


class DegenerateDomain(ForestPlotError):
    """No row carries usable effect data, so no axis can be built."""
