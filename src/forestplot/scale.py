"""Linear data-to-pixel scale with nice tick generation."""
from __future__ import annotations

import math
from dataclasses import dataclass

from forestplot.layout import Layout

E10 = math.sqrt(50)
E5 = math.sqrt(10)
E2 = math.sqrt(2)


def _step_factor(error: float) -> int:
    if error >= E10:
        return 10
    if error >= E5:
        return 5
    if error >= E2:
        return 2
    return 1


def tick_increment(start: float, stop: float, count: int) -> float:
    """Positive results are steps; negative results are inverted steps (-1/step).

    Inverted steps keep small fractional steps such as 0.1 exact.
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    factor = _step_factor(error)
    if power >= 0:
        return factor * 10**power
    return -(10 ** -power) / factor


def tick_step(start: float, stop: float, count: int) -> float:
    step0 = abs(stop - start) / max(0, count)
    step1 = 10 ** math.floor(math.log10(step0))
    step1 *= _step_factor(step0 / step1)
    return -step1 if stop < start else step1


def ticks(start: float, stop: float, count: int) -> list[float]:
    if start == stop and count > 0:
        return [start]
    if count <= 0:
        return []
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    increment = tick_increment(start, stop, count)
    if increment == 0 or not math.isfinite(increment):
        return []
    if increment > 0:
        first = math.ceil(start / increment)
        last = math.floor(stop / increment)
        values = [(first + i) * increment for i in range(max(0, last - first + 1))]
    else:
        inverse = -increment
        first = math.ceil(start * inverse)
        last = math.floor(stop * inverse)
        values = [(first + i) / inverse for i in range(max(0, last - first + 1))]
    if reverse:
        values.reverse()
    return values


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        # A zero-width domain maps every value to the middle of the range.
        t = (value - d0) / span if span else 0.5
        return r0 + t * (r1 - r0)

    def ticks(self, count: int) -> list[float]:
        return ticks(self.domain[0], self.domain[1], count)

    def tick_format(self, count: int):
        d0, d1 = self.domain
        if d0 == d1 or count <= 0:
            return _format_general
        step = abs(tick_step(d0, d1, count))
        if step == 0 or not math.isfinite(step):
            return _format_general
        precision = max(0, -math.floor(math.log10(step)))

        def _format(value: float) -> str:
            return f"{value:,.{precision}f}"

        return _format


def _format_general(value: float) -> str:
    return f"{value:,g}"


def build_scale(domain: tuple[float, float], layout: Layout) -> LinearScale:
    return LinearScale(domain=domain, range=(0.0, layout.plot.width))
