"""Effect size normalisation and axis domain computation."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Iterable, Union

from forestplot.config import as_finite_number
from forestplot.errors import DegenerateDomain

if TYPE_CHECKING:
    from forestplot.models import Row

logger = logging.getLogger(__name__)

DOMAIN_PADDING = 0.1


@dataclass(frozen=True)
class IntervalEffect:
    effect: float
    low: float
    high: float


@dataclass(frozen=True)
class SdEffect:
    effect: float
    sd: float


Effect = Union[IntervalEffect, SdEffect]


@dataclass(frozen=True)
class EffectTriple:
    low: float
    mid: float
    high: float


@dataclass(frozen=True)
class MissingEffectData:
    reason: str


def _number(raw: dict[str, Any], key: str) -> float | None:
    return as_finite_number(raw.get(key))


def _reject(raw: Any, row_index: int) -> None:
    fields = sorted(raw) if isinstance(raw, dict) else type(raw).__name__
    logger.debug(
        "Row %d: effect %s matches neither {effect, low, high} nor {effect, sd}",
        row_index,
        fields,
    )


def parse_effect(raw: Any, row_index: int = 0) -> Effect | None:
    """Turn a raw ``effect`` object into one of the two supported shapes.

    ``{effect, low, high}`` wins over ``{effect, sd}``; ``sd`` is not read when
    the interval is complete. Anything else, including non-numeric or
    non-finite values, parses to ``None`` and the row is drawn without a tree.
    """
    if raw is None:
        return None
    if not isinstance(raw, dict):
        _reject(raw, row_index)
        return None
    effect = _number(raw, "effect")
    if effect is None:
        _reject(raw, row_index)
        return None
    low = _number(raw, "low")
    high = _number(raw, "high")
    if low is not None and high is not None:
        return IntervalEffect(effect=effect, low=low, high=high)
    sd = _number(raw, "sd")
    if sd is not None:
        return SdEffect(effect=effect, sd=sd)
    _reject(raw, row_index)
    return None


def normalize_effect(row: "Row") -> EffectTriple | MissingEffectData:
    effect = row.effect
    if isinstance(effect, IntervalEffect):
        return EffectTriple(low=effect.low, mid=effect.effect, high=effect.high)
    if isinstance(effect, SdEffect):
        return EffectTriple(
            low=effect.effect - effect.sd,
            mid=effect.effect,
            high=effect.effect + effect.sd,
        )
    return MissingEffectData(reason=f"row '{row.description}' has no usable effect")


def iter_effects(rows: Iterable["Row"]) -> Iterable[tuple[int, EffectTriple]]:
    for index, row in enumerate(rows):
        result = normalize_effect(row)
        if isinstance(result, MissingEffectData):
            logger.debug("Skipping row %d for domain: %s", index, result.reason)
            continue
        yield index, result


def compute_domain(rows: Iterable["Row"]) -> tuple[float, float]:
    low = math.inf
    high = -math.inf
    for _, triple in iter_effects(rows):
        low = min(low, triple.low)
        high = max(high, triple.high)
    if not (math.isfinite(low) and math.isfinite(high)):
        raise DegenerateDomain(
            code="E1200_DEGENERATE_DOMAIN",
            message="No row carries usable effect data; the axis domain is undefined.",
            hint="Give at least one row an effect with {effect, low, high} or {effect, sd}.",
        )
    return (
        low - DOMAIN_PADDING * abs(low),
        high + DOMAIN_PADDING * abs(high),
    )


def format_fixed(value: float, digits: int = 2) -> str:
    # Ties round away from zero on the exact binary value.
    if value == 0:
        value = 0.0
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:.{digits}f}"


def format_effect_label(triple: EffectTriple) -> str:
    return (
        f"{format_fixed(triple.mid)} "
        f"({format_fixed(triple.low)}, {format_fixed(triple.high)})"
    )
