"""Normalisation of JSON Schema numeric bounds.

Draft 4 expresses exclusivity as booleans next to ``minimum``/``maximum``;
later drafts give ``exclusiveMinimum``/``exclusiveMaximum`` numeric values of
their own. :func:`normalize_bounds` folds both styles into one lower and one
upper bound, each with a flag telling whether it is exclusive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

__all__ = ["Bounds", "normalize_bounds"]


@dataclass(frozen=True)
class Bounds:
    """The effective lower and upper bound of a numeric value."""

    minimum: float | None = None
    maximum: float | None = None
    minimum_exclusive: bool = False
    maximum_exclusive: bool = False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_float(value: float | None) -> float | None:
    return None if value is None else float(value)


def _normalize_side(
    bound: float | None,
    exclusive: Any,
    tighter: Callable[[float, float], bool],
) -> tuple[float | None, bool]:
    if exclusive is None:
        return bound, False
    if isinstance(exclusive, bool):
        return bound, exclusive
    if _is_number(exclusive):
        if bound is None or tighter(exclusive, bound):
            return float(exclusive), True
        return bound, False
    # Any other kind of value is ignored; the plain bound applies.
    return bound, False


def normalize_bounds(
    minimum: float | None,
    maximum: float | None,
    exclusive_minimum: Any,
    exclusive_maximum: Any,
) -> Bounds:
    """Combine inclusive bounds with boolean or numeric exclusive bounds.

    ``None`` means the keyword is absent. A numeric exclusive bound wins over
    the inclusive one only when it is the more restrictive of the two.
    """
    low, low_exclusive = _normalize_side(
        _as_float(minimum), exclusive_minimum, lambda new, old: new > old
    )
    high, high_exclusive = _normalize_side(
        _as_float(maximum), exclusive_maximum, lambda new, old: new < old
    )
    return Bounds(
        minimum=low,
        maximum=high,
        minimum_exclusive=low_exclusive,
        maximum_exclusive=high_exclusive,
    )