"""Checks applied while decoding a document against a JSON Schema type.

Each validator runs at one of two stages. Validators with ``before_decode``
set inspect the raw mapping before the typed value exists; the others run
on the decoded value (``plain``) and may rely on the raw mapping as well.
Every ``validate`` call returns the decoded value, which a validator that
fills in defaults may have replaced.
"""

from __future__ import annotations

import copy
import math
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, ClassVar

from .bounds import normalize_bounds

__all__ = [
    "ValidationError",
    "DefaultValueError",
    "Validator",
    "RequiredValidator",
    "ReadOnlyValidator",
    "NullTypeValidator",
    "DefaultValidator",
    "ArrayValidator",
    "StringValidator",
    "NumericValidator",
    "AnyOfValidator",
    "parse_iso8601_duration",
    "upper_first",
    "lower_first",
]


class ValidationError(ValueError):
    """A document does not satisfy a schema constraint."""


class DefaultValueError(ValueError):
    """A schema default value cannot be used."""


def upper_first(text: str) -> str:
    """Return ``text`` with its first character upper-cased."""
    return text[:1].upper() + text[1:]


def lower_first(text: str) -> str:
    """Return ``text`` with its first character lower-cased."""
    return text[:1].lower() + text[1:]


_NUMBER = r"(\d+(?:[.,]\d+)?)"
_DURATION = re.compile(
    rf"^(-)?P(?:{_NUMBER}Y)?(?:{_NUMBER}M)?(?:{_NUMBER}W)?(?:{_NUMBER}D)?"
    rf"(?:(T)(?:{_NUMBER}H)?(?:{_NUMBER}M)?(?:{_NUMBER}S)?)?$"
)
# Nanoseconds per unit: years, months, weeks, days, hours, minutes, seconds.
_NANOS = (3.154e16, 2.628e15, 6.048e14, 8.64e13, 3.6e12, 6e10, 1e9)


def parse_iso8601_duration(text: str) -> timedelta:
    """Parse an ISO 8601 duration such as ``P1DT2H`` or ``PT20S``."""
    match = _DURATION.match(text)
    if match is None:
        raise ValueError(f"invalid ISO 8601 duration: {text!r}")
    sign, years, months, weeks, days, time_marker, hours, minutes, seconds = match.groups()
    date_parts = (years, months, weeks, days)
    time_parts = (hours, minutes, seconds)
    if all(part is None for part in date_parts + time_parts):
        raise ValueError(f"invalid ISO 8601 duration: {text!r}")
    if time_marker and all(part is None for part in time_parts):
        raise ValueError(f"invalid ISO 8601 duration: {text!r}")
    nanos = sum(
        round(float(part.replace(",", ".")) * factor)
        for part, factor in zip(date_parts + time_parts, _NANOS)
        if part is not None
    )
    if sign:
        nanos = -nanos
    return timedelta(microseconds=nanos / 1000)


def _format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _lookup(plain: Any, name: str) -> Any:
    if not name:
        return plain
    if isinstance(plain, Mapping):
        return plain.get(name)
    return None


def _walk(value: Any, label: str, depth: int) -> Iterator[tuple[str, Any]]:
    """Yield ``(label, item)`` for every item ``depth`` list levels down."""
    if depth == 0:
        yield label, value
        return
    if not isinstance(value, (list, tuple)):
        return
    for index, item in enumerate(value):
        yield from _walk(item, f"{label}[{index}]", depth - 1)


class Validator(ABC):
    """A single schema check."""

    before_decode: ClassVar[bool] = False
    requires_raw: ClassVar[bool] = False

    @abstractmethod
    def validate(self, raw: Any, plain: Any) -> Any:
        """Check the document and return ``plain``, possibly updated."""


@dataclass(frozen=True)
class RequiredValidator(Validator):
    """The property must be present in the raw object."""

    json_name: str
    decl_name: str

    before_decode: ClassVar[bool] = True

    def validate(self, raw: Any, plain: Any) -> Any:
        # A null container is allowed to lack its properties.
        if isinstance(raw, Mapping) and self.json_name not in raw:
            raise ValidationError(f"field {self.json_name} in {self.decl_name}: required")
        return plain


@dataclass(frozen=True)
class ReadOnlyValidator(Validator):
    """The property must not be present in the raw object."""

    json_name: str
    decl_name: str

    before_decode: ClassVar[bool] = True

    def validate(self, raw: Any, plain: Any) -> Any:
        if isinstance(raw, Mapping) and self.json_name in raw:
            raise ValidationError(f"field {self.json_name} in {self.decl_name}: read only")
        return plain


@dataclass(frozen=True)
class NullTypeValidator(Validator):
    """The value, or every item ``array_depth`` levels down, must be null."""

    json_name: str
    array_depth: int = 0

    requires_raw: ClassVar[bool] = True

    def validate(self, raw: Any, plain: Any) -> Any:
        value = _lookup(plain, self.json_name)
        for label, item in _walk(value, self.json_name, self.array_depth):
            if item is not None:
                raise ValidationError(f"field {label}: must be null")
        return plain


@dataclass(frozen=True)
class DefaultValidator(Validator):
    """Fill in a default value when the property is absent or null.

    With ``duration`` set the default is an ISO 8601 string and resolves to a
    :class:`~datetime.timedelta`. With ``object_factory`` set a mapping default
    is passed to the factory as keyword arguments in key order.
    """

    json_name: str
    default_value: Any
    duration: bool = False
    object_factory: Callable[..., Any] | None = None

    requires_raw: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if self.duration:
            self.resolve_default()

    def resolve_default(self) -> Any:
        """Return a fresh copy of the default value."""
        if self.duration:
            text = self.default_value
            if not isinstance(text, str):
                raise DefaultValueError(
                    "duration default value must be a string: "
                    f"{type(text).__name__} given"
                )
            if text == "":
                raise DefaultValueError("duration default value must not be an empty string")
            try:
                return parse_iso8601_duration(text)
            except ValueError as exc:
                raise DefaultValueError(
                    "could not convert duration from ISO8601 to a time span"
                ) from exc
        if self.object_factory is not None and isinstance(self.default_value, Mapping):
            fields = {key: copy.deepcopy(self.default_value[key]) for key in sorted(self.default_value)}
            return self.object_factory(**fields)
        return copy.deepcopy(self.default_value)

    def validate(self, raw: Any, plain: Any) -> Any:
        present = _lookup(raw, self.json_name) if self.json_name else (
            raw.get("") if isinstance(raw, Mapping) else None
        )
        if present is not None:
            return plain
        default = self.resolve_default()
        if not self.json_name:
            return default
        return {**(plain or {}), self.json_name: default}


@dataclass(frozen=True)
class ArrayValidator(Validator):
    """Bound the number of items of an array, or of nested arrays."""

    json_name: str
    array_depth: int = 1
    min_items: int = 0
    max_items: int = 0

    def validate(self, raw: Any, plain: Any) -> Any:
        if self.min_items == 0 and self.max_items == 0:
            return plain
        value = _lookup(plain, self.json_name)
        for label, items in _walk(value, self.json_name, max(self.array_depth - 1, 0)):
            if self.min_items and items is not None and len(items) < self.min_items:
                raise ValidationError(f"field {label} length: must be >= {self.min_items}")
            if self.max_items and items is not None and len(items) > self.max_items:
                raise ValidationError(f"field {label} length: must be <= {self.max_items}")
        return plain


@dataclass(frozen=True)
class StringValidator(Validator):
    """Check a string against a pattern and byte-length bounds.

    Lengths count UTF-8 bytes. ``field_name`` names the field in pattern
    errors; ``json_name`` names it in length errors and locates the value.
    """

    json_name: str
    field_name: str = ""
    min_length: int = 0
    max_length: int = 0
    nillable: bool = False
    pattern: str = ""

    def validate(self, raw: Any, plain: Any) -> Any:
        value = _lookup(plain, self.json_name)
        if value is None:
            if self.nillable:
                return plain
            value = ""
        if self.pattern and re.search(self.pattern, value) is None:
            raise ValidationError(
                f"field {self.field_name} pattern match: must match {self.pattern}"
            )
        length = len(value.encode("utf-8"))
        if self.min_length and length < self.min_length:
            raise ValidationError(
                f"field {self.json_name} length: must be >= {self.min_length}"
            )
        if self.max_length and length > self.max_length:
            raise ValidationError(
                f"field {self.json_name} length: must be <= {self.max_length}"
            )
        return plain


@dataclass(frozen=True)
class NumericValidator(Validator):
    """Check ``multipleOf`` and the (exclusive) minimum and maximum."""

    json_name: str
    nillable: bool = False
    multiple_of: float | None = None
    maximum: float | None = None
    exclusive_maximum: Any = None
    minimum: float | None = None
    exclusive_minimum: Any = None
    round_to_int: bool = False

    def _value_of(self, number: float) -> float | int:
        return int(number) if self.round_to_int else number

    def validate(self, raw: Any, plain: Any) -> Any:
        value = _lookup(plain, self.json_name)
        if value is None:
            if self.nillable:
                return plain
            value = 0
        if self.multiple_of is not None:
            self._check_multiple(value)
        bounds = normalize_bounds(
            self.minimum, self.maximum, self.exclusive_minimum, self.exclusive_maximum
        )
        self._check_bound(value, bounds.maximum, bounds.maximum_exclusive, "<")
        self._check_bound(value, bounds.minimum, bounds.minimum_exclusive, ">")
        return plain

    def _check_multiple(self, value: float) -> None:
        divisor = self._value_of(self.multiple_of)
        if self.round_to_int:
            failed = int(value) % divisor != 0
        else:
            remainder = math.fmod(value, divisor)
            failed = not (abs(remainder) < 1e-10 or abs(remainder - divisor) < 1e-10)
        if failed:
            shown = _format_number(float(f"{self.multiple_of:f}"))
            raise ValidationError(f"field {self.json_name}: must be a multiple of {shown}")

    def _check_bound(
        self, value: float, boundary: float | None, exclusive: bool, sign: str
    ) -> None:
        if boundary is None:
            return
        limit = self._value_of(boundary)
        if sign == "<":
            failed = limit <= value if exclusive else limit < value
        else:
            failed = limit >= value if exclusive else limit > value
        if failed:
            symbol = sign if exclusive else sign + "="
            raise ValidationError(
                f"field {self.json_name}: must be {symbol} {_format_number(limit)}"
            )


@dataclass(frozen=True)
class AnyOfValidator(Validator):
    """At least one of the alternatives must accept the raw document.

    Each alternative is called with the raw document and signals rejection
    by raising :class:`ValueError` or :class:`TypeError`.
    """

    alternatives: Sequence[Callable[[Any], Any]] = field(default_factory=tuple)

    before_decode: ClassVar[bool] = True

    def validate(self, raw: Any, plain: Any) -> Any:
        errors: list[Exception] = []
        for alternative in self.alternatives:
            try:
                alternative(raw)
            except (ValueError, TypeError) as exc:
                errors.append(exc)
        if len(errors) == len(self.alternatives):
            joined = "\n".join(str(error) for error in errors)
            raise ValidationError(f"all validators failed: {joined}")
        return plain