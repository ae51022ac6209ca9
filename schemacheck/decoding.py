"""Decoding of JSON and YAML documents into schema-checked values.

An :class:`ObjectDecoder` decodes one object type. It runs the same two-stage
procedure for both formats:

1. the validators marked ``before_decode`` inspect the raw document;
2. the document is turned into a plain mapping, and nested values are
   decoded by the property decoders;
3. the remaining validators check, and may fill in, the plain mapping;
4. unknown properties are collected when the type allows them;
5. the optional factory builds the final value.

An :class:`EnumDecoder` accepts only one of a fixed list of values.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import yaml

from .validators import ValidationError, Validator

__all__ = ["ADDITIONAL_PROPERTIES", "DecodeError", "ObjectDecoder", "EnumDecoder"]

ADDITIONAL_PROPERTIES = "AdditionalProperties"


class DecodeError(ValueError):
    """A document cannot be read or has the wrong shape."""


def _load_json(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc


def _load_yaml(text: str | bytes) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DecodeError(f"invalid YAML: {exc}") from exc


def _same(left: Any, right: Any) -> bool:
    """Compare like a strict deep equality: booleans never equal numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return left.keys() == right.keys() and all(_same(left[k], right[k]) for k in left)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(_same(a, b) for a, b in zip(left, right))
    return left == right


@dataclass(frozen=True)
class ObjectDecoder:
    """Decode and validate one object type.

    ``properties`` maps property names to an optional decoder for the
    property's value; non-null values of those properties are passed through
    it. Properties not listed are kept as they are unless
    ``additional_properties`` is set, in which case they are moved into a
    mapping stored under :data:`ADDITIONAL_PROPERTIES`. With ``object_only``
    cleared, the decoder also accepts non-object documents, which lets it
    validate a primitive type defined on its own.
    """

    name: str
    validators: Sequence[Validator] = field(default_factory=tuple)
    properties: Mapping[str, Callable[[Any], Any] | None] = field(default_factory=dict)
    additional_properties: bool = False
    object_only: bool = True
    factory: Callable[[Any], Any] | None = None

    def _plain(self, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return copy.deepcopy(data)
        plain: dict[str, Any] = {}
        for key, value in data.items():
            decoder = self.properties.get(key)
            if decoder is not None and value is not None:
                plain[key] = decoder(value)
            else:
                plain[key] = copy.deepcopy(value)
        return plain

    def _collect_additional(self, plain: Any) -> Any:
        if plain is None:
            return {ADDITIONAL_PROPERTIES: {}}
        if not isinstance(plain, Mapping):
            return plain
        known = {key: value for key, value in plain.items() if key in self.properties}
        extra = {key: value for key, value in plain.items() if key not in self.properties}
        return {**known, ADDITIONAL_PROPERTIES: extra}

    def decode(self, data: Any) -> Any:
        """Validate an already parsed document and return the decoded value."""
        if self.object_only and data is not None and not isinstance(data, Mapping):
            raise DecodeError(f"cannot decode {type(data).__name__} into {self.name}")
        raw = data
        for validator in self.validators:
            if validator.before_decode:
                validator.validate(raw, None)
        plain = self._plain(data)
        for validator in self.validators:
            if not validator.before_decode:
                plain = validator.validate(raw, plain)
        if self.additional_properties:
            plain = self._collect_additional(plain)
        if self.factory is None:
            return plain
        try:
            return self.factory(plain)
        except TypeError as exc:
            raise DecodeError(f"cannot build {self.name}: {exc}") from exc

    def load_json(self, text: str | bytes) -> Any:
        """Parse a JSON document and decode it."""
        return self.decode(_load_json(text))

    def load_yaml(self, text: str | bytes) -> Any:
        """Parse a YAML document and decode it."""
        return self.decode(_load_yaml(text))


@dataclass(frozen=True)
class EnumDecoder:
    """Accept only values equal to one of ``values``.

    ``value_type`` restricts the accepted Python types before the comparison;
    ``factory`` turns an accepted value into the final one.
    """

    name: str
    values: Sequence[Any]
    value_type: type | tuple[type, ...] | None = None
    factory: Callable[[Any], Any] | None = None

    def decode(self, value: Any) -> Any:
        """Check ``value`` against the allowed values and return it."""
        if self.value_type is not None:
            wrong_bool = isinstance(value, bool) and not (
                bool in (self.value_type if isinstance(self.value_type, tuple) else (self.value_type,))
            )
            if wrong_bool or not isinstance(value, self.value_type):
                raise DecodeError(f"cannot decode {value!r} into {self.name}")
        if not any(_same(value, expected) for expected in self.values):
            raise ValidationError(
                f"invalid value (expected one of {list(self.values)!r}): {value!r}"
            )
        return value if self.factory is None else self.factory(value)

    def load_json(self, text: str | bytes) -> Any:
        """Parse a JSON document and decode it."""
        return self.decode(_load_json(text))

    def load_yaml(self, text: str | bytes) -> Any:
        """Parse a YAML document and decode it."""
        return self.decode(_load_yaml(text))