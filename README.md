# schemacheck

This package checks JSON Schema constraints while JSON or YAML documents are decoded.

`schemacheck` has three modules:

- `schemacheck.bounds` normalises numeric bounds.
- `schemacheck.validators` has one validator class for each schema keyword.
- `schemacheck.decoding` has decoders that run the validators in the right order while a document is loaded.

## Installation

```
pip install schemacheck
```

PyYAML is the only runtime dependency.

## Numeric bounds

`normalize_bounds(minimum, maximum, exclusive_minimum, exclusive_maximum)` combines the inclusive bounds with the exclusive ones. It returns a frozen `Bounds` dataclass with four fields: `minimum`, `maximum`, `minimum_exclusive` and `maximum_exclusive`.

It accepts both forms of the exclusive keywords:

- **Boolean form (draft 4).** A boolean marks the plain bound on that side as exclusive.
- **Numeric form.** A number replaces the plain bound only when it is more restrictive. It then counts as an exclusive bound.

`None` means the keyword is absent.

```python
from schemacheck.bounds import normalize_bounds

normalize_bounds(100.0, 200.0, 110.0, 190.0)
# Bounds(minimum=110.0, maximum=190.0, minimum_exclusive=True, maximum_exclusive=True)

normalize_bounds(100.0, 200.0, True, False)
# Bounds(minimum=100.0, maximum=200.0, minimum_exclusive=True, maximum_exclusive=False)
```

## Validators

Every validator subclasses `Validator` and has a method `validate(raw, plain)`:

- `raw` is the document as it was parsed.
- `plain` is the value being built from `raw`.

The method returns `plain`, which it may have updated. A validator that has `before_decode` set runs on the raw document alone.

When a constraint is violated, `validate` raises `ValidationError`, which is a subclass of `ValueError`.

| Class | Checks | Example message |
|---|---|---|
| `RequiredValidator(json_name, decl_name)` | the property is present, unless the container is null | `field myString in MaxLength: required` |
| `ReadOnlyValidator(json_name, decl_name)` | the property is absent | `field myReadOnlyString in ReadOnly: read only` |
| `NullTypeValidator(json_name, array_depth=0)` | the value is null, or every item `array_depth` list levels down is null | `field myNullArray[0]: must be null` |
| `ArrayValidator(json_name, array_depth=1, min_items=0, max_items=0)` | the item counts of the array, and of nested arrays when `array_depth` is greater than 1 | `field myNestedArray[1] length: must be >= 5` |
| `StringValidator(json_name, field_name="", min_length=0, max_length=0, nillable=False, pattern="")` | a regular-expression pattern, and the length in UTF-8 bytes | `field myString length: must be <= 5` |
| `NumericValidator(json_name, nillable=False, multiple_of=None, maximum=None, exclusive_maximum=None, minimum=None, exclusive_minimum=None, round_to_int=False)` | `multipleOf` and the normalised bounds | `field myNumber: must be < 1.2` |
| `AnyOfValidator(alternatives)` | at least one of the callables accepts the raw document | `all validators failed: ...` |

`AnyOfValidator` calls each alternative with the raw document. An alternative rejects the document by raising `ValueError` or `TypeError`.

### Defaults

`DefaultValidator(json_name, default_value, duration=False, object_factory=None)` fills in `default_value` when the property is missing or null. `resolve_default()` returns a fresh copy of the default:

- **`duration` set.** The default must be an ISO 8601 string such as `"PT20S"` and resolves to a `datetime.timedelta`. The string is checked when the validator is created. A non-string, an empty string or an unparsable string raises `DefaultValueError`.
- **`object_factory` set.** A mapping default is passed to the factory as keyword arguments.

`parse_iso8601_duration(text)` is also available on its own. It raises `ValueError` for malformed input.

```python
from schemacheck.validators import parse_iso8601_duration

parse_iso8601_duration("PT20S")   # datetime.timedelta(seconds=20)
```

### String helpers

`upper_first(text)` changes the case of the first character of a string to upper case. `lower_first(text)` changes it to lower case.

## Decoding documents

An `ObjectDecoder` decodes one object type. It takes these arguments:

| Argument | Meaning |
|---|---|
| `name` | the name of the type |
| `validators` | the validators to run |
| `properties` | maps each known property name to an optional decoder for its value |
| `additional_properties` | when set, unknown keys are moved into a mapping stored under the key `ADDITIONAL_PROPERTIES` (`"AdditionalProperties"`) |
| `object_only` | when cleared, documents that are not objects are also accepted |
| `factory` | builds the final value from the plain mapping |

The decoder does its work in this order:

1. It runs the validators that have `before_decode` set.
2. It builds the plain mapping.
3. It runs the other validators.
4. It collects additional properties, if `additional_properties` is set.
5. It calls `factory`, if one was given.

```python
from schemacheck.decoding import ObjectDecoder
from schemacheck.validators import RequiredValidator, StringValidator

decoder = ObjectDecoder(
    name="MaxLength",
    validators=(
        RequiredValidator("myString", "MaxLength"),
        StringValidator("myString", field_name="MyString", max_length=5),
    ),
    properties={"myString": None},
)

decoder.load_json('{"myString": "hi"}')   # {'myString': 'hi'}
decoder.load_json('{}')                   # ValidationError: field myString in MaxLength: required
```

An `EnumDecoder(name, values, value_type=None, factory=None)` accepts only values that are deeply equal to one of `values`. Booleans never match numbers. Any other value raises `ValidationError` with a message that begins `invalid value (expected one of`.

Both decoders have three methods:

- `decode(data)` for data that has already been parsed.
- `load_json(text)` for JSON text.
- `load_yaml(text)` for YAML text. YAML is read with `yaml.safe_load`.

`DecodeError` is a subclass of `ValueError`. It is raised in these cases:

- The JSON or YAML text is malformed.
- An object decoder receives a document that is not an object while `object_only` is set.
- The value has the wrong type for an enum's `value_type`.
- The factory raises `TypeError`.

Constraint violations raise `ValidationError`, not `DecodeError`.

## What this package does not do

This package does not read schema files. It does not generate types or code from a schema, and it has no command-line tool. You build the validators and decoders for each type yourself, from the keywords of your schema.

## Running the tests

```
pip install -e .[test]
pytest
```