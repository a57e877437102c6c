from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from json import JSONDecodeError
from typing import Protocol, TypeVar

JSONValue = dict[str, "JSONValue"] | list["JSONValue"] | str | int | float | bool | None
JSONObject = dict[str, JSONValue]

# Input type for dump_json_str: TypedDicts (via Mapping), mixed dict literals,
# primitives and sequences.
_JSONInputValue = str | int | float | bool | None | Mapping[str, object] | Sequence[object]

T = TypeVar("T")

_NoneType = type(None)

_JSON_LABELS: dict[type[object], str] = {
    dict: "JSON object",
    list: "JSON array",
    str: "JSON string",
    bool: "JSON boolean",
    int: "JSON integer",
    float: "JSON number",
    _NoneType: "JSON null",
}


def describe_type(tp: type[object]) -> str:
    """Return the JSON label for a builtin JSON type, else the type name."""
    label = _JSON_LABELS.get(tp)
    if label is not None:
        return label
    return tp.__name__


class InvalidJsonError(ValueError):
    """Raised when JSON parsing fails."""


class DecodeError(TypeError):
    """Base class for failures while decoding a parsed JSON value."""


class TypeMismatchError(DecodeError):
    """Raised when a value's runtime type does not match the expected type.

    Attributes:
        expected: The type the decoder required
        actual: The runtime type of the offending value
        message: Human-readable description
    """

    def __init__(
        self,
        *,
        expected: type[object],
        actual: type[object],
        message: str | None = None,
    ) -> None:
        text = (
            message
            if message is not None
            else f"Expected {describe_type(expected)}, got {actual.__name__}"
        )
        super().__init__(text)
        self.expected = expected
        self.actual = actual
        self.message = text


class _JsonLoads(Protocol):
    def __call__(self, s: str) -> JSONValue: ...


class _JsonDumps(Protocol):
    def __call__(
        self,
        obj: _JSONInputValue,
        *,
        separators: tuple[str, str] | None = ...,
        indent: int | None = ...,
    ) -> str: ...


def _default_json_loads(s: str) -> JSONValue:
    module = __import__("json")
    loads: _JsonLoads = module.loads
    return loads(s)


# Hook for JSON parsing. Tests can override to exercise the result check.
_json_loads: Callable[[str], JSONValue] = _default_json_loads


def dump_json_str(
    value: _JSONInputValue, *, compact: bool = True, indent: int | None = None
) -> str:
    """Serialize a JSON-compatible value to a JSON string.

    Args:
        value: JSON-serializable value
        compact: If True (default), produce compact JSON without extra whitespace.
                 Ignored if indent is specified.
        indent: If specified, pretty-print with this many spaces of indentation.
    """
    module = __import__("json")
    dumps: _JsonDumps = module.dumps
    if indent is not None:
        return dumps(value, separators=None, indent=indent)
    if compact:
        return dumps(value, separators=(",", ":"), indent=None)
    return dumps(value, separators=None, indent=None)


def load_json_str(raw: str) -> JSONValue:
    try:
        value = _json_loads(raw)
    except JSONDecodeError as exc:
        raise InvalidJsonError("Invalid JSON payload") from exc
    if isinstance(value, (dict, list, str, int, float, bool)) or value is None:
        return value
    raise InvalidJsonError("Invalid JSON payload")


def load_json_bytes(raw: bytes) -> JSONValue:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidJsonError("Invalid JSON payload") from exc
    return load_json_str(text)


# -----------------------------------------------------------------------------
# Leaf decoders - narrow a JSONValue to one primitive shape
# -----------------------------------------------------------------------------


def cast_value(value: object, expected: type[T]) -> T:
    """Return ``value`` unchanged if its runtime type matches ``expected``.

    Matching is ``isinstance`` except that bool never counts as int or float.
    No conversion is attempted: an int does not satisfy float.

    Raises TypeMismatchError carrying the expected and actual types.
    """
    if isinstance(value, bool) and (expected is int or expected is float):
        raise TypeMismatchError(expected=expected, actual=bool)
    if not isinstance(value, expected):
        raise TypeMismatchError(expected=expected, actual=type(value))
    return value


def narrow_json_to_dict(value: JSONValue) -> dict[str, JSONValue]:
    obj: dict[str, JSONValue] = cast_value(value, dict)
    return obj


def narrow_json_to_list(value: JSONValue) -> list[JSONValue]:
    items: list[JSONValue] = cast_value(value, list)
    return items


def narrow_json_to_str(value: JSONValue) -> str:
    return cast_value(value, str)


def narrow_json_to_int(value: JSONValue) -> int:
    """Narrow JSONValue to int; bool is rejected."""
    return cast_value(value, int)


def narrow_json_to_float(value: JSONValue) -> float:
    """Narrow JSONValue to float, widening JSON integers.

    Raises TypeMismatchError for anything that is not a number, bool included.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return cast_value(value, float)


def narrow_json_to_bool(value: JSONValue) -> bool:
    return cast_value(value, bool)


# -----------------------------------------------------------------------------
# Field extraction helpers - decode fields of JSON objects
# -----------------------------------------------------------------------------


def require_field(obj: JSONObject, key: str, decoder: Callable[[JSONValue], T]) -> T:
    """Decode a required field with ``decoder``.

    A missing or null field raises TypeMismatchError. Failures from the
    decoder are re-raised with the field name in the message.
    """
    value = obj.get(key)
    if value is None:
        raise TypeMismatchError(
            expected=object,
            actual=_NoneType,
            message=f"Missing required field '{key}'",
        )
    return _decode_field(key, value, decoder)


def optional_field(obj: JSONObject, key: str, decoder: Callable[[JSONValue], T]) -> T | None:
    """Decode an optional field with ``decoder``.

    Returns None if the field is missing or null.
    """
    value = obj.get(key)
    if value is None:
        return None
    return _decode_field(key, value, decoder)


def _decode_field(key: str, value: JSONValue, decoder: Callable[[JSONValue], T]) -> T:
    try:
        return decoder(value)
    except TypeMismatchError as exc:
        raise TypeMismatchError(
            expected=exc.expected,
            actual=exc.actual,
            message=f"Field '{key}': {exc.message}",
        ) from exc


def require_str(obj: JSONObject, key: str) -> str:
    return require_field(obj, key, narrow_json_to_str)


def require_int(obj: JSONObject, key: str) -> int:
    return require_field(obj, key, narrow_json_to_int)


def require_float(obj: JSONObject, key: str) -> float:
    return require_field(obj, key, narrow_json_to_float)


def require_bool(obj: JSONObject, key: str) -> bool:
    return require_field(obj, key, narrow_json_to_bool)


def require_list(obj: JSONObject, key: str) -> list[JSONValue]:
    return require_field(obj, key, narrow_json_to_list)


def require_dict(obj: JSONObject, key: str) -> JSONObject:
    return require_field(obj, key, narrow_json_to_dict)


def optional_str(obj: JSONObject, key: str) -> str | None:
    return optional_field(obj, key, narrow_json_to_str)


def optional_int(obj: JSONObject, key: str) -> int | None:
    return optional_field(obj, key, narrow_json_to_int)


def optional_float(obj: JSONObject, key: str) -> float | None:
    return optional_field(obj, key, narrow_json_to_float)


__all__ = [
    "DecodeError",
    "InvalidJsonError",
    "JSONObject",
    "JSONValue",
    "TypeMismatchError",
    "cast_value",
    "describe_type",
    "dump_json_str",
    "load_json_bytes",
    "load_json_str",
    "narrow_json_to_bool",
    "narrow_json_to_dict",
    "narrow_json_to_float",
    "narrow_json_to_int",
    "narrow_json_to_list",
    "narrow_json_to_str",
    "optional_field",
    "optional_float",
    "optional_int",
    "optional_str",
    "require_bool",
    "require_dict",
    "require_field",
    "require_float",
    "require_int",
    "require_list",
    "require_str",
]
