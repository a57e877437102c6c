"""Decoder contract and derived container decoders.

A decoder is any callable taking a parsed JSON value and returning a typed
value, raising ``DecodeError`` when the value has the wrong shape. Classes
become decodable by exposing a ``decode`` classmethod of that shape; the
helpers here derive list and dict decoders from element decoders.

Example:
    >>> from decodable.decoding import mapping_decoder, sequence_decoder
    >>> from decodable.json_utils import narrow_json_to_int, narrow_json_to_str
    >>> sequence_decoder(narrow_json_to_int, ignore_invalid_objects=True)([1, 2, "x"])
    [1, 2]
    >>> mapping_decoder(key=narrow_json_to_str, value=narrow_json_to_int)({"a": 1})
    {'a': 1}
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Protocol, Self, TypeVar

from decodable.json_utils import (
    DecodeError,
    JSONValue,
    cast_value,
    narrow_json_to_dict,
    narrow_json_to_list,
)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
D = TypeVar("D", bound="Decodable")
KD = TypeVar("KD", bound="Decodable")

Decoder = Callable[[JSONValue], T]


class Decodable(Protocol):
    """A type that can construct itself from a parsed JSON value."""

    @classmethod
    def decode(cls, value: JSONValue) -> Self: ...


# Container leaf decoders, both strict casts through cast_value.
decode_json_object = narrow_json_to_dict
decode_json_array = narrow_json_to_list


def sequence_decoder(
    element_decoder: Decoder[T], *, ignore_invalid_objects: bool = False
) -> Decoder[list[T]]:
    """Derive a list decoder from an element decoder.

    The input must be a JSON array; otherwise the cast error is raised
    regardless of ``ignore_invalid_objects``.

    Args:
        element_decoder: Decoder applied to each element in order
        ignore_invalid_objects: If False (default), the first element failure
            is raised and no partial result is returned. If True, elements
            whose decoder raises DecodeError are dropped and the remaining
            elements keep their relative order.
    """

    def _decode(value: JSONValue) -> list[T]:
        items = decode_json_array(value)
        if not ignore_invalid_objects:
            return [element_decoder(item) for item in items]
        decoded: list[T] = []
        for item in items:
            try:
                element = element_decoder(item)
            except DecodeError:
                continue
            decoded.append(element)
        return decoded

    return _decode


def mapping_decoder(*, key: Decoder[K], value: Decoder[V]) -> Decoder[dict[K, V]]:
    """Derive a dict decoder from a key decoder and a value decoder.

    Entries are visited in insertion order of the input object. The first key
    or value failure is raised. When two input keys decode to the same key the
    later entry wins.
    """

    def _decode(raw: JSONValue) -> dict[K, V]:
        entries = decode_json_object(raw)
        decoded: dict[K, V] = {}
        for raw_key, raw_value in entries.items():
            decoded_key = key(raw_key)
            decoded_value = value(raw_value)
            decoded[decoded_key] = decoded_value
        return decoded

    return _decode


def optional_decoder(decoder: Decoder[T]) -> Decoder[T | None]:
    """Wrap ``decoder`` so that JSON null decodes to None."""

    def _decode(value: JSONValue) -> T | None:
        if value is None:
            return None
        return decoder(value)

    return _decode


def decode_sequence(
    element_type: type[D], value: JSONValue, *, ignore_invalid_objects: bool = False
) -> list[D]:
    """Decode a JSON array of ``element_type`` values."""
    decode = sequence_decoder(element_type.decode, ignore_invalid_objects=ignore_invalid_objects)
    return decode(value)


def decode_mapping(key_type: type[KD], value_type: type[D], value: JSONValue) -> dict[KD, D]:
    """Decode a JSON object whose keys and values are decodable types."""
    decode = mapping_decoder(key=key_type.decode, value=value_type.decode)
    return decode(value)


__all__ = [
    "Decodable",
    "Decoder",
    "cast_value",
    "decode_json_array",
    "decode_json_object",
    "decode_mapping",
    "decode_sequence",
    "mapping_decoder",
    "optional_decoder",
    "sequence_decoder",
]
