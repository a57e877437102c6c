from __future__ import annotations

from .dates import decode_datetime, short_representation
from .decoding import (
    Decodable,
    Decoder,
    cast_value,
    decode_json_array,
    decode_json_object,
    decode_mapping,
    decode_sequence,
    mapping_decoder,
    optional_decoder,
    sequence_decoder,
)
from .json_utils import (
    DecodeError,
    InvalidJsonError,
    JSONObject,
    JSONValue,
    TypeMismatchError,
    load_json_bytes,
    load_json_str,
    narrow_json_to_bool,
    narrow_json_to_dict,
    narrow_json_to_float,
    narrow_json_to_int,
    narrow_json_to_list,
    narrow_json_to_str,
    optional_field,
    require_field,
)

__all__ = [
    "Decodable",
    "DecodeError",
    "Decoder",
    "InvalidJsonError",
    "JSONObject",
    "JSONValue",
    "TypeMismatchError",
    "cast_value",
    "decode_datetime",
    "decode_json_array",
    "decode_json_object",
    "decode_mapping",
    "decode_sequence",
    "load_json_bytes",
    "load_json_str",
    "mapping_decoder",
    "narrow_json_to_bool",
    "narrow_json_to_dict",
    "narrow_json_to_float",
    "narrow_json_to_int",
    "narrow_json_to_list",
    "narrow_json_to_str",
    "optional_decoder",
    "optional_field",
    "require_field",
    "sequence_decoder",
    "short_representation",
]
