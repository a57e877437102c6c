from __future__ import annotations

from typing import TypeVar

import httpx

from decodable.config import load_decodable_settings
from decodable.decoding import Decoder, sequence_decoder
from decodable.json_utils import load_json_bytes

T = TypeVar("T")


def decode_response(response: httpx.Response, decoder: Decoder[T]) -> T:
    """Parse the response body as JSON and apply ``decoder``.

    Raises InvalidJsonError for a malformed body and DecodeError when the
    parsed body does not fit the decoder. The status code is not inspected.
    """
    return decoder(load_json_bytes(response.content))


def decode_response_sequence(
    response: httpx.Response,
    element_decoder: Decoder[T],
    *,
    ignore_invalid_objects: bool | None = None,
) -> list[T]:
    """Decode a JSON array body element by element.

    When ``ignore_invalid_objects`` is None the DECODING__IGNORE_INVALID_OBJECTS
    setting decides.
    """
    ignore = (
        ignore_invalid_objects
        if ignore_invalid_objects is not None
        else load_decodable_settings()["decoding"]["ignore_invalid_objects"]
    )
    return decode_response(
        response, sequence_decoder(element_decoder, ignore_invalid_objects=ignore)
    )


__all__ = ["decode_response", "decode_response_sequence"]
