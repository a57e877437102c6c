from __future__ import annotations

import re
from datetime import datetime

from decodable.json_utils import JSONValue, TypeMismatchError, narrow_json_to_str

# ISO 8601 date and full time with a mandatory UTC designator or offset,
# e.g. 2016-05-01T12:00:00Z or 2016-05-01T12:00:00.250+02:00.
_ISO8601_FULL_TIME = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?(?:Z|[+-]\d{2}:\d{2})",
    re.ASCII,
)

SHORT_FORMAT = "%d/%m/%Y"


def decode_datetime(value: JSONValue) -> datetime:
    """Decode an ISO 8601 full-time string into an aware datetime.

    Non-strings raise TypeMismatchError expecting str. Strings outside the
    format, including impossible dates, raise TypeMismatchError expecting
    datetime.
    """
    text = narrow_json_to_str(value)
    if _ISO8601_FULL_TIME.fullmatch(text) is None:
        raise TypeMismatchError(
            expected=datetime,
            actual=str,
            message=f"Expected ISO 8601 date-time, got {text!r}",
        )
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise TypeMismatchError(
            expected=datetime,
            actual=str,
            message=f"Expected ISO 8601 date-time, got {text!r}",
        ) from exc


def short_representation(moment: datetime) -> str:
    """Format as dd/mm/yyyy."""
    return moment.strftime(SHORT_FORMAT)


__all__ = ["SHORT_FORMAT", "decode_datetime", "short_representation"]
