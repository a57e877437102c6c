from __future__ import annotations

import io
import sys

from decodable.json_utils import load_json_str
from decodable.logging import (
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
    stdlib_logging,
)
from decodable.request_context import request_id_var


def _record(msg: str, level: int = stdlib_logging.INFO) -> stdlib_logging.LogRecord:
    return stdlib_logging.LogRecord(
        name="decodable.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_basic() -> None:
    formatter = JsonFormatter(static_fields={}, extra_field_names=[])
    parsed = load_json_str(formatter.format(_record("decoded")))
    assert type(parsed) is dict
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "decodable.test"
    assert parsed["message"] == "decoded"
    assert "timestamp" in parsed
    assert "request_id" not in parsed


def test_json_formatter_static_and_extra_fields() -> None:
    formatter = JsonFormatter(
        static_fields={"service": "orders-api", "instance_id": "host-1"},
        extra_field_names=["entity"],
    )
    record = _record("user_error", stdlib_logging.WARNING)
    record.entity = "Repository"
    record.error_code = "INVALID_INPUT"
    record.path = "/repos"
    record.unrelated = object()
    parsed = load_json_str(formatter.format(record))
    assert type(parsed) is dict
    assert parsed["service"] == "orders-api"
    assert parsed["instance_id"] == "host-1"
    assert parsed["entity"] == "Repository"
    assert parsed["error_code"] == "INVALID_INPUT"
    assert parsed["path"] == "/repos"
    assert "unrelated" not in parsed


def test_json_formatter_skips_non_json_extra() -> None:
    formatter = JsonFormatter(static_fields={}, extra_field_names=["payload"])
    record = _record("x")
    record.payload = {"nested": "dict"}
    parsed = load_json_str(formatter.format(record))
    assert type(parsed) is dict
    assert "payload" not in parsed


def test_json_formatter_includes_request_id() -> None:
    formatter = JsonFormatter(static_fields={}, extra_field_names=[])
    token = request_id_var.set("req-42")
    try:
        parsed = load_json_str(formatter.format(_record("x")))
    finally:
        request_id_var.reset(token)
    assert type(parsed) is dict
    assert parsed["request_id"] == "req-42"


def test_json_formatter_exc_info() -> None:
    formatter = JsonFormatter(static_fields={}, extra_field_names=[])
    try:
        raise ValueError("bad value")
    except ValueError:
        record = _record("failed", stdlib_logging.ERROR)
        record.exc_info = sys.exc_info()
    parsed = load_json_str(formatter.format(record))
    assert type(parsed) is dict
    exc_text = parsed["exc_info"]
    assert isinstance(exc_text, str)
    assert "ValueError: bad value" in exc_text


def test_text_formatter() -> None:
    formatter = TextFormatter(extra_fields=["entity", "missing"])
    record = _record("decoded")
    record.entity = "Repository"
    line = formatter.format(record)
    assert "[INFO]" in line
    assert "[decodable.test]" in line
    assert "entity=Repository" in line
    assert "missing=" not in line
    assert line.endswith("decoded")


def test_text_formatter_skips_non_scalar_fields() -> None:
    formatter = TextFormatter(extra_fields=["entity", "count", "payload"])
    record = _record("decoded")
    record.entity = "Repository"
    record.count = 3
    record.payload = {"stars": 1}
    line = formatter.format(record)
    assert "entity=Repository" in line
    assert "count=3" in line
    assert "payload=" not in line


def test_setup_logging_json_handler() -> None:
    root = setup_logging(
        level="DEBUG",
        format_mode="json",
        service_name="orders-api",
        instance_id="inst-1",
        extra_fields=None,
    )
    assert root.level == stdlib_logging.DEBUG
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, stdlib_logging.StreamHandler)
    buf = io.StringIO()
    handler.setStream(buf)
    get_logger("decodable.test").info("ready")
    parsed = load_json_str(buf.getvalue())
    assert type(parsed) is dict
    assert parsed["service"] == "orders-api"
    assert parsed["instance_id"] == "inst-1"
    assert parsed["message"] == "ready"


def test_setup_logging_generates_instance_id() -> None:
    root = setup_logging(
        level="INFO",
        format_mode="json",
        service_name="svc",
        instance_id=None,
        extra_fields=["entity"],
    )
    formatter = root.handlers[0].formatter
    assert isinstance(formatter, JsonFormatter)
    parsed = load_json_str(formatter.format(_record("x")))
    assert type(parsed) is dict
    instance_id = parsed["instance_id"]
    assert isinstance(instance_id, str)
    assert "-" in instance_id


def test_setup_logging_clears_previous_handlers() -> None:
    setup_logging(
        level="INFO", format_mode="text", service_name="a", instance_id="1", extra_fields=None
    )
    root = setup_logging(
        level="ERROR", format_mode="text", service_name="b", instance_id="2", extra_fields=None
    )
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, TextFormatter)
    assert stdlib_logging.getLogger("httpx").level == stdlib_logging.WARNING
