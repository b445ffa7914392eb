from __future__ import annotations

import json
import logging

from glass.telemetry.logging_setup import JsonFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("glass.sources.crypto", logging.WARNING, __file__, 10, "Source fetch failed", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_should_include_extra_fields() -> None:
    line = JsonFormatter().format(_record(source="crypto", status_code=500))
    payload = json.loads(line)

    assert payload["level"] == "WARNING"
    assert payload["name"] == "glass.sources.crypto"
    assert payload["message"] == "Source fetch failed"
    assert payload["source"] == "crypto"
    assert payload["status_code"] == 500
    assert payload["timestamp"].endswith("+00:00")
    assert "lineno" not in payload


def test_json_formatter_should_repr_unserializable_values() -> None:
    payload = json.loads(JsonFormatter().format(_record(when=object())))
    assert payload["when"].startswith("<object object")


def test_configure_logging_should_write_json_lines(tmp_path) -> None:
    logger = configure_logging(log_dir=tmp_path, level="debug", stream=False)
    logging.getLogger("glass.team").info("Selection rejected", extra={"reason": "capacity_exceeded"})
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "glass_current.jsonl").read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]

    assert logger.propagate is False
    assert logger.level == logging.DEBUG
    assert records[-1]["message"] == "Selection rejected"
    assert records[-1]["reason"] == "capacity_exceeded"


def test_configure_logging_should_replace_previous_handlers(tmp_path) -> None:
    configure_logging(log_dir=tmp_path, stream=True)
    logger = configure_logging(log_dir=tmp_path, stream=False)
    assert len(logger.handlers) == 1
