import json
import logging

from tracker.api.logging_config import _JsonFormatter, configure_logging
from tracker.api.request_context import REQUEST_ID, RequestIdFilter


def test_json_formatter_includes_request_id():
    record = logging.LogRecord("tracker.test", logging.INFO, __file__, 1, "pass done %s", ("ok",), None)
    token = REQUEST_ID.set("rid-1")
    try:
        RequestIdFilter().filter(record)
    finally:
        REQUEST_ID.reset(token)
    payload = json.loads(_JsonFormatter().format(record))
    assert payload["message"] == "pass done ok"
    assert payload["request_id"] == "rid-1"
    assert payload["level"] == "INFO"


def test_configure_logging_honours_env(monkeypatch):
    monkeypatch.setenv("LOG_FORMAT", "json")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, _JsonFormatter)
    finally:
        for h in root.handlers[:]:
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
