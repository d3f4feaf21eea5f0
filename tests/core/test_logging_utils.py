import json
import logging

from core.logging_utils import JSONFormatter, configure_logging


def test_json_formatter_single_line():
    rec = logging.LogRecord(
        "professor.chat", logging.ERROR, __file__, 1, "failed %s", ("s1",), None
    )
    data = json.loads(JSONFormatter().format(rec))
    assert data["level"] == "ERROR"
    assert data["logger"] == "professor.chat"
    assert data["msg"] == "failed s1"


def test_configure_logging_levels():
    root = logging.getLogger()
    prev_handlers, prev_level = root.handlers[:], root.level
    try:
        logger = configure_logging("warn", "text")
        assert logger.name == "professor"
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)
        configure_logging("debug", "json")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.handlers[:] = prev_handlers
        root.setLevel(prev_level)
