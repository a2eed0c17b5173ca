"""Tests for the log formatter and setup."""
import json
import logging
from ledger.logging_config import LOG_FORMAT, ContextFormatter, configure_logging, context_fields


def _record(**extra):
    record = logging.LogRecord("ledger.test", logging.INFO, __file__, 1, "Transaction created", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_context_fields_only_returns_extras():
    assert context_fields(_record(transaction_id=7)) == {"transaction_id": 7}
    assert context_fields(_record()) == {}


def test_context_fields_appended_as_sorted_json():
    formatted = ContextFormatter(LOG_FORMAT).format(_record(type="Income", transaction_id=7))
    message, suffix = formatted.split("Transaction created | ")
    assert suffix == '{"transaction_id": 7, "type": "Income"}'
    assert json.loads(suffix) == {"transaction_id": 7, "type": "Income"}


def test_no_suffix_without_context():
    formatted = ContextFormatter(LOG_FORMAT).format(_record())
    assert formatted.endswith("Transaction created")


def test_configure_logging_installs_formatter():
    configure_logging("debug")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h.formatter, ContextFormatter) for h in root.handlers)
    assert logging.getLogger("uvicorn").propagate is False

    configure_logging("INFO")
