"""Log setup for the service and uvicorn: one line per record, context fields as JSON."""
import json
import logging
import logging.config

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "color_message",
    "taskName",
}


def context_fields(record: logging.LogRecord) -> dict:
    """Fields passed through ``extra=`` on the logging call."""
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRIBUTES}


class ContextFormatter(logging.Formatter):
    """Append a record's context fields to the formatted line as sorted JSON."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = context_fields(record)
        if fields:
            line += " | " + json.dumps(fields, default=str, sort_keys=True)
        return line


def configure_logging(level: str = "INFO") -> None:
    """Route the root and uvicorn loggers through ContextFormatter."""
    level = level.upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "context": {"()": ContextFormatter, "fmt": LOG_FORMAT},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "context"},
        },
        "root": {"handlers": ["console"], "level": level},
        "loggers": {
            "uvicorn": {"handlers": ["console"], "level": level, "propagate": False},
            "uvicorn.access": {"handlers": ["console"], "level": level, "propagate": False},
        },
    })
