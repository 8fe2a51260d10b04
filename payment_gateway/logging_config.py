"""JSON logging with card-number redaction.

Every record passes through ``RedactingFilter`` before a handler writes it,
so a PAN that slips into a message or its arguments is masked to its last
four digits.
"""
import json
import logging
import re
import sys
import traceback
from datetime import datetime, timezone

# 13-19 digits, optionally grouped with spaces or dashes
PAN_PATTERN = re.compile(r"(?<!\d)(?:\d[ -]?){12,18}\d(?!\d)")

EXTRA_FIELDS = ("order_id", "error_kind", "error")


def _mask(match: re.Match) -> str:
    digits = re.sub(r"\D", "", match.group())
    return "*" * (len(digits) - 4) + digits[-4:]


def redact(text: str) -> str:
    return PAN_PATTERN.sub(_mask, text)


class RedactingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact(record.getMessage())
        record.args = None
        for field in EXTRA_FIELDS:
            value = getattr(record, field, None)
            if isinstance(value, str):
                setattr(record, field, redact(value))
        return True


class JSONFormatter(logging.Formatter):
    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": self.service_name,
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
        }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_obj[field] = getattr(record, field)

        if record.exc_info:
            log_obj["exception"] = redact("".join(traceback.format_exception(*record.exc_info)))

        return json.dumps(log_obj, default=str)


def setup_logging(service_name: str, level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger()
    logger.setLevel(level)

    # clear existing handlers
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter(service_name))
    handler.addFilter(RedactingFilter())
    logger.addHandler(handler)

    return logging.getLogger(service_name)
