"""Structured Logger, compatible with CloudWatch Logs JSON ingestion."""

import json
import logging
from datetime import datetime, timezone
from typing import Any


class AppLogger:
    """Structured JSON logger; every call emits one JSON line on stderr."""

    def __init__(self, name: str = "BedrockQuotaGuard", debug: bool = False) -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if debug else logging.INFO)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)
            self.logger.propagate = False

    def _log(self, level: int, msg: str, **kwargs: Any) -> None:
        log_entry = {
            "message": msg,
            "time": datetime.now(timezone.utc).isoformat(),
            **kwargs,
        }
        self.logger.log(level, log_entry)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, **kwargs)


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = (
            dict(record.msg)
            if isinstance(record.msg, dict)
            else {"message": record.getMessage()}
        )
        log_record.setdefault("level", record.levelname)
        log_record.setdefault("logger", record.name)
        log_record.setdefault("time", datetime.now(timezone.utc).isoformat())
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        # Non-serialisable extras (e.g. Decimal from boto3) fall back to str
        return json.dumps(log_record, default=str)
