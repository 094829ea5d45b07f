"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger.json import JsonFormatter

from msme_dashboard.config import settings


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_portfolio_load(
    request_id: str,
    outcome: str,
    record_count: int,
    duration_ms: float,
    error: str | None = None,
) -> None:
    """Log structured portfolio load outcome"""
    extra = {
        "request_id": request_id,
        "step": "portfolio_load_complete",
        "load_outcome": outcome,
        "record_count": record_count,
        "duration_ms": duration_ms,
    }
    if error is None:
        logging.info("Portfolio loaded", extra=extra)
    else:
        logging.warning("Portfolio load failed", extra={**extra, "error": error})
