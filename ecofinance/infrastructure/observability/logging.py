"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from ecofinance.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_batch(
    request_id: str,
    owner_id: int,
    source: str,
    transaction_count: int,
    overall_score: int,
    duration_ms: float,
) -> None:
    """Log structured outcome of one scored batch"""
    logging.info(
        "Batch processed",
        extra={
            "request_id": request_id,
            "owner_id": owner_id,
            "step": "batch_complete",
            "source": source,
            "transaction_count": transaction_count,
            "overall_score": overall_score,
            "duration_ms": duration_ms,
        },
    )
