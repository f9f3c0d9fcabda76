"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from airdrop_estimator.config import settings


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

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_estimate(
    request_id: str,
    current_share: Optional[float],
    remaining_days: int,
    price_available: bool,
    duration_ms: float,
) -> None:
    """Log structured allocation estimate outcome"""
    logging.info(
        "Estimate completed",
        extra={
            "request_id": request_id,
            "step": "estimate_complete",
            "outcome": "estimated" if current_share is not None else "insufficient_data",
            "current_share": current_share,
            "remaining_days": remaining_days,
            "price_available": price_available,
            "duration_ms": duration_ms,
        },
    )


def log_score(request_id: str, version: str, total: int, rule_count: int, duration_ms: float) -> None:
    """Log structured scoring outcome"""
    logging.info(
        "Score completed",
        extra={
            "request_id": request_id,
            "step": "score_complete",
            "config_version": version,
            "total": total,
            "rule_count": rule_count,
            "duration_ms": duration_ms,
        },
    )
