"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from gym_billing.config import settings


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


def log_seed_summary(
    run_date: str,
    plans: int,
    members: int,
    payments_by_status: Dict[str, int],
    attendances: int,
    duration_ms: float,
) -> None:
    """Log structured outcome of a sample-data run"""
    logging.info(
        "Seed completed",
        extra={
            "step": "seed_complete",
            "run_date": run_date,
            "plans": plans,
            "members": members,
            "payments_by_status": payments_by_status,
            "attendances": attendances,
            "duration_ms": duration_ms,
        },
    )


def log_dashboard_view(
    request_id: str,
    plan_id: int,
    member_count: int,
    tier_counts: Dict[str, int],
    duration_ms: float,
) -> None:
    """Log structured debt dashboard render for analysis"""
    logging.info(
        "Debt dashboard rendered",
        extra={
            "request_id": request_id,
            "plan_id": plan_id,
            "step": "dashboard_view",
            "member_count": member_count,
            "tier_counts": tier_counts,
            "duration_ms": duration_ms,
        },
    )
