"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from gym_billing.config import settings
from gym_billing.infrastructure.database.repositories import GymStorage
from gym_billing.infrastructure.database.session import get_db
from gym_billing.utils.clock import Clock, configured_clock


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_clock() -> Clock:
    """Provide the evaluation clock used to re-derive payment statuses"""
    return configured_clock(settings.reference_date)


def get_storage(db: Session = Depends(get_db)) -> GymStorage:
    """Provide storage bound to the request's database session"""
    return GymStorage(db)
