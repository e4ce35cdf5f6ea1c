"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from gym_billing.api.main import create_app
from gym_billing.api.dependencies import get_clock
from gym_billing.domain.models import Member, MemberStatus, PaymentStatus, Payment
from gym_billing.infrastructure.database.models import Base
from gym_billing.infrastructure.database.repositories import GymStorage
from gym_billing.infrastructure.database.session import build_engine, get_db
from gym_billing.utils.clock import FixedClock


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = build_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Evaluation date for integration tests: September installments are overdue,
# October (monthly) and December (quarterly) ones still pending.
EVALUATION_DATE = date(2025, 9, 20)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(EVALUATION_DATE)


@pytest.fixture
def storage(db: Session) -> GymStorage:
    return GymStorage(db)


@pytest.fixture
def client(db: Session, clock: FixedClock) -> TestClient:
    """Create FastAPI test client with test database and pinned clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    return TestClient(app)


@pytest.fixture
def active_member() -> Member:
    """Active member with a routine, not persisted"""
    return Member(
        id=1,
        first_name="Teo",
        last_name="Fassardi",
        age=21,
        email="teo@example.com",
        status=MemberStatus.ACTIVE,
        enrolled_on=date(2023, 8, 11),
        plan_id=1,
        routine_id=3,
    )


@pytest.fixture
def make_payment():
    """Build domain payments with an explicit status, for classifier tests"""

    def _make(amount: int, status: PaymentStatus, expected_on: date = date(2024, 7, 1)) -> Payment:
        return Payment(id=None, member_id=1, expected_on=expected_on, amount=amount, status=status)

    return _make
