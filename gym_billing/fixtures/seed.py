"""Load the sample dataset into the configured database"""

import logging
import time

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from gym_billing.config import settings
from gym_billing.fixtures.assembler import DatasetAssembler, SeedSummary
from gym_billing.infrastructure.database.models import Base
from gym_billing.infrastructure.database.repositories import GymStorage
from gym_billing.infrastructure.database.session import SessionLocal, engine
from gym_billing.infrastructure.observability.logging import log_seed_summary, setup_logging
from gym_billing.infrastructure.observability.metrics import seed_runs_counter
from gym_billing.utils.clock import configured_clock


def run_seed(session_factory: sessionmaker = SessionLocal, bind: Engine = engine) -> SeedSummary:
    """
    Create tables and populate them in a single transaction.

    Any storage error rolls back the whole run and propagates.
    """
    start_time = time.time()
    Base.metadata.create_all(bind=bind)

    db = session_factory()
    try:
        assembler = DatasetAssembler(
            GymStorage(db),
            configured_clock(settings.reference_date),
            streak_days=settings.attendance_streak_days,
        )
        summary = assembler.run()
        db.commit()
    except Exception:
        db.rollback()
        seed_runs_counter.labels(outcome="failure").inc()
        logging.exception("Seed failed, transaction rolled back")
        raise
    finally:
        db.close()

    seed_runs_counter.labels(outcome="success").inc()
    log_seed_summary(
        run_date=summary.run_date.isoformat(),
        plans=summary.plans,
        members=summary.members,
        payments_by_status=summary.payments_by_status,
        attendances=summary.attendances,
        duration_ms=(time.time() - start_time) * 1000,
    )
    return summary


def main() -> None:
    setup_logging(settings.log_level)
    run_seed()


if __name__ == "__main__":
    main()
