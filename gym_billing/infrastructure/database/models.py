"""SQLAlchemy ORM models for plans, routines, members, payments and attendance"""

from sqlalchemy import Column, String, BigInteger, Boolean, Date, DateTime, Integer, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class PlanRecord(Base):
    """Billing plan, one row per plan type"""

    __tablename__ = "gym_plan"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(32), nullable=False, unique=True)  # monthly | quarterly | annual
    cost = Column(BigInteger, nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    members = relationship("MemberRecord", back_populates="plan")


class RoutineRecord(Base):
    """Training routine reference data"""

    __tablename__ = "gym_routine"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    level = Column(Text, nullable=False)
    duration_weeks = Column(Integer, nullable=False)
    goal = Column(String(32), nullable=False)


class MemberRecord(Base):
    """Gym member"""

    __tablename__ = "gym_member"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False, index=True)
    age = Column(Integer, nullable=True)
    email = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default="active")
    enrolled_on = Column(Date, nullable=False)
    plan_id = Column(Integer, ForeignKey("gym_plan.id"), nullable=False, index=True)
    routine_id = Column(Integer, ForeignKey("gym_routine.id"), nullable=True)

    plan = relationship("PlanRecord", back_populates="members")
    routine = relationship("RoutineRecord")
    payments = relationship(
        "PaymentRecord",
        back_populates="member",
        cascade="all, delete-orphan",
        order_by="PaymentRecord.expected_on",
    )
    attendances = relationship("AttendanceRecord", back_populates="member", cascade="all, delete-orphan")


class PaymentRecord(Base):
    """Billing installment. `status` is derived from the dates as of `status_as_of`."""

    __tablename__ = "gym_payment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(Integer, ForeignKey("gym_member.id", ondelete="CASCADE"), nullable=False, index=True)
    expected_on = Column(Date, nullable=False)
    paid_on = Column(Date, nullable=True)
    amount = Column(BigInteger, nullable=False)
    method = Column(String(16), nullable=True)
    status = Column(String(16), nullable=False)
    status_as_of = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    member = relationship("MemberRecord", back_populates="payments")


class AttendanceRecord(Base):
    """Single visit of a member following a routine"""

    __tablename__ = "gym_attendance"

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(Integer, ForeignKey("gym_member.id", ondelete="CASCADE"), nullable=False, index=True)
    routine_id = Column(Integer, ForeignKey("gym_routine.id"), nullable=False)
    day = Column(Date, nullable=False)

    member = relationship("MemberRecord", back_populates="attendances")
    routine = relationship("RoutineRecord")
