"""Investor profile model."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)

from fintrack.database import Base


class Profile(Base):
    """Onboarding details, at most one row per user.

    The unique constraint on user_id is what guarantees a single profile
    even when two first submissions race.
    """

    __tablename__ = "user_details"
    __table_args__ = (UniqueConstraint("user_id", name="uq_user_details_user_id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    email = Column(String(255), nullable=False)  # Copied from the user at creation

    full_name = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True)
    dob = Column(Date, nullable=True)
    gender = Column(String(50), nullable=True)
    marital_status = Column(String(50), nullable=True)
    occupation = Column(String(100), nullable=True)
    company = Column(String(255), nullable=True)
    annual_income = Column(String(100), nullable=True)
    investment_experience = Column(String(100), nullable=True)
    risk_tolerance = Column(String(100), nullable=True)
    goals = Column(JSON, nullable=False, default=list)
    preferred_communication = Column(JSON, nullable=False, default=list)
    accept_terms = Column(Boolean, nullable=False, default=False)

    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
