"""Investor profile schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from fintrack.fields import REQUIRED_MULTI_FIELDS, REQUIRED_SCALAR_FIELDS
from fintrack.models.enums import (
    AnnualIncome,
    CommunicationChannel,
    FinancialGoal,
    Gender,
    InvestmentExperience,
    MaritalStatus,
    Occupation,
    RiskTolerance,
)


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileFields(CamelModel):
    """Profile submission for both create and update.

    Every field may arrive blank so that completeness can be reported for
    all fields at once; enumerated fields must still be valid when present.
    The email field is accepted for form compatibility but never stored
    from the client.
    """

    full_name: str | None = Field(None, max_length=255)
    email: str | None = None
    phone: str | None = Field(None, max_length=32)
    dob: date | None = None
    gender: Gender | None = None
    marital_status: MaritalStatus | None = None
    occupation: Occupation | None = None
    company: str | None = Field(None, max_length=255)
    annual_income: AnnualIncome | None = None
    investment_experience: InvestmentExperience | None = None
    risk_tolerance: RiskTolerance | None = None
    goals: list[FinancialGoal] = Field(default_factory=list)
    preferred_communication: list[CommunicationChannel] = Field(default_factory=list)
    accept_terms: bool = False

    @field_validator(
        "full_name",
        "phone",
        "dob",
        "gender",
        "marital_status",
        "occupation",
        "company",
        "annual_income",
        "investment_experience",
        "risk_tolerance",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("goals", "preferred_communication", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        return [] if value is None else value

    def missing_fields(self) -> list[str]:
        """Return the client names of every field that blocks submission."""
        missing = [
            name
            for name in REQUIRED_SCALAR_FIELDS
            if getattr(self, _snake(name)) in (None, "")
        ]
        missing.extend(name for name in REQUIRED_MULTI_FIELDS if not getattr(self, _snake(name)))
        if not self.accept_terms:
            missing.append("acceptTerms")
        return missing

    def to_columns(self) -> dict:
        """Mutable column values, with enums stored as their display values."""
        return {
            "full_name": self.full_name.strip() if self.full_name else None,
            "phone": self.phone,
            "dob": self.dob,
            "gender": _value(self.gender),
            "marital_status": _value(self.marital_status),
            "occupation": _value(self.occupation),
            "company": self.company,
            "annual_income": _value(self.annual_income),
            "investment_experience": _value(self.investment_experience),
            "risk_tolerance": _value(self.risk_tolerance),
            "goals": [goal.value for goal in self.goals],
            "preferred_communication": [c.value for c in self.preferred_communication],
            "accept_terms": self.accept_terms,
        }


class ProfileResponse(CamelModel):
    """Stored profile as returned to the client."""

    model_config = ConfigDict(from_attributes=True)

    full_name: str | None
    email: str
    phone: str | None
    dob: date | None
    gender: str | None
    marital_status: str | None
    occupation: str | None
    company: str | None
    annual_income: str | None
    investment_experience: str | None
    risk_tolerance: str | None
    goals: list[str]
    preferred_communication: list[str]
    accept_terms: bool
    submitted_at: datetime
    updated_at: datetime


class DetailsLookupResponse(BaseModel):
    """GET /api/user/details response."""

    success: bool = True
    exists: bool
    details: ProfileResponse | None = None


class DetailsSavedResponse(BaseModel):
    """POST/PUT /api/user/details response."""

    success: bool = True
    message: str
    details: ProfileResponse


def _snake(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name)


def _value(member):
    return member.value if member is not None else None
