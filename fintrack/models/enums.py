"""Enums for investor profile fields."""

from enum import Enum


class Gender(str, Enum):
    """Gender options."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    PREFER_NOT_TO_SAY = "Prefer not to say"


class MaritalStatus(str, Enum):
    """Marital status options."""

    SINGLE = "Single"
    MARRIED = "Married"
    DIVORCED = "Divorced"
    WIDOWED = "Widowed"


class Occupation(str, Enum):
    """Occupation options."""

    STUDENT = "Student"
    EMPLOYED_PRIVATE = "Employed (Private)"
    EMPLOYED_GOVERNMENT = "Employed (Government)"
    SELF_EMPLOYED = "Self-Employed"
    BUSINESS_OWNER = "Business Owner"
    RETIRED = "Retired"
    UNEMPLOYED = "Unemployed"
    OTHER = "Other"


class AnnualIncome(str, Enum):
    """Annual income brackets (INR)."""

    BELOW_2_5L = "Below ₹2,50,000"
    FROM_2_5L_TO_5L = "₹2,50,000 - ₹5,00,000"
    FROM_5L_TO_10L = "₹5,00,001 - ₹10,00,000"
    FROM_10L_TO_20L = "₹10,00,001 - ₹20,00,000"
    ABOVE_20L = "Above ₹20,00,000"


class InvestmentExperience(str, Enum):
    """Investment experience levels."""

    BEGINNER = "Beginner (0-2 years)"
    INTERMEDIATE = "Intermediate (2-5 years)"
    ADVANCED = "Advanced (5+ years)"
    PROFESSIONAL = "Professional"


class RiskTolerance(str, Enum):
    """Risk tolerance levels."""

    CONSERVATIVE = "Conservative (Low Risk)"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive (High Risk)"
    VERY_AGGRESSIVE = "Very Aggressive"


class FinancialGoal(str, Enum):
    """Financial goals (multi-select)."""

    WEALTH_CREATION = "Wealth Creation"
    RETIREMENT_PLANNING = "Retirement Planning"
    CHILDRENS_EDUCATION = "Children's Education"
    HOME_PURCHASE = "Home Purchase"
    TAX_SAVING = "Tax Saving"
    EMERGENCY_FUND = "Emergency Fund"
    TRAVEL = "Travel"
    OTHER = "Other"


class CommunicationChannel(str, Enum):
    """Preferred communication channels (multi-select)."""

    EMAIL = "Email"
    SMS = "SMS"
    WHATSAPP = "WhatsApp"
    PHONE_CALL = "Phone Call"
