"""Client-side controller for the investor profile form."""

import logging
import re
from collections.abc import Callable
from datetime import date
from enum import Enum
from typing import Any

from fintrack.client.api import ApiError, OnboardingAPI
from fintrack.client.session import SessionController
from fintrack.fields import REQUIRED_MULTI_FIELDS, REQUIRED_SCALAR_FIELDS

logger = logging.getLogger(__name__)

PHONE_PATTERN = re.compile(r"^[6-9]\d{9}$")
MINIMUM_AGE = 18


class FormMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


def blank_form(email: str = "") -> dict[str, Any]:
    """An empty form, keyed the way the API expects."""
    return {
        "fullName": "",
        "email": email,
        "phone": "",
        "dob": "",
        "gender": "",
        "maritalStatus": "",
        "occupation": "",
        "company": "",
        "annualIncome": "",
        "investmentExperience": "",
        "riskTolerance": "",
        "goals": [],
        "preferredCommunication": [],
        "acceptTerms": False,
    }


def age_on(dob: date, today: date) -> int:
    """Whole years between dob and today."""
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return years


class ProfileFormController:
    """Loads, validates and submits the profile form.

    The form starts in CREATE mode when the user has no profile and in
    UPDATE mode, pre-populated, when one exists.
    """

    def __init__(
        self,
        session: SessionController,
        on_success: Callable[[dict], None] | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.session = session
        self.on_success = on_success
        self.today = today
        user = session.user or {}
        self.fields = blank_form(user.get("email", ""))
        self.mode = FormMode.CREATE
        self.loading = False
        self.saving = False
        self.error: str | None = None
        self.success: str | None = None
        self.invalid_fields: list[str] = []

    @property
    def api(self) -> OnboardingAPI:
        return self.session.api

    def profile_status(self) -> str:
        """Label shown on the dashboard."""
        return "Complete" if self.mode == FormMode.UPDATE else "Incomplete"

    def load(self) -> None:
        """Fetch the stored profile and pre-populate the form if there is one."""
        token = self.session.token
        if not token:
            self.error = "No authentication token found"
            return

        self.loading = True
        try:
            data = self.api.get_details(token)
        except ApiError as e:
            self._handle_error(e, "Failed to load user details. Please try again.")
            return
        finally:
            self.loading = False

        if data.get("exists") and data.get("details"):
            details = data["details"]
            for key in self.fields:
                value = details.get(key)
                if value is not None:
                    self.fields[key] = value
            self.fields["goals"] = list(details.get("goals") or [])
            self.fields["preferredCommunication"] = list(details.get("preferredCommunication") or [])
            self.mode = FormMode.UPDATE
        else:
            self.mode = FormMode.CREATE

    def set_field(self, name: str, value: Any) -> None:
        """Set a scalar field, clearing messages and its invalid marker."""
        if name not in self.fields or name in REQUIRED_MULTI_FIELDS:
            raise KeyError(name)
        self.fields[name] = value
        self._touched(name)

    def toggle_option(self, name: str, option: str, checked: bool) -> None:
        """Add or remove an option of a multi-select field."""
        if name not in REQUIRED_MULTI_FIELDS:
            raise KeyError(name)
        selected = [item for item in self.fields[name] if item != option]
        if checked:
            selected.append(option)
        self.fields[name] = selected
        self._touched(name)

    def _touched(self, name: str) -> None:
        self.error = None
        self.success = None
        self.invalid_fields = [field for field in self.invalid_fields if field != name]

    def validate(self) -> list[str]:
        """Return every missing or invalid field at once."""
        invalid = []
        for name in REQUIRED_SCALAR_FIELDS:
            value = self.fields.get(name)
            if value is None or str(value).strip() == "":
                invalid.append(name)
        invalid.extend(name for name in REQUIRED_MULTI_FIELDS if not self.fields.get(name))
        if not self.fields.get("acceptTerms"):
            invalid.append("acceptTerms")

        problems = []
        if "phone" not in invalid:
            digits = re.sub(r"\D", "", str(self.fields["phone"]))
            if not PHONE_PATTERN.match(digits):
                invalid.append("phone")
                problems.append("Please enter a valid 10-digit Indian phone number")

        if "dob" not in invalid:
            try:
                dob = date.fromisoformat(str(self.fields["dob"]))
            except ValueError:
                invalid.append("dob")
                problems.append("Please enter a valid date of birth")
            else:
                if age_on(dob, self.today()) < MINIMUM_AGE:
                    invalid.append("dob")
                    problems.append(f"You must be at least {MINIMUM_AGE} years old")

        self.invalid_fields = invalid
        if invalid:
            summary = f"Please fill in all required fields. Missing or invalid: {len(invalid)} field(s)"
            self.error = " ".join([summary, *problems])
        return invalid

    def submit(self) -> bool:
        """Validate and save the form, creating or updating as appropriate."""
        if self.saving:
            return False
        self.error = None
        self.success = None

        if self.validate():
            logger.info(f"Form validation failed: {self.invalid_fields}")
            return False

        token = self.session.token
        if not token:
            self.error = "No authentication token found. Please login again."
            return False

        payload = dict(self.fields)
        self.saving = True
        try:
            if self.mode == FormMode.UPDATE:
                data = self.api.update_details(token, payload)
            else:
                data = self.api.create_details(token, payload)
        except ApiError as e:
            self._handle_error(e, e.message)
            return False
        finally:
            self.saving = False

        self.success = data.get("message") or "Details saved successfully!"
        self.mode = FormMode.UPDATE
        if self.on_success:
            self.on_success(data["details"])
        return True

    def _handle_error(self, error: ApiError, message: str) -> None:
        if error.is_auth_failure:
            self.session.handle_unauthorized()
        self.error = message
        self.invalid_fields = list(error.errors)
