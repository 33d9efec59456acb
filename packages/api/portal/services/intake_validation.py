# This project was developed with assistance from AI tools.
"""Field-level validation for the four-step application wizard.

Step 1 collects personal details, step 2 family background, step 3 household
finances and step 4 the scholarship and academic details. A step may only be
left once every required field in it is filled in; some fields become
required depending on other answers.
"""

import re
from collections.abc import Callable

from .normalization import GWA_FORMAT_GWA, GWA_FORMAT_PERCENTAGE, INCOME_RANGES

STEP_FIELDS: dict[int, list[str]] = {
    1: [
        "last_name",
        "first_name",
        "sex",
        "civil_status",
        "date_of_birth",
        "nationality",
        "birth_place",
        "pwd_specification",
        "present_address",
        "barangay",
        "district",
        "city",
        "zip_code",
        "contact_number",
        "email_address",
    ],
    2: [
        "mother_first_name",
        "mother_last_name",
        "father_first_name",
        "father_last_name",
    ],
    3: [
        "is_employed",
        "total_annual_income",
        "monthly_income",
        "number_of_children",
        "number_of_siblings",
        "home_ownership_status",
        "is_solo_parent",
        "is_indigenous_group",
        "is_registered_voter",
        "payment_method",
        "account_number",
        "is_4ps_beneficiary",
    ],
    4: [
        "scholarship_category",
        "scholarship_subcategory",
        "educational_level",
        "is_school_at_caloocan",
        "school_name",
        "campus",
        "school_contact_number",
        "school_classification",
        "units_enrolled",
        "grade_year_level",
        "current_track_specialization",
        "area_of_specialization",
        "school_term",
        "school_year",
        "previous_school",
        "units_completed",
        "general_weighted_average",
    ],
}

# Fields in STEP_FIELDS that are never required (father details, previous school)
_OPTIONAL_FIELDS = {
    "father_first_name",
    "father_last_name",
    "previous_school",
}

# Required only when the predicate over the submitted data holds
_CONDITIONAL_FIELDS: dict[str, Callable[[dict], bool]] = {
    "pwd_specification": lambda data: _truthy(data.get("is_pwd")),
    "account_number": lambda data: bool(data.get("payment_method"))
    and data.get("payment_method") != "Cash",
    "total_annual_income": lambda data: data.get("is_employed") == "yes",
    "monthly_income": lambda data: data.get("is_employed") == "yes",
}

_LABELS = {
    "pwd_specification": "PWD specification",
    "email_address": "Email Address",
    "is_4ps_beneficiary": "4Ps beneficiary status",
    "general_weighted_average": "General Weighted Average",
    "grade_year_level": "Grade/Year Level",
    "is_school_at_caloocan": "School location",
    "scholarship_subcategory": "Scholarship Subcategory",
}

_EMAIL_RE = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)


def _truthy(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _label(field_name: str) -> str:
    return _LABELS.get(field_name) or field_name.replace("_", " ").capitalize()


def is_required(field_name: str, data: dict) -> bool:
    """Whether ``field_name`` must be filled in given the rest of ``data``."""
    if field_name in _OPTIONAL_FIELDS:
        return False
    condition = _CONDITIONAL_FIELDS.get(field_name)
    if condition is not None:
        return condition(data)
    return True


def validate_email(value: str) -> tuple[bool, str, str | None]:
    """Email format check."""
    value = value.strip()
    if not _EMAIL_RE.match(value):
        return False, "Invalid email format", None
    return True, "", value.lower()


def validate_gwa(value, input_format: str = GWA_FORMAT_GWA) -> tuple[bool, str, float | None]:
    """Validate a grade entered either as a percentage or on the GWA scale."""
    try:
        number = float(str(value).strip())
    except ValueError:
        return False, "Please enter a valid number", None
    if input_format == GWA_FORMAT_PERCENTAGE:
        if not 0 <= number <= 100:
            return False, "Percentage must be between 0 and 100", None
    elif not 1.0 <= number <= 5.0:
        return False, "GWA must be between 1.00 and 5.00", None
    return True, "", number


def validate_income_range(value: str) -> tuple[bool, str, str | None]:
    """Income must be one of the offered brackets."""
    value = value.strip()
    if value not in INCOME_RANGES:
        return False, f"Select one of: {', '.join(INCOME_RANGES)}", None
    return True, "", value


def validate_count(value) -> tuple[bool, str, int | None]:
    """Non-negative whole number (children, siblings, units)."""
    try:
        number = int(str(value).strip())
    except ValueError:
        return False, "Must be a whole number", None
    if number < 0:
        return False, "Cannot be negative", None
    return True, "", number


_VALIDATORS: dict[str, Callable] = {
    "email_address": validate_email,
    "total_annual_income": validate_income_range,
    "number_of_children": validate_count,
    "number_of_siblings": validate_count,
    "units_enrolled": validate_count,
    "units_completed": validate_count,
}


def validate_step(step: int, data: dict, gwa_format: str = GWA_FORMAT_GWA) -> dict[str, str]:
    """Validate one wizard step.

    Returns a mapping of field name to error message; an empty mapping means
    the applicant may proceed. Raises ValueError for an unknown step.
    """
    if step not in STEP_FIELDS:
        raise ValueError(f"Unknown step {step}; expected one of {sorted(STEP_FIELDS)}")

    errors: dict[str, str] = {}
    for field_name in STEP_FIELDS[step]:
        value = data.get(field_name)
        if _is_blank(value):
            if is_required(field_name, data):
                errors[field_name] = f"{_label(field_name)} is required"
            continue

        if field_name == "general_weighted_average":
            ok, message, _ = validate_gwa(value, gwa_format)
        elif field_name in _VALIDATORS:
            ok, message, _ = _VALIDATORS[field_name](str(value))
        else:
            continue
        if not ok:
            errors[field_name] = message
    return errors
