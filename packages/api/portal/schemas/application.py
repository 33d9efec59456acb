# This project was developed with assistance from AI tools.
"""Application request/response schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from db.enums import ApplicationStatus, ApplicationType
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..services.intake_validation import validate_gwa, validate_income_range
from . import Pagination


class StudentProfile(BaseModel):
    """Applicant details used when the caller has no student record yet."""

    first_name: str = Field(min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    contact_number: str | None = Field(default=None, max_length=50)


class FinancialInput(BaseModel):
    income_range: str | None = None
    monthly_income: Decimal | None = Field(default=None, ge=0)
    number_of_children: int = Field(default=0, ge=0)
    number_of_siblings: int = Field(default=0, ge=0)
    home_ownership_status: str | None = None
    is_4ps_beneficiary: bool = False

    @field_validator("income_range")
    @classmethod
    def _known_income_range(cls, value: str | None) -> str | None:
        if value is None:
            return value
        ok, message, normalized = validate_income_range(value)
        if not ok:
            raise ValueError(message)
        return normalized


class AcademicInput(BaseModel):
    educational_level: str | None = None
    program: str | None = None
    year_level: str | None = None
    school_year: str | None = None
    school_term: str | None = None
    units_enrolled: int | None = Field(default=None, ge=0)
    units_completed: int | None = Field(default=None, ge=0)
    general_weighted_average: float | None = None
    gwa_format: Literal["gwa", "percentage"] = "gwa"

    @model_validator(mode="after")
    def _grade_in_range(self):
        if self.general_weighted_average is not None:
            ok, message, _ = validate_gwa(self.general_weighted_average, self.gwa_format)
            if not ok:
                raise ValueError(message)
        return self


class ApplicationCreate(BaseModel):
    """Start a new scholarship application (created as a draft)."""

    category_id: int | None = None
    subcategory_id: int | None = None
    school_id: int | None = None
    type: ApplicationType = ApplicationType.NEW
    requested_amount: Decimal | None = Field(default=None, ge=0)
    financial_need_description: str | None = None
    reason_for_renewal: str | None = None
    student: StudentProfile | None = None
    financial: FinancialInput | None = None
    academic: AcademicInput | None = None


class ApplicationUpdate(BaseModel):
    """Partial edit of a draft application."""

    category_id: int | None = None
    subcategory_id: int | None = None
    school_id: int | None = None
    requested_amount: Decimal | None = Field(default=None, ge=0)
    financial_need_description: str | None = None
    reason_for_renewal: str | None = None


class StatusTransitionRequest(BaseModel):
    """Staff request to move an application along the pipeline."""

    status: ApplicationStatus
    notes: str | None = Field(default=None, max_length=2000)
    rejection_reason: str | None = Field(default=None, max_length=2000)
    approved_amount: Decimal | None = Field(default=None, ge=0)


class StepValidationRequest(BaseModel):
    """One wizard step's worth of form data."""

    step: int = Field(ge=1, le=4)
    data: dict = Field(default_factory=dict)
    gwa_format: Literal["gwa", "percentage"] = "gwa"


class StepValidationResponse(BaseModel):
    step: int
    is_valid: bool
    errors: dict[str, str] = {}


class FinancialInformationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    income_range: str | None = None
    total_annual_income: Decimal | None = None
    monthly_income: Decimal | None = None
    number_of_children: int = 0
    number_of_siblings: int = 0
    home_ownership_status: str | None = None
    is_4ps_beneficiary: bool = False


class AcademicRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    educational_level: str | None = None
    program: str | None = None
    year_level: str | None = None
    school_year: str | None = None
    school_term: str | None = None
    units_enrolled: int | None = None
    units_completed: int | None = None
    general_weighted_average: Decimal | None = None


class ApplicationResponse(BaseModel):
    """Single application response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    category_id: int | None = None
    subcategory_id: int | None = None
    school_id: int | None = None
    type: ApplicationType
    status: ApplicationStatus
    requested_amount: Decimal | None = None
    approved_amount: Decimal | None = None
    financial_need_description: str | None = None
    reason_for_renewal: str | None = None
    rejection_reason: str | None = None
    notes: str | None = None
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
    approved_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    financial_information: FinancialInformationResponse | None = None
    academic_record: AcademicRecordResponse | None = None


class ApplicationListResponse(BaseModel):
    """Paginated list of applications."""

    data: list[ApplicationResponse]
    pagination: Pagination
