# This project was developed with assistance from AI tools.
"""Document checklist schemas."""

from datetime import datetime

from db.enums import ApplicationStatus, DocumentCategory, DocumentStatus
from pydantic import BaseModel, Field


class ChecklistItem(BaseModel):
    """One required document type paired with its submission, if any."""

    document_type_id: int
    name: str
    description: str | None = None
    category: DocumentCategory = DocumentCategory.OTHER
    is_required: bool = True
    priority: int = 999
    is_submitted: bool = False
    is_extra: bool = Field(
        default=False,
        description="Submitted document whose type is not on the required list.",
    )
    status: DocumentStatus = DocumentStatus.MISSING
    document_id: int | None = None
    file_name: str | None = None
    submitted_at: datetime | None = None
    verified_at: datetime | None = None
    verification_notes: str | None = None


class CompletionMetrics(BaseModel):
    """Counts over the required checklist items."""

    required_count: int
    submitted_required_count: int
    verified_required_count: int
    completion_percentage: int = Field(ge=0, le=100)


class ChecklistResponse(BaseModel):
    """Checklist, completion metrics and submit eligibility for an application."""

    application_id: int
    application_status: ApplicationStatus
    items: list[ChecklistItem]
    metrics: CompletionMetrics
    can_submit: bool
    submit_blocked_reason: str | None = None
