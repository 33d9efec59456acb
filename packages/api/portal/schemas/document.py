# This project was developed with assistance from AI tools.
"""Document request/response schemas."""

from datetime import datetime

from db.enums import DocumentCategory, DocumentStatus
from pydantic import BaseModel, ConfigDict, Field


class DocumentTypeResponse(BaseModel):
    """A kind of document applicants may be asked for."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    category: DocumentCategory
    is_required: bool
    priority: int


class DocumentResponse(BaseModel):
    """Submitted document metadata."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    application_id: int
    student_id: int | None = None
    document_type_id: int
    status: DocumentStatus
    file_name: str | None = None
    verification_notes: str | None = None
    uploaded_by: str | None = None
    verified_by: str | None = None
    verified_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None


class DocumentUploadResponse(BaseModel):
    """Response after uploading a document."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    application_id: int
    student_id: int | None = None
    document_type_id: int
    status: DocumentStatus
    file_name: str | None = None
    file_path: str | None = None
    created_at: datetime


class DocumentListResponse(BaseModel):
    """All documents of one application."""

    data: list[DocumentResponse]
    count: int


class DocumentVerificationRequest(BaseModel):
    """Staff verdict on a submitted document."""

    status: DocumentStatus
    notes: str | None = Field(default=None, max_length=2000)
