# This project was developed with assistance from AI tools.
"""Pydantic response models for admin endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AuditEventItem(BaseModel):
    """Single audit event in a query response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: datetime
    event_type: str
    user_id: str | None = None
    user_role: str | None = None
    application_id: int | None = None
    event_data: dict | None = None


class AuditEventsResponse(BaseModel):
    """Response for GET /api/admin/audit."""

    application_id: int
    count: int
    events: list[AuditEventItem]


class AuditChainVerifyResponse(BaseModel):
    """Response for GET /api/admin/audit/verify."""

    status: str
    events_checked: int
    first_break_id: int | None = None


class SeedResponse(BaseModel):
    """Response for POST /api/admin/seed."""

    status: str
    document_types_created: int = 0
    document_types_updated: int = 0
    categories_created: int = 0
    subcategories_created: int = 0
    schools_created: int = 0


class SeedStatusResponse(BaseModel):
    """Response for GET /api/admin/seed/status."""

    seeded: bool
    document_types: int = 0
    categories: int = 0
    schools: int = 0
