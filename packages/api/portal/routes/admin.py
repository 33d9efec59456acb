# This project was developed with assistance from AI tools.
"""Admin endpoints for reference data seeding and audit trail queries."""

from db import get_db
from db.enums import UserRole
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import require_roles
from ..schemas.admin import (
    AuditChainVerifyResponse,
    AuditEventItem,
    AuditEventsResponse,
    SeedResponse,
    SeedStatusResponse,
)
from ..services.audit import get_events_by_application, verify_audit_chain
from ..services.seed.seeder import get_seed_status, seed_reference_data

router = APIRouter()


@router.post(
    "/seed",
    response_model=SeedResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def seed_data(
    force: bool = False,
    session: AsyncSession = Depends(get_db),
) -> SeedResponse:
    """Seed document types, scholarship categories and schools. Safe to repeat."""
    result = await seed_reference_data(session, force=force)
    return SeedResponse(**result)


@router.get(
    "/seed/status",
    response_model=SeedStatusResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def seed_status(
    session: AsyncSession = Depends(get_db),
) -> SeedStatusResponse:
    """Report how much reference data is present."""
    result = await get_seed_status(session)
    return SeedStatusResponse(**result)


@router.get(
    "/audit",
    response_model=AuditEventsResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN, UserRole.STAFF))],
)
async def get_audit_events(
    application_id: int = Query(..., description="Application whose history to return"),
    session: AsyncSession = Depends(get_db),
) -> AuditEventsResponse:
    """Audit history of one application, oldest first."""
    events = await get_events_by_application(session, application_id)
    return AuditEventsResponse(
        application_id=application_id,
        count=len(events),
        events=[AuditEventItem.model_validate(e) for e in events],
    )


@router.get(
    "/audit/verify",
    response_model=AuditChainVerifyResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def verify_audit(
    session: AsyncSession = Depends(get_db),
) -> AuditChainVerifyResponse:
    """Verify audit trail hash chain integrity."""
    result = await verify_audit_chain(session)
    return AuditChainVerifyResponse(**result)
