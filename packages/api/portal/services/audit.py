# This project was developed with assistance from AI tools.
"""Audit event service.

Writes append-only audit trail entries with a SHA-256 hash chain for tamper
evidence and a PostgreSQL advisory lock for serial hash computation.
"""

import hashlib
import json
import logging

from db import AuditEvent
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext

logger = logging.getLogger(__name__)

# Fixed advisory lock key for audit trail serialization.
# Only audit event inserts are serialized; other DB operations are unaffected.
AUDIT_LOCK_KEY = 910_001

EVENT_APPLICATION_CREATED = "application_created"
EVENT_APPLICATION_SUBMITTED = "application_submitted"
EVENT_STATUS_CHANGE = "status_change"
EVENT_DOCUMENT_UPLOADED = "document_uploaded"
EVENT_DOCUMENT_VERIFIED = "document_verified"


def _compute_hash(event_id: int, timestamp: str, event_data: dict | None) -> str:
    """Compute SHA-256 hash of an audit event's key fields."""
    payload = f"{event_id}|{timestamp}|{json.dumps(event_data, sort_keys=True, default=str)}"
    return hashlib.sha256(payload.encode()).hexdigest()


async def write_audit_event(
    session: AsyncSession,
    *,
    event_type: str,
    user_id: str | None = None,
    user_role: str | None = None,
    application_id: int | None = None,
    event_data: dict | None = None,
) -> AuditEvent:
    """Write a single audit event with hash chain linkage.

    Acquires a PostgreSQL advisory lock to serialize hash computation,
    then computes prev_hash from the most recent event.

    Args:
        session: Database session.
        event_type: Event category (e.g. 'application_submitted').
        user_id: User who triggered the event.
        user_role: Role at the time of the event.
        application_id: Related application, if any.
        event_data: Arbitrary JSON-serializable event payload.

    Returns:
        The created AuditEvent row (with prev_hash set).
    """
    # Released automatically when the transaction commits or rolls back.
    await session.execute(text(f"SELECT pg_advisory_xact_lock({AUDIT_LOCK_KEY})"))

    latest_stmt = select(AuditEvent).order_by(AuditEvent.id.desc()).limit(1)
    result = await session.execute(latest_stmt)
    prev_event = result.scalar_one_or_none()

    if prev_event is not None:
        prev_hash = _compute_hash(prev_event.id, str(prev_event.timestamp), prev_event.event_data)
    else:
        prev_hash = "genesis"

    audit = AuditEvent(
        event_type=event_type,
        user_id=user_id,
        user_role=user_role,
        application_id=application_id,
        event_data=event_data,
        prev_hash=prev_hash,
    )
    session.add(audit)
    await session.flush()
    return audit


async def audit_user_event(
    session: AsyncSession,
    user: UserContext,
    event_type: str,
    application_id: int | None,
    **event_data,
) -> AuditEvent:
    """Shorthand for service code: record an event attributed to ``user``."""
    return await write_audit_event(
        session,
        event_type=event_type,
        user_id=user.user_id,
        user_role=user.role.value,
        application_id=application_id,
        event_data=event_data or None,
    )


async def verify_audit_chain(session: AsyncSession) -> dict:
    """Verify the integrity of the audit event hash chain.

    Returns:
        {"status": "OK", "events_checked": N} on success, or
        {"status": "TAMPERED", "first_break_id": id, "events_checked": N}
        if a mismatch is found.
    """
    stmt = select(AuditEvent).order_by(AuditEvent.id.asc())
    result = await session.execute(stmt)
    events = list(result.scalars().all())

    for i, event in enumerate(events):
        if i == 0:
            expected = "genesis"
        else:
            prev = events[i - 1]
            expected = _compute_hash(prev.id, str(prev.timestamp), prev.event_data)

        if event.prev_hash != expected:
            logger.warning("Audit chain broken at event %s", event.id)
            return {
                "status": "TAMPERED",
                "first_break_id": event.id,
                "events_checked": i + 1,
            }

    return {"status": "OK", "events_checked": len(events)}


async def get_audit_chain_length(session: AsyncSession) -> int:
    """Return the total number of audit events."""
    result = await session.execute(select(func.count(AuditEvent.id)))
    return result.scalar_one()


async def get_events_by_application(
    session: AsyncSession,
    application_id: int,
) -> list[AuditEvent]:
    """Return the audit history of one application, oldest first."""
    stmt = (
        select(AuditEvent)
        .where(AuditEvent.application_id == application_id)
        .order_by(AuditEvent.timestamp.asc(), AuditEvent.id.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
