# This project was developed with assistance from AI tools.
"""Submission gate and status transitions.

A draft may only be submitted once every required document type has a
submitted document. Staff move submitted applications along the pipeline;
every move is checked against ``ApplicationStatus.valid_transitions()``.
"""

import logging
from datetime import UTC, datetime
from decimal import Decimal

from db import Application
from db.enums import ApplicationStatus
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext
from ..schemas.checklist import CompletionMetrics
from .application import InvalidTransitionError, get_application
from .audit import EVENT_APPLICATION_SUBMITTED, EVENT_STATUS_CHANGE, audit_user_event
from .checklist import (
    build_checklist,
    compute_completion,
    load_application_with_documents,
)
from .document import list_required_types

logger = logging.getLogger(__name__)

SUBMISSION_BLOCKED_MESSAGE = (
    "Please upload all required documents before submitting your application."
)
NOT_DRAFT_MESSAGE = "This application has already been submitted."


class SubmissionBlockedError(Exception):
    """Raised when a draft is submitted with required documents missing."""

    def __init__(self, metrics: CompletionMetrics, message: str = SUBMISSION_BLOCKED_MESSAGE):
        self.metrics = metrics
        super().__init__(message)


def can_submit(status, metrics: CompletionMetrics) -> bool:
    """Draft status, at least one required type, and all of them submitted."""
    return (
        status == ApplicationStatus.DRAFT
        and metrics.required_count > 0
        and metrics.submitted_required_count == metrics.required_count
    )


def submit_block_reason(status, metrics: CompletionMetrics) -> str | None:
    """User-facing reason the gate is closed, or None when submission is allowed."""
    if status != ApplicationStatus.DRAFT:
        return NOT_DRAFT_MESSAGE
    if not can_submit(status, metrics):
        return SUBMISSION_BLOCKED_MESSAGE
    return None


async def submit_application(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
) -> Application | None:
    """Move a draft to ``submitted`` when the gate allows it.

    Returns None if the application is not found or not accessible.
    Raises InvalidTransitionError when the application is not a draft and
    SubmissionBlockedError when required documents are missing. Nothing is
    persisted in either case.
    """
    app = await load_application_with_documents(session, user, application_id)
    if app is None:
        return None

    if app.status != ApplicationStatus.DRAFT:
        raise InvalidTransitionError(
            f"Cannot submit an application in '{app.status.value}' status; "
            "only drafts can be submitted."
        )

    required_types = await list_required_types(session)
    metrics = compute_completion(build_checklist(required_types, app.documents or []))
    if not can_submit(app.status, metrics):
        logger.warning(
            "Submission blocked: application=%s submitted=%s/%s",
            application_id,
            metrics.submitted_required_count,
            metrics.required_count,
        )
        raise SubmissionBlockedError(metrics)

    app.status = ApplicationStatus.SUBMITTED
    app.submitted_at = datetime.now(UTC)
    await audit_user_event(
        session,
        user,
        EVENT_APPLICATION_SUBMITTED,
        application_id,
        required_count=metrics.required_count,
        verified_required_count=metrics.verified_required_count,
    )
    await session.commit()
    logger.info("Application %s submitted by %s", application_id, user.user_id)
    return await get_application(session, user, application_id)


def _append_note(existing: str | None, note: str) -> str:
    return f"{existing}\n{note}" if existing else note


async def transition_status(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
    new_status: ApplicationStatus,
    *,
    notes: str | None = None,
    rejection_reason: str | None = None,
    approved_amount: Decimal | None = None,
) -> Application | None:
    """Move an application to ``new_status``.

    Returns None if the application is not found or not accessible.
    Raises InvalidTransitionError if the transition is not allowed. A
    ``draft -> submitted`` request goes through the submission gate.
    """
    app = await get_application(session, user, application_id)
    if app is None:
        return None

    current = app.status or ApplicationStatus.DRAFT
    allowed = ApplicationStatus.valid_transitions().get(current, frozenset())
    if new_status not in allowed:
        raise InvalidTransitionError(
            f"Cannot transition from '{current.value}' to '{new_status.value}'. "
            f"Allowed: {sorted(s.value for s in allowed) if allowed else 'none (terminal status)'}."
        )

    if current == ApplicationStatus.DRAFT and new_status == ApplicationStatus.SUBMITTED:
        return await submit_application(session, user, application_id)

    now = datetime.now(UTC)
    app.status = new_status
    if new_status == ApplicationStatus.REVIEWED:
        app.reviewed_at = now
    elif new_status == ApplicationStatus.APPROVED:
        app.approved_at = now
        if approved_amount is not None:
            app.approved_amount = approved_amount
    elif new_status == ApplicationStatus.REJECTED and rejection_reason:
        app.rejection_reason = rejection_reason
    if notes:
        app.notes = _append_note(app.notes, notes)

    await audit_user_event(
        session,
        user,
        EVENT_STATUS_CHANGE,
        application_id,
        from_status=current.value,
        to_status=new_status.value,
    )
    await session.commit()
    logger.info(
        "Application %s moved %s -> %s by %s",
        application_id,
        current.value,
        new_status.value,
        user.user_id,
    )
    return await get_application(session, user, application_id)
