# This project was developed with assistance from AI tools.
"""Application status aggregation service.

Maps an application status onto the five-stage approval and disbursement
pipeline shown to applicants, and combines it with the document checklist
into a single status summary.
"""

import logging

from db.enums import ApplicationStatus, DocumentStatus
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext
from ..schemas.status import ApplicationStatusResponse, PendingAction, PipelineStage
from .checklist import get_checklist

logger = logging.getLogger(__name__)

# (title, description) per pipeline stage, in order
PIPELINE_STAGES: list[tuple[str, str]] = [
    ("GENERAL REQUIREMENTS AND INTERVIEW", "Submit requirements and attend interview"),
    ("ENDORSED TO SSC APPROVAL", "Application reviewed by Student Services Committee"),
    ("APPROVED APPLICATION", "Application approved by committee"),
    ("GRANTS PROCESSING", "Processing grant disbursement"),
    ("GRANTS DISBURSED", "Funds released to student"),
]

# Rejected and cancelled applications sit outside the pipeline
OFF_PIPELINE_STAGE = -1

_STAGE_BY_STATUS: dict[ApplicationStatus, int] = {
    ApplicationStatus.DRAFT: 0,
    ApplicationStatus.SUBMITTED: 0,
    ApplicationStatus.REVIEWED: 1,
    ApplicationStatus.ON_HOLD: 1,
    ApplicationStatus.APPROVED: 2,
    ApplicationStatus.PROCESSING: 3,
    ApplicationStatus.RELEASED: 4,
    ApplicationStatus.REJECTED: OFF_PIPELINE_STAGE,
    ApplicationStatus.CANCELLED: OFF_PIPELINE_STAGE,
}

_STATUS_LABELS: dict[ApplicationStatus, str] = {
    ApplicationStatus.DRAFT: "Draft",
    ApplicationStatus.SUBMITTED: "Submitted",
    ApplicationStatus.REVIEWED: "Reviewed",
    ApplicationStatus.APPROVED: "Approved",
    ApplicationStatus.PROCESSING: "Processing",
    ApplicationStatus.RELEASED: "Released",
    ApplicationStatus.REJECTED: "Rejected",
    ApplicationStatus.ON_HOLD: "On Hold",
    ApplicationStatus.CANCELLED: "Cancelled",
}


def _coerce(status) -> ApplicationStatus | None:
    if isinstance(status, ApplicationStatus):
        return status
    if not status:
        return None
    try:
        return ApplicationStatus(str(status).strip().lower())
    except ValueError:
        return None


def stage_for_status(status) -> int:
    """Pipeline stage index for a status; -1 when rejected or cancelled.

    Unknown or missing statuses land on the first stage.
    """
    known = _coerce(status)
    if known is None:
        return 0
    return _STAGE_BY_STATUS.get(known, 0)


def status_label(status) -> str:
    """Display label for a status; unknown values are shown as given."""
    known = _coerce(status)
    if known is not None:
        return _STATUS_LABELS[known]
    return str(status) if status else "Unknown"


def progress_percentage(stage: int) -> int:
    """Share of the pipeline reached, counting the current stage."""
    if stage < 0:
        return 0
    return round((stage + 1) * 100 / len(PIPELINE_STAGES))


def build_stages(stage: int) -> list[PipelineStage]:
    return [
        PipelineStage(
            index=index,
            title=title,
            description=description,
            is_completed=index < stage,
            is_current=index == stage,
        )
        for index, (title, description) in enumerate(PIPELINE_STAGES)
    ]


async def get_application_status(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
) -> ApplicationStatusResponse | None:
    """Build an aggregated status summary for an application.

    Returns None if the application is not found or not accessible.
    """
    checklist = await get_checklist(session, user, application_id)
    if checklist is None:
        return None

    status = checklist.application_status
    stage = stage_for_status(status)

    pending_actions: list[PendingAction] = []
    if status == ApplicationStatus.DRAFT:
        for item in checklist.items:
            if item.is_required and not item.is_submitted:
                pending_actions.append(
                    PendingAction(action_type="upload_document", description=f"Upload {item.name}")
                )
    if status not in ApplicationStatus.terminal_statuses():
        for item in checklist.items:
            if item.is_submitted and item.status == DocumentStatus.REJECTED:
                pending_actions.append(
                    PendingAction(
                        action_type="resubmit_document",
                        description=f"Re-upload {item.name}"
                        + (f" ({item.verification_notes})" if item.verification_notes else ""),
                    )
                )
    if checklist.can_submit:
        pending_actions.append(
            PendingAction(action_type="submit_application", description="Submit your application")
        )

    return ApplicationStatusResponse(
        application_id=application_id,
        status=status,
        status_label=status_label(status),
        stage_index=stage,
        progress_percentage=progress_percentage(stage),
        stages=build_stages(stage),
        metrics=checklist.metrics,
        can_submit=checklist.can_submit,
        pending_actions=pending_actions,
    )
