# This project was developed with assistance from AI tools.
"""Application status response schemas."""

from db.enums import ApplicationStatus
from pydantic import BaseModel

from .checklist import CompletionMetrics


class PendingAction(BaseModel):
    """A single action the applicant needs to take."""

    action_type: str
    description: str


class PipelineStage(BaseModel):
    """One step of the approval and disbursement pipeline."""

    index: int
    title: str
    description: str
    is_completed: bool = False
    is_current: bool = False


class ApplicationStatusResponse(BaseModel):
    """Aggregated status summary for an application."""

    application_id: int
    status: ApplicationStatus
    status_label: str
    stage_index: int
    progress_percentage: int
    stages: list[PipelineStage]
    metrics: CompletionMetrics
    can_submit: bool
    pending_actions: list[PendingAction]
