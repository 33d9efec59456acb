# This project was developed with assistance from AI tools.
"""Application routes with RBAC enforcement."""

from db import get_db
from db.enums import ApplicationStatus, UserRole
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser, require_roles
from ..schemas import Pagination
from ..schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationUpdate,
    StatusTransitionRequest,
    StepValidationRequest,
    StepValidationResponse,
)
from ..schemas.status import ApplicationStatusResponse
from ..services import application as app_service
from ..services.application import ActiveApplicationExistsError, InvalidTransitionError
from ..services.intake_validation import validate_step
from ..services.status import get_application_status
from ..services.submission import SubmissionBlockedError, submit_application, transition_status

router = APIRouter()

_ALL_AUTHENTICATED = (UserRole.ADMIN, UserRole.STAFF, UserRole.CITIZEN)
_APPLICANT_ROLES = (UserRole.ADMIN, UserRole.CITIZEN)
_REVIEWER_ROLES = (UserRole.ADMIN, UserRole.STAFF)


def _not_found(application_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Application {application_id} not found",
    )


@router.get(
    "/",
    response_model=ApplicationListResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def list_applications(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    filter_status: ApplicationStatus | None = None,
) -> ApplicationListResponse:
    """List applications visible to the current user's role and data scope."""
    applications, total = await app_service.list_applications(
        session,
        user,
        offset=offset,
        limit=limit,
        filter_status=filter_status,
    )
    return ApplicationListResponse(
        data=[ApplicationResponse.model_validate(app) for app in applications],
        pagination=Pagination(
            total=total,
            offset=offset,
            limit=limit,
            has_more=(offset + limit) < total,
        ),
    )


@router.post(
    "/",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*_APPLICANT_ROLES))],
)
async def create_application(
    body: ApplicationCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    """Start a new application as a draft."""
    try:
        app = await app_service.create_application(session, user, body)
    except ActiveApplicationExistsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return ApplicationResponse.model_validate(app)


@router.post(
    "/validate-step",
    response_model=StepValidationResponse,
    dependencies=[Depends(require_roles(*_APPLICANT_ROLES))],
)
async def validate_application_step(body: StepValidationRequest) -> StepValidationResponse:
    """Check one wizard step's fields before the applicant moves on."""
    errors = validate_step(body.step, body.data, body.gwa_format)
    return StepValidationResponse(step=body.step, is_valid=not errors, errors=errors)


@router.get(
    "/{application_id}",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def get_application(
    application_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    """Get a single application by ID."""
    app = await app_service.get_application(session, user, application_id)
    if app is None:
        raise _not_found(application_id)
    return ApplicationResponse.model_validate(app)


@router.patch(
    "/{application_id}",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(*_APPLICANT_ROLES))],
)
async def update_application(
    application_id: int,
    body: ApplicationUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    """Edit a draft application."""
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update",
        )
    try:
        app = await app_service.update_draft(session, user, application_id, **updates)
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if app is None:
        raise _not_found(application_id)
    return ApplicationResponse.model_validate(app)


@router.post(
    "/{application_id}/submit",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(*_APPLICANT_ROLES))],
)
async def submit(
    application_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    """Submit a draft once every required document is uploaded."""
    try:
        app = await submit_application(session, user, application_id)
    except SubmissionBlockedError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if app is None:
        raise _not_found(application_id)
    return ApplicationResponse.model_validate(app)


@router.post(
    "/{application_id}/transition",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(*_REVIEWER_ROLES))],
)
async def transition(
    application_id: int,
    body: StatusTransitionRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    """Move an application along the review and disbursement pipeline."""
    try:
        app = await transition_status(
            session,
            user,
            application_id,
            body.status,
            notes=body.notes,
            rejection_reason=body.rejection_reason,
            approved_amount=body.approved_amount,
        )
    except SubmissionBlockedError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if app is None:
        raise _not_found(application_id)
    return ApplicationResponse.model_validate(app)


@router.get(
    "/{application_id}/status",
    response_model=ApplicationStatusResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def get_status(
    application_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationStatusResponse:
    """Pipeline stage, document completion and next actions for an application."""
    result = await get_application_status(session, user, application_id)
    if result is None:
        raise _not_found(application_id)
    return result
