# This project was developed with assistance from AI tools.
"""Application service with role-based data scope filtering.

Every query is filtered through the caller's DataScope so that citizens see
only their own applications while staff and admins see all of them.
"""

import logging
from decimal import Decimal

from db import AcademicRecord, Application, FinancialInformation, Student
from db.enums import ApplicationStatus
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..schemas.application import AcademicInput, ApplicationCreate, FinancialInput, StudentProfile
from ..schemas.auth import UserContext
from .audit import EVENT_APPLICATION_CREATED, audit_user_event
from .normalization import monthly_from_annual, normalize_gwa, parse_income_range
from .scope import apply_data_scope

logger = logging.getLogger(__name__)


class InvalidTransitionError(ValueError):
    """Raised when an application status change is not allowed."""

    pass


class ActiveApplicationExistsError(ValueError):
    """Raised when a student already has an application in progress."""

    def __init__(self, application_id: int):
        self.application_id = application_id
        super().__init__(
            f"You already have an active application (#{application_id}). "
            "A new application can be started once it is closed."
        )


_ACTIVE_STATUSES = ApplicationStatus.active_statuses()

_DETAIL_OPTIONS = (
    selectinload(Application.financial_information),
    selectinload(Application.academic_record),
)


async def list_applications(
    session: AsyncSession,
    user: UserContext,
    *,
    offset: int = 0,
    limit: int = 20,
    filter_status: ApplicationStatus | None = None,
) -> tuple[list[Application], int]:
    """Return applications visible to the current user, newest first."""
    count_stmt = select(func.count(func.distinct(Application.id)))
    count_stmt = apply_data_scope(count_stmt, user.data_scope, user)
    if filter_status is not None:
        count_stmt = count_stmt.where(Application.status == filter_status)
    total = (await session.execute(count_stmt)).scalar() or 0

    stmt = (
        select(Application)
        .options(*_DETAIL_OPTIONS)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .offset(offset)
        .limit(limit)
    )
    stmt = apply_data_scope(stmt, user.data_scope, user)
    if filter_status is not None:
        stmt = stmt.where(Application.status == filter_status)
    result = await session.execute(stmt)
    applications = result.unique().scalars().all()

    return applications, total


async def get_application(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
) -> Application | None:
    """Return a single application if visible to the current user.

    Returns None (which the route maps to 404) for out-of-scope applications
    rather than 403, to avoid leaking existence of resources.
    """
    stmt = select(Application).options(*_DETAIL_OPTIONS).where(Application.id == application_id)
    stmt = apply_data_scope(stmt, user.data_scope, user)
    result = await session.execute(stmt)
    return result.unique().scalar_one_or_none()


async def get_or_create_student(
    session: AsyncSession,
    user: UserContext,
    profile: StudentProfile | None = None,
) -> Student:
    """Find the caller's student record, creating it from the profile or token."""
    stmt = select(Student).where(Student.keycloak_user_id == user.user_id)
    result = await session.execute(stmt)
    student = result.scalar_one_or_none()
    if student is not None:
        return student

    if profile is not None:
        first, middle, last = profile.first_name, profile.middle_name, profile.last_name
        contact = profile.contact_number
    else:
        parts = user.name.split() if user.name else []
        first = parts[0] if parts else "Unknown"
        middle = None
        last = parts[-1] if len(parts) > 1 else ""
        contact = None

    student = Student(
        keycloak_user_id=user.user_id,
        first_name=first,
        middle_name=middle,
        last_name=last,
        email=user.email,
        contact_number=contact,
    )
    session.add(student)
    await session.flush()
    logger.info("Created student record %s for user %s", student.id, user.user_id)
    return student


async def find_active_application(session: AsyncSession, student_id: int) -> int | None:
    """Return the id of the student's in-progress application, if any."""
    stmt = (
        select(Application.id)
        .where(
            Application.student_id == student_id,
            Application.status.in_([s.value for s in _ACTIVE_STATUSES]),
        )
        .limit(1)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


def _financial_record(data: FinancialInput) -> FinancialInformation:
    annual = parse_income_range(data.income_range)
    monthly = data.monthly_income
    if monthly is None and annual:
        monthly = monthly_from_annual(annual)
    return FinancialInformation(
        income_range=data.income_range,
        total_annual_income=Decimal(str(annual)) if data.income_range else None,
        monthly_income=monthly,
        number_of_children=data.number_of_children,
        number_of_siblings=data.number_of_siblings,
        home_ownership_status=data.home_ownership_status,
        is_4ps_beneficiary=data.is_4ps_beneficiary,
    )


def _academic_record(data: AcademicInput) -> AcademicRecord:
    gwa = None
    if data.general_weighted_average is not None:
        gwa = Decimal(str(normalize_gwa(data.general_weighted_average, data.gwa_format)))
    return AcademicRecord(
        educational_level=data.educational_level,
        program=data.program,
        year_level=data.year_level,
        school_year=data.school_year,
        school_term=data.school_term,
        units_enrolled=data.units_enrolled,
        units_completed=data.units_completed,
        general_weighted_average=gwa,
    )


async def create_application(
    session: AsyncSession,
    user: UserContext,
    data: ApplicationCreate,
) -> Application:
    """Create a draft application for the current user.

    Raises ActiveApplicationExistsError when the student already has an
    application that is neither rejected nor cancelled.
    """
    student = await get_or_create_student(session, user, data.student)

    active_id = await find_active_application(session, student.id)
    if active_id is not None:
        raise ActiveApplicationExistsError(active_id)

    application = Application(
        student_id=student.id,
        category_id=data.category_id,
        subcategory_id=data.subcategory_id,
        school_id=data.school_id,
        type=data.type,
        status=ApplicationStatus.DRAFT,
        requested_amount=data.requested_amount,
        financial_need_description=data.financial_need_description,
        reason_for_renewal=data.reason_for_renewal,
    )
    session.add(application)
    await session.flush()

    if data.financial is not None:
        financial = _financial_record(data.financial)
        financial.application_id = application.id
        session.add(financial)
    if data.academic is not None:
        academic = _academic_record(data.academic)
        academic.application_id = application.id
        session.add(academic)

    app_id = application.id  # capture before commit expires the object
    await audit_user_event(
        session, user, EVENT_APPLICATION_CREATED, app_id, type=data.type.value,
    )
    await session.commit()
    logger.info("Application %s created as draft by %s", app_id, user.user_id)
    # Re-query with eager loading to avoid lazy-load in async context
    return await get_application(session, user, app_id)


_UPDATABLE_FIELDS = {
    "category_id",
    "subcategory_id",
    "school_id",
    "requested_amount",
    "financial_need_description",
    "reason_for_renewal",
}


async def update_draft(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
    **updates,
) -> Application | None:
    """Edit a draft application.

    Returns None if the application is not visible. Raises
    InvalidTransitionError once the application has left ``draft``.
    Status changes go through the submission service instead.
    """
    app = await get_application(session, user, application_id)
    if app is None:
        return None

    if app.status != ApplicationStatus.DRAFT:
        raise InvalidTransitionError(
            f"Only draft applications can be edited (current status: '{app.status.value}')."
        )

    for field, value in updates.items():
        if field not in _UPDATABLE_FIELDS:
            continue
        setattr(app, field, value)

    await session.commit()
    return await get_application(session, user, application_id)
