# This project was developed with assistance from AI tools.
"""Tests for the application service and routes."""

from datetime import UTC, datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from db import AcademicRecord, Application, FinancialInformation, get_db
from db.enums import ApplicationStatus, ApplicationType, UserRole
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import ValidationError

from portal.middleware.auth import get_current_user
from portal.routes.applications import router
from portal.schemas.application import AcademicInput, ApplicationCreate, FinancialInput
from portal.schemas.auth import DataScope, UserContext
from portal.schemas.checklist import CompletionMetrics
from portal.services.application import (
    ActiveApplicationExistsError,
    InvalidTransitionError,
    create_application,
    get_or_create_student,
    update_draft,
)
from portal.services.submission import SUBMISSION_BLOCKED_MESSAGE, SubmissionBlockedError

_SERVICE = "portal.services.application"
_NOW = datetime(2026, 3, 1, tzinfo=UTC)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_user(role: UserRole = UserRole.CITIZEN) -> UserContext:
    scope = DataScope(full_pipeline=True)
    if role == UserRole.CITIZEN:
        scope = DataScope(own_data_only=True, user_id="student-1")
    return UserContext(
        user_id="student-1" if role == UserRole.CITIZEN else f"{role.value}-1",
        role=role,
        email="juan@example.com",
        name="Juan Dela Cruz",
        data_scope=scope,
    )


def _app_view(app_id=1, status=ApplicationStatus.DRAFT, **overrides):
    """Attribute bag shaped like an Application row for response serialization."""
    fields = {
        "id": app_id,
        "student_id": 7,
        "category_id": 1,
        "subcategory_id": 2,
        "school_id": 3,
        "type": ApplicationType.NEW,
        "status": status,
        "requested_amount": Decimal("10000.00"),
        "approved_amount": None,
        "financial_need_description": None,
        "reason_for_renewal": None,
        "rejection_reason": None,
        "notes": None,
        "submitted_at": None,
        "reviewed_at": None,
        "approved_at": None,
        "created_at": _NOW,
        "updated_at": _NOW,
        "financial_information": None,
        "academic_record": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _add_session() -> AsyncMock:
    session = AsyncMock()

    # session.add() is synchronous in SQLAlchemy -- assign ids like flush would
    def track_add(obj):
        if isinstance(obj, Application):
            obj.id = 11

    session.add = MagicMock(side_effect=track_add)
    return session


# ---------------------------------------------------------------------------
# Schema validation
# ---------------------------------------------------------------------------


def test_financial_input_rejects_unknown_income_range():
    with pytest.raises(ValidationError):
        FinancialInput(income_range="Millions")


def test_academic_input_rejects_out_of_range_gwa():
    with pytest.raises(ValidationError):
        AcademicInput(general_weighted_average=0.5)


def test_academic_input_accepts_percentage_grade():
    assert AcademicInput(general_weighted_average=93, gwa_format="percentage").gwa_format == "percentage"


# ---------------------------------------------------------------------------
# create_application service
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_application_normalizes_financial_and_academic_data():
    session = _add_session()
    data = ApplicationCreate(
        category_id=1,
        requested_amount=Decimal("10000"),
        financial=FinancialInput(income_range="100,000-200,000", number_of_siblings=2),
        academic=AcademicInput(general_weighted_average=93, gwa_format="percentage"),
    )
    created_view = _app_view(11)

    with (
        patch(f"{_SERVICE}.get_or_create_student", new=AsyncMock(return_value=SimpleNamespace(id=7))),
        patch(f"{_SERVICE}.find_active_application", new=AsyncMock(return_value=None)),
        patch(f"{_SERVICE}.audit_user_event", new=AsyncMock()) as mock_audit,
        patch(f"{_SERVICE}.get_application", new=AsyncMock(return_value=created_view)),
    ):
        result = await create_application(session, _make_user(), data)

    assert result is created_view
    added = [c.args[0] for c in session.add.call_args_list]
    application = next(o for o in added if isinstance(o, Application))
    financial = next(o for o in added if isinstance(o, FinancialInformation))
    academic = next(o for o in added if isinstance(o, AcademicRecord))

    assert application.status == ApplicationStatus.DRAFT
    assert application.student_id == 7
    assert financial.application_id == 11
    assert financial.total_annual_income == Decimal("150000.0")
    assert financial.monthly_income == Decimal("12500.00")
    assert academic.general_weighted_average == Decimal("1.5")
    assert mock_audit.await_args.args[2] == "application_created"
    session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_application_blocked_by_active_application():
    session = _add_session()

    with (
        patch(f"{_SERVICE}.get_or_create_student", new=AsyncMock(return_value=SimpleNamespace(id=7))),
        patch(f"{_SERVICE}.find_active_application", new=AsyncMock(return_value=4)),
    ):
        with pytest.raises(ActiveApplicationExistsError) as exc_info:
            await create_application(session, _make_user(), ApplicationCreate())

    assert exc_info.value.application_id == 4
    assert "#4" in str(exc_info.value)
    session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_or_create_student_falls_back_to_token_name():
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    session = _add_session()
    session.execute = AsyncMock(return_value=result)

    student = await get_or_create_student(session, _make_user())

    assert student.keycloak_user_id == "student-1"
    assert student.first_name == "Juan"
    assert student.last_name == "Cruz"
    assert student.email == "juan@example.com"
    session.flush.assert_awaited_once()


# ---------------------------------------------------------------------------
# update_draft service
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_draft_applies_known_fields_only():
    app = _app_view(status=ApplicationStatus.DRAFT)

    with patch(f"{_SERVICE}.get_application", new=AsyncMock(return_value=app)):
        await update_draft(
            AsyncMock(), _make_user(), 1, requested_amount=Decimal("5000"), status="approved"
        )

    assert app.requested_amount == Decimal("5000")
    assert app.status == ApplicationStatus.DRAFT


@pytest.mark.asyncio
async def test_update_submitted_application_is_rejected():
    app = _app_view(status=ApplicationStatus.SUBMITTED)

    with patch(f"{_SERVICE}.get_application", new=AsyncMock(return_value=app)):
        with pytest.raises(InvalidTransitionError):
            await update_draft(AsyncMock(), _make_user(), 1, requested_amount=Decimal("1"))


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def _client(user: UserContext) -> TestClient:
    app = FastAPI()
    app.include_router(router, prefix="/api/applications")

    async def fake_user():
        return user

    async def fake_db():
        yield AsyncMock()

    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_db] = fake_db
    return TestClient(app)


def test_list_applications_paginates():
    with patch(
        f"{_SERVICE}.list_applications",
        new=AsyncMock(return_value=([_app_view(1), _app_view(2)], 5)),
    ):
        resp = _client(_make_user(UserRole.STAFF)).get("/api/applications/?offset=0&limit=2")

    assert resp.status_code == 200
    body = resp.json()
    assert [a["id"] for a in body["data"]] == [1, 2]
    assert body["pagination"] == {"total": 5, "offset": 0, "limit": 2, "has_more": True}


def test_create_application_returns_201():
    with patch(f"{_SERVICE}.create_application", new=AsyncMock(return_value=_app_view(11))):
        resp = _client(_make_user()).post("/api/applications/", json={"category_id": 1})

    assert resp.status_code == 201
    assert resp.json()["status"] == "draft"


def test_create_application_conflict_when_active_exists():
    with patch(
        f"{_SERVICE}.create_application",
        new=AsyncMock(side_effect=ActiveApplicationExistsError(4)),
    ):
        resp = _client(_make_user()).post("/api/applications/", json={})

    assert resp.status_code == 409
    assert "#4" in resp.json()["detail"]


def test_create_application_forbidden_for_staff():
    resp = _client(_make_user(UserRole.STAFF)).post("/api/applications/", json={})
    assert resp.status_code == 403


def test_get_application_404_when_not_visible():
    with patch(f"{_SERVICE}.get_application", new=AsyncMock(return_value=None)):
        resp = _client(_make_user()).get("/api/applications/99")
    assert resp.status_code == 404


def test_patch_application_requires_fields():
    resp = _client(_make_user()).patch("/api/applications/1", json={})
    assert resp.status_code == 400


def test_patch_submitted_application_conflicts():
    with patch(
        f"{_SERVICE}.update_draft",
        new=AsyncMock(side_effect=InvalidTransitionError("Only draft applications can be edited")),
    ):
        resp = _client(_make_user()).patch("/api/applications/1", json={"requested_amount": "1"})
    assert resp.status_code == 409


def test_submit_blocked_returns_422_with_message():
    metrics = CompletionMetrics(
        required_count=3,
        submitted_required_count=1,
        verified_required_count=0,
        completion_percentage=33,
    )
    with patch(
        "portal.routes.applications.submit_application",
        new=AsyncMock(side_effect=SubmissionBlockedError(metrics)),
    ):
        resp = _client(_make_user()).post("/api/applications/1/submit")

    assert resp.status_code == 422
    assert resp.json()["detail"] == SUBMISSION_BLOCKED_MESSAGE


def test_submit_success():
    submitted = _app_view(status=ApplicationStatus.SUBMITTED, submitted_at=_NOW)
    with patch(
        "portal.routes.applications.submit_application", new=AsyncMock(return_value=submitted)
    ):
        resp = _client(_make_user()).post("/api/applications/1/submit")

    assert resp.status_code == 200
    assert resp.json()["status"] == "submitted"


def test_submit_non_draft_conflicts():
    with patch(
        "portal.routes.applications.submit_application",
        new=AsyncMock(side_effect=InvalidTransitionError("only drafts can be submitted")),
    ):
        resp = _client(_make_user()).post("/api/applications/1/submit")
    assert resp.status_code == 409


def test_transition_forbidden_for_citizen():
    resp = _client(_make_user()).post(
        "/api/applications/1/transition", json={"status": "reviewed"}
    )
    assert resp.status_code == 403


def test_transition_by_staff():
    reviewed = _app_view(status=ApplicationStatus.REVIEWED, reviewed_at=_NOW)
    with patch(
        "portal.routes.applications.transition_status", new=AsyncMock(return_value=reviewed)
    ) as mock_transition:
        resp = _client(_make_user(UserRole.STAFF)).post(
            "/api/applications/1/transition",
            json={"status": "reviewed", "notes": "Interview done"},
        )

    assert resp.status_code == 200
    assert resp.json()["status"] == "reviewed"
    assert mock_transition.await_args.args[3] == ApplicationStatus.REVIEWED
    assert mock_transition.await_args.kwargs["notes"] == "Interview done"


def test_invalid_transition_conflicts():
    with patch(
        "portal.routes.applications.transition_status",
        new=AsyncMock(side_effect=InvalidTransitionError("Cannot transition")),
    ):
        resp = _client(_make_user(UserRole.STAFF)).post(
            "/api/applications/1/transition", json={"status": "released"}
        )
    assert resp.status_code == 409
