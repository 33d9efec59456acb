# This project was developed with assistance from AI tools.
"""Mock database utilities for functional tests.

Provides an AsyncMock session whose single result object answers every
query shape used by the application, checklist and audit services:
  1. ``.unique().scalar_one_or_none()`` -- the scoped application lookup
  2. ``.scalars().all()`` -- the active document types
  3. ``.scalar_one_or_none()`` -- the latest audit event (none yet)
"""

from datetime import UTC, datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from db import get_db
from db.enums import ApplicationStatus, ApplicationType, DocumentCategory, DocumentStatus

from portal.middleware.auth import get_current_user
from portal.schemas.auth import UserContext

_NOW = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


def make_document_type(type_id: int, name: str, priority: int | None = None):
    return SimpleNamespace(
        id=type_id,
        name=name,
        description=None,
        category=DocumentCategory.OTHER,
        is_required=True,
        priority=priority if priority is not None else type_id,
    )


def make_document(doc_id: int, type_id: int, status=DocumentStatus.PENDING):
    return SimpleNamespace(
        id=doc_id,
        document_type_id=type_id,
        status=status,
        file_name=f"upload-{doc_id}.pdf",
        created_at=_NOW,
        verified_at=None,
        verification_notes=None,
        document_type=None,
    )


def make_application(app_id: int = 101, status=ApplicationStatus.DRAFT, documents=()):
    """Attribute bag carrying every column ApplicationResponse serializes."""
    return SimpleNamespace(
        id=app_id,
        student_id=7,
        category_id=1,
        subcategory_id=1,
        school_id=1,
        type=ApplicationType.NEW,
        status=status,
        requested_amount=Decimal("20000.00"),
        approved_amount=None,
        financial_need_description=None,
        reason_for_renewal=None,
        rejection_reason=None,
        notes=None,
        submitted_at=None,
        reviewed_at=None,
        approved_at=None,
        created_at=_NOW,
        updated_at=_NOW,
        financial_information=None,
        academic_record=None,
        documents=list(documents),
    )


def make_mock_session(application: object | None = None, doc_types: list | None = None) -> AsyncMock:
    """Build an AsyncMock session that returns predictable query results.

    Args:
        application: Object returned by scoped application lookups, or None
            to simulate a not-found / out-of-scope application.
        doc_types: Active required document types.
    """
    session = AsyncMock()

    mock_result = MagicMock()
    mock_result.unique.return_value.scalar_one_or_none.return_value = application
    mock_result.scalars.return_value.all.return_value = doc_types or []
    mock_result.scalar_one_or_none.return_value = None
    mock_result.scalar.return_value = 0

    session.execute = AsyncMock(return_value=mock_result)
    # session.add() is synchronous in SQLAlchemy -- use MagicMock to avoid
    # RuntimeWarning about unawaited coroutines from AsyncMock.
    session.add = MagicMock()
    return session


def configure_app_for_persona(app, user: UserContext, session: AsyncMock) -> None:
    """Override get_current_user and get_db on the real app."""

    async def fake_user():
        return user

    async def fake_db():
        yield session

    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_db] = fake_db
