# This project was developed with assistance from AI tools.
"""Tests for document upload, listing and verification."""

from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from botocore.exceptions import ClientError
from db import get_db
from db.enums import ApplicationStatus, DocumentStatus, UserRole
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portal.core.config import settings
from portal.middleware.auth import get_current_user
from portal.routes.documents import router
from portal.schemas.auth import DataScope, UserContext
from portal.services.document import (
    DocumentTooLargeError,
    DocumentUploadError,
    DocumentVerificationError,
    upload_document,
    verify_document,
)

_MODULE = "portal.services.document"
_PDF = b"%PDF-1.4 fake"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_user(role: UserRole = UserRole.CITIZEN) -> UserContext:
    """Build a UserContext for the given role."""
    scope = DataScope(full_pipeline=True)
    if role == UserRole.CITIZEN:
        scope = DataScope(own_data_only=True, user_id="student-1")
    return UserContext(
        user_id="student-1" if role == UserRole.CITIZEN else "staff-1",
        role=role,
        email="user@example.com",
        name="Test User",
        data_scope=scope,
    )


def _application(status=ApplicationStatus.DRAFT):
    return SimpleNamespace(id=100, student_id=7, status=status)


def _upload_session(application, doc_type=None, existing=None) -> AsyncMock:
    """Session for the upload flow: application, document type, existing document."""
    app_result = MagicMock()
    app_result.unique.return_value.scalar_one_or_none.return_value = application
    type_result = MagicMock()
    type_result.scalar_one_or_none.return_value = doc_type
    existing_result = MagicMock()
    existing_result.scalar_one_or_none.return_value = existing

    session = AsyncMock()
    session.execute = AsyncMock(side_effect=[app_result, type_result, existing_result])

    # session.add() is synchronous in SQLAlchemy
    def track_add(obj):
        obj.id = 501

    session.add = MagicMock(side_effect=track_add)
    return session


def _mock_storage() -> MagicMock:
    storage = MagicMock()
    storage.build_object_key.side_effect = lambda app_id, doc_id, name: f"{app_id}/{doc_id}/{name}"
    storage.upload_file = AsyncMock()
    storage.delete_file = AsyncMock()
    return storage


# ---------------------------------------------------------------------------
# upload_document service
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_upload_creates_pending_document():
    session = _upload_session(_application(), doc_type=SimpleNamespace(id=3))
    storage = _mock_storage()

    with (
        patch(f"{_MODULE}.get_storage_service", return_value=storage),
        patch(f"{_MODULE}.audit_user_event", new=AsyncMock()) as mock_audit,
    ):
        doc = await upload_document(
            session, _make_user(), 100, 3, "transcript.pdf", "application/pdf", _PDF
        )

    assert doc.id == 501
    assert doc.application_id == 100
    assert doc.student_id == 7
    assert doc.document_type_id == 3
    assert doc.status == DocumentStatus.PENDING
    assert doc.file_path == "100/501/transcript.pdf"
    assert doc.uploaded_by == "student-1"
    storage.upload_file.assert_awaited_once_with(_PDF, "100/501/transcript.pdf", "application/pdf")
    storage.delete_file.assert_not_awaited()
    assert mock_audit.await_args.kwargs["replaced"] is False
    session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_reupload_replaces_document_and_resets_verification():
    existing = SimpleNamespace(
        id=42,
        application_id=100,
        document_type_id=3,
        file_path="100/42/old.pdf",
        status=DocumentStatus.REJECTED,
        verified_by="staff-1",
        verified_at=datetime(2026, 3, 1, tzinfo=UTC),
        verification_notes="Blurry",
        created_at=datetime(2026, 3, 1, tzinfo=UTC),
    )
    session = _upload_session(_application(), doc_type=SimpleNamespace(id=3), existing=existing)
    storage = _mock_storage()

    with (
        patch(f"{_MODULE}.get_storage_service", return_value=storage),
        patch(f"{_MODULE}.audit_user_event", new=AsyncMock()) as mock_audit,
    ):
        doc = await upload_document(
            session, _make_user(), 100, 3, "new.png", "image/png", b"\x89PNG"
        )

    assert doc is existing
    session.add.assert_not_called()
    assert doc.status == DocumentStatus.PENDING
    assert doc.verified_by is None
    assert doc.verified_at is None
    assert doc.verification_notes is None
    assert doc.file_path == "100/42/new.png"
    storage.delete_file.assert_awaited_once_with("100/42/old.pdf")
    assert mock_audit.await_args.kwargs["replaced"] is True


@pytest.mark.asyncio
async def test_reupload_survives_failed_cleanup():
    existing = SimpleNamespace(
        id=42, file_path="100/42/old.pdf", status=DocumentStatus.PENDING,
        verified_by=None, verified_at=None, verification_notes=None, created_at=None,
    )
    session = _upload_session(_application(), doc_type=SimpleNamespace(id=3), existing=existing)
    storage = _mock_storage()
    storage.delete_file.side_effect = ClientError(
        {"Error": {"Code": "500", "Message": "boom"}}, "DeleteObject"
    )

    with (
        patch(f"{_MODULE}.get_storage_service", return_value=storage),
        patch(f"{_MODULE}.audit_user_event", new=AsyncMock()),
    ):
        doc = await upload_document(
            session, _make_user(), 100, 3, "new.pdf", "application/pdf", _PDF
        )

    assert doc.file_path == "100/42/new.pdf"


@pytest.mark.asyncio
async def test_upload_rejects_unsupported_content_type():
    with pytest.raises(DocumentUploadError, match="Unsupported content type"):
        await upload_document(AsyncMock(), _make_user(), 100, 3, "a.exe", "application/x-msdownload", b"MZ")


@pytest.mark.asyncio
async def test_upload_rejects_empty_file():
    with pytest.raises(DocumentUploadError, match="empty"):
        await upload_document(AsyncMock(), _make_user(), 100, 3, "a.pdf", "application/pdf", b"")


@pytest.mark.asyncio
async def test_upload_rejects_oversized_file(monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_MAX_SIZE_MB", 1)
    too_big = b"x" * (1024 * 1024 + 1)

    with pytest.raises(DocumentTooLargeError):
        await upload_document(AsyncMock(), _make_user(), 100, 3, "a.pdf", "application/pdf", too_big)


@pytest.mark.asyncio
async def test_upload_to_invisible_application_returns_none():
    session = _upload_session(None)
    assert (
        await upload_document(session, _make_user(), 100, 3, "a.pdf", "application/pdf", _PDF)
        is None
    )


@pytest.mark.asyncio
async def test_upload_to_closed_application_is_rejected():
    session = _upload_session(_application(ApplicationStatus.REJECTED))
    with pytest.raises(DocumentUploadError, match="rejected application"):
        await upload_document(session, _make_user(), 100, 3, "a.pdf", "application/pdf", _PDF)


@pytest.mark.asyncio
async def test_upload_unknown_document_type_is_rejected():
    session = _upload_session(_application(), doc_type=None)
    with pytest.raises(DocumentUploadError, match="Unknown document type: 99"):
        await upload_document(session, _make_user(), 100, 99, "a.pdf", "application/pdf", _PDF)


# ---------------------------------------------------------------------------
# verify_document service
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_verify_document_records_verdict():
    doc = SimpleNamespace(
        id=5, application_id=100, status=DocumentStatus.PENDING,
        verification_notes=None, verified_by=None, verified_at=None,
    )
    session = AsyncMock()

    with (
        patch(f"{_MODULE}.get_document", new=AsyncMock(return_value=doc)),
        patch(f"{_MODULE}.audit_user_event", new=AsyncMock()) as mock_audit,
    ):
        result = await verify_document(
            session, _make_user(UserRole.STAFF), 5, DocumentStatus.REJECTED, "Expired ID"
        )

    assert result is doc
    assert doc.status == DocumentStatus.REJECTED
    assert doc.verification_notes == "Expired ID"
    assert doc.verified_by == "staff-1"
    assert doc.verified_at is not None
    assert mock_audit.await_args.kwargs == {"document_id": 5, "status": "rejected"}


@pytest.mark.asyncio
async def test_verify_document_rejects_non_verdict_status():
    with pytest.raises(DocumentVerificationError):
        await verify_document(AsyncMock(), _make_user(UserRole.STAFF), 5, DocumentStatus.MISSING)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def _client(user: UserContext) -> TestClient:
    app = FastAPI()
    app.include_router(router, prefix="/api")

    async def fake_user():
        return user

    async def fake_db():
        yield AsyncMock()

    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_db] = fake_db
    return TestClient(app)


def _uploaded_doc():
    return SimpleNamespace(
        id=501,
        application_id=100,
        student_id=7,
        document_type_id=3,
        status=DocumentStatus.PENDING,
        file_name="transcript.pdf",
        file_path="100/501/transcript.pdf",
        created_at=datetime(2026, 3, 2, tzinfo=UTC),
    )


def test_upload_endpoint_returns_201():
    with patch(f"{_MODULE}.upload_document", new=AsyncMock(return_value=_uploaded_doc())) as mock_upload:
        resp = _client(_make_user()).post(
            "/api/applications/100/documents",
            files={"file": ("transcript.pdf", _PDF, "application/pdf")},
            data={"document_type_id": "3"},
        )

    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == 501
    assert body["status"] == "pending"
    assert mock_upload.await_args.kwargs["document_type_id"] == 3
    assert mock_upload.await_args.kwargs["content_type"] == "application/pdf"


def test_upload_endpoint_requires_document_type():
    resp = _client(_make_user()).post(
        "/api/applications/100/documents",
        files={"file": ("transcript.pdf", _PDF, "application/pdf")},
    )
    assert resp.status_code == 422


def test_upload_endpoint_maps_too_large_to_413():
    with patch(
        f"{_MODULE}.upload_document", new=AsyncMock(side_effect=DocumentTooLargeError("too big"))
    ):
        resp = _client(_make_user()).post(
            "/api/applications/100/documents",
            files={"file": ("a.pdf", _PDF, "application/pdf")},
            data={"document_type_id": "3"},
        )
    assert resp.status_code == 413


def test_upload_endpoint_maps_validation_error_to_422():
    with patch(
        f"{_MODULE}.upload_document",
        new=AsyncMock(side_effect=DocumentUploadError("Unsupported content type: text/plain")),
    ):
        resp = _client(_make_user()).post(
            "/api/applications/100/documents",
            files={"file": ("a.txt", b"hello", "text/plain")},
            data={"document_type_id": "3"},
        )
    assert resp.status_code == 422
    assert "Unsupported content type" in resp.json()["detail"]


def test_upload_endpoint_404_for_invisible_application():
    with patch(f"{_MODULE}.upload_document", new=AsyncMock(return_value=None)):
        resp = _client(_make_user()).post(
            "/api/applications/100/documents",
            files={"file": ("a.pdf", _PDF, "application/pdf")},
            data={"document_type_id": "3"},
        )
    assert resp.status_code == 404


def test_list_documents_endpoint():
    doc = SimpleNamespace(
        **vars(_uploaded_doc()),
        verification_notes=None,
        uploaded_by="student-1",
        verified_by=None,
        verified_at=None,
        updated_at=None,
    )
    with patch(f"{_MODULE}.list_documents", new=AsyncMock(return_value=[doc])):
        resp = _client(_make_user()).get("/api/applications/100/documents")

    assert resp.status_code == 200
    assert resp.json()["count"] == 1
    assert resp.json()["data"][0]["file_name"] == "transcript.pdf"


def test_verification_endpoint_forbidden_for_citizen():
    resp = _client(_make_user()).patch(
        "/api/documents/5/verification", json={"status": "verified"}
    )
    assert resp.status_code == 403


def test_verification_endpoint_maps_bad_status_to_422():
    with patch(
        f"{_MODULE}.verify_document",
        new=AsyncMock(side_effect=DocumentVerificationError("bad status")),
    ):
        resp = _client(_make_user(UserRole.STAFF)).patch(
            "/api/documents/5/verification", json={"status": "pending"}
        )
    assert resp.status_code == 422


def test_document_types_endpoint_is_public():
    doc_type = SimpleNamespace(
        id=1,
        name="Transcript of Records (Latest)",
        description=None,
        category="academic",
        is_required=True,
        priority=1,
    )
    app = FastAPI()
    app.include_router(router, prefix="/api")

    async def fake_db():
        yield AsyncMock()

    app.dependency_overrides[get_db] = fake_db

    with patch(f"{_MODULE}.list_required_types", new=AsyncMock(return_value=[doc_type])):
        resp = TestClient(app).get("/api/document-types")

    assert resp.status_code == 200
    assert resp.json()[0]["priority"] == 1
