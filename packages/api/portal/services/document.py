# This project was developed with assistance from AI tools.
"""Document service: required document types, uploads and verification.

An application holds at most one document per document type. Uploading a
type that is already on file replaces it in place and sends it back for
verification.
"""

import logging
from datetime import UTC, datetime

from botocore.exceptions import ClientError
from db import Application, Document, RequiredDocumentType
from db.enums import ApplicationStatus, DocumentStatus
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..schemas.auth import UserContext
from .audit import EVENT_DOCUMENT_UPLOADED, EVENT_DOCUMENT_VERIFIED, audit_user_event
from .scope import apply_data_scope
from .storage import get_storage_service

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "image/jpeg",
    "image/png",
}

VERIFICATION_OUTCOMES = {DocumentStatus.VERIFIED, DocumentStatus.REJECTED}


class DocumentUploadError(Exception):
    """Raised when a document upload fails validation."""


class DocumentTooLargeError(DocumentUploadError):
    """Raised when the file exceeds UPLOAD_MAX_SIZE_MB."""


class DocumentVerificationError(ValueError):
    """Raised for a verification verdict other than verified/rejected."""


async def list_required_types(
    session: AsyncSession,
    *,
    active_only: bool = True,
) -> list[RequiredDocumentType]:
    """Return document types ordered by display priority."""
    stmt = select(RequiredDocumentType).order_by(
        RequiredDocumentType.priority.asc(), RequiredDocumentType.id.asc()
    )
    if active_only:
        stmt = stmt.where(RequiredDocumentType.is_active.is_(True))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_documents(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
) -> list[Document] | None:
    """Return the documents of an application visible to the current user.

    Returns None when the application itself is not visible.
    """
    app_stmt = select(Application.id).where(Application.id == application_id)
    app_stmt = apply_data_scope(app_stmt, user.data_scope, user)
    if (await session.execute(app_stmt)).scalar_one_or_none() is None:
        return None

    stmt = (
        select(Document)
        .where(Document.application_id == application_id)
        .order_by(Document.created_at.desc(), Document.id.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_document(
    session: AsyncSession,
    user: UserContext,
    document_id: int,
) -> Document | None:
    """Return a single document if visible to the current user."""
    stmt = select(Document).where(Document.id == document_id)
    stmt = apply_data_scope(
        stmt,
        user.data_scope,
        user,
        join_to_application=Document.application,
    )
    result = await session.execute(stmt)
    return result.unique().scalar_one_or_none()


def _validate_file(content_type: str, file_data: bytes) -> None:
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise DocumentUploadError(
            f"Unsupported content type: {content_type}. "
            f"Allowed: {', '.join(sorted(ALLOWED_CONTENT_TYPES))}"
        )
    if not file_data:
        raise DocumentUploadError("Uploaded file is empty")
    max_bytes = settings.UPLOAD_MAX_SIZE_MB * 1024 * 1024
    if len(file_data) > max_bytes:
        raise DocumentTooLargeError(
            f"File size {len(file_data)} exceeds maximum of {settings.UPLOAD_MAX_SIZE_MB}MB"
        )


async def upload_document(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
    document_type_id: int,
    filename: str,
    content_type: str,
    file_data: bytes,
) -> Document | None:
    """Store a document file and record it against the application.

    1. Validate content type and size
    2. Verify the application is visible and still open
    3. Verify the document type exists and is active
    4. Create the Document row, or reuse the one already on file for the type
    5. Upload the file to S3 using document.id in the object key
    6. Record file details, reset verification, audit, commit

    Returns None if the application is not found or not accessible.
    """
    _validate_file(content_type, file_data)

    app_stmt = select(Application).where(Application.id == application_id)
    app_stmt = apply_data_scope(app_stmt, user.data_scope, user)
    result = await session.execute(app_stmt)
    application = result.unique().scalar_one_or_none()
    if application is None:
        return None

    if application.status in ApplicationStatus.terminal_statuses():
        raise DocumentUploadError(
            f"Documents cannot be uploaded to a {application.status.value} application"
        )

    type_stmt = select(RequiredDocumentType).where(
        RequiredDocumentType.id == document_type_id,
        RequiredDocumentType.is_active.is_(True),
    )
    doc_type = (await session.execute(type_stmt)).scalar_one_or_none()
    if doc_type is None:
        raise DocumentUploadError(f"Unknown document type: {document_type_id}")

    existing_stmt = select(Document).where(
        Document.application_id == application_id,
        Document.document_type_id == document_type_id,
    )
    doc = (await session.execute(existing_stmt)).scalar_one_or_none()
    previous_path = doc.file_path if doc is not None else None
    if doc is None:
        doc = Document(
            application_id=application_id,
            student_id=application.student_id,
            document_type_id=document_type_id,
        )
        session.add(doc)
        await session.flush()  # Assign doc.id

    storage = get_storage_service()
    object_key = storage.build_object_key(application_id, doc.id, filename)
    await storage.upload_file(file_data, object_key, content_type)

    doc.file_name = filename
    doc.file_path = object_key
    doc.status = DocumentStatus.PENDING
    doc.uploaded_by = user.user_id
    doc.verified_by = None
    doc.verified_at = None
    doc.verification_notes = None
    doc.created_at = datetime.now(UTC)

    await audit_user_event(
        session,
        user,
        EVENT_DOCUMENT_UPLOADED,
        application_id,
        document_id=doc.id,
        document_type_id=document_type_id,
        replaced=previous_path is not None,
    )
    await session.commit()
    await session.refresh(doc)
    logger.info(
        "Document %s (type=%s) uploaded to application %s by %s",
        doc.id,
        document_type_id,
        application_id,
        user.user_id,
    )

    if previous_path and previous_path != object_key:
        try:
            await storage.delete_file(previous_path)
        except ClientError:
            logger.warning("Could not delete superseded object %s", previous_path, exc_info=True)

    return doc


async def verify_document(
    session: AsyncSession,
    user: UserContext,
    document_id: int,
    status: DocumentStatus,
    notes: str | None = None,
) -> Document | None:
    """Record a reviewer's verdict on a document.

    Returns None if the document is not found or not accessible.
    Raises DocumentVerificationError for a status other than verified/rejected.
    """
    if status not in VERIFICATION_OUTCOMES:
        raise DocumentVerificationError(
            f"Verification status must be one of "
            f"{sorted(s.value for s in VERIFICATION_OUTCOMES)}, got '{status.value}'"
        )

    doc = await get_document(session, user, document_id)
    if doc is None:
        return None

    doc.status = status
    doc.verification_notes = notes
    doc.verified_by = user.user_id
    doc.verified_at = datetime.now(UTC)

    await audit_user_event(
        session,
        user,
        EVENT_DOCUMENT_VERIFIED,
        doc.application_id,
        document_id=doc.id,
        status=status.value,
    )
    await session.commit()
    await session.refresh(doc)
    logger.info("Document %s marked %s by %s", document_id, status.value, user.user_id)
    return doc
