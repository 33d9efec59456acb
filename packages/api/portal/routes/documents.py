# This project was developed with assistance from AI tools.
"""Document routes: required types, uploads, checklist and verification."""

from db import get_db
from db.enums import UserRole
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser, require_roles
from ..schemas.checklist import ChecklistResponse
from ..schemas.document import (
    DocumentListResponse,
    DocumentResponse,
    DocumentTypeResponse,
    DocumentUploadResponse,
    DocumentVerificationRequest,
)
from ..services import document as doc_service
from ..services.checklist import get_checklist
from ..services.document import (
    DocumentTooLargeError,
    DocumentUploadError,
    DocumentVerificationError,
)

router = APIRouter()

_ALL_AUTHENTICATED = (UserRole.ADMIN, UserRole.STAFF, UserRole.CITIZEN)


@router.get("/document-types", response_model=list[DocumentTypeResponse])
async def list_document_types(
    session: AsyncSession = Depends(get_db),
) -> list[DocumentTypeResponse]:
    """Active required document types, in display order. No authentication required."""
    types = await doc_service.list_required_types(session)
    return [DocumentTypeResponse.model_validate(t) for t in types]


@router.post(
    "/applications/{application_id}/documents",
    response_model=DocumentUploadResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def upload_document(
    application_id: int,
    user: CurrentUser,
    file: UploadFile = File(...),
    document_type_id: int = Form(...),
    session: AsyncSession = Depends(get_db),
) -> DocumentUploadResponse:
    """Upload (or replace) the document of one type for an application."""
    file_data = await file.read()

    try:
        doc = await doc_service.upload_document(
            session=session,
            user=user,
            application_id=application_id,
            document_type_id=document_type_id,
            filename=file.filename or "document",
            content_type=file.content_type or "",
            file_data=file_data,
        )
    except DocumentTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(exc),
        ) from exc
    except DocumentUploadError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    if doc is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    return DocumentUploadResponse.model_validate(doc)


@router.get(
    "/applications/{application_id}/documents",
    response_model=DocumentListResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def list_documents(
    application_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentListResponse:
    """List the documents on file for an application."""
    documents = await doc_service.list_documents(session, user, application_id)
    if documents is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    items = [DocumentResponse.model_validate(doc) for doc in documents]
    return DocumentListResponse(data=items, count=len(items))


@router.get(
    "/applications/{application_id}/checklist",
    response_model=ChecklistResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def get_document_checklist(
    application_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ChecklistResponse:
    """Required documents with their submissions, completion and submit eligibility."""
    result = await get_checklist(session, user, application_id)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    return result


@router.patch(
    "/documents/{document_id}/verification",
    response_model=DocumentResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN, UserRole.STAFF))],
)
async def verify_document(
    document_id: int,
    body: DocumentVerificationRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentResponse:
    """Mark a submitted document verified or rejected."""
    try:
        doc = await doc_service.verify_document(
            session, user, document_id, body.status, body.notes,
        )
    except DocumentVerificationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    if doc is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )
    return DocumentResponse.model_validate(doc)
