# This project was developed with assistance from AI tools.
"""Document checklist and completion metrics.

Reconciles the active required document types against the documents an
application has on file. ``build_checklist`` and ``compute_completion`` are
pure; ``get_checklist`` loads the rows and adds submit eligibility.
"""

import logging

from db import Application, Document
from db.enums import DocumentCategory, DocumentStatus
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..schemas.auth import UserContext
from ..schemas.checklist import ChecklistItem, ChecklistResponse, CompletionMetrics
from .document import list_required_types
from .scope import apply_data_scope

logger = logging.getLogger(__name__)

EXTRA_ITEM_PRIORITY = 999


def _is_newer(candidate: Document, current: Document) -> bool:
    """Order documents by submission time, then id."""
    if candidate.created_at is not None and current.created_at is not None:
        if candidate.created_at != current.created_at:
            return candidate.created_at > current.created_at
    return (candidate.id or 0) > (current.id or 0)


def latest_documents_by_type(documents) -> dict[int, Document]:
    """Keep the most recent document for each document type."""
    latest: dict[int, Document] = {}
    for doc in documents:
        current = latest.get(doc.document_type_id)
        if current is None or _is_newer(doc, current):
            latest[doc.document_type_id] = doc
    return latest


def _submitted_fields(doc: Document) -> dict:
    return {
        "is_submitted": True,
        "status": doc.status,
        "document_id": doc.id,
        "file_name": doc.file_name,
        "submitted_at": doc.created_at,
        "verified_at": doc.verified_at,
        "verification_notes": doc.verification_notes,
    }


def build_checklist(required_types, documents) -> list[ChecklistItem]:
    """Pair each required type with its submitted document.

    Documents whose type is not in ``required_types`` are appended as
    optional extras. Required items come first, then ascending priority.
    """
    by_type = latest_documents_by_type(documents)
    items: list[ChecklistItem] = []

    for doc_type in required_types:
        item = ChecklistItem(
            document_type_id=doc_type.id,
            name=doc_type.name,
            description=doc_type.description,
            category=doc_type.category or DocumentCategory.OTHER,
            is_required=doc_type.is_required is not False,
            priority=doc_type.priority if doc_type.priority is not None else EXTRA_ITEM_PRIORITY,
        )
        doc = by_type.pop(doc_type.id, None)
        if doc is not None:
            item = item.model_copy(update=_submitted_fields(doc))
        items.append(item)

    for type_id, doc in by_type.items():
        doc_type = getattr(doc, "document_type", None)
        items.append(
            ChecklistItem(
                document_type_id=type_id,
                name=doc_type.name if doc_type is not None else f"Document type {type_id}",
                description=doc_type.description if doc_type is not None else None,
                category=(doc_type.category if doc_type is not None else None)
                or DocumentCategory.OTHER,
                is_required=False,
                is_extra=True,
                priority=EXTRA_ITEM_PRIORITY,
                **_submitted_fields(doc),
            )
        )

    # sorted() is stable, so equal keys keep insertion order
    return sorted(items, key=lambda i: (not i.is_required, i.priority))


def compute_completion(items: list[ChecklistItem]) -> CompletionMetrics:
    """Count required items and derive the completion percentage (half-up)."""
    required = [i for i in items if i.is_required]
    submitted = [i for i in required if i.is_submitted]
    verified = [i for i in submitted if i.status == DocumentStatus.VERIFIED]

    required_count = len(required)
    submitted_count = len(submitted)
    if required_count == 0:
        percentage = 0
    else:
        percentage = (200 * submitted_count + required_count) // (2 * required_count)
        # 100 is reserved for a complete checklist
        if submitted_count < required_count:
            percentage = min(percentage, 99)

    return CompletionMetrics(
        required_count=required_count,
        submitted_required_count=submitted_count,
        verified_required_count=len(verified),
        completion_percentage=percentage,
    )


async def load_application_with_documents(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
) -> Application | None:
    """Load a visible application with its documents (and their types)."""
    stmt = (
        select(Application)
        .options(selectinload(Application.documents).selectinload(Document.document_type))
        .where(Application.id == application_id)
    )
    stmt = apply_data_scope(stmt, user.data_scope, user)
    result = await session.execute(stmt)
    return result.unique().scalar_one_or_none()


async def get_checklist(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
) -> ChecklistResponse | None:
    """Build the checklist for an application.

    Returns None if the application is not found or not accessible.
    """
    from .submission import can_submit, submit_block_reason

    app = await load_application_with_documents(session, user, application_id)
    if app is None:
        return None

    required_types = await list_required_types(session)
    items = build_checklist(required_types, app.documents or [])
    metrics = compute_completion(items)
    eligible = can_submit(app.status, metrics)

    return ChecklistResponse(
        application_id=app.id,
        application_status=app.status,
        items=items,
        metrics=metrics,
        can_submit=eligible,
        submit_blocked_reason=submit_block_reason(app.status, metrics),
    )
