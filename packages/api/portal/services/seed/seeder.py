# This project was developed with assistance from AI tools.
"""Reference data seeding service.

Inserts the standard required document types, scholarship categories with
their subcategories, and schools. Rows are matched by name, so running the
seeder again only adds what is missing; ``force`` also rewrites the
description, category and priority of existing document types.
"""

import logging
from decimal import Decimal

from db import RequiredDocumentType, ScholarshipCategory, ScholarshipSubcategory, School
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..audit import write_audit_event
from .fixtures import DOCUMENT_TYPES, SCHOLARSHIP_CATEGORIES, SCHOOLS

logger = logging.getLogger(__name__)


async def _existing_by_name(session: AsyncSession, model) -> dict:
    result = await session.execute(select(model))
    return {row.name: row for row in result.scalars().all()}


async def _seed_document_types(session: AsyncSession, force: bool) -> tuple[int, int]:
    existing = await _existing_by_name(session, RequiredDocumentType)
    created = updated = 0
    for data in DOCUMENT_TYPES:
        row = existing.get(data["name"])
        if row is None:
            session.add(RequiredDocumentType(**data, is_active=True))
            created += 1
        elif force:
            row.description = data["description"]
            row.category = data["category"]
            row.is_required = data["is_required"]
            row.priority = data["priority"]
            row.is_active = True
            updated += 1
    return created, updated


async def _seed_categories(session: AsyncSession) -> tuple[int, int]:
    existing = await _existing_by_name(session, ScholarshipCategory)
    categories = subcategories = 0
    for data in SCHOLARSHIP_CATEGORIES:
        category = existing.get(data["name"])
        if category is None:
            category = ScholarshipCategory(name=data["name"], description=data["description"])
            session.add(category)
            await session.flush()
            categories += 1

        result = await session.execute(
            select(ScholarshipSubcategory.name).where(
                ScholarshipSubcategory.category_id == category.id
            )
        )
        known = set(result.scalars().all())
        for sub in data["subcategories"]:
            if sub["name"] in known:
                continue
            session.add(
                ScholarshipSubcategory(
                    category_id=category.id,
                    name=sub["name"],
                    amount=Decimal(sub["amount"]),
                )
            )
            subcategories += 1
    return categories, subcategories


async def _seed_schools(session: AsyncSession) -> int:
    existing = await _existing_by_name(session, School)
    created = 0
    for data in SCHOOLS:
        if data["name"] not in existing:
            session.add(School(**data))
            created += 1
    return created


async def seed_reference_data(session: AsyncSession, force: bool = False) -> dict:
    """Seed reference data. Returns a summary dict of rows created/updated."""
    doc_types_created, doc_types_updated = await _seed_document_types(session, force)
    categories, subcategories = await _seed_categories(session)
    schools = await _seed_schools(session)

    summary = {
        "document_types_created": doc_types_created,
        "document_types_updated": doc_types_updated,
        "categories_created": categories,
        "subcategories_created": subcategories,
        "schools_created": schools,
    }
    changed = any(summary.values())
    if changed:
        await write_audit_event(
            session,
            event_type="reference_data_seeded",
            user_id="system",
            user_role="system",
            event_data=summary,
        )
    await session.commit()

    logger.info("Reference data seeded: %s", summary)
    return {"status": "seeded" if changed else "up_to_date", **summary}


async def get_seed_status(session: AsyncSession) -> dict:
    """Count the reference rows currently present."""

    async def _count(model) -> int:
        return (await session.execute(select(func.count(model.id)))).scalar() or 0

    document_types = await _count(RequiredDocumentType)
    return {
        "seeded": document_types >= len(DOCUMENT_TYPES),
        "document_types": document_types,
        "categories": await _count(ScholarshipCategory),
        "schools": await _count(School),
    }
