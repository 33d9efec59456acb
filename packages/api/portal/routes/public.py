# This project was developed with assistance from AI tools.
"""Public API routes -- no authentication required."""

from db import ScholarshipCategory, School, get_db
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..schemas.public import CategoryInfo, SchoolInfo, SubcategoryInfo

router = APIRouter()


@router.get("/categories", response_model=list[CategoryInfo])
async def list_categories(session: AsyncSession = Depends(get_db)) -> list[CategoryInfo]:
    """Active scholarship programmes with their active subcategories."""
    stmt = (
        select(ScholarshipCategory)
        .options(selectinload(ScholarshipCategory.subcategories))
        .where(ScholarshipCategory.is_active.is_(True))
        .order_by(ScholarshipCategory.name)
    )
    result = await session.execute(stmt)
    return [
        CategoryInfo(
            id=category.id,
            name=category.name,
            description=category.description,
            subcategories=[
                SubcategoryInfo.model_validate(sub)
                for sub in category.subcategories
                if sub.is_active
            ],
        )
        for category in result.scalars().all()
    ]


@router.get("/schools", response_model=list[SchoolInfo])
async def list_schools(session: AsyncSession = Depends(get_db)) -> list[SchoolInfo]:
    """Active partner schools."""
    stmt = select(School).where(School.is_active.is_(True)).order_by(School.name)
    result = await session.execute(stmt)
    return [SchoolInfo.model_validate(school) for school in result.scalars().all()]
