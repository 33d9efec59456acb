# This project was developed with assistance from AI tools.
"""Reference data exposed without authentication."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class SubcategoryInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    amount: Decimal | None = None


class CategoryInfo(BaseModel):
    """Scholarship programme with its variants."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    subcategories: list[SubcategoryInfo] = []


class SchoolInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    campus: str | None = None
    classification: str | None = None
