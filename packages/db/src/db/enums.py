# This project was developed with assistance from AI tools.
"""
Domain enums for the scholarship application lifecycle.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class ApplicationStatus(str, enum.Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    REVIEWED = "reviewed"
    APPROVED = "approved"
    PROCESSING = "processing"
    RELEASED = "released"
    REJECTED = "rejected"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"

    @classmethod
    def terminal_statuses(cls) -> frozenset["ApplicationStatus"]:
        """Statuses where an application no longer moves."""
        return frozenset({cls.RELEASED, cls.REJECTED, cls.CANCELLED})

    @classmethod
    def active_statuses(cls) -> frozenset["ApplicationStatus"]:
        """Statuses that block the applicant from opening another application."""
        return frozenset(s for s in cls if s not in {cls.REJECTED, cls.CANCELLED})

    @classmethod
    def valid_transitions(cls) -> dict["ApplicationStatus", frozenset["ApplicationStatus"]]:
        """Allowed status transitions in the scholarship pipeline."""
        return {
            cls.DRAFT: frozenset({cls.SUBMITTED, cls.REJECTED, cls.CANCELLED}),
            cls.SUBMITTED: frozenset({cls.REVIEWED, cls.ON_HOLD, cls.REJECTED, cls.CANCELLED}),
            cls.REVIEWED: frozenset({cls.APPROVED, cls.ON_HOLD, cls.REJECTED, cls.CANCELLED}),
            cls.ON_HOLD: frozenset({cls.REVIEWED, cls.APPROVED, cls.REJECTED, cls.CANCELLED}),
            cls.APPROVED: frozenset({cls.PROCESSING, cls.REJECTED, cls.CANCELLED}),
            cls.PROCESSING: frozenset({cls.RELEASED, cls.REJECTED, cls.CANCELLED}),
            cls.RELEASED: frozenset(),
            cls.REJECTED: frozenset(),
            cls.CANCELLED: frozenset(),
        }


class ApplicationType(str, enum.Enum):
    NEW = "new"
    RENEWAL = "renewal"


class DocumentStatus(str, enum.Enum):
    MISSING = "missing"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class DocumentCategory(str, enum.Enum):
    ACADEMIC = "academic"
    FINANCIAL = "financial"
    RESIDENCY = "residency"
    IDENTIFICATION = "identification"
    OTHER = "other"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    STAFF = "staff"
    CITIZEN = "citizen"
