# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, get_db, get_db_service
from .enums import (
    ApplicationStatus,
    ApplicationType,
    DocumentCategory,
    DocumentStatus,
    UserRole,
)
from .models import (
    AcademicRecord,
    Application,
    AuditEvent,
    Document,
    FinancialInformation,
    RequiredDocumentType,
    ScholarshipCategory,
    ScholarshipSubcategory,
    School,
    Student,
)

__all__ = [
    "Base",
    "DatabaseService",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "ApplicationStatus",
    "ApplicationType",
    "DocumentCategory",
    "DocumentStatus",
    "UserRole",
    # Models
    "AcademicRecord",
    "Application",
    "AuditEvent",
    "Document",
    "FinancialInformation",
    "RequiredDocumentType",
    "ScholarshipCategory",
    "ScholarshipSubcategory",
    "School",
    "Student",
]
