# This project was developed with assistance from AI tools.
"""
SQLAdmin configuration for database administration UI

Access the admin panel at: http://localhost:8000/admin

When AUTH_DISABLED=false, requires admin credentials via login form.
When AUTH_DISABLED=true, admin panel is open (dev mode).
"""

from db import (
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
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from sqlalchemy import create_engine
from starlette.requests import Request
from starlette.responses import Response

from .core.config import settings

# SQLAdmin requires a sync engine; derive from the async DATABASE_URL
_sync_url = settings.DATABASE_URL.replace("+asyncpg", "")
engine = create_engine(_sync_url, echo=False)


class AdminAuth(AuthenticationBackend):
    """Session-based auth gate for SQLAdmin.

    When AUTH_DISABLED=true, authenticate() always returns True (dev mode).
    Otherwise, requires login with SQLADMIN_USER / SQLADMIN_PASSWORD.
    """

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = form.get("username")
        password = form.get("password")
        if username == settings.SQLADMIN_USER and password == settings.SQLADMIN_PASSWORD:
            request.session.update({"admin_authenticated": True})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> Response | bool:
        if settings.AUTH_DISABLED:
            return True
        return request.session.get("admin_authenticated", False)


class StudentAdmin(ModelView, model=Student):
    column_list = [
        Student.id,
        Student.first_name,
        Student.last_name,
        Student.email,
        Student.created_at,
    ]
    column_searchable_list = [Student.first_name, Student.last_name, Student.email]
    column_sortable_list = [Student.id, Student.last_name, Student.created_at]
    column_default_sort = [(Student.created_at, True)]
    name = "Student"
    name_plural = "Students"
    icon = "fa-solid fa-user-graduate"


class ApplicationAdmin(ModelView, model=Application):
    column_list = [
        Application.id,
        Application.student_id,
        Application.type,
        Application.status,
        Application.requested_amount,
        Application.submitted_at,
        Application.created_at,
    ]
    column_sortable_list = [Application.id, Application.status, Application.created_at]
    column_default_sort = [(Application.created_at, True)]
    name = "Application"
    name_plural = "Applications"
    icon = "fa-solid fa-file-alt"


class FinancialInformationAdmin(ModelView, model=FinancialInformation):
    column_list = [
        FinancialInformation.id,
        FinancialInformation.application_id,
        FinancialInformation.income_range,
        FinancialInformation.total_annual_income,
        FinancialInformation.monthly_income,
    ]
    name = "Financial Information"
    name_plural = "Financial Information"
    icon = "fa-solid fa-peso-sign"


class AcademicRecordAdmin(ModelView, model=AcademicRecord):
    column_list = [
        AcademicRecord.id,
        AcademicRecord.application_id,
        AcademicRecord.program,
        AcademicRecord.year_level,
        AcademicRecord.general_weighted_average,
    ]
    name = "Academic Record"
    name_plural = "Academic Records"
    icon = "fa-solid fa-book"


class ScholarshipCategoryAdmin(ModelView, model=ScholarshipCategory):
    column_list = [ScholarshipCategory.id, ScholarshipCategory.name, ScholarshipCategory.is_active]
    name = "Category"
    name_plural = "Categories"
    icon = "fa-solid fa-layer-group"


class ScholarshipSubcategoryAdmin(ModelView, model=ScholarshipSubcategory):
    column_list = [
        ScholarshipSubcategory.id,
        ScholarshipSubcategory.category_id,
        ScholarshipSubcategory.name,
        ScholarshipSubcategory.amount,
        ScholarshipSubcategory.is_active,
    ]
    name = "Subcategory"
    name_plural = "Subcategories"
    icon = "fa-solid fa-list"


class SchoolAdmin(ModelView, model=School):
    column_list = [School.id, School.name, School.campus, School.is_active]
    column_searchable_list = [School.name]
    name = "School"
    name_plural = "Schools"
    icon = "fa-solid fa-school"


class RequiredDocumentTypeAdmin(ModelView, model=RequiredDocumentType):
    column_list = [
        RequiredDocumentType.id,
        RequiredDocumentType.name,
        RequiredDocumentType.category,
        RequiredDocumentType.is_required,
        RequiredDocumentType.priority,
        RequiredDocumentType.is_active,
    ]
    column_sortable_list = [RequiredDocumentType.priority, RequiredDocumentType.name]
    column_default_sort = [(RequiredDocumentType.priority, False)]
    name = "Document Type"
    name_plural = "Document Types"
    icon = "fa-solid fa-list-check"


class DocumentAdmin(ModelView, model=Document):
    column_list = [
        Document.id,
        Document.application_id,
        Document.document_type_id,
        Document.status,
        Document.file_name,
        Document.uploaded_by,
        Document.created_at,
    ]
    column_searchable_list = [Document.uploaded_by, Document.file_name]
    column_sortable_list = [Document.id, Document.status, Document.created_at]
    column_default_sort = [(Document.created_at, True)]
    name = "Document"
    name_plural = "Documents"
    icon = "fa-solid fa-file-upload"


class AuditEventAdmin(ModelView, model=AuditEvent):
    column_list = [
        AuditEvent.id,
        AuditEvent.timestamp,
        AuditEvent.event_type,
        AuditEvent.user_id,
        AuditEvent.user_role,
        AuditEvent.application_id,
    ]
    column_sortable_list = [AuditEvent.id, AuditEvent.timestamp, AuditEvent.event_type]
    column_default_sort = [(AuditEvent.timestamp, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Audit Event"
    name_plural = "Audit Events"
    icon = "fa-solid fa-shield-alt"


def setup_admin(app):
    """Set up SQLAdmin and mount it to the FastAPI app."""
    auth_backend = AdminAuth(
        secret_key=settings.SQLADMIN_SECRET_KEY,
    )
    admin = Admin(app, engine, title="Scholarship Portal Admin", authentication_backend=auth_backend)

    admin.add_view(StudentAdmin)
    admin.add_view(ApplicationAdmin)
    admin.add_view(FinancialInformationAdmin)
    admin.add_view(AcademicRecordAdmin)
    admin.add_view(ScholarshipCategoryAdmin)
    admin.add_view(ScholarshipSubcategoryAdmin)
    admin.add_view(SchoolAdmin)
    admin.add_view(RequiredDocumentTypeAdmin)
    admin.add_view(DocumentAdmin)
    admin.add_view(AuditEventAdmin)

    return admin
