# This project was developed with assistance from AI tools.
"""
Scholarship portal -- domain models

Applicants (students), scholarship applications with their financial and
academic records, required document types, submitted documents, and the
audit trail.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import (
    ApplicationStatus,
    ApplicationType,
    DocumentCategory,
    DocumentStatus,
)


def _enum_values(enum_cls):
    # Persist the lowercase values rather than member names
    return [member.value for member in enum_cls]


class Student(Base):
    """Applicant profile linked to Keycloak identity."""

    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    keycloak_user_id = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    middle_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    contact_number = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    applications = relationship("Application", back_populates="student")

    def __repr__(self):
        return f"<Student(id={self.id}, name='{self.first_name} {self.last_name}')>"


class ScholarshipCategory(Base):
    """Top-level scholarship programme (e.g. merit, need-based)."""

    __tablename__ = "scholarship_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    subcategories = relationship(
        "ScholarshipSubcategory", back_populates="category", cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<ScholarshipCategory(id={self.id}, name='{self.name}')>"


class ScholarshipSubcategory(Base):
    """Programme variant under a category, carrying the default grant amount."""

    __tablename__ = "scholarship_subcategories"
    __table_args__ = (
        UniqueConstraint("category_id", "name", name="uq_subcategory_category_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(
        Integer, ForeignKey("scholarship_categories.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(12, 2), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    category = relationship("ScholarshipCategory", back_populates="subcategories")

    def __repr__(self):
        return f"<ScholarshipSubcategory(id={self.id}, name='{self.name}')>"


class School(Base):
    """School the applicant is enrolled in."""

    __tablename__ = "schools"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    campus = Column(String(255), nullable=True)
    classification = Column(String(50), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<School(id={self.id}, name='{self.name}')>"


class Application(Base):
    """Scholarship application."""

    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(
        Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    category_id = Column(
        Integer, ForeignKey("scholarship_categories.id", ondelete="SET NULL"), nullable=True,
    )
    subcategory_id = Column(
        Integer, ForeignKey("scholarship_subcategories.id", ondelete="SET NULL"), nullable=True,
    )
    school_id = Column(
        Integer, ForeignKey("schools.id", ondelete="SET NULL"), nullable=True,
    )
    type = Column(
        Enum(ApplicationType, name="application_type", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=ApplicationType.NEW,
    )
    status = Column(
        Enum(ApplicationStatus, name="application_status", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=ApplicationStatus.DRAFT,
        index=True,
    )
    requested_amount = Column(Numeric(12, 2), nullable=True)
    approved_amount = Column(Numeric(12, 2), nullable=True)
    financial_need_description = Column(Text, nullable=True)
    reason_for_renewal = Column(Text, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    student = relationship("Student", back_populates="applications")
    category = relationship("ScholarshipCategory")
    subcategory = relationship("ScholarshipSubcategory")
    school = relationship("School")
    financial_information = relationship(
        "FinancialInformation", back_populates="application",
        uselist=False, cascade="all, delete-orphan",
    )
    academic_record = relationship(
        "AcademicRecord", back_populates="application",
        uselist=False, cascade="all, delete-orphan",
    )
    documents = relationship(
        "Document", back_populates="application", cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Application(id={self.id}, status='{self.status}')>"


class FinancialInformation(Base):
    """Household income details for an application."""

    __tablename__ = "financial_information"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        Integer, ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False, unique=True, index=True,
    )
    income_range = Column(String(100), nullable=True)
    total_annual_income = Column(Numeric(12, 2), nullable=True)
    monthly_income = Column(Numeric(12, 2), nullable=True)
    number_of_children = Column(Integer, nullable=False, default=0)
    number_of_siblings = Column(Integer, nullable=False, default=0)
    home_ownership_status = Column(String(50), nullable=True)
    is_4ps_beneficiary = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    application = relationship("Application", back_populates="financial_information")

    def __repr__(self):
        return f"<FinancialInformation(app_id={self.application_id}, annual={self.total_annual_income})>"


class AcademicRecord(Base):
    """Current academic standing for an application."""

    __tablename__ = "academic_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        Integer, ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False, unique=True, index=True,
    )
    educational_level = Column(String(100), nullable=True)
    program = Column(String(255), nullable=True)
    year_level = Column(String(50), nullable=True)
    school_year = Column(String(20), nullable=True)
    school_term = Column(String(50), nullable=True)
    units_enrolled = Column(Integer, nullable=True)
    units_completed = Column(Integer, nullable=True)
    general_weighted_average = Column(Numeric(4, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    application = relationship("Application", back_populates="academic_record")

    def __repr__(self):
        return f"<AcademicRecord(app_id={self.application_id}, gwa={self.general_weighted_average})>"


class RequiredDocumentType(Base):
    """A kind of supporting document the programme asks for."""

    __tablename__ = "document_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    category = Column(
        Enum(DocumentCategory, name="document_category", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=DocumentCategory.OTHER,
    )
    is_required = Column(Boolean, nullable=False, default=True)
    priority = Column(Integer, nullable=False, default=999)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<RequiredDocumentType(id={self.id}, name='{self.name}')>"


class Document(Base):
    """Document uploaded for an application. One row per application and type."""

    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("application_id", "document_type_id", name="uq_document_app_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    student_id = Column(
        Integer, ForeignKey("students.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    document_type_id = Column(
        Integer, ForeignKey("document_types.id", ondelete="RESTRICT"), nullable=False, index=True,
    )
    status = Column(
        Enum(DocumentStatus, name="document_status", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=DocumentStatus.PENDING,
    )
    file_name = Column(String(255), nullable=True)
    file_path = Column(String(500), nullable=True)
    verification_notes = Column(Text, nullable=True)
    uploaded_by = Column(String(255), nullable=True)
    verified_by = Column(String(255), nullable=True)
    verified_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    application = relationship("Application", back_populates="documents")
    document_type = relationship("RequiredDocumentType")

    def __repr__(self):
        return f"<Document(id={self.id}, type_id={self.document_type_id}, status='{self.status}')>"


class AuditEvent(Base):
    """Append-only audit trail. INSERT + SELECT only -- no UPDATE or DELETE."""

    __tablename__ = "audit_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    prev_hash = Column(String(64), nullable=True)
    user_id = Column(String(255), nullable=True)
    user_role = Column(String(50), nullable=True)
    event_type = Column(String(100), nullable=False, index=True)
    application_id = Column(Integer, nullable=True, index=True)
    event_data = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<AuditEvent(id={self.id}, type='{self.event_type}')>"
