# This project was developed with assistance from AI tools.
"""Reference data for a fresh portal database.

Required document types in display order, scholarship programmes with their
variants, and partner schools.
"""

from db.enums import DocumentCategory

DOCUMENT_TYPES: list[dict] = [
    {
        "name": "Transcript of Records (Latest)",
        "description": "Official transcript showing your latest academic performance and grades",
        "category": DocumentCategory.ACADEMIC,
        "is_required": True,
        "priority": 1,
    },
    {
        "name": "Certificate of Good Moral",
        "description": "Certificate from your school confirming your good moral character",
        "category": DocumentCategory.ACADEMIC,
        "is_required": True,
        "priority": 2,
    },
    {
        "name": "Income Certificate",
        "description": "Official document showing your family's income status from BIR or barangay",
        "category": DocumentCategory.FINANCIAL,
        "is_required": True,
        "priority": 3,
    },
    {
        "name": "Barangay Certificate",
        "description": "Certificate from your barangay confirming your residency",
        "category": DocumentCategory.RESIDENCY,
        "is_required": True,
        "priority": 4,
    },
    {
        "name": "Valid ID (Government-issued)",
        "description": "Government-issued identification document (Driver's License, Passport, etc.)",
        "category": DocumentCategory.IDENTIFICATION,
        "is_required": True,
        "priority": 5,
    },
    {
        "name": "Birth Certificate",
        "description": "Official birth certificate from PSA (Philippine Statistics Authority)",
        "category": DocumentCategory.IDENTIFICATION,
        "is_required": True,
        "priority": 6,
    },
    {
        "name": "Proof of Residency",
        "description": "Document proving your current address (utility bill, lease agreement, etc.)",
        "category": DocumentCategory.RESIDENCY,
        "is_required": True,
        "priority": 7,
    },
]

SCHOLARSHIP_CATEGORIES: list[dict] = [
    {
        "name": "Merit Scholarship",
        "description": "For students with outstanding academic performance.",
        "subcategories": [
            {"name": "Full Merit", "amount": "20000.00"},
            {"name": "Partial Merit", "amount": "10000.00"},
        ],
    },
    {
        "name": "Need-Based Scholarship",
        "description": "Financial assistance for students from low-income households.",
        "subcategories": [
            {"name": "Educational Assistance", "amount": "8000.00"},
            {"name": "4Ps Dependent Grant", "amount": "12000.00"},
        ],
    },
    {
        "name": "Special Scholarship",
        "description": "For persons with disability, solo parents and indigenous students.",
        "subcategories": [
            {"name": "PWD Grant", "amount": "10000.00"},
            {"name": "Indigenous Peoples Grant", "amount": "10000.00"},
        ],
    },
]

SCHOOLS: list[dict] = [
    {"name": "University of Caloocan City", "campus": "Congressional", "classification": "public"},
    {"name": "University of Caloocan City - South", "campus": "Biglang Awa", "classification": "public"},
    {"name": "Caloocan City Science High School", "campus": "Main", "classification": "public"},
    {"name": "STI College Caloocan", "campus": "Caloocan", "classification": "private"},
]
