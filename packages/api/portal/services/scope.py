# This project was developed with assistance from AI tools.
"""Shared data scope filtering for service queries.

Centralizes the DataScope -> SQL WHERE logic so that application and
document queries apply the same ownership rules.
"""

from db import Application, Student

from ..schemas.auth import DataScope, UserContext


def apply_data_scope(stmt, scope: DataScope, user: UserContext, *, join_to_application=None):
    """Apply data scope filtering to a SQLAlchemy query.

    Args:
        stmt: A SQLAlchemy select statement.
        scope: The caller's DataScope.
        user: The caller's UserContext.
        join_to_application: ORM relationship attribute to join to reach
            Application (e.g., ``Document.application``). Pass ``None``
            when querying Application directly.

    Returns:
        The filtered statement.
    """
    if scope.full_pipeline:
        return stmt
    if join_to_application is not None:
        stmt = stmt.join(join_to_application)
    if scope.own_data_only and scope.user_id:
        return stmt.join(Student, Student.id == Application.student_id).where(
            Student.keycloak_user_id == scope.user_id,
        )
    # No recognised scope -- nothing is visible
    return stmt.where(Application.id.is_(None))
