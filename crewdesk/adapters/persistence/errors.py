"""Translate SQLAlchemy / driver failures into AppError."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from crewdesk.domain.errors import AppError, ErrorCode

UNIQUE_VIOLATION = "23505"
NOT_NULL_VIOLATION = "23502"
INSUFFICIENT_PRIVILEGE = "42501"


def _sqlstate(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return ""


def map_db_error(
    exc: SQLAlchemyError,
    conflict_message: str = "This record already exists.",
) -> AppError:
    """Map a storage failure to the canonical error taxonomy.

    Order matters: permission problems win over constraint codes.
    """
    orig = getattr(exc, "orig", None)
    message = str(orig) if orig is not None else str(exc)
    lowered = message.lower()
    code = _sqlstate(exc)

    if code == INSUFFICIENT_PRIVILEGE or "permission denied" in lowered:
        return AppError(
            ErrorCode.FORBIDDEN, "You don't have permission to perform this action.", message
        )
    if code == UNIQUE_VIOLATION:
        return AppError(ErrorCode.CONFLICT, conflict_message, message)
    if code == NOT_NULL_VIOLATION:
        return AppError(
            ErrorCode.VALIDATION_ERROR, f"A required field is missing: {message}", message
        )
    if "jwt" in lowered or "not authenticated" in lowered:
        return AppError(ErrorCode.UNAUTHORIZED, "Please sign in again.", message)

    return AppError(ErrorCode.DB_ERROR, message or "Database error", message)
