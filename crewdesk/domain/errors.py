"""Canonical error type raised by the domain and application layers.

Adapters translate driver/ORM failures into AppError so that callers only
ever deal with one exception type and a small set of codes.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFLICT = "CONFLICT"
    DB_ERROR = "DB_ERROR"
    UNKNOWN = "UNKNOWN"


class AppError(Exception):
    def __init__(self, code: ErrorCode, message: str, details: object | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def __repr__(self) -> str:
        return f"AppError({self.code.value}, {self.message!r})"


def validation_error(message: str) -> AppError:
    return AppError(ErrorCode.VALIDATION_ERROR, message)


def not_found(message: str) -> AppError:
    return AppError(ErrorCode.NOT_FOUND, message)


def conflict(message: str, details: object | None = None) -> AppError:
    return AppError(ErrorCode.CONFLICT, message, details)
