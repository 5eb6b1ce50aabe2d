from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    Every concrete error carries a stable ``code`` so callers (the HTTP layer,
    scripts) can branch on the kind of rejection without parsing messages, and
    an optional ``context`` dict describing the conflicting data.
    """

    code = "domain_error"
    default_message = "Business rule violated"

    def __init__(self, message: Optional[str] = None, **context: Any):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.context = context

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.context:
            payload["context"] = {k: _jsonable(v) for k, v in self.context.items()}
        return payload


def _jsonable(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if hasattr(value, "value"):
        return value.value
    return value


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"
    default_message = "Invalid input"


class ConflictError(DomainError):
    """Raised when an action conflicts with the current state of a record."""

    code = "conflict"
    default_message = "Conflicting state"


class NotFoundError(DomainError):
    code = "not_found"
    default_message = "Not found"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "forbidden"
    default_message = "Not allowed"


class InfrastructureError(Exception):
    """Opaque persistence failure. Never carries driver details to callers."""


# Attendance

class DuplicateCheckIn(ConflictError):
    code = "duplicate_check_in"
    default_message = "Already checked in today"


class NoCheckInFound(NotFoundError):
    code = "no_check_in_found"
    default_message = "No check-in found for today"


class AlreadyCheckedOut(ConflictError):
    code = "already_checked_out"
    default_message = "Already checked out today"


class InvalidCheckOutTime(ValidationError):
    code = "invalid_check_out_time"
    default_message = "Check-out time cannot be earlier than check-in time"


# Leave

class InvalidDateRange(ValidationError):
    code = "invalid_date_range"
    default_message = "Invalid leave date range"


class InvalidLeaveType(ValidationError):
    code = "invalid_leave_type"
    default_message = "Unknown leave type"


class ReasonTooShort(ValidationError):
    code = "reason_too_short"
    default_message = "Reason is too short"


class ReasonTooLong(ValidationError):
    code = "reason_too_long"
    default_message = "Reason is too long"


class CommentsTooLong(ValidationError):
    code = "comments_too_long"
    default_message = "Comments are too long"


class OverlappingRequest(ConflictError):
    code = "overlapping_request"
    default_message = "You already have a leave request for these dates"


class AlreadyDecided(ConflictError):
    code = "already_decided"
    default_message = "Leave request has already been processed"


class InvalidDecision(ValidationError):
    code = "invalid_decision"
    default_message = "Decision must be 'approved' or 'rejected'"


# Directory

class NotFound(NotFoundError):
    code = "not_found"


class InactiveEmployee(AuthorizationError):
    code = "inactive_employee"
    default_message = "Employee account is deactivated"


class EmailInUse(ConflictError):
    code = "email_in_use"
    default_message = "Email already in use"
