from __future__ import annotations

from typing import Any, Dict, Optional


class WordbankError(Exception):
    """Base class for failures reported to the caller as ``{"error": message}``."""

    status_code = 500
    default_message = "error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class Unauthorized(WordbankError):
    status_code = 401
    default_message = "unauthorized"


class MethodNotAllowed(WordbankError):
    status_code = 405
    default_message = "method not allowed"


class ValidationFailure(WordbankError):
    status_code = 400
    default_message = "invalid request"


class NotFound(WordbankError):
    status_code = 404
    default_message = "not found"


class Conflict(WordbankError):
    status_code = 409
    default_message = "already exists"

    def __init__(self, message: Optional[str] = None, existing_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.existing_id = existing_id

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["id"] = self.existing_id
        return payload


class StorageFailure(WordbankError):
    """A backend call errored. The message is the backend's own."""

    status_code = 500
    default_message = "storage error"


class UnexpectedFailure(WordbankError):
    status_code = 500
    default_message = "unexpected error"


# Used to map plain HTTP status codes (routing 404/405) onto the same shape
ERRORS_BY_STATUS = {
    401: Unauthorized,
    404: NotFound,
    405: MethodNotAllowed,
}
