"""Classified application errors. The boundary layer maps status_code to the HTTP response."""

from typing import Any


class CatalogError(Exception):
    """Base for every classified failure raised by services and dependencies."""

    status_code: int = 500

    def __init__(self, message: str, error_obj: Any = None) -> None:
        self.message = message
        self.error_obj = error_obj if error_obj is not None else {}
        super().__init__(message)

    def to_body(self) -> dict[str, Any]:
        """Structured error body returned to the caller."""
        return {
            "statusCode": self.status_code,
            "errorMessage": self.message,
            "errorObj": self.error_obj,
        }


class ValidationFailure(CatalogError):
    """Malformed input."""

    status_code = 400


class Unauthenticated(CatalogError):
    """No usable identity: missing or invalid token, or bad credentials."""

    status_code = 401


class MissingToken(Unauthenticated):
    pass


class InvalidToken(Unauthenticated):
    pass


class CredentialMismatch(Unauthenticated):
    pass


class Forbidden(CatalogError):
    """Authenticated but not allowed to perform the operation."""

    status_code = 403


class NotFound(CatalogError):
    status_code = 404


class AccountNotFound(NotFound):
    pass


class Conflict(CatalogError):
    """Duplicate unique key."""

    status_code = 409


class StoreCorruption(CatalogError):
    """Persisted data violates an invariant (schema, cardinality)."""

    status_code = 500


class InternalError(CatalogError):
    status_code = 500
