"""
Domain error taxonomy.

Every failure a user can trigger maps to one of these. The API layer turns
them into ``{"error": ..., "message": ...}`` responses (see reportdesk.errors).
"""


class DomainError(Exception):
    status_code = 400

    def __init__(self, message: str, *, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DomainError):
    """Malformed input, rejected before any write."""
    status_code = 400


class NotFoundError(DomainError):
    status_code = 404


class PermissionDenied(DomainError):
    """Role or ownership does not allow the action."""
    status_code = 403


class AuthenticationRequired(PermissionDenied):
    """No valid session, or wrong credentials."""
    status_code = 401


class NetworkError(DomainError):
    status_code = 503


class ExternalServiceError(DomainError):
    """An edge function (AI gateway) answered with an error."""
    status_code = 502

    def __init__(self, message: str, *, upstream_status: int | None = None, details: dict | None = None):
        super().__init__(message, details=details)
        self.upstream_status = upstream_status
        if upstream_status in (401, 402, 429):
            self.status_code = upstream_status
