"""Custom exception classes for the spec-manager API."""


class SpecManagerError(Exception):
    """Base exception; rendered into the error envelope by the handlers."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(SpecManagerError):
    """Malformed input or a violated field invariant."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class AuthenticationError(SpecManagerError):
    """Missing, malformed, invalid or expired credentials."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("UNAUTHORIZED", message, status_code=401)


class AuthorizationError(SpecManagerError):
    """Authenticated, but wrong role or not the resource owner."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__("FORBIDDEN", message, status_code=403)


class NotFoundError(SpecManagerError):
    def __init__(self, resource: str, resource_id: str | None = None):
        message = f"{resource} not found"
        details = {"id": str(resource_id)} if resource_id is not None else None
        super().__init__("NOT_FOUND", message, details, status_code=404)


class ConflictError(SpecManagerError):
    """Unique-constraint violation; database integrity errors are reported as this."""

    def __init__(self, message: str = "Resource conflicts with existing data", details=None):
        super().__init__("CONFLICT", message, details, status_code=409)
