"""
Typed service errors

Services raise these; main.py maps them to HTTP status codes.
"""


class GrantPortalError(Exception):
    """Base class for all portal errors"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GrantPortalError, LookupError):
    """Referenced entity does not exist"""
    status_code = 404


class ValidationError(GrantPortalError, ValueError):
    """Input violates a business rule"""
    status_code = 400


class ForbiddenError(GrantPortalError, PermissionError):
    """Caller may not act on this entity"""
    status_code = 403


class ConflictError(GrantPortalError):
    """Entity changed concurrently or is in the wrong state"""
    status_code = 409
