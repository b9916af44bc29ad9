# /luct-portal/app/core/exceptions.py

"""
Business-level error taxonomy.

Services raise these exceptions instead of `HTTPException` so that they stay
independent of the HTTP layer. `app.main` registers a handler that turns any
`PortalError` into a JSON response with the matching status code.
"""

from fastapi import status


class PortalError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers = None

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationFailed(PortalError):
    """A required field is missing or a value breaks a business rule."""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationFailed(PortalError):
    """Missing, malformed, expired or otherwise unusable credential."""
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class PermissionDenied(PortalError):
    """Valid identity, but the role or resource scope does not allow the action."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(PortalError):
    """A uniqueness rule (enrolment, feedback, email, code) would be broken."""
    status_code = status.HTTP_409_CONFLICT
