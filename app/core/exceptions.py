# app/core/exceptions.py
from fastapi import HTTPException, status


class PortalError(HTTPException):
    """Base class for errors surfaced to the portal as an ErrorResponse"""
    error_code = "portal_error"
    status_code_default = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, headers=None):
        super().__init__(status_code=self.status_code_default, detail=detail, headers=headers)


class AuthenticationError(PortalError):
    """No session, or the session token is invalid/expired"""
    error_code = "authentication_error"
    status_code_default = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Driver not authenticated"):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(PortalError):
    error_code = "not_found"
    status_code_default = status.HTTP_404_NOT_FOUND


class PersistenceError(PortalError):
    """The backing store rejected a read or write (including policy denial)"""
    error_code = "persistence_error"
    status_code_default = status.HTTP_502_BAD_GATEWAY


class UnexpectedError(PortalError):
    error_code = "unexpected_error"
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str = "An unexpected error occurred"):
        super().__init__(detail)


class ForbiddenError(PortalError):
    """Authenticated but not allowed, e.g. an inactive account"""
    error_code = "forbidden"
    status_code_default = status.HTTP_403_FORBIDDEN
