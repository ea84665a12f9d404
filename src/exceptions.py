"""
Domain exceptions for the ANGONI Adventure API.

Services raise these; routers translate the caller-visible ones
(PersistenceError, NotFoundError, DuplicateError) into HTTP errors.
NotificationError and RecordingError never leave their collaborator.
"""

from typing import Optional


class AppError(Exception):
    """Base class for all application errors"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class PersistenceError(AppError):
    """The store rejected a read or write"""


class NotFoundError(AppError):
    """A lookup matched no record"""


class DuplicateError(AppError):
    """A unique constraint reported to the caller was violated"""


class NotificationError(AppError):
    """The mail relay could not accept a message"""


class RecordingError(AppError):
    """A usage event could not be written"""
