"""
Domain exceptions raised by the service layer.

Routes translate these into HTTP status codes; each class carries the
status it maps to so the translation stays in one place.
"""


class ProfileServiceError(Exception):
    """Base class for expected service failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ProfileServiceError):
    """A required field is missing or malformed."""

    status_code = 400


class NotFoundError(ProfileServiceError):
    status_code = 404


class TokenNotFoundError(NotFoundError):
    pass


class ProfileNotFoundError(NotFoundError):
    pass


class ExpiredError(ProfileServiceError):
    status_code = 410


class TokenExpiredError(ExpiredError):
    pass


class ConflictError(ProfileServiceError):
    status_code = 409


class ProfileConflictError(ConflictError):
    """Concurrent submissions for one token could not be reconciled."""


class TokenAlreadyUsedError(ConflictError):
    """Single-use enforcement is on and the token already has a submission."""


class TransportError(ProfileServiceError):
    """An external collaborator (SMTP, database) failed."""

    status_code = 500


class EmailDeliveryError(TransportError):
    pass


class StoreUnavailableError(TransportError):
    status_code = 503
