"""
Service error taxonomy.

Services raise these; main.py maps them onto HTTP responses.
They subclass ValueError so scripts can keep catching ValueError.
"""


class ServiceError(ValueError):
    """Base class for failures reported by the service layer."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Referenced entity does not exist (or must not be revealed to the caller)."""
    status_code = 404


class ConflictError(ServiceError):
    """Unique constraint violation or duplicate RSVP."""
    status_code = 409


class InvalidInputError(ServiceError):
    """Malformed JSON payloads, invalid enum values, inactive relations."""
    status_code = 400


class AuthorizationError(ServiceError):
    """Caller does not own the resource."""
    status_code = 403


class BusinessRuleError(ServiceError):
    """Invitation not published/expired, payment not completed."""
    status_code = 400
