from __future__ import annotations


class DomainError(Exception):
    """Base for errors a caller can act on; rendered as {"detail": message}."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(DomainError):
    status_code = 400


class NotFound(DomainError):
    status_code = 404


class Unauthorized(DomainError):
    status_code = 401


class PolicyViolation(DomainError):
    status_code = 400


class InvalidTransition(PolicyViolation):
    status_code = 409


class AlreadyExists(DomainError):
    status_code = 409


class InUse(DomainError):
    status_code = 409
