from __future__ import annotations


class DomainError(Exception):
    """Base for errors that surface to the routing layer with an HTTP status."""

    status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(DomainError):
    status = 400


class NotFoundError(DomainError):
    status = 404


class ConflictError(DomainError):
    status = 409


class QuotaError(DomainError):
    status = 422


class StoreError(DomainError):
    status = 500
