# app/core/errors.py
# Purpose: Domain errors raised by services; main.py maps them to JSON responses.
from __future__ import annotations


class MarketplaceError(Exception):
    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MarketplaceError):
    status_code = 404


class PermissionDeniedError(MarketplaceError):
    status_code = 403


class ConflictError(MarketplaceError):
    status_code = 409


class ValidationFailedError(MarketplaceError):
    status_code = 422


class PaymentRequiredError(MarketplaceError):
    status_code = 402


class UpstreamServiceError(MarketplaceError):
    status_code = 502


class AuthenticationError(MarketplaceError):
    status_code = 401
