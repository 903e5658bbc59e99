"""Errors raised by the stock stores and mapped to HTTP responses in main.py"""

from typing import Optional


class StoreError(Exception):
    status_code = 500
    public_message = "server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(StoreError):
    """A required field is missing or malformed"""
    status_code = 400
    public_message = "missing fields"


class NotFoundError(StoreError):
    """The referenced uid does not exist"""
    status_code = 404
    public_message = "uid not found"


class AuthError(StoreError):
    status_code = 401
    public_message = "API key invalid"


class BackendError(StoreError):
    """Storage I/O failed. The message is never sent to clients."""
    status_code = 500
    public_message = "server error"
