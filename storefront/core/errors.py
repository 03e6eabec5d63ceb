"""Error kinds raised by the store and service layers.

The HTTP layer maps each kind to a status code (see ``storefront.main``).
"""


class StorefrontError(Exception):
    """Base class for every error the service raises on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StorefrontError):
    """A referenced user, product or order does not exist."""


class ValidationError(StorefrontError):
    """Malformed input or a business rule violation."""


class AuthError(StorefrontError):
    """Credentials did not match a stored user."""


class StoreError(StorefrontError):
    """The database failed underneath an operation."""
