"""
Errors raised by the roster and run history services.
"""


class RegistryError(Exception):
    """Base class for rejected roster commands."""


class ValidationError(RegistryError):
    """A submitted or merged train record violates a domain rule."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(RegistryError):
    """No train with the given id exists."""

    def __init__(self, train_id: str):
        super().__init__("not found")
        self.train_id = train_id
        self.message = "not found"
