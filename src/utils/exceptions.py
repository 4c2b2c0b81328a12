"""Custom exception classes for the application."""


class BaseAppException(Exception):
    """Base exception class for all application exceptions."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidDateError(BaseAppException):
    """Raised when an expiration date cannot be parsed as a calendar date."""
    pass


class InvalidArgumentError(BaseAppException, ValueError):
    """Raised when a query or alert argument is out of range."""
    pass


class InventoryAPIError(BaseAppException):
    """Raised when the inventory backend returns an error."""
    pass


class ResourceNotFoundError(InventoryAPIError):
    """Raised when the backend reports the requested resource does not exist."""
    pass


class ConfigurationError(BaseAppException):
    """Raised when there's a configuration error."""
    pass
