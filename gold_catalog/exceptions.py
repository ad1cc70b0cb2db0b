"""
Custom exceptions for the Gold Catalog service.

Provides a hierarchy of exceptions shared by the pricing layer, the catalog
loader and the web application.
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """Base exception for application errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging and JSON output."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(AppException):
    """Raised when configuration is missing or invalid."""

    status_code = 500
    error_code = "CONFIGURATION_ERROR"


class ProviderError(AppException):
    """Raised when an upstream gold price provider fails."""

    status_code = 500
    error_code = "PROVIDER_ERROR"

    def __init__(
        self,
        message: str,
        provider: str,
        status: Optional[int] = None,
        body: Optional[str] = None,
    ):
        details: Dict[str, Any] = {"provider": provider}
        if status is not None:
            details["status"] = status
        if body:
            details["body"] = body[:200]
        super().__init__(message, details)
        self.provider = provider
        self.status = status
        self.body = body


class CatalogError(AppException):
    """Raised when the static product catalog is missing or invalid."""

    status_code = 500
    error_code = "CATALOG_ERROR"

    def __init__(self, message: str, path: Optional[str] = None, index: Optional[int] = None):
        details: Dict[str, Any] = {}
        if path:
            details["path"] = path
        if index is not None:
            details["index"] = index
        super().__init__(message, details)
