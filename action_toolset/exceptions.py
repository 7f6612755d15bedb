"""
Custom exceptions for the action toolset.

HTTP failures are not wrapped: httpx errors reach the caller as raised.
"""

from typing import Optional, Dict, Any


class ToolsetError(Exception):
    """Base exception for all toolset errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ApiKeyNotProvidedError(ToolsetError):
    """Raised when no API key could be resolved."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or (
                "API key is required, please pass it either by using "
                "`COMPOSIO_API_KEY` environment variable or during initialization"
            ),
            error_code="API_KEY_NOT_PROVIDED",
        )


class WorkspaceError(ToolsetError):
    """Raised when a workspace is missing or misconfigured."""
    pass


class ConnectedAccountNotFoundError(ToolsetError):
    """Raised when an entity has no active connection for an app."""

    def __init__(self, entity_id: str, app_name: Optional[str]):
        super().__init__(
            f"Could not find a connection for entity '{entity_id}' and app '{app_name}'",
            error_code="CONNECTED_ACCOUNT_NOT_FOUND",
            details={"entity_id": entity_id, "app_name": app_name},
        )
        self.entity_id = entity_id
        self.app_name = app_name
