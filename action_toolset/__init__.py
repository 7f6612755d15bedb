"""Action Toolset - Client-side wrapper for the action-execution API.

This package provides:
- ComposioToolSet: API key resolution, catalog merging, execution routing
- ComposioClient: HTTP client for actions and connected accounts
- Workspaces: host and remote tooling-server execution environments
- Settings: COMPOSIO_* environment configuration
"""

from .types import (
    # Enums
    ExecEnv,
    # Catalog
    ActionModel,
    ListActionsResponse,
    ConnectedAccountModel,
    # Workspace
    WorkspaceConfig,
)

from .config import Settings, get_settings
from .exceptions import (
    ToolsetError,
    ApiKeyNotProvidedError,
    WorkspaceError,
    ConnectedAccountNotFoundError,
)
from .user_data import UserData, get_user_path
from .client import ComposioClient, Entity
from .workspace import (
    BaseWorkspace,
    HostWorkspace,
    RemoteWorkspace,
    WorkspaceFactory,
)
from .toolset import ComposioToolSet

__all__ = [
    # Enums
    "ExecEnv",
    # Catalog
    "ActionModel",
    "ListActionsResponse",
    "ConnectedAccountModel",
    # Workspace
    "WorkspaceConfig",
    "BaseWorkspace",
    "HostWorkspace",
    "RemoteWorkspace",
    "WorkspaceFactory",
    # Configuration
    "Settings",
    "get_settings",
    "UserData",
    "get_user_path",
    # Errors
    "ToolsetError",
    "ApiKeyNotProvidedError",
    "WorkspaceError",
    "ConnectedAccountNotFoundError",
    # Core Components
    "ComposioClient",
    "Entity",
    "ComposioToolSet",
]
