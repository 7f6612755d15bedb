"""Toolset types and data models.

This module defines the Pydantic models shared by the toolset:
- Execution environments
- Action catalog records
- Connected account records
- Workspace configuration
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, List, Any
from enum import Enum


# =============================================================================
# Enums
# =============================================================================

class ExecEnv(str, Enum):
    """Where actions are executed."""
    HOST = "host"
    REMOTE = "remote"


# =============================================================================
# Action Catalog Models
# =============================================================================

class ActionModel(BaseModel):
    """An action as described by the API or by a workspace tooling server.

    Records are passed through untouched; unknown fields are preserved.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    app_name: Optional[str] = Field(default=None, alias="appName")
    display_name: Optional[str] = Field(default=None, alias="displayName")
    description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)
    response: Dict[str, Any] = Field(default_factory=dict)
    tags: List[str] = Field(default_factory=list)
    enabled: bool = True
    no_auth: bool = False


class ListActionsResponse(BaseModel):
    """Page of actions returned by the list endpoint."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    items: List[ActionModel] = Field(default_factory=list)
    page: int = 1
    total_pages: int = Field(default=1, alias="totalPages")


# =============================================================================
# Connected Accounts
# =============================================================================

class ConnectedAccountModel(BaseModel):
    """A connection between an entity and an app."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    app_name: Optional[str] = Field(default=None, alias="appName")
    status: Optional[str] = None
    client_unique_user_id: Optional[str] = Field(default=None, alias="clientUniqueUserId")


# =============================================================================
# Workspace
# =============================================================================

class WorkspaceConfig(BaseModel):
    """Settings handed to the workspace factory."""
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    url: Optional[str] = None  # Tooling server URL for remote workspaces
    timeout: float = 60.0
