"""Workspaces - Where actions run.

This package contains the host workspace, the remote tooling-server
workspace and the factory the toolset uses to manage them.
"""

from .base import BaseWorkspace
from .host import HostWorkspace
from .remote import RemoteWorkspace
from .factory import WorkspaceFactory

__all__ = [
    "BaseWorkspace",
    "HostWorkspace",
    "RemoteWorkspace",
    "WorkspaceFactory",
]
