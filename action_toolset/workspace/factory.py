"""Workspace Factory - Creates and tracks the toolset's workspace."""

import logging
from typing import Optional

import httpx

from .base import BaseWorkspace, describe
from .host import HostWorkspace
from .remote import RemoteWorkspace
from ..client import ComposioClient
from ..exceptions import WorkspaceError
from ..types import ExecEnv, WorkspaceConfig

logger = logging.getLogger(__name__)


class WorkspaceFactory:
    """
    Owns at most one workspace at a time.

    Calling new() again for the same environment returns the live
    workspace; switching environments tears the old one down first.
    """

    def __init__(
        self,
        env: ExecEnv,
        config: WorkspaceConfig,
        client: Optional[ComposioClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.env = ExecEnv(env)
        self.config = config
        self._client = client
        self._transport = transport
        self.workspace: Optional[BaseWorkspace] = None

    def _create(self, env: ExecEnv, config: WorkspaceConfig) -> BaseWorkspace:
        if env == ExecEnv.HOST:
            return HostWorkspace(config, client=self._client)
        if env == ExecEnv.REMOTE:
            return RemoteWorkspace(config, transport=self._transport)
        raise WorkspaceError(f"Unsupported workspace environment: {env}", error_code="UNSUPPORTED_ENV")

    async def new(
        self,
        env: Optional[ExecEnv] = None,
        config: Optional[WorkspaceConfig] = None,
    ) -> BaseWorkspace:
        """
        Create the workspace for an environment, or reuse the live one.

        Args:
            env: Environment to create; defaults to the factory's env
            config: Workspace settings; defaults to the factory's config

        Returns:
            The current workspace
        """
        env = ExecEnv(env) if env is not None else self.env
        config = config or self.config

        current = self.workspace
        if current is not None and not current.is_torn_down() and current.env == env:
            return current

        if current is not None:
            await self.teardown()

        self.workspace = self._create(env, config)
        self.env = env
        logger.info(f"Created workspace {describe(self.workspace)}")
        return self.workspace

    async def get(self, id: Optional[str] = None) -> BaseWorkspace:
        """
        Get the current workspace.

        Raises:
            WorkspaceError: If no workspace exists or the id does not match
        """
        workspace = self.workspace
        if workspace is None or workspace.is_torn_down():
            raise WorkspaceError("No workspace has been created, call setup() first", error_code="NO_WORKSPACE")
        if id is not None and workspace.id != id:
            raise WorkspaceError(f"Workspace '{id}' not found", error_code="WORKSPACE_NOT_FOUND")
        return workspace

    async def teardown(self) -> None:
        """Tear down the current workspace, if any."""
        workspace = self.workspace
        self.workspace = None
        if workspace is not None:
            await workspace.teardown()
