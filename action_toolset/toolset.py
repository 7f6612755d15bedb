"""ComposioToolSet - Client-side entry point to the action-execution API.

Resolves the API key, owns the API client and the workspace, merges
remote and workspace-local action catalogs and routes executions.
Framework integrations subclass it and implement get_actions/get_tools.
"""

import asyncio
import atexit
import functools
import logging
import weakref
from typing import Any, Dict, List, Optional, Sequence

import httpx

from .client import ComposioClient
from .config import get_settings
from .exceptions import ApiKeyNotProvidedError
from .types import ActionModel, ExecEnv, WorkspaceConfig
from .user_data import UserData, get_user_path
from .workspace import WorkspaceFactory

logger = logging.getLogger(__name__)


def _run_exit_hook(method_ref: weakref.WeakMethod) -> None:
    method = method_ref()
    if method is not None:
        method()


class ComposioToolSet:
    """
    Convenience wrapper around the API client and a workspace.

    Execution routing:
    - HOST: actions run on the backend for the given entity
    - anything else: actions run inside the workspace

    The workspace is torn down when the process exits, once, on a
    best-effort basis. Call close() to do it earlier.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        runtime: Optional[str] = None,
        entity_id: Optional[str] = None,
        workspace_env: Optional[ExecEnv] = None,
        workspace_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()

        self.api_key = self._resolve_api_key(api_key, settings.user_data_path)
        self.base_url = base_url or settings.base_url
        self.runtime = runtime
        self.entity_id = entity_id or settings.entity_id
        self.workspace_env = ExecEnv(workspace_env or settings.workspace_env)

        self.client = ComposioClient(
            api_key=self.api_key,
            base_url=self.base_url,
            runtime=runtime,
            timeout=settings.request_timeout,
            transport=transport,
        )
        self.workspace_config = WorkspaceConfig(
            api_key=self.api_key,
            base_url=self.base_url,
            url=workspace_url or settings.workspace_url,
            timeout=settings.request_timeout,
        )
        self.workspace_factory = WorkspaceFactory(
            self.workspace_env,
            self.workspace_config,
            client=self.client,
            transport=transport,
        )

        self.local_actions: Optional[List[ActionModel]] = None
        self._exit_teardown_attempted: bool = False
        self._exit_hook = functools.partial(_run_exit_hook, weakref.WeakMethod(self._teardown_at_exit))
        atexit.register(self._exit_hook)

    @staticmethod
    def _resolve_api_key(api_key: Optional[str], user_data_path: Optional[str] = None) -> str:
        """Argument first, then COMPOSIO_API_KEY, then the user data file."""
        resolved = api_key or get_settings().api_key
        if not resolved:
            resolved = UserData.load(user_data_path or get_user_path()).api_key
        if not resolved:
            raise ApiKeyNotProvidedError()
        return resolved

    def _teardown_at_exit(self) -> None:
        if self._exit_teardown_attempted:
            return
        self._exit_teardown_attempted = True
        if self.workspace_factory.workspace is None:
            return
        try:
            asyncio.run(self.workspace_factory.teardown())
        except Exception as e:
            logger.warning(f"Workspace teardown at exit failed: {e}")

    async def setup(self) -> None:
        """Create the workspace and cache its local actions."""
        workspace = await self.workspace_factory.new(self.workspace_env, self.workspace_config)

        if self.local_actions is None and self.workspace_env != ExecEnv.HOST:
            self.local_actions = await workspace.get_local_actions_schema()

    async def get_actions_schema(
        self,
        actions: Optional[Sequence[str]] = None,
        entity_id: Optional[str] = None,
    ) -> List[ActionModel]:
        """
        Get schemas for specific actions.

        Args:
            actions: Action names to fetch
            entity_id: Accepted for signature parity with get_actions

        Returns:
            Remote action schemas followed by matching local ones
        """
        await self.setup()

        response = await self.client.actions.list(
            actions=",".join(actions) if actions is not None else None,
            show_all=True,
        )

        local_actions: Dict[str, ActionModel] = {}
        for name in actions or []:
            action_data = self._find_local_action(name)
            if action_data is not None:
                local_actions[action_data.name] = action_data

        return [*response.items, *local_actions.values()]

    async def get_tools_schema(
        self,
        apps: Sequence[str],
        tags: Optional[Sequence[str]] = None,
        use_case: Optional[str] = None,
        entity_id: Optional[str] = None,
    ) -> List[ActionModel]:
        """
        Get schemas for every action of some apps.

        Without tags or a use case only the apps' important actions are
        listed.

        Args:
            apps: App names
            tags: Only actions carrying these tags
            use_case: Free text use case to search for
            entity_id: Accepted for signature parity with get_tools

        Returns:
            Remote action schemas followed by the apps' local ones
        """
        await self.setup()

        response = await self.client.actions.list(
            apps=",".join(apps),
            tags=",".join(tags) if tags else None,
            show_all=True,
            filter_important_actions=not tags and not use_case,
            use_case=use_case or None,
        )

        local_actions: Dict[str, ActionModel] = {}
        for app_name in apps:
            for action in self.local_actions or []:
                if action.app_name == app_name:
                    local_actions[action.name] = action

        return [*response.items, *local_actions.values()]

    def _find_local_action(self, name: str) -> Optional[ActionModel]:
        for action in self.local_actions or []:
            if action.name == name:
                return action
        return None

    async def get_actions(
        self,
        actions: Optional[Sequence[str]] = None,
        entity_id: Optional[str] = None,
    ) -> Any:
        """Framework-specific tool objects for actions."""
        raise NotImplementedError("Not implemented")

    async def get_tools(
        self,
        apps: Sequence[str],
        tags: Optional[Sequence[str]] = None,
        use_case: Optional[str] = None,
        entity_id: Optional[str] = None,
    ) -> Any:
        """Framework-specific tool objects for apps."""
        raise NotImplementedError("Not implemented")

    async def execute_action(
        self,
        action: str,
        params: Dict[str, Any],
        entity_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Execute an action.

        Args:
            action: Name of the action
            params: Action input parameters
            entity_id: Entity to run as; defaults to the toolset's entity

        Returns:
            The execution response, unmodified
        """
        entity_id = entity_id or self.entity_id

        if self.workspace_env != ExecEnv.HOST:
            if self.workspace_factory.workspace is None:
                await self.setup()
            workspace = await self.workspace_factory.get()
            return await workspace.execute_action(action, params, entity_id=entity_id)

        return await self.client.get_entity(entity_id).execute(action, params)

    async def close(self) -> None:
        """Tear down the workspace and close the API client."""
        self._exit_teardown_attempted = True
        atexit.unregister(self._exit_hook)
        try:
            await self.workspace_factory.teardown()
        finally:
            await self.client.close()

    async def __aenter__(self) -> "ComposioToolSet":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
