"""Host Workspace - Runs actions from the current process through the API."""

import logging
from typing import Any, Dict, Optional

from .base import BaseWorkspace
from ..client import ComposioClient
from ..exceptions import WorkspaceError
from ..types import ExecEnv, WorkspaceConfig

logger = logging.getLogger(__name__)


class HostWorkspace(BaseWorkspace):
    """
    Workspace backed by the host process.

    There are no local actions here: every execution is forwarded to the
    remote API for the given entity.
    """

    env = ExecEnv.HOST

    def __init__(self, config: WorkspaceConfig, client: Optional[ComposioClient] = None):
        super().__init__(config)
        self._owns_client = client is None
        if client is None:
            if not config.api_key:
                raise WorkspaceError("Host workspace needs an API key", error_code="NO_API_KEY")
            client = ComposioClient(
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.timeout,
            )
        self.client = client

    async def execute_action(
        self,
        action: str,
        params: Dict[str, Any],
        entity_id: str = "default",
    ) -> Dict[str, Any]:
        return await self.client.get_entity(entity_id).execute(action, params)

    async def teardown(self) -> None:
        if self._torn_down:
            return
        if self._owns_client:
            await self.client.close()
        await super().teardown()
