"""Remote Workspace - Actions served by a tooling server inside a sandbox.

The sandbox itself is started elsewhere; this class only talks to the
tooling server it exposes.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .base import BaseWorkspace
from ..exceptions import WorkspaceError
from ..types import ActionModel, ExecEnv, WorkspaceConfig

logger = logging.getLogger(__name__)


class RemoteWorkspace(BaseWorkspace):
    """
    Workspace reached over HTTP.

    Endpoints:
    - GET  /api                            health
    - GET  /api/actions                    local action schemas
    - POST /api/actions/execute/{action}   run an action
    """

    env = ExecEnv.REMOTE

    def __init__(
        self,
        config: WorkspaceConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(config)
        if not config.url:
            raise WorkspaceError(
                "Remote workspace needs the URL of its tooling server",
                error_code="NO_WORKSPACE_URL",
            )
        self.url = config.url.rstrip("/")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self.config.api_key:
                headers["X-API-Key"] = self.config.api_key
            self._client = httpx.AsyncClient(
                base_url=self.url,
                headers=headers,
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._client

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        if self._torn_down:
            raise WorkspaceError(f"Workspace {self.id} has been torn down", error_code="TORN_DOWN")
        response = await self._get_client().request(method, path, json=json)
        response.raise_for_status()
        return response.json()

    async def get_local_actions_schema(self) -> List[ActionModel]:
        data = await self._request("GET", "/api/actions")
        items = data.get("items", []) if isinstance(data, dict) else data
        actions = [ActionModel.model_validate(item) for item in items]
        logger.info(f"Workspace {self.id} reports {len(actions)} local actions")
        return actions

    async def execute_action(
        self,
        action: str,
        params: Dict[str, Any],
        entity_id: str = "default",
    ) -> Dict[str, Any]:
        logger.info(f"Executing {action} in workspace {self.id} for entity {entity_id}")
        return await self._request(
            "POST",
            f"/api/actions/execute/{action}",
            json={"params": params, "entity_id": entity_id},
        )

    async def health_check(self) -> bool:
        if self._torn_down:
            return False
        try:
            response = await self._get_client().get("/api")
        except httpx.HTTPError as e:
            logger.warning(f"Workspace {self.id} health check failed: {e}")
            return False
        return response.is_success

    async def teardown(self) -> None:
        if self._torn_down:
            return
        if self._client:
            await self._client.aclose()
            self._client = None
        await super().teardown()
