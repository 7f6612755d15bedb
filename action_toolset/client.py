"""
API client for the remote action-execution backend.

This module provides action catalog listing, action execution and
connected-account lookup. Transport errors and non-2xx responses are
raised to the caller as httpx exceptions; nothing is retried here.
"""

import logging
from typing import Optional, Dict, List, Any, Sequence
import httpx

from .config import DEFAULT_BASE_URL
from .exceptions import ConnectedAccountNotFoundError
from .types import ActionModel, ListActionsResponse, ConnectedAccountModel

logger = logging.getLogger(__name__)


def _join(values: Optional[Sequence[str]]) -> Optional[str]:
    if values is None:
        return None
    return ",".join(values)


def _query(params: Dict[str, Any]) -> Dict[str, str]:
    """Drop unset params and render booleans the way the API expects."""
    query = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query


class ActionsResource:
    """Endpoints under /v2/actions."""

    def __init__(self, client: "ComposioClient"):
        self._client = client

    async def list(
        self,
        apps: Optional[str] = None,
        actions: Optional[str] = None,
        tags: Optional[str] = None,
        use_case: Optional[str] = None,
        show_all: Optional[bool] = None,
        filter_important_actions: Optional[bool] = None,
    ) -> ListActionsResponse:
        """
        List actions matching the given filters.

        Args:
            apps: Comma separated app names
            actions: Comma separated action names
            tags: Comma separated tags
            use_case: Free text use case to search for
            show_all: Include every matching action instead of the first page
            filter_important_actions: Only return the important actions of the apps

        Returns:
            ListActionsResponse with the matching items
        """
        data = await self._client.request(
            "GET",
            "/v2/actions",
            params=_query({
                "apps": apps,
                "actions": actions,
                "tags": tags,
                "useCase": use_case,
                "showAll": show_all,
                "filterImportantActions": filter_important_actions,
            }),
        )
        if isinstance(data, list):
            data = {"items": data}
        return ListActionsResponse.model_validate(data)

    async def get(self, name: str) -> ActionModel:
        """Get a single action by name."""
        data = await self._client.request("GET", f"/v2/actions/{name}")
        return ActionModel.model_validate(data)

    async def execute(self, name: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Execute an action with a prepared request body."""
        return await self._client.request("POST", f"/v2/actions/{name}/execute", json=body)


class ConnectedAccountsResource:
    """Endpoints under /v1/connectedAccounts."""

    def __init__(self, client: "ComposioClient"):
        self._client = client

    async def list(
        self,
        entity_id: str,
        app_names: Optional[Sequence[str]] = None,
        status: Optional[str] = "ACTIVE",
    ) -> List[ConnectedAccountModel]:
        data = await self._client.request(
            "GET",
            "/v1/connectedAccounts",
            params=_query({
                "user_uuid": entity_id,
                "appNames": _join(app_names),
                "status": status,
                "showActiveOnly": status == "ACTIVE",
            }),
        )
        items = data.get("items", []) if isinstance(data, dict) else data
        return [ConnectedAccountModel.model_validate(item) for item in items]


class Entity:
    """A user/entity on whose behalf actions run."""

    def __init__(self, client: "ComposioClient", id: str = "default"):
        self.client = client
        self.id = id

    async def get_connection(self, app_name: str) -> Optional[ConnectedAccountModel]:
        """Get the first active connection of this entity for an app."""
        accounts = await self.client.connected_accounts.list(
            entity_id=self.id,
            app_names=[app_name],
        )
        for account in accounts:
            if account.app_name is not None and account.app_name.lower() == app_name.lower():
                return account
        return None

    async def execute(
        self,
        action: str,
        params: Dict[str, Any],
        connected_account_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Execute an action for this entity.

        Actions that need no auth run directly; the rest run through the
        entity's connected account for the action's app.

        Raises:
            ConnectedAccountNotFoundError: If no connection exists for the app
        """
        action_data = await self.client.actions.get(action)
        app_name = action_data.app_name

        if action_data.no_auth:
            logger.info(f"Executing no-auth action {action} for entity {self.id}")
            return await self.client.actions.execute(
                action,
                {
                    "appName": app_name,
                    "input": params,
                    "entityId": self.id,
                },
            )

        if connected_account_id is None:
            if not app_name:
                raise ConnectedAccountNotFoundError(self.id, app_name)
            connection = await self.get_connection(app_name)
            if connection is None:
                raise ConnectedAccountNotFoundError(self.id, app_name)
            connected_account_id = connection.id

        logger.info(f"Executing action {action} for entity {self.id} via {connected_account_id}")
        return await self.client.actions.execute(
            action,
            {
                "connectedAccountId": connected_account_id,
                "input": params,
                "entityId": self.id,
                "appName": app_name,
            },
        )


class ComposioClient:
    """
    Client for the remote action-execution API.

    Provides:
    - actions: list, get and execute actions
    - connected_accounts: look up an entity's app connections
    - get_entity: handle for executing on behalf of an entity
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        runtime: Optional[str] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.runtime = runtime
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        self.actions = ActionsResource(self)
        self.connected_accounts = ConnectedAccountsResource(self)

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict:
        headers = {
            "X-API-Key": self.api_key,
            "Content-Type": "application/json",
        }
        if self.runtime:
            headers["X-Source"] = self.runtime
        return headers

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        client = self._get_client()
        response = await client.request(method, path, params=params, json=json)
        if response.is_error:
            logger.warning(f"{method} {path} failed: {response.status_code} - {response.text}")
        response.raise_for_status()
        return response.json()

    def get_entity(self, id: str = "default") -> Entity:
        return Entity(self, id)
