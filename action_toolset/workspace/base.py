"""Base Workspace - Abstract interface for action execution environments.

All workspaces must implement this interface so the toolset can
dispatch actions without knowing where they run.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging
import uuid

from ..types import ActionModel, ExecEnv, WorkspaceConfig

logger = logging.getLogger(__name__)


class BaseWorkspace(ABC):
    """
    Abstract base class for workspaces.

    A workspace is the place where local actions live and run.

    Responsibilities:
    - Expose the schema of its local actions
    - Execute actions on behalf of an entity
    - Release its resources on teardown

    Constraints:
    - No container or process provisioning
    - No retries
    """

    env: ExecEnv = ExecEnv.HOST

    def __init__(self, config: WorkspaceConfig):
        self.id: str = str(uuid.uuid4())
        self.config = config
        self._torn_down: bool = False

    @abstractmethod
    async def execute_action(
        self,
        action: str,
        params: Dict[str, Any],
        entity_id: str = "default",
    ) -> Dict[str, Any]:
        """
        Execute an action inside the workspace.

        Args:
            action: Name of the action
            params: Action input parameters
            entity_id: Entity the action runs for

        Returns:
            The execution response as returned by the backend
        """
        pass

    async def get_local_actions_schema(self) -> List[ActionModel]:
        """Schemas of actions only this workspace provides."""
        return []

    async def health_check(self) -> bool:
        """Check if the workspace is ready to accept requests."""
        return not self._torn_down

    def is_torn_down(self) -> bool:
        return self._torn_down

    async def teardown(self) -> None:
        """
        Release the workspace.

        Override to close connections; must be safe to call twice.
        """
        self._torn_down = True
        logger.info(f"Workspace {self.id} ({self.env.value}) torn down")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


def describe(workspace: Optional[BaseWorkspace]) -> str:
    """Short label for log lines."""
    if workspace is None:
        return "<none>"
    return f"{workspace.env.value}:{workspace.id[:8]}"
