"""Pytest configuration and fixtures for toolset tests."""

import json
import pytest
import sys
from pathlib import Path

import httpx

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from action_toolset import get_settings

BACKEND_URL = "https://backend.test/api"
WORKSPACE_URL = "http://workspace.test"


class FakeBackend:
    """In-memory stand-in for the API and a workspace tooling server."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.remote_actions = [
            {"name": "GITHUB_STAR_REPO", "appName": "github", "description": "Star a repository"},
            {"name": "SLACK_SEND_MESSAGE", "appName": "slack", "description": "Send a message"},
        ]
        self.action_details = {
            "GITHUB_STAR_REPO": {"name": "GITHUB_STAR_REPO", "appName": "github", "no_auth": False},
            "CODEINTERPRETER_RUN": {"name": "CODEINTERPRETER_RUN", "appName": "codeinterpreter", "no_auth": True},
        }
        self.connected_accounts = [
            {"id": "ca_github_1", "appName": "github", "status": "ACTIVE", "clientUniqueUserId": "default"},
        ]
        self.local_actions = [
            {"name": "FILETOOL_READ", "appName": "filetool", "description": "Read a file"},
            {"name": "FILETOOL_WRITE", "appName": "filetool", "description": "Write a file"},
            {"name": "SHELLTOOL_EXEC", "appName": "shelltool", "description": "Run a command"},
        ]
        self.fail_paths: dict[str, int] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path in self.fail_paths:
            return httpx.Response(self.fail_paths[path], json={"message": "boom"})

        if request.url.host == "workspace.test":
            return self._workspace(request, path)

        if path == "/api/v2/actions":
            return httpx.Response(200, json={"items": self.remote_actions, "page": 1, "totalPages": 1})
        if path.startswith("/api/v2/actions/") and path.endswith("/execute"):
            name = path.split("/")[-2]
            body = json.loads(request.content)
            return httpx.Response(200, json={"successfull": True, "data": {"action": name, "body": body}})
        if path.startswith("/api/v2/actions/"):
            name = path.split("/")[-1]
            if name not in self.action_details:
                return httpx.Response(404, json={"message": f"{name} not found"})
            return httpx.Response(200, json=self.action_details[name])
        if path == "/api/v1/connectedAccounts":
            app_names = request.url.params.get("appNames", "").split(",")
            items = [a for a in self.connected_accounts if a.get("appName") in app_names + [None]]
            return httpx.Response(200, json={"items": items})

        return httpx.Response(404, json={"message": "not found"})

    def _workspace(self, request: httpx.Request, path: str) -> httpx.Response:
        if path == "/api":
            return httpx.Response(200, json={"status": "ok"})
        if path == "/api/actions":
            return httpx.Response(200, json=self.local_actions)
        if path.startswith("/api/actions/execute/"):
            name = path.split("/")[-1]
            body = json.loads(request.content)
            return httpx.Response(200, json={"successfull": True, "data": {"action": name, "body": body}})
        return httpx.Response(404, json={"message": "not found"})

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep real credentials and cached settings out of every test."""
    for name in (
        "COMPOSIO_API_KEY",
        "COMPOSIO_BASE_URL",
        "COMPOSIO_ENTITY_ID",
        "COMPOSIO_WORKSPACE_ENV",
        "COMPOSIO_WORKSPACE_URL",
        "COMPOSIO_REQUEST_TIMEOUT",
        "COMPOSIO_USER_DATA_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def backend():
    """Fresh fake backend for each test."""
    return FakeBackend()


@pytest.fixture
def transport(backend):
    return httpx.MockTransport(backend.handler)


@pytest.fixture
def user_data_file(tmp_path):
    """Write a user data file in the fake home directory."""
    def _write(content):
        path = tmp_path / ".composio" / "userData.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(json.dumps(content))
        return path
    return _write
