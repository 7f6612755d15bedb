"""Locally stored user data written by the CLI login flow."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

USER_DATA_DIR = ".composio"
USER_DATA_FILE = "userData.json"


def get_user_path() -> Optional[str]:
    """Path of the user data file, or None when there is no home directory."""
    home = os.environ.get("HOME")
    if not home:
        try:
            home = str(Path.home())
        except RuntimeError:
            return None
    return str(Path(home) / USER_DATA_DIR / USER_DATA_FILE)


class UserData:
    """User data file holding the API key saved by a previous login."""

    def __init__(self, path: Optional[str]):
        self._path = path
        self.api_key: Optional[str] = None

    @property
    def path(self) -> Optional[str]:
        return self._path

    def init(self) -> bool:
        """Read the file; returns False if it is absent or unreadable."""
        if not self._path:
            return False
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return False
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read user data from {self._path}: {e}")
            return False

        if not isinstance(data, dict):
            return False

        self.api_key = data.get("apiKey")
        return True

    @classmethod
    def load(cls, path: Optional[str]) -> "UserData":
        user_data = cls(path)
        user_data.init()
        return user_data
