"""Durable storage for the client's token and cached user."""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass
class StoredCredentials:
    token: str
    user: dict


class CredentialStore(Protocol):
    def load(self) -> StoredCredentials | None: ...

    def save(self, credentials: StoredCredentials) -> None: ...

    def clear(self) -> None: ...


class MemoryCredentialStore:
    """Keeps credentials for the life of the process."""

    def __init__(self, credentials: StoredCredentials | None = None):
        self._credentials = credentials

    def load(self) -> StoredCredentials | None:
        return self._credentials

    def save(self, credentials: StoredCredentials) -> None:
        self._credentials = credentials

    def clear(self) -> None:
        self._credentials = None


class FileCredentialStore:
    """Keeps credentials in a JSON file so they survive restarts."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> StoredCredentials | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return StoredCredentials(token=data["token"], user=data["user"])
        except (ValueError, KeyError, TypeError) as e:
            # Unreadable credentials are the same as none at all
            logger.warning(f"Ignoring corrupt credential file {self.path}: {e}")
            return None

    def save(self, credentials: StoredCredentials) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(asdict(credentials)), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
