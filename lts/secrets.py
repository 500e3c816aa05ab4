"""Per-service secrets persistence.

Each service owns one namespaced key-value unit stored as a small JSON file
(``secrets-spotify.json`` etc.) inside the configured secrets directory.
Values are only written back when :meth:`SecretsConfig.save` is called.
"""

from __future__ import annotations
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Any

from .errors import ConfigLoadError

logger = logging.getLogger(__name__)


class SecretsConfig(ABC):
    """Key-value unit bound to one service."""

    @abstractmethod
    def is_set(self, key: str) -> bool:
        """Return True if key holds a value."""

    @abstractmethod
    def get(self, key: str, default: str = "") -> str:
        """Return the string value for key, or default."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Stage a value; nothing is written until save()."""

    @abstractmethod
    def save(self) -> None:
        """Persist all staged values.

        Raises:
            OSError: If the backing store cannot be written
        """


class SecretsLoader(ABC):
    """Loads secrets units by name."""

    @abstractmethod
    def load(self, name: str) -> SecretsConfig:
        """Load the unit called name.

        Raises:
            ConfigLoadError: If an existing unit cannot be read
        """


class JsonSecretsConfig(SecretsConfig):
    """Secrets unit backed by a JSON object on disk."""

    def __init__(self, path: Path, values: Dict[str, Any] | None = None):
        self.path = path
        self._values: Dict[str, Any] = dict(values or {})

    def is_set(self, key: str) -> bool:
        return self._values.get(key) not in (None, "")

    def get(self, key: str, default: str = "") -> str:
        value = self._values.get(key)
        if value is None:
            return default
        return str(value)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + '.tmp')
        with open(tmp, 'w', encoding='utf-8') as fh:
            json.dump(self._values, fh, indent=2, sort_keys=True)
        tmp.replace(self.path)
        logger.debug(f"Saved secrets to {self.path.resolve()}")


class JsonSecretsLoader(SecretsLoader):
    """Loads JSON secrets units from a directory.

    A missing file yields an empty unit so first-time use looks like a
    logged-out service rather than an error.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def load(self, name: str) -> SecretsConfig:
        path = self.path_for(name)
        if not path.exists():
            logger.debug(f"No secrets file at {path}; starting empty")
            return JsonSecretsConfig(path)
        try:
            with open(path, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            raise ConfigLoadError(f"failed to load {name} from {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigLoadError(f"failed to load {name} from {path}: expected a JSON object")
        logger.debug(f"Loaded secrets from {path}")
        return JsonSecretsConfig(path, data)


__all__ = ["SecretsConfig", "SecretsLoader", "JsonSecretsConfig", "JsonSecretsLoader"]
