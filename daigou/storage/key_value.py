"""Mini README: Key-value persistence backends.

Structure:
    * KeyValueStore - protocol of text values addressed by fixed names.
    * DirectoryKeyValueStore - one ``<key>.json`` file per key on disk.
    * MemoryKeyValueStore - dictionary-backed store for tests and demos.

The ledger only ever needs two named entries, so a directory of small files
is enough. Values are opaque text; interpreting them is the caller's job.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """Minimal durable storage contract."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored text or ``None`` when absent."""

    def set(self, key: str, value: str) -> None:
        """Persist ``value`` under ``key``, replacing any previous value."""


class DirectoryKeyValueStore:
    """Store each key as a UTF-8 text file inside ``directory``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Unsupported storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            LOGGER.debug("Storage key %s not present at %s", key, path)
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        staging = path.with_suffix(".json.tmp")
        staging.write_text(value, encoding="utf-8")
        staging.replace(path)
        LOGGER.debug("Wrote %s characters to %s", len(value), path)


class MemoryKeyValueStore:
    """Volatile store keeping values in a dictionary."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
