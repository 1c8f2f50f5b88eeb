"""Key-value byte stores holding the serialized collections

The store sees opaque strings. It is treated as always available and
synchronous; whoever writes last to a key wins.
"""

from abc import ABC, abstractmethod
from logging import getLogger
from os import listdir, makedirs, remove
from os.path import exists, join
from typing import Dict, List, Optional

logger = getLogger(__name__)


class KeyValueBackend(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or None if absent"""
        raise NotImplementedError()

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value"""
        raise NotImplementedError()

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove ``key``; removing an absent key is not an error"""
        raise NotImplementedError()

    @abstractmethod
    def keys(self) -> List[str]:
        raise NotImplementedError()


class MemoryBackend(KeyValueBackend):
    """Process-local store, one independent instance per handle"""

    def __init__(self, data: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class FileBackend(KeyValueBackend):
    """Stores each key as ``<key>.json`` inside ``directory``"""

    SUFFIX = ".json"

    def __init__(self, directory: str) -> None:
        self.directory = directory

    def _path(self, key: str) -> str:
        if not key or "/" in key or "\\" in key:
            raise ValueError(f"Invalid storage key: {key!r}")
        return join(self.directory, key + self.SUFFIX)

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not exists(path):
            return None
        with open(path, "r", encoding="utf-8") as entry:
            return entry.read()

    def set(self, key: str, value: str) -> None:
        makedirs(self.directory, exist_ok=True)
        with open(self._path(key), "w", encoding="utf-8") as entry:
            entry.write(value)
        logger.debug(f"Wrote {len(value)} characters to {key}")

    def remove(self, key: str) -> None:
        path = self._path(key)
        if exists(path):
            remove(path)
            logger.debug(f"Removed {key}")

    def keys(self) -> List[str]:
        if not exists(self.directory):
            return []
        return sorted(
            name[: -len(self.SUFFIX)]
            for name in listdir(self.directory)
            if name.endswith(self.SUFFIX)
        )


def open_backend(kind: str, path: Optional[str] = None) -> KeyValueBackend:
    """Build a backend of the given kind (``file`` or ``memory``)"""
    if kind == "memory":
        return MemoryBackend()
    elif kind == "file":
        if not path:
            raise ValueError("A directory is required for the file backend")
        return FileBackend(path)
    else:
        raise ValueError(f"Unknown storage backend: {kind}")
