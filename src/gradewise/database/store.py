from __future__ import annotations

from typing import Dict, Optional, Protocol


class KeyValueStore(Protocol):
    """Persistent string store, one value per named key.

    Collections are serialized to JSON by the caller; the store never looks
    inside a value.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
