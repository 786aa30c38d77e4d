from __future__ import annotations

import copy
import json
import logging
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

from .store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_json(store: KeyValueStore, key: str, default: Any) -> Any:
    """Load the blob under ``key`` merged over ``default``.

    - missing or unreadable blob: the default
    - list default: the stored value only when it is a list too
    - dict default: shallow merge of the stored dict over the default
    """

    raw = store.get(key)
    if raw is None:
        return copy.deepcopy(default)

    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.error("Unreadable JSON under storage key %r, using defaults", key)
        return copy.deepcopy(default)

    if isinstance(default, list):
        if not isinstance(value, list):
            logger.error("Storage key %r does not hold a list, using defaults", key)
            return copy.deepcopy(default)
        return value

    if isinstance(default, dict):
        if not isinstance(value, dict):
            logger.error("Storage key %r does not hold an object, using defaults", key)
            return copy.deepcopy(default)
        merged = copy.deepcopy(default)
        merged.update(value)
        return merged

    return value


def save_json(store: KeyValueStore, key: str, value: Any) -> None:
    store.set(key, json.dumps(value, ensure_ascii=False))


class JsonCollection(Generic[T]):
    """A list of entities mirrored into one storage key.

    The collection is read once, kept in memory and rewritten in full on
    every mutation.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        *,
        decode: Callable[[dict], T],
        encode: Callable[[T], dict],
    ):
        self._store = store
        self._key = key
        self._encode = encode
        self._items: List[T] = []
        for raw in load_json(store, key, []):
            if not isinstance(raw, dict):
                logger.warning("Skipping malformed entry in %r: %r", key, raw)
                continue
            try:
                self._items.append(decode(raw))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping undecodable entry in %r: %r", key, raw)

    def all(self) -> List[T]:
        return list(self._items)

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for item in self._items:
            if predicate(item):
                return item
        return None

    def append(self, item: T) -> None:
        self._items.append(item)
        self._flush()

    def replace(self, predicate: Callable[[T], bool], item: T) -> bool:
        for i, existing in enumerate(self._items):
            if predicate(existing):
                self._items[i] = item
                self._flush()
                return True
        return False

    def upsert(self, predicate: Callable[[T], bool], item: T) -> None:
        if not self.replace(predicate, item):
            self.append(item)

    def remove_where(self, predicate: Callable[[T], bool]) -> int:
        kept = [i for i in self._items if not predicate(i)]
        removed = len(self._items) - len(kept)
        if removed:
            self._items = kept
            self._flush()
        return removed

    def replace_all(self, items: Iterable[T]) -> None:
        self._items = list(items)
        self._flush()

    def _flush(self) -> None:
        save_json(self._store, self._key, [self._encode(i) for i in self._items])
