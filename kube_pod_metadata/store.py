from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any, Optional

from kube_pod_metadata.model import get_metadata, is_kind

logger = logging.getLogger(__name__)

KeyFunc = Callable[[dict[str, Any]], str]


def name_key(obj: dict[str, Any]) -> str:
    name = get_metadata(obj).get("name")
    if not name:
        raise KeyError("object has no metadata.name")
    return name


def meta_namespace_key(obj: dict[str, Any]) -> str:
    """
    "<namespace>/<name>" for namespaced objects, "<name>" otherwise.
    """
    name = name_key(obj)
    namespace = get_metadata(obj).get("namespace")
    return f"{namespace}/{name}" if namespace else name


class ObjectStore:
    """
    In-memory read cache of Kubernetes objects.

    Whatever feeds the cache (a watch, files, tests) lives outside this class;
    reads are served locally and never reach the API server.
    """

    def __init__(self, key_func: KeyFunc = name_key):
        self._key_func = key_func
        self._items: dict[str, Any] = {}
        self._lock = threading.Lock()

    def add(self, obj: dict[str, Any]) -> None:
        key = self._key_func(obj)
        with self._lock:
            self._items[key] = obj

    def update(self, obj: dict[str, Any]) -> None:
        self.add(obj)

    def delete(self, obj: dict[str, Any]) -> None:
        key = self._key_func(obj)
        with self._lock:
            self._items.pop(key, None)

    def replace(self, objs: Iterable[dict[str, Any]]) -> None:
        items = {self._key_func(o): o for o in objs}
        with self._lock:
            self._items = items

    def list(self) -> list[Any]:
        with self._lock:
            return list(self._items.values())

    def list_keys(self) -> list[str]:
        with self._lock:
            return list(self._items.keys())

    def get(self, obj: dict[str, Any]) -> tuple[Optional[Any], bool]:
        return self.get_by_key(self._key_func(obj))

    def get_by_key(self, key: str) -> tuple[Optional[Any], bool]:
        with self._lock:
            if key in self._items:
                return self._items[key], True
        return None, False

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def get_cached(store: Any, key: str, kind: str) -> Optional[dict[str, Any]]:
    """
    Look `key` up in a store and return it only if it is a `kind` object.
    A miss, a lookup error or a value of another kind all yield None.
    """
    if store is None:
        return None

    try:
        obj, exists = store.get_by_key(key)
    except Exception as e:
        logger.debug("Store lookup for %s %r failed: %s", kind, key, e)
        return None

    if not exists:
        return None

    if not is_kind(obj, kind):
        logger.debug("Store entry %r is not a %s, ignoring", key, kind)
        return None

    return obj
