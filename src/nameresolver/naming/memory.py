from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from nameresolver.naming.base import (
    SEPARATOR,
    NamingError,
    NamingRegistry,
    normalize_context,
    normalize_name,
)


class InMemoryRegistry(NamingRegistry):
    """Hierarchical in-process directory."""

    def __init__(self, bindings: Mapping[str, Any] | None = None) -> None:
        self._items: dict[str, Any] = {}
        self._lock = threading.Lock()
        self._closed = False
        for name, value in (bindings or {}).items():
            self._items[normalize_name(name)] = value

    def _check_open(self, name: str | None = None) -> None:
        if self._closed:
            raise NamingError("Registry is closed", code="ECLOSED", name=name)

    def lookup(self, name: str) -> Any | None:
        key = normalize_name(name)
        with self._lock:
            self._check_open(key)
            return self._items.get(key)

    def bind(self, name: str, value: Any) -> None:
        key = normalize_name(name)
        with self._lock:
            self._check_open(key)
            self._items[key] = value

    def unbind(self, name: str) -> None:
        key = normalize_name(name)
        with self._lock:
            self._check_open(key)
            self._items.pop(key, None)

    def list(self, context: str = "") -> list[str]:
        prefix = normalize_context(context)
        if prefix:
            prefix += SEPARATOR
        with self._lock:
            self._check_open(context or None)
            return sorted(
                key
                for key in self._items
                if key.startswith(prefix) and SEPARATOR not in key[len(prefix):]
            )

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._items.clear()
