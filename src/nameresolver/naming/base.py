from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

SEPARATOR = "/"


class NamingError(Exception):
    """Raised by a registry that cannot serve a request."""

    def __init__(self, message: str, code: str = "ENAMING", name: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.name = name


def normalize_name(name: str) -> str:
    """Collapse redundant separators: ``"/a//b/"`` -> ``"a/b"``."""
    if not isinstance(name, str):
        raise TypeError(f"Name must be a string, got {type(name).__name__}")
    parts = [p for p in name.strip().split(SEPARATOR) if p]
    if not parts:
        raise ValueError("Name must not be empty")
    return SEPARATOR.join(parts)


def normalize_context(context: str) -> str:
    """Like :func:`normalize_name` but the empty string names the root."""
    if not context or not context.strip(SEPARATOR + " "):
        return ""
    return normalize_name(context)


class NamingRegistry(ABC):
    """Name -> value directory queried by the resolver."""

    @abstractmethod
    def lookup(self, name: str) -> Any | None:
        """Return the value bound to ``name`` or ``None`` when unbound."""
        raise NotImplementedError

    @abstractmethod
    def bind(self, name: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def unbind(self, name: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def list(self, context: str = "") -> list[str]:
        """Full names of the bindings directly below ``context``."""
        raise NotImplementedError

    def close(self) -> None:
        return
