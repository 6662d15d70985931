"""Load classes from textual identifiers and build default instances."""

from __future__ import annotations

import importlib
from typing import Any


class ClassLoadError(Exception):
    def __init__(self, message: str, code: str, identifier: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.identifier = identifier


class ClassNotFound(ClassLoadError):
    def __init__(self, message: str, identifier: str | None = None) -> None:
        super().__init__(message, code="ECLASS_NOT_FOUND", identifier=identifier)


class InstantiationFailed(ClassLoadError):
    def __init__(self, message: str, identifier: str | None = None) -> None:
        super().__init__(message, code="EINSTANTIATE", identifier=identifier)


def _split_identifier(identifier: str) -> tuple[str, list[str]]:
    """``pkg.mod:Outer.Inner`` or ``pkg.mod.Class`` -> (module, attribute path)."""
    identifier = identifier.strip()
    if ":" in identifier:
        module_path, _, attr_path = identifier.partition(":")
        attrs = attr_path.split(".") if attr_path else []
    else:
        module_path, _, class_name = identifier.rpartition(".")
        attrs = [class_name] if class_name else []
    if not module_path or module_path.startswith(".") or not attrs or not all(attrs):
        raise ClassNotFound(f"Invalid class identifier '{identifier}'", identifier)
    return module_path, attrs


class ClassLoader:
    """Resolves ``module.Class`` / ``module:Class`` strings to classes."""

    def resolve_type(self, identifier: str) -> type[Any]:
        module_path, attrs = _split_identifier(identifier)
        try:
            obj: Any = importlib.import_module(module_path)
        except ImportError as e:
            raise ClassNotFound(
                f"Cannot import module '{module_path}' for '{identifier}': {e}",
                identifier,
            ) from e
        for attr in attrs:
            try:
                obj = getattr(obj, attr)
            except AttributeError as e:
                raise ClassNotFound(
                    f"'{module_path}' has no attribute path '{'.'.join(attrs)}'",
                    identifier,
                ) from e
        if not isinstance(obj, type):
            raise ClassNotFound(f"'{identifier}' does not name a class", identifier)
        return obj

    def instantiate_default(self, cls: type[Any]) -> Any:
        try:
            return cls()
        except Exception as e:
            raise InstantiationFailed(
                f"Class {cls.__module__}.{cls.__qualname__} could not be instantiated: {e}",
                f"{cls.__module__}.{cls.__qualname__}",
            ) from e
