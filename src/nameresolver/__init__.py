"""Resolve names from a naming registry into typed instances."""

from .compat import is_compatible, is_subtype
from .loader import ClassLoader, ClassLoadError, ClassNotFound, InstantiationFailed
from .naming import InMemoryRegistry, NamingError, NamingRegistry, S3Registry
from .resolver import (
    Diagnostic,
    NameResolver,
    RegistryUnavailable,
    TypeMismatch,
    build_registry,
)

__all__ = [
    "NameResolver",
    "Diagnostic",
    "RegistryUnavailable",
    "TypeMismatch",
    "ClassLoader",
    "ClassLoadError",
    "ClassNotFound",
    "InstantiationFailed",
    "NamingRegistry",
    "NamingError",
    "InMemoryRegistry",
    "S3Registry",
    "build_registry",
    "is_compatible",
    "is_subtype",
]
