"""Naming registries: name -> value directories the resolver reads from."""

from .base import NamingError, NamingRegistry, normalize_context, normalize_name
from .memory import InMemoryRegistry
from .s3 import S3Registry

__all__ = [
    "NamingRegistry",
    "NamingError",
    "InMemoryRegistry",
    "S3Registry",
    "normalize_name",
    "normalize_context",
]
