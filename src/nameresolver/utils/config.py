"""YAML + environment settings for building a registry."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

import yaml

BACKENDS = ("memory", "s3")
ENV_PREFIX = "NAMERESOLVER_"
_ENV_FIELDS = (
    "backend",
    "s3_bucket",
    "s3_prefix",
    "s3_region",
    "s3_endpoint_url",
    "log_level",
)


class ConfigError(Exception):
    pass


@dataclass
class Settings:
    backend: str = "memory"
    bindings: dict[str, Any] = field(default_factory=dict)
    s3_bucket: str | None = None
    s3_prefix: str = ""
    s3_region: str | None = None
    s3_endpoint_url: str | None = None
    log_level: str = "INFO"


def load_settings(
    path: str | None = None, env: Mapping[str, str] | None = None
) -> Settings:
    env = os.environ if env is None else env
    data = _read_yaml(path) if path else {}
    settings = _build_settings(data, path or "<defaults>")
    for name in _ENV_FIELDS:
        value = env.get(ENV_PREFIX + name.upper())
        if value is not None and value != "":
            setattr(settings, name, value)
    validate_settings(settings)
    return settings


def validate_settings(settings: Settings) -> None:
    if settings.backend not in BACKENDS:
        raise ConfigError(
            f"Unknown backend '{settings.backend}'. Available: {', '.join(BACKENDS)}"
        )
    if settings.backend == "s3" and not settings.s3_bucket:
        raise ConfigError("s3_bucket is required when backend is 's3'")
    if not isinstance(settings.bindings, dict):
        raise ConfigError("bindings must be a mapping")
    if not isinstance(logging.getLevelName(str(settings.log_level).upper()), int):
        raise ConfigError(f"Unknown log_level '{settings.log_level}'")


def _read_yaml(path: str) -> dict[str, Any]:
    if not os.path.exists(path):
        raise ConfigError(f"Config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"YAML root must be a mapping: {path}")
    return data


def _build_settings(data: dict[str, Any], source: str) -> Settings:
    settings = Settings()
    known = {f.name for f in fields(Settings)}
    for k, v in data.items():
        if k not in known:
            raise ConfigError(f"Unknown field {k} in {source}")
        setattr(settings, k, v)
    if settings.bindings is None:
        settings.bindings = {}
    return settings
