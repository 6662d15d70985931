from __future__ import annotations

import logging
from pathlib import Path

import pytest

from nameresolver.utils import configure_logging, get_logger
from nameresolver.utils.config import ConfigError, Settings, load_settings


def write(tmp_path: Path, text: str) -> str:
    path = tmp_path / "nameresolver.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_defaults_without_file() -> None:
    settings = load_settings(env={})
    assert settings == Settings()


def test_yaml_file_with_bindings(tmp_path: Path) -> None:
    path = write(
        tmp_path,
        "backend: memory\n"
        "log_level: debug\n"
        "bindings:\n"
        "  java:comp/env/impl: collections.OrderedDict\n"
        "  java:comp/env/port: 8080\n",
    )
    settings = load_settings(path, env={})
    assert settings.bindings == {
        "java:comp/env/impl": "collections.OrderedDict",
        "java:comp/env/port": 8080,
    }
    assert settings.log_level == "debug"


def test_env_overrides_file(tmp_path: Path) -> None:
    path = write(tmp_path, "backend: memory\n")
    settings = load_settings(
        path,
        env={
            "NAMERESOLVER_BACKEND": "s3",
            "NAMERESOLVER_S3_BUCKET": "my-bucket",
            "NAMERESOLVER_S3_PREFIX": "prod/",
        },
    )
    assert settings.backend == "s3"
    assert settings.s3_bucket == "my-bucket"
    assert settings.s3_prefix == "prod/"


@pytest.mark.parametrize(
    "text, env, message",
    [
        ("backend: ldap\n", {}, "Unknown backend"),
        ("backend: s3\n", {}, "s3_bucket is required"),
        ("bindings: [a, b]\n", {}, "bindings must be a mapping"),
        ("log_level: chatty\n", {}, "Unknown log_level"),
        ("colour: blue\n", {}, "Unknown field colour"),
        ("- just\n- a list\n", {}, "YAML root must be a mapping"),
        ("backend: memory\n", {"NAMERESOLVER_BACKEND": "nope"}, "Unknown backend"),
    ],
)
def test_invalid_settings_raise_config_error(
    tmp_path: Path, text: str, env: dict[str, str], message: str
) -> None:
    path = write(tmp_path, text)
    with pytest.raises(ConfigError) as exc:
        load_settings(path, env=env)
    assert message in str(exc.value)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(str(tmp_path / "absent.yaml"), env={})


def test_loggers_live_under_package_namespace() -> None:
    assert get_logger("nameresolver.resolver").name == "nameresolver.resolver"
    assert get_logger("custom").name == "nameresolver.custom"
    logger = configure_logging("warning")
    configure_logging("warning")
    assert logger.level == logging.WARNING
    assert sum(1 for h in logger.handlers if getattr(h, "_nameresolver", False)) == 1
