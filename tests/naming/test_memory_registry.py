from __future__ import annotations

import pytest

from nameresolver.naming import InMemoryRegistry, NamingError, normalize_context, normalize_name


def test_normalize_name_collapses_separators() -> None:
    assert normalize_name("/a//b/") == "a/b"
    assert normalize_name("java:comp/env/jdbc/ds") == "java:comp/env/jdbc/ds"
    assert normalize_context("") == ""
    assert normalize_context("/") == ""


def test_normalize_empty_name_raises() -> None:
    with pytest.raises(ValueError):
        normalize_name("//")


def test_lookup_bind_unbind() -> None:
    reg = InMemoryRegistry({"java:comp/env/answer": 42})
    assert reg.lookup("java:comp/env/answer") == 42
    assert reg.lookup("/java:comp/env//answer/") == 42
    assert reg.lookup("java:comp/env/missing") is None

    reg.bind("java:comp/env/answer", 43)
    assert reg.lookup("java:comp/env/answer") == 43
    reg.unbind("java:comp/env/answer")
    assert reg.lookup("java:comp/env/answer") is None
    reg.unbind("java:comp/env/answer")  # unbinding a missing name is a no-op


def test_list_returns_direct_children_only() -> None:
    reg = InMemoryRegistry(
        {
            "app/services/b": 1,
            "app/services/a": 2,
            "app/services/nested/c": 3,
            "app/other": 4,
            "top": 5,
        }
    )
    assert reg.list("app/services") == ["app/services/a", "app/services/b"]
    assert reg.list("/app/services/") == ["app/services/a", "app/services/b"]
    assert reg.list("") == ["top"]
    assert reg.list("nothing/here") == []


def test_closed_registry_raises_naming_error() -> None:
    reg = InMemoryRegistry({"a": 1})
    reg.close()
    with pytest.raises(NamingError) as exc:
        reg.lookup("a")
    assert exc.value.code == "ECLOSED"
    with pytest.raises(NamingError):
        reg.bind("a", 2)
    with pytest.raises(NamingError):
        reg.list()
