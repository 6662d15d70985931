from __future__ import annotations

from collections import OrderedDict
from collections.abc import Mapping
from typing import Any, Protocol, SupportsIndex, SupportsInt, runtime_checkable

import pytest

from nameresolver.compat import is_compatible, is_subtype


class Greeter(Protocol):
    greeting: str

    def greet(self, name: str) -> str: ...


@runtime_checkable
class Closeable(Protocol):
    def close(self) -> None: ...


class English:
    def __init__(self) -> None:
        self.greeting = "hello"

    def greet(self, name: str) -> str:
        return f"{self.greeting} {name}"


class Mute:
    greeting = "..."
    greet = None


def test_nominal_checks() -> None:
    assert is_compatible(OrderedDict(), dict)
    assert is_compatible(OrderedDict(), Mapping)
    assert not is_compatible("text", dict)
    assert is_subtype(OrderedDict, dict)
    assert not is_subtype(str, dict)


def test_object_and_any_accept_everything() -> None:
    assert is_compatible(3, object)
    assert is_compatible(None, Any)
    assert is_subtype(int, object)


def test_structural_protocol_checks() -> None:
    assert is_compatible(English(), Greeter)
    assert not is_compatible(object(), Greeter)
    assert not is_compatible(Mute(), Greeter)  # greet is not callable
    assert is_subtype(English, Greeter)  # instance attributes are not required on the class
    assert not is_subtype(int, Greeter)
    assert is_subtype(English, Closeable) is False


def test_class_object_does_not_satisfy_protocol_as_value() -> None:
    assert not is_compatible(English, Greeter)


def test_non_class_target_raises_type_error() -> None:
    with pytest.raises(TypeError):
        is_compatible(1, "int")  # type: ignore[arg-type]


def test_dunder_only_protocols_are_checked() -> None:
    assert is_compatible(5, SupportsInt)
    assert is_compatible(2.5, SupportsInt)
    assert not is_compatible("abc", SupportsInt)
    assert not is_compatible(object(), SupportsIndex)
    assert is_subtype(int, SupportsIndex)
    assert not is_subtype(float, SupportsIndex)
