"""Type compatibility checks used to vet looked-up bindings."""

from __future__ import annotations

import inspect
from typing import Any

_PROTOCOL_BASES = {"Protocol", "Generic", "object"}

# Attributes typing and the class machinery put on every protocol class.
_SPECIAL_ATTRS = frozenset(
    {
        "__abstractmethods__",
        "__annotate__",
        "__annotate_func__",
        "__annotations__",
        "__annotations_cache__",
        "__callable_proto_members_only__",
        "__class_getitem__",
        "__dict__",
        "__doc__",
        "__firstlineno__",
        "__init__",
        "__init_subclass__",
        "__match_args__",
        "__module__",
        "__new__",
        "__non_callable_proto_members__",
        "__orig_bases__",
        "__orig_class__",
        "__parameters__",
        "__protocol_attrs__",
        "__qualname__",
        "__slots__",
        "__static_attributes__",
        "__subclasshook__",
        "__type_params__",
        "__weakref__",
        "_is_protocol",
        "_is_runtime_protocol",
    }
)


def _is_protocol(target: type[Any]) -> bool:
    return bool(getattr(target, "_is_protocol", False))


def _is_declared(attr: str) -> bool:
    return attr not in _SPECIAL_ATTRS and not attr.startswith("_abc_")


def _protocol_members(target: type[Any]) -> dict[str, bool]:
    """Members a protocol declares, dunders included, mapped to whether they are methods."""
    members: dict[str, bool] = {}
    for base in reversed(target.__mro__):
        if base.__name__ in _PROTOCOL_BASES or not _is_protocol(base):
            continue
        for attr in inspect.get_annotations(base):
            if _is_declared(attr):
                members.setdefault(attr, False)
        for attr, value in vars(base).items():
            if not _is_declared(attr):
                continue
            members[attr] = callable(value) or isinstance(value, (staticmethod, classmethod))
    return members


def _implements(candidate: Any, target: type[Any], *, is_class: bool) -> bool:
    for attr, is_method in _protocol_members(target).items():
        if is_class and not is_method:
            # data members are usually set per instance
            continue
        if not hasattr(candidate, attr):
            return False
        if is_method and not callable(getattr(candidate, attr)):
            return False
    return True


def check_target(target: Any) -> None:
    """Raise ``TypeError`` unless ``target`` can be used as a target type."""
    if target is not Any and not isinstance(target, type):
        raise TypeError(f"target_type must be a class, got {target!r}")


def is_compatible(value: Any, target: type[Any]) -> bool:
    """True when ``value`` can be handed out as a ``target``."""
    check_target(target)
    if target is object or target is Any:
        return True
    if _is_protocol(target):
        if isinstance(value, type) and target is not type:
            return False
        return _implements(value, target, is_class=False)
    return isinstance(value, target)


def is_subtype(cls: type[Any], target: type[Any]) -> bool:
    """True when instances of ``cls`` would be compatible with ``target``."""
    check_target(target)
    if target is object or target is Any:
        return True
    if _is_protocol(target):
        return _implements(cls, target, is_class=True)
    return issubclass(cls, target)
