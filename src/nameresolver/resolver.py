from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from nameresolver.compat import check_target, is_compatible, is_subtype
from nameresolver.loader import ClassLoader, ClassLoadError
from nameresolver.naming import InMemoryRegistry, NamingError, NamingRegistry, S3Registry
from nameresolver.naming.base import SEPARATOR
from nameresolver.utils import get_logger
from nameresolver.utils.config import Settings

T = TypeVar("T")

logger = get_logger(__name__)


class RegistryUnavailable(Exception):
    """The naming registry could not serve a lookup. Always fatal."""

    def __init__(self, message: str, name: str | None = None, code: str = "EREGISTRY") -> None:
        super().__init__(message)
        self.code = code
        self.name = name


class TypeMismatch(Exception):
    def __init__(self, message: str, name: str | None = None, code: str = "ETYPE_MISMATCH") -> None:
        super().__init__(message)
        self.code = code
        self.name = name


@dataclass
class Diagnostic:
    """A non-fatal resolution failure that was collapsed to ``None``."""
    name: str
    code: str
    message: str
    cause: BaseException | None = None


DiagnosticHook = Callable[[Diagnostic], None]


class NameResolver:
    """
    Resolves names against a naming registry into instances of a target type.

    A bound value compatible with the target is returned as-is. A bound string
    is otherwise read as a class identifier: the class is loaded and, if it is
    compatible, default-constructed. Any failure on that fallback path is
    reported as a diagnostic and yields ``None`` (or is raised with
    ``strict=True``). Only registry failures escape as ``RegistryUnavailable``.
    """

    def __init__(
        self,
        registry: NamingRegistry,
        loader: ClassLoader | None = None,
        on_diagnostic: DiagnosticHook | None = None,
    ) -> None:
        self.registry = registry
        self.loader = loader or ClassLoader()
        self._on_diagnostic = on_diagnostic

    @classmethod
    def from_settings(
        cls, settings: Settings, on_diagnostic: DiagnosticHook | None = None
    ) -> NameResolver:
        return cls(build_registry(settings), on_diagnostic=on_diagnostic)

    def resolve(self, name: str, target_type: type[T], *, strict: bool = False) -> T | None:
        check_target(target_type)
        try:
            result = self.registry.lookup(name)
        except NamingError as e:
            raise RegistryUnavailable(f"Could not get {name} from the naming registry", name) from e

        if result is None:
            logger.debug(f"No binding for {name}")
            return None
        if is_compatible(result, target_type):
            return result
        if isinstance(result, str):
            return self._instantiate(name, result, target_type, strict)

        self._report(
            TypeMismatch(
                f"Lookup for {name} should return a value of {_type_name(target_type)}, "
                f"but returned {result!r}",
                name,
            ),
            name,
            strict,
        )
        return None

    def _instantiate(self, name: str, identifier: str, target_type: type[T], strict: bool) -> T | None:
        try:
            cls = self.loader.resolve_type(identifier)
            if not is_subtype(cls, target_type):
                raise TypeMismatch(
                    f"Lookup for {name} returned class {_type_name(cls)} which does not "
                    f"implement/extend the expected class {_type_name(target_type)}",
                    name,
                )
            return self.loader.instantiate_default(cls)
        except (ClassLoadError, TypeMismatch) as e:
            self._report(e, name, strict)
            return None

    def _report(self, error: ClassLoadError | TypeMismatch, name: str, strict: bool) -> None:
        if strict:
            raise error
        logger.error(f"{error} (name: {name})", exc_info=error.__cause__)
        if self._on_diagnostic is not None:
            self._on_diagnostic(Diagnostic(name=name, code=error.code, message=str(error), cause=error))

    def resolve_all(self, context: str, target_type: type[T]) -> dict[str, T]:
        """Resolve every direct binding under ``context``; unresolvable entries are skipped."""
        check_target(target_type)
        names = self.list(context)
        resolved: dict[str, T] = {}
        for name in names:
            value = self.resolve(name, target_type)
            if value is not None:
                resolved[name] = value
        return resolved

    def list(self, context: str = "") -> list[str]:
        """Names bound directly under ``context``; values are not read."""
        try:
            return self.registry.list(context)
        except NamingError as e:
            raise RegistryUnavailable(f"Could not list {context or SEPARATOR} in the naming registry", context) from e

    def bind(self, name: str, value: Any) -> None:
        try:
            self.registry.bind(name, value)
        except NamingError as e:
            raise RegistryUnavailable(f"Could not bind {name} in the naming registry", name) from e

    def unbind(self, name: str) -> None:
        try:
            self.registry.unbind(name)
        except NamingError as e:
            raise RegistryUnavailable(f"Could not unbind {name} in the naming registry", name) from e

    def close(self) -> None:
        self.registry.close()

    def __enter__(self) -> NameResolver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_registry(settings: Settings) -> NamingRegistry:
    if settings.backend == "s3":
        return S3Registry(
            settings.s3_bucket or "",
            settings.s3_prefix or "",
            region_name=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
        )
    return InMemoryRegistry(settings.bindings)


def _type_name(cls: Any) -> str:
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", repr(cls))
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"
