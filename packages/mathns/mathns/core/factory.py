"""mathns: Factory Descriptors
---------------------------------------------------------
Declarative units describing one importable namespace entry, in the current
(``Factory``) and legacy (``LegacyFactory``) shapes, plus the loader that
runs legacy factories.

Public API
----------
``Factory`` : name, dependencies, ``create(namespace)``, optional path, laziness
``LegacyFactory`` : ``factory(types, config, load, typed[, namespace])`` form
``factory`` : Decorator building a ``Factory`` from its create function
``LegacyLoader`` : Memoizing runner for legacy factories (the ``load`` argument)

Notes
-----
- Descriptors compare by identity; the legacy loader memoizes per descriptor.
- A descriptor owns no namespace state; after import only the registered
  value or cell remains.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .errors import CyclicResolutionError, UnsupportedTypeError, get_logger

if TYPE_CHECKING:
    from .instance import MathNamespace

__all__ = ["Factory", "LegacyFactory", "factory", "LegacyLoader", "TRANSFORM_PATH"]

logger = get_logger()

# Path under which transform functions are registered as independent entries
TRANSFORM_PATH = "expression.transform"


@dataclass(frozen=True, eq=False)
class Factory:
    """Deferred construction of one namespace entry.

    Attributes
    ----------
    name : str or None
        Entry name. Unnamed factories run once for side effects only.
    create : Callable[[MathNamespace], Any]
        Builds the value; receives the host namespace.
    dependencies : tuple[str, ...]
        Names the factory reads from the namespace while creating.
    path : str or None
        Dotted path of the scope to register into; root when None.
    lazy : bool
        Defer ``create`` until the entry is first read.
    """

    name: str | None
    create: Callable[[Any], Any]
    dependencies: tuple[str, ...] = ()
    path: str | None = None
    lazy: bool = True

    def __post_init__(self) -> None:
        if not callable(self.create):
            raise UnsupportedTypeError(f"[106] Factory '{self.name}': create must be callable")
        if isinstance(self.dependencies, str) or not isinstance(self.dependencies, Sequence):
            raise UnsupportedTypeError(
                f"[106] Factory '{self.name}': dependencies must be a sequence of names"
            )
        object.__setattr__(self, "dependencies", tuple(self.dependencies))


@dataclass(frozen=True, eq=False)
class LegacyFactory:
    """Legacy descriptor whose constructor takes the loader protocol.

    ``factory`` is called as ``factory(types, config, load, typed)``, with the
    host namespace appended when ``math`` is True.
    """

    factory: Callable[..., Any]
    name: str | None = None
    path: str | None = None
    lazy: bool = True
    math: bool = False

    def __post_init__(self) -> None:
        if not callable(self.factory):
            raise UnsupportedTypeError(
                f"[106] LegacyFactory '{self.name}': factory must be callable"
            )


def factory(
    name: str | None,
    dependencies: Sequence[str] = (),
    *,
    path: str | None = None,
    lazy: bool = True,
) -> Callable[[Callable[[Any], Any]], Factory]:
    """Decorator form of ``Factory``.

    Examples
    --------
    >>> @factory("pi", [])
    ... def create_pi(math):
    ...     return 3.14159
    >>> create_pi.name, create_pi.lazy
    ('pi', True)
    """

    def _wrap(create: Callable[[Any], Any]) -> Factory:
        return Factory(
            name=name, create=create, dependencies=tuple(dependencies), path=path, lazy=lazy
        )

    return _wrap


class LegacyLoader:
    """Runs legacy factories, caching one instance per descriptor.

    Instances are passed to legacy factories as their ``load`` argument so
    that they can build on other legacy factories.
    """

    def __init__(self, host: MathNamespace) -> None:
        self._host = host
        self._instances: dict[LegacyFactory, Any] = {}
        self._loading: list[LegacyFactory] = []

    def __call__(self, legacy: LegacyFactory) -> Any:
        if not isinstance(legacy, LegacyFactory):
            raise UnsupportedTypeError("[107] load() expects a LegacyFactory")
        if legacy in self._instances:
            return self._instances[legacy]
        if legacy in self._loading:
            chain = [f.name or "<unnamed>" for f in self._loading[self._loading.index(legacy):]]
            raise CyclicResolutionError(chain + [legacy.name or "<unnamed>"])

        host = self._host
        args: list[Any] = [
            host.namespace.resolve_path("type"),
            host.config,
            self,
            host.typed,
        ]
        if legacy.math:
            args.append(host)

        self._loading.append(legacy)
        try:
            instance = legacy.factory(*args)
        finally:
            self._loading.pop()
        logger.debug(f"Loaded legacy factory {legacy.name or '<unnamed>'}")
        self._instances[legacy] = instance
        return instance

    def __contains__(self, legacy: object) -> bool:
        return legacy in self._instances
