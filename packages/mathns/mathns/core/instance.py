"""mathns: Namespace Instances
---------------------------------------------------------
``MathNamespace`` bundles everything an extensible namespace needs: the root
scope, its configuration, the transform registry and expression-safe view,
the legacy loader, listener lists, and the ``import_`` entry point.

Public API
----------
``MathNamespace`` : Host object users import into and read from
``create`` : Build a namespace from an explicit or loaded configuration

Examples
--------
>>> math = create(MathConfig())
>>> math.import_({"add2": lambda a, b: a + b})
>>> math.add2(2, 3)
5
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .config import MathConfig
from .config_loader import load_config
from .errors import configure_logging, get_logger
from .events import Emitter, Listener
from .factory import LegacyLoader
from .importer import Importer
from .scope import Scope
from .transform import ExpressionView, TransformRegistry
from .typed import typed

__all__ = ["MathNamespace", "create"]

logger = get_logger()


class MathNamespace:
    """An extensible namespace of functions, constants and nested scopes.

    Entries are read as attributes (``math.pi``) or items (``math["pi"]``);
    host attributes such as ``config`` or ``load`` take precedence over
    entries of the same name, which stay reachable through ``namespace``.

    Attributes
    ----------
    config : MathConfig
        Configuration handed to legacy factories.
    namespace : Scope
        Root scope holding every imported entry.
    transforms : TransformRegistry
        Transforms by name (the ``expression.transform`` scope).
    expression_view : ExpressionView
        Projection of the namespace exposed to the expression evaluator.
    load : LegacyLoader
        Memoizing runner for legacy factories.
    """

    typed = staticmethod(typed)

    def __init__(self, config: MathConfig | None = None) -> None:
        self.config = config if config is not None else MathConfig()
        self.namespace = Scope()
        self.transforms = TransformRegistry(self.namespace)
        self.expression_view = ExpressionView(self.namespace, self.transforms)
        self.load = LegacyLoader(self)
        self._emitter = Emitter()
        self._importer = Importer(self)

    def import_(self, *args: Any) -> None:
        """Import functions and values into the namespace.

        Syntax::

            math.import_(unit)
            math.import_(unit, options)

        ``unit`` is a ``Factory``, ``LegacyFactory``, mapping of names to
        values, a module, or a list/tuple of those. ``options`` is an
        ``ImportOptions`` or a mapping with the keys ``override``, ``silent``
        and ``wrap``.

        Raises
        ------
        ArityError
            - [100] Called with zero or more than two arguments.
        UnsupportedTypeError
            - [101] A value cannot be imported (unless ``silent``).
        DuplicateNameError
            - [102] A name already exists (unless ``override`` or ``silent``).
        IllegalTransformAttachmentError
            - [103] An eager factory product carries a transform.
        """
        self._importer(*args)

    # --------------------------- events ---------------------------
    def on(self, event: str, callback: Listener) -> Listener:
        return self._emitter.on(event, callback)

    def once(self, event: str, callback: Listener) -> Listener:
        return self._emitter.once(event, callback)

    def off(self, event: str, callback: Listener | None = None) -> None:
        self._emitter.off(event, callback)

    def emit(self, event: str, *args: Any) -> None:
        self._emitter.emit(event, *args)

    # --------------------------- entry access ---------------------------
    def __getattr__(self, name: str) -> Any:
        namespace = self.__dict__.get("namespace")
        if name.startswith("_") or namespace is None:
            raise AttributeError(name)
        try:
            return namespace[name]
        except KeyError:
            raise AttributeError(f"namespace has no entry '{name}'") from None

    def __getitem__(self, name: str) -> Any:
        return self.namespace[name]

    def __contains__(self, name: object) -> bool:
        return name in self.namespace

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self.namespace))

    def __repr__(self) -> str:
        return f"MathNamespace(entries={len(self.namespace)})"


def create(
    config: MathConfig | None = None,
    *,
    config_path: str | Path | None = None,
    setup_logging: bool = False,
) -> MathNamespace:
    """Create a fresh namespace.

    Parameters
    ----------
    config : MathConfig or None
        Explicit configuration; when None it is loaded with ``load_config``.
    config_path : str or Path, optional
        Extra configuration file merged last when loading.
    setup_logging : bool, default False
        Apply ``config.logging`` to the shared logger.
    """
    if config is None:
        config = load_config(config_path=config_path)
    if setup_logging:
        configure_logging(
            verbose=config.logging.verbose,
            log_file=config.logging.log_file,
            as_json=config.logging.as_json,
        )
    logger.debug("Created namespace")
    return MathNamespace(config)
