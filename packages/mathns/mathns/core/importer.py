"""mathns: Import Request Handler
---------------------------------------------------------
Registers values, collections, modules and factories into a live namespace.

Behavior
--------
- ``import_(unit)`` / ``import_(unit, options)``; any other argument count
  raises ``ArityError`` ([100]).
- Units are classified by their type, first match wins: ``Factory``,
  ``LegacyFactory``, list/tuple (each element imported with the same
  options), mapping or module (entry by entry), anything else is rejected
  with ``UnsupportedTypeError`` ([101]) unless ``silent``.
- Name conflicts raise ``DuplicateNameError`` ([102]) unless ``override``
  (replace) or ``silent`` (keep the old entry). Two typed functions under the
  same name are merged instead of conflicting.
- Factory products may not carry a transform
  (``IllegalTransformAttachmentError``, [103], never silenced).
- Every registration emits ``("import", name, resolver, path)`` on the host.

Notes
-----
- Lazy factories are bound through ``OnceCell``; their conflicts and errors
  surface at first read, not at import time.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Mapping
from types import ModuleType
from typing import TYPE_CHECKING, Any

from .cell import OnceCell, resolve
from .config import ImportOptions
from .errors import (
    ArityError,
    DuplicateNameError,
    IllegalTransformAttachmentError,
    UnsupportedTypeError,
    deprecated,
    get_logger,
)
from .factory import TRANSFORM_PATH, Factory, LegacyFactory
from .scope import MISSING, split_path
from .transform import get_transform
from .typed import has_signature, is_typed_callable, merge, tag_signature, typed
from .values import is_supported_type, primitive_value

if TYPE_CHECKING:
    from .instance import MathNamespace

__all__ = ["Importer"]

logger = get_logger()


def _module_entries(module: ModuleType) -> Iterable[tuple[str, Any]]:
    """Public entries of a module: ``__all__`` if defined, else non-underscore names."""
    names = getattr(module, "__all__", None)
    if names is None:
        names = [n for n in vars(module) if not n.startswith("_")]
    for name in names:
        value = getattr(module, name)
        if isinstance(value, ModuleType):
            continue
        yield name, value


def _carry_transform(source: Any, target: Any) -> Any:
    transform = get_transform(source)
    if transform is not None and get_transform(target) is None:
        target.transform = transform
    return target


class Importer:
    """Drives registration of import units into a host namespace.

    Parameters
    ----------
    host : MathNamespace
        Owner of the root scope, transform registry, config and listeners.
    """

    def __init__(self, host: MathNamespace) -> None:
        self._host = host

    # --------------------------- entry point ---------------------------
    def __call__(self, *args: Any) -> None:
        num = len(args)
        if num not in (1, 2):
            raise ArityError("import", num, 1, 2)

        options = ImportOptions.from_raw(
            args[1] if num == 2 else None,
            defaults=self._host.config.import_defaults,
        )
        self._import_unit(args[0], options)

    def _import_unit(self, unit: Any, options: ImportOptions) -> None:
        if isinstance(unit, Factory):
            self._import_factory(unit, options)
        elif isinstance(unit, LegacyFactory):
            self._import_legacy_factory(unit, options)
        elif isinstance(unit, (list, tuple)):
            for entry in unit:
                self._import_unit(entry, options)
        elif isinstance(unit, (Mapping, ModuleType)):
            entries = _module_entries(unit) if isinstance(unit, ModuleType) else list(unit.items())
            for name, value in entries:
                if isinstance(value, Factory):
                    self._import_factory(value, options, name)
                elif is_supported_type(value):
                    self._import_value(name, value, options)
                elif isinstance(value, LegacyFactory):
                    self._import_legacy_factory(value, options)
                else:
                    self._import_unit(value, options)
        elif not options.silent:
            raise UnsupportedTypeError(
                f"[101] Factory, Mapping, or sequence expected, got {type(unit).__name__}"
            )
        else:
            logger.debug(f"Skipped unsupported import unit of type {type(unit).__name__}")

    # --------------------------- plain values ---------------------------
    def _import_value(self, name: str, value: Any, options: ImportOptions) -> None:
        """Add ``value`` to the root scope under ``name``."""
        root = self._host.namespace

        if options.wrap and callable(value):
            value = self._wrap(value)

        if has_signature(value):
            value = _carry_transform(value, tag_signature(name, value))

        if options.override:
            if is_typed_callable(value) and getattr(value, "name", None) != name:
                # give the typed function the right name
                value = _carry_transform(value, typed(name, value.signatures))
            self._write(name, value)
            return

        slot = root.raw(name)
        if slot is MISSING:
            self._write(name, value)
            return

        try:
            existing = resolve(slot)
        except Exception as e:
            # a broken entry still occupies the name
            if not options.silent:
                raise DuplicateNameError(name) from e
            logger.debug(f"Skipped import of '{name}': existing entry failed ({e})")
            return

        if is_typed_callable(existing) and is_typed_callable(value):
            self._write(name, _carry_transform(value, merge(existing, value)))
            return

        if not options.silent:
            raise DuplicateNameError(name)
        logger.debug(f"Skipped duplicate import of '{name}'")

    def _write(self, name: str, value: Any) -> None:
        self._host.namespace.set(name, value)
        self._host.transforms.sync(name, value)
        logger.debug(f"Imported '{name}'")
        self._host.emit("import", name, lambda: value, None)

    @staticmethod
    def _wrap(fn: Callable[..., Any]) -> Callable[..., Any]:
        """Wrap ``fn`` so its arguments are converted to primitive values."""

        def wrapper(*args: Any) -> Any:
            return fn(*(primitive_value(arg) for arg in args))

        functools.update_wrapper(
            wrapper, fn, assigned=("__module__", "__name__", "__qualname__", "__doc__"), updated=()
        )
        return _carry_transform(fn, wrapper)

    # --------------------------- factories ---------------------------
    def _import_factory(
        self, descriptor: Factory, options: ImportOptions, name: str | None = None
    ) -> None:
        name = name or descriptor.name
        if not name:
            # unnamed factory, no lazy loading
            descriptor.create(self._host)
            return

        self._register_factory(
            name,
            descriptor.path,
            descriptor.lazy,
            lambda: descriptor.create(self._host),
            options,
        )

    @deprecated("LegacyFactory is superseded by Factory(name, create, dependencies)")
    def _import_legacy_factory(self, legacy: LegacyFactory, options: ImportOptions) -> None:
        if not legacy.name:
            self._host.load(legacy)
            return

        self._register_factory(
            legacy.name,
            legacy.path,
            legacy.lazy,
            lambda: self._host.load(legacy),
            options,
        )

    def _register_factory(
        self,
        name: str,
        path: str | None,
        lazy: bool,
        construct: Callable[[], Any],
        options: ImportOptions,
    ) -> None:
        """Bind the product of ``construct`` at ``path.name``, lazily or eagerly."""
        transforms = self._host.transforms
        try:
            target = self._host.namespace.resolve_path(path)
        except UnsupportedTypeError:
            if not options.silent:
                raise
            logger.debug(f"Skipped factory '{name}': path '{path}' is not a namespace")
            return
        label = target.qualify(name)
        is_transform_entry = split_path(path) == split_path(TRANSFORM_PATH)

        existing_transform = name in transforms
        existing_slot = target.raw(name)

        def resolver() -> Any:
            instance = construct()
            if get_transform(instance) is not None:
                raise IllegalTransformAttachmentError(label)

            if options.override or existing_slot is MISSING:
                return instance

            existing = resolve(existing_slot)
            if is_typed_callable(existing) and is_typed_callable(instance):
                # merge the existing and new typed function
                return merge(existing, instance)

            if not options.silent:
                raise DuplicateNameError(label)
            logger.debug(f"Skipped duplicate factory '{label}'")
            return existing

        if lazy:
            cell = OnceCell(label, resolver)
            target.bind_lazy(name, cell)
            handle: Callable[[], Any] = cell.get
        else:
            value = resolver()
            target.set(name, value)
            handle = lambda: value  # noqa: E731

        if existing_transform and not is_transform_entry:
            transforms.remove(name)

        logger.debug(f"Imported factory '{label}' ({'lazy' if lazy else 'eager'})")
        self._host.emit("import", name, handle, path)
