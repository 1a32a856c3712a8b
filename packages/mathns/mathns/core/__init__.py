"""mathns.core: namespace import machinery."""

from .cell import CellState, OnceCell
from .config import ImportOptions, LoggingConfig, MathConfig
from .config_loader import load_config, save_user_config
from .errors import (
    ArityError,
    CyclicResolutionError,
    DuplicateNameError,
    IllegalTransformAttachmentError,
    MathNSConfigError,
    MathNSError,
    MathNSIOError,
    MathNSWarning,
    SignatureMismatchError,
    UnsupportedTypeError,
    configure_logging,
    get_logger,
)
from .events import Emitter
from .factory import TRANSFORM_PATH, Factory, LegacyFactory, LegacyLoader, factory
from .instance import MathNamespace, create
from .scope import MISSING, Scope
from .transform import UNSAFE_SEGMENTS, ExpressionView, TransformRegistry
from .typed import TypedFunction, is_typed_callable, merge, tag_signature, typed

__all__ = [
    "ArityError",
    "CellState",
    "CyclicResolutionError",
    "DuplicateNameError",
    "Emitter",
    "ExpressionView",
    "Factory",
    "IllegalTransformAttachmentError",
    "ImportOptions",
    "LegacyFactory",
    "LegacyLoader",
    "LoggingConfig",
    "MISSING",
    "MathConfig",
    "MathNSConfigError",
    "MathNSError",
    "MathNSIOError",
    "MathNSWarning",
    "MathNamespace",
    "OnceCell",
    "Scope",
    "SignatureMismatchError",
    "TRANSFORM_PATH",
    "TransformRegistry",
    "TypedFunction",
    "UNSAFE_SEGMENTS",
    "UnsupportedTypeError",
    "configure_logging",
    "create",
    "factory",
    "get_logger",
    "is_typed_callable",
    "load_config",
    "merge",
    "save_user_config",
    "tag_signature",
    "typed",
]
