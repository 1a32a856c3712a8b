"""mathns: Error Taxonomy and Logging
-------------------------------------
Unified exception types, warnings, and a shared logger for the namespace
import machinery. This module centralizes error categorization and provides
configuration helpers and a deprecation decorator for standardized messaging.

Error Hierarchy
---------------
- MathNSError: Base exception for all mathns errors
- ArityError: ``import_`` called with an unsupported argument count (100)
- UnsupportedTypeError: a unit is neither a factory nor an admissible value (101)
- DuplicateNameError: a name is already bound and ``override`` is off (102)
- IllegalTransformAttachmentError: a factory product carries a transform (103)
- CyclicResolutionError: a lazy entry was read while it was resolving (104)
- SignatureMismatchError: no typed signature accepts the arguments (200-299)
- MathNSConfigError: invalid configuration (500-599)
- MathNSIOError: configuration file I/O (600-699)

Behavior
--------
- The shared logger is named "mathns" and can be configured to console and
  file with optional JSON formatting.
- Python warnings are captured into logging with adjustable levels.
"""

import functools
import logging
import os
import warnings
from collections.abc import Callable
from typing import Any

__all__ = [
    "MathNSError",
    "ArityError",
    "UnsupportedTypeError",
    "DuplicateNameError",
    "IllegalTransformAttachmentError",
    "CyclicResolutionError",
    "SignatureMismatchError",
    "MathNSConfigError",
    "MathNSIOError",
    "MathNSWarning",
    "get_logger",
    "configure_logging",
    "deprecated",
]


# Exception hierarchy
class MathNSError(Exception):
    """Base exception for all mathns errors."""

    pass


class ArityError(MathNSError, TypeError):  # Code Numbering: 100
    """Raised when ``import_`` receives neither one nor two arguments.

    Always surfaced; the ``silent`` option does not apply.
    """

    def __init__(self, fn_name: str, count: int, minimum: int, maximum: int) -> None:
        self.fn_name = fn_name
        self.count = count
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"[100] Wrong number of arguments in function {fn_name} "
            f"({count} provided, {minimum}-{maximum} expected)"
        )


class UnsupportedTypeError(MathNSError, TypeError):  # Code Numbering: 101
    pass


class DuplicateNameError(MathNSError):  # Code Numbering: 102
    """Raised when a name is already bound and ``override`` is off."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'[102] Cannot import "{name}": already exists')


class IllegalTransformAttachmentError(MathNSError):  # Code Numbering: 103
    """A factory product carries a ``transform`` attribute.

    Transforms must be registered as separate entries with
    ``path="expression.transform"``. Never silenced.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'[103] Transforms cannot be attached to factory functions ("{name}"). '
            'Please create a separate function for it with path="expression.transform"'
        )


class CyclicResolutionError(MathNSError, RecursionError):  # Code Numbering: 104
    def __init__(self, chain: list[str]) -> None:
        self.chain = list(chain)
        super().__init__(
            "[104] Cyclic lazy resolution: " + " -> ".join(self.chain)
        )


class SignatureMismatchError(MathNSError, TypeError):  # Code Numbering: 2xx
    pass


class MathNSConfigError(MathNSError):  # Code Numbering: 5xx
    pass


class MathNSIOError(MathNSError):  # Code Numbering: 6xx
    pass


# Warning hierarchy
class MathNSWarning(Warning):  # Code Numbering: 9xx
    pass


# Logger
_logger: logging.Logger | None = None


def get_logger() -> logging.Logger:
    """Get the shared mathns logger instance.

    Returns
    -------
    logging.Logger
        The singleton logger named ``"mathns"`` configured at INFO level by
        default with a console handler. Handlers are created lazily on first use.

    Examples
    --------
    >>> logger = get_logger()
    >>> logger.name
    'mathns'
    """
    global _logger
    if _logger is None:
        _logger = logging.getLogger("mathns")
        _logger.setLevel(logging.INFO)
        if not _logger.handlers:
            h = logging.StreamHandler()
            fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            h.setFormatter(fmt)
            _logger.addHandler(h)
    return _logger


def configure_logging(
    verbose: bool = False,
    log_file: str | None = None,
    as_json: bool = False,
    suppress_warnings: bool = False,
) -> None:
    """Configure the shared logger outputs and warning capture.

    Parameters
    ----------
    verbose : bool, default False
        When True, set logger level to DEBUG; otherwise INFO.
    log_file : str or None, default None
        Optional file path to append logs. Paths that cannot be opened are
        reported on the console handler and otherwise ignored.
    as_json : bool, default False
        Emit logs in a compact JSON line format when True; otherwise plain text.
    suppress_warnings : bool, default False
        Route Python warnings into logging and raise their level to ERROR when
        True; otherwise capture warnings at WARNING level.

    Examples
    --------
    >>> configure_logging(verbose=True, as_json=False)  # doctest: +SKIP
    >>> logger = get_logger()
    >>> logger.level in (logging.INFO, logging.DEBUG)
    True
    """
    logger = get_logger()
    # Clear existing handlers
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    ch = logging.StreamHandler()
    if as_json:
        fmt = logging.Formatter(
            '{"time":"%(asctime)s","level":"%(levelname)s",'
            '"logger":"%(name)s","msg":"%(message)s"}'
        )
    else:
        fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_file:
        try:
            fh = logging.FileHandler(os.fspath(log_file), encoding="utf-8")
        except OSError as e:
            logger.warning(f"[600] Cannot open log file {log_file}: {e}")
        else:
            fh.setFormatter(fmt)
            logger.addHandler(fh)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(
        logging.ERROR if suppress_warnings else logging.WARNING
    )


def deprecated(reason: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a function as deprecated.

    The first call emits a ``MathNSWarning`` (code [990]) and logs the same
    message through the shared logger; later calls stay quiet.

    Examples
    --------
    >>> @deprecated("Use new_api() instead")
    ... def old_api():
    ...     return 42
    >>> isinstance(old_api(), int)
    True
    """

    def _decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        warned = False

        @functools.wraps(fn)
        def _wrapped(*args: Any, **kwargs: Any) -> Any:
            nonlocal warned
            if not warned:
                msg = f"[990] DEPRECATED: {fn.__name__}: {reason}"
                warnings.warn(msg, MathNSWarning, stacklevel=2)
                get_logger().warning(msg)
                warned = True
            return fn(*args, **kwargs)

        return _wrapped

    return _decorator
