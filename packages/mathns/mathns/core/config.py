"""mathns: Configuration Models
---------------------------------------------------------
Defines the Pydantic models for namespace configuration (``config.yaml``):
numeric defaults handed to legacy factories, the default import options, and
logging settings.

Public API
----------
``ImportOptions`` : Frozen options applied to one import operation
``LoggingConfig`` : Nested model for logger verbosity and outputs
``MathConfig`` : Root configuration model

Notes
-----
- ``MathConfig`` forbids unknown keys so that typos in ``config.yaml`` fail
  loudly instead of being ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["ImportOptions", "LoggingConfig", "MathConfig"]


class ImportOptions(BaseModel):
    """Options for one ``import_`` call.

    Attributes
    ----------
    override : bool
        Replace existing entries instead of failing (typed functions are
        replaced rather than merged).
    silent : bool
        Skip duplicates and unsupported values instead of raising.
    wrap : bool
        Wrap imported functions so that arguments are converted to primitive
        values (matrices to nested lists) before the call.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    override: bool = False
    silent: bool = False
    wrap: bool = False

    @classmethod
    def from_raw(
        cls, raw: Any | None = None, *, defaults: ImportOptions | None = None
    ) -> ImportOptions:
        """Normalize ``raw`` into an ``ImportOptions`` instance.

        Accepts:
        - None -> ``defaults`` (or the all-False options)
        - an ImportOptions instance -> returned as-is
        - a mapping -> validated, missing keys taken from ``defaults``

        Raises:
        - pydantic.ValidationError on unknown keys or non-boolean values
        """
        if raw is None:
            return defaults if defaults is not None else cls()
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, Mapping):
            base = defaults.model_dump() if defaults is not None else {}
            return cls.model_validate({**base, **dict(raw)})
        return cls.model_validate(raw)


class LoggingConfig(BaseModel):
    verbose: bool = Field(default=False, description="Log at DEBUG level.")
    log_file: str | None = Field(
        default=None, description="Optional file to append log records to."
    )
    as_json: bool = Field(default=False, description="Emit JSON log lines.")

    model_config = ConfigDict(extra="forbid")


class MathConfig(BaseModel):
    """Configuration of a namespace instance.

    These values are passed to legacy factories as their ``config`` argument
    and decide the default import options.

    Attributes
    ----------
    epsilon : float
        Minimum relative difference used by numeric comparisons.
    matrix : {"Matrix", "Array"}
        Default return type of matrix-producing functions.
    number : {"number", "BigNumber", "Fraction"}
        Default numeric type.
    precision : int
        Significant digits for BigNumber arithmetic.
    import_defaults : ImportOptions
        Options used when ``import_`` is called without options.
    logging : LoggingConfig
        Logger configuration applied by ``create``.
    """

    epsilon: float = Field(default=1e-12, gt=0)
    matrix: Literal["Matrix", "Array"] = "Matrix"
    number: Literal["number", "BigNumber", "Fraction"] = "number"
    precision: int = Field(default=64, ge=1)
    import_defaults: ImportOptions = Field(default_factory=ImportOptions)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    @field_validator("precision")
    @classmethod
    def validate_precision(cls, v: int) -> int:
        if v > 10_000:
            raise ValueError("precision above 10000 digits is not supported")
        return v
