"""Runtime options for the contraction kernels.

The active ``ContractionConfig`` is held in a context variable, so a change
made in one thread or asyncio task is invisible to others. Kernels read it
through ``get_config()`` at call time, so ``config_context`` can scope a
change to a block of code:

    >>> from jax_tensordot.config import config_context, get_config
    >>> with config_context(check_dims=False):
    ...     get_config().check_dims
    False
    >>> get_config().check_dims
    True

"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "jax_tensordot"

# Names accepted by jax.lax.Precision / the ``precision=`` argument of jnp.matmul.
PRECISIONS = ("default", "high", "highest", "bfloat16", "tensorfloat32", "float32")

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class ContractionConfig:
    """Options shared by every kernel call."""

    # Matrix-multiply precision; None lets XLA choose.
    precision: str | None = None

    # Raise DimensionMismatchError before flattening mismatched contracted axes
    check_dims: bool = True

    # Level applied to the jax_tensordot logger
    log_level: int = logging.WARNING

    def __post_init__(self) -> None:
        if self.precision is not None and self.precision not in PRECISIONS:
            raise ValueError(
                f"unknown precision {self.precision!r}; expected one of {PRECISIONS}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ContractionConfig:
        """Build a config from ``JAX_TENSORDOT_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            Config with defaults for every unset variable.

        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, Any] = {}

        precision = env.get("JAX_TENSORDOT_PRECISION")
        if precision:
            kwargs["precision"] = precision.lower()

        check_dims = env.get("JAX_TENSORDOT_CHECK_DIMS")
        if check_dims:
            value = check_dims.strip().lower()
            if value in _TRUE:
                kwargs["check_dims"] = True
            elif value in _FALSE:
                kwargs["check_dims"] = False
            else:
                raise ValueError(f"JAX_TENSORDOT_CHECK_DIMS: invalid boolean {check_dims!r}")

        log_level = env.get("JAX_TENSORDOT_LOG_LEVEL")
        if log_level:
            level = logging.getLevelName(log_level.strip().upper())
            if not isinstance(level, int):
                raise ValueError(f"JAX_TENSORDOT_LOG_LEVEL: unknown level {log_level!r}")
            kwargs["log_level"] = level

        return cls(**kwargs)


_DEFAULT = ContractionConfig()

# Context-local so a config_context in one thread or task never leaks into another.
_ACTIVE: ContextVar[ContractionConfig] = ContextVar("jax_tensordot_config", default=_DEFAULT)


def _sync_log_level(previous: ContractionConfig, current: ContractionConfig) -> None:
    if current.log_level != previous.log_level:
        logging.getLogger(PACKAGE_LOGGER).setLevel(current.log_level)


def get_config() -> ContractionConfig:
    """Return the configuration active in the current thread or task."""
    return _ACTIVE.get()


def set_config(**changes: Any) -> ContractionConfig:
    """Replace fields of the active configuration.

    The change is local to the calling thread (or asyncio task); threads
    started afterwards begin from the defaults. The ``jax_tensordot``
    logger level is only touched when ``log_level`` changes.

    Args:
        changes: Field values to override (``precision``, ``check_dims``,
            ``log_level``).

    Returns:
        The previous configuration, suitable for restoring later.

    Raises:
        ValueError: If ``precision`` is not a known precision name.
        TypeError: If a field name is unknown.

    """
    previous = _ACTIVE.get()
    current = dataclasses.replace(previous, **changes)
    _ACTIVE.set(current)
    _sync_log_level(previous, current)
    logger.debug("config set to %s", current)
    return previous


@contextmanager
def config_context(**changes: Any) -> Iterator[ContractionConfig]:
    """Temporarily override configuration fields inside a ``with`` block."""
    previous = _ACTIVE.get()
    current = dataclasses.replace(previous, **changes)
    token = _ACTIVE.set(current)
    _sync_log_level(previous, current)
    try:
        yield current
    finally:
        _ACTIVE.reset(token)
        _sync_log_level(current, previous)
