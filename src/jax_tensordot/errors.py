"""Exceptions raised by the axis and contraction kernels.

Two failure classes exist. ``AxisError`` is a usage violation (duplicate
or out-of-range axis indices) and is raised immediately, before any array
work. ``ShapeError`` is a recoverable shape incompatibility reported by
the reshape and matrix-multiply steps.

"""

from __future__ import annotations

from collections.abc import Sequence


class TensorDotError(Exception):
    """Base class for jax_tensordot exceptions."""


class AxisError(TensorDotError, ValueError):
    """Invalid axis list: duplicate, out of range, or wrong length."""

    def __init__(
        self,
        message: str,
        *,
        axes: Sequence[int] | None = None,
        ndim: int | None = None,
        argname: str | None = None,
    ):
        super().__init__(message)
        self.axes = tuple(axes) if axes is not None else None
        self.ndim = ndim
        self.argname = argname


class ShapeError(TensorDotError, ValueError):
    """A reshape or matrix product cannot represent the requested shape."""

    def __init__(
        self,
        message: str,
        *,
        target_shape: Sequence[int] | None = None,
        size: int | None = None,
    ):
        super().__init__(f"{message}{_format_shape(target_shape, size)}")
        self.target_shape = tuple(target_shape) if target_shape is not None else None
        self.size = size


class DimensionMismatchError(ShapeError):
    """Sizes of a contracted axis pair disagree."""

    def __init__(self, lhs_axis: int, rhs_axis: int, lhs_size: int, rhs_size: int):
        super().__init__(
            f"contracted axes differ in size: lhs axis {lhs_axis} has size "
            f"{lhs_size}, rhs axis {rhs_axis} has size {rhs_size}"
        )
        self.lhs_axis = lhs_axis
        self.rhs_axis = rhs_axis
        self.lhs_size = lhs_size
        self.rhs_size = rhs_size


def _format_shape(target_shape: Sequence[int] | None, size: int | None) -> str:
    if target_shape is None and size is None:
        return ""
    parts = []
    if target_shape is not None:
        parts.append(f"target shape {tuple(target_shape)}")
    if size is not None:
        parts.append(f"element count {size}")
    return f" ({', '.join(parts)})"
