"""Axis permutation ("moveaxis").

The permutation is computed from shapes alone, so the same algorithm backs
both the eager ``move_axes`` and the compiled ``jit_move_axes`` front end.

References:
    - numpy.moveaxis semantics
    - JAX source: jax/_src/numpy/lax_numpy.py (moveaxis)

"""

from __future__ import annotations

import logging
import operator
from collections.abc import Sequence

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from jax_tensordot.arrays import permute_axes
from jax_tensordot.errors import AxisError

logger = logging.getLogger(__name__)


def validate_axes(axes: Sequence[int], ndim: int, name: str = "axes") -> tuple[int, ...]:
    """Normalise an axis list and reject invalid entries.

    Args:
        axes: Axis indices. Negative indices are not wrapped.
        ndim: Rank of the array the indices refer to.
        name: Argument name used in error messages.

    Returns:
        The axes as a tuple of Python ints.

    Raises:
        TypeError: If an entry is not an integer.
        AxisError: If an entry is outside ``[0, ndim)`` or repeated.

    Examples:
        >>> validate_axes([2, 0], 3)
        (2, 0)

    """
    axes = tuple(operator.index(ax) for ax in axes)
    for ax in axes:
        if not 0 <= ax < ndim:
            raise AxisError(
                f"{name}: axis {ax} is out of bounds for array of rank {ndim}",
                axes=axes,
                ndim=ndim,
                argname=name,
            )
    if len(set(axes)) != len(axes):
        raise AxisError(f"{name} has duplicate entries", axes=axes, ndim=ndim, argname=name)
    return axes


def moveaxis_permutation(
    ndim: int,
    source: Sequence[int],
    destination: Sequence[int],
) -> tuple[int, ...]:
    """Compute the full permutation that moves ``source`` to ``destination``.

    Axis ``source[k]`` lands at position ``destination[k]``. Every other
    axis fills the remaining positions left to right, keeping its original
    relative order.

    Args:
        ndim: Rank of the array.
        source: Distinct axes to move.
        destination: Distinct target positions, same length as ``source``.

    Returns:
        Permutation of ``range(ndim)``; entry ``i`` is the original axis
        placed at position ``i``.

    Raises:
        AxisError: On unequal lengths, duplicates or out-of-range indices.

    Examples:
        >>> moveaxis_permutation(4, [2], [0])
        (2, 0, 1, 3)
        >>> moveaxis_permutation(3, [0, 1], [2, 0])
        (1, 2, 0)
        >>> moveaxis_permutation(3, [], [])
        (0, 1, 2)

    """
    source = validate_axes(source, ndim, "source")
    destination = validate_axes(destination, ndim, "destination")
    if len(source) != len(destination):
        raise AxisError(
            f"source has {len(source)} entries but destination has {len(destination)}",
            axes=source,
            ndim=ndim,
        )

    dst_src = dict(zip(destination, source))
    moved = frozenset(source)
    rest = (ax for ax in range(ndim) if ax not in moved)

    permutation = tuple(
        dst_src[dst] if dst in dst_src else next(rest) for dst in range(ndim)
    )
    logger.debug(
        "moveaxis %s -> %s on rank %d: permutation %s",
        source,
        destination,
        ndim,
        permutation,
    )
    return permutation


def inverse_permutation(permutation: Sequence[int]) -> tuple[int, ...]:
    """Return the permutation that undoes ``permutation``.

    Examples:
        >>> inverse_permutation((2, 0, 1, 3))
        (1, 2, 0, 3)

    """
    permutation = validate_axes(permutation, len(permutation), "permutation")
    inverse = [0] * len(permutation)
    for position, axis in enumerate(permutation):
        inverse[axis] = position
    return tuple(inverse)


def move_axes(
    x: ArrayLike,
    source: Sequence[int],
    destination: Sequence[int],
) -> Array:
    """Move axes of an array to new positions.

    Args:
        x: Input array of any rank.
        source: Distinct axes to move.
        destination: Distinct target positions, same length as ``source``.

    Returns:
        Array of the same rank with axes reordered. Values are unchanged.

    Raises:
        AxisError: On unequal lengths, duplicates or out-of-range indices.

    Examples:
        >>> import jax.numpy as jnp
        >>> move_axes(jnp.zeros((2, 3, 4, 5)), [2], [0]).shape
        (4, 2, 3, 5)

    """
    x = jnp.asarray(x)
    return permute_axes(x, moveaxis_permutation(x.ndim, source, destination))
