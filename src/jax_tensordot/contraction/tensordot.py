"""Generalized tensor contraction ("tensordot") and outer product.

A contraction over N matched axis pairs is reduced to one matrix product:

1. permute lhs so its surviving axes come first and the contracted axes
   trail, in the order the caller listed them;
2. permute rhs so the contracted axes lead, in the caller's order, and its
   surviving axes follow;
3. flatten both to matrices, multiply, and unflatten the product to the
   surviving lhs axes followed by the surviving rhs axes.

The shape bookkeeping is done by ``plan_contraction`` without touching any
array, which keeps it usable at trace time under ``jax.jit``.

References:
    - numpy.tensordot semantics
    - JAX source: jax/_src/numpy/tensor_contractions.py

"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from jax_tensordot.arrays import matmul, permute_axes, reshape_array
from jax_tensordot.axes import validate_axes
from jax_tensordot.config import get_config
from jax_tensordot.errors import AxisError, DimensionMismatchError

logger = logging.getLogger(__name__)


class ContractionPlan(NamedTuple):
    """Permutations and intermediate shapes for one contraction."""

    lhs_permutation: tuple[int, ...]
    rhs_permutation: tuple[int, ...]
    lhs_matrix_shape: tuple[int, int]  # (out_left_size, dot_size)
    rhs_matrix_shape: tuple[int, int]  # (dot_size, out_right_size)
    out_shape: tuple[int, ...]


def plan_contraction(
    lhs_shape: Sequence[int],
    rhs_shape: Sequence[int],
    lhs_axes: Sequence[int],
    rhs_axes: Sequence[int],
    check_dims: bool | None = None,
) -> ContractionPlan:
    """Compute permutations and shapes for contracting two operands.

    Args:
        lhs_shape: Shape of the left operand.
        rhs_shape: Shape of the right operand.
        lhs_axes: Distinct lhs axes to contract.
        rhs_axes: Distinct rhs axes, paired position-by-position with
            ``lhs_axes``.
        check_dims: Reject contracted pairs of different size up front.
            Default from ``get_config()``.

    Returns:
        ContractionPlan for the pair of shapes.

    Raises:
        AxisError: On unequal list lengths, duplicates or out-of-range axes.
        DimensionMismatchError: If ``check_dims`` and a pair differs in size.

    Examples:
        >>> plan = plan_contraction((2, 3, 4), (4, 2, 3), [0, 2], [1, 0])
        >>> plan.lhs_permutation, plan.rhs_permutation
        ((1, 0, 2), (1, 0, 2))
        >>> plan.lhs_matrix_shape, plan.rhs_matrix_shape, plan.out_shape
        ((3, 8), (8, 3), (3, 3))

    """
    lhs_shape = tuple(lhs_shape)
    rhs_shape = tuple(rhs_shape)
    lhs_axes = validate_axes(lhs_axes, len(lhs_shape), "lhs_axes")
    rhs_axes = validate_axes(rhs_axes, len(rhs_shape), "rhs_axes")
    if len(lhs_axes) != len(rhs_axes):
        raise AxisError(
            f"lhs_axes has {len(lhs_axes)} entries but rhs_axes has {len(rhs_axes)}",
            axes=lhs_axes,
        )
    if check_dims is None:
        check_dims = get_config().check_dims
    if check_dims:
        for lhs_ax, rhs_ax in zip(lhs_axes, rhs_axes):
            if lhs_shape[lhs_ax] != rhs_shape[rhs_ax]:
                raise DimensionMismatchError(
                    lhs_ax, rhs_ax, lhs_shape[lhs_ax], rhs_shape[rhs_ax]
                )

    lhs_free = tuple(ax for ax in range(len(lhs_shape)) if ax not in lhs_axes)
    rhs_free = tuple(ax for ax in range(len(rhs_shape)) if ax not in rhs_axes)

    out_left = tuple(lhs_shape[ax] for ax in lhs_free)
    out_right = tuple(rhs_shape[ax] for ax in rhs_free)
    lhs_dot_size = math.prod(lhs_shape[ax] for ax in lhs_axes)
    rhs_dot_size = math.prod(rhs_shape[ax] for ax in rhs_axes)

    return ContractionPlan(
        lhs_permutation=lhs_free + lhs_axes,
        rhs_permutation=rhs_axes + rhs_free,
        lhs_matrix_shape=(math.prod(out_left), lhs_dot_size),
        rhs_matrix_shape=(rhs_dot_size, math.prod(out_right)),
        out_shape=out_left + out_right,
    )


def tensor_contract(
    lhs: ArrayLike,
    rhs: ArrayLike,
    lhs_axes: Sequence[int],
    rhs_axes: Sequence[int],
    *,
    precision: str | None = None,
) -> Array:
    """Sum products of ``lhs`` and ``rhs`` over matched axis pairs.

    ``out[i, j] = sum_k lhs[i, k] * rhs[k, j]`` where ``i`` ranges over the
    surviving lhs axes, ``j`` over the surviving rhs axes and ``k`` over
    the contracted pairs ``(lhs_axes[n], rhs_axes[n])``.

    Args:
        lhs: Left operand of rank L.
        rhs: Right operand of rank R.
        lhs_axes: N distinct lhs axes to contract.
        rhs_axes: N distinct rhs axes matched position-by-position.
        precision: XLA matmul precision. Default from ``get_config()``.

    Returns:
        Array of rank L + R - 2N: surviving lhs axes in original order,
        then surviving rhs axes in original order.

    Raises:
        AxisError: On unequal list lengths, duplicates or out-of-range axes.
        ShapeError: If the flattened operands cannot be multiplied
            (``DimensionMismatchError`` when dimension checking is on).

    Examples:
        >>> import jax.numpy as jnp
        >>> a = jnp.ones((2, 3, 4))
        >>> b = jnp.ones((4, 2, 3))
        >>> tensor_contract(a, b, [0, 2], [1, 0]).shape
        (3, 3)

        >>> # Matrix product
        >>> tensor_contract(jnp.ones((3, 4)), jnp.ones((4, 5)), [1], [0]).shape
        (3, 5)

    """
    lhs = jnp.asarray(lhs)
    rhs = jnp.asarray(rhs)
    plan = plan_contraction(lhs.shape, rhs.shape, lhs_axes, rhs_axes)
    logger.debug(
        "tensordot %s x %s: lhs perm %s -> %s, rhs perm %s -> %s, out %s",
        lhs.shape,
        rhs.shape,
        plan.lhs_permutation,
        plan.lhs_matrix_shape,
        plan.rhs_permutation,
        plan.rhs_matrix_shape,
        plan.out_shape,
    )

    lhs_matrix = reshape_array(
        permute_axes(lhs, plan.lhs_permutation), plan.lhs_matrix_shape
    )
    rhs_matrix = reshape_array(
        permute_axes(rhs, plan.rhs_permutation), plan.rhs_matrix_shape
    )
    product = matmul(lhs_matrix, rhs_matrix, precision=precision)
    return reshape_array(product, plan.out_shape)


def outer_product(
    lhs: ArrayLike,
    rhs: ArrayLike,
    *,
    precision: str | None = None,
) -> Array:
    """All pairwise products of the elements of ``lhs`` and ``rhs``.

    Appends a size-1 axis to ``lhs``, prepends one to ``rhs`` and contracts
    over that pair, so the sum has a single term.

    Args:
        lhs: Left operand, any rank including 0.
        rhs: Right operand, any rank including 0.
        precision: XLA matmul precision. Default from ``get_config()``.

    Returns:
        Array of shape ``lhs.shape + rhs.shape`` with
        ``out[i, j] = lhs[i] * rhs[j]``.

    Examples:
        >>> import jax.numpy as jnp
        >>> outer_product(jnp.ones((1, 2)), jnp.ones((3, 4))).shape
        (1, 2, 3, 4)
        >>> outer_product(jnp.array([1.0, 2.0]), jnp.array([3.0, 4.0])).tolist()
        [[3.0, 4.0], [6.0, 8.0]]

    """
    lhs = jnp.asarray(lhs)
    rhs = jnp.asarray(rhs)
    lhs = reshape_array(lhs, lhs.shape + (1,))
    rhs = reshape_array(rhs, (1,) + rhs.shape)
    return tensor_contract(lhs, rhs, [lhs.ndim - 1], [0], precision=precision)
