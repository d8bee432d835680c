"""Array primitives consumed by the axis and contraction kernels.

These wrap the jax.numpy calls the kernels depend on (transpose, reshape,
2-D matmul) and turn the library's loosely typed failures into
``AxisError`` / ``ShapeError``. Every function returns a new immutable
array; inputs are never modified.

Reshape policy: a permuted array is reshaped by value. XLA materialises
whatever contiguous layout the reshape needs, so flattening a transposed
operand never reads elements in the wrong order.

References:
    - JAX NumPy API: https://jax.readthedocs.io/en/latest/jax.numpy.html
    - jnp.transpose / jnp.reshape / jnp.matmul

"""

from __future__ import annotations

import math
from collections.abc import Sequence

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from jax_tensordot.config import get_config
from jax_tensordot.errors import AxisError, ShapeError


def arange_array(
    shape: Sequence[int],
    start: int = 0,
    dtype: jnp.dtype | None = None,
) -> Array:
    """Fill ``shape`` row-major with ``start, start + 1, ...``.

    Examples:
        >>> arange_array((2, 3), start=1).tolist()
        [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]

    """
    if dtype is None:
        dtype = jnp.float32
    shape = tuple(shape)
    size = math.prod(shape)
    return jnp.arange(start, start + size, dtype=dtype).reshape(shape)


def permute_axes(x: ArrayLike, permutation: Sequence[int]) -> Array:
    """Reorder all axes of ``x``.

    Output axis ``i`` is input axis ``permutation[i]``. Element values are
    unchanged; only their logical position moves.

    Args:
        x: Input array.
        permutation: A bijection on ``range(x.ndim)``.

    Returns:
        Transposed array.

    Raises:
        AxisError: If ``permutation`` is not a permutation of the axes.

    Examples:
        >>> import jax.numpy as jnp
        >>> permute_axes(jnp.ones((2, 3, 4)), (2, 0, 1)).shape
        (4, 2, 3)

    """
    x = jnp.asarray(x)
    permutation = tuple(permutation)
    if sorted(permutation) != list(range(x.ndim)):
        raise AxisError(
            f"permutation: {permutation} is not a permutation of {x.ndim} axes",
            axes=permutation,
            ndim=x.ndim,
            argname="permutation",
        )
    return jnp.transpose(x, permutation)


def reshape_array(x: ArrayLike, shape: Sequence[int]) -> Array:
    """Reshape array to a new shape with the same element count.

    Uses -1 for a single inferred dimension.

    Args:
        x: Input array.
        shape: Target shape. Use -1 for one inferred dimension.

    Returns:
        Reshaped array.

    Raises:
        ShapeError: If ``shape`` cannot hold exactly ``x.size`` elements.

    Examples:
        >>> import jax.numpy as jnp
        >>> x = jnp.arange(12)
        >>> reshape_array(x, (3, 4)).shape
        (3, 4)
        >>> reshape_array(x, (2, -1)).shape
        (2, 6)

    """
    x = jnp.asarray(x)
    shape = tuple(shape)
    inferred = shape.count(-1)
    if inferred > 1:
        raise ShapeError("can only infer one dimension", target_shape=shape, size=x.size)
    known = math.prod(d for d in shape if d != -1)
    if inferred:
        if known == 0 or x.size % known:
            raise ShapeError("cannot infer dimension", target_shape=shape, size=x.size)
    elif known != x.size:
        raise ShapeError("cannot reshape array", target_shape=shape, size=x.size)
    return jnp.reshape(x, shape)


def matmul(a: ArrayLike, b: ArrayLike, precision: str | None = None) -> Array:
    """Two-dimensional matrix product.

    Unlike jnp.matmul this does not broadcast or promote vectors: both
    operands must be matrices with matching inner dimension.

    Args:
        a: Left matrix (M, K).
        b: Right matrix (K, N).
        precision: XLA precision name. Default from ``get_config()``.

    Returns:
        Product matrix (M, N).

    Raises:
        ShapeError: If either operand is not 2-D or K differs.

    Examples:
        >>> import jax.numpy as jnp
        >>> a = jnp.ones((3, 4))
        >>> b = jnp.ones((4, 2))
        >>> matmul(a, b).shape
        (3, 2)

    """
    a = jnp.asarray(a)
    b = jnp.asarray(b)
    if a.ndim != 2 or b.ndim != 2:
        raise ShapeError(f"matmul expects 2-D operands, got {a.shape} and {b.shape}")
    if a.shape[1] != b.shape[0]:
        raise ShapeError(
            f"matmul inner dimensions differ: {a.shape} @ {b.shape}",
            target_shape=(a.shape[0], b.shape[1]),
        )
    if precision is None:
        precision = get_config().precision
    return jnp.matmul(a, b, precision=precision)
