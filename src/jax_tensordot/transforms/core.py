"""Compiled front ends for the axis and contraction kernels.

Axis lists are Python tuples, so under ``jax.jit`` they must be trace-time
constants. Each factory validates its axis lists, passes them to the
compiled kernel as static arguments and returns a one- or two-argument
function; every new input shape (and therefore rank) gets its
own compiled specialisation, while the permutation algorithm itself is the
one shared with the eager functions.

References:
    - JAX docs: https://jax.readthedocs.io/en/latest/jit-compilation.html
    - JAX source: jax/_src/api.py

"""

from __future__ import annotations

import functools
from collections.abc import Callable, Sequence
from typing import Any

import jax
from jax import Array

from jax_tensordot.axes import move_axes, validate_axes
from jax_tensordot.contraction import tensor_contract
from jax_tensordot.errors import AxisError


def jit_compile(
    fn: Callable[..., Any],
    *,
    static_argnums: tuple[int, ...] | None = None,
    donate_argnums: tuple[int, ...] | None = None,
) -> Callable[..., Any]:
    """Wrap ``jax.jit`` with optional static and donated arguments.

    The ``jit_*`` front ends below pass the axis-list positions of
    ``move_axes`` / ``tensor_contract`` as ``static_argnums``: axis tuples
    decide the permutation and the intermediate matrix shapes, so they have
    to be hashable trace-time constants rather than traced values.

    Args:
        fn: Pure function to compile.
        static_argnums: Argument positions treated as compile-time
            constants. Values must be hashable; each distinct value
            triggers a new trace.
        donate_argnums: Argument positions whose buffers XLA may reuse for
            the output.

    Returns:
        Compiled ``fn`` with identical semantics.

    Examples:
        >>> import jax.numpy as jnp
        >>> compiled = jit_compile(move_axes, static_argnums=(1, 2))
        >>> compiled(jnp.zeros((2, 3, 4)), (2,), (0,)).shape
        (4, 2, 3)

    """
    kwargs: dict[str, Any] = {}
    if static_argnums is not None:
        kwargs["static_argnums"] = static_argnums
    if donate_argnums is not None:
        kwargs["donate_argnums"] = donate_argnums
    return jax.jit(fn, **kwargs)


def jit_move_axes(
    source: Sequence[int],
    destination: Sequence[int],
) -> Callable[[Array], Array]:
    """Compile ``move_axes`` for fixed source/destination lists.

    Duplicates, negative entries and unequal lengths are rejected
    immediately; whether an axis exceeds the rank is only known on the
    first call.

    Args:
        source: Distinct axes to move.
        destination: Distinct target positions, same length as ``source``.

    Returns:
        Compiled ``fn(x)`` equal to ``move_axes(x, source, destination)``.

    Raises:
        AxisError: On duplicates, negative entries or unequal lengths.

    Examples:
        >>> import jax.numpy as jnp
        >>> to_front = jit_move_axes([2], [0])
        >>> to_front(jnp.zeros((2, 3, 4, 5))).shape
        (4, 2, 3, 5)

    """
    source, destination = _eager_axis_pair(source, destination, "source", "destination")
    compiled = jit_compile(move_axes, static_argnums=(1, 2))

    def moved(x: Array) -> Array:
        return compiled(x, source, destination)

    return moved


def jit_tensor_contract(
    lhs_axes: Sequence[int],
    rhs_axes: Sequence[int],
    *,
    precision: str | None = None,
) -> Callable[[Array, Array], Array]:
    """Compile ``tensor_contract`` for fixed contracted axis lists.

    Duplicates, negative entries and unequal lengths are rejected
    immediately; bounds and contracted sizes are checked on the first call
    for each new operand shape.

    Args:
        lhs_axes: N distinct lhs axes to contract.
        rhs_axes: N distinct rhs axes matched position-by-position.
        precision: XLA matmul precision. Default from ``get_config()`` at
            trace time.

    Returns:
        Compiled ``fn(lhs, rhs)`` equal to
        ``tensor_contract(lhs, rhs, lhs_axes, rhs_axes)``.

    Raises:
        AxisError: On duplicates, negative entries or unequal lengths.

    Examples:
        >>> import jax.numpy as jnp
        >>> contract = jit_tensor_contract([1], [0])
        >>> contract(jnp.ones((3, 4)), jnp.ones((4, 5))).shape
        (3, 5)

    """
    lhs_axes, rhs_axes = _eager_axis_pair(lhs_axes, rhs_axes, "lhs_axes", "rhs_axes")
    compiled = jit_compile(
        functools.partial(tensor_contract, precision=precision),
        static_argnums=(2, 3),
    )

    def contracted(lhs: Array, rhs: Array) -> Array:
        return compiled(lhs, rhs, lhs_axes, rhs_axes)

    return contracted


def _eager_axis_pair(
    first: Sequence[int],
    second: Sequence[int],
    first_name: str,
    second_name: str,
) -> tuple[tuple[int, ...], tuple[int, ...]]:
    # Rank is unknown until the first call; upper bounds are checked at trace time.
    first = validate_axes(first, _bound(first), first_name)
    second = validate_axes(second, _bound(second), second_name)
    if len(first) != len(second):
        raise AxisError(
            f"{first_name} has {len(first)} entries but {second_name} has {len(second)}",
            axes=first,
        )
    return first, second


def _bound(axes: Sequence[int]) -> int:
    return max((int(ax) for ax in axes), default=-1) + 1
