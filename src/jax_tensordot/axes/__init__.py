"""Axis permutation.

Computes the full permutation that places selected axes at chosen
positions while every other axis keeps its relative order, then applies
it as a transpose.
"""

from jax_tensordot.axes.permutation import (
    inverse_permutation,
    move_axes,
    moveaxis_permutation,
    validate_axes,
)

__all__ = [
    "validate_axes",
    "moveaxis_permutation",
    "inverse_permutation",
    "move_axes",
]
