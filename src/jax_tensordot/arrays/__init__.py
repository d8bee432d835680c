"""Array primitives on top of jax.numpy.

The kernels in ``axes`` and ``contraction`` only touch the array library
through these functions: transpose, reshape and a strict 2-D matmul.
"""

from jax_tensordot.arrays.operations import (
    arange_array,
    matmul,
    permute_axes,
    reshape_array,
)

__all__ = [
    "arange_array",
    "permute_axes",
    "reshape_array",
    "matmul",
]
