"""XLA-compiled front ends.

jit_compile wraps jax.jit; jit_move_axes and jit_tensor_contract bake the
axis lists in as trace-time constants so each input shape compiles once.
"""

from jax_tensordot.transforms.core import (
    jit_compile,
    jit_move_axes,
    jit_tensor_contract,
)

__all__ = [
    "jit_compile",
    "jit_move_axes",
    "jit_tensor_contract",
]
