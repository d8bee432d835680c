"""jax-tensordot — axis permutation and generalized tensor contraction on JAX.

Modules:
    arrays: Array primitives (transpose, reshape, strict 2-D matmul)
    axes: Axis permutation (moveaxis)
    contraction: Tensor contraction (tensordot) and outer product
    transforms: XLA-compiled front ends for fixed axis lists
    config: Runtime options (precision, dimension checks, log level)
    errors: Exception hierarchy
"""

from jax_tensordot.axes import move_axes, moveaxis_permutation
from jax_tensordot.contraction import outer_product, plan_contraction, tensor_contract
from jax_tensordot.errors import (
    AxisError,
    DimensionMismatchError,
    ShapeError,
    TensorDotError,
)

__version__ = "0.1.0"

__all__ = [
    "move_axes",
    "moveaxis_permutation",
    "tensor_contract",
    "plan_contraction",
    "outer_product",
    "TensorDotError",
    "AxisError",
    "ShapeError",
    "DimensionMismatchError",
]
