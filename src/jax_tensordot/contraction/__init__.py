"""Generalized tensor contraction and outer product.

Contraction over any set of matched axis pairs is reduced to a single
2-D matrix product; the outer product is a contraction over one
inserted size-1 axis pair.
"""

from jax_tensordot.contraction.tensordot import (
    ContractionPlan,
    outer_product,
    plan_contraction,
    tensor_contract,
)

__all__ = [
    "ContractionPlan",
    "plan_contraction",
    "tensor_contract",
    "outer_product",
]
