"""Tests for jax_tensordot.transforms module."""

from __future__ import annotations

import jax.numpy as jnp
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jax_tensordot.arrays import arange_array
from jax_tensordot.axes import move_axes
from jax_tensordot.contraction import tensor_contract
from jax_tensordot.errors import AxisError, DimensionMismatchError
from jax_tensordot.transforms import jit_compile, jit_move_axes, jit_tensor_contract


class TestJitCompile:
    """Tests for jit_compile."""

    def test_basic_jit(self):
        @jit_compile
        def add(x, y):
            return x + y

        result = add(jnp.array(1.0), jnp.array(2.0))
        assert float(result) == 3.0

    def test_jit_with_static_argnums(self):
        compiled = jit_compile(
            lambda x, source, destination: move_axes(x, source, destination),
            static_argnums=(1, 2),
        )
        x = jnp.ones((2, 3, 4))
        assert compiled(x, (2,), (0,)).shape == (4, 2, 3)

    def test_jit_with_donate_argnums(self):
        compiled = jit_compile(lambda x: x + 1, donate_argnums=(0,))
        result = compiled(jnp.array(5.0))
        assert float(result) == 6.0


class TestJitMoveAxes:
    """Tests for jit_move_axes."""

    def test_rank4(self):
        to_front = jit_move_axes([2], [0])
        assert to_front(jnp.zeros((2, 3, 4, 5))).shape == (4, 2, 3, 5)

    def test_matches_eager(self):
        x = arange_array((2, 3, 4, 5))
        compiled = jit_move_axes([0, 3], [2, 0])
        assert jnp.array_equal(compiled(x), move_axes(x, [0, 3], [2, 0]))

    def test_retraces_per_rank(self):
        to_back = jit_move_axes([0], [1])
        assert to_back(jnp.zeros((2, 3))).shape == (3, 2)
        assert to_back(jnp.zeros((2, 3, 4))).shape == (3, 2, 4)

    def test_out_of_range_on_call(self):
        compiled = jit_move_axes([3], [0])
        with pytest.raises(AxisError):
            compiled(jnp.zeros((2, 3)))

    def test_duplicate_source_rejected_eagerly(self):
        with pytest.raises(AxisError, match="source has duplicate entries"):
            jit_move_axes([1, 1], [0, 2])

    def test_duplicate_destination_rejected_eagerly(self):
        with pytest.raises(AxisError, match="destination has duplicate entries"):
            jit_move_axes([0, 1], [2, 2])

    def test_unequal_lengths_rejected_eagerly(self):
        with pytest.raises(AxisError):
            jit_move_axes([0, 1], [2])


class TestJitTensorContract:
    """Tests for jit_tensor_contract."""

    def test_scenario_values(self):
        lhs = arange_array((2, 3, 4), start=1)
        rhs = arange_array((4, 2, 3), start=1)
        contract = jit_tensor_contract([0, 2], [1, 0])
        result = contract(lhs, rhs)
        assert jnp.array_equal(result, tensor_contract(lhs, rhs, [0, 2], [1, 0]))
        assert float(result[0, 0]) == 914.0

    def test_duplicate_rejected_eagerly(self):
        with pytest.raises(AxisError, match="duplicate"):
            jit_tensor_contract([0, 0], [0, 1])

    def test_negative_rejected_eagerly(self):
        with pytest.raises(AxisError):
            jit_tensor_contract([-1], [0])

    def test_unequal_lengths_rejected_eagerly(self):
        with pytest.raises(AxisError):
            jit_tensor_contract([0, 1], [0])

    def test_precision_passed_through(self):
        a = jnp.array([[1.0, 2.0], [3.0, 4.0]])
        contract = jit_tensor_contract([1], [0], precision="highest")
        assert contract(a, a).tolist() == [[7.0, 10.0], [15.0, 22.0]]

    def test_mismatch_on_call(self):
        contract = jit_tensor_contract([1], [0])
        with pytest.raises(DimensionMismatchError):
            contract(jnp.ones((2, 3)), jnp.ones((4, 5)))

    @given(
        st.integers(min_value=1, max_value=5),
        st.integers(min_value=1, max_value=5),
        st.integers(min_value=1, max_value=5),
    )
    @settings(max_examples=10, deadline=None)
    def test_matrix_product_property(self, m, k, n):
        contract = jit_tensor_contract([1], [0])
        a = arange_array((m, k))
        b = arange_array((k, n))
        assert jnp.allclose(contract(a, b), a @ b)
