"""Tests for jax_tensordot.arrays module."""

from __future__ import annotations

import jax.numpy as jnp
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jax_tensordot.arrays import (
    arange_array,
    matmul,
    permute_axes,
    reshape_array,
)
from jax_tensordot.errors import AxisError, ShapeError


class TestArangeArray:
    """Tests for arange_array."""

    def test_row_major_fill(self):
        a = arange_array((2, 3), start=1)
        assert a.tolist() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]

    def test_default_start(self):
        a = arange_array((4,))
        assert a.tolist() == [0.0, 1.0, 2.0, 3.0]

    def test_scalar_shape(self):
        a = arange_array((), start=7)
        assert a.shape == ()
        assert float(a) == 7.0

    def test_zero_size(self):
        assert arange_array((2, 0, 3)).shape == (2, 0, 3)


class TestPermuteAxes:
    """Tests for permute_axes."""

    def test_shape(self):
        assert permute_axes(jnp.ones((2, 3, 4)), (2, 0, 1)).shape == (4, 2, 3)

    def test_values_follow_axes(self):
        x = arange_array((2, 3))
        result = permute_axes(x, (1, 0))
        assert jnp.array_equal(result, x.T)

    def test_identity(self):
        x = arange_array((2, 3, 4))
        assert jnp.array_equal(permute_axes(x, (0, 1, 2)), x)

    def test_not_a_permutation(self):
        with pytest.raises(AxisError):
            permute_axes(jnp.ones((2, 3)), (0, 0))

    def test_wrong_length(self):
        with pytest.raises(AxisError):
            permute_axes(jnp.ones((2, 3)), (0,))

    def test_input_unchanged(self):
        x = arange_array((2, 3))
        _ = permute_axes(x, (1, 0))
        assert x.shape == (2, 3)


class TestReshapeArray:
    """Tests for reshape_array."""

    def test_basic(self):
        x = jnp.arange(12)
        assert reshape_array(x, (3, 4)).shape == (3, 4)

    def test_infer_dim(self):
        x = jnp.arange(12)
        assert reshape_array(x, (2, -1)).shape == (2, 6)

    def test_preserves_values(self):
        x = jnp.array([1.0, 2.0, 3.0, 4.0])
        reshaped = reshape_array(x, (2, 2))
        assert float(reshaped[0, 0]) == 1.0
        assert float(reshaped[1, 1]) == 4.0

    def test_after_permute_reads_permuted_order(self):
        x = arange_array((2, 3))
        flat = reshape_array(permute_axes(x, (1, 0)), (6,))
        assert flat.tolist() == [0.0, 3.0, 1.0, 4.0, 2.0, 5.0]

    def test_size_mismatch(self):
        with pytest.raises(ShapeError) as excinfo:
            reshape_array(jnp.arange(12), (5, 3))
        assert excinfo.value.target_shape == (5, 3)
        assert excinfo.value.size == 12
        assert "(5, 3)" in str(excinfo.value)
        assert "12" in str(excinfo.value)

    def test_uninferable(self):
        with pytest.raises(ShapeError):
            reshape_array(jnp.arange(12), (5, -1))

    def test_two_inferred(self):
        with pytest.raises(ShapeError):
            reshape_array(jnp.arange(12), (-1, -1))

    def test_to_scalar(self):
        assert reshape_array(jnp.ones((1, 1)), ()).shape == ()


class TestMatmul:
    """Tests for matmul."""

    def test_basic(self):
        a = jnp.ones((3, 4))
        b = jnp.ones((4, 2))
        result = matmul(a, b)
        assert result.shape == (3, 2)
        assert jnp.allclose(result, jnp.full((3, 2), 4.0))

    def test_identity(self):
        x = jnp.array([[1.0, 2.0], [3.0, 4.0]])
        result = matmul(x, jnp.eye(2))
        assert jnp.allclose(result, x)

    def test_explicit_precision(self):
        x = jnp.array([[1.0, 2.0], [3.0, 4.0]])
        result = matmul(x, x, precision="highest")
        assert result.tolist() == [[7.0, 10.0], [15.0, 22.0]]

    def test_empty_inner_dimension(self):
        result = matmul(jnp.ones((3, 0)), jnp.ones((0, 2)))
        assert jnp.array_equal(result, jnp.zeros((3, 2)))

    def test_inner_mismatch(self):
        with pytest.raises(ShapeError):
            matmul(jnp.ones((3, 4)), jnp.ones((5, 2)))

    def test_rejects_vectors(self):
        with pytest.raises(ShapeError):
            matmul(jnp.ones(3), jnp.ones((3, 2)))

    def test_rejects_batches(self):
        with pytest.raises(ShapeError):
            matmul(jnp.ones((8, 3, 4)), jnp.ones((8, 4, 2)))

    @given(
        st.integers(min_value=1, max_value=8),
        st.integers(min_value=1, max_value=8),
        st.integers(min_value=1, max_value=8),
    )
    @settings(max_examples=10, deadline=None)
    def test_shape_property(self, m, k, n):
        """Property: (M,K) @ (K,N) = (M,N)."""
        a = jnp.ones((m, k))
        b = jnp.ones((k, n))
        assert matmul(a, b).shape == (m, n)
