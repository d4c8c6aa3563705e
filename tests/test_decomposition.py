import numpy as np
import pytest

from pyevo.algorithms.cmaes.decomposition import EigenDecomposition, decompose
from pyevo.core.exceptions import NumericDegeneracyError


def test_decomposition_reconstructs_covariance():
    rng = np.random.default_rng(3)
    A = rng.standard_normal((4, 4))
    C = A @ A.T + 0.1 * np.eye(4)

    result = decompose(C)

    assert isinstance(result, EigenDecomposition)
    np.testing.assert_allclose(result.B @ result.B.T, np.eye(4), atol=1e-12)
    np.testing.assert_allclose(result.B @ np.diag(result.eigenvalues) @ result.B.T, C, atol=1e-10)


def test_transform_scales_along_axes():
    result = decompose(np.diag([4.0, 9.0]))

    np.testing.assert_allclose(np.sort(result.D), [2.0, 3.0])
    np.testing.assert_allclose(np.abs(result.transform(np.ones(2))), [2.0, 3.0])


def test_only_upper_triangle_is_read():
    upper = decompose(np.array([[2.0, 1.0], [99.0, 2.0]]))
    symmetric = decompose(np.array([[2.0, 1.0], [1.0, 2.0]]))

    np.testing.assert_allclose(upper.eigenvalues, symmetric.eigenvalues)


def test_rounding_drift_is_clamped():
    C = np.diag([1.0, -1e-14])

    result = decompose(C)

    assert isinstance(result, EigenDecomposition)
    assert np.all(result.D >= 0)
    assert np.min(result.D) == 0.0


@pytest.mark.parametrize(
    "C",
    [
        np.array([[1.0, 0.0], [0.0, -1.0]]),
        np.array([[1.0, 2.0], [2.0, 1.0]]),
        np.array([[np.nan, 0.0], [0.0, 1.0]]),
        np.array([[np.inf, 0.0], [0.0, 1.0]]),
    ],
)
def test_degenerate_covariance_is_reported(C):
    result = decompose(C)

    assert isinstance(result, NumericDegeneracyError)
    np.testing.assert_array_equal(result.covariance, C)
    assert result.covariance is not C
    assert "Break on eigen decomposition" in str(result)
