import numpy as np
import pytest

from multipath_engine.exceptions import ConfigValidationError, CovarianceDecompositionError
from multipath_engine.mc.correlation import CorrelationTransform, matrix_sqrt


def _random_covariance(n: int, seed: int) -> np.ndarray:
    a = np.random.default_rng(seed).normal(size=(n, n))
    return a @ a.T + 0.1 * np.eye(n)


def test_identity_covariance_gives_identity_transform():
    transform = CorrelationTransform(np.eye(3))
    assert np.allclose(transform.matrix, np.eye(3))
    draws = np.array([0.3, -1.2, 2.5])
    assert np.allclose(transform.apply(draws), draws)


@pytest.mark.parametrize("method", ["eigen", "cholesky"])
def test_transform_reconstructs_covariance(method):
    cov = _random_covariance(4, seed=7)
    m = matrix_sqrt(cov, method=method)
    assert np.allclose(m @ m.T, cov)


def test_cholesky_factor_is_lower_triangular():
    m = matrix_sqrt(_random_covariance(3, seed=1), method="cholesky")
    assert np.allclose(m, np.tril(m))


def test_singular_psd_matrix_supported_by_eigen_only():
    cov = np.array([[1.0, 1.0], [1.0, 1.0]])
    m = matrix_sqrt(cov, method="eigen")
    assert np.isfinite(m).all()
    assert np.allclose(m @ m.T, cov)
    with pytest.raises(CovarianceDecompositionError):
        matrix_sqrt(cov, method="cholesky")


@pytest.mark.parametrize(
    "cov",
    [
        [[1.0, 2.0], [2.0, 1.0]],  # indefinite
        [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],  # not square
        [[1.0, 0.5], [0.1, 1.0]],  # not symmetric
        [[1.0, float("nan")], [float("nan"), 1.0]],
        [[-0.04, 0.0], [0.0, 0.09]],
    ],
)
def test_invalid_covariance_fails_instead_of_nan(cov):
    with pytest.raises(CovarianceDecompositionError):
        CorrelationTransform(cov)


def test_decomposition_error_is_a_validation_error():
    assert issubclass(CovarianceDecompositionError, ConfigValidationError)


def test_unknown_method_rejected():
    with pytest.raises(CovarianceDecompositionError):
        matrix_sqrt(np.eye(2), method="svd")


def test_transform_is_read_only_and_keeps_input_copy():
    cov = np.diag([0.04, 0.09])
    transform = CorrelationTransform(cov)
    cov[0, 0] = 1.0
    assert transform.covariance[0, 0] == pytest.approx(0.04)
    with pytest.raises(ValueError):
        transform.matrix[0, 0] = 2.0


def test_apply_batch_matches_rowwise():
    transform = CorrelationTransform(_random_covariance(3, seed=3))
    batch = np.random.default_rng(0).normal(size=(5, 3))
    expected = np.array([transform.apply(row) for row in batch])
    assert np.allclose(transform.apply(batch), expected)


def test_row_norms_equal_volatilities():
    cov = _random_covariance(3, seed=11)
    transform = CorrelationTransform(cov)
    assert np.allclose(transform.row_norms(), np.sqrt(np.diag(cov)))
    two = CorrelationTransform(np.diag([0.04, 0.09])).row_norms(2)
    assert np.allclose(two, [0.2, 0.3])
