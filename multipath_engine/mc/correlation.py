"""Covariance square-root factorisation used to correlate independent draws."""

from __future__ import annotations

from typing import Literal

import numpy as np
from scipy import linalg

from multipath_engine.exceptions import CovarianceDecompositionError
from multipath_engine.utils.logging import get_logger

log = get_logger(__name__, component="correlation")

DecompositionMethod = Literal["eigen", "cholesky"]

SYMMETRY_TOL = 1e-10
EIGEN_TOL = 1e-12


def validate_covariance(covariance) -> np.ndarray:
    """Return ``covariance`` as a float matrix after shape/finiteness/symmetry checks."""
    cov = np.array(covariance, dtype=float)
    if cov.ndim != 2 or cov.shape[0] != cov.shape[1]:
        raise CovarianceDecompositionError(f"covariance is not a square matrix (shape {cov.shape})")
    if cov.shape[0] == 0:
        raise CovarianceDecompositionError("covariance matrix is empty")
    if not np.isfinite(cov).all():
        raise CovarianceDecompositionError("covariance contains non-finite values")
    scale = max(1.0, float(np.abs(cov).max()))
    if not np.allclose(cov, cov.T, atol=SYMMETRY_TOL * scale, rtol=0.0):
        raise CovarianceDecompositionError("covariance matrix is not symmetric")
    return cov


def matrix_sqrt(covariance, method: DecompositionMethod = "eigen") -> np.ndarray:
    """Factor ``covariance`` into ``M`` with ``M @ M.T == covariance``.

    ``eigen`` returns the symmetric square root and accepts singular
    positive-semidefinite input; ``cholesky`` returns the lower-triangular
    factor and needs a positive-definite matrix.
    """
    cov = validate_covariance(covariance)
    if method == "eigen":
        eigenvalues, eigenvectors = linalg.eigh(cov)
        floor = -EIGEN_TOL * max(1.0, float(np.abs(eigenvalues).max()))
        if eigenvalues.min() < floor:
            raise CovarianceDecompositionError(
                f"covariance is not positive semi-definite (min eigenvalue {eigenvalues.min():.3e})"
            )
        root = np.sqrt(np.clip(eigenvalues, 0.0, None))
        return (eigenvectors * root) @ eigenvectors.T
    if method == "cholesky":
        try:
            return linalg.cholesky(cov, lower=True)
        except linalg.LinAlgError as exc:
            raise CovarianceDecompositionError(f"covariance is not positive definite: {exc}") from exc
    raise CovarianceDecompositionError(f"unknown decomposition method {method!r}")


class CorrelationTransform:
    """Read-only square root of a covariance matrix.

    Applying :meth:`apply` to independent unit-variance draws yields draws
    whose covariance is the input matrix.
    """

    def __init__(self, covariance, method: DecompositionMethod = "eigen") -> None:
        self.method = method
        self._covariance = validate_covariance(covariance)
        self._matrix = matrix_sqrt(self._covariance, method)
        self._covariance.setflags(write=False)
        self._matrix.setflags(write=False)
        log.debug("Correlation transform computed", extra={"n_assets": self.size})

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def covariance(self) -> np.ndarray:
        return self._covariance

    @property
    def size(self) -> int:
        return int(self._matrix.shape[0])

    def apply(self, draws: np.ndarray) -> np.ndarray:
        """Correlate a vector of ``size`` draws, or each row of a ``(k, size)`` batch."""
        draws = np.asarray(draws, dtype=float)
        if draws.ndim == 1:
            return self._matrix @ draws
        return draws @ self._matrix.T

    def row_norms(self, n_factors: int | None = None) -> np.ndarray:
        """Euclidean norm of each transform row over its first ``n_factors`` columns."""
        cols = self._matrix if n_factors is None else self._matrix[:, :n_factors]
        return np.sqrt((cols * cols).sum(axis=1))


__all__ = ["CorrelationTransform", "DecompositionMethod", "matrix_sqrt", "validate_covariance"]
