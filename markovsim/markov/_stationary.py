import logging

import numpy as np

from ..analysis import validate_transition_matrix
from ..analysis._stationary_vector import power_iteration, residual
from ..base import Estimator, Model

log = logging.getLogger(__name__)


class StationaryDistribution(Model):
    r""" Result of the power method: an approximate fixed point :math:`\pi = \pi P` together with diagnostics.

    Parameters
    ----------
    stationary_distribution : (n,) ndarray
        The last iterate.
    residual : float
        :math:`\|\pi P - \pi\|_1`, recomputed after the iteration.
    n_iterations : int
        Number of iterations performed.
    converged : bool
        Whether the stopping tolerance was reached. A large residual of an unconverged result hints at a periodic or
        reducible chain.
    """

    def __init__(self, stationary_distribution, residual: float, n_iterations: int, converged: bool):
        self.stationary_distribution = stationary_distribution
        self.residual = residual
        self.n_iterations = n_iterations
        self.converged = converged

    @property
    def pi(self) -> np.ndarray:
        r""" Shortcut to :attr:`stationary_distribution`.

        :type: (n,) ndarray
        """
        return self.stationary_distribution

    def format(self) -> str:
        r""" Human-readable report.

        Examples
        --------
        >>> print(StationaryDistribution(np.array([2 / 3, 1 / 3]), 1.2e-11, 25, True).format())
        Stationary distribution (power method): [0.666667, 0.333333]
        L1 error ||πP - π||₁ ≈ 1.20e-11
        """
        values = ", ".join(f"{x:.6f}" for x in self.stationary_distribution)
        return f"Stationary distribution (power method): [{values}]\n" \
               f"L1 error ||πP - π||₁ ≈ {self.residual:.2e}"


class StationaryDistributionEstimator(Estimator):
    r""" Estimates the stationary distribution of a transition matrix with the power method, see
    :meth:`markovsim.analysis.stationary_distribution`.

    Parameters
    ----------
    tol : float, default=1e-10
        Stopping tolerance on the L1 distance of consecutive iterates.
    maxiter : int, default=20000
        Iteration cap. Exhausting it is not an error, the resulting model reports ``converged=False``.
    row_sum_tol : float, default=1e-9
        Tolerance of the row-stochastic check performed before iterating.
    negative_tol : float, default=1e-12
        Noise tolerance for negative entries in the row-stochastic check.

    Examples
    --------
    >>> estimator = StationaryDistributionEstimator()
    >>> model = estimator.fit([[0.8, 0.2], [0.4, 0.6]]).fetch_model()
    >>> np.round(model.pi, 4), model.converged
    (array([0.6667, 0.3333]), True)
    """

    def __init__(self, tol: float = 1e-10, maxiter: int = 20000, row_sum_tol: float = 1e-9,
                 negative_tol: float = 1e-12):
        super().__init__()
        self.tol = tol
        self.maxiter = maxiter
        self.row_sum_tol = row_sum_tol
        self.negative_tol = negative_tol

    def fit(self, data, **kwargs):
        r""" Runs the power method on a transition matrix.

        Parameters
        ----------
        data : (n, n) array_like
            The transition matrix.
        **kwargs
            Ignored.

        Returns
        -------
        self : StationaryDistributionEstimator
            Reference to self.

        Raises
        ------
        InvalidMatrixError
            If the matrix is not row-stochastic. The previously estimated model is kept.
        """
        P = validate_transition_matrix(data, tol=self.row_sum_tol, negative_tol=self.negative_tol)
        pi, n_iterations, converged = power_iteration(P, tol=self.tol, maxiter=self.maxiter)
        self._model = StationaryDistribution(pi, residual(P, pi), n_iterations, converged)
        return self
