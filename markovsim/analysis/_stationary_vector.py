r"""This module provides the power method for the computation of stationary
vectors of stochastic matrices.
"""
import logging
import warnings
from typing import Tuple

import numpy as np

from ..numeric import l1_distance, row_vector_times_matrix
from ..util.exceptions import NotConvergedWarning

log = logging.getLogger(__name__)


def power_iteration(P: np.ndarray, tol: float = 1e-10, maxiter: int = 20000,
                    warn_not_converged: bool = True) -> Tuple[np.ndarray, int, bool]:
    r"""Fixed-point iteration :math:`\pi \leftarrow \pi P` starting from the uniform distribution.

    Parameters
    ----------
    P : (M, M) ndarray
        Transition matrix
    tol : float
        Iteration stops as soon as the L1 distance between two consecutive iterates is below tol.
    maxiter : int
        Maximum number of iterations.
    warn_not_converged : bool, default=True
        Whether to emit a :class:`NotConvergedWarning` if maxiter is exhausted.

    Returns
    -------
    pi : (M,) ndarray
        The converged iterate, or the last iterate if the iteration did not converge.
    n_iterations : int
        Number of products :math:`\pi P` that were computed.
    converged : bool
        Whether the tolerance was reached.
    """
    n = P.shape[0]
    pi = np.full(n, 1.0 / n)
    for i in range(maxiter):
        nxt = row_vector_times_matrix(pi, P)
        if l1_distance(nxt, pi) < tol:
            log.info(f"Power iteration converged after {i + 1} iterations.")
            return nxt, i + 1, True
        pi = nxt
    if warn_not_converged:
        warnings.warn(f"Power iteration did not converge within {maxiter} iterations, "
                      f"residual is {residual(P, pi):.2e}. The chain may be periodic or reducible.",
                      NotConvergedWarning)
    return pi, maxiter, False


def residual(P: np.ndarray, pi: np.ndarray) -> float:
    r""" Diagnostic error :math:`\|\pi P - \pi\|_1`. """
    return l1_distance(row_vector_times_matrix(pi, P), pi)
