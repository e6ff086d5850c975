"""
    Assessment of transition matrices: row-stochastic validation and absorbing state detection.
"""
from typing import Optional, Set

import numpy as np

from ..numeric import is_square_matrix


def first_invalid_row(P: np.ndarray, tol: float, negative_tol: float) -> Optional[int]:
    """
    Index of the first row of P that is not a probability distribution

    Parameters
    ----------
    P : ndarray shape=(n, n)
        matrix to test
    tol : float
        absolute tolerance on the deviation of each row sum from one
    negative_tol : float
        entries are considered negative only below -negative_tol

    Returns
    -------
    row : int or None
        The row index, or None if every row is valid.
    """
    finite = np.all(np.isfinite(P), axis=1)
    has_negative = np.any(P < -negative_tol, axis=1)
    off_by = np.abs(P.sum(axis=1) - 1.0) > tol
    bad = np.flatnonzero(~finite | has_negative | off_by)
    return int(bad[0]) if bad.size > 0 else None


def is_row_stochastic(P: np.ndarray, tol: float, negative_tol: float) -> bool:
    """
    Tests whether P is a row-stochastic matrix

    Returns
    -------
    Truth value : bool
        True, if P is square, non-empty, its entries are non-negative up to noise
            and each row sums up to 1 within tol.
        False, otherwise
    """
    if not is_square_matrix(P) or P.shape[0] == 0:
        return False
    return first_invalid_row(P, tol, negative_tol) is None


def absorbing_states(P: np.ndarray, tol: float) -> Set[int]:
    """
    States i whose row equals the i-th standard basis vector within tol
    """
    deviation = np.abs(P - np.eye(P.shape[0])).max(axis=1)
    return {int(i) for i in np.flatnonzero(deviation <= tol)}
