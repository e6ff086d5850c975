import numpy as _np
from scipy.sparse import issparse

from ..util.types import ensure_floating_array, ensure_transition_matrix_shape, ensure_vector_for


def is_square_matrix(arr) -> bool:
    r""" Determines whether an array is a square matrix. This means that ndim must be 2 and shape[0] must be equal
    to shape[1].

    Parameters
    ----------
    arr : ndarray or sparse array
        The array to check.

    Returns
    -------
    is_square_matrix : bool
        Whether the array is a square matrix.
    """
    return (issparse(arr) or isinstance(arr, _np.ndarray)) and arr.ndim == 2 and arr.shape[0] == arr.shape[1]


def normalize_vector(v) -> _np.ndarray:
    r""" Scales a non-negative vector so that its entries sum to one.

    If the sum is not positive, there is no valid distribution to scale to and an all-zero vector
    of the same length is returned instead of dividing by zero.

    Parameters
    ----------
    v : (n,) array_like
        The vector.

    Returns
    -------
    normalized : (n,) ndarray
        A new array, `v / sum(v)` or zeros.

    Examples
    --------
    >>> normalize_vector([2., 2., 4.])
    array([0.25, 0.25, 0.5 ])
    >>> normalize_vector([0., 0.])
    array([0., 0.])
    """
    v = ensure_floating_array(v, ndim=1)
    s = v.sum()
    if s <= 0:
        return _np.zeros_like(v)
    return v / s


def normalize_row(row) -> _np.ndarray:
    r""" Normalizes a single row of a transition matrix, same contract as :meth:`normalize_vector`. """
    return normalize_vector(row)


def normalize_rows(P) -> _np.ndarray:
    r""" Applies :meth:`normalize_row` to every row of `P`. Rows with non-positive sum become zero rows.

    Parameters
    ----------
    P : (n, n) array_like
        The matrix.

    Returns
    -------
    normalized : (n, n) ndarray
        A new matrix.
    """
    P = ensure_transition_matrix_shape(P)
    sums = P.sum(axis=1)
    out = _np.zeros_like(P)
    positive = sums > 0
    out[positive] = P[positive] / sums[positive, _np.newaxis]
    return out


def row_vector_times_matrix(p, P) -> _np.ndarray:
    r""" Left-multiplies the row vector `p` with `P`, i.e., computes :math:`r_j = \sum_k p_k P_{kj}`.

    Parameters
    ----------
    p : (n,) array_like
        Row vector, typically a distribution.
    P : (n, n) array_like
        Square matrix.

    Returns
    -------
    r : (n,) ndarray
        The product :math:`pP`.

    Raises
    ------
    DimensionMismatchError
        If `P` is not square or `p` does not have one entry per state.

    Examples
    --------
    >>> row_vector_times_matrix([1., 0.], [[0.8, 0.2], [0.4, 0.6]])
    array([0.8, 0.2])
    """
    P = ensure_transition_matrix_shape(P)
    p = ensure_vector_for(p, P)
    return p @ P


def l1_distance(a, b) -> float:
    r""" Computes :math:`\sum_i |a_i - b_i|`.

    Parameters
    ----------
    a : (n,) array_like
        First vector.
    b : (n,) array_like
        Second vector, same length as `a`.

    Returns
    -------
    distance : float
        The L1 distance.
    """
    a = ensure_floating_array(a, ndim=1)
    b = ensure_floating_array(b, ndim=1, size=a.size)
    return float(_np.abs(a - b).sum())
