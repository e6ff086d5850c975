r"""

=======================
 Analysis API
=======================

"""
from markovsim.numeric import row_vector_times_matrix
from markovsim.util.exceptions import InvalidMatrixError
from markovsim.util.types import ensure_floating_array, ensure_transition_matrix_shape, ensure_vector_for

from . import _assessment
from . import _stationary_vector

__docformat__ = "restructuredtext en"

NEGATIVE_TOLERANCE = 1e-12


################################################################################
# Assessment tools
################################################################################


def is_row_stochastic(P, tol=1e-9, negative_tol=NEGATIVE_TOLERANCE):
    r"""Check if the given matrix is a row-stochastic (transition) matrix.

    Parameters
    ----------
    P : (M, M) ndarray or scipy.sparse matrix
        Matrix to check
    tol : float, optional, default=1e-9
        Absolute tolerance on :math:`|\sum_j p_{ij} - 1|`.
    negative_tol : float, optional, default=1e-12
        Entries in :math:`[-\mathrm{negative\_tol}, 0)` are treated as floating point noise
        left over from prior computations and do not invalidate the matrix.

    Returns
    -------
    is_row_stochastic : bool
        True, if P is a valid transition matrix, False otherwise

    Notes
    -----
    A valid transition matrix :math:`P=(p_{ij})` has non-negative
    elements, :math:`p_{ij} \geq 0`, and elements of each row sum up
    to one, :math:`\sum_j p_{ij} = 1`. This is a pure predicate, the input is not modified.

    Examples
    --------
    >>> from markovsim.analysis import is_row_stochastic

    >>> is_row_stochastic([[0.5, 0.6], [0.4, 0.6]])
    False

    >>> is_row_stochastic([[0.9, 0.1, 0.0], [0.5, 0.0, 0.5], [0.0, 0.1, 0.9]])
    True
    """
    P = ensure_floating_array(P)
    return _assessment.is_row_stochastic(P, tol, negative_tol)


def validate_transition_matrix(P, tol=1e-9, negative_tol=NEGATIVE_TOLERANCE):
    r"""Gate in front of every operation that propagates probability mass.

    Parameters
    ----------
    P : (M, M) array_like
        Matrix to check
    tol : float, optional, default=1e-9
        Row sum tolerance, see :meth:`is_row_stochastic`.
    negative_tol : float, optional, default=1e-12
        Noise tolerance for negative entries, see :meth:`is_row_stochastic`.

    Returns
    -------
    P : (M, M) ndarray
        The matrix as float array.

    Raises
    ------
    DimensionMismatchError
        If P is not square.
    InvalidMatrixError
        If P is not row-stochastic.
    """
    P = ensure_transition_matrix_shape(P)
    row = _assessment.first_invalid_row(P, tol, negative_tol)
    if row is not None:
        raise InvalidMatrixError("Matrix rows must each be non-negative and sum to 1", row=row)
    return P


def absorbing_states(P, tol=1e-12):
    r"""Detects absorbing states.

    Parameters
    ----------
    P : (M, M) ndarray or scipy.sparse matrix
        Transition matrix
    tol : float, optional, default=1e-12
        Absolute tolerance per matrix entry.

    Returns
    -------
    states : set of int
        Indices :math:`i` for which row :math:`i` is the :math:`i`-th standard basis vector, i.e.,
        :math:`|p_{ij} - \delta_{ij}| \leq \mathrm{tol}` for all :math:`j`.

    Notes
    -----
    Once an absorbing state is entered, the chain never leaves it. The matrix does not need to be
    row-stochastic for this check.

    Examples
    --------
    >>> from markovsim.analysis import absorbing_states
    >>> sorted(absorbing_states([[0.85, 0.10, 0.05], [0, 1, 0], [0, 0, 1]]))
    [1, 2]
    """
    P = ensure_transition_matrix_shape(P)
    return _assessment.absorbing_states(P, tol)


################################################################################
# Propagation and stationary distribution
################################################################################


def propagate(p0, P, k=1, tol=1e-9, negative_tol=NEGATIVE_TOLERANCE):
    r"""Propagates the distribution p0 k times.

    Computes the product

    .. math::

        p_k = p_0 P^k

    by repeated left-multiplication. The result is not renormalized.

    Parameters
    ----------
    p0 : (M,) array_like
        Initial distribution.
    P : (M, M) array_like
        Transition matrix.
    k : int, optional, default=1
        Number of time steps.
    tol : float, optional, default=1e-9
        Row sum tolerance used to validate P.
    negative_tol : float, optional, default=1e-12
        Noise tolerance for negative entries used to validate P.

    Returns
    -------
    pk : (M,) ndarray
        Distribution after k steps.

    Raises
    ------
    InvalidMatrixError
        If P is not row-stochastic.

    Examples
    --------
    >>> from markovsim.analysis import propagate
    >>> propagate([1, 0], [[0.8, 0.2], [0.4, 0.6]], k=2)
    array([0.72, 0.28])
    """
    if k < 0:
        raise ValueError(f"k must be a non-negative integer, but was {k}.")
    P = validate_transition_matrix(P, tol=tol, negative_tol=negative_tol)
    pk = ensure_vector_for(p0, P).copy()
    for _ in range(k):
        pk = row_vector_times_matrix(pk, P)
    return pk


def stationary_distribution(P, tol=1e-10, maxiter=20000, check_inputs=True, row_sum_tol=1e-9,
                            negative_tol=NEGATIVE_TOLERANCE, warn_not_converged=True):
    r"""Compute the stationary distribution of the transition matrix P with the power method.

    Parameters
    ----------
    P : (M, M) ndarray or scipy.sparse matrix
        Transition matrix
    tol : float, optional, default=1e-10
        Convergence tolerance on the L1 distance of two consecutive iterates.
    maxiter : int, optional, default=20000
        Maximum number of iterations.
    check_inputs : bool, optional, default=True
        Whether to check that P is a transition matrix.
    row_sum_tol : float, optional, default=1e-9
        Tolerance used by the input check.
    negative_tol : float, optional, default=1e-12
        Noise tolerance for negative entries used by the input check.
    warn_not_converged : bool, optional, default=True
        Whether to warn if the iteration did not converge.

    Returns
    -------
    pi : (M,) ndarray
        Vector of stationary probabilities.

    Raises
    ------
    InvalidMatrixError
        If `check_inputs` is set and P is not a transition matrix.

    Notes
    -----
    The stationary distribution :math:`\pi` is a fixed point of propagation,

    .. math:: \pi = \pi P.

    Starting from the uniform distribution, :math:`\pi \leftarrow \pi P` is iterated until two consecutive
    iterates differ by less than `tol` in the L1 norm. Convergence is only guaranteed for irreducible and
    aperiodic chains, which is not checked. If `maxiter` is exhausted, the last iterate is returned and a
    :class:`NotConvergedWarning <markovsim.util.exceptions.NotConvergedWarning>` is issued. Use
    :meth:`stationary_residual` to judge the quality of the result.

    Examples
    --------
    >>> import numpy as np
    >>> from markovsim.analysis import stationary_distribution
    >>> pi = stationary_distribution([[0.8, 0.2], [0.4, 0.6]])
    >>> np.round(pi, 4)
    array([0.6667, 0.3333])
    """
    if check_inputs:
        P = validate_transition_matrix(P, tol=row_sum_tol, negative_tol=negative_tol)
    else:
        P = ensure_transition_matrix_shape(P)
    if maxiter < 1:
        raise ValueError(f"maxiter must be positive, but was {maxiter}.")
    pi, _, _ = _stationary_vector.power_iteration(P, tol=tol, maxiter=maxiter,
                                                  warn_not_converged=warn_not_converged)
    return pi


def stationary_residual(P, pi):
    r"""Residual error :math:`\|\pi P - \pi\|_1` of a candidate stationary distribution.

    Parameters
    ----------
    P : (M, M) array_like
        Transition matrix
    pi : (M,) array_like
        Candidate stationary distribution.

    Returns
    -------
    residual : float
        The L1 residual.
    """
    P = ensure_transition_matrix_shape(P)
    pi = ensure_vector_for(pi, P)
    return _stationary_vector.residual(P, pi)
