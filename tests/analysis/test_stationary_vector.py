import warnings

import numpy as np
import pytest
from numpy.testing import assert_, assert_allclose, assert_raises, assert_equal

from markovsim.analysis import stationary_distribution, stationary_residual
from markovsim.analysis._stationary_vector import power_iteration
from markovsim.numeric import normalize_rows
from markovsim.util.exceptions import InvalidMatrixError, NotConvergedWarning


def test_weather():
    P = np.array([[0.8, 0.2], [0.4, 0.6]])
    pi = stationary_distribution(P)
    assert_allclose(pi, [2. / 3., 1. / 3.], atol=1e-8)
    assert_(stationary_residual(P, pi) < 1e-6)


def test_three_state_chain():
    P = np.array([[0.9, 0.1, 0.0], [0.4, 0.2, 0.4], [0.0, 0.1, 0.9]])
    pi = stationary_distribution(P)
    assert_allclose(pi, [4. / 9., 1. / 9., 4. / 9.], atol=1e-8)


def test_fixed_point(fixed_seed):
    P = normalize_rows(np.random.uniform(size=(10, 10)))
    pi = stationary_distribution(P)
    assert_allclose(pi @ P, pi, atol=1e-9)
    assert_allclose(pi.sum(), 1.)
    assert_(np.all(pi >= 0))


def test_single_state():
    assert_equal(stationary_distribution([[1.]]), [1.])


def test_converged_immediately_for_uniform_fixed_point():
    P = np.full((3, 3), 1. / 3.)
    pi, n_iterations, converged = power_iteration(P)
    assert_(converged)
    assert_equal(n_iterations, 1)
    assert_allclose(pi, np.full(3, 1. / 3.))


def test_periodic_chain_does_not_converge():
    # period two, the iterates alternate between the uniform distribution and (1/6, 2/3, 1/6)
    P = np.array([[0., 1., 0.], [0.5, 0., 0.5], [0., 1., 0.]])
    with pytest.warns(NotConvergedWarning):
        pi, n_iterations, converged = power_iteration(P, maxiter=100)
    assert_(not converged)
    assert_equal(n_iterations, 100)
    assert_allclose(pi, np.full(3, 1. / 3.))
    assert_allclose(stationary_residual(P, pi), 2. / 3.)


def test_periodic_chain_uniform_fixed_point():
    P = np.array([[0., 1.], [1., 0.]])
    pi, _, converged = power_iteration(P)
    assert_(converged)
    assert_allclose(pi, [0.5, 0.5])


def test_non_convergence_returns_last_iterate_with_warning():
    # slowly mixing chain
    P = np.array([[1. - 1e-6, 1e-6], [2e-6, 1. - 2e-6]])
    with pytest.warns(NotConvergedWarning):
        pi, n_iterations, converged = power_iteration(P, tol=1e-30, maxiter=5)
    assert_(not converged)
    assert_equal(n_iterations, 5)
    assert_allclose(pi.sum(), 1.)


def test_non_convergence_without_warning():
    P = np.array([[0.5, 0.5], [0.1, 0.9]])
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        pi = stationary_distribution(P, tol=0., maxiter=3, warn_not_converged=False)
    assert_(stationary_residual(P, pi) > 0)


def test_invalid_matrix(invalid_matrix):
    with assert_raises(InvalidMatrixError):
        stationary_distribution(invalid_matrix)


def test_invalid_maxiter():
    with assert_raises(ValueError):
        stationary_distribution(np.eye(2), maxiter=0)


def test_skip_input_check():
    # not row-stochastic, but iteration is still well defined
    pi = stationary_distribution([[0.5, 0.5], [0.5, 0.5 + 1e-6]], check_inputs=False, maxiter=10,
                                 warn_not_converged=False)
    assert_equal(pi.shape, (2,))


def test_negative_tolerance():
    P = np.array([[1. + 1e-7, -1e-7], [0.5, 0.5]])
    with assert_raises(InvalidMatrixError):
        stationary_distribution(P)
    pi = stationary_distribution(P, negative_tol=1e-6)
    assert_allclose(pi @ P, pi, atol=1e-9)
