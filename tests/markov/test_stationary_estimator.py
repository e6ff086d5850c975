import numpy as np
import pytest
from numpy.testing import assert_, assert_equal, assert_allclose, assert_raises

from markovsim.markov import StationaryDistributionEstimator, StationaryDistribution
from markovsim.util.exceptions import InvalidMatrixError, NotConvergedWarning


def test_weather(weather_chain):
    estimator = StationaryDistributionEstimator()
    assert_(not estimator.has_model)
    model = estimator.fit(weather_chain.transition_matrix).fetch_model()
    assert_(estimator.has_model)
    assert_(isinstance(model, StationaryDistribution))
    assert_allclose(model.pi, [2. / 3., 1. / 3.], atol=1e-9)
    assert_(model.converged)
    assert_(model.residual < 1e-9)
    assert_(0 < model.n_iterations < 20000)


def test_fit_fetch_yields_new_models(weather_chain):
    estimator = StationaryDistributionEstimator()
    m1 = estimator.fit_fetch(weather_chain.transition_matrix)
    m2 = estimator.fit_fetch(np.eye(2))
    assert_(m1 is not m2)
    assert_allclose(m1.pi, [2. / 3., 1. / 3.], atol=1e-9)
    assert_equal(m2.pi, [0.5, 0.5])


def test_invalid_matrix_keeps_model(weather_chain, invalid_matrix):
    estimator = StationaryDistributionEstimator()
    model = estimator.fit_fetch(weather_chain.transition_matrix)
    with assert_raises(InvalidMatrixError):
        estimator.fit(invalid_matrix)
    assert_(estimator.fetch_model() is model)


def test_input_not_modified(weather_chain):
    P = np.array(weather_chain.transition_matrix)
    StationaryDistributionEstimator().fit(P)
    assert_(P.flags.writeable)
    assert_equal(P, weather_chain.transition_matrix)


def test_not_converged():
    P = np.array([[0., 1., 0.], [.5, 0., .5], [0., 1., 0.]])
    with pytest.warns(NotConvergedWarning):
        model = StationaryDistributionEstimator(maxiter=50).fit_fetch(P)
    assert_(not model.converged)
    assert_equal(model.n_iterations, 50)
    assert_allclose(model.residual, 2. / 3.)


def test_params():
    estimator = StationaryDistributionEstimator(tol=1e-6)
    assert_equal(estimator.get_params()['tol'], 1e-6)
    estimator.set_params(maxiter=10)
    assert_equal(estimator.maxiter, 10)


def test_format():
    model = StationaryDistribution(np.array([0.25, 0.75]), 3.5e-12, 10, True)
    lines = model.format().splitlines()
    assert_equal(lines[0], "Stationary distribution (power method): [0.250000, 0.750000]")
    assert_equal(lines[1], "L1 error ||πP - π||₁ ≈ 3.50e-12")
