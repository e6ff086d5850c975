import asyncio

import numpy as np
import pytest
from numpy.testing import assert_, assert_equal, assert_allclose, assert_raises

from markovsim import MarkovChainEngine, Tolerances
from markovsim.markov import SessionPhase
from markovsim.util.exceptions import InvalidMatrixError, DimensionMismatchError, NotConvergedWarning


@pytest.fixture
def engine(weather_chain):
    engine = MarkovChainEngine()
    engine.configure_from(weather_chain)
    return engine


def test_unconfigured():
    engine = MarkovChainEngine()
    assert_equal(engine.phase, SessionPhase.IDLE)
    assert_(engine.configuration is None)
    with assert_raises(RuntimeError):
        engine.step()
    with assert_raises(RuntimeError):
        engine.compute_stationary()
    assert_equal(engine.check_absorbing(np.eye(2)), {0, 1})


def test_weather_scenario(engine):
    assert_equal(engine.phase, SessionPhase.READY)
    assert_(engine.validate())
    assert_allclose(engine.step(), [0.8, 0.2])
    assert_allclose(engine.step(), [0.72, 0.28])
    assert_equal(engine.phase, SessionPhase.STEPPING)
    result = engine.compute_stationary()
    assert_allclose(result.pi, [2. / 3., 1. / 3.], atol=1e-9)
    assert_(result.residual < 1e-9)
    assert_equal(engine.check_absorbing(), set())
    assert_equal(engine.reset(), [1., 0.])


def test_invalid_matrix_scenario(engine, invalid_matrix):
    engine.step()
    engine.configure(["Sunny", "Rainy"], invalid_matrix, [1, 0])
    assert_(not engine.validate())
    with assert_raises(InvalidMatrixError):
        engine.step()
    with assert_raises(InvalidMatrixError):
        engine.compute_stationary()
    assert_allclose(engine.session.distribution, [0.8, 0.2])
    assert_equal(engine.session.step_index, 1)


def test_validate_given_matrix(engine, invalid_matrix):
    assert_(not engine.validate(invalid_matrix))
    assert_(engine.validate(np.eye(4)))


def test_absorbing_scenario(absorbing_chain):
    engine = MarkovChainEngine()
    engine.configure_from(absorbing_chain)
    assert_equal(engine.check_absorbing(), {1, 2})
    assert_equal(engine.absorbing_labels(), ["Win", "Lose"])
    for _ in range(200):
        p = engine.step()
    assert_allclose(p, [0., 2. / 3., 1. / 3.], atol=1e-12)


def test_configure_mismatch_keeps_previous(engine, weather_chain):
    with assert_raises(DimensionMismatchError):
        engine.configure(["a", "b", "c"], np.eye(2), [1, 0])
    assert_(engine.configuration is weather_chain)


def test_configure_copies_input(engine):
    P = np.array([[0.5, 0.5], [0.5, 0.5]])
    engine.configure(["a", "b"], P, [1, 0])
    P[0, 0] = 5.
    assert_(engine.validate())


def test_configure_resize_resets(engine):
    engine.step()
    engine.configure_from(engine.configuration.add_state())
    assert_equal(engine.session.step_index, 0)
    assert_equal(engine.session.distribution, [1., 0., 0.])


def test_configure_reset(engine, weather_chain):
    engine.step()
    engine.configure_from(weather_chain.uniform_initial())
    assert_equal(engine.session.step_index, 1)
    engine.configure_from(weather_chain.uniform_initial(), reset=True)
    assert_equal(engine.session.step_index, 0)
    assert_equal(engine.session.distribution, [0.5, 0.5])


def test_independent_sessions(engine):
    other = engine.new_session()
    engine.step(other)
    engine.step(other)
    assert_equal(other.step_index, 2)
    assert_equal(engine.session.step_index, 0)
    engine.configure_from(engine.configuration.add_state())
    assert_equal(other.configuration.n_states, 2)


def test_tolerances_mapping():
    engine = MarkovChainEngine({"rowSumTol": 1e-3, "maxIter": 10})
    assert_equal(engine.tolerances.row_sum_tol, 1e-3)
    engine.configure(["a", "b"], [[0.8, 0.2005], [0.4, 0.6]], [1, 0])
    assert_(engine.validate())
    assert_allclose(engine.step(), [0.8, 0.2005])
    with assert_raises(ValueError):
        MarkovChainEngine({"nope": 1})


def test_not_converged_is_reported(engine):
    engine.tolerances.max_iter = 2
    engine.tolerances.convergence_tol = 0.
    with pytest.warns(NotConvergedWarning):
        result = engine.compute_stationary()
    assert_(not result.converged)
    assert_equal(result.n_iterations, 2)


def test_run_and_cancel(engine):
    ticks = []

    async def main():
        run = engine.run_start(max_steps=2000, delay_ms=0, on_tick=lambda p, t: ticks.append(t))
        with assert_raises(RuntimeError):
            engine.run_start()
        while len(ticks) < 3:
            await asyncio.sleep(0)
        engine.run_cancel()
        await run.wait()
        return run

    run = asyncio.run(main())
    assert_equal(run.stop_reason, 'cancelled')
    assert_equal(engine.session.step_index, len(ticks))
    assert_(len(ticks) < 2000)


def test_run_restart_after_finish(engine):
    async def main():
        first = engine.run_start(max_steps=2, delay_ms=0)
        await first.wait()
        second = engine.run_start(max_steps=4, delay_ms=0)
        await second.wait()
        return first, second

    first, second = asyncio.run(main())
    assert_equal(first.stop_reason, 'max_steps')
    assert_equal(second.n_ticks, 2)
    assert_equal(engine.session.step_index, 4)


def test_run_cancel_all(engine):
    other = engine.new_session()

    async def main():
        runs = [engine.run_start(delay_ms=10_000), engine.run_start(other, delay_ms=10_000)]
        await asyncio.sleep(0)
        engine.run_cancel_all()
        for run in runs:
            await run.wait()
        return runs

    runs = asyncio.run(main())
    for run in runs:
        assert_equal(run.stop_reason, 'cancelled')
        assert_equal(run.n_ticks, 1)


def test_run_cancel_without_run(engine):
    engine.run_cancel()


def test_run_cancel_before_first_tick(engine):
    async def main():
        run = engine.run_start(delay_ms=0)
        engine.run_cancel()
        await asyncio.sleep(0.01)
        return run

    run = asyncio.run(main())
    assert_equal(run.stop_reason, 'cancelled')
    assert_(not run.active)
    assert_equal(engine.session.step_index, 0)


def test_finished_runs_are_released(engine):
    other = engine.new_session()

    async def main():
        await engine.run_start(other, max_steps=1, delay_ms=0).wait()
        engine.run_start(max_steps=1, delay_ms=0)
        assert_(other not in engine._runs)
        assert_(engine.session in engine._runs)
        engine.run_cancel_all()

    asyncio.run(main())
