import logging
from typing import Dict, List, Optional, Sequence, Set

import numpy as np

from ._config import Tolerances
from .analysis import is_row_stochastic, absorbing_states
from .markov import ChainConfiguration, SimulationSession, SessionPhase, SimulationRun, \
    StationaryDistributionEstimator, StationaryDistribution
from .util.exceptions import InvalidMatrixError

log = logging.getLogger(__name__)


class MarkovChainEngine:
    r""" Simulation and analysis engine for a discrete-time, finite-state Markov chain.

    This is the entry point for a presentation layer: it holds the current :class:`ChainConfiguration
    <markovsim.markov.ChainConfiguration>`, a default :class:`SimulationSession
    <markovsim.markov.SimulationSession>` and the active runs, and offers the analyses. All methods are synchronous
    except for the run loop, which is an :mod:`asyncio` task.

    Parameters
    ----------
    tolerances : Tolerances or mapping, optional, default=None
        Numerical tolerances. A mapping is converted with :meth:`Tolerances.from_dict`.

    Examples
    --------
    >>> engine = MarkovChainEngine()
    >>> engine.configure(["Play", "Win", "Lose"], [[0.85, 0.1, 0.05], [0, 1, 0], [0, 0, 1]], [1, 0, 0])
    >>> engine.absorbing_labels()
    ['Win', 'Lose']
    >>> engine.step()
    array([0.85, 0.1 , 0.05])
    """

    def __init__(self, tolerances=None):
        if tolerances is None:
            tolerances = Tolerances()
        elif not isinstance(tolerances, Tolerances):
            tolerances = Tolerances.from_dict(tolerances)
        self.tolerances = tolerances
        self._configuration: Optional[ChainConfiguration] = None
        self._session: Optional[SimulationSession] = None
        self._runs: Dict[SimulationSession, SimulationRun] = {}

    @property
    def configuration(self) -> Optional[ChainConfiguration]:
        r""" The current configuration, None before :meth:`configure` was called.

        :type: ChainConfiguration or None
        """
        return self._configuration

    @property
    def session(self) -> Optional[SimulationSession]:
        r""" The default session, None before :meth:`configure` was called.

        :type: SimulationSession or None
        """
        return self._session

    @property
    def phase(self) -> SessionPhase:
        r""" Phase of the default session, idle if not configured.

        :type: SessionPhase
        """
        return SessionPhase.IDLE if self._session is None else self._session.phase

    def configure(self, labels: Sequence[str], transition_matrix, initial_distribution, reset: bool = False):
        r""" Atomically replaces labels, transition matrix and initial distribution.

        The inputs are copied. The engine's session follows the new configuration; it is reset if the number
        of states changed or if `reset` is set, otherwise a matrix edit takes effect with its next step.

        Parameters
        ----------
        labels : sequence of str
            State labels.
        transition_matrix : (n, n) array_like
            Transition matrix, validated only when used.
        initial_distribution : (n,) array_like
            Initial distribution.
        reset : bool, default=False
            Whether to reset the session to the new initial distribution.

        Raises
        ------
        DimensionMismatchError
            If the three parts do not agree in the number of states. The previous configuration is kept.
        """
        self.configure_from(ChainConfiguration(labels, transition_matrix, initial_distribution), reset=reset)

    def configure_from(self, configuration: ChainConfiguration, reset: bool = False):
        r""" Same as :meth:`configure` for a ready-made configuration, e.g., one of :mod:`markovsim.data`. """
        self._configuration = configuration
        if self._session is None:
            self._session = SimulationSession(configuration, self.tolerances)
        else:
            self._session.configuration = configuration
            if reset:
                self._session.reset()
        log.debug(f"Configured chain with {configuration.n_states} states.")

    def new_session(self) -> SimulationSession:
        r""" Creates an independent session for the current configuration. It is not updated by later calls to
        :meth:`configure`. """
        return SimulationSession(self._require_configuration(), self.tolerances)

    def _require_configuration(self) -> ChainConfiguration:
        if self._configuration is None:
            raise RuntimeError("Engine is not configured, call configure() first.")
        return self._configuration

    def _resolve(self, session: Optional[SimulationSession]) -> SimulationSession:
        self._require_configuration()
        return self._session if session is None else session

    def _matrix(self, P) -> np.ndarray:
        return self._require_configuration().transition_matrix if P is None else P

    ################################################################################
    # Simulation
    ################################################################################

    def validate(self, transition_matrix=None) -> bool:
        r""" Whether the given matrix (default: the configured one) is row-stochastic. """
        return is_row_stochastic(self._matrix(transition_matrix), tol=self.tolerances.row_sum_tol,
                                 negative_tol=self.tolerances.negative_tol)

    def reset(self, session: Optional[SimulationSession] = None) -> np.ndarray:
        r""" Resets a session (default: the engine's session) to the configured initial distribution. """
        return self._resolve(session).reset()

    def step(self, session: Optional[SimulationSession] = None) -> np.ndarray:
        r""" Advances a session (default: the engine's session) by one step.

        Returns
        -------
        p : (n,) ndarray
            The new distribution.

        Raises
        ------
        InvalidMatrixError
            If the transition matrix is not row-stochastic, the session is left unchanged.
        """
        return self._resolve(session).step()

    def run_start(self, session: Optional[SimulationSession] = None, max_steps: int = 200, delay_ms=100,
                  on_tick=None, progress=None) -> SimulationRun:
        r""" Starts a cooperative run on the running event loop, see :class:`SimulationRun
        <markovsim.markov.SimulationRun>` for the parameters.

        Returns
        -------
        run : SimulationRun
            The started run.

        Raises
        ------
        RuntimeError
            If the session already has an active run, or there is no running event loop.
        """
        session = self._resolve(session)
        self._runs = {s: r for s, r in self._runs.items() if r.active}
        if session in self._runs:
            raise RuntimeError("The session already has an active run, cancel it first.")
        run = SimulationRun(session, max_steps=max_steps, delay_ms=delay_ms, on_tick=on_tick, progress=progress)
        run.start()
        self._runs[session] = run
        return run

    def run_cancel(self, session: Optional[SimulationSession] = None):
        r""" Cancels the run of a session (default: the engine's session), if any. """
        session = self._resolve(session)
        run = self._runs.pop(session, None)
        if run is not None:
            run.cancel()

    def run_cancel_all(self):
        r""" Cancels all runs, e.g., when the consuming surface becomes inactive. """
        for session in list(self._runs.keys()):
            self.run_cancel(session)

    ################################################################################
    # Analysis
    ################################################################################

    def compute_stationary(self, transition_matrix=None) -> StationaryDistribution:
        r""" Approximates the stationary distribution with the power method.

        Parameters
        ----------
        transition_matrix : (n, n) array_like, optional, default=None
            The matrix, defaults to the configured one.

        Returns
        -------
        result : StationaryDistribution
            Stationary vector with residual. Non-convergence is reported in the result, it is not an error.

        Raises
        ------
        InvalidMatrixError
            If the transition matrix is not row-stochastic.
        """
        estimator = StationaryDistributionEstimator(tol=self.tolerances.convergence_tol,
                                                    maxiter=self.tolerances.max_iter,
                                                    row_sum_tol=self.tolerances.row_sum_tol,
                                                    negative_tol=self.tolerances.negative_tol)
        try:
            return estimator.fit_fetch(self._matrix(transition_matrix))
        except InvalidMatrixError as e:
            log.warning(f"Refusing to compute stationary distribution: {e}")
            raise

    def check_absorbing(self, transition_matrix=None) -> Set[int]:
        r""" Indices of absorbing states of the given matrix (default: the configured one). """
        return absorbing_states(self._matrix(transition_matrix), tol=self.tolerances.absorbing_tol)

    def absorbing_labels(self) -> List[str]:
        r""" Labels of the absorbing states of the configured chain in state order. """
        configuration = self._require_configuration()
        return [configuration.labels[i] for i in sorted(self.check_absorbing())]
