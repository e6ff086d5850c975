import enum
import logging
from typing import Optional

import numpy as np

from .._config import Tolerances
from ..analysis import validate_transition_matrix
from ..numeric import normalize_vector, row_vector_times_matrix
from ..util.exceptions import InvalidMatrixError
from ..util.types import ensure_vector_for
from ._configuration import ChainConfiguration

log = logging.getLogger(__name__)


class SessionPhase(enum.Enum):
    r""" Phases of a simulation. A session without configuration is idle, after a reset it is ready and once
    a step was taken it is stepping. """
    IDLE = "idle"
    READY = "ready"
    STEPPING = "stepping"


class SimulationSession:
    r""" Deterministic propagation of a distribution through a Markov chain, :math:`p_{t+1} = p_t P`.

    The session owns the current distribution :math:`p` and the step counter :math:`t`. Only :meth:`reset`
    and :meth:`step` (and thereby :meth:`run_steps`) change them.

    Parameters
    ----------
    configuration : ChainConfiguration
        The chain to simulate. It can be replaced later on, see :attr:`configuration`.
    tolerances : Tolerances, optional, default=None
        Tolerances used to validate the transition matrix before every step. Defaults to :class:`Tolerances`.

    Examples
    --------
    >>> from markovsim.data import weather
    >>> session = SimulationSession(weather())
    >>> session.step()
    array([0.8, 0.2])
    >>> session.step()
    array([0.72, 0.28])
    >>> session.step_index
    2
    """

    def __init__(self, configuration: ChainConfiguration, tolerances: Optional[Tolerances] = None):
        self._configuration = configuration
        self.tolerances = tolerances if tolerances is not None else Tolerances()
        self._distribution = None
        self._step_index = 0
        self._history = []
        self.reset()

    @property
    def configuration(self) -> ChainConfiguration:
        r""" The simulated chain. Setting a configuration with the same number of states keeps the simulation
        progress, the new matrix takes effect with the next step. Otherwise the session is reset to the new
        initial distribution.

        :getter: Yields the configuration.
        :setter: Replaces the configuration.
        :type: ChainConfiguration
        """
        return self._configuration

    @configuration.setter
    def configuration(self, value: ChainConfiguration):
        resize = value.n_states != self._configuration.n_states
        self._configuration = value
        if resize:
            log.debug(f"Number of states changed to {value.n_states}, resetting session.")
            self.reset()

    @property
    def distribution(self) -> np.ndarray:
        r""" The current distribution :math:`p_t`.

        :type: (n,) ndarray, a copy
        """
        return self._distribution.copy()

    @property
    def step_index(self) -> int:
        r""" The step counter :math:`t`.

        :type: int
        """
        return self._step_index

    @property
    def trajectory(self) -> np.ndarray:
        r""" All distributions since the last reset, row :math:`t` holds :math:`p_t`.

        :type: (t+1, n) ndarray
        """
        return np.array(self._history)

    @property
    def phase(self) -> SessionPhase:
        r""" Either ready (no step since the last reset) or stepping.

        :type: SessionPhase
        """
        return SessionPhase.READY if self._step_index == 0 else SessionPhase.STEPPING

    def reset(self, initial_distribution=None) -> np.ndarray:
        r""" Sets :math:`p = p_0 / \sum p_0` and :math:`t = 0`. An initial distribution summing to zero yields an
        all-zero distribution. This always succeeds.

        Parameters
        ----------
        initial_distribution : (n,) array_like, optional, default=None
            The initial distribution, defaults to the one of the configuration.

        Returns
        -------
        p0 : (n,) ndarray
            The normalized initial distribution.
        """
        if initial_distribution is None:
            initial_distribution = self._configuration.initial_distribution
        p0 = ensure_vector_for(initial_distribution, self._configuration.transition_matrix)
        self._distribution = normalize_vector(p0)
        self._step_index = 0
        self._history = [self._distribution.copy()]
        return self.distribution

    def step(self) -> np.ndarray:
        r""" Propagates the current distribution by one step.

        The transition matrix is validated first. The product is not renormalized afterwards, a valid transition
        matrix conserves probability mass up to floating point error.

        Returns
        -------
        p : (n,) ndarray
            The new distribution :math:`p_{t+1}`.

        Raises
        ------
        InvalidMatrixError
            If the transition matrix is not row-stochastic. The session is left unchanged.
        DimensionMismatchError
            If the distribution does not match the transition matrix.
        """
        try:
            P = validate_transition_matrix(self._configuration.transition_matrix,
                                           tol=self.tolerances.row_sum_tol,
                                           negative_tol=self.tolerances.negative_tol)
        except InvalidMatrixError as e:
            log.warning(f"Refusing to step at t={self._step_index}: {e}")
            raise
        p = row_vector_times_matrix(self._distribution, P)
        self._distribution = p
        self._step_index += 1
        self._history.append(p.copy())
        log.debug(f"Step {self._step_index}: p={p}")
        return self.distribution

    def run_steps(self, k: int) -> np.ndarray:
        r""" Performs `k` steps, each one validated.

        Parameters
        ----------
        k : int
            Number of steps, non-negative.

        Returns
        -------
        p : (n,) ndarray
            The distribution after the last step.

        Raises
        ------
        InvalidMatrixError
            If the transition matrix is invalid. Steps are not taken.
        """
        if k < 0:
            raise ValueError(f"Number of steps must be non-negative, but was {k}.")
        for _ in range(k):
            self.step()
        return self.distribution
