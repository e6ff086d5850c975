import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from ..base import Model
from ..numeric import normalize_rows, normalize_vector
from ..util.exceptions import DimensionMismatchError
from ..util.types import ensure_labels, ensure_transition_matrix_shape, ensure_vector_for

log = logging.getLogger(__name__)


def default_label(index: int) -> str:
    r""" Label given to the state at `index` if none is provided. """
    return f"State {index + 1}"


class ChainConfiguration(Model):
    r""" The state labels, transition matrix and initial distribution of a Markov chain as one value.

    The three parts always agree in the number of states :math:`n \geq 1`. A configuration is never modified in
    place: the arrays are copied on construction and exposed read-only, every editing operation returns a new
    configuration. This way a structural change (adding or removing a state) is atomic and callers never
    share mutable state with the engine.

    Parameters
    ----------
    labels : sequence of str
        Human-readable state labels, uniqueness is not required.
    transition_matrix : (n, n) array_like
        Transition matrix. It may transiently violate the row-stochastic property while being edited,
        operations which propagate probability mass validate it.
    initial_distribution : (n,) array_like
        Initial distribution, not required to be normalized.

    Raises
    ------
    DimensionMismatchError
        If the matrix is not square or labels / initial distribution do not have one entry per state.

    Examples
    --------
    >>> config = ChainConfiguration(["Sunny", "Rainy"], [[0.8, 0.2], [0.4, 0.6]], [1, 0])
    >>> config.add_state().labels
    ('Sunny', 'Rainy', 'State 3')
    """

    def __init__(self, labels: Sequence[str], transition_matrix, initial_distribution):
        transition_matrix = ensure_transition_matrix_shape(transition_matrix).copy()
        initial_distribution = ensure_vector_for(initial_distribution, transition_matrix).copy()
        self._labels = ensure_labels(labels, transition_matrix.shape[0])
        transition_matrix.setflags(write=False)
        initial_distribution.setflags(write=False)
        self._transition_matrix = transition_matrix
        self._initial_distribution = initial_distribution

    @property
    def labels(self) -> Tuple[str, ...]:
        r""" The state labels.

        :type: tuple of str
        """
        return self._labels

    @property
    def transition_matrix(self) -> np.ndarray:
        r""" The transition matrix.

        :type: (n, n) ndarray, read-only
        """
        return self._transition_matrix

    @property
    def initial_distribution(self) -> np.ndarray:
        r""" The initial distribution as entered, not necessarily normalized.

        :type: (n,) ndarray, read-only
        """
        return self._initial_distribution

    @property
    def n_states(self) -> int:
        r""" Number of states.

        :type: int
        """
        return self._transition_matrix.shape[0]

    def _replace(self, labels=None, transition_matrix=None, initial_distribution=None) -> "ChainConfiguration":
        return ChainConfiguration(
            self.labels if labels is None else labels,
            self.transition_matrix if transition_matrix is None else transition_matrix,
            self.initial_distribution if initial_distribution is None else initial_distribution
        )

    def _check_index(self, index: int) -> int:
        index = int(index)
        if not 0 <= index < self.n_states:
            raise DimensionMismatchError(f"State index {index} out of range for {self.n_states} states.")
        return index

    ################################################################################
    # Structural edits
    ################################################################################

    def add_state(self, label: Optional[str] = None) -> "ChainConfiguration":
        r""" Appends a state. Its row is a self-loop with probability one, all other rows get a zero
        transition into it and its initial probability is zero.

        Parameters
        ----------
        label : str, optional, default=None
            Label of the new state, defaults to ``"State {n+1}"``.

        Returns
        -------
        config : ChainConfiguration
            Configuration with :math:`n+1` states.
        """
        n = self.n_states
        P = np.zeros((n + 1, n + 1))
        P[:n, :n] = self.transition_matrix
        P[n, n] = 1.
        p0 = np.append(self.initial_distribution, 0.)
        labels = self.labels + (label if label else default_label(n),)
        return ChainConfiguration(labels, P, p0)

    def remove_state(self, index: Optional[int] = None) -> "ChainConfiguration":
        r""" Removes a state together with its row, column and initial probability.

        Parameters
        ----------
        index : int, optional, default=None
            The state to remove, defaults to the last state.

        Returns
        -------
        config : ChainConfiguration
            Configuration with :math:`n-1` states. Remaining rows are not renormalized.

        Raises
        ------
        ValueError
            If only one state is left.
        """
        if self.n_states <= 1:
            raise ValueError("Cannot remove the last remaining state.")
        index = self.n_states - 1 if index is None else self._check_index(index)
        keep = np.arange(self.n_states) != index
        labels = tuple(label for i, label in enumerate(self.labels) if i != index)
        return ChainConfiguration(labels, self.transition_matrix[np.ix_(keep, keep)],
                                  self.initial_distribution[keep])

    def rename_state(self, index: int, label: str) -> "ChainConfiguration":
        r""" Changes the label of a state, an empty label falls back to ``"State {index+1}"``. """
        index = self._check_index(index)
        labels = list(self.labels)
        labels[index] = label if label else default_label(index)
        return self._replace(labels=labels)

    ################################################################################
    # Value edits
    ################################################################################

    def set_transition(self, i: int, j: int, value: float) -> "ChainConfiguration":
        r""" Sets :math:`p_{ij}`. Non-finite or negative values are stored as zero.

        Returns
        -------
        config : ChainConfiguration
            The edited configuration.
        """
        i, j = self._check_index(i), self._check_index(j)
        P = self.transition_matrix.copy()
        P[i, j] = _sanitize(value)
        return self._replace(transition_matrix=P)

    def set_initial(self, j: int, value: float) -> "ChainConfiguration":
        r""" Sets the initial probability of state j. Non-finite or negative values are stored as zero. """
        j = self._check_index(j)
        p0 = self.initial_distribution.copy()
        p0[j] = _sanitize(value)
        return self._replace(initial_distribution=p0)

    def normalize_rows(self) -> "ChainConfiguration":
        r""" Scales each row of the transition matrix to sum to one, rows summing to zero become zero rows. """
        return self._replace(transition_matrix=normalize_rows(self.transition_matrix))

    def normalize_initial(self) -> "ChainConfiguration":
        r""" Scales the initial distribution to sum to one. """
        return self._replace(initial_distribution=normalize_vector(self.initial_distribution))

    def uniform_initial(self) -> "ChainConfiguration":
        r""" Replaces the initial distribution by the uniform distribution. """
        return self._replace(initial_distribution=np.full(self.n_states, 1. / self.n_states))

    def randomize(self, seed=None) -> "ChainConfiguration":
        r""" Replaces the transition matrix by a random row-stochastic matrix, each row drawn uniformly
        from :math:`[0, 1)^n` and normalized.

        Parameters
        ----------
        seed : int or numpy.random.Generator, optional, default=None
            Seed for reproducibility.
        """
        rng = np.random.default_rng(seed)
        return self._replace(transition_matrix=normalize_rows(rng.random((self.n_states, self.n_states))))


def _sanitize(value) -> float:
    value = float(value)
    if not np.isfinite(value) or value < 0:
        log.debug(f"Replacing invalid probability {value} by 0.")
        return 0.
    return value
