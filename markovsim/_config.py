from typing import Mapping

from .base import Model


class Tolerances(Model):
    r""" Numerical tolerances used by the simulation and analysis engine.

    Parameters
    ----------
    row_sum_tol : float, default=1e-9
        Absolute tolerance on row sums when validating a transition matrix.
    convergence_tol : float, default=1e-10
        Stopping tolerance of the power method on the L1 distance of consecutive iterates.
    max_iter : int, default=20000
        Iteration cap of the power method.
    absorbing_tol : float, default=1e-12
        Per-entry tolerance when comparing a row against a standard basis vector.
    negative_tol : float, default=1e-12
        Negative matrix entries above `-negative_tol` are treated as floating point noise.

    Examples
    --------
    >>> tolerances = Tolerances.from_dict({"rowSumTol": 1e-6, "maxIter": 500})
    >>> tolerances.row_sum_tol, tolerances.max_iter, tolerances.convergence_tol
    (1e-06, 500, 1e-10)
    """

    #: Option names as supplied by an embedding layer, mapped to parameter names.
    option_names = {
        'rowSumTol': 'row_sum_tol',
        'convergenceTol': 'convergence_tol',
        'maxIter': 'max_iter',
        'absorbingTol': 'absorbing_tol',
        'negativeTol': 'negative_tol',
    }

    def __init__(self, row_sum_tol: float = 1e-9, convergence_tol: float = 1e-10, max_iter: int = 20000,
                 absorbing_tol: float = 1e-12, negative_tol: float = 1e-12):
        self.row_sum_tol = row_sum_tol
        self.convergence_tol = convergence_tol
        self.max_iter = max_iter
        self.absorbing_tol = absorbing_tol
        self.negative_tol = negative_tol

    @classmethod
    def from_dict(cls, options: Mapping) -> "Tolerances":
        r""" Creates tolerances from a mapping. Keys may be parameter names or the camelCase option names
        listed in :attr:`option_names`, missing keys take their default.

        Raises
        ------
        ValueError
            For unknown keys.
        """
        params = {}
        valid = set(cls.option_names.values())
        for key, value in options.items():
            name = cls.option_names.get(key, key)
            if name not in valid:
                raise ValueError(f"Unknown tolerance option '{key}', valid options are "
                                 f"{sorted(cls.option_names.keys())}.")
            params[name] = value
        return cls(**params)

    @property
    def row_sum_tol(self) -> float:
        r""" Row sum tolerance of the validator.

        :getter: Yields the tolerance.
        :setter: Sets the tolerance, must be non-negative.
        :type: float
        """
        return self._row_sum_tol

    @row_sum_tol.setter
    def row_sum_tol(self, value):
        self._row_sum_tol = _non_negative('row_sum_tol', value)

    @property
    def convergence_tol(self) -> float:
        r""" Stopping tolerance of the power method.

        :type: float
        """
        return self._convergence_tol

    @convergence_tol.setter
    def convergence_tol(self, value):
        self._convergence_tol = _non_negative('convergence_tol', value)

    @property
    def max_iter(self) -> int:
        r""" Iteration cap of the power method, at least one.

        :type: int
        """
        return self._max_iter

    @max_iter.setter
    def max_iter(self, value):
        value = int(value)
        if value < 1:
            raise ValueError(f"max_iter must be at least 1, but was {value}.")
        self._max_iter = value

    @property
    def absorbing_tol(self) -> float:
        r""" Tolerance of the absorbing state detector.

        :type: float
        """
        return self._absorbing_tol

    @absorbing_tol.setter
    def absorbing_tol(self, value):
        self._absorbing_tol = _non_negative('absorbing_tol', value)

    @property
    def negative_tol(self) -> float:
        r""" Noise tolerance for negative entries.

        :type: float
        """
        return self._negative_tol

    @negative_tol.setter
    def negative_tol(self, value):
        self._negative_tol = _non_negative('negative_tol', value)


def _non_negative(name, value) -> float:
    value = float(value)
    if not value >= 0:
        raise ValueError(f"{name} must be non-negative, but was {value}.")
    return value
