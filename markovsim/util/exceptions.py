class InvalidMatrixError(ValueError):
    r"""
    Raised when an operation that propagates probability mass is invoked with a matrix that is not
    row-stochastic, i.e., a row contains negative entries or does not sum to one.

    Parameters
    ----------
    message : str
        Description of the problem.
    row : int, optional, default=None
        Index of the first offending row if known.
    """

    def __init__(self, message, row=None):
        if row is not None:
            message = f"{message} (row {row})"
        super().__init__(message)
        self.row = row


class DimensionMismatchError(ValueError):
    r"""
    This error indicates that labels, transition matrix and distribution vectors do not agree in the number
    of states.
    """
    pass


class NotConvergedWarning(RuntimeWarning):
    r"""
    This warning indicates that some iterative procedure has not
    converged or reached the maximum number of iterations implemented
    as a safe guard to prevent arbitrary many iterations in loops with
    a conditional termination criterion.
    """
