r"""
.. currentmodule: markovsim.util

===============================================================================
Type utilities
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    types.ensure_array
    types.ensure_floating_array
    types.ensure_transition_matrix_shape
    types.ensure_vector_for
    types.ensure_labels

===============================================================================
Exceptions and warnings
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    exceptions.InvalidMatrixError
    exceptions.DimensionMismatchError
    exceptions.NotConvergedWarning

===============================================================================
Other utilities
===============================================================================
.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    callbacks.supports_progress_interface
    callbacks.ProgressCallback
    callbacks.StepProgressCallback
    callbacks.handle_progress_bar
"""

from . import types
from . import exceptions
from . import callbacks
