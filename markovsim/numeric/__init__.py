r"""
.. currentmodule: markovsim.numeric

===============================================================================
Row and vector primitives
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    is_square_matrix
    normalize_vector
    normalize_row
    normalize_rows
    row_vector_times_matrix
    l1_distance
"""
from ._utils import is_square_matrix, normalize_vector, normalize_row, normalize_rows, row_vector_times_matrix, \
    l1_distance
