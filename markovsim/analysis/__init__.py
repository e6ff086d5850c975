r"""

==================
Chain analysis
==================

.. currentmodule:: markovsim.analysis

This module (:mod:`markovsim.analysis`) contains functions to analyze a discrete-time Markov chain, which is
specified with a row-stochastic transition matrix P.

Validation
==========

.. autosummary::
   :toctree: generated/
   :template: class_nomodule.rst

   is_row_stochastic - Non-negative entries and rows sum to one
   validate_transition_matrix - Raises if the matrix is not row-stochastic

Propagation
===========

.. autosummary::
   :toctree: generated/
   :template: class_nomodule.rst

   propagate - Distribution after k steps

Stationary distribution
=======================

.. autosummary::
   :toctree: generated/
   :template: class_nomodule.rst

   stationary_distribution - Fixed point of propagation via the power method
   stationary_residual - L1 residual of a candidate fixed point

Absorbing states
================

.. autosummary::
   :toctree: generated/
   :template: class_nomodule.rst

   absorbing_states - States whose transition row is the identity row

"""

from ._api import is_row_stochastic, validate_transition_matrix, absorbing_states
from ._api import propagate, stationary_distribution, stationary_residual
