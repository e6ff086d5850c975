r"""
.. currentmodule: markovsim.markov

===============================================================================
Configuration and simulation
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    ChainConfiguration
    SimulationSession
    SessionPhase
    SimulationRun

===============================================================================
Stationary distribution
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    StationaryDistributionEstimator
    StationaryDistribution
"""
import logging

from ._configuration import ChainConfiguration, default_label
from ._session import SimulationSession, SessionPhase
from ._run import SimulationRun
from ._stationary import StationaryDistributionEstimator, StationaryDistribution

logging.getLogger(__name__).addHandler(logging.NullHandler())
