r"""
Simulation and analysis of discrete-time, finite-state Markov chains.

.. currentmodule: markovsim

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    MarkovChainEngine
    Tolerances
"""
import logging

__version__ = "0.1.0"

from . import util
from . import numeric
from . import analysis
from . import markov
from . import data

from ._config import Tolerances
from ._engine import MarkovChainEngine

logging.getLogger(__name__).addHandler(logging.NullHandler())
