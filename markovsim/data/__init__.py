r"""
.. currentmodule: markovsim.data

===============================================================================
Example chains
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    weather
    web_navigation
    absorbing_game
    identity_chain
    preset
"""

from ._presets import weather, web_navigation, absorbing_game, identity_chain, preset
