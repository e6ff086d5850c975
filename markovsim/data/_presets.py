import numpy as np

from ..markov import ChainConfiguration, default_label


def weather():
    r""" Two-state weather chain.

    Sunny stays sunny with probability 0.8, Rainy stays rainy with probability 0.6. The chain starts in Sunny.
    Its stationary distribution is :math:`(2/3, 1/3)`.

    Returns
    -------
    config : markovsim.markov.ChainConfiguration
        The chain.
    """
    return ChainConfiguration(["Sunny", "Rainy"],
                              [[0.8, 0.2],
                               [0.4, 0.6]],
                              [1., 0.])


def web_navigation():
    r""" Three-state model of a visitor browsing a shop, starting at the home page.

    Returns
    -------
    config : markovsim.markov.ChainConfiguration
        The chain.
    """
    return ChainConfiguration(["Home", "Product", "Checkout"],
                              [[0.70, 0.25, 0.05],
                               [0.10, 0.75, 0.15],
                               [0.05, 0.10, 0.85]],
                              [1., 0., 0.])


def absorbing_game():
    r""" Game which is played until it is either won or lost. Win and Lose are absorbing states.

    Returns
    -------
    config : markovsim.markov.ChainConfiguration
        The chain.
    """
    return ChainConfiguration(["Play", "Win", "Lose"],
                              [[0.85, 0.10, 0.05],
                               [0.00, 1.00, 0.00],
                               [0.00, 0.00, 1.00]],
                              [1., 0., 0.])


def identity_chain(n_states: int = 3):
    r""" Chain in which every state is absorbing, a starting point for custom chains.

    Parameters
    ----------
    n_states : int, default=3
        Number of states.

    Returns
    -------
    config : markovsim.markov.ChainConfiguration
        The chain, starting in the first state.
    """
    if n_states < 1:
        raise ValueError(f"A chain needs at least one state, got {n_states}.")
    p0 = np.zeros(n_states)
    p0[0] = 1.
    return ChainConfiguration([default_label(i) for i in range(n_states)], np.eye(n_states), p0)


def preset(name: str):
    r""" Looks up a preset chain by name.

    Parameters
    ----------
    name : str
        One of ``'weather'``, ``'web'``, ``'absorbing'``, and ``'custom'``.

    Returns
    -------
    config : markovsim.markov.ChainConfiguration
        The chain.

    Examples
    --------
    >>> preset('absorbing').labels
    ('Play', 'Win', 'Lose')
    """
    try:
        factory = preset.presets[name]
    except KeyError:
        raise ValueError(f"Unknown preset '{name}', valid presets are {sorted(preset.presets.keys())}.") from None
    return factory()


preset.presets = {
    'weather': weather,
    'web': web_navigation,
    'absorbing': absorbing_game,
    'custom': identity_chain,
}
