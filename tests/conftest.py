# pytest specific configuration file containing eg fixtures.
import os

import numpy as np
import pytest

from markovsim.data import weather, absorbing_game


@pytest.fixture
def fixed_seed():
    np.random.seed(42)
    yield
    new_seed = int.from_bytes(os.urandom(16), 'big') % (2 ** 32 - 1)
    np.random.seed(new_seed)


@pytest.fixture
def weather_chain():
    return weather()


@pytest.fixture
def absorbing_chain():
    return absorbing_game()


@pytest.fixture
def invalid_matrix():
    # first row sums to 1.1
    return np.array([[0.5, 0.6], [0.4, 0.6]])
