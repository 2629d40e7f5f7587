import random

import pytest

from ipfe_ddh.group import GroupParameters
from ipfe_ddh.ipfe import FunctionalEncryptionScheme

# 2^61 - 1, large enough that random collisions never show up in tests
MERSENNE_61 = 2 ** 61 - 1


class ScriptedRandom(random.Random):
    """Hands out fixed getrandbits values first, then falls back to a seeded stream."""

    def __init__(self, values, seed=0):
        self._values = list(values)
        super().__init__(seed)

    def getrandbits(self, k):
        if self._values:
            return self._values.pop(0)
        return super().getrandbits(k)


@pytest.fixture
def demo_params():
    return GroupParameters.demo(rng=random.Random(1234))


@pytest.fixture
def big_params():
    return GroupParameters(MERSENNE_61, 3, rng=random.Random(99))


@pytest.fixture(scope="session")
def generated_params():
    return GroupParameters.generate(32, rng=random.Random(7), safe=True)


@pytest.fixture
def paper_scheme():
    # draws: base client key, s_0 = 5, s_1 = 9, commitment r = 7
    params = GroupParameters.demo(rng=ScriptedRandom([11, 5, 9, 7]))
    return FunctionalEncryptionScheme(2, params)
