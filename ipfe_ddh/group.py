import logging
import operator
import random
import threading

from .errors import InvalidGroupElementError
from .math_helper import (
    factor,
    find_generator,
    generate_prime,
    generate_safe_prime,
    is_probable_prime,
    order_of,
)

logger = logging.getLogger(__name__)

# demo pair from the reference scheme; far too small for real use
DEMO_P = 73
DEMO_G = 15


class GroupParameters:
    """
    Common knowledge shared by every ElGamal client: the prime p, the
    generator g of (a subgroup of) Z_p^*, and the randomness source.

    p and g are read-only after construction. The rng is the only shared
    mutable state; sampling goes through a lock so clients may be built
    or commit from several threads.
    """

    def __init__(self, p, g, rng=None, bit_length=64, reps=50, factors=None):
        p, g = operator.index(p), operator.index(g)
        if not is_probable_prime(p, reps):
            raise ValueError(f"p={p} is not prime.")
        if not 1 <= g < p:
            raise InvalidGroupElementError(f"generator g={g} is not in [1, {p}).")
        if bit_length < 1:
            raise ValueError("bit_length must be positive.")
        self._p = p
        self._g = g
        self._bit_length = int(bit_length)
        self._rng = rng if rng is not None else random.SystemRandom()
        self._lock = threading.Lock()
        # prime factors of p - 1, when known; order is computed on first use
        self._factors = list(factors) if factors is not None else None
        self._order = None
        logger.debug("group parameters: %d-bit p, bit_length=%d", p.bit_length(), self._bit_length)

    @property
    def p(self):
        return self._p

    @property
    def g(self):
        return self._g

    @property
    def bit_length(self):
        return self._bit_length

    @property
    def order(self):
        """Order of g. Factors p - 1 by trial division unless the factors were given."""
        if self._order is None:
            self._order = order_of(self._g, self._p, self._factors)
        return self._order

    def sample_uniform(self, bit_length=None):
        """Uniform integer in [0, 2^bit_length)."""
        with self._lock:
            return self._rng.getrandbits(self._bit_length if bit_length is None else bit_length)

    def validate_element(self, value, name="value"):
        """Return value as int, rejecting anything outside [0, p)."""
        value = operator.index(value)
        if not 0 <= value < self._p:
            raise InvalidGroupElementError(f"{name}={value} is not in [0, {self._p}).")
        return value

    def __eq__(self, other):
        if not isinstance(other, GroupParameters):
            return NotImplemented
        return (self._p, self._g) == (other._p, other._g)

    def __hash__(self):
        return hash((self._p, self._g))

    def __repr__(self):
        return f"GroupParameters(p={self._p}, g={self._g}, bit_length={self._bit_length})"

    @classmethod
    def demo(cls, rng=None, bit_length=64):
        return cls(DEMO_P, DEMO_G, rng=rng, bit_length=bit_length)

    @classmethod
    def generate(cls, bit_length, reps=50, rng=None, safe=False):
        """
        Production path: draw a bit_length-bit probable prime p and a generator
        of Z_p^*. With safe=True p = 2q + 1, so the factors of p - 1 are known
        without trial division; otherwise p - 1 is factored directly, which is
        only practical for small bit lengths.
        """
        rng = rng if rng is not None else random.SystemRandom()
        if safe:
            p, q = generate_safe_prime(bit_length, reps, rng)
            factors = [2, q]
        else:
            p = generate_prime(bit_length, reps, rng)
            factors = factor(p - 1)
        g = find_generator(p, factors)
        logger.info("generated %d-bit group (safe=%s), g=%d", bit_length, safe, g)
        return cls(p, g, rng=rng, bit_length=bit_length, reps=reps, factors=factors)
