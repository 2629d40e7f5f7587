import math
import random
from math import isqrt

from numba import njit, types
from numba.typed import Dict

from .errors import ModularInverseUndefinedError

# int64 products stay exact below this modulus
NUMBA_MAX_P = 2 ** 31

_SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


@njit
def mod_pow_numba(a, b, p):
    """Compute (a ** b) % p using binary exponentiation (Numba-friendly)."""
    result = 1
    a = a % p
    while b > 0:
        if b & 1:
            result = (result * a) % p
        a = (a * a) % p
        b >>= 1
    return result


@njit
def bsgs_numba(g, h, p, max_range):
    """Discrete log solver for p < 2**31. Returns -1 if not found."""
    m = int(math.ceil(math.sqrt(max_range))) + 1
    table = Dict.empty(key_type=types.int64, value_type=types.int64)
    e = 1
    for j in range(m):
        if e not in table:
            table[e] = j
        e = (e * g) % p
    factor = mod_pow_numba(g, m * (p - 2), p)  # g^-m mod p
    gamma = h % p
    for i in range(m + 1):
        if gamma in table:
            x = i * m + table[gamma]
            return x if x <= max_range else -1
        gamma = (gamma * factor) % p
    return -1


def egcd(a, m):
    """
    Extended Euclid.
    Returns (inv, coinv, gcd) with a * inv + m * coinv == gcd.
    """
    old_r, r = a, m
    old_s, s = 1, 0
    old_t, t = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
        old_t, t = t, old_t - q * t
    return old_s, old_t, old_r


def inv_mod(a, m):
    inv, _, gcd = egcd(a % m, m)
    if gcd != 1:
        raise ModularInverseUndefinedError(f"{a} has no inverse modulo {m} (gcd={gcd}).")
    return inv % m


def is_probable_prime(n, reps=50, rng=None):
    """Miller-Rabin primality test with `reps` random witnesses."""
    if n < 2:
        return False
    for q in _SMALL_PRIMES:
        if n % q == 0:
            return n == q
    rng = rng or random
    s, d = 0, n - 1
    while d % 2 == 0:
        s += 1
        d //= 2
    for _ in range(reps):
        a = rng.randrange(2, n - 1)
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def generate_prime(bits, reps=50, rng=None):
    """Sample bits-bit candidates until one is a probable prime with exactly `bits` bits."""
    rng = rng or random
    while True:
        p = rng.getrandbits(bits) | 1
        if p.bit_length() == bits and is_probable_prime(p, reps, rng):
            return p


def generate_safe_prime(bits, reps=50, rng=None):
    """Return (p, q) with p = 2q + 1, both probable primes, p exactly `bits` bits."""
    rng = rng or random
    while True:
        q = generate_prime(bits - 1, reps, rng)
        p = 2 * q + 1
        if p.bit_length() == bits and is_probable_prime(p, reps, rng):
            return p, q


def factor(n):
    """Distinct prime factors of n by trial division."""
    f = {}
    d = 2
    while d * d <= n:
        while n % d == 0:
            f[d] = f.get(d, 0) + 1
            n //= d
        d += 1 if d == 2 else 2
    if n > 1:
        f[n] = 1
    return list(f.keys())


def find_generator(p, factors=None):
    phi = p - 1
    pf = factors if factors is not None else factor(phi)
    for g in range(2, p):
        if all(pow(g, phi // q, p) != 1 for q in pf):
            return g
    raise RuntimeError("no generator found")


def bsgs(g, h, p, max_range=None):
    """Solve g^x = h (mod p) for x in [0, max_range] (returns None if not found)."""
    if max_range is None:
        max_range = p - 2
    m = isqrt(max_range) + 1
    # baby steps: g^j
    table = {}
    e = 1
    for j in range(m):
        table.setdefault(e, j)
        e = (e * g) % p
    # giant step factor: g^{-m}
    gm = pow(g, m * (p - 2), p)  # g^{-m} mod p
    y = h % p
    for i in range(m + 1):
        if y in table:
            x = i * m + table[y]
            return x if x <= max_range else None
        y = (y * gm) % p
    return None


def discrete_log(g, h, p, max_range=None):
    """bsgs, dispatched to the numba kernel when p fits in int64 arithmetic."""
    if max_range is None:
        max_range = p - 2
    if p < NUMBA_MAX_P:
        x = bsgs_numba(int(g), int(h), int(p), int(max_range))
        return None if x == -1 else int(x)
    return bsgs(g, h, p, max_range)


def mod_pow(base, exp, p):
    """pow(base, exp, p) where a negative exponent goes through inv_mod."""
    if exp < 0:
        return pow(inv_mod(base, p), -exp, p)
    return pow(base, exp, p)


def order_of(g, p, factors=None):
    """Multiplicative order of g mod prime p, from the prime factors of p - 1."""
    n = p - 1
    for q in (factors if factors is not None else factor(n)):
        while n % q == 0 and pow(g, n // q, p) == 1:
            n //= q
    return n
