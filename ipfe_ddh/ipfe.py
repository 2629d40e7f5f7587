import logging
import operator
from typing import NamedTuple, Tuple

from .elgamal import ElGamalCiphertext, PKEClient
from .errors import DiscreteLogError, KeyNotDerivedError, LengthMismatchError
from .math_helper import discrete_log, mod_pow

logger = logging.getLogger(__name__)


class FunctionalSecretKey(NamedTuple):
    """sk_y = sum(y_i * x_i), kept unreduced, plus the y it was derived for."""
    sk_y: int
    y: Tuple[int, ...]


class FEInputCiphertext(NamedTuple):
    """Ct_0 = g^r and Ct_i = h_i^r * g^(x_i), all under one commitment r."""
    c0: int
    c1: Tuple[int, ...]


class KeypairInfo(NamedTuple):
    index: int
    public_key: int
    private_key: int


def _as_vector(vec, length, name):
    values = [operator.index(v) for v in vec]
    if len(values) != length:
        raise LengthMismatchError(name, len(values), length)
    return values


class FunctionalEncryptionScheme:
    """
    Inner product functional encryption under DDH, built on ElGamal.
    See Simple Functional Encryption Schemes for Inner Products (ABDP15), section 5.

    Setup is the constructor: each of the l coordinates gets its own ElGamal
    client and therefore its own (s_i, h_i = g^s_i). The master secret key is
    just the list of the s_i.

    The scheme holds at most one functional key at a time. decrypt() always
    recombines the ciphertext with the y of the latest key_derive(), so a key
    for another y decrypts to a wrong group element without raising.
    """

    def __init__(self, length, params):
        if length < 1:
            raise ValueError("length must be at least 1.")
        self.length = length
        self.params = params
        # commitment source and ElGamal functionality
        self._pke = PKEClient(params)
        self.clients = [PKEClient(params) for _ in range(length)]
        self.y = None
        self.sk = None
        logger.info("IPFE setup done with l=%d over %d-bit p", length, params.p.bit_length())

    @property
    def mpk(self):
        return tuple(client.h for client in self.clients)

    def key_derive(self, y):
        y = _as_vector(y, self.length, "y")
        sk_y = 0
        for y_i, client in zip(y, self.clients):
            sk_y += y_i * client.private_key
        self.y = tuple(y)
        self.sk = FunctionalSecretKey(sk_y, self.y)
        return self.sk

    def encrypt(self, x):
        x = _as_vector(x, self.length, "x")
        p, g = self.params.p, self.params.g

        r = self._pke.commit()
        ct0 = pow(g, r.r, p)

        ct = []
        for x_i, client in zip(x, self.clients):
            # messages are encoded as g^(x_i); the component's own c0 equals ct0
            gx_i = mod_pow(g, x_i, p)
            ct.append(self._pke.encrypt(gx_i, r, client).c1)

        return FEInputCiphertext(ct0, tuple(ct))

    def decrypt(self, ct, key=None):
        """Return g^<x,y> for the stored y."""
        if self.y is None:
            raise KeyNotDerivedError("no functional key derived; call key_derive first.")
        if key is None:
            key = self.sk
        sk_y = key.sk_y if isinstance(key, FunctionalSecretKey) else operator.index(key)

        p = self.params.p
        ct0 = self.params.validate_element(ct.c0, "c0")
        cts = [self.params.validate_element(c, "c1") for c in ct.c1]
        if len(cts) != self.length:
            raise LengthMismatchError("ciphertext", len(cts), self.length)

        # prod_i ct_i^{y_i}
        num = 1
        for ci, yi in zip(cts, self.y):
            num = (num * mod_pow(ci, yi, p)) % p

        return self._pke.decrypt(ElGamalCiphertext(ct0, num), sk_y)

    def recover_inner_product(self, element, bound=None, signed=False):
        """
        Discrete log of g^<x,y> base g, feasible only for small inner products.
        The search covers [0, bound], by default one full period of g.
        With signed=True results above ord(g) / 2 are read as negative.
        """
        p = self.params.p
        order = self.params.order if bound is None or signed else None
        if bound is None:
            bound = order - 1
        ip = discrete_log(self.params.g, self.params.validate_element(element, "element"), p, bound)
        if ip is None:
            raise DiscreteLogError("discrete log failed (increase prime or reduce message range).")

        if signed and ip > order // 2:
            ip -= order
        return ip

    def info(self):
        """(index, h_i, s_i) for every coordinate, after checking h_i == g^s_i."""
        out = []
        for i, client in enumerate(self.clients):
            client.check_keypair()
            out.append(KeypairInfo(i, client.h, client.private_key))
        return out
