import logging
from typing import NamedTuple

from .errors import KeypairIntegrityError
from .math_helper import inv_mod, mod_pow

logger = logging.getLogger(__name__)


class Commitment(NamedTuple):
    """One-shot encryption randomness r. Never reuse across encryptions."""
    r: int


class ElGamalCiphertext(NamedTuple):
    c0: int
    c1: int


class PKEClient:
    """ElGamal participant holding one keypair (x, h = g^x mod p)."""

    def __init__(self, params):
        self.params = params
        # randomly choose a private key in Z_p
        self._x = params.sample_uniform() % params.p
        self.h = pow(params.g, self._x, params.p)

    @property
    def public_key(self):
        return self.h

    @property
    def private_key(self):
        return self._x

    def commit(self):
        """Fresh r in Z_p for a single encryption."""
        return Commitment(self.params.sample_uniform() % self.params.p)

    def encrypt(self, msg, commitment, recipient):
        """
        ElGamal encryption of msg under recipient's public key with randomness r:
        c0 = g^r, c1 = h^r * msg (mod p).
        msg must already be a group element in [0, p).
        """
        p = self.params.p
        msg = self.params.validate_element(msg, "msg")
        c0 = pow(self.params.g, commitment.r, p)
        c1 = (pow(recipient.h, commitment.r, p) * msg) % p
        return ElGamalCiphertext(c0, c1)

    def decrypt(self, ciphertext, key=None):
        """
        Recover msg = c1 * (c0^key)^-1 mod p. Without key the client's own x is used.
        A key that does not match the ciphertext gives a wrong element, not an error.
        """
        p = self.params.p
        c0 = self.params.validate_element(ciphertext.c0, "c0")
        c1 = self.params.validate_element(ciphertext.c1, "c1")
        if key is None:
            key = self._x
        # shared secret g^(xr)
        s = mod_pow(c0, key, p)
        return (c1 * inv_mod(s, p)) % p

    def check_keypair(self):
        if pow(self.params.g, self._x, self.params.p) != self.h:
            raise KeypairIntegrityError("public key does not match private key.")

    def __repr__(self):
        return f"PKEClient(h={self.h})"
