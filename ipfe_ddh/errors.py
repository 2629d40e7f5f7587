class IPFEError(Exception):
    """Base class for every error raised by ipfe_ddh."""


class LengthMismatchError(IPFEError, ValueError):
    """A vector or ciphertext does not have the scheme length l."""

    def __init__(self, name, got, expected):
        super().__init__(f"{name} length {got} does not match setup length {expected}.")
        self.name = name
        self.got = got
        self.expected = expected


class InvalidGroupElementError(IPFEError, ValueError):
    """An integer that should live in [0, p) does not."""


class KeypairIntegrityError(IPFEError, RuntimeError):
    """h != g^x mod p for a stored keypair."""


class ModularInverseUndefinedError(IPFEError, ArithmeticError):
    """gcd(a, m) != 1, so a has no inverse modulo m."""


class KeyNotDerivedError(IPFEError, RuntimeError):
    """decrypt() was called before any key_derive()."""


class DiscreteLogError(IPFEError, ValueError):
    """Baby-step giant-step did not find an exponent in range."""
