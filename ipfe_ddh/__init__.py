from .elgamal import Commitment, ElGamalCiphertext, PKEClient
from .errors import (
    DiscreteLogError,
    InvalidGroupElementError,
    IPFEError,
    KeyNotDerivedError,
    KeypairIntegrityError,
    LengthMismatchError,
    ModularInverseUndefinedError,
)
from .group import GroupParameters
from .ipfe import FEInputCiphertext, FunctionalEncryptionScheme, FunctionalSecretKey, KeypairInfo

__version__ = "0.1.0"

__all__ = [
    "Commitment",
    "DiscreteLogError",
    "ElGamalCiphertext",
    "FEInputCiphertext",
    "FunctionalEncryptionScheme",
    "FunctionalSecretKey",
    "GroupParameters",
    "InvalidGroupElementError",
    "IPFEError",
    "KeyNotDerivedError",
    "KeypairInfo",
    "KeypairIntegrityError",
    "LengthMismatchError",
    "ModularInverseUndefinedError",
    "PKEClient",
]
