"""
Domain models: Keypair, Recursivekey и реестр шифров.
"""

from src.multikeypair.domain.ciphers import (
    BIP32,
    CIPHERS,
    DSA,
    ED25519,
    IDENTITY,
    RECURSIVE_CIPHERS,
    RSA,
    CipherRegistry,
)
from src.multikeypair.domain.keypair import (
    Keypair,
    Multikeypair,
    cast_keypair,
    decode,
    encode,
    encode_name,
)
from src.multikeypair.domain.recursivekey import (
    Multirecursivekey,
    Recursivekey,
    cast_recursivekey,
    recursive_decode,
    recursive_encode,
    recursive_encode_name,
)

__all__ = [
    # Ciphers
    "IDENTITY",
    "ED25519",
    "BIP32",
    "DSA",
    "RSA",
    "CIPHERS",
    "RECURSIVE_CIPHERS",
    "CipherRegistry",
    # Keypair
    "Keypair",
    "Multikeypair",
    "encode",
    "encode_name",
    "decode",
    "cast_keypair",
    # Recursivekey
    "Recursivekey",
    "Multirecursivekey",
    "recursive_encode",
    "recursive_encode_name",
    "recursive_decode",
    "cast_recursivekey",
]
