"""
multikeypair — самоописывающее бинарное кодирование ключевого материала

Сырые байты private/public (или master key с производными children)
помечаются cipher code и упаковываются в один length-prefixed frame.
Получатель восстанавливает байты и тип шифра без внешнего контекста.
"""

from src.multikeypair.domain import (
    CIPHERS,
    RECURSIVE_CIPHERS,
    CipherRegistry,
    Keypair,
    Multikeypair,
    Multirecursivekey,
    Recursivekey,
    cast_keypair,
    cast_recursivekey,
    decode,
    encode,
    encode_name,
    recursive_decode,
    recursive_encode,
    recursive_encode_name,
)
from src.multikeypair.errors import (
    BufferTooShortError,
    FrameTooLargeError,
    InvalidFrameError,
    InvalidMultikeypairError,
    MultikeypairError,
    UnknownCodeError,
    VarintOverflowError,
)
from src.multikeypair.transport import (
    keypair_from_text,
    multikeypair_from_text,
    multirecursivekey_from_text,
    recursivekey_from_text,
    to_text,
)

__all__ = [
    # Registry
    "CIPHERS",
    "RECURSIVE_CIPHERS",
    "CipherRegistry",
    # Models
    "Keypair",
    "Multikeypair",
    "Recursivekey",
    "Multirecursivekey",
    # Codec
    "encode",
    "encode_name",
    "decode",
    "cast_keypair",
    "recursive_encode",
    "recursive_encode_name",
    "recursive_decode",
    "cast_recursivekey",
    # Text form
    "to_text",
    "multikeypair_from_text",
    "keypair_from_text",
    "multirecursivekey_from_text",
    "recursivekey_from_text",
    # Errors
    "MultikeypairError",
    "UnknownCodeError",
    "InvalidFrameError",
    "InvalidMultikeypairError",
    "FrameTooLargeError",
    "BufferTooShortError",
    "VarintOverflowError",
]
