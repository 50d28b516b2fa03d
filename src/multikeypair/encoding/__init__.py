"""
Encoding — бинарные примитивы multikeypair

Varint (unsigned LEB128), вложенные length-prefixed frame и Base58.
Без знания о шифрах.
"""

# Varint
from src.multikeypair.encoding.varint import (
    MAX_UVARINT,
    MAX_UVARINT_LEN,
    decode_uvarint,
    pack_code,
    pack_len,
    pack_unsigned,
    unpack_code,
    unpack_len,
    unpack_unsigned,
    uvarint_size,
)

# Frame
from src.multikeypair.encoding.frame import (
    MAX_FIELD_LEN,
    MAX_FRAME_LEN,
    FrameBuilder,
    FrameReader,
    build_frame,
    read_frame,
)

# Base58
from src.multikeypair.encoding.b58 import b58_decode, b58_encode

__all__ = [
    # Varint
    "MAX_UVARINT",
    "MAX_UVARINT_LEN",
    "decode_uvarint",
    "pack_code",
    "pack_len",
    "pack_unsigned",
    "unpack_code",
    "unpack_len",
    "unpack_unsigned",
    "uvarint_size",
    # Frame
    "MAX_FIELD_LEN",
    "MAX_FRAME_LEN",
    "FrameBuilder",
    "FrameReader",
    "build_frame",
    "read_frame",
    # Base58
    "b58_decode",
    "b58_encode",
]
