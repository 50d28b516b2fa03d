"""
Varint — беззнаковые целые переменной длины (unsigned LEB128)

Каждый байт несёт 7 бит значения, старший бит = continuation.
Совместимо с multiformats uvarint для значений до 2**64 - 1.

Используется для cipher code и числа children в frame.
"""

from typing import Final, Tuple

from src.multikeypair.errors import BufferTooShortError, VarintOverflowError


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимальное представимое значение (uint64)
MAX_UVARINT: Final[int] = (1 << 64) - 1

# Максимальная длина varint для uint64 в байтах
MAX_UVARINT_LEN: Final[int] = 10


# =============================================================================
# PACK / UNPACK
# =============================================================================


def uvarint_size(value: int) -> int:
    """Количество байт, занимаемых value в минимальной varint-форме."""
    size = 1
    while value >= 0x80:
        value >>= 7
        size += 1
    return size


def pack_unsigned(value: int) -> bytes:
    """
    Упаковка неотрицательного целого в минимальный varint.

    Args:
        value: Значение в диапазоне [0, 2**64 - 1]

    Returns:
        Varint-байты (pack_unsigned(0) == b"\\x00")

    Raises:
        ValueError: Если value отрицательное
        VarintOverflowError: Если value не помещается в 64 бита
    """
    if value < 0:
        raise ValueError(f"Cannot pack negative value as uvarint: {value}")
    if value > MAX_UVARINT:
        raise VarintOverflowError(f"uvarint: value {value} exceeds 64 bits")

    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def decode_uvarint(data: bytes) -> Tuple[int, int]:
    """
    Декодирование ведущего varint из data.

    Байты после завершающего байта varint игнорируются.

    Args:
        data: Буфер, начинающийся с varint

    Returns:
        (значение, количество прочитанных байт)

    Raises:
        BufferTooShortError: Буфер закончился до завершающего байта
        VarintOverflowError: Значение больше 64 бит
    """
    value = 0
    shift = 0
    for i, byte in enumerate(data):
        # 10-й байт может нести только один бит и не может продолжаться
        if i == MAX_UVARINT_LEN - 1 and byte > 1:
            raise VarintOverflowError("uvarint: varint too big (max 64bit)")
        if byte < 0x80:
            return value | (byte << shift), i + 1
        value |= (byte & 0x7F) << shift
        shift += 7

    raise BufferTooShortError("uvarint: buffer too small")


def unpack_unsigned(data: bytes) -> int:
    """Значение ведущего varint из data (см. decode_uvarint)."""
    value, _ = decode_uvarint(data)
    return value


# =============================================================================
# ХЕЛПЕРЫ ДЛЯ ПОЛЕЙ FRAME
# =============================================================================


def pack_code(code: int) -> bytes:
    """Упаковка cipher code в varint."""
    return pack_unsigned(code)


def unpack_code(data: bytes) -> int:
    """Распаковка cipher code из varint."""
    return unpack_unsigned(data)


def pack_len(length: int) -> bytes:
    """Упаковка числа children в varint."""
    return pack_unsigned(length)


def unpack_len(data: bytes) -> int:
    """Распаковка числа children из varint."""
    return unpack_unsigned(data)
