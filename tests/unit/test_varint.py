"""
Тесты для модуля Varint

Проверяет:
1. Минимальную упаковку (unsigned LEB128)
2. Граничные значения uint64
3. BufferTooShortError / VarintOverflowError
4. Хелперы pack_code / pack_len
"""

import pytest

from src.multikeypair.encoding.varint import (
    MAX_UVARINT,
    decode_uvarint,
    pack_code,
    pack_len,
    pack_unsigned,
    unpack_code,
    unpack_len,
    unpack_unsigned,
    uvarint_size,
)
from src.multikeypair.errors import BufferTooShortError, VarintOverflowError


# =============================================================================
# PACK
# =============================================================================


class TestPackUnsigned:
    """Тесты для pack_unsigned"""

    def test_zero_is_single_zero_byte(self) -> None:
        assert pack_unsigned(0) == b"\x00"

    def test_single_byte_values(self) -> None:
        assert pack_unsigned(1) == b"\x01"
        assert pack_unsigned(0x11) == b"\x11"
        assert pack_unsigned(127) == b"\x7f"

    def test_multi_byte_values(self) -> None:
        """Продолжение выставляется старшим битом"""
        assert pack_unsigned(128) == b"\x80\x01"
        assert pack_unsigned(300) == b"\xac\x02"
        assert pack_unsigned(16384) == b"\x80\x80\x01"

    def test_max_uint64(self) -> None:
        assert pack_unsigned(MAX_UVARINT) == b"\xff" * 9 + b"\x01"

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            pack_unsigned(-1)

    def test_above_uint64_raises(self) -> None:
        with pytest.raises(VarintOverflowError):
            pack_unsigned(MAX_UVARINT + 1)

    def test_size_matches_packed_length(self) -> None:
        for value in (0, 127, 128, 16383, 16384, 2**32, MAX_UVARINT):
            assert uvarint_size(value) == len(pack_unsigned(value))


# =============================================================================
# UNPACK
# =============================================================================


class TestUnpackUnsigned:
    """Тесты для unpack_unsigned / decode_uvarint"""

    def test_known_encodings(self) -> None:
        assert unpack_unsigned(b"\x00") == 0
        assert unpack_unsigned(b"\x7f") == 127
        assert unpack_unsigned(b"\x80\x01") == 128
        assert unpack_unsigned(b"\xac\x02") == 300

    def test_max_uint64(self) -> None:
        assert unpack_unsigned(b"\xff" * 9 + b"\x01") == MAX_UVARINT

    def test_reports_consumed_bytes(self) -> None:
        """Байты после varint не читаются"""
        assert decode_uvarint(b"\xac\x02\xff") == (300, 2)

    def test_non_minimal_encoding_accepted(self) -> None:
        assert unpack_unsigned(b"\x81\x00") == 1

    def test_empty_buffer_too_short(self) -> None:
        with pytest.raises(BufferTooShortError):
            unpack_unsigned(b"")

    def test_unterminated_buffer_too_short(self) -> None:
        with pytest.raises(BufferTooShortError):
            unpack_unsigned(b"\x80")
        with pytest.raises(BufferTooShortError):
            unpack_unsigned(b"\x80" * 9)

    def test_ten_continuation_bytes_overflow(self) -> None:
        with pytest.raises(VarintOverflowError):
            unpack_unsigned(b"\xff" * 10)

    def test_eleven_bytes_overflow(self) -> None:
        with pytest.raises(VarintOverflowError):
            unpack_unsigned(b"\x80" * 10 + b"\x01")

    def test_tenth_byte_above_one_overflow(self) -> None:
        with pytest.raises(VarintOverflowError):
            unpack_unsigned(b"\xff" * 9 + b"\x02")

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            unpack_unsigned(b"")


# =============================================================================
# HELPERS
# =============================================================================


class TestFieldHelpers:
    """pack_code / pack_len — те же varint"""

    def test_code_helpers(self) -> None:
        assert pack_code(0x11) == b"\x11"
        assert unpack_code(pack_code(0x1234)) == 0x1234

    def test_len_helpers(self) -> None:
        assert pack_len(2) == b"\x02"
        assert unpack_len(pack_len(1000)) == 1000
