"""
Base58 — текстовая форма для передачи frame через text-only каналы

Обёртка над библиотекой base58 (алфавит Bitcoin). Кодек не знает о
структуре frame, это чистое отображение bytes <-> str.
"""

import base58

from src.multikeypair.errors import InvalidMultikeypairError


def b58_encode(data: bytes) -> str:
    """Base58-строка для произвольных байт."""
    return base58.b58encode(data).decode("ascii")


def b58_decode(text: str) -> bytes:
    """
    Байты из Base58-строки.

    Пробельные символы по краям не допускаются (base58.b58decode молча
    отбрасывает их в конце строки).

    Raises:
        InvalidMultikeypairError: Строка содержит символы вне алфавита
    """
    if text != text.strip():
        raise InvalidMultikeypairError("Invalid base58 text: surrounding whitespace")
    try:
        return base58.b58decode(text)
    except ValueError as e:
        raise InvalidMultikeypairError(f"Invalid base58 text: {e}") from e
