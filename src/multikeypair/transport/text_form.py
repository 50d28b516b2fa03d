"""
Text form — передача frame через text-only каналы (Base58)

to_text не проверяет структуру (повреждённый frame тоже кодируется).
*_from_text декодирует текст и сразу проверяет структуру frame, возвращая
проверенные байты (не распакованную модель). Для модели — keypair_from_text
и recursivekey_from_text.
"""

import logging
from typing import Union

from src.multikeypair.domain.ciphers import CIPHERS, RECURSIVE_CIPHERS, CipherRegistry
from src.multikeypair.domain.keypair import Keypair, Multikeypair
from src.multikeypair.domain.recursivekey import Multirecursivekey, Recursivekey
from src.multikeypair.encoding.b58 import b58_encode
from src.multikeypair.errors import MultikeypairError

logger = logging.getLogger(__name__)


def to_text(frame: Union[Multikeypair, Multirecursivekey, bytes]) -> str:
    """Base58-форма frame."""
    return b58_encode(frame)


# =============================================================================
# MULTIKEYPAIR
# =============================================================================


def multikeypair_from_text(text: str, registry: CipherRegistry = CIPHERS) -> Multikeypair:
    """
    Base58-строка -> проверенный Multikeypair.

    Raises:
        InvalidMultikeypairError: Невалидный Base58 или структура frame
        UnknownCodeError: code не зарегистрирован
        BufferTooShortError / VarintOverflowError: Повреждён varint code
    """
    try:
        return Multikeypair.from_text(text, registry)
    except MultikeypairError as e:
        logger.debug("Rejected multikeypair text: %s", e)
        raise


def keypair_from_text(text: str, registry: CipherRegistry = CIPHERS) -> Keypair:
    """Base58-строка -> Keypair."""
    return multikeypair_from_text(text, registry).decode(registry)


# =============================================================================
# MULTIRECURSIVEKEY
# =============================================================================


def multirecursivekey_from_text(
    text: str,
    registry: CipherRegistry = RECURSIVE_CIPHERS,
    child_registry: CipherRegistry = CIPHERS,
) -> Multirecursivekey:
    """
    Base58-строка -> проверенный Multirecursivekey.

    Структура проверяется как Multirecursivekey (включая всех children).
    """
    try:
        return Multirecursivekey.from_text(text, registry, child_registry)
    except MultikeypairError as e:
        logger.debug("Rejected multirecursivekey text: %s", e)
        raise


def recursivekey_from_text(
    text: str,
    registry: CipherRegistry = RECURSIVE_CIPHERS,
    child_registry: CipherRegistry = CIPHERS,
) -> Recursivekey:
    """Base58-строка -> Recursivekey."""
    return multirecursivekey_from_text(text, registry, child_registry).decode(
        registry, child_registry
    )
