"""
Keypair — модель пары ключей и кодек Multikeypair

Immutable Pydantic модель (frozen=True) с сырыми байтами private/public и
cipher code. Имя шифра выводится из code через реестр.

Формат Multikeypair:
    u24_len( u16_len(varint(code)) u16_len(private) u16_len(public) )

Порядок проверок при декодировании:
1. Структура frame (внешняя длина, ровно три поля, без хвоста)
2. Varint code (BufferTooShortError / VarintOverflowError как есть)
3. Членство code в реестре (UnknownCodeError)
"""

import logging
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationInfo, computed_field, model_validator

from src.multikeypair.contracts import validate_keypair_document
from src.multikeypair.domain.ciphers import CIPHERS, CipherRegistry
from src.multikeypair.encoding.b58 import b58_decode, b58_encode
from src.multikeypair.encoding.frame import FrameBuilder, FrameReader
from src.multikeypair.encoding.varint import pack_code, unpack_code
from src.multikeypair.errors import (
    InvalidFrameError,
    InvalidMultikeypairError,
    UnknownCodeError,
)

logger = logging.getLogger(__name__)

# Количество полей в Multikeypair: code, private, public
KEYPAIR_FIELDS = 3


def resolve_cipher_name(
    data: Any, info: ValidationInfo, default: CipherRegistry
) -> Any:
    """Name из реестра по code; ValueError если переданный name с ним расходится."""
    if not isinstance(data, dict) or not isinstance(data.get("code"), int):
        return data

    registry = (info.context or {}).get("registry", default)
    expected = registry.codes.get(data["code"], "")
    name = data.get("name")
    if not name:
        return {**data, "name": expected}
    if name != expected:
        raise ValueError(
            f"name {name!r} does not match code {data['code']:#x} ({expected!r})"
        )
    return data


# =============================================================================
# MULTIKEYPAIR (BINARY FRAME)
# =============================================================================


class Multikeypair(bytes):
    """
    Сериализованная форма Keypair.

    Непрозрачная последовательность байт; сравнение побайтовое.
    """

    def decode(self, registry: CipherRegistry = CIPHERS) -> "Keypair":
        """Распаковка в Keypair."""
        return decode(self, registry)

    def to_text(self) -> str:
        """Base58-форма frame (без проверки структуры)."""
        return b58_encode(self)

    @classmethod
    def from_text(cls, text: str, registry: CipherRegistry = CIPHERS) -> "Multikeypair":
        """
        Base58-строка -> проверенный Multikeypair.

        Raises:
            InvalidMultikeypairError: Невалидный Base58 или структура frame
            UnknownCodeError: code не зарегистрирован
        """
        return cast_keypair(b58_decode(text), registry)


# =============================================================================
# KEYPAIR MODEL
# =============================================================================


class Keypair(BaseModel):
    """
    Пара ключей, распакованная для удобного доступа.

    name всегда соответствует code: если не передан, берётся из CIPHERS
    (пустая строка для незарегистрированного code), противоречащий code
    name отклоняется. Кодек передаёт свой реестр через context.
    """

    code: int = Field(..., ge=0, description="Cipher code")
    name: str = Field("", description="Имя шифра (выводится из code)")
    private: bytes = Field(b"", description="Сырые байты private key")
    public: bytes = Field(b"", description="Сырые байты public key")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def resolve_name(cls, data: Any, info: ValidationInfo) -> Any:
        """
        Согласование name с code.

        Реестр берётся из context ("registry"), по умолчанию CIPHERS.
        Отсутствующий name заполняется, противоречащий code отклоняется.
        """
        return resolve_cipher_name(data, info, CIPHERS)

    @computed_field
    @property
    def private_length(self) -> int:
        return len(self.private)

    @computed_field
    @property
    def public_length(self) -> int:
        return len(self.public)

    def encode(self, registry: CipherRegistry = CIPHERS) -> Multikeypair:
        """Упаковка в Multikeypair."""
        return encode(self.private, self.public, self.code, registry)

    def to_document(self) -> Dict[str, Any]:
        """
        JSON-документ keypair (ключи в Base58).

        Соответствует схеме contracts/schema/keypair.json.
        """
        return {
            "code": self.code,
            "name": self.name,
            "private": b58_encode(self.private),
            "public": b58_encode(self.public),
            "private_length": self.private_length,
            "public_length": self.public_length,
        }

    @classmethod
    def from_document(
        cls, document: Dict[str, Any], registry: CipherRegistry = CIPHERS
    ) -> "Keypair":
        """
        Восстановление Keypair из JSON-документа.

        Raises:
            jsonschema.ValidationError: Документ не соответствует схеме
            UnknownCodeError: code не зарегистрирован
            ValueError: name или длины не согласованы с данными
        """
        validate_keypair_document(document)

        name = registry.name_of(document["code"])
        if document["name"] != name:
            raise ValueError(
                f"Document name {document['name']!r} does not match code "
                f"{document['code']:#x} ({name!r})"
            )

        private = b58_decode(document["private"])
        public = b58_decode(document["public"])
        if document["private_length"] != len(private):
            raise ValueError(
                f"private_length {document['private_length']} != {len(private)}"
            )
        if document["public_length"] != len(public):
            raise ValueError(
                f"public_length {document['public_length']} != {len(public)}"
            )

        return cls.model_validate(
            {"code": document["code"], "name": name, "private": private, "public": public},
            context={"registry": registry},
        )


# =============================================================================
# ENCODE
# =============================================================================


def build_keypair_frame(private: bytes, public: bytes, code: int) -> bytes:
    """
    Упаковка key material и code в frame без проверки реестра.

    Raises:
        FrameTooLargeError: Ключ длиннее 65535 байт
    """
    return (
        FrameBuilder()
        .add_field(pack_code(code))
        .add_field(private)
        .add_field(public)
        .build()
    )


def encode(
    private: bytes, public: bytes, code: int, registry: CipherRegistry = CIPHERS
) -> Multikeypair:
    """
    Упаковка пары ключей в Multikeypair.

    Args:
        private: Сырые байты private key (0-65535)
        public: Сырые байты public key (0-65535)
        code: Cipher code
        registry: Реестр для проверки code

    Raises:
        UnknownCodeError: code не зарегистрирован
        FrameTooLargeError: Ключ длиннее 65535 байт
    """
    registry.validate(code)
    return Multikeypair(build_keypair_frame(private, public, code))


def encode_name(
    private: bytes, public: bytes, name: str, registry: CipherRegistry = CIPHERS
) -> Multikeypair:
    """Упаковка пары ключей с указанием шифра по имени."""
    return encode(private, public, registry.code_of(name), registry)


# =============================================================================
# DECODE
# =============================================================================


def decode(data: bytes, registry: CipherRegistry = CIPHERS) -> Keypair:
    """
    Распаковка Multikeypair в Keypair.

    Args:
        data: Ровно один frame, без лишних байт
        registry: Реестр для проверки code

    Returns:
        Keypair с независимыми копиями байт

    Raises:
        InvalidMultikeypairError: Структура frame повреждена
        BufferTooShortError: Поле code содержит незавершённый varint
        VarintOverflowError: Code больше 64 бит
        UnknownCodeError: Структура валидна, но code не зарегистрирован
    """
    try:
        reader = FrameReader(data)
        code_field, private, public = reader.read_fields(KEYPAIR_FIELDS)
        reader.expect_end()
    except InvalidFrameError as e:
        logger.debug("Rejected multikeypair: %s", e)
        raise InvalidMultikeypairError(f"input isn't valid multikeypair: {e}") from e

    code = unpack_code(code_field)
    try:
        name = registry.name_of(code)
    except UnknownCodeError:
        logger.debug("Rejected multikeypair with unknown code %#x", code)
        raise

    return Keypair.model_validate(
        {"code": code, "name": name, "private": private, "public": public},
        context={"registry": registry},
    )


def cast_keypair(data: bytes, registry: CipherRegistry = CIPHERS) -> Multikeypair:
    """Проверка корректности data (decode-and-discard) и приведение к Multikeypair."""
    decode(data, registry)
    return Multikeypair(data)
