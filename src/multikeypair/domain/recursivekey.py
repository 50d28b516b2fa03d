"""
Recursivekey — master key с производными дочерними keypair

Формат Multirecursivekey:
    u24_len( u16_len(varint(code)) u16_len(master) u16_len(varint(n))
             u16_len(child_1 Multikeypair) ... u16_len(child_n Multikeypair) )

Каждый child — полностью самодостаточный Multikeypair, вложенный как
непрозрачный payload поля. Порядок children сохраняется.

Code проверяется по RECURSIVE_CIPHERS (отдельное пространство имён),
children — по CIPHERS. Оба реестра можно подменить аргументами.
"""

import logging
from typing import Any, Dict, Sequence, Tuple

from pydantic import BaseModel, Field, ValidationInfo, computed_field, model_validator

from src.multikeypair.contracts import validate_recursivekey_document
from src.multikeypair.domain.ciphers import CIPHERS, RECURSIVE_CIPHERS, CipherRegistry
from src.multikeypair.domain.keypair import (
    Keypair,
    build_keypair_frame,
    resolve_cipher_name,
)
from src.multikeypair.domain.keypair import decode as decode_keypair
from src.multikeypair.encoding.b58 import b58_decode, b58_encode
from src.multikeypair.encoding.frame import FrameBuilder, FrameReader
from src.multikeypair.encoding.varint import pack_code, pack_len, unpack_code, unpack_len
from src.multikeypair.errors import (
    InvalidFrameError,
    InvalidMultikeypairError,
    UnknownCodeError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# MULTIRECURSIVEKEY (BINARY FRAME)
# =============================================================================


class Multirecursivekey(bytes):
    """Сериализованная форма Recursivekey; сравнение побайтовое."""

    def decode(
        self,
        registry: CipherRegistry = RECURSIVE_CIPHERS,
        child_registry: CipherRegistry = CIPHERS,
    ) -> "Recursivekey":
        return recursive_decode(self, registry, child_registry)

    def to_text(self) -> str:
        return b58_encode(self)

    @classmethod
    def from_text(
        cls,
        text: str,
        registry: CipherRegistry = RECURSIVE_CIPHERS,
        child_registry: CipherRegistry = CIPHERS,
    ) -> "Multirecursivekey":
        """Base58-строка -> проверенный Multirecursivekey (включая всех children)."""
        return cast_recursivekey(b58_decode(text), registry, child_registry)


# =============================================================================
# RECURSIVEKEY MODEL
# =============================================================================


class Recursivekey(BaseModel):
    """
    Master key с упорядоченным набором дочерних Keypair.

    children_num всегда равен len(children) и не задаётся отдельно.
    name согласован с code так же, как у Keypair.
    """

    code: int = Field(..., ge=0, description="Cipher code")
    name: str = Field("", description="Имя шифра (выводится из code)")
    master: bytes = Field(b"", description="Сырые байты master key")
    children: Tuple[Keypair, ...] = Field(default=(), description="Дочерние keypair")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def resolve_name(cls, data: Any, info: ValidationInfo) -> Any:
        """Согласование name с code (реестр из context или RECURSIVE_CIPHERS)."""
        return resolve_cipher_name(data, info, RECURSIVE_CIPHERS)

    @computed_field
    @property
    def master_length(self) -> int:
        return len(self.master)

    @computed_field
    @property
    def children_num(self) -> int:
        return len(self.children)

    def encode(
        self,
        registry: CipherRegistry = RECURSIVE_CIPHERS,
        child_registry: CipherRegistry = CIPHERS,
    ) -> Multirecursivekey:
        """Упаковка в Multirecursivekey."""
        return recursive_encode(
            self.master, self.children, self.code, registry, child_registry
        )

    def to_document(self) -> Dict[str, Any]:
        """JSON-документ (схема contracts/schema/recursivekey.json)."""
        return {
            "code": self.code,
            "name": self.name,
            "master": b58_encode(self.master),
            "master_length": self.master_length,
            "children_num": self.children_num,
            "children": [child.to_document() for child in self.children],
        }

    @classmethod
    def from_document(
        cls,
        document: Dict[str, Any],
        registry: CipherRegistry = RECURSIVE_CIPHERS,
        child_registry: CipherRegistry = CIPHERS,
    ) -> "Recursivekey":
        """
        Восстановление Recursivekey из JSON-документа.

        Raises:
            jsonschema.ValidationError: Документ не соответствует схеме
            UnknownCodeError: code не зарегистрирован
            ValueError: name, длины или children_num не согласованы
        """
        validate_recursivekey_document(document)

        name = registry.name_of(document["code"])
        if document["name"] != name:
            raise ValueError(
                f"Document name {document['name']!r} does not match code "
                f"{document['code']:#x} ({name!r})"
            )

        master = b58_decode(document["master"])
        if document["master_length"] != len(master):
            raise ValueError(
                f"master_length {document['master_length']} != {len(master)}"
            )

        children = tuple(
            Keypair.from_document(child, child_registry)
            for child in document["children"]
        )
        if document["children_num"] != len(children):
            raise ValueError(
                f"children_num {document['children_num']} != {len(children)}"
            )

        return cls.model_validate(
            {"code": document["code"], "name": name, "master": master, "children": children},
            context={"registry": registry},
        )


# =============================================================================
# ENCODE
# =============================================================================


def recursive_encode(
    master: bytes,
    children: Sequence[Keypair],
    code: int,
    registry: CipherRegistry = RECURSIVE_CIPHERS,
    child_registry: CipherRegistry = CIPHERS,
) -> Multirecursivekey:
    """
    Упаковка master key и children в Multirecursivekey.

    Args:
        master: Сырые байты master key
        children: Упорядоченные дочерние Keypair
        code: Cipher code master key
        registry: Реестр для code
        child_registry: Реестр для code дочерних keypair

    Raises:
        UnknownCodeError: code или code одного из children не зарегистрирован
        FrameTooLargeError: Поле или frame превышают 16/24-битные границы
    """
    registry.validate(code)

    builder = FrameBuilder()
    builder.add_field(pack_code(code))
    builder.add_field(master)
    builder.add_field(pack_len(len(children)))
    for child in children:
        child_registry.validate(child.code)
        builder.add_field(build_keypair_frame(child.private, child.public, child.code))

    return Multirecursivekey(builder.build())


def recursive_encode_name(
    master: bytes,
    children: Sequence[Keypair],
    name: str,
    registry: CipherRegistry = RECURSIVE_CIPHERS,
    child_registry: CipherRegistry = CIPHERS,
) -> Multirecursivekey:
    """Упаковка с указанием шифра master key по имени."""
    return recursive_encode(
        master, children, registry.code_of(name), registry, child_registry
    )


# =============================================================================
# DECODE
# =============================================================================


def recursive_decode(
    data: bytes,
    registry: CipherRegistry = RECURSIVE_CIPHERS,
    child_registry: CipherRegistry = CIPHERS,
) -> Recursivekey:
    """
    Распаковка Multirecursivekey в Recursivekey.

    Число child-полей должно точно совпадать с объявленным children_num.
    Ошибка декодирования child пробрасывается без обёртки.

    Raises:
        InvalidMultikeypairError: Структура frame повреждена
        BufferTooShortError / VarintOverflowError: Повреждён varint
        UnknownCodeError: code master key или child не зарегистрирован
    """
    try:
        reader = FrameReader(data)
        code_field = reader.read_field()
        master = reader.read_field()
        count_field = reader.read_field()
    except InvalidFrameError as e:
        logger.debug("Rejected multirecursivekey: %s", e)
        raise InvalidMultikeypairError(f"input isn't valid multirecursivekey: {e}") from e

    code = unpack_code(code_field)
    children_num = unpack_len(count_field)

    child_fields = []
    try:
        # Количество полей ограничено размером frame, а не children_num
        while len(child_fields) < children_num:
            child_fields.append(reader.read_field())
        reader.expect_end()
    except InvalidFrameError as e:
        logger.debug(
            "Rejected multirecursivekey: declared %d children, %s",
            children_num,
            e,
        )
        raise InvalidMultikeypairError(
            f"input isn't valid multirecursivekey: expected {children_num} children: {e}"
        ) from e

    children = tuple(decode_keypair(field, child_registry) for field in child_fields)

    try:
        name = registry.name_of(code)
    except UnknownCodeError:
        logger.debug("Rejected multirecursivekey with unknown code %#x", code)
        raise

    return Recursivekey.model_validate(
        {"code": code, "name": name, "master": master, "children": children},
        context={"registry": registry},
    )


def cast_recursivekey(
    data: bytes,
    registry: CipherRegistry = RECURSIVE_CIPHERS,
    child_registry: CipherRegistry = CIPHERS,
) -> Multirecursivekey:
    """Проверка корректности data и приведение к Multirecursivekey."""
    recursive_decode(data, registry, child_registry)
    return Multirecursivekey(data)
