"""
Ciphers — реестр cipher codes (code <-> name)

Реестр — неизменяемое отображение, создаётся один раз при импорте.
Конкурентное чтение безопасно без синхронизации. Для тестов и расширений
создаётся отдельный CipherRegistry и передаётся в кодек явно.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Final, Mapping

from src.multikeypair.errors import UnknownCodeError


# =============================================================================
# CIPHER CODES
# =============================================================================

IDENTITY: Final[int] = 0x00
ED25519: Final[int] = 0x11
BIP32: Final[int] = 0x12
DSA: Final[int] = 0x13
RSA: Final[int] = 0x14


# =============================================================================
# РЕЕСТР
# =============================================================================


@dataclass(frozen=True)
class CipherRegistry:
    """
    Неизменяемый реестр cipher codes.

    Attributes:
        codes: Отображение code -> name (обратное отображение строится
            автоматически)
    """

    codes: Mapping[int, str]
    _names: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        codes: Dict[int, str] = dict(self.codes)
        names: Dict[str, int] = {}
        for code, name in codes.items():
            if code < 0:
                raise ValueError(f"Cipher code must be non-negative, got {code}")
            if name in names:
                raise ValueError(f"Duplicate cipher name: {name!r}")
            names[name] = code

        object.__setattr__(self, "codes", MappingProxyType(codes))
        object.__setattr__(self, "_names", MappingProxyType(names))

    def __contains__(self, code: object) -> bool:
        return code in self.codes

    def __len__(self) -> int:
        return len(self.codes)

    def is_known(self, code: int) -> bool:
        """Проверка членства code в реестре."""
        return code in self.codes

    def validate(self, code: int) -> None:
        """
        Raises:
            UnknownCodeError: code отсутствует в реестре
        """
        if code not in self.codes:
            raise UnknownCodeError(f"unknown multikeypair code: {code:#x}")

    def name_of(self, code: int) -> str:
        """Имя шифра по code (UnknownCodeError если не найден)."""
        self.validate(code)
        return self.codes[code]

    def code_of(self, name: str) -> int:
        """Code шифра по имени (UnknownCodeError если не найден)."""
        try:
            return self._names[name]
        except KeyError:
            raise UnknownCodeError(f"unknown multikeypair cipher name: {name!r}") from None

    def extend(self, codes: Mapping[int, str]) -> "CipherRegistry":
        """Новый реестр с дополнительными шифрами (исходный не меняется)."""
        merged = dict(self.codes)
        merged.update(codes)
        return CipherRegistry(merged)


# Плоский реестр для Keypair
CIPHERS: Final[CipherRegistry] = CipherRegistry(
    {
        IDENTITY: "identity",
        ED25519: "ed25519",
        BIP32: "bip32",
        DSA: "dsa",
        RSA: "rsa",
    }
)

# Реестр для Recursivekey: отдельное пространство имён, по умолчанию
# содержит те же шифры, что и CIPHERS
RECURSIVE_CIPHERS: Final[CipherRegistry] = CipherRegistry(CIPHERS.codes)
