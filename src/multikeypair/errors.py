"""
Errors — таксономия ошибок кодека multikeypair

Все ошибки наследуют MultikeypairError (ValueError), поэтому вызывающий код
может ловить их общим except ValueError.

Разделение:
- UnknownCodeError — структура валидна, но cipher code не зарегистрирован
- InvalidFrameError / InvalidMultikeypairError — структура повреждена
- BufferTooShortError / VarintOverflowError — ошибки varint
- FrameTooLargeError — исходящий frame не помещается в 16/24-битные длины
"""


class MultikeypairError(ValueError):
    """Базовая ошибка кодека."""


class UnknownCodeError(MultikeypairError):
    """Cipher code (или имя) отсутствует в реестре."""


class InvalidFrameError(MultikeypairError):
    """Длины frame не согласованы с фактическим буфером."""


class InvalidMultikeypairError(InvalidFrameError):
    """Буфер не является корректным multikeypair / multirecursivekey."""


class FrameTooLargeError(InvalidFrameError):
    """Поле > 65535 байт или frame > 16777215 байт."""


class BufferTooShortError(MultikeypairError):
    """Varint не завершается в пределах буфера."""


class VarintOverflowError(MultikeypairError):
    """Varint требует больше 64 бит."""
