"""
Frame — вложенный length-prefixed формат (TLV без тегов)

Формат (big-endian):
    frame := u24_len( field* )
    field := u16_len( payload )

Внешняя 24-битная длина покрывает все байты после неё. Поля идут в
фиксированном порядке, каждое со своей 16-битной длиной.

ИНВАРИАНТЫ:
1. FrameBuilder проверяет границы при добавлении поля, поэтому build()
   не может завершиться ошибкой
2. FrameReader требует, чтобы буфер содержал ровно один frame
   (лишние байты после frame — ошибка формата)
3. Прочитанные поля — независимые копии (bytes), не ссылки на входной буфер
"""

from typing import Final, Iterable, List

from src.multikeypair.errors import FrameTooLargeError, InvalidFrameError


# =============================================================================
# ГРАНИЦЫ
# =============================================================================

FIELD_PREFIX_LEN: Final[int] = 2
FRAME_PREFIX_LEN: Final[int] = 3

# Максимальный payload одного поля
MAX_FIELD_LEN: Final[int] = 0xFFFF

# Максимальная длина содержимого frame (без 24-битного префикса)
MAX_FRAME_LEN: Final[int] = 0xFFFFFF


# =============================================================================
# BUILDER
# =============================================================================


class FrameBuilder:
    """
    Построитель frame.

    Поля добавляются в порядке вызовов add_field(); внешняя длина
    вычисляется и дописывается в build().
    """

    def __init__(self):
        self._fields: List[bytes] = []
        self._body_len = 0

    @property
    def body_length(self) -> int:
        """Текущая длина содержимого frame (без внешнего префикса)."""
        return self._body_len

    def add_field(self, payload: bytes) -> "FrameBuilder":
        """
        Добавление поля.

        Args:
            payload: Байты поля

        Returns:
            self (для цепочек вызовов)

        Raises:
            FrameTooLargeError: Поле > 65535 байт или frame > 16777215 байт
        """
        if len(payload) > MAX_FIELD_LEN:
            raise FrameTooLargeError(
                f"Field payload of {len(payload)} bytes exceeds {MAX_FIELD_LEN}"
            )

        body_len = self._body_len + FIELD_PREFIX_LEN + len(payload)
        if body_len > MAX_FRAME_LEN:
            raise FrameTooLargeError(
                f"Frame body of {body_len} bytes exceeds {MAX_FRAME_LEN}"
            )

        self._fields.append(bytes(payload))
        self._body_len = body_len
        return self

    def build(self) -> bytes:
        """Сборка frame: u24 длина + поля с u16 длинами."""
        out = bytearray(self._body_len.to_bytes(FRAME_PREFIX_LEN, "big"))
        for payload in self._fields:
            out += len(payload).to_bytes(FIELD_PREFIX_LEN, "big")
            out += payload
        return bytes(out)


def build_frame(fields: Iterable[bytes]) -> bytes:
    """Сборка frame из последовательности полей."""
    builder = FrameBuilder()
    for payload in fields:
        builder.add_field(payload)
    return builder.build()


# =============================================================================
# READER
# =============================================================================


class FrameReader:
    """
    Последовательное чтение полей одного frame.

    Конструктор проверяет внешнюю длину: после 24-битного префикса должно
    остаться ровно столько байт, сколько объявлено.

    Raises:
        InvalidFrameError: Внешний префикс усечён или длина не совпадает
    """

    def __init__(self, data: bytes):
        view = memoryview(bytes(data))
        if len(view) < FRAME_PREFIX_LEN:
            raise InvalidFrameError(
                f"Frame too short for length prefix: {len(view)} bytes"
            )

        declared = int.from_bytes(view[:FRAME_PREFIX_LEN], "big")
        actual = len(view) - FRAME_PREFIX_LEN
        if declared != actual:
            raise InvalidFrameError(
                f"Frame declares {declared} bytes but {actual} follow the prefix"
            )

        self._view = view[FRAME_PREFIX_LEN:]
        self._offset = 0

    @property
    def remaining(self) -> int:
        """Количество непрочитанных байт frame."""
        return len(self._view) - self._offset

    @property
    def empty(self) -> bool:
        return self.remaining == 0

    def read_field(self) -> bytes:
        """
        Чтение следующего поля.

        Returns:
            Копия payload поля

        Raises:
            InvalidFrameError: Префикс или payload выходят за границу frame
        """
        if self.remaining < FIELD_PREFIX_LEN:
            raise InvalidFrameError("Frame exhausted before field length prefix")

        start = self._offset + FIELD_PREFIX_LEN
        length = int.from_bytes(self._view[self._offset:start], "big")
        end = start + length
        if end > len(self._view):
            raise InvalidFrameError(
                f"Field declares {length} bytes but only "
                f"{len(self._view) - start} remain in frame"
            )

        self._offset = end
        return bytes(self._view[start:end])

    def read_fields(self, count: int) -> List[bytes]:
        """Чтение ровно count полей подряд."""
        return [self.read_field() for _ in range(count)]

    def expect_end(self) -> None:
        """
        Проверка, что все поля прочитаны.

        Raises:
            InvalidFrameError: В frame остались непрочитанные байты
        """
        if not self.empty:
            raise InvalidFrameError(
                f"Frame has {self.remaining} unexpected trailing bytes"
            )


def read_frame(data: bytes) -> List[bytes]:
    """Чтение всех полей frame до конца."""
    reader = FrameReader(data)
    fields = []
    while not reader.empty:
        fields.append(reader.read_field())
    return fields
