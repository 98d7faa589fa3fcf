"""
Result Codes — таксономия результатов и исключения геометрического ядра

Каждая операция валидирует входы синхронно и сообщает конкретный вид ошибки:
- в диагностический лог уходит пара (message, ResultCode)
- вызывающему коду выбрасывается исключение соответствующего класса

Исключение: исчерпание итератора — штатное терминальное состояние,
CompactIterator.advance() возвращает ResultCode.OUT_OF_BOUNDS без raise.
"""

from enum import Enum


# =============================================================================
# RESULT CODES
# =============================================================================


class ResultCode(str, Enum):
    """Код результата операции"""

    SUCCESS = "SUCCESS"
    OUT_OF_MEMORY = "OUT_OF_MEMORY"
    BAD_REFERENCE = "BAD_REFERENCE"
    WRONG_DIM = "WRONG_DIM"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    NAN_VALUE = "NAN_VALUE"
    FILE_ERROR = "FILE_ERROR"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    NOT_FOUND = "NOT_FOUND"
    WRONG_ARGUMENT = "WRONG_ARGUMENT"
    CALCULATION_ERROR = "CALCULATION_ERROR"
    MULTIPLE_DEFINITION = "MULTIPLE_DEFINITION"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class GeometryError(Exception):
    """
    Базовая ошибка геометрического ядра.

    Атрибут code позволяет обработать все ошибки единообразно:

        try:
            compact = create_compact(a, b)
        except GeometryError as e:
            if e.code == ResultCode.WRONG_DIM:
                ...
    """

    code: ResultCode = ResultCode.CALCULATION_ERROR

    def __init__(self, message: str, code: ResultCode | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class BadReferenceError(GeometryError, ValueError):
    """Отсутствующий операнд (None вместо вектора/компакта/множества)."""

    code = ResultCode.BAD_REFERENCE


class WrongDimensionError(GeometryError, ValueError):
    """Несовпадение размерностей операндов."""

    code = ResultCode.WRONG_DIM


class WrongArgumentError(GeometryError, ValueError):
    """
    Некорректный аргумент.

    Примеры: вектор направления не является перестановкой осей,
    углы компакта не упорядочены ни в одну сторону, компакты не сливаются.
    """

    code = ResultCode.WRONG_ARGUMENT


class NanValueError(GeometryError, ValueError):
    """NaN в координатах."""

    code = ResultCode.NAN_VALUE


class OutOfBoundsError(GeometryError, IndexError):
    """Индекс вне диапазона или точка вне компакта."""

    code = ResultCode.OUT_OF_BOUNDS


class NotFoundError(GeometryError, LookupError):
    """Поиск по образцу не дал результата."""

    code = ResultCode.NOT_FOUND


class MultipleDefinitionError(GeometryError, ValueError):
    """Повторная вставка элемента в дедуплицирующее множество."""

    code = ResultCode.MULTIPLE_DEFINITION


class CalculationError(GeometryError, ArithmeticError):
    """Ошибка вычисления (результат не представим корректным вектором)."""

    code = ResultCode.CALCULATION_ERROR


class LogFileError(GeometryError, OSError):
    """Не удалось открыть файл диагностического лога."""

    code = ResultCode.FILE_ERROR
