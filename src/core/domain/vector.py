"""
Vector — вектор конечномерного вещественного пространства

Владеет собственным буфером координат (np.ndarray, float64); clone()
копирует буфер. Размерность фиксируется при создании и не меняется.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. dim >= 1
2. Ни одна координата не NaN (проверяется при создании и в set_coord)
3. Бинарные операции требуют совпадения размерностей
"""

import math
from typing import Iterable, Iterator, Optional, Sequence, Union

import numpy as np

from src.core.diagnostics.logger import DiagnosticLogger, log_result
from src.core.math.norms import Norm, compute_norm
from src.core.math.numerical_safeguards import EPS_COORD, is_nan, safe_difference
from src.core.result_codes import (
    BadReferenceError,
    CalculationError,
    NanValueError,
    OutOfBoundsError,
    ResultCode,
    WrongArgumentError,
    WrongDimensionError,
)


# =============================================================================
# VECTOR
# =============================================================================


class Vector:
    """
    Вектор с нормами и покоординатным доступом.

    Args:
        coords: Координаты (последовательность чисел, np.ndarray или Vector)
        logger: Диагностический логгер (None отключает диагностику)

    Raises:
        NanValueError: Если хотя бы одна координата NaN
        WrongArgumentError: Если координат нет (dim == 0) или массив не одномерный

    Examples:
        >>> v = Vector([3.0, 4.0])
        >>> v.norm(Norm.L2)
        5.0
        >>> (v + Vector([1.0, 1.0])).coords
        (4.0, 5.0)
    """

    def __init__(
        self,
        coords: Union["Vector", np.ndarray, Iterable[float]],
        logger: Optional[DiagnosticLogger] = None,
    ):
        if isinstance(coords, Vector):
            coords = coords._coords
        elif not isinstance(coords, (np.ndarray, Sequence)):
            coords = list(coords)

        # np.array копирует входной буфер
        values = np.array(coords, dtype=np.float64)

        if values.ndim != 1 or values.size == 0:
            log_result(logger, "vector(create): empty coordinates", ResultCode.WRONG_ARGUMENT)
            raise WrongArgumentError(
                f"Vector needs a non-empty 1-D coordinate list, got shape {values.shape}"
            )

        nan_axes = np.flatnonzero(np.isnan(values))
        if nan_axes.size:
            i = int(nan_axes[0])
            log_result(logger, f"vector(create): {i} is NaN", ResultCode.NAN_VALUE)
            raise NanValueError(f"Coordinate {i} is NaN")

        self._coords: np.ndarray = values
        self._logger = logger

    # -------------------------------------------------------------------------
    # Фабрики
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        dim: int,
        coords: Optional[Iterable[float]],
        logger: Optional[DiagnosticLogger] = None,
    ) -> "Vector":
        """
        Создание вектора с явной проверкой размерности.

        Raises:
            BadReferenceError: Если coords is None
            WrongDimensionError: Если len(coords) != dim
            NanValueError: Если есть NaN
        """
        if coords is None:
            log_result(logger, "vector(create)", ResultCode.BAD_REFERENCE)
            raise BadReferenceError("Coordinates are None")

        values = list(coords)
        if len(values) != dim:
            log_result(logger, "vector(create)", ResultCode.WRONG_DIM)
            raise WrongDimensionError(
                f"Expected {dim} coordinates, got {len(values)}"
            )

        return cls(values, logger)

    @classmethod
    def zeros(cls, dim: int, logger: Optional[DiagnosticLogger] = None) -> "Vector":
        """Нулевой вектор размерности dim."""
        return cls.filled(dim, 0.0, logger)

    @classmethod
    def filled(
        cls,
        dim: int,
        value: float,
        logger: Optional[DiagnosticLogger] = None,
    ) -> "Vector":
        """Вектор размерности dim, все координаты которого равны value."""
        return cls(np.full(dim, value, dtype=np.float64), logger)

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return self._coords.size

    @property
    def coords(self) -> tuple[float, ...]:
        """Координаты (копия в виде tuple)."""
        return tuple(self._coords.tolist())

    @property
    def values(self) -> np.ndarray:
        """Координаты как np.ndarray (только для чтения, без копирования)."""
        view = self._coords.view()
        view.flags.writeable = False
        return view

    @property
    def logger(self) -> Optional[DiagnosticLogger]:
        return self._logger

    def clone(self) -> "Vector":
        """Глубокая копия (логгер разделяется)."""
        return Vector(self._coords, self._logger)

    def get_coord(self, index: int) -> float:
        """
        Координата по индексу.

        Returns:
            Значение координаты или NaN, если index вне [0, dim)
        """
        if index < 0 or index >= self.dim:
            return math.nan
        return float(self._coords[index])

    def set_coord(self, index: int, value: float) -> None:
        """
        Установка координаты.

        Raises:
            OutOfBoundsError: Если index вне [0, dim)
            NanValueError: Если value — NaN
        """
        if index < 0 or index >= self.dim:
            log_result(self._logger, "vector(set coord)", ResultCode.OUT_OF_BOUNDS)
            raise OutOfBoundsError(f"Index {index} out of range for dim {self.dim}")

        value = float(value)
        if is_nan(value):
            log_result(self._logger, "vector(set coord)", ResultCode.NAN_VALUE)
            raise NanValueError(f"Coordinate {index} cannot be NaN")

        self._coords[index] = value

    def norm(self, kind: Norm = Norm.L2) -> float:
        """Норма вектора (L1 / L2 / L∞)."""
        return compute_norm(self._coords, kind)

    # -------------------------------------------------------------------------
    # Протоколы Python
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return self._coords.size

    def __getitem__(self, index: int) -> float:
        return float(self._coords[index])

    def __iter__(self) -> Iterator[float]:
        return iter(self._coords.tolist())

    def __eq__(self, other: object) -> bool:
        # Точное сравнение; для сравнения с толерантностью — equals()
        if not isinstance(other, Vector):
            return NotImplemented
        return bool(np.array_equal(self._coords, other._coords))

    __hash__ = None  # type: ignore[assignment]  # mutable

    def __add__(self, other: "Vector") -> "Vector":
        return add(self, other)

    def __sub__(self, other: "Vector") -> "Vector":
        return sub(self, other)

    def __mul__(self, other: Union["Vector", float]) -> Union["Vector", float]:
        if isinstance(other, (Vector, int, float)):
            return mul(self, other)
        return NotImplemented

    def __rmul__(self, other: float) -> "Vector":
        if isinstance(other, (int, float)):
            return mul(self, other)
        return NotImplemented

    def __neg__(self) -> "Vector":
        return mul(self, -1.0)

    def __repr__(self) -> str:
        return f"Vector({self._coords.tolist()!r})"


VectorLike = Union[Vector, np.ndarray, Sequence[float]]


def as_vector(
    value: Optional[VectorLike],
    logger: Optional[DiagnosticLogger] = None,
) -> Optional[Vector]:
    """
    Приведение последовательности чисел к Vector.

    Vector и None возвращаются как есть (None проверяет вызывающий код).
    """
    if value is None or isinstance(value, Vector):
        return value
    return Vector(value, logger)


# =============================================================================
# БИНАРНЫЕ ОПЕРАЦИИ
# =============================================================================


def _check_operands(
    first: Optional[Vector],
    second: Optional[Vector],
    operation: str,
    logger: Optional[DiagnosticLogger],
) -> Optional[DiagnosticLogger]:
    """Проверка операндов; возвращает логгер для дальнейших записей."""
    if first is None or second is None:
        log_result(logger, f"vector({operation}): operand is None", ResultCode.BAD_REFERENCE)
        raise BadReferenceError(f"vector {operation}: operand is None")

    logger = logger or first.logger

    if first.dim != second.dim:
        log_result(logger, f"vector({operation})", ResultCode.WRONG_DIM)
        raise WrongDimensionError(
            f"vector {operation}: dimension mismatch {first.dim} != {second.dim}"
        )

    return logger


def _from_result(
    values: np.ndarray,
    operation: str,
    logger: Optional[DiagnosticLogger],
) -> Vector:
    # inf - inf и подобные дают NaN: это ошибка вычисления, а не входа
    if np.isnan(values).any():
        log_result(logger, f"vector({operation})", ResultCode.CALCULATION_ERROR)
        raise CalculationError(f"vector {operation}: result contains NaN")
    return Vector(values, logger)


def add(
    first: Optional[Vector],
    second: Optional[Vector],
    logger: Optional[DiagnosticLogger] = None,
) -> Vector:
    """
    Покоординатная сумма.

    Raises:
        BadReferenceError: Если операнд None
        WrongDimensionError: Если размерности различаются
        CalculationError: Если результат содержит NaN (inf + -inf)
    """
    logger = _check_operands(first, second, "add", logger)
    with np.errstate(invalid="ignore"):
        values = first._coords + second._coords
    return _from_result(values, "add", logger)


def sub(
    first: Optional[Vector],
    second: Optional[Vector],
    logger: Optional[DiagnosticLogger] = None,
) -> Vector:
    """Покоординатная разность first - second."""
    logger = _check_operands(first, second, "sub", logger)
    with np.errstate(invalid="ignore"):
        values = first._coords - second._coords
    return _from_result(values, "sub", logger)


def dot(
    first: Optional[Vector],
    second: Optional[Vector],
    logger: Optional[DiagnosticLogger] = None,
) -> float:
    """
    Скалярное произведение.

    Raises:
        CalculationError: Если результат NaN (inf * 0, inf - inf)
    """
    logger = _check_operands(first, second, "dot", logger)
    with np.errstate(invalid="ignore"):
        result = float(first._coords @ second._coords)
    if is_nan(result):
        log_result(logger, "vector(dot)", ResultCode.CALCULATION_ERROR)
        raise CalculationError("vector dot: result is NaN")
    return result


def mul(
    first: Optional[Vector],
    operand: Union[Vector, float],
    logger: Optional[DiagnosticLogger] = None,
) -> Union[Vector, float]:
    """
    Умножение: на скаляр (→ Vector) или на вектор (→ скалярное произведение).

    Raises:
        BadReferenceError: Если first или operand is None
        NanValueError: Если скаляр — NaN
    """
    if isinstance(operand, Vector) or operand is None:
        return dot(first, operand, logger)

    if first is None:
        log_result(logger, "vector(mul): operand is None", ResultCode.BAD_REFERENCE)
        raise BadReferenceError("vector mul: operand is None")

    logger = logger or first.logger
    scale = float(operand)
    if is_nan(scale):
        log_result(logger, "vector(mul): scale is NaN", ResultCode.NAN_VALUE)
        raise NanValueError("vector mul: scale is NaN")

    with np.errstate(invalid="ignore"):
        values = first._coords * scale
    return _from_result(values, "mul", logger)


def equals(
    first: Optional[Vector],
    second: Optional[Vector],
    norm: Norm = Norm.L2,
    tolerance: float = EPS_COORD,
    logger: Optional[DiagnosticLogger] = None,
) -> bool:
    """
    Приближённое равенство: ||first - second|| < tolerance.

    Совпадающие бесконечности дают нулевую разность, а не NaN.

    Raises:
        BadReferenceError: Если операнд None
        WrongDimensionError: Если размерности различаются
    """
    _check_operands(first, second, "equals", logger)
    diff = safe_difference(first._coords, second._coords)
    return compute_norm(diff, norm) < tolerance
