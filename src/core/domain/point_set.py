"""
PointSet — дедуплицирующее множество векторов

Равенство элементов приближённое: два вектора совпадают, если норма их
разности меньше tolerance. Норма и tolerance по умолчанию задаются при
создании множества; insert / find / erase принимают их и явно.

Множество хранит собственные копии векторов (clone при вставке).
Размерность фиксируется первым вставленным элементом; пустое множество
имеет dim == 0.
"""

from typing import Iterator, Optional

from src.core.diagnostics.logger import DiagnosticLogger, log_result
from src.core.domain.vector import Vector, equals
from src.core.math.norms import Norm
from src.core.math.numerical_safeguards import EPS_COORD
from src.core.result_codes import (
    BadReferenceError,
    MultipleDefinitionError,
    NotFoundError,
    OutOfBoundsError,
    ResultCode,
    WrongDimensionError,
)


class PointSet:
    """
    Множество точек с поиском по образцу.

    Args:
        logger: Диагностический логгер (None отключает диагностику)
        norm: Норма сравнения по умолчанию (default: L2)
        tolerance: Толерантность сравнения по умолчанию (default: EPS_COORD)

    Examples:
        >>> points = PointSet()
        >>> points.insert(Vector([0.0, 0.0]))
        >>> points.insert(Vector([1.0, 0.0]))
        >>> len(points)
        2
        >>> points.find(Vector([1.0, 1e-9])).coords
        (1.0, 0.0)
    """

    def __init__(
        self,
        logger: Optional[DiagnosticLogger] = None,
        norm: Norm = Norm.L2,
        tolerance: float = EPS_COORD,
    ):
        self._vectors: list[Vector] = []
        self._logger = logger
        self._norm = Norm(norm)
        self._tolerance = tolerance

    def _log(self, message: str, code: ResultCode) -> ResultCode:
        return log_result(self._logger, message, code)

    @property
    def dim(self) -> int:
        """Размерность элементов (0 для пустого множества)."""
        if not self._vectors:
            return 0
        return self._vectors[0].dim

    @property
    def norm(self) -> Norm:
        return self._norm

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def __len__(self) -> int:
        return len(self._vectors)

    def __iter__(self) -> Iterator[Vector]:
        return (v.clone() for v in list(self._vectors))

    def __contains__(self, sample: object) -> bool:
        """Поиск с нормой и толерантностью множества."""
        if not isinstance(sample, Vector) or sample.dim != self.dim:
            return False
        return self._index_of(sample) is not None

    def __repr__(self) -> str:
        return f"PointSet(size={len(self)}, dim={self.dim})"

    def _index_of(
        self,
        sample: Vector,
        norm: Optional[Norm] = None,
        tolerance: Optional[float] = None,
    ) -> Optional[int]:
        norm = self._norm if norm is None else norm
        tolerance = self._tolerance if tolerance is None else tolerance
        for index, vector in enumerate(self._vectors):
            if equals(sample, vector, norm, tolerance):
                return index
        return None

    def _check_sample(self, sample: Optional[Vector], operation: str) -> None:
        if sample is None:
            self._log(f"set({operation})", ResultCode.BAD_REFERENCE)
            raise BadReferenceError(f"set {operation}: sample is None")

        if self._vectors and sample.dim != self.dim:
            self._log(f"set({operation})", ResultCode.WRONG_DIM)
            raise WrongDimensionError(
                f"set {operation}: dimension mismatch {sample.dim} != {self.dim}"
            )

    def insert(
        self,
        vector: Optional[Vector],
        norm: Optional[Norm] = None,
        tolerance: Optional[float] = None,
    ) -> None:
        """
        Вставка копии вектора.

        Raises:
            BadReferenceError: Если vector is None
            WrongDimensionError: Если размерность не совпадает с множеством
            MultipleDefinitionError: Если приближённо равный вектор уже есть
        """
        self._check_sample(vector, "insert")

        if self._index_of(vector, norm, tolerance) is not None:
            self._log("set(insert)", ResultCode.MULTIPLE_DEFINITION)
            raise MultipleDefinitionError(f"set insert: {vector!r} already present")

        self._vectors.append(vector.clone())

    def get(self, index: int) -> Vector:
        """
        Элемент по индексу (копия).

        Raises:
            OutOfBoundsError: Если index вне [0, len)
        """
        if index < 0 or index >= len(self._vectors):
            self._log("set(get)", ResultCode.OUT_OF_BOUNDS)
            raise OutOfBoundsError(f"set get: index {index} out of range")
        return self._vectors[index].clone()

    def find(
        self,
        sample: Optional[Vector],
        norm: Optional[Norm] = None,
        tolerance: Optional[float] = None,
    ) -> Vector:
        """
        Поиск элемента, приближённо равного sample (копия).

        Raises:
            NotFoundError: Если такого элемента нет
        """
        self._check_sample(sample, "get")

        index = self._index_of(sample, norm, tolerance)
        if index is None:
            self._log("set(get)", ResultCode.NOT_FOUND)
            raise NotFoundError(f"set get: {sample!r} not found")

        self._log("set(get)", ResultCode.SUCCESS)
        return self._vectors[index].clone()

    def erase(
        self,
        sample: Optional[Vector],
        norm: Optional[Norm] = None,
        tolerance: Optional[float] = None,
    ) -> None:
        """
        Удаление элемента, приближённо равного sample.

        Raises:
            NotFoundError: Если такого элемента нет
        """
        self._check_sample(sample, "erase")

        index = self._index_of(sample, norm, tolerance)
        if index is None:
            self._log("set(erase)", ResultCode.NOT_FOUND)
            raise NotFoundError(f"set erase: {sample!r} not found")

        del self._vectors[index]
        self._log("set(erase)", ResultCode.SUCCESS)

    def erase_at(self, index: int) -> None:
        """
        Удаление элемента по индексу.

        Raises:
            NotFoundError: Если index вне [0, len)
        """
        if index < 0 or index >= len(self._vectors):
            self._log("set(erase)", ResultCode.NOT_FOUND)
            raise NotFoundError(f"set erase: index {index} out of range")
        del self._vectors[index]

    def clear(self) -> None:
        self._vectors.clear()

    def clone(self) -> "PointSet":
        """Глубокая копия множества."""
        copy = PointSet(self._logger, self._norm, self._tolerance)
        copy._vectors = [v.clone() for v in self._vectors]
        return copy


# =============================================================================
# ОПЕРАЦИИ НАД МНОЖЕСТВАМИ
# =============================================================================


def union(
    first: Optional[PointSet],
    second: Optional[PointSet],
    norm: Optional[Norm] = None,
    tolerance: Optional[float] = None,
    logger: Optional[DiagnosticLogger] = None,
) -> PointSet:
    """
    Объединение: копия first плюс элементы second, которых нет в first.

    Один из операндов может быть None — тогда возвращается копия другого.
    norm / tolerance по умолчанию берутся из first.

    Raises:
        BadReferenceError: Если оба операнда None
        WrongDimensionError: Если непустые множества разной размерности
    """
    if first is None and second is None:
        log_result(logger, "set(add)", ResultCode.BAD_REFERENCE)
        raise BadReferenceError("set union: both operands are None")

    if first is None:
        return second.clone()
    if second is None:
        return first.clone()

    norm = first.norm if norm is None else norm
    tolerance = first.tolerance if tolerance is None else tolerance

    result = first.clone()
    for vector in second:
        if result._index_of(vector, norm, tolerance) is None:
            result.insert(vector, norm, tolerance)
    return result


def intersect(
    first: Optional[PointSet],
    second: Optional[PointSet],
    norm: Optional[Norm] = None,
    tolerance: Optional[float] = None,
    logger: Optional[DiagnosticLogger] = None,
) -> PointSet:
    """
    Пересечение: элементы first, приближённо равные какому-либо элементу second.

    norm / tolerance по умолчанию берутся из first.

    Raises:
        BadReferenceError: Если хотя бы один операнд None
    """
    if first is None or second is None:
        log_result(logger, "set(intersect)", ResultCode.BAD_REFERENCE)
        raise BadReferenceError("set intersect: operand is None")

    norm = first.norm if norm is None else norm
    tolerance = first.tolerance if tolerance is None else tolerance

    result = PointSet(logger or first._logger, first.norm, first.tolerance)
    if first.dim != second.dim:
        return result

    for vector in first:
        if (
            second._index_of(vector, norm, tolerance) is not None
            and result._index_of(vector, norm, tolerance) is None
        ):
            result.insert(vector, norm, tolerance)
    return result
