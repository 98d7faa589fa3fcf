"""
Compact — ось-выровненный гиперпрямоугольник и его шаговый итератор

Компакт задаётся двумя углами low и high (low[i] <= high[i] по всем осям).
Компакт неизменяем: intersection / add / make_convex создают новые компакты.

Алгебра:
- is_contains(p):   low[i] <= p[i] <= high[i] для всех осей (с толерантностью)
- is_subset(B):     оба угла B лежат в компакте
- is_intersects(B): max(low, B.low) < min(high, B.high) строго по всем осям
- intersection:     [max(lows), min(highs)], если компакты пересекаются
- add:              слияние, только если компакты отличаются вдоль одной оси
- make_convex:      [min(lows), max(highs)] — всегда определено

CompactIterator — одометр по сетке с шагом step. Порядок перебора осей
задаётся перестановкой direction: ось с наименьшим значением direction
меняется быстрее всех.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. low[i] <= high[i] для всех i (иначе WrongArgumentError при создании)
2. direction — перестановка {0, ..., dim-1}
3. Неудачный advance() не меняет текущую точку
4. Итератор владеет собственной копией компакта
"""

from typing import Iterator, Optional

import numpy as np

from src.core.config import DEFAULT_CONFIG, GeometryConfig
from src.core.diagnostics.logger import DiagnosticLogger, log_result
from src.core.domain.vector import Vector, VectorLike, as_vector, equals
from src.core.math.numerical_safeguards import (
    compare_with_tolerance,
    is_close_abs,
    is_integral,
    safe_difference,
    snap_to,
    validate_positive,
)
from src.core.result_codes import (
    BadReferenceError,
    ResultCode,
    WrongArgumentError,
    WrongDimensionError,
)


def _less_equal(lesser: Vector, larger: Vector) -> bool:
    """Покоординатное lesser[i] <= larger[i] (точное сравнение)."""
    return bool(np.all(lesser.values <= larger.values))


# =============================================================================
# COMPACT
# =============================================================================


class Compact:
    """
    Ось-выровненный компакт [low, high].

    Углы можно передавать в любом порядке: компакт сам выберет тот, который
    покоординатно не больше другого.

    Args:
        corner_a: Первый угол
        corner_b: Второй угол
        logger: Диагностический логгер (None отключает диагностику)
        config: Параметры сравнения координат (default: GeometryConfig())

    Raises:
        BadReferenceError: Если угол None
        WrongDimensionError: Если размерности углов различаются
        WrongArgumentError: Если ни один угол не <= другого по всем осям

    Examples:
        >>> box = Compact(Vector([4.0, 4.0]), Vector([0.0, 0.0]))
        >>> box.low.coords, box.high.coords
        ((0.0, 0.0), (4.0, 4.0))
        >>> box.is_contains(Vector([1.0, 3.0]))
        True
    """

    def __init__(
        self,
        corner_a: Optional[VectorLike],
        corner_b: Optional[VectorLike],
        logger: Optional[DiagnosticLogger] = None,
        config: Optional[GeometryConfig] = None,
    ):
        self._logger = logger
        self._config = config or DEFAULT_CONFIG

        corner_a = as_vector(corner_a, logger)
        corner_b = as_vector(corner_b, logger)

        if corner_a is None or corner_b is None:
            self._log("create compact", ResultCode.BAD_REFERENCE)
            raise BadReferenceError("Compact corner is None")

        if corner_a.dim != corner_b.dim:
            self._log("create compact", ResultCode.WRONG_DIM)
            raise WrongDimensionError(
                f"Compact corners dimension mismatch: {corner_a.dim} != {corner_b.dim}"
            )

        if _less_equal(corner_a, corner_b):
            low, high = corner_a, corner_b
        elif _less_equal(corner_b, corner_a):
            low, high = corner_b, corner_a
        else:
            self._log("create compact", ResultCode.WRONG_ARGUMENT)
            raise WrongArgumentError(
                f"Corners {corner_a.coords} and {corner_b.coords} are not ordered "
                f"component-wise"
            )

        self._low = Vector(low, logger)
        self._high = Vector(high, logger)

    def _log(self, message: str, code: ResultCode) -> ResultCode:
        return log_result(self._logger, message, code)

    def _check_vector(self, vector: Optional[Vector], operation: str) -> None:
        if vector is None:
            self._log(f"compact({operation})", ResultCode.BAD_REFERENCE)
            raise BadReferenceError(f"compact {operation}: vector is None")
        if vector.dim != self.dim:
            self._log(f"compact({operation})", ResultCode.WRONG_DIM)
            raise WrongDimensionError(
                f"compact {operation}: dimension mismatch {vector.dim} != {self.dim}"
            )

    def _check_compact(self, other: Optional["Compact"], operation: str) -> None:
        if other is None:
            self._log(f"compact({operation})", ResultCode.BAD_REFERENCE)
            raise BadReferenceError(f"compact {operation}: compact is None")
        if other.dim != self.dim:
            self._log(f"compact({operation})", ResultCode.WRONG_DIM)
            raise WrongDimensionError(
                f"compact {operation}: dimension mismatch {other.dim} != {self.dim}"
            )

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return self._low.dim

    @property
    def low(self) -> Vector:
        """Нижний угол (копия)."""
        return self._low.clone()

    @property
    def high(self) -> Vector:
        """Верхний угол (копия)."""
        return self._high.clone()

    def get_begin(self) -> Vector:
        return self.low

    def get_end(self) -> Vector:
        return self.high

    @property
    def logger(self) -> Optional[DiagnosticLogger]:
        return self._logger

    @property
    def config(self) -> GeometryConfig:
        return self._config

    def clone(self) -> "Compact":
        return Compact(self._low, self._high, self._logger, self._config)

    def volume(self) -> float:
        """Объём (произведение длин рёбер; 0 для вырожденного компакта)."""
        edges = safe_difference(self._high.values, self._low.values)
        return float(np.prod(edges))

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def _contains_coords(self, coords: np.ndarray) -> bool:
        tol = self._config.tolerance
        return bool(
            np.all(compare_with_tolerance(self._low.values, coords, tol) <= 0)
            and np.all(compare_with_tolerance(coords, self._high.values, tol) <= 0)
        )

    def is_contains(self, point: Optional[VectorLike]) -> bool:
        """
        Принадлежность точки компакту (границы включены).

        Raises:
            BadReferenceError: Если point is None
            WrongDimensionError: Если размерность point отличается
        """
        point = as_vector(point, self._logger)
        self._check_vector(point, "is contains")
        return self._contains_coords(point.values)

    def is_subset(self, other: Optional["Compact"]) -> bool:
        """True, если other целиком лежит в этом компакте."""
        self._check_compact(other, "is subset")
        return self._contains_coords(other._low.values) and self._contains_coords(
            other._high.values
        )

    def is_intersects(self, other: Optional["Compact"]) -> bool:
        """
        Пересечение с ненулевым объёмом.

        По умолчанию касание гранью пересечением не считается
        (config.touching_intersects=True включает нестрогое сравнение).
        """
        self._check_compact(other, "is intersects")

        tol = self._config.tolerance
        lower = np.maximum(self._low.values, other._low.values)
        upper = np.minimum(self._high.values, other._high.values)
        order = compare_with_tolerance(lower, upper, tol)

        if self._config.touching_intersects:
            return bool(np.all(order <= 0))
        return bool(np.all(order < 0))

    def equals(self, other: Optional["Compact"], tolerance: Optional[float] = None) -> bool:
        """Совпадение углов по норме config.equality_norm."""
        self._check_compact(other, "equals")
        tol = self._config.tolerance if tolerance is None else tolerance
        norm = self._config.equality_norm
        return equals(self._low, other._low, norm, tol) and equals(
            self._high, other._high, norm, tol
        )

    def __contains__(self, point: object) -> bool:
        if not isinstance(point, Vector):
            return False
        return self.is_contains(point)

    def __repr__(self) -> str:
        return f"Compact(low={self._low.coords}, high={self._high.coords})"

    # -------------------------------------------------------------------------
    # Итераторы
    # -------------------------------------------------------------------------

    def begin(self, step: Optional[VectorLike] = None) -> "CompactIterator":
        """Прямой итератор: старт в low, шаг +step, граница high."""
        return CompactIterator(self, step, forward=True)

    def end(self, step: Optional[VectorLike] = None) -> "CompactIterator":
        """Обратный итератор: старт в high, шаг -step, граница low."""
        return CompactIterator(self, step, forward=False)

    def grid(
        self,
        step: Optional[VectorLike] = None,
        direction: Optional[VectorLike] = None,
        reverse: bool = False,
    ) -> Iterator[Vector]:
        """
        Все точки сетки в порядке одометра.

        Example:
            >>> box = Compact([0.0, 0.0], [2.0, 2.0])
            >>> [p.coords for p in box.grid([2.0, 2.0])]
            [(0.0, 0.0), (2.0, 0.0), (0.0, 2.0), (2.0, 2.0)]
        """
        iterator = self.end(step) if reverse else self.begin(step)
        if direction is not None:
            iterator.set_direction(direction)
        yield from iterator


# =============================================================================
# COMPACT ITERATOR
# =============================================================================


class CompactIterator:
    """
    Шаговый итератор по сетке компакта.

    Состояния:
    - active: текущая точка внутри компакта, advance() возвращает SUCCESS
    - exhausted: advance() вернул OUT_OF_BOUNDS (все оси дошли до границы
      или очередной шаг выводит точку за компакт)

    advance() работает как одометр: находит первую в порядке order ось,
    ещё не дошедшую до границы, сбрасывает предыдущие оси на
    противоположную границу и сдвигает найденную ось на step.

    get_point() возвращает новую копию точки при каждом вызове.

    Example:
        >>> it = Compact([0.0], [4.0]).begin([2.0])
        >>> it.get_point().coords
        (0.0,)
        >>> it.advance(), it.get_point().coords
        (<ResultCode.SUCCESS: 'SUCCESS'>, (2.0,))
    """

    def __init__(
        self,
        compact: Compact,
        step: Optional[VectorLike] = None,
        forward: bool = True,
        logger: Optional[DiagnosticLogger] = None,
    ):
        if compact is None:
            log_result(logger, "iterator(create)", ResultCode.BAD_REFERENCE)
            raise BadReferenceError("iterator: compact is None")

        self._compact = compact.clone()
        self._logger = logger if logger is not None else compact.logger
        self._forward = forward
        self._exhausted = False

        dim = self._compact.dim
        if step is None:
            step = Vector.filled(dim, 1.0, self._logger)
        self._step = self._validate_step(as_vector(step, self._logger))

        self._current = self._compact.low if forward else self._compact.high
        self._direction = Vector(range(dim), self._logger)
        self._order: tuple[int, ...] = tuple(range(dim))

    def _log(self, message: str, code: ResultCode) -> ResultCode:
        return log_result(self._logger, message, code)

    def _validate_step(self, step: Vector) -> Vector:
        if step.dim != self._compact.dim:
            self._log("iterator(create)", ResultCode.WRONG_DIM)
            raise WrongDimensionError(
                f"iterator: step dimension {step.dim} != {self._compact.dim}"
            )
        for axis, value in enumerate(step):
            try:
                validate_positive(value, f"step[{axis}]")
            except ValueError as e:
                self._log("iterator(create)", ResultCode.WRONG_ARGUMENT)
                raise WrongArgumentError(
                    f"iterator: step along axis {axis} must be positive and finite, got {value}"
                ) from e
        return step.clone()

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return self._compact.dim

    @property
    def is_forward(self) -> bool:
        return self._forward

    @property
    def is_exhausted(self) -> bool:
        """True, если последний advance() вернул OUT_OF_BOUNDS."""
        return self._exhausted

    @property
    def step(self) -> Vector:
        return self._step.clone()

    @property
    def direction(self) -> Vector:
        return self._direction.clone()

    @property
    def order(self) -> tuple[int, ...]:
        """Оси в порядке перебора (первая меняется быстрее всех)."""
        return self._order

    def get_point(self) -> Vector:
        """Текущая точка (новая копия при каждом вызове)."""
        return self._current.clone()

    # -------------------------------------------------------------------------
    # Направление
    # -------------------------------------------------------------------------

    def set_direction(self, direction: Optional[VectorLike]) -> None:
        """
        Установка порядка перебора осей.

        direction[i] — целочисленный ранг оси i; оси перебираются по
        возрастанию ранга. [1, 0] означает: ось 1 меняется быстрее оси 0.

        Raises:
            BadReferenceError: Если direction is None
            WrongDimensionError: Если размерность не совпадает с компактом
            WrongArgumentError: Если direction не перестановка {0..dim-1}
        """
        direction = as_vector(direction, self._logger)

        if direction is None:
            self._log("iterator(set direction)", ResultCode.BAD_REFERENCE)
            raise BadReferenceError("iterator set direction: direction is None")

        dim = self.dim
        if direction.dim != dim:
            self._log("iterator(set direction)", ResultCode.WRONG_DIM)
            raise WrongDimensionError(
                f"iterator set direction: dimension {direction.dim} != {dim}"
            )

        tol = self._compact.config.tolerance
        values = list(direction)
        for axis, value in enumerate(values):
            if not is_integral(value, tol) or not 0 <= round(value) <= dim - 1:
                self._log("iterator(set direction)", ResultCode.WRONG_ARGUMENT)
                raise WrongArgumentError(
                    f"iterator set direction: entry {axis} = {value} is not an axis index "
                    f"in [0, {dim - 1}]"
                )
            for other_axis, other in enumerate(values):
                if other_axis != axis and is_close_abs(value, other, tol):
                    self._log("iterator(set direction)", ResultCode.WRONG_ARGUMENT)
                    raise WrongArgumentError(
                        f"iterator set direction: entries {axis} and {other_axis} "
                        f"share value {value}"
                    )

        self._direction = direction.clone()
        # sorted() стабилен
        self._order = tuple(sorted(range(dim), key=lambda axis: round(values[axis])))

    # -------------------------------------------------------------------------
    # Шаг
    # -------------------------------------------------------------------------

    def advance(self) -> ResultCode:
        """
        Один шаг одометра.

        Returns:
            ResultCode.SUCCESS — точка сдвинута
            ResultCode.OUT_OF_BOUNDS — итератор исчерпан, точка не изменилась
        """
        compact = self._compact
        tol = compact.config.tolerance

        if self._forward:
            origin, boundary, sign = compact._low.values, compact._high.values, 1.0
        else:
            origin, boundary, sign = compact._high.values, compact._low.values, -1.0

        candidate = self._current.values.copy()
        at_boundary = is_close_abs(candidate, boundary, tol)

        pending = [
            position for position, axis in enumerate(self._order) if not at_boundary[axis]
        ]
        if not pending:
            self._exhausted = True
            return self._log("iterator(do step): traversal complete", ResultCode.OUT_OF_BOUNDS)

        active_position = pending[0]
        reset = list(self._order[:active_position])
        candidate[reset] = origin[reset]

        active = self._order[active_position]
        moved = candidate[active] + sign * self._step[active]

        # Из бесконечной координаты шаг не сдвигает точку
        if moved == candidate[active]:
            self._exhausted = True
            return self._log(
                f"iterator(do step): axis {active} cannot move from {moved}",
                ResultCode.OUT_OF_BOUNDS,
            )

        candidate[active] = snap_to(float(moved), float(boundary[active]), tol)

        if not compact._contains_coords(candidate):
            self._exhausted = True
            return self._log(
                f"iterator(do step): axis {active} leaves compact", ResultCode.OUT_OF_BOUNDS
            )

        self._current = Vector(candidate, self._logger)
        self._exhausted = False
        return ResultCode.SUCCESS

    def __iter__(self) -> Iterator[Vector]:
        """Текущая точка, затем точка после каждого успешного advance()."""
        yield self.get_point()
        while self.advance() == ResultCode.SUCCESS:
            yield self.get_point()


# =============================================================================
# ФАБРИКИ И АЛГЕБРА КОМПАКТОВ
# =============================================================================


def create_compact(
    corner_a: Optional[VectorLike],
    corner_b: Optional[VectorLike],
    logger: Optional[DiagnosticLogger] = None,
    config: Optional[GeometryConfig] = None,
) -> Compact:
    """Создание компакта по двум углам (см. Compact)."""
    return Compact(corner_a, corner_b, logger, config)


def _check_pair(
    first: Optional[Compact],
    second: Optional[Compact],
    operation: str,
    logger: Optional[DiagnosticLogger],
) -> Optional[DiagnosticLogger]:
    if first is None or second is None:
        log_result(logger, operation, ResultCode.BAD_REFERENCE)
        raise BadReferenceError(f"{operation}: compact is None")

    logger = logger or first.logger

    if first.dim != second.dim:
        log_result(logger, operation, ResultCode.WRONG_DIM)
        raise WrongDimensionError(
            f"{operation}: dimension mismatch {first.dim} != {second.dim}"
        )

    return logger


def _bounding(first: Compact, second: Compact, logger: Optional[DiagnosticLogger]) -> Compact:
    low = np.minimum(first._low.values, second._low.values)
    high = np.maximum(first._high.values, second._high.values)
    return Compact(low, high, logger, first.config)


def _is_connected(first: Compact, second: Compact) -> bool:
    """Компакты пересекаются или касаются (замкнутые множества)."""
    tol = first.config.tolerance
    lower = np.maximum(first._low.values, second._low.values)
    upper = np.minimum(first._high.values, second._high.values)
    return bool(np.all(compare_with_tolerance(lower, upper, tol) <= 0))


def _single_axis(first: Vector, second: Vector, tol: float) -> Optional[int]:
    """
    Ось, вдоль которой first - second параллелен координатной оси.

    Returns:
        Индекс единственной ненулевой компоненты разности или None
    """
    axes = np.flatnonzero(~is_close_abs(first.values, second.values, tol))
    if axes.size != 1:
        return None
    return int(axes[0])


def intersection(
    first: Optional[Compact],
    second: Optional[Compact],
    logger: Optional[DiagnosticLogger] = None,
) -> Compact:
    """
    Пересечение компактов: [max(lows), min(highs)].

    Raises:
        BadReferenceError: Если операнд None
        WrongDimensionError: Если размерности различаются
        WrongArgumentError: Если компакты не пересекаются
    """
    logger = _check_pair(first, second, "compact intersection", logger)

    if not first.is_intersects(second):
        log_result(logger, "compact intersection: no overlap", ResultCode.WRONG_ARGUMENT)
        raise WrongArgumentError(f"{first!r} and {second!r} do not intersect")

    low = np.maximum(first._low.values, second._low.values)
    # касание в пределах tol даёт вырожденный, а не перевёрнутый компакт
    high = np.maximum(np.minimum(first._high.values, second._high.values), low)
    return Compact(low, high, logger, first.config)


def _merge(
    first: Compact,
    second: Compact,
    logger: Optional[DiagnosticLogger],
) -> Optional[Compact]:
    if not _is_connected(first, second):
        log_result(logger, "add: compacts are not connected", ResultCode.WRONG_ARGUMENT)
        return None

    if first.is_subset(second):
        return first.clone()
    if second.is_subset(first):
        return second.clone()

    tol = first.config.tolerance
    axis_low = _single_axis(first._low, second._low, tol)
    axis_high = _single_axis(first._high, second._high, tol)

    if axis_low is None or axis_low != axis_high:
        log_result(logger, "add: compacts differ along more than one axis", ResultCode.WRONG_ARGUMENT)
        return None

    return _bounding(first, second, logger)


def add(
    first: Optional[Compact],
    second: Optional[Compact],
    logger: Optional[DiagnosticLogger] = None,
) -> Compact:
    """
    Объединение компактов, если оно само является компактом.

    Правила:
    1. Компакты должны пересекаться или касаться
    2. Если один содержит другой — возвращается копия большего
    3. Иначе разности low и high должны быть ненулевыми ровно по одной
       и той же оси; результат — [min(lows), max(highs)]

    Raises:
        BadReferenceError: Если операнд None
        WrongDimensionError: Если размерности различаются
        WrongArgumentError: Если объединение не является компактом
    """
    logger = _check_pair(first, second, "add", logger)

    merged = _merge(first, second, logger)
    if merged is None:
        raise WrongArgumentError(f"{first!r} and {second!r} cannot be merged into a compact")
    return merged


def try_add(
    first: Optional[Compact],
    second: Optional[Compact],
    logger: Optional[DiagnosticLogger] = None,
) -> Optional[Compact]:
    """
    То же, что add(), но возвращает None, если объединение не является компактом.

    Ошибки входа (None, размерность) по-прежнему выбрасываются.
    """
    logger = _check_pair(first, second, "add", logger)
    return _merge(first, second, logger)


def make_convex(
    first: Optional[Compact],
    second: Optional[Compact],
    logger: Optional[DiagnosticLogger] = None,
) -> Compact:
    """Наименьший компакт, содержащий оба операнда: [min(lows), max(highs)]."""
    logger = _check_pair(first, second, "makeConvex", logger)
    return _bounding(first, second, logger)
