"""
Тесты для CompactIterator

Покрывает:
- Прямой и обратный обход (одометр)
- set_direction (перестановка осей, отказ на некорректных векторах)
- Валидацию шага
- Шаг, не делящий ребро нацело
- Неизменность точки при неудачном advance()
- Независимость итератора от исходного компакта
- Компакты с бесконечными границами
"""

from itertools import islice

import pytest

from src.core.config import GeometryConfig
from src.core.domain.compact import Compact, CompactIterator
from src.core.domain.vector import Vector
from src.core.result_codes import (
    BadReferenceError,
    ResultCode,
    WrongArgumentError,
    WrongDimensionError,
)

INF = float("inf")


def walk(iterator: CompactIterator) -> list[tuple[float, ...]]:
    """Все точки обхода в виде кортежей."""
    return [point.coords for point in iterator]


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def square() -> Compact:
    """Квадрат [0, 2] x [0, 2]: сетка 3x3 при шаге 1."""
    return Compact(Vector([0.0, 0.0]), Vector([2.0, 2.0]))


# =============================================================================
# ПРЯМОЙ ОБХОД
# =============================================================================


class TestForwardTraversal:
    """Тесты прямого обхода"""

    def test_starts_at_low(self, square: Compact) -> None:
        assert square.begin().get_point().coords == (0.0, 0.0)

    def test_one_dimensional(self) -> None:
        """[0, 10] с шагом 2: пять успешных шагов, затем OUT_OF_BOUNDS"""
        iterator = Compact([0.0], [10.0]).begin([2.0])

        points = []
        for _ in range(5):
            assert iterator.advance() == ResultCode.SUCCESS
            points.append(iterator.get_point().get_coord(0))

        assert points == [2.0, 4.0, 6.0, 8.0, 10.0]
        assert iterator.advance() == ResultCode.OUT_OF_BOUNDS
        assert iterator.is_exhausted
        assert iterator.get_point().coords == (10.0,)

    def test_odometer_order(self, square: Compact) -> None:
        """Ось 0 меняется быстрее всех"""
        assert walk(square.begin()) == [
            (0.0, 0.0),
            (1.0, 0.0),
            (2.0, 0.0),
            (0.0, 1.0),
            (1.0, 1.0),
            (2.0, 1.0),
            (0.0, 2.0),
            (1.0, 2.0),
            (2.0, 2.0),
        ]

    def test_step_two_on_four_by_four(self) -> None:
        """[0, 4] x [0, 4] с шагом 2: девять узлов, ось 0 быстрее"""
        iterator = Compact([0.0, 0.0], [4.0, 4.0]).begin([2.0, 2.0])
        assert walk(iterator) == [
            (0.0, 0.0),
            (2.0, 0.0),
            (4.0, 0.0),
            (0.0, 2.0),
            (2.0, 2.0),
            (4.0, 2.0),
            (0.0, 4.0),
            (2.0, 4.0),
            (4.0, 4.0),
        ]
        assert iterator.advance() == ResultCode.OUT_OF_BOUNDS
        assert iterator.get_point().coords == (4.0, 4.0)

    def test_visits_every_grid_point_once(self) -> None:
        compact = Compact([0.0, 0.0, 0.0], [1.0, 2.0, 1.0])
        points = walk(compact.begin())
        assert len(points) == 2 * 3 * 2
        assert len(set(points)) == len(points)

    def test_all_points_inside(self) -> None:
        compact = Compact([-1.0, 0.5], [1.0, 2.0])
        for point in compact.begin([0.5, 0.25]):
            assert compact.is_contains(point)

    def test_exhausted_stays_exhausted(self) -> None:
        iterator = Compact([0.0], [1.0]).begin()
        assert iterator.advance() == ResultCode.SUCCESS
        assert iterator.advance() == ResultCode.OUT_OF_BOUNDS
        assert iterator.advance() == ResultCode.OUT_OF_BOUNDS
        assert iterator.get_point().coords == (1.0,)

    def test_degenerate_compact(self) -> None:
        """Компакт-точка: сразу исчерпан"""
        iterator = Compact([3.0, 3.0], [3.0, 3.0]).begin()
        assert iterator.advance() == ResultCode.OUT_OF_BOUNDS
        assert iterator.get_point().coords == (3.0, 3.0)

    def test_fractional_step_snaps_to_boundary(self) -> None:
        """Накопленная ошибка 0.1 * 10 не теряет последнюю точку"""
        points = walk(Compact([0.0], [1.0]).begin([0.1]))
        assert len(points) == 11
        assert points[-1] == (1.0,)


# =============================================================================
# ОБРАТНЫЙ ОБХОД
# =============================================================================


class TestReverseTraversal:
    """Тесты обратного обхода"""

    def test_starts_at_high(self, square: Compact) -> None:
        iterator = square.end()
        assert not iterator.is_forward
        assert iterator.get_point().coords == (2.0, 2.0)

    def test_reverse_order(self) -> None:
        compact = Compact([0.0, 0.0], [1.0, 1.0])
        assert walk(compact.end()) == [
            (1.0, 1.0),
            (0.0, 1.0),
            (1.0, 0.0),
            (0.0, 0.0),
        ]

    def test_reverse_ends_at_low(self) -> None:
        iterator = Compact([0.0], [6.0]).end([3.0])
        assert iterator.advance() == ResultCode.SUCCESS
        assert iterator.advance() == ResultCode.SUCCESS
        assert iterator.get_point().coords == (0.0,)
        assert iterator.advance() == ResultCode.OUT_OF_BOUNDS

    def test_grid_reverse(self, square: Compact) -> None:
        forward = [p.coords for p in square.grid()]
        backward = [p.coords for p in square.grid(reverse=True)]
        assert sorted(forward) == sorted(backward)
        assert backward[0] == (2.0, 2.0)


# =============================================================================
# НАПРАВЛЕНИЕ
# =============================================================================


class TestSetDirection:
    """Тесты set_direction"""

    def test_default_order(self, square: Compact) -> None:
        iterator = square.begin()
        assert iterator.order == (0, 1)
        assert iterator.direction.coords == (0.0, 1.0)

    def test_swapped_order(self, square: Compact) -> None:
        """[1, 0]: ось 1 меняется быстрее оси 0"""
        iterator = square.begin()
        iterator.set_direction(Vector([1.0, 0.0]))
        assert iterator.order == (1, 0)
        assert walk(iterator)[:4] == [
            (0.0, 0.0),
            (0.0, 1.0),
            (0.0, 2.0),
            (1.0, 0.0),
        ]

    def test_grid_with_direction(self, square: Compact) -> None:
        points = [p.coords for p in square.grid(direction=[1, 0])]
        assert points[1] == (0.0, 1.0)
        assert len(points) == 9

    def test_three_axes(self) -> None:
        iterator = Compact([0.0, 0.0, 0.0], [1.0, 1.0, 1.0]).begin()
        iterator.set_direction([2.0, 0.0, 1.0])
        assert iterator.order == (1, 2, 0)

    def test_near_integral_accepted(self, square: Compact) -> None:
        iterator = square.begin()
        iterator.set_direction([1.0 + 1e-9, 0.0])
        assert iterator.order == (1, 0)

    def test_duplicate_rejected(self, square: Compact) -> None:
        iterator = square.begin()
        with pytest.raises(WrongArgumentError, match="share value"):
            iterator.set_direction(Vector([0.0, 0.0]))
        assert iterator.order == (0, 1)

    @pytest.mark.parametrize(
        "direction",
        [
            [0.5, 1.0],
            [0.0, 2.0],
            [-1.0, 0.0],
            [0.0, float("inf")],
        ],
    )
    def test_not_a_permutation_rejected(self, square: Compact, direction: list[float]) -> None:
        iterator = square.begin()
        with pytest.raises(WrongArgumentError, match="is not an axis index"):
            iterator.set_direction(direction)

    def test_wrong_dimension(self, square: Compact) -> None:
        with pytest.raises(WrongDimensionError):
            square.begin().set_direction([0.0])

    def test_none(self, square: Compact) -> None:
        with pytest.raises(BadReferenceError):
            square.begin().set_direction(None)


# =============================================================================
# ШАГ
# =============================================================================


class TestStep:
    """Тесты шага итератора"""

    def test_default_step_is_ones(self, square: Compact) -> None:
        assert square.begin().step.coords == (1.0, 1.0)

    @pytest.mark.parametrize("step", [[0.0, 1.0], [1.0, -1.0], [float("inf"), 1.0]])
    def test_invalid_step_rejected(self, square: Compact, step: list[float]) -> None:
        with pytest.raises(WrongArgumentError, match="must be positive and finite"):
            square.begin(step)

    def test_step_dimension_mismatch(self, square: Compact) -> None:
        with pytest.raises(WrongDimensionError):
            square.begin([1.0])

    def test_non_dividing_step_stops_at_overshoot(self) -> None:
        """[0, 5] с шагом 2: 0, 2, 4; шаг в 6 выходит за компакт"""
        iterator = Compact([0.0], [5.0]).begin([2.0])
        assert walk(iterator) == [(0.0,), (2.0,), (4.0,)]
        assert iterator.is_exhausted

    def test_failed_step_keeps_point(self) -> None:
        """Неудачный advance() не меняет текущую точку"""
        iterator = Compact([0.0, 0.0], [3.0, 1.0]).begin([2.0, 1.0])
        assert iterator.advance() == ResultCode.SUCCESS
        assert iterator.get_point().coords == (2.0, 0.0)
        assert iterator.advance() == ResultCode.OUT_OF_BOUNDS
        assert iterator.get_point().coords == (2.0, 0.0)

    def test_step_is_copied(self, square: Compact) -> None:
        step = Vector([1.0, 1.0])
        iterator = square.begin(step)
        step.set_coord(0, 100.0)
        assert iterator.step.coords == (1.0, 1.0)

    def test_coarse_tolerance_snaps_step(self) -> None:
        """С толерантностью 0.1 шаг 0.95 прилипает к границе 1.0"""
        compact = Compact([0.0], [1.0], config=GeometryConfig(tolerance=0.1))
        assert walk(compact.begin([0.95])) == [(0.0,), (1.0,)]


# =============================================================================
# БЕСКОНЕЧНЫЕ ГРАНИЦЫ
# =============================================================================


class TestInfiniteBounds:
    """Обход компактов с ±inf в углах"""

    def test_half_strip_forward(self) -> None:
        """Вдоль бесконечной оси обход не заканчивается"""
        compact = Compact([0.0, 0.0], [1.0, INF])
        points = [p.coords for p in islice(compact.begin(), 5)]
        assert points == [
            (0.0, 0.0),
            (1.0, 0.0),
            (0.0, 1.0),
            (1.0, 1.0),
            (0.0, 2.0),
        ]
        for coords in points:
            assert compact.is_contains(Vector(coords))

    def test_infinite_start_cannot_move(self) -> None:
        """Из -inf шаг не сдвигает точку: сразу OUT_OF_BOUNDS"""
        iterator = Compact([-INF], [0.0]).begin()
        assert iterator.get_point().coords == (-INF,)
        assert iterator.advance() == ResultCode.OUT_OF_BOUNDS
        assert iterator.is_exhausted
        assert iterator.get_point().coords == (-INF,)

    def test_reverse_from_infinity(self) -> None:
        iterator = Compact([0.0], [INF]).end()
        assert iterator.advance() == ResultCode.OUT_OF_BOUNDS
        assert iterator.get_point().coords == (INF,)

    def test_degenerate_at_infinity(self) -> None:
        iterator = Compact([INF], [INF]).begin()
        assert iterator.advance() == ResultCode.OUT_OF_BOUNDS
        assert iterator.is_exhausted


# =============================================================================
# ВЛАДЕНИЕ ДАННЫМИ
# =============================================================================


class TestIteratorOwnership:
    """Итератор независим от исходного компакта и от выданных точек"""

    def test_get_point_returns_copy(self, square: Compact) -> None:
        iterator = square.begin()
        point = iterator.get_point()
        point.set_coord(0, 1.5)
        assert iterator.get_point().coords == (0.0, 0.0)
        assert iterator.get_point() is not iterator.get_point()

    def test_iterator_owns_compact(self) -> None:
        low = Vector([0.0])
        compact = Compact(low, [2.0])
        iterator = compact.begin()
        low.set_coord(0, -10.0)
        assert walk(iterator) == [(0.0,), (1.0,), (2.0,)]

    def test_none_compact(self) -> None:
        with pytest.raises(BadReferenceError):
            CompactIterator(None)

    def test_independent_iterators(self, square: Compact) -> None:
        first = square.begin()
        second = square.begin()
        first.advance()
        assert second.get_point().coords == (0.0, 0.0)
