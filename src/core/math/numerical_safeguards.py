"""
Numerical Safeguards — Safe Math Primitives для координатной геометрии

Модуль обеспечивает численную устойчивость геометрических операций:
- NaN/Inf проверки координат
- Epsilon-сравнения float с учётом накопленной погрешности шагов
- Проверка целочисленности (индексы осей задаются как float)
- "Прилипание" к границе компакта при попадании в пределы толерантности

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN никогда не попадает в координаты (отсекается при создании)
2. Сравнения координат всегда выполняются с толерантностью
   (совпадающие бесконечности равны, а не NaN)
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final, Union

import numpy as np
import numpy.typing as npt

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Толерантность сравнения координат (границы компакта, индексы осей,
# детекция оси слияния).
EPS_COORD: Final[float] = 1e-5


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def is_nan(value: float) -> bool:
    """Проверка на NaN (Inf считается допустимой координатой)."""
    return math.isnan(value)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def safe_difference(a: npt.ArrayLike, b: npt.ArrayLike) -> np.ndarray:
    """a - b, где совпадающие значения (в том числе inf == inf) дают 0.0."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        return np.where(a == b, 0.0, a - b)


def compare_with_tolerance(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    tol: float = EPS_COORD,
) -> Union[int, np.ndarray]:
    """
    Сравнение двух float с учётом толерантности.

    Работает и покоординатно: для массивов возвращается массив результатов.

    Args:
        a: Первое значение (или массив)
        b: Второе значение (или массив той же формы)
        tol: Абсолютная толерантность (default: EPS_COORD)

    Returns:
        -1 если a < b (с учётом tol)
         0 если a ≈ b (в пределах tol)
        +1 если a > b (с учётом tol)

    Examples:
        >>> compare_with_tolerance(1.0, 2.0)
        -1
        >>> compare_with_tolerance(2.0, 1.0)
        1
        >>> compare_with_tolerance(1.0, 1.0 + 1e-7)
        0
        >>> compare_with_tolerance(float("inf"), float("inf"))
        0
    """
    diff = safe_difference(a, b)
    result = np.where(np.abs(diff) <= tol, 0, np.sign(diff)).astype(int)

    if result.ndim == 0:
        return int(result)
    return result


def is_close_abs(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    tol: float = EPS_COORD,
) -> Union[bool, np.ndarray]:
    """
    Абсолютное сравнение: |a - b| < tol.

    Строгое неравенство: значение ровно на tol уже считается различным.
    Используется для проверки "координата достигла границы".
    """
    close = np.abs(safe_difference(a, b)) < tol

    if close.ndim == 0:
        return bool(close)
    return close


def is_integral(value: float, tol: float = EPS_COORD) -> bool:
    """
    Проверка, что float представляет целое число в пределах толерантности.

    Индексы осей в векторе направления хранятся как float, поэтому
    2.0000001 считается корректным индексом 2, а 1.5 — нет.

    Examples:
        >>> is_integral(2.0)
        True
        >>> is_integral(2.0 + 1e-9)
        True
        >>> is_integral(1.5)
        False
    """
    if not is_valid_float(value):
        return False
    return abs(value - round(value)) <= tol


def snap_to(value: float, target: float, tol: float = EPS_COORD) -> float:
    """
    Прилипание значения к target, если они отличаются не больше чем на tol.

    Не даёт погрешности шагов (0.1 * 10 != 1.0) накапливаться и
    выводить точку за границу компакта.

    Examples:
        >>> snap_to(0.9999999, 1.0)
        1.0
        >>> snap_to(0.5, 1.0)
        0.5
    """
    if compare_with_tolerance(value, target, tol) == 0:
        return target
    return value


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: float, name: str, eps: float = 0.0) -> None:
    """
    Валидация, что значение положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        eps: Минимальный порог (default: 0.0)

    Raises:
        ValueError: Если value <= eps или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= eps:
        raise ValueError(f"{name} must be positive (> {eps}), got {value}")
