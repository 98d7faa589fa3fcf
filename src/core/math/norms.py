"""
Norms — L1 / L2 / L∞ нормы конечномерных векторов

Формулы:
    L1:  ||x||_1   = Σ |x_i|
    L2:  ||x||_2   = sqrt(Σ x_i^2)
    L∞:  ||x||_inf = max |x_i|

Для пустой последовательности все нормы равны 0.0.
"""

from enum import Enum

import numpy as np
import numpy.typing as npt


class Norm(str, Enum):
    """Тип нормы"""

    L1 = "l1"
    L2 = "l2"
    INF = "inf"


# Параметр ord для np.linalg.norm
_ORD = {
    Norm.L1: 1,
    Norm.L2: 2,
    Norm.INF: np.inf,
}


def _norm(coords: npt.ArrayLike, ord_: float) -> float:
    x = np.asarray(coords, dtype=np.float64)
    # max() пустого массива не определён
    if x.size == 0:
        return 0.0
    return float(np.linalg.norm(x, ord=ord_))


def norm_l1(coords: npt.ArrayLike) -> float:
    """Сумма модулей координат."""
    return _norm(coords, 1)


def norm_l2(coords: npt.ArrayLike) -> float:
    """Евклидова норма."""
    return _norm(coords, 2)


def norm_inf(coords: npt.ArrayLike) -> float:
    """Максимум модулей координат (0.0 для пустого вектора)."""
    return _norm(coords, np.inf)


def compute_norm(coords: npt.ArrayLike, kind: Norm = Norm.L2) -> float:
    """
    Вычисление нормы выбранного типа.

    Args:
        coords: Координаты вектора
        kind: Тип нормы (default: L2)

    Returns:
        Значение нормы (>= 0)

    Raises:
        ValueError: Если kind не является известной нормой

    Examples:
        >>> compute_norm([3.0, -4.0], Norm.L1)
        7.0
        >>> compute_norm([3.0, -4.0], Norm.L2)
        5.0
        >>> compute_norm([3.0, -4.0], Norm.INF)
        4.0
    """
    return _norm(coords, _ORD[Norm(kind)])
