"""
GeometryConfig — конфигурация геометрического ядра

Immutable Pydantic модель. Передаётся явно в Compact и наследуется
производными компактами (intersection / add / make_convex) и итераторами.
"""

from pydantic import BaseModel, Field, field_validator

from src.core.math.norms import Norm
from src.core.math.numerical_safeguards import EPS_COORD, is_valid_float


class GeometryConfig(BaseModel):
    """
    Параметры сравнения координат.

    - tolerance: толерантность сравнения координат (границы, индексы осей,
      детекция оси слияния, принадлежность точки компакту)
    - touching_intersects: считать ли касающиеся гранью компакты
      пересекающимися (по умолчанию нет — пересечение строгое)
    - equality_norm: норма для Compact.equals
    """

    tolerance: float = Field(
        default=EPS_COORD, gt=0, description="Толерантность сравнения координат"
    )
    touching_intersects: bool = Field(
        default=False, description="Касание гранью считается пересечением"
    )
    equality_norm: Norm = Field(
        default=Norm.L2, description="Норма для сравнения компактов"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("tolerance")
    @classmethod
    def validate_tolerance_finite(cls, v: float) -> float:
        """
        Толерантность должна быть конечной и разумно малой.

        При tolerance >= 1 шаг итератора 1.0 неотличим от границы.
        """
        if not is_valid_float(v):
            raise ValueError(f"tolerance must be finite, got {v}")
        if v >= 1.0:
            raise ValueError(f"tolerance {v} is too large (must be < 1.0)")
        return v


DEFAULT_CONFIG = GeometryConfig()
