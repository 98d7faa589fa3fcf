"""
Core math modules

Численные примитивы координатной геометрии с гарантией стабильности.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_COORD,
    # NaN/Inf checks
    is_nan,
    is_valid_float,
    # Epsilon comparisons
    compare_with_tolerance,
    is_close_abs,
    is_integral,
    snap_to,
    # Validation
    validate_positive,
)

# Norms
from src.core.math.norms import (
    Norm,
    compute_norm,
    norm_inf,
    norm_l1,
    norm_l2,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_COORD",
    # Numerical Safeguards — NaN/Inf checks
    "is_nan",
    "is_valid_float",
    # Numerical Safeguards — Epsilon comparisons
    "compare_with_tolerance",
    "is_close_abs",
    "is_integral",
    "snap_to",
    # Numerical Safeguards — Validation
    "validate_positive",
    # Norms
    "Norm",
    "compute_norm",
    "norm_inf",
    "norm_l1",
    "norm_l2",
]
