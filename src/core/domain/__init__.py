"""
Domain models and value objects.

Contains the geometric entities: Vector, PointSet, Compact, CompactIterator.
"""

from src.core.domain.compact import (
    Compact,
    CompactIterator,
    add,
    create_compact,
    intersection,
    make_convex,
    try_add,
)
from src.core.domain.point_set import PointSet
from src.core.domain.point_set import intersect as intersect_sets
from src.core.domain.point_set import union as union_sets
from src.core.domain.vector import Vector, VectorLike, as_vector, dot, equals, mul, sub
from src.core.domain.vector import add as add_vectors

__all__ = [
    # Vector
    "Vector",
    "VectorLike",
    "as_vector",
    "add_vectors",
    "sub",
    "mul",
    "dot",
    "equals",
    # Point set
    "PointSet",
    "union_sets",
    "intersect_sets",
    # Compact
    "Compact",
    "CompactIterator",
    "create_compact",
    "intersection",
    "add",
    "try_add",
    "make_convex",
]
