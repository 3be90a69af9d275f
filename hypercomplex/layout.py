"""
Complex Layout

Construction-time metadata of a hyper complex: the number of axes, the
direction of the maps along each axis and the optional bounds per axis
and side. A layout is immutable once built.
"""

from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from typing import Any, Optional, Sequence, Tuple, Union

from .errors import AxisError, ConstructionError, IndexDimensionError, UnboundedError


class Direction(str, Enum):
    """Direction of the maps along one axis."""
    CHAIN = "chain"      # maps decrease the index
    COCHAIN = "cochain"  # maps increase the index

    @property
    def step(self) -> int:
        return -1 if self is Direction.CHAIN else 1

    @classmethod
    def coerce(cls, value: Union["Direction", str]) -> "Direction":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lstrip(":"))
        except ValueError:
            raise ConstructionError(
                detail=f"unknown direction {value!r}; expected 'chain' or 'cochain'"
            ) from None


Bound = Optional[int]

UPPER = "upper"
LOWER = "lower"


def _is_int(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _coerce_bounds(bounds: Optional[Sequence[Bound]], d: int, side: str) -> Tuple[Bound, ...]:
    if bounds is None:
        return (None,) * d
    bounds = tuple(bounds)
    if len(bounds) != d:
        raise ConstructionError(
            detail=f"expected {d} {side} bounds, got {len(bounds)}"
        )
    for b in bounds:
        if b is not None and not _is_int(b):
            raise ConstructionError(detail=f"{side} bound {b!r} is not an integer")
    return tuple(None if b is None else int(b) for b in bounds)


@dataclass(frozen=True)
class ComplexLayout:
    """
    Shape of a hyper complex.

    Attributes:
        dim: Number of axes d (at least 1)
        directions: One Direction per axis
        upper_bounds: Per axis, the index beyond which entries are zero (or None)
        lower_bounds: Per axis, the index below which entries are zero (or None)

    Bounds are not cross-checked against each other.
    """
    dim: int
    directions: Tuple[Direction, ...]
    upper_bounds: Tuple[Bound, ...] = ()
    lower_bounds: Tuple[Bound, ...] = ()

    def __post_init__(self):
        if not _is_int(self.dim) or self.dim <= 0:
            raise ConstructionError(
                detail=f"can not create zero or negative dimensional hypercomplex (d={self.dim!r})"
            )
        directions = tuple(Direction.coerce(x) for x in self.directions)
        if len(directions) != self.dim:
            raise ConstructionError(
                detail=f"expected {self.dim} directions, got {len(directions)}"
            )
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "directions", directions)
        object.__setattr__(self, "upper_bounds",
                           _coerce_bounds(self.upper_bounds or None, self.dim, UPPER))
        object.__setattr__(self, "lower_bounds",
                           _coerce_bounds(self.lower_bounds or None, self.dim, LOWER))

    def check_axis(self, axis: Any) -> int:
        """Return ``axis`` if it lies in ``1..dim``; raise AxisError otherwise."""
        if not _is_int(axis) or not 1 <= axis <= self.dim:
            raise AxisError(axis=axis, detail=f"must be an integer in 1..{self.dim}")
        return int(axis)

    def check_index(self, index: Any) -> Tuple[int, ...]:
        """Normalise ``index`` to a tuple of ``dim`` integers."""
        if not isinstance(index, tuple):
            raise IndexDimensionError(index=index, detail="indices must be tuples")
        if len(index) != self.dim:
            raise IndexDimensionError(
                index=index,
                detail=f"expected {self.dim} components, got {len(index)}"
            )
        if not all(_is_int(i) for i in index):
            raise IndexDimensionError(index=index, detail="components must be integers")
        return tuple(int(i) for i in index)

    def direction(self, axis: int) -> Direction:
        return self.directions[self.check_axis(axis) - 1]

    def upper_bound(self, axis: int) -> Bound:
        return self.upper_bounds[self.check_axis(axis) - 1]

    def lower_bound(self, axis: int) -> Bound:
        return self.lower_bounds[self.check_axis(axis) - 1]

    def bound(self, axis: int, side: str) -> Bound:
        if side == UPPER:
            return self.upper_bound(axis)
        if side == LOWER:
            return self.lower_bound(axis)
        raise ValueError(f"Unknown side: {side}")


def shift(index: Tuple[int, ...], axis: int, step: int) -> Tuple[int, ...]:
    """Move ``index`` by ``step`` along ``axis`` (1-based)."""
    k = axis - 1
    return index[:k] + (index[k] + step,) + index[k + 1:]


def axis_range(direction: Direction, upper: Bound, lower: Bound,
               axis: int = 1, maps: bool = False) -> range:
    """
    Traversal of one axis in the direction of its maps.

    Args:
        direction: Direction of the axis
        upper: Upper bound of the axis
        lower: Lower bound of the axis
        axis: Axis number, only used for error reporting
        maps: Drop the last index, which has no successor to map into

    Returns:
        Descending range for chain axes, ascending for cochain axes
    """
    if upper is None or lower is None:
        raise UnboundedError(axis=axis)
    cut = 1 if maps else 0
    if direction is Direction.CHAIN:
        return range(upper, lower - 1 + cut, -1)
    return range(lower, upper + 1 - cut)
