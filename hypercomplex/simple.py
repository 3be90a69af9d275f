"""
Simple Complexes

One-dimensional complexes ... → C[i] → C[i ∓ 1] → ... in the classic
single-index vocabulary, built on top of a one-dimensional HyperComplex.
"""

from typing import Optional, Tuple, Union

from .errors import ConstructionError
from .factory import ChainFactory, ChainType, MapFactory, MorphismType
from .hyper import AbsHyperComplex, HyperComplex
from .layout import Bound, Direction, axis_range

SimpleIndex = Union[int, Tuple[int]]


def _as_tuple(i: SimpleIndex) -> Tuple[int, ...]:
    return i if isinstance(i, tuple) else (i,)


def _map_key(i_or_axis, index) -> Tuple[int, Tuple[int, ...]]:
    # (i) or the generic (axis, index)
    if index is None:
        return 1, _as_tuple(i_or_axis)
    return i_or_axis, _as_tuple(index)


class AbsSimpleComplex(AbsHyperComplex[ChainType, MorphismType]):
    """
    Interface of simple complexes.

    Entries are addressed by plain integers, ``C[i]``; maps always run
    along the only axis. Tuple indices ``(i,)`` are accepted as well.
    """

    def get(self, i: SimpleIndex) -> ChainType:
        return self.underlying_complex().get(_as_tuple(i))

    def has_index(self, i: SimpleIndex) -> bool:
        return self.underlying_complex().has_index(_as_tuple(i))

    def can_compute_index(self, i: SimpleIndex) -> bool:
        return self.underlying_complex().can_compute_index(_as_tuple(i))

    def get_map(self, i_or_axis: SimpleIndex, index: Optional[SimpleIndex] = None) -> MorphismType:
        """
        The map C[i] → C[i ∓ 1], sign depending on the direction.

        Called as ``get_map(i)`` or, like any hyper complex, as
        ``get_map(axis, index)``; the only axis is 1.
        """
        return self.underlying_complex().get_map(*_map_key(i_or_axis, index))

    def has_map(self, i_or_axis: SimpleIndex, index: Optional[SimpleIndex] = None) -> bool:
        return self.underlying_complex().has_map(*_map_key(i_or_axis, index))

    def can_compute_map(self, i_or_axis: SimpleIndex, index: Optional[SimpleIndex] = None) -> bool:
        return self.underlying_complex().can_compute_map(*_map_key(i_or_axis, index))

    def direction(self, axis: int = 1) -> Direction:
        return self.underlying_complex().direction(axis)

    def is_chain_complex(self) -> bool:
        return self.direction() is Direction.CHAIN

    def is_cochain_complex(self) -> bool:
        return not self.is_chain_complex()

    def has_upper_bound(self, axis: int = 1) -> bool:
        return self.underlying_complex().has_upper_bound(axis)

    def has_lower_bound(self, axis: int = 1) -> bool:
        return self.underlying_complex().has_lower_bound(axis)

    def upper_bound(self, axis: int = 1) -> Bound:
        return self.underlying_complex().upper_bound(axis)

    def lower_bound(self, axis: int = 1) -> Bound:
        return self.underlying_complex().lower_bound(axis)

    def is_bounded(self) -> bool:
        return self.has_upper_bound() and self.has_lower_bound()

    def range(self):
        """
        Indices between the bounds, in the order the maps run through them.

        Raises:
            UnboundedError: if either bound is unknown
        """
        return axis_range(self.direction(), self.upper_bound(), self.lower_bound())

    def map_range(self):
        """Like ``range()`` but without the last index, which has no map going out."""
        return axis_range(self.direction(), self.upper_bound(), self.lower_bound(), maps=True)


class SimpleComplexWrapper(AbsSimpleComplex[ChainType, MorphismType]):
    """Simple complex view of a one-dimensional hyper complex."""

    def __init__(self, hc: AbsHyperComplex[ChainType, MorphismType]):
        if hc.dim() != 1:
            raise ConstructionError(
                detail=f"hypercomplex must be one-dimensional, got dimension {hc.dim()}"
            )
        self.hc = hc

    def underlying_complex(self) -> AbsHyperComplex[ChainType, MorphismType]:
        return self.hc

    def __repr__(self) -> str:
        return f"SimpleComplexWrapper({self.hc!r})"


class SimpleComplex(SimpleComplexWrapper[ChainType, MorphismType]):
    """
    Simple complex owning its one-dimensional HyperComplex.

    Args:
        chain_factory: Produces C[i]; it is handed the underlying
            HyperComplex and 1-tuples as indices
        map_factory: Produces the map going out of C[i] (axis 1)
        direction: 'chain' or 'cochain'
        upper_bound: Optional upper bound
        lower_bound: Optional lower bound
    """

    def __init__(self, chain_factory: ChainFactory[ChainType],
                 map_factory: MapFactory[MorphismType],
                 direction: Union[Direction, str] = Direction.CHAIN,
                 upper_bound: Optional[int] = None,
                 lower_bound: Optional[int] = None):
        super().__init__(HyperComplex(1, chain_factory, map_factory, [direction],
                                      upper_bounds=[upper_bound],
                                      lower_bounds=[lower_bound]))
