"""
Double Complexes

Two-dimensional complexes with entries D[i, j], horizontal maps
D[i, j] → D[i ± 1, j] (axis 1) and vertical maps D[i, j] → D[i, j ± 1]
(axis 2). The sign of each step depends on whether the rows/columns are
chain or cochain complexes.

AbsDoubleComplex provides the vocabulary. DoubleComplexWrapper puts it on
top of a two-dimensional HyperComplex; DoubleComplexOfMorphisms keeps its
own caches and takes one factory for the horizontal and one for the
vertical maps.
"""

from typing import Dict, List, Optional, Tuple, Union

from .completeness import check_completeness
from .errors import (
    ConstructionError, FactoryNotImplementedError, IndexUnavailableError, MapUnavailableError,
)
from .factory import ChainFactory, ChainType, MapFactory, MorphismType
from .hyper import AbsHyperComplex, KeyedLocks
from .layout import Bound, ComplexLayout, Direction, axis_range

Index = Tuple[int, int]
IndexArg = Union[int, Index]

HORIZONTAL = 1
VERTICAL = 2


def _pair(i: IndexArg, j: Optional[int]) -> Index:
    return i if j is None else (i, j)


class AbsDoubleComplex(AbsHyperComplex[ChainType, MorphismType]):
    """
    Interface of double complexes.

    Positions can be given as ``(i, j)`` tuples or as two integers.
    Bounds have names: right/left for the first index, upper/lower for the
    second one. ``upper_bound`` and friends still accept an explicit axis.

    Bounds do not restrict which entries may be requested; that is up to
    ``can_compute_index``.
    """

    _is_complete: Optional[bool] = None

    # --- entries ---------------------------------------------------------

    def get(self, i: IndexArg, j: Optional[int] = None) -> ChainType:
        return self.underlying_complex().get(_pair(i, j))

    def has_index(self, i: IndexArg, j: Optional[int] = None) -> bool:
        """
        True if D[i, j] is already known.

        False does not mean D[i, j] can not be computed; ask
        ``can_compute_index`` for that.
        """
        return self.underlying_complex().has_index(_pair(i, j))

    def can_compute_index(self, i: IndexArg, j: Optional[int] = None) -> bool:
        """True if D[i, j] is known or can be computed."""
        return self.underlying_complex().can_compute_index(_pair(i, j))

    # --- maps ------------------------------------------------------------

    def horizontal_map(self, i: IndexArg, j: Optional[int] = None) -> MorphismType:
        """The map D[i, j] → D[i ± 1, j], sign depending on the horizontal direction."""
        return self.get_map(HORIZONTAL, _pair(i, j))

    def has_horizontal_map(self, i: IndexArg, j: Optional[int] = None) -> bool:
        return self.has_map(HORIZONTAL, _pair(i, j))

    def can_compute_horizontal_map(self, i: IndexArg, j: Optional[int] = None) -> bool:
        return self.can_compute_map(HORIZONTAL, _pair(i, j))

    def vertical_map(self, i: IndexArg, j: Optional[int] = None) -> MorphismType:
        """The map D[i, j] → D[i, j ± 1], sign depending on the vertical direction."""
        return self.get_map(VERTICAL, _pair(i, j))

    def has_vertical_map(self, i: IndexArg, j: Optional[int] = None) -> bool:
        return self.has_map(VERTICAL, _pair(i, j))

    def can_compute_vertical_map(self, i: IndexArg, j: Optional[int] = None) -> bool:
        return self.can_compute_map(VERTICAL, _pair(i, j))

    # --- directions ------------------------------------------------------

    def horizontal_direction(self) -> Direction:
        """Direction of the rows: CHAIN if the horizontal maps decrease i."""
        return self.direction(HORIZONTAL)

    def vertical_direction(self) -> Direction:
        """Direction of the columns: CHAIN if the vertical maps decrease j."""
        return self.direction(VERTICAL)

    # --- bounds ----------------------------------------------------------

    def has_upper_bound(self, axis: int = VERTICAL) -> bool:
        return self.underlying_complex().has_upper_bound(axis)

    def has_lower_bound(self, axis: int = VERTICAL) -> bool:
        return self.underlying_complex().has_lower_bound(axis)

    def upper_bound(self, axis: int = VERTICAL) -> Bound:
        """B such that D[i, j] is zero for j > B (or None)."""
        return self.underlying_complex().upper_bound(axis)

    def lower_bound(self, axis: int = VERTICAL) -> Bound:
        """B such that D[i, j] is zero for j < B (or None)."""
        return self.underlying_complex().lower_bound(axis)

    def has_right_bound(self) -> bool:
        return self.has_upper_bound(HORIZONTAL)

    def has_left_bound(self) -> bool:
        return self.has_lower_bound(HORIZONTAL)

    def right_bound(self) -> Bound:
        """B such that D[i, j] is zero for i > B (or None)."""
        return self.upper_bound(HORIZONTAL)

    def left_bound(self) -> Bound:
        """B such that D[i, j] is zero for i < B (or None)."""
        return self.lower_bound(HORIZONTAL)

    def is_horizontally_bounded(self) -> bool:
        return self.has_right_bound() and self.has_left_bound()

    def is_vertically_bounded(self) -> bool:
        return self.has_upper_bound() and self.has_lower_bound()

    def is_bounded(self) -> bool:
        return self.is_horizontally_bounded() and self.is_vertically_bounded()

    def horizontal_range(self):
        return axis_range(self.horizontal_direction(), self.right_bound(), self.left_bound(),
                          axis=HORIZONTAL)

    def vertical_range(self):
        return axis_range(self.vertical_direction(), self.upper_bound(), self.lower_bound(),
                          axis=VERTICAL)

    def horizontal_map_range(self):
        return axis_range(self.horizontal_direction(), self.right_bound(), self.left_bound(),
                          axis=HORIZONTAL, maps=True)

    def vertical_map_range(self):
        return axis_range(self.vertical_direction(), self.upper_bound(), self.lower_bound(),
                          axis=VERTICAL, maps=True)

    # --- completeness ----------------------------------------------------

    def is_complete(self) -> bool:
        """
        True if every known non-zero entry sits on an island of the grid
        that is fenced in by known entries or by entries that can not be
        computed. At least one entry must be known.

        A True verdict is cached for the lifetime of the complex and never
        recomputed. With several islands, one that has not been touched
        yet goes unnoticed; see ``hypercomplex.completeness``.
        """
        if self._is_complete:
            return True
        if not check_completeness(self):
            return False
        self._is_complete = True
        return True


class DoubleComplexWrapper(AbsDoubleComplex[ChainType, MorphismType]):
    """Double complex view of a two-dimensional hyper complex."""

    def __init__(self, hc: AbsHyperComplex[ChainType, MorphismType]):
        if hc.dim() != 2:
            raise ConstructionError(
                detail=f"hypercomplex must be two-dimensional, got dimension {hc.dim()}"
            )
        self.hc = hc
        self._is_complete = None

    def underlying_complex(self) -> AbsHyperComplex[ChainType, MorphismType]:
        return self.hc

    def __repr__(self) -> str:
        return f"DoubleComplexWrapper({self.hc!r})"


# =============================================================================
# Factories with (i, j) signatures
# =============================================================================

class DoubleChainFactory(ChainFactory[ChainType]):
    """
    Chain factory for double complexes.

    Subclasses implement ``produce_entry(dc, i, j)`` and
    ``can_produce_entry(dc, i, j)``. The first argument is always the
    double complex itself, so that entries computed earlier are available.
    """

    def produce(self, complex, index):
        return self.produce_entry(complex, *index)

    def can_produce(self, complex, index):
        return self.can_produce_entry(complex, *index)

    def produce_entry(self, dc, i: int, j: int) -> ChainType:
        raise FactoryNotImplementedError(index=(i, j), factory=self, detail="production")

    def can_produce_entry(self, dc, i: int, j: int) -> bool:
        raise FactoryNotImplementedError(
            index=(i, j), factory=self,
            detail="testing producibility"
        )


class DoubleMapFactory(MapFactory[MorphismType]):
    """
    Map factory for one direction of a double complex.

    Subclasses implement ``produce_map(dc, i, j)`` and
    ``can_produce_map(dc, i, j)`` for the map going out of D[i, j]; a
    concrete instance knows whether it makes horizontal or vertical maps.
    """

    def produce(self, complex, axis, index):
        return self.produce_map(complex, *index)

    def can_produce(self, complex, axis, index):
        return self.can_produce_map(complex, *index)

    def produce_map(self, dc, i: int, j: int) -> MorphismType:
        raise FactoryNotImplementedError(index=(i, j), factory=self, detail="production")

    def can_produce_map(self, dc, i: int, j: int) -> bool:
        raise FactoryNotImplementedError(
            index=(i, j), factory=self,
            detail="testing producibility"
        )


# =============================================================================
# Standalone double complex
# =============================================================================

class DoubleComplexOfMorphisms(AbsDoubleComplex[ChainType, MorphismType]):
    """
    Lazy double complex holding its own caches.

    Args:
        chain_factory: Produces D[i, j]
        horizontal_map_factory: Produces D[i, j] → D[i ± 1, j]
        vertical_map_factory: Produces D[i, j] → D[i, j ± 1]
        horizontal_direction: 'chain' or 'cochain' for the rows
        vertical_direction: 'chain' or 'cochain' for the columns
        right_bound: Entries with i > right_bound are zero
        left_bound: Entries with i < left_bound are zero
        upper_bound: Entries with j > upper_bound are zero
        lower_bound: Entries with j < lower_bound are zero
    """

    def __init__(self, chain_factory: ChainFactory[ChainType],
                 horizontal_map_factory: MapFactory[MorphismType],
                 vertical_map_factory: MapFactory[MorphismType],
                 horizontal_direction: Union[Direction, str] = Direction.CHAIN,
                 vertical_direction: Union[Direction, str] = Direction.CHAIN,
                 right_bound: Optional[int] = None,
                 left_bound: Optional[int] = None,
                 upper_bound: Optional[int] = None,
                 lower_bound: Optional[int] = None):
        self.layout = ComplexLayout(2, (horizontal_direction, vertical_direction),
                                    (right_bound, upper_bound), (left_bound, lower_bound))
        self.chain_factory = chain_factory
        self.horizontal_map_factory = horizontal_map_factory
        self.vertical_map_factory = vertical_map_factory

        self._chains: Dict[Index, ChainType] = {}
        self._horizontal_maps: Dict[Index, MorphismType] = {}
        self._vertical_maps: Dict[Index, MorphismType] = {}
        self._locks = KeyedLocks()
        self._is_complete = None  # unknown

    def underlying_complex(self) -> "DoubleComplexOfMorphisms":
        return self

    # --- entries ---------------------------------------------------------

    def get(self, i: IndexArg, j: Optional[int] = None) -> ChainType:
        index = self.layout.check_index(_pair(i, j))
        return self._locks.produce_once(
            self._chains, index,
            lambda: self.chain_factory.can_produce(self, index),
            lambda: self.chain_factory.produce(self, index),
            lambda: IndexUnavailableError(index=index))

    def has_index(self, i: IndexArg, j: Optional[int] = None) -> bool:
        return self.layout.check_index(_pair(i, j)) in self._chains

    def can_compute_index(self, i: IndexArg, j: Optional[int] = None) -> bool:
        index = self.layout.check_index(_pair(i, j))
        if index in self._chains:
            return True
        return bool(self.chain_factory.can_produce(self, index))

    def cached_indices(self) -> List[Index]:
        return list(self._chains)

    # --- maps ------------------------------------------------------------

    def _map_store(self, axis: int) -> Tuple[Dict[Index, MorphismType], MapFactory]:
        if self.layout.check_axis(axis) == HORIZONTAL:
            return self._horizontal_maps, self.horizontal_map_factory
        return self._vertical_maps, self.vertical_map_factory

    def get_map(self, axis: int, index: Index) -> MorphismType:
        cache, factory = self._map_store(axis)
        index = self.layout.check_index(index)
        return self._locks.produce_once(
            cache, index,
            lambda: factory.can_produce(self, axis, index),
            lambda: factory.produce(self, axis, index),
            lambda: MapUnavailableError(index=index, axis=axis))

    def has_map(self, axis: int, index: Index) -> bool:
        cache, _ = self._map_store(axis)
        return self.layout.check_index(index) in cache

    def can_compute_map(self, axis: int, index: Index) -> bool:
        cache, factory = self._map_store(axis)
        index = self.layout.check_index(index)
        if index in cache:
            return True
        return bool(factory.can_produce(self, axis, index))

    def cached_maps(self) -> List[Tuple[int, Index]]:
        return ([(HORIZONTAL, index) for index in self._horizontal_maps]
                + [(VERTICAL, index) for index in self._vertical_maps])

    # --- properties ------------------------------------------------------

    def direction(self, axis: int) -> Direction:
        return self.layout.direction(axis)

    def dim(self) -> int:
        return 2

    def has_upper_bound(self, axis: int = VERTICAL) -> bool:
        return self.layout.upper_bound(axis) is not None

    def has_lower_bound(self, axis: int = VERTICAL) -> bool:
        return self.layout.lower_bound(axis) is not None

    def upper_bound(self, axis: int = VERTICAL) -> Bound:
        return self.layout.upper_bound(axis)

    def lower_bound(self, axis: int = VERTICAL) -> Bound:
        return self.layout.lower_bound(axis)

    def __repr__(self) -> str:
        return (f"DoubleComplexOfMorphisms(directions=({self.horizontal_direction().value}, "
                f"{self.vertical_direction().value}), cached_entries={len(self._chains)})")
