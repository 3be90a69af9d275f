"""
Hyper Complexes

A hyper complex is a lattice of entries ("chains") indexed by tuples of
d integers, together with maps along each of the d axes. Entries and maps
are produced lazily by factories and cached once produced; the caches
only ever grow.

AbsHyperComplex is the common interface. Its default methods forward to
``underlying_complex()``, so views (simple and double complexes) only
have to point at the object holding the caches. HyperComplex is the
concrete engine.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import IndexUnavailableError, MapUnavailableError
from .factory import (
    AxisMapFactory, ChainFactory, ChainType, Index, MapFactory, MorphismType,
)
from .layout import Bound, ComplexLayout, Direction, LOWER, UPPER, shift

logger = logging.getLogger(__name__)


class KeyedLocks:
    """
    One re-entrant lock per cache key, held only while the key is in use.

    A lock is dropped as soon as no thread holds or waits for it, so keys
    that were cached or turned out to be unavailable leave nothing behind.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Any, list] = {}  # key -> [lock, users]

    @contextmanager
    def hold(self, key: Any) -> Iterator[None]:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.RLock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)

    def produce_once(self, cache: Dict[Any, Any], key: Any,
                     can_produce: Callable[[], bool],
                     produce: Callable[[], Any],
                     unavailable: Callable[[], Exception]) -> Any:
        """
        Return ``cache[key]``, producing and caching it first if needed.

        Concurrent callers for the same key wait for the first one, so
        ``produce`` runs at most once per key. Nothing is cached when
        ``can_produce`` is False (``unavailable()`` is raised) or when
        ``produce`` raises.
        """
        if key in cache:
            return cache[key]
        with self.hold((id(cache), key)):
            if key in cache:
                return cache[key]
            if not can_produce():
                raise unavailable()
            logger.debug("producing %s", key)
            return cache.setdefault(key, produce())


class AbsHyperComplex(Generic[ChainType, MorphismType]):
    """
    Interface of hyper complexes.

    Axes are numbered from 1 to ``dim()``. Every method forwards to
    ``underlying_complex()`` unless a subclass overrides it.
    """

    def underlying_complex(self) -> "AbsHyperComplex":
        raise NotImplementedError(f"underlying_complex not implemented for {type(self).__name__}")

    # --- entries ---------------------------------------------------------

    def get(self, index: Index) -> ChainType:
        return self.underlying_complex().get(index)

    def __getitem__(self, index: Index) -> ChainType:
        return self.get(index)

    def has_index(self, index: Index) -> bool:
        return self.underlying_complex().has_index(index)

    def can_compute_index(self, index: Index) -> bool:
        return self.underlying_complex().can_compute_index(index)

    def cached_indices(self) -> List[Index]:
        return self.underlying_complex().cached_indices()

    # --- maps ------------------------------------------------------------

    def get_map(self, axis: int, index: Index) -> MorphismType:
        return self.underlying_complex().get_map(axis, index)

    def has_map(self, axis: int, index: Index) -> bool:
        return self.underlying_complex().has_map(axis, index)

    def can_compute_map(self, axis: int, index: Index) -> bool:
        return self.underlying_complex().can_compute_map(axis, index)

    def cached_maps(self) -> List[Tuple[int, Index]]:
        return self.underlying_complex().cached_maps()

    # --- properties ------------------------------------------------------

    def direction(self, axis: int) -> Direction:
        return self.underlying_complex().direction(axis)

    def dim(self) -> int:
        return self.underlying_complex().dim()

    def is_complete(self) -> bool:
        return self.underlying_complex().is_complete()

    def has_upper_bound(self, axis: int) -> bool:
        return self.underlying_complex().has_upper_bound(axis)

    def has_lower_bound(self, axis: int) -> bool:
        return self.underlying_complex().has_lower_bound(axis)

    def upper_bound(self, axis: int) -> Bound:
        return self.underlying_complex().upper_bound(axis)

    def lower_bound(self, axis: int) -> Bound:
        return self.underlying_complex().lower_bound(axis)

    def bounds(self, axis: int, side: str) -> Bound:
        """Bound of ``axis`` on ``side`` ('upper' or 'lower'), None if unknown."""
        if side == UPPER:
            return AbsHyperComplex.upper_bound(self, axis)
        if side == LOWER:
            return AbsHyperComplex.lower_bound(self, axis)
        raise ValueError(f"Unknown side: {side}")

    def has_bound(self, axis: int, side: str) -> bool:
        return AbsHyperComplex.bounds(self, axis, side) is not None

    def target_index(self, axis: int, index: Index) -> Index:
        """Index of the codomain of the map going out of ``index`` along ``axis``."""
        return shift(index, axis, AbsHyperComplex.direction(self, axis).step)


class HyperComplex(AbsHyperComplex[ChainType, MorphismType]):
    """
    Lazy d-dimensional complex with cached entries and maps.

    Args:
        d: Number of axes (at least 1)
        chain_factory: Produces the entries
        map_factory: Produces the maps along every axis; a sequence of d
            factories assigns one factory per axis
        directions: 'chain' or 'cochain' for each axis
        upper_bounds: Optional upper bound per axis (None for unknown)
        lower_bounds: Optional lower bound per axis (None for unknown)
    """

    def __init__(self, d: int,
                 chain_factory: ChainFactory[ChainType],
                 map_factory: Union[MapFactory[MorphismType], Sequence[MapFactory[MorphismType]]],
                 directions: Sequence[Union[Direction, str]],
                 upper_bounds: Optional[Sequence[Bound]] = None,
                 lower_bounds: Optional[Sequence[Bound]] = None):
        self.layout = ComplexLayout(d, tuple(directions),
                                    tuple(upper_bounds or ()), tuple(lower_bounds or ()))
        if not isinstance(map_factory, MapFactory):
            map_factory = AxisMapFactory(map_factory)
        self.chain_factory = chain_factory
        self.map_factory = map_factory

        self._chains: Dict[Index, ChainType] = {}
        self._maps: Dict[Tuple[int, Index], MorphismType] = {}
        self._locks = KeyedLocks()
        self._is_complete: Optional[bool] = None

    def underlying_complex(self) -> "HyperComplex":
        return self

    # --- entries ---------------------------------------------------------

    def get(self, index: Index) -> ChainType:
        index = self.layout.check_index(index)
        return self._locks.produce_once(
            self._chains, index,
            lambda: self.chain_factory.can_produce(self, index),
            lambda: self.chain_factory.produce(self, index),
            lambda: IndexUnavailableError(index=index))

    def has_index(self, index: Index) -> bool:
        return self.layout.check_index(index) in self._chains

    def can_compute_index(self, index: Index) -> bool:
        """True if the entry is cached or the chain factory can produce it."""
        index = self.layout.check_index(index)
        if index in self._chains:
            return True
        return bool(self.chain_factory.can_produce(self, index))

    def cached_indices(self) -> List[Index]:
        return list(self._chains)

    # --- maps ------------------------------------------------------------

    def _map_key(self, axis: int, index: Index) -> Tuple[int, Index]:
        return self.layout.check_axis(axis), self.layout.check_index(index)

    def get_map(self, axis: int, index: Index) -> MorphismType:
        axis, index = key = self._map_key(axis, index)
        return self._locks.produce_once(
            self._maps, key,
            lambda: self.map_factory.can_produce(self, axis, index),
            lambda: self.map_factory.produce(self, axis, index),
            lambda: MapUnavailableError(index=index, axis=axis))

    def has_map(self, axis: int, index: Index) -> bool:
        return self._map_key(axis, index) in self._maps

    def can_compute_map(self, axis: int, index: Index) -> bool:
        key = self._map_key(axis, index)
        if key in self._maps:
            return True
        return bool(self.map_factory.can_produce(self, *key))

    def cached_maps(self) -> List[Tuple[int, Index]]:
        return list(self._maps)

    # --- properties ------------------------------------------------------

    def direction(self, axis: int) -> Direction:
        return self.layout.direction(axis)

    def dim(self) -> int:
        return self.layout.dim

    def has_upper_bound(self, axis: int) -> bool:
        return self.layout.upper_bound(axis) is not None

    def has_lower_bound(self, axis: int) -> bool:
        return self.layout.lower_bound(axis) is not None

    def upper_bound(self, axis: int) -> Bound:
        return self.layout.upper_bound(axis)

    def lower_bound(self, axis: int) -> Bound:
        return self.layout.lower_bound(axis)

    def is_complete(self) -> bool:
        """
        Return the stored completeness verdict.

        The generic engine does not inspect its entries; it only reports
        True after ``mark_complete()``. Double complexes run a real check.
        """
        return self._is_complete is True

    def mark_complete(self) -> None:
        """Record that every non-zero entry of interest is known."""
        self._is_complete = True

    def __repr__(self) -> str:
        dirs = ", ".join(d.value for d in self.layout.directions)
        return (f"HyperComplex(dim={self.layout.dim}, directions=({dirs}), "
                f"cached_entries={len(self._chains)}, cached_maps={len(self._maps)})")
