"""
Factory Protocol

Factories produce the entries ("chains") and the maps of a lazy complex
on request. Each family pairs a ``produce`` method with a ``can_produce``
predicate; the complex only calls ``produce`` after ``can_produce`` has
returned True for the same position.

``produce`` receives the owning complex so that it can read entries which
are already cached there. Repeated calls at the same position must yield
equal values.
"""

from typing import Any, Callable, Generic, Optional, Sequence, Tuple, TypeVar

import numpy as np

from .errors import AxisError, FactoryNotImplementedError

ChainType = TypeVar("ChainType")
MorphismType = TypeVar("MorphismType")

Index = Tuple[int, ...]


class ChainFactory(Generic[ChainType]):
    """
    Base class for factories of entries.

    Subclasses override both ``produce`` and ``can_produce``.
    """

    def produce(self, complex: Any, index: Index) -> ChainType:
        raise FactoryNotImplementedError(index=index, factory=self, detail="production")

    def can_produce(self, complex: Any, index: Index) -> bool:
        raise FactoryNotImplementedError(
            index=index, factory=self,
            detail="testing producibility"
        )

    def __call__(self, complex: Any, index: Index) -> ChainType:
        return self.produce(complex, index)


class MapFactory(Generic[MorphismType]):
    """
    Base class for factories of maps.

    ``produce(complex, axis, index)`` returns the map going out of
    ``complex[index]`` along ``axis`` (1-based).
    """

    def produce(self, complex: Any, axis: int, index: Index) -> MorphismType:
        raise FactoryNotImplementedError(index=index, axis=axis, factory=self,
                                         detail="production")

    def can_produce(self, complex: Any, axis: int, index: Index) -> bool:
        raise FactoryNotImplementedError(
            index=index, axis=axis, factory=self,
            detail="testing producibility"
        )

    def __call__(self, complex: Any, axis: int, index: Index) -> MorphismType:
        return self.produce(complex, axis, index)


class FunctionChainFactory(ChainFactory[ChainType]):
    """
    Chain factory built from plain callables.

    Args:
        produce: ``produce(complex, index) -> chain``
        can_produce: ``can_produce(complex, index) -> bool``; every index
            is producible when omitted
    """

    def __init__(self, produce: Callable[[Any, Index], ChainType],
                 can_produce: Optional[Callable[[Any, Index], bool]] = None):
        self._produce = produce
        self._can_produce = can_produce

    def produce(self, complex, index):
        return self._produce(complex, index)

    def can_produce(self, complex, index):
        if self._can_produce is None:
            return True
        return bool(self._can_produce(complex, index))


class FunctionMapFactory(MapFactory[MorphismType]):
    """Map factory built from plain callables; see FunctionChainFactory."""

    def __init__(self, produce: Callable[[Any, int, Index], MorphismType],
                 can_produce: Optional[Callable[[Any, int, Index], bool]] = None):
        self._produce = produce
        self._can_produce = can_produce

    def produce(self, complex, axis, index):
        return self._produce(complex, axis, index)

    def can_produce(self, complex, axis, index):
        if self._can_produce is None:
            return True
        return bool(self._can_produce(complex, axis, index))


class AxisMapFactory(MapFactory[MorphismType]):
    """Dispatches every axis to its own map factory."""

    def __init__(self, factories: Sequence[MapFactory]):
        self.factories = tuple(factories)

    def _for_axis(self, axis: int) -> MapFactory:
        if not 1 <= axis <= len(self.factories):
            raise AxisError(axis=axis, detail=f"no map factory for this axis "
                                              f"(have {len(self.factories)})")
        return self.factories[axis - 1]

    def produce(self, complex, axis, index):
        return self._for_axis(axis).produce(complex, axis, index)

    def can_produce(self, complex, axis, index):
        return self._for_axis(axis).can_produce(complex, axis, index)


def is_zero(chain: Any) -> bool:
    """
    Zero test for chain values.

    Uses the value's own ``is_zero()`` when it has one; numpy arrays are
    zero when empty or all-zero; anything else is compared with 0.
    """
    test = getattr(chain, "is_zero", None)
    if callable(test):
        return bool(test())
    if isinstance(chain, np.ndarray):
        return chain.size == 0 or not np.any(chain)
    return bool(chain == 0)
