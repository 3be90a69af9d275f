"""
Error Taxonomy

Structured exceptions raised by hyper complexes and their factories.
Every error carries the offending index/axis as attributes; the
human-readable message is only built in ``__str__``.
"""

from typing import Any, Optional, Tuple


class ComplexError(Exception):
    """Base class for all errors raised by this package."""
    kind = "complex_error"

    def __init__(self, index: Optional[Tuple[int, ...]] = None,
                 axis: Optional[int] = None,
                 factory: Any = None,
                 detail: str = ""):
        super().__init__(index, axis, factory, detail)
        self.index = index
        self.axis = axis
        self.factory = factory
        self.detail = detail

    def _describe(self) -> str:
        return self.detail or self.kind

    def __str__(self) -> str:
        return self._describe()


class FactoryNotImplementedError(ComplexError, NotImplementedError):
    """A factory capability was invoked but never overridden."""
    kind = "not_implemented"

    def _describe(self) -> str:
        what = self.detail or "production"
        factory_type = type(self.factory).__name__
        if self.axis is None:
            return (f"{what} of the {self.index}-th entry not implemented "
                    f"for factory of type {factory_type}")
        return (f"{what} of the {self.index}-th map in direction {self.axis} "
                f"not implemented for factory of type {factory_type}")


class IndexUnavailableError(ComplexError, LookupError):
    """The entry is neither cached nor producible."""
    kind = "index_unavailable"

    def _describe(self) -> str:
        return f"entry {self.index} is not cached and can not be computed"


class MapUnavailableError(ComplexError, LookupError):
    """The map is neither cached nor producible."""
    kind = "map_unavailable"

    def _describe(self) -> str:
        return (f"map at {self.index} in direction {self.axis} is not cached "
                f"and can not be computed")


class ConstructionError(ComplexError, ValueError):
    """Invalid construction-time configuration."""
    kind = "construction"


class IndexDimensionError(ComplexError, ValueError):
    """An index does not have as many integer components as the complex has axes."""
    kind = "index_dimension"

    def _describe(self) -> str:
        return f"invalid index {self.index!r}: {self.detail}"


class AxisError(ComplexError, ValueError):
    """An axis number outside ``1..d``."""
    kind = "axis"

    def _describe(self) -> str:
        return f"invalid axis {self.axis!r}: {self.detail}"


class UnboundedError(ComplexError, ValueError):
    """A range was requested along an axis lacking an upper or lower bound."""
    kind = "unbounded"

    def _describe(self) -> str:
        return f"axis {self.axis} is not bounded on both sides"
