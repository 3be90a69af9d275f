"""
Hypercomplex - Lazy Chain Complexes over Integer Lattices

Multi-dimensional complexes whose entries and maps are produced on demand
by pluggable factories and cached once produced, with simple (one index)
and double (two indices) complexes as specialisations.
"""

__version__ = "0.1.0"

from .errors import (
    ComplexError, FactoryNotImplementedError, IndexUnavailableError, MapUnavailableError,
    ConstructionError, IndexDimensionError, AxisError, UnboundedError,
)
from .layout import ComplexLayout, Direction
from .factory import (
    ChainFactory, MapFactory, FunctionChainFactory, FunctionMapFactory, AxisMapFactory, is_zero,
)
from .hyper import AbsHyperComplex, HyperComplex
from .simple import AbsSimpleComplex, SimpleComplexWrapper, SimpleComplex
from .double import (
    AbsDoubleComplex, DoubleComplexWrapper, DoubleComplexOfMorphisms,
    DoubleChainFactory, DoubleMapFactory,
)
from .completeness import check_completeness
from .matrices import FreeModule, MatrixMorphism, matrix_complex, tensor_product

__all__ = [
    "ComplexError",
    "FactoryNotImplementedError",
    "IndexUnavailableError",
    "MapUnavailableError",
    "ConstructionError",
    "IndexDimensionError",
    "AxisError",
    "UnboundedError",
    "ComplexLayout",
    "Direction",
    "ChainFactory",
    "MapFactory",
    "FunctionChainFactory",
    "FunctionMapFactory",
    "AxisMapFactory",
    "is_zero",
    "AbsHyperComplex",
    "HyperComplex",
    "AbsSimpleComplex",
    "SimpleComplexWrapper",
    "SimpleComplex",
    "AbsDoubleComplex",
    "DoubleComplexWrapper",
    "DoubleComplexOfMorphisms",
    "DoubleChainFactory",
    "DoubleMapFactory",
    "check_completeness",
    "FreeModule",
    "MatrixMorphism",
    "matrix_complex",
    "tensor_product",
]
