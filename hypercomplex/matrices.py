"""
Matrix Complexes

Concrete chains and maps for working with complexes of finitely generated
free modules: entries are FreeModule(rank), maps are integer matrices
stored as numpy arrays. Matrices act on column vectors, so a map
F^m → F^n has shape (n, m).
"""

from dataclasses import dataclass
from typing import Dict, Union

import numpy as np

from .double import DoubleChainFactory, DoubleComplexOfMorphisms, DoubleMapFactory
from .factory import ChainFactory, MapFactory
from .layout import Direction
from .simple import AbsSimpleComplex, SimpleComplex


@dataclass(frozen=True)
class FreeModule:
    """Free module of the given rank; rank 0 is the zero module."""
    rank: int

    def __post_init__(self):
        if self.rank < 0:
            raise ValueError(f"rank must be >= 0, got {self.rank}")

    def is_zero(self) -> bool:
        return self.rank == 0


@dataclass(eq=False)
class MatrixMorphism:
    """
    Homomorphism between free modules given by a matrix.

    Attributes:
        domain: Source module
        codomain: Target module
        matrix: Array of shape (codomain.rank, domain.rank)
    """
    domain: FreeModule
    codomain: FreeModule
    matrix: np.ndarray

    def __post_init__(self):
        self.matrix = np.asarray(self.matrix)
        expected = (self.codomain.rank, self.domain.rank)
        if self.matrix.shape != expected:
            raise ValueError(f"Expected matrix of shape {expected}, got {self.matrix.shape}")

    def __eq__(self, other):
        if not isinstance(other, MatrixMorphism):
            return NotImplemented
        return (self.domain == other.domain and
                self.codomain == other.codomain and
                np.array_equal(self.matrix, other.matrix))

    __hash__ = None

    def is_zero(self) -> bool:
        return not np.any(self.matrix)

    def compose(self, g: "MatrixMorphism") -> "MatrixMorphism":
        """
        Compose with a following map (g ∘ self).

        Raises:
            ValueError: if the codomain of self is not the domain of g
        """
        if self.codomain != g.domain:
            raise ValueError("Codomain and domain do not match")
        return MatrixMorphism(self.domain, g.codomain, g.matrix @ self.matrix)

    @classmethod
    def zero(cls, domain: FreeModule, codomain: FreeModule) -> "MatrixMorphism":
        return cls(domain, codomain, np.zeros((codomain.rank, domain.rank), dtype=int))

    @classmethod
    def identity(cls, module: FreeModule) -> "MatrixMorphism":
        return cls(module, module, np.eye(module.rank, dtype=int))


# =============================================================================
# Simple complexes from a table of matrices
# =============================================================================

def _ranks_from_maps(maps: Dict[int, np.ndarray], step: int) -> Dict[int, int]:
    ranks: Dict[int, int] = {}

    def record(k: int, r: int):
        if ranks.setdefault(k, r) != r:
            raise ValueError(f"Inconsistent ranks in degree {k}: {ranks[k]} vs {r}")

    for k, m in maps.items():
        rows, cols = np.shape(m)
        record(k, cols)
        record(k + step, rows)
    return ranks


class MatrixChainFactory(ChainFactory[FreeModule]):
    """Free modules of known ranks; every other degree holds the zero module."""

    def __init__(self, ranks: Dict[int, int]):
        self.ranks = dict(ranks)

    def produce(self, complex, index):
        return FreeModule(self.ranks.get(index[0], 0))

    def can_produce(self, complex, index):
        return True


class MatrixMapFactory(MapFactory[MatrixMorphism]):
    """
    Maps given by a table of matrices, zero where the table has no entry.

    Domain and codomain are looked up in the complex, so they are the
    cached entries themselves.
    """

    def __init__(self, maps: Dict[int, np.ndarray]):
        self.maps = {k: np.asarray(m) for k, m in maps.items()}

    def produce(self, complex, axis, index):
        domain = complex[index]
        codomain = complex[complex.target_index(axis, index)]
        matrix = self.maps.get(index[0])
        if matrix is None:
            return MatrixMorphism.zero(domain, codomain)
        return MatrixMorphism(domain, codomain, matrix)

    def can_produce(self, complex, axis, index):
        return True


def matrix_complex(maps: Dict[int, np.ndarray],
                   direction: Union[Direction, str] = Direction.CHAIN) -> SimpleComplex:
    """
    Build a bounded simple complex from its differentials.

    Args:
        maps: Degree k → matrix of the map going out of degree k
        direction: 'chain' (maps lower the degree) or 'cochain'

    Returns:
        Simple complex with bounds covering every non-zero module
    """
    if not maps:
        raise ValueError("maps must be a non-empty dict")
    direction = Direction.coerce(direction)
    ranks = _ranks_from_maps(maps, direction.step)
    return SimpleComplex(MatrixChainFactory(ranks), MatrixMapFactory(maps),
                         direction=direction,
                         upper_bound=max(ranks), lower_bound=min(ranks))


# =============================================================================
# Tensor products
# =============================================================================

def _sign(i: int) -> int:
    return -1 if i % 2 else 1


class TensorProductChainFactory(DoubleChainFactory[FreeModule]):
    """Entry (i, j) of C ⊗ D is C[i] ⊗ D[j]."""

    def __init__(self, first: AbsSimpleComplex, second: AbsSimpleComplex):
        self.first = first
        self.second = second

    def produce_entry(self, dc, i, j):
        return FreeModule(self.first[i].rank * self.second[j].rank)

    def can_produce_entry(self, dc, i, j):
        return self.first.can_compute_index(i) and self.second.can_compute_index(j)


class TensorProductHorizontalFactory(DoubleMapFactory[MatrixMorphism]):
    """d_C ⊗ id on the rows."""

    def __init__(self, first: AbsSimpleComplex, second: AbsSimpleComplex):
        self.first = first
        self.second = second

    def produce_map(self, dc, i, j):
        d = self.first.get_map(i)
        eye = np.eye(self.second[j].rank, dtype=int)
        return MatrixMorphism(dc[i, j], dc[dc.target_index(1, (i, j))], np.kron(d.matrix, eye))

    def can_produce_map(self, dc, i, j):
        return (self.first.can_compute_map(i)
                and dc.can_compute_index(i, j)
                and dc.can_compute_index(dc.target_index(1, (i, j))))


class TensorProductVerticalFactory(DoubleMapFactory[MatrixMorphism]):
    """(-1)^i id ⊗ d_D on the columns."""

    def __init__(self, first: AbsSimpleComplex, second: AbsSimpleComplex):
        self.first = first
        self.second = second

    def produce_map(self, dc, i, j):
        d = self.second.get_map(j)
        eye = np.eye(self.first[i].rank, dtype=int)
        return MatrixMorphism(dc[i, j], dc[dc.target_index(2, (i, j))],
                              _sign(i) * np.kron(eye, d.matrix))

    def can_produce_map(self, dc, i, j):
        return (self.second.can_compute_map(j)
                and dc.can_compute_index(i, j)
                and dc.can_compute_index(dc.target_index(2, (i, j))))


def tensor_product(first: AbsSimpleComplex, second: AbsSimpleComplex) -> DoubleComplexOfMorphisms:
    """
    Lazy double complex C ⊗ D of two matrix complexes.

    Rows follow the direction and bounds of ``first``, columns those of
    ``second``. Nothing is computed until an entry or map is requested.
    """
    return DoubleComplexOfMorphisms(
        TensorProductChainFactory(first, second),
        TensorProductHorizontalFactory(first, second),
        TensorProductVerticalFactory(first, second),
        horizontal_direction=first.direction(),
        vertical_direction=second.direction(),
        right_bound=first.upper_bound(), left_bound=first.lower_bound(),
        upper_bound=second.upper_bound(), lower_bound=second.lower_bound(),
    )
