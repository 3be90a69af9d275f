"""
Tests for Simple Complexes
"""

import pytest

from hypercomplex import (
    AxisError, ConstructionError, Direction, FunctionChainFactory, FunctionMapFactory,
    HyperComplex, SimpleComplex, SimpleComplexWrapper, UnboundedError,
)


def letters():
    return FunctionChainFactory(lambda c, idx: f"C{idx[0]}")


def arrows():
    return FunctionMapFactory(
        lambda c, p, idx: f"{c[idx]}->{c[c.target_index(p, idx)]}"
    )


def simple(direction="chain", upper=None, lower=None):
    return SimpleComplex(letters(), arrows(), direction=direction,
                         upper_bound=upper, lower_bound=lower)


class TestSimpleComplex:
    def test_integer_indices(self):
        C = simple()
        assert C[3] == "C3"
        assert C.has_index(3)
        assert C.has_index((3,))
        assert not C.has_index(4)
        assert C.can_compute_index(4)

    def test_chain_map_goes_down(self):
        C = simple("chain")
        assert C.get_map(2) == "C2->C1"
        assert C.has_map(2)
        assert C.has_index(1)

    def test_generic_map_signature(self):
        C = simple("chain")
        assert C.get_map(1, (3,)) == C.get_map(3) == "C3->C2"
        assert C.has_map(1, (3,))
        assert C.has_map(1, 3)
        assert not C.has_map(1, (4,))
        assert C.can_compute_map(1, (4,))
        assert C.cached_maps() == [(1, (3,))]
        with pytest.raises(AxisError):
            C.get_map(2, (3,))

    def test_cochain_map_goes_up(self):
        C = simple("cochain")
        assert C.get_map(2) == "C2->C3"
        assert C.can_compute_map(5)

    def test_direction(self):
        assert simple("chain").is_chain_complex()
        assert not simple("chain").is_cochain_complex()
        assert simple("cochain").is_cochain_complex()
        assert simple("cochain").direction() is Direction.COCHAIN

    def test_bounds(self):
        C = simple(upper=4, lower=None)
        assert C.has_upper_bound()
        assert not C.has_lower_bound()
        assert C.upper_bound() == 4
        assert C.lower_bound() is None
        assert not C.is_bounded()

    def test_lower_bound_only(self):
        C = simple(upper=None, lower=-2)
        assert C.has_lower_bound()
        assert not C.has_upper_bound()


class TestRanges:
    def test_chain_range(self):
        C = simple("chain", upper=5, lower=0)
        assert list(C.range()) == [5, 4, 3, 2, 1, 0]

    def test_cochain_range(self):
        C = simple("cochain", upper=5, lower=0)
        assert list(C.range()) == [0, 1, 2, 3, 4, 5]

    def test_chain_map_range(self):
        C = simple("chain", upper=5, lower=0)
        assert list(C.map_range()) == [5, 4, 3, 2, 1]

    def test_cochain_map_range(self):
        C = simple("cochain", upper=5, lower=0)
        assert list(C.map_range()) == [0, 1, 2, 3, 4]

    @pytest.mark.parametrize("direction", ["chain", "cochain"])
    def test_map_range_empty_for_single_entry(self, direction):
        C = simple(direction, upper=3, lower=3)
        assert list(C.range()) == [3]
        assert list(C.map_range()) == []

    @pytest.mark.parametrize("direction", ["chain", "cochain"])
    @pytest.mark.parametrize("upper,lower", [(5, 0), (2, -3), (0, 0), (1, 0)])
    def test_map_targets_stay_in_range(self, direction, upper, lower):
        C = simple(direction, upper=upper, lower=lower)
        full = set(C.range())
        step = C.direction().step
        for i in C.map_range():
            assert i in full
            assert i + step in full

    def test_unbounded_range(self):
        C = simple("chain", upper=5)
        with pytest.raises(UnboundedError):
            C.range()
        with pytest.raises(UnboundedError):
            C.map_range()


class TestSimpleComplexWrapper:
    def test_wrap_one_dimensional(self):
        hc = HyperComplex(1, letters(), arrows(), ["chain"])
        C = SimpleComplexWrapper(hc)
        assert C.underlying_complex() is hc
        assert C[0] == "C0"
        assert hc.has_index((0,))

    def test_reject_two_dimensional(self):
        hc = HyperComplex(2, letters(), arrows(), ["chain", "chain"])
        with pytest.raises(ConstructionError):
            SimpleComplexWrapper(hc)

    def test_shares_cache_with_engine(self):
        hc = HyperComplex(1, letters(), arrows(), ["cochain"])
        hc[(7,)]
        C = SimpleComplexWrapper(hc)
        assert C.has_index(7)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
