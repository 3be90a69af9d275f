"""
Tests for Double Complexes
"""

import threading

import pytest

from hypercomplex import (
    ConstructionError, DoubleChainFactory, DoubleComplexOfMorphisms, DoubleComplexWrapper,
    DoubleMapFactory, Direction, FactoryNotImplementedError, FunctionChainFactory,
    FunctionMapFactory, HyperComplex, IndexUnavailableError, MapUnavailableError,
    UnboundedError,
)


class GridFactory(DoubleChainFactory):
    """Entries (i, j) in the first quadrant."""

    def __init__(self):
        self.calls = 0

    def produce_entry(self, dc, i, j):
        self.calls += 1
        return (i, j)

    def can_produce_entry(self, dc, i, j):
        return i >= 0 and j >= 0


class ArrowFactory(DoubleMapFactory):
    def __init__(self, axis):
        self.axis = axis

    def produce_map(self, dc, i, j):
        return (dc[i, j], dc[dc.target_index(self.axis, (i, j))])

    def can_produce_map(self, dc, i, j):
        return (dc.can_compute_index(i, j)
                and dc.can_compute_index(dc.target_index(self.axis, (i, j))))


def standalone(**kwargs):
    return DoubleComplexOfMorphisms(GridFactory(), ArrowFactory(1), ArrowFactory(2), **kwargs)


def wrapped(directions=("chain", "chain"), **kwargs):
    hc = HyperComplex(2, GridFactory(), [ArrowFactory(1), ArrowFactory(2)], list(directions),
                      **kwargs)
    return DoubleComplexWrapper(hc)


class TestStandaloneDoubleComplex:
    def test_create(self):
        dc = standalone()
        assert dc.dim() == 2
        assert dc.horizontal_direction() is Direction.CHAIN
        assert dc.vertical_direction() is Direction.CHAIN
        assert dc.cached_indices() == []
        assert not dc.is_bounded()

    def test_entries(self):
        dc = standalone()
        assert dc[2, 3] == (2, 3)
        assert dc[(2, 3)] == (2, 3)
        assert dc.get(2, 3) == (2, 3)
        assert dc.has_index(2, 3)
        assert dc.has_index((2, 3))
        assert dc.chain_factory.calls == 1

    def test_unavailable_entry(self):
        dc = standalone()
        assert not dc.can_compute_index(-1, 0)
        with pytest.raises(IndexUnavailableError):
            dc[-1, 0]

    def test_horizontal_and_vertical_maps(self):
        dc = standalone(horizontal_direction="chain", vertical_direction="cochain")
        assert dc.horizontal_map(2, 2) == ((2, 2), (1, 2))
        assert dc.vertical_map(2, 2) == ((2, 2), (2, 3))
        assert dc.has_horizontal_map(2, 2)
        assert dc.has_vertical_map((2, 2))
        assert not dc.has_vertical_map(1, 1)
        assert dc.can_compute_vertical_map(0, 0)
        assert not dc.can_compute_horizontal_map(0, 0)

    def test_maps_are_cached_per_direction(self):
        dc = standalone()
        h = dc.horizontal_map(1, 1)
        assert dc.horizontal_map(1, 1) is h
        assert dc.cached_maps() == [(1, (1, 1))]
        dc.vertical_map(1, 1)
        assert sorted(dc.cached_maps()) == [(1, (1, 1)), (2, (1, 1))]

    def test_unavailable_map(self):
        dc = standalone()
        with pytest.raises(MapUnavailableError) as info:
            dc.vertical_map(0, 0)
        assert info.value.axis == 2

    def test_named_bounds(self):
        dc = standalone(right_bound=4, left_bound=0, upper_bound=3, lower_bound=-1)
        assert dc.right_bound() == 4
        assert dc.left_bound() == 0
        assert dc.upper_bound() == 3
        assert dc.lower_bound() == -1
        assert dc.upper_bound(1) == 4
        assert dc.lower_bound(1) == 0
        assert dc.bounds(2, "upper") == 3
        assert dc.is_horizontally_bounded()
        assert dc.is_vertically_bounded()
        assert dc.is_bounded()

    def test_partial_bounds(self):
        dc = standalone(right_bound=4, upper_bound=3, lower_bound=0)
        assert dc.has_right_bound()
        assert not dc.has_left_bound()
        assert not dc.is_horizontally_bounded()
        assert dc.is_vertically_bounded()
        assert not dc.is_bounded()

    def test_ranges(self):
        dc = standalone(horizontal_direction="chain", vertical_direction="cochain",
                        right_bound=3, left_bound=1, upper_bound=2, lower_bound=0)
        assert list(dc.horizontal_range()) == [3, 2, 1]
        assert list(dc.vertical_range()) == [0, 1, 2]
        assert list(dc.horizontal_map_range()) == [3, 2]
        assert list(dc.vertical_map_range()) == [0, 1]

    def test_unbounded_range(self):
        dc = standalone(upper_bound=2)
        with pytest.raises(UnboundedError) as info:
            dc.vertical_range()
        assert info.value.axis == 2
        with pytest.raises(UnboundedError):
            dc.horizontal_range()

    def test_invalid_direction(self):
        with pytest.raises(ConstructionError):
            standalone(horizontal_direction="up")


class TestDoubleComplexWrapper:
    def test_wrap_two_dimensional(self):
        dc = wrapped(("cochain", "chain"))
        assert dc.horizontal_direction() is Direction.COCHAIN
        assert dc[1, 1] == (1, 1)
        assert dc.underlying_complex().has_index((1, 1))
        assert dc.horizontal_map(1, 1) == ((1, 1), (2, 1))
        assert dc.vertical_map(1, 1) == ((1, 1), (1, 0))

    def test_named_bounds_translate_to_axes(self):
        dc = wrapped(upper_bounds=[5, 7], lower_bounds=[1, 2])
        assert dc.right_bound() == 5
        assert dc.left_bound() == 1
        assert dc.upper_bound() == 7
        assert dc.lower_bound() == 2
        assert list(dc.horizontal_range()) == [5, 4, 3, 2, 1]

    @pytest.mark.parametrize("d", [1, 3])
    def test_reject_other_dimensions(self, d):
        hc = HyperComplex(d, GridFactory(), ArrowFactory(1), ["chain"] * d)
        with pytest.raises(ConstructionError):
            DoubleComplexWrapper(hc)

    def test_factories_with_plain_callables(self):
        hc = HyperComplex(2, FunctionChainFactory(lambda c, idx: idx[0] * idx[1]),
                          FunctionMapFactory(lambda c, p, idx: p), ["chain", "chain"])
        dc = DoubleComplexWrapper(hc)
        assert dc[3, 4] == 12
        assert dc.vertical_map(3, 4) == 2


class TestDoubleFactories:
    def test_unimplemented_chain_factory(self):
        dc = DoubleComplexOfMorphisms(DoubleChainFactory(), ArrowFactory(1), ArrowFactory(2))
        with pytest.raises(FactoryNotImplementedError) as info:
            dc[0, 0]
        assert info.value.index == (0, 0)
        assert dc.cached_indices() == []

    def test_unimplemented_produce(self):
        dc = standalone()
        with pytest.raises(FactoryNotImplementedError):
            DoubleChainFactory().produce_entry(dc, 1, 1)
        with pytest.raises(FactoryNotImplementedError):
            DoubleMapFactory().produce(dc, 1, (1, 1))
        assert dc.cached_indices() == []

    def test_unimplemented_map_factory(self):
        dc = DoubleComplexOfMorphisms(GridFactory(), DoubleMapFactory(), ArrowFactory(2))
        with pytest.raises(FactoryNotImplementedError):
            dc.horizontal_map(1, 1)
        assert dc.vertical_map(1, 1) == ((1, 1), (1, 0))


class BlockingEntries(DoubleChainFactory):
    """Holds the first production until ``release`` is set."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.calls = []

    def produce_entry(self, dc, i, j):
        self.calls.append((i, j))
        self.started.set()
        self.release.wait(timeout=5)
        return [i, j]

    def can_produce_entry(self, dc, i, j):
        return True


class BlockingArrows(DoubleMapFactory):
    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.calls = []

    def produce_map(self, dc, i, j):
        self.calls.append((i, j))
        self.started.set()
        self.release.wait(timeout=5)
        return ["arrow", i, j]

    def can_produce_map(self, dc, i, j):
        return True


def run_together(request, factory, n=4):
    results = []
    threads = [threading.Thread(target=lambda: results.append(request())) for _ in range(n)]
    for t in threads:
        t.start()
    factory.started.wait(timeout=5)
    factory.release.set()
    for t in threads:
        t.join(timeout=5)
    return results


class TestConcurrency:
    def test_concurrent_entry_requests_produce_once(self):
        entries = BlockingEntries()
        dc = DoubleComplexOfMorphisms(entries, ArrowFactory(1), ArrowFactory(2))
        results = run_together(lambda: dc[2, 5], entries)

        assert entries.calls == [(2, 5)]
        assert len(results) == 4
        assert all(r is results[0] for r in results)
        assert dc[2, 5] is results[0]
        assert len(dc._locks) == 0

    def test_concurrent_map_requests_produce_once(self):
        arrows = BlockingArrows()
        dc = DoubleComplexOfMorphisms(GridFactory(), arrows, ArrowFactory(2))
        results = run_together(lambda: dc.horizontal_map(1, 1), arrows)

        assert arrows.calls == [(1, 1)]
        assert len(results) == 4
        assert all(r is results[0] for r in results)
        assert dc.cached_maps() == [(1, (1, 1))]
        assert len(dc._locks) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
