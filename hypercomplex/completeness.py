"""
Completeness Check for Double Complexes

Decides whether the non-zero entries known so far form "islands" in the
grid which are fenced in on all four sides, either by entries that are
already known or by positions that can not be computed at all.

Example of a closed pattern (``*`` non-zero and cached, ``0`` zero and
cached, ``-`` not computable, ``?`` computable but not yet computed):

    ? ? 0 0 0 ? - -
    ? 0 * * 0 ? - -
    ? 0 * 0 * 0 - -
    ? ? 0 ? 0 * * -
    ? ? ? ? ? 0 0 -

Only the neighbours of non-zero entries matter, so the ``?`` positions
further out do not prevent a True verdict. In particular, a second island
which has not been touched at all goes unnoticed: the check can only
speak for the regions it has seen.
"""

from typing import Iterator, Tuple

from .factory import is_zero

Index = Tuple[int, int]


def neighbours(index: Index) -> Iterator[Index]:
    """The four axis-aligned neighbours of ``index``."""
    i, j = index
    yield (i + 1, j)
    yield (i - 1, j)
    yield (i, j + 1)
    yield (i, j - 1)


def open_neighbour(dc, index: Index):
    """
    Return a neighbour of ``index`` that is computable but not cached, or None.
    """
    for nb in neighbours(index):
        if not dc.has_index(nb) and dc.can_compute_index(nb):
            return nb
    return None


def check_completeness(dc) -> bool:
    """
    Run the completeness check on a double complex.

    Args:
        dc: A double complex; only ``cached_indices``, ``has_index``,
            ``can_compute_index`` and lookups of cached entries are used

    Returns:
        False if nothing is cached or some non-zero entry has an open
        neighbour, True otherwise
    """
    known = dc.cached_indices()
    if not known:
        return False
    for index in known:
        if is_zero(dc.get(index)):
            continue
        if open_neighbour(dc, index) is not None:
            return False
    return True
