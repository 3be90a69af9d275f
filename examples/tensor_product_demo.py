"""
Example: Exploring a lazy tensor product

Builds the tensor product of two small matrix complexes, walks the grid
entry by entry and asks the double complex whether the non-zero region
has been fully uncovered.
"""

import logging

import numpy as np
from hypercomplex import matrix_complex, tensor_product


def show(T):
    for j in T.vertical_range():
        row = []
        for i in T.horizontal_range():
            row.append(f"{T[i, j].rank:3d}" if T.has_index(i, j) else "  ?")
        print("   " + " ".join(row))


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    interval = matrix_complex({1: np.array([[-1], [1]])})
    circle = matrix_complex({1: np.array([[-1, 1], [1, -1]])})
    T = tensor_product(interval, circle)

    print("=" * 60)
    print("Tensor product of the interval and the circle")
    print("=" * 60)

    print("\nNothing has been computed yet:")
    print(f"   cached entries: {T.cached_indices()}")

    print("\nRanks after walking the bounded region:")
    for i in T.horizontal_range():
        for j in T.vertical_range():
            T[i, j]
    show(T)
    print(f"   complete: {T.is_complete()}")

    print("\nFetching the zero fence around the region...")
    for i in range(T.left_bound() - 1, T.right_bound() + 2):
        for j in range(T.lower_bound() - 1, T.upper_bound() + 2):
            T[i, j]
    print(f"   complete: {T.is_complete()}")

    print("\nA horizontal and a vertical map out of (1, 1):")
    print(T.horizontal_map(1, 1).matrix)
    print(T.vertical_map(1, 1).matrix)


if __name__ == "__main__":
    main()
