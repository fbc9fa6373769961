"""
PageRank over a small weighted link-graph.

The link matrix M has M[to, from] = (number of links from -> to),
with each column normalized to sum to one.  Ranks are iterated as

    v(k+1) = d * M * v(k) + (1 - d) / n

starting from the uniform vector v(0) = 1/n.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np

from .matrix import SparseMatrix

DAMPING = 0.8
ITERATIONS = 15

# (from, to, number of links)
LINKS: List[Tuple[int, int, int]] = [
    (0, 11, 2),
    (12, 11, 3),
    (5, 11, 1),
    (11, 4, 2),
    (11, 10, 1),
    (11, 3, 1),
    (11, 5, 1),
    (11, 2, 2),
    (6, 5, 1),
    (12, 2, 2),
    (9, 12, 3),
    (4, 3, 1),
    (4, 10, 2),
    (1, 10, 2),
    (6, 1, 1),
    (7, 6, 2),
    (7, 1, 1),
    (1, 8, 1),
    (8, 3, 2),
    (1, 3, 1),
    (2, 11, 2),
    (2, 9, 3),
    (10, 5, 1),
    (3, 10, 1),
]
NUM_PAGES = 13


def link_matrix(links: Sequence[Tuple[int, int, int]], n: int) -> SparseMatrix:
    """ Build the column-normalized link matrix """
    m = SparseMatrix(n, n)
    for src, dst, count in links:
        m.set(dst, src, count)

    for col in range(n):
        total = m.compute_by_column(col, lambda a, b: a + b, 0)
        if total > 0:
            m.map_by_column(col, lambda x: x / total)
    return m


def page_rank(m: SparseMatrix, damping: float = DAMPING, iterations: int = ITERATIONS) -> List[float]:
    n = m.height
    ranks = [1 / n] * n
    for _ in range(iterations):
        ranks = [v * damping + (1 - damping) / n for v in m.mul(ranks)]
    return ranks


def dense_page_rank(links: Sequence[Tuple[int, int, int]], n: int,
                    damping: float = DAMPING, iterations: int = ITERATIONS) -> np.ndarray:
    """ Reference computation, on dense numpy arrays """
    m = np.zeros((n, n))
    for src, dst, count in links:
        m[dst, src] = count
    sums = m.sum(axis=0)
    nonzero = sums > 0
    m[:, nonzero] /= sums[nonzero]

    ranks = np.full(n, 1 / n)
    for _ in range(iterations):
        ranks = damping * m.dot(ranks) + (1 - damping) / n
    return ranks


def eq_or_close(x: float, y: float) -> bool:
    return math.isclose(x, y, rel_tol=1e-9, abs_tol=1e-12)


def print_vec_compare(x: Sequence[float], y: Sequence[float]):
    """ Print a comparison table between two vectors """
    print("      x      y      diff     isclose")
    for xi, yi in zip(x, y):
        s = f'{xi: 7e} {yi: 7e} {abs(xi - yi): 7e}  '
        s += str(eq_or_close(xi, yi))
        print(s)


def main():
    m = link_matrix(LINKS, NUM_PAGES)
    print(f"Link matrix, {m.nnz} links:")
    print(m.display())

    ranks = page_rank(m)
    reference = dense_page_rank(LINKS, NUM_PAGES)
    print_vec_compare(ranks, reference)

    best = max(range(NUM_PAGES), key=lambda k: ranks[k])
    print(f"Highest-ranked page: {best} ({ranks[best]:.6f})")


if __name__ == '__main__':
    main()
