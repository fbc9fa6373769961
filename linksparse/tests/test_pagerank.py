import math
import numpy as np

from ..pagerank import LINKS, NUM_PAGES, link_matrix, page_rank, dense_page_rank, main
from ..examples import rotation, rotation_demo


def test_link_matrix():
    m = link_matrix(LINKS, NUM_PAGES)
    m._checkup()
    assert m.nnz == len(LINKS)
    # Page 11 links to pages 4, 10, 3, 5, 2 with weights 2, 1, 1, 1, 2
    assert math.isclose(m.get(4, 11), 2 / 7)
    assert math.isclose(m.get(10, 11), 1 / 7)
    # Every column with outgoing links sums to one
    for col in range(NUM_PAGES):
        total = m.compute_by_column(col, lambda a, b: a + b, 0)
        assert total == 0 or math.isclose(total, 1.0)


def test_page_rank():
    m = link_matrix(LINKS, NUM_PAGES)
    ranks = page_rank(m)
    assert len(ranks) == NUM_PAGES
    reference = dense_page_rank(LINKS, NUM_PAGES)
    assert np.allclose(ranks, reference, rtol=1e-12, atol=1e-15)


def test_page_rank_deterministic():
    m = link_matrix(LINKS, NUM_PAGES)
    assert page_rank(m) == page_rank(m.copy())


def test_page_rank_iterations():
    m = link_matrix(LINKS, NUM_PAGES)
    assert page_rank(m, iterations=0) == [1 / NUM_PAGES] * NUM_PAGES
    ranks = page_rank(m, damping=0.5, iterations=3)
    assert np.allclose(ranks, dense_page_rank(LINKS, NUM_PAGES, damping=0.5, iterations=3))


def test_main(capsys):
    main()
    out = capsys.readouterr().out
    assert "Highest-ranked page" in out
    assert "False" not in out


def test_rotation():
    r = rotation(0.33)
    assert r.height == 3
    assert r.width == 3
    assert r.get(2, 2) == 1
    assert not r.present(0, 2)
    res = rotation_demo(0.33)
    assert np.allclose(res.to_array(), np.eye(3))
