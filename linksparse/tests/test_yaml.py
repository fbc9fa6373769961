import math
from pathlib import Path

import pytest
import numpy as np

from ..matrix import SparseMatrix
from ..yaml import MatrixYaml

DATA = Path(__file__).parent / "data"
CASES = sorted(DATA.glob("*.yaml"))


def test_cases_found():
    assert len(CASES) >= 4


@pytest.mark.parametrize("path", CASES, ids=lambda p: p.stem)
def test_case(path: Path):
    y = MatrixYaml.load(path)
    m = y.to_mat()
    m._checkup()

    assert m.height == len(y.array)
    assert m.to_array() == y.array

    if y.vector is not None:
        assert np.allclose(m.mul(y.vector), y.product)
    if y.total is not None:
        assert math.isclose(m.compute(lambda a, b: a + b, 0), y.total)

    # Transposing twice, and copying, leave the case's results unchanged
    t = m.copy().transpose()
    assert t.to_array() == [list(col) for col in zip(*y.array)]
    assert t.transpose() == m


def test_from_mat_dump_load(tmp_path: Path):
    m = SparseMatrix(3, 4)
    m.set(0, 3, 1.5)
    m.set(2, 0, -4)

    y = MatrixYaml.from_mat(m, desc="written by test")
    y.vector = [1, 0, 0, 2]
    y.product = m.mul(y.vector)
    assert y.total == -2.5

    p = tmp_path / "case.yaml"
    y.dump(p)
    y2 = MatrixYaml.load(p)
    assert y2.desc == "written by test"
    assert y2.to_mat() == m
    assert y2.product == [3.0, 0, -4]
    assert y2.total == -2.5


def test_from_mat_type_error():
    with pytest.raises(TypeError):
        MatrixYaml.from_mat([[1, 2]])
