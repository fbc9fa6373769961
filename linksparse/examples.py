"""
Walk-through of basic `SparseMatrix` usage
"""

import math

from .matrix import SparseMatrix


def rotation(angle: float) -> SparseMatrix:
    """ 2x2 rotation matrix, embedded in 3x3 with a unit z-axis """
    r = SparseMatrix().from_array([
        [math.cos(angle), -math.sin(angle)],
        [math.sin(angle), math.cos(angle)],
    ])
    return r.reshape(3, 3).set(2, 2, 1)


def rotation_demo(angle: float = 0.33) -> SparseMatrix:
    """ R * R^T, which should be (numerically close to) the identity """
    r = rotation(angle)
    return r.mul(r.copy().transpose())


def main():
    m = SparseMatrix(5, 6)
    m.set(0, 0, -3)
    m.transpose()
    m.reshape(3, 3)
    print(f"Transposed & reshaped: {m}")
    print(f"m[0, 0] = {m.get(0, 0)}")

    print(SparseMatrix.eye(3).to_array())

    res = rotation_demo()
    for row in res.to_array():
        print(' '.join(f'{v: .3f}' for v in row))


if __name__ == '__main__':
    main()
