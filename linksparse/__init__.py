from .matrix import (
    Axis,
    Element,
    SparseMatrix,
    MatrixError,
    IndexOutOfRange,
    ShapeError,
    InvariantViolation,
)
