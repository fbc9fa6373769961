from typing import Callable, Iterator, List, Optional, Sequence, Tuple
from enum import Enum, auto
from numbers import Number


class Axis(Enum):
    rows = auto()
    cols = auto()

    def __invert__(self):
        if self is Axis.rows: return Axis.cols
        if self is Axis.cols: return Axis.rows
        raise ValueError


class Element(object):
    """ One stored nonzero entry.
    The same object is linked into its row list (via `next_in_row`)
    and its column list (via `next_in_col`). """

    def __init__(self, row: int, col: int, val: Optional[float]):
        self.row = row
        self.col = col
        self.val = val
        self.next_in_row: Optional["Element"] = None
        self.next_in_col: Optional["Element"] = None

    @classmethod
    def head(cls, ax: Axis, index: int) -> "Element":
        """ Create the sentinel heading list `index` along physical axis `ax`.
        Sentinels carry no value, and an off-axis index of -1. """
        e = cls(row=-1, col=-1, val=None)
        e.set_index(ax, index)
        return e

    def __repr__(self):
        return f"<{self.__class__.__name__}(row={self.row}, col={self.col}, val={self.val}, id={id(self)})>"

    def index(self, ax: Axis) -> int:
        if ax is Axis.rows: return self.row
        if ax is Axis.cols: return self.col
        raise ValueError

    def set_index(self, ax: Axis, x: int):
        if ax is Axis.rows:
            self.row = x
        elif ax is Axis.cols:
            self.col = x
        else:
            raise ValueError

    def next(self, ax: Axis) -> Optional["Element"]:
        if ax is Axis.rows: return self.next_in_row
        if ax is Axis.cols: return self.next_in_col
        raise ValueError

    def set_next(self, ax: Axis, e: Optional["Element"]):
        if ax is Axis.rows:
            self.next_in_row = e
        elif ax is Axis.cols:
            self.next_in_col = e
        else:
            raise ValueError


class AxisData(object):
    """ Sentinel heads and nonzero-counts for one set of lists.
    `ax` is the *physical* link-direction of these lists,
    which differs from the logical axis they serve once a matrix is transposed. """

    def __init__(self, ax: Axis, size: int = 0):
        self.ax: Axis = ax
        self.hdrs: List[Element] = [Element.head(ax, i) for i in range(size)]
        self.qtys: List[int] = [0] * size

    def __len__(self):
        return len(self.hdrs)

    def key(self, e: Element) -> int:
        """ Sort key of `e` within these lists: its off-axis index. """
        return e.index(~self.ax)

    def first(self, index: int) -> Optional[Element]:
        return self.hdrs[index].next(self.ax)

    def resize(self, to: int):
        """ Grow with fresh empty lists, or truncate. """
        MatrixError.assert_true(to >= 0)
        size = len(self.hdrs)
        if to > size:
            self.hdrs.extend(Element.head(self.ax, i) for i in range(size, to))
            self.qtys.extend([0] * (to - size))
        else:
            del self.hdrs[to:]
            del self.qtys[to:]

    def clear(self):
        size = len(self.hdrs)
        self.hdrs = [Element.head(self.ax, i) for i in range(size)]
        self.qtys = [0] * size


class SparseMatrix(object):
    """ Sparse matrix stored as orthogonal, sentinel-headed linked lists.

    Each row holds a list of its nonzero elements sorted by column,
    and each column a list sorted by row.  Both lists thread through
    the same `Element` objects, so a value lives in exactly one place.
    Entries equal to `default_value` are never stored. """

    def __init__(self, height: int = 0, width: int = 0):
        if height < 0 or width < 0:
            raise ShapeError(f"Invalid matrix dimensions {height}x{width}")
        self.default_value = 0
        # Keyed by *logical* axis
        self.axes = {
            Axis.rows: AxisData(ax=Axis.rows, size=height),
            Axis.cols: AxisData(ax=Axis.cols, size=width),
        }

    @property
    def height(self) -> int:
        return len(self.axes[Axis.rows])

    @property
    def width(self) -> int:
        return len(self.axes[Axis.cols])

    @property
    def rows(self) -> List[Element]:
        return self.axes[Axis.rows].hdrs

    @property
    def columns(self) -> List[Element]:
        return self.axes[Axis.cols].hdrs

    @property
    def nnz(self) -> int:
        """ Number of stored (nonzero) elements """
        return sum(self.axes[Axis.rows].qtys)

    @classmethod
    def eye(cls, n: int) -> "SparseMatrix":
        return cls(n, n).identity()

    def __repr__(self):
        return f"<{self.__class__.__name__}(height={self.height}, width={self.width}, nnz={self.nnz})>"

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix): return NotImplemented
        if self.height != other.height: return False
        if self.width != other.width: return False
        return list(self.items()) == list(other.items())

    def display(self) -> str:
        """ Create a string "X" versus " " display of matrix entries. """
        s = ''
        for r in range(self.height):
            row = [' '] * self.width
            for c, _ in self.row_items(r):
                row[c] = 'X'
            s += ''.join(row) + '\n'
        return s

    def _check_row(self, row: int):
        if not 0 <= row < self.height:
            raise IndexOutOfRange(f"Row index out of range: {row}, height {self.height}")

    def _check_col(self, col: int):
        if not 0 <= col < self.width:
            raise IndexOutOfRange(f"Column index out of range: {col}, width {self.width}")

    def _check_indices(self, row: int, col: int):
        self._check_row(row)
        self._check_col(col)

    def _check_map_func(self, func: Callable):
        if func(self.default_value) != self.default_value:
            raise InvariantViolation(f"Cannot apply a function that changes the default value {self.default_value}")

    def before(self, ax: Axis, index: int, key: int) -> Element:
        """ Find the last element in logical axis `ax`, list `index`, with off-axis index <= `key`.
        E.g. before(Axis.cols, 3, 7) is the last element in column 3 at or above row 7.
        Returns the list's sentinel if there is no such element. """
        data = self.axes[ax]
        prev = data.hdrs[index]
        nxt = prev.next(data.ax)
        while nxt is not None and data.key(nxt) <= key:
            prev = nxt
            nxt = nxt.next(data.ax)
        return prev

    def elements(self, ax: Axis, index: int) -> Iterator[Element]:
        """ Iterator over the elements of list `index` along logical axis `ax` """
        data = self.axes[ax]
        e = data.first(index)
        while e is not None:
            yield e
            e = e.next(data.ax)

    def row_items(self, row: int) -> Iterator[Tuple[int, float]]:
        """ (column, value) pairs of row `row`, by increasing column """
        self._check_row(row)
        data = self.axes[Axis.rows]
        for e in self.elements(Axis.rows, row):
            yield data.key(e), e.val

    def col_items(self, col: int) -> Iterator[Tuple[int, float]]:
        """ (row, value) pairs of column `col`, by increasing row """
        self._check_col(col)
        data = self.axes[Axis.cols]
        for e in self.elements(Axis.cols, col):
            yield data.key(e), e.val

    def items(self) -> Iterator[Tuple[int, int, float]]:
        """ Row-major iterator of (row, column, value) """
        for r in range(self.height):
            for c, v in self.row_items(r):
                yield r, c, v

    def values(self) -> Iterator[float]:
        for _, _, v in self.items(): yield v

    def present(self, row: int, col: int) -> bool:
        """ Boolean indication of whether an element is stored at (row, col) """
        self._check_indices(row, col)
        e = self.before(Axis.rows, row, col)
        return self.axes[Axis.rows].key(e) == col

    def get(self, row: int, col: int) -> float:
        """ Get the value at (row, col), or `default_value` if no element present """
        self._check_indices(row, col)
        e = self.before(Axis.rows, row, col)
        if self.axes[Axis.rows].key(e) != col:
            return self.default_value
        return e.val

    def set(self, row: int, col: int, val: float) -> "SparseMatrix":
        """ Set the value at (row, col).
        Creates, updates, or removes the element as `val` requires. """
        self._check_indices(row, col)
        rd, cd = self.axes[Axis.rows], self.axes[Axis.cols]
        left = self.before(Axis.rows, row, col)
        above = self.before(Axis.cols, col, row)

        if rd.key(left) == col:  # Existing element
            MatrixError.assert_is(left, above)
            if val != self.default_value:
                left.val = val
                return self
            # Find the predecessors in each list, and splice around the element
            bl = self.before(Axis.rows, row, col - 1)
            ba = self.before(Axis.cols, col, row - 1)
            bl.set_next(rd.ax, left.next(rd.ax))
            ba.set_next(cd.ax, above.next(cd.ax))
            rd.qtys[row] -= 1
            cd.qtys[col] -= 1

        elif val != self.default_value:  # New element
            e = Element(row=-1, col=-1, val=val)
            e.set_index(rd.ax, row)
            e.set_index(cd.ax, col)
            e.set_next(rd.ax, left.next(rd.ax))
            left.set_next(rd.ax, e)
            e.set_next(cd.ax, above.next(cd.ax))
            above.set_next(cd.ax, e)
            rd.qtys[row] += 1
            cd.qtys[col] += 1

        return self

    def transpose(self) -> "SparseMatrix":
        """ Transpose in place, by exchanging the row and column lists """
        self.axes[Axis.rows], self.axes[Axis.cols] = self.axes[Axis.cols], self.axes[Axis.rows]
        return self

    def _truncate_list(self, ax: Axis, index: int, bound: int):
        """ Drop all elements of list `index` with off-axis index >= `bound` """
        data = self.axes[ax]
        last = self.before(ax, index, bound - 1)
        dropped = 0
        e = last.next(data.ax)
        while e is not None:
            dropped += 1
            e = e.next(data.ax)
        last.set_next(data.ax, None)
        data.qtys[index] -= dropped

    def reshape(self, height: int, width: int) -> "SparseMatrix":
        """ Change dimensions to `height` x `width`.
        Elements falling outside the new bounds are discarded. """
        if height < 0 or width < 0:
            raise ShapeError(f"Invalid matrix dimensions {height}x{width}")

        # Unlink out-of-bounds elements from the lists that survive.
        # Lists beyond the new bounds are dropped whole.
        if height < self.height:
            for c in range(min(self.width, width)):
                self._truncate_list(Axis.cols, c, height)
        if width < self.width:
            for r in range(min(self.height, height)):
                self._truncate_list(Axis.rows, r, width)

        self.axes[Axis.rows].resize(height)
        self.axes[Axis.cols].resize(width)
        return self

    def copy(self) -> "SparseMatrix":
        """ Create an element-by-element copy, sharing no elements with `self` """
        cp = SparseMatrix(self.height, self.width)
        cp.default_value = self.default_value
        # Rows are visited in order, so each column's tail is always the right insertion point
        col_tails = list(cp.columns)
        for r in range(self.height):
            tail = cp.rows[r]
            for c, v in self.row_items(r):
                e = Element(row=r, col=c, val=v)
                tail.next_in_row = e
                tail = e
                col_tails[c].next_in_col = e
                col_tails[c] = e
        cp.axes[Axis.rows].qtys = self.axes[Axis.rows].qtys[:]
        cp.axes[Axis.cols].qtys = self.axes[Axis.cols].qtys[:]
        return cp

    def identity(self) -> "SparseMatrix":
        """ Reset a square matrix to the identity """
        if self.height != self.width:
            raise ShapeError(f"Identity requires a square matrix, not {self.height}x{self.width}")
        for data in self.axes.values():
            data.clear()
        for k in range(self.height):
            self.set(k, k, 1)
        return self

    def from_array(self, array: Sequence[Sequence[float]]) -> "SparseMatrix":
        """ Load the contents of rectangular, dense, two-dimensional `array`.
        Reshapes `self` to match its dimensions. """
        height = len(array)
        width = len(array[0]) if height else 0
        for n, row in enumerate(array):
            if len(row) != width:
                raise ShapeError(f"Non-rectangular array: row {n} has length {len(row)}, expected {width}")

        self.reshape(height, width)
        for r in range(height):
            for c in range(width):
                self.set(r, c, array[r][c])
        return self

    def to_array(self) -> List[List[float]]:
        """ Dense, row-major list-of-lists copy of our contents """
        return [[self.get(r, c) for c in range(self.width)] for r in range(self.height)]

    def _fold(self, ax: Axis, index: int, func: Callable, initial):
        result = initial
        for e in self.elements(ax, index):
            result = func(result, e.val)
        return result

    def compute_by_row(self, row: int, func: Callable, initial):
        """ Fold associative `func` over the stored values of row `row`, starting from `initial` """
        self._check_row(row)
        return self._fold(Axis.rows, row, func, initial)

    def compute_by_column(self, col: int, func: Callable, initial):
        """ Fold associative `func` over the stored values of column `col`, starting from `initial` """
        self._check_col(col)
        return self._fold(Axis.cols, col, func, initial)

    def compute(self, func: Callable, initial):
        """ Fold associative `func` over all stored values.
        Each non-empty row is folded from `initial`, and the row-results folded in turn.
        Absent (default) entries never participate, so `initial` must be neutral for `func`. """
        result = initial
        qtys = self.axes[Axis.rows].qtys
        for r in range(self.height):
            if qtys[r]:
                result = func(result, self._fold(Axis.rows, r, func, initial))
        return result

    def _map(self, ax: Axis, indices: Sequence[int], func: Callable):
        data = self.axes[ax]
        zeroed = []
        try:
            for index in indices:
                for e in self.elements(ax, index):
                    e.val = func(e.val)
                    if e.val == self.default_value:
                        zeroed.append((index, data.key(e)))
        finally:
            # Unlink any elements `func` took to the default value, even if it raised
            for index, key in zeroed:
                if ax is Axis.rows:
                    self.set(index, key, self.default_value)
                else:
                    self.set(key, index, self.default_value)

    def map_by_row(self, row: int, func: Callable) -> "SparseMatrix":
        """ Apply `func` to each stored value of row `row`, in place """
        self._check_row(row)
        self._check_map_func(func)
        self._map(Axis.rows, [row], func)
        return self

    def map_by_column(self, col: int, func: Callable) -> "SparseMatrix":
        """ Apply `func` to each stored value of column `col`, in place """
        self._check_col(col)
        self._check_map_func(func)
        self._map(Axis.cols, [col], func)
        return self

    def map(self, func: Callable) -> "SparseMatrix":
        """ Apply `func` to each stored value, in place.
        `func` must map the default value to itself, since absent entries are not visited. """
        self._check_map_func(func)
        self._map(Axis.rows, range(self.height), func)
        return self

    def scale(self, k: float) -> "SparseMatrix":
        """ Scalar multiplication, returning a new matrix.
        Absent entries stay absent, whatever `k`; products equal to the default are dropped. """
        cp = self.copy()
        cp._map(Axis.rows, range(cp.height), lambda v: v * k)
        return cp

    def dot(self, row: int, other: "SparseMatrix", col: int) -> float:
        """ Dot-product of our row `row` and `other`s column `col` """
        rd, cd = self.axes[Axis.rows], other.axes[Axis.cols]
        re = rd.first(row)
        ce = cd.first(col)

        # "Two pointer" merge-join, advancing whichever is behind
        val = 0
        while re is not None and ce is not None:
            rk, ck = rd.key(re), cd.key(ce)
            if rk < ck:
                re = re.next(rd.ax)
            elif ck < rk:
                ce = ce.next(cd.ax)
            else:
                val += re.val * ce.val
                re = re.next(rd.ax)
                ce = ce.next(cd.ax)
        return val

    def matmul(self, other: "SparseMatrix") -> "SparseMatrix":
        """ Matrix multiplication self*other """
        if self.width != other.height:
            raise ShapeError(f"Cannot multiply {self.height}x{self.width} by {other.height}x{other.width}")

        m = SparseMatrix(self.height, other.width)
        qtys = self.axes[Axis.rows].qtys
        for row in range(self.height):
            if not qtys[row]: continue
            for col in range(other.width):
                m.set(row, col, self.dot(row, other, col))
        return m

    def mult(self, vec: Sequence[float]) -> List[float]:
        """ Multiply with a dense column vector of length `width`.
        Returns a dense list of length `height`. """
        if len(vec) != self.width:
            raise ShapeError(f"Invalid vector: length {len(vec)} for matrix width {self.width}")

        # Embed as a single-column matrix.
        # Filling bottom-up keeps every insertion at the head of the column.
        x = SparseMatrix(len(vec), 1)
        for r in range(len(vec) - 1, -1, -1):
            x.set(r, 0, vec[r])

        y = [self.default_value] * self.height
        for r, v in self.matmul(x).col_items(0):
            y[r] = v
        return y

    def mul(self, other):
        """ Multiply by a number, a `SparseMatrix`, or a dense vector """
        if isinstance(other, SparseMatrix):
            return self.matmul(other)
        if isinstance(other, Number):
            return self.scale(other)
        return self.mult(other)

    def _checkup(self):
        """ Internal consistency tests.  Probably pretty slow. """
        seen = {}
        for ax in (Axis.rows, Axis.cols):
            data = self.axes[ax]
            MatrixError.assert_eq(len(data.hdrs), len(data.qtys))
            ids = set()
            for n, hdr in enumerate(data.hdrs):
                MatrixError.assert_eq(hdr.index(data.ax), n)
                MatrixError.assert_eq(data.key(hdr), -1)
                last, qty = -1, 0
                for e in self.elements(ax, n):
                    MatrixError.assert_eq(e.index(data.ax), n)
                    MatrixError.assert_true(data.key(e) > last)
                    MatrixError.assert_true(data.key(e) < len(self.axes[~ax]))
                    MatrixError.assert_not_eq(e.val, self.default_value)
                    ids.add(id(e))
                    last = data.key(e)
                    qty += 1
                MatrixError.assert_eq(qty, data.qtys[n])
            seen[ax] = ids
        # Every element must be linked into both a row and a column
        MatrixError.assert_eq(seen[Axis.rows], seen[Axis.cols])


class MatrixError(Exception):
    @classmethod
    def assert_true(cls, cond):
        if not cond:
            raise cls

    @classmethod
    def assert_eq(cls, x, y):
        if x != y:
            raise cls(f"{x} != {y}")

    @classmethod
    def assert_not_eq(cls, x, y):
        if x == y:
            raise cls(f"{x} == {y}")

    @classmethod
    def assert_is(cls, x, y):
        if x is not y:
            raise cls


class IndexOutOfRange(MatrixError): pass


class ShapeError(MatrixError): pass


class InvariantViolation(MatrixError): pass
