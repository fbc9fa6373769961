"""
Support for storing dense-array form matrices, and their expected results, to YAML
"""

from pathlib import Path
from typing import List, Optional

import ruamel.yaml

yaml = ruamel.yaml.YAML()


class MatrixYaml(object):
    def __init__(self):
        self.desc: str = ""
        self.array: List[List[float]] = []
        self.vector: Optional[List[float]] = None
        self.product: Optional[List[float]] = None
        self.total: Optional[float] = None

    @classmethod
    def from_mat(cls, m, desc: str = ""):
        from .matrix import SparseMatrix
        if not isinstance(m, SparseMatrix):
            raise TypeError(m)

        self = cls()
        self.desc = desc
        self.array = m.to_array()
        self.total = m.compute(lambda a, b: a + b, 0)
        return self

    def to_dict(self):
        return dict(
            desc=self.desc,
            array=self.array,
            vector=self.vector,
            product=self.product,
            total=self.total,
        )

    @classmethod
    def from_dict(cls, d: dict):
        self = cls()
        self.desc = d['desc']
        self.array = d['array']
        self.vector = d.get('vector')
        self.product = d.get('product')
        self.total = d.get('total')
        return self

    def to_mat(self):
        from .matrix import SparseMatrix
        return SparseMatrix().from_array(self.array)

    def dump(self, file):
        p = Path(file)
        yaml.dump(self.to_dict(), p)

    @classmethod
    def load(cls, file):
        p = Path(file)
        y = yaml.load(p)
        vector = None
        if y.get('vector'):
            vector = list(y['vector'])
        product = None
        if y.get('product'):
            product = list(y['product'])
        total = None
        if y.get('total') is not None:
            total = float(y['total'])
        d = dict(
            desc=str(y['desc']),
            array=[list(row) for row in y['array']],
            vector=vector,
            product=product,
            total=total,
        )
        return cls.from_dict(d)
