"""
Permutations of the points [0, n).

A permutation is stored in image form: the permutation x is the tuple
(x(0), ..., x(n-1)). Products are read right-to-left, so ``a * b`` applies
``b`` first and then ``a``.
"""
from __future__ import annotations

import functools
import math
import operator
from typing import Iterable, Iterator, Sequence

import numpy as np

from .errors import DegreeMismatch, InvalidPermutation, OutOfRange


def is_permutation(image: Sequence[int]) -> bool:
    """
    Check that image is a permutation of the integers [0, n) where n = len(image).

    >>> [is_permutation(w) for w in [(), (0, 1), (0, 2), (0, 0, 2), (2, 1, 0)]]
    [True, True, False, False, True]
    """
    if len(image) == 0:
        return True
    if not all(isinstance(x, (int, np.integer)) for x in image):
        return False
    if min(image) != 0 or max(image) != len(image) - 1:
        return False
    # any duplicate leaves a zero bit somewhere in the mask
    mask = functools.reduce(operator.or_, (1 << int(x) for x in image), 0)
    return mask == (1 << len(image)) - 1


@functools.total_ordering
class Permutation():

    __slots__ = ('_image', '_hash')

    def __init__(self, image: Iterable[int]):
        image = tuple(image)
        if not is_permutation(image):
            raise InvalidPermutation(
                f"{image!r} is not a permutation of [0, {len(image)})")
        self._image = tuple(int(x) for x in image)
        self._hash = None

    @classmethod
    def _from_image(cls, image: tuple[int, ...]) -> Permutation:
        p = cls.__new__(cls)
        p._image = image
        p._hash = None
        return p

    @classmethod
    def identity(cls, n: int) -> Permutation:
        if n < 0:
            raise ValueError(f"degree must be non-negative, got {n}")
        return cls._from_image(tuple(range(n)))

    @classmethod
    def cycle(cls, n: int, points: Sequence[int]) -> Permutation:
        """The cycle sending points[0] -> points[1] -> ... -> points[0]."""
        image = list(range(n))
        for x in points:
            if not 0 <= x < n:
                raise OutOfRange(x, n)
        if len(set(points)) != len(points):
            raise InvalidPermutation(f"cycle {tuple(points)!r} repeats a point")
        for i, x in enumerate(points):
            image[x] = points[(i + 1) % len(points)]
        return cls._from_image(tuple(image))

    @classmethod
    def transposition(cls, n: int, i: int, j: int) -> Permutation:
        if i == j:
            raise InvalidPermutation(f"transposition needs two points, got {i}")
        return cls.cycle(n, (i, j))

    @classmethod
    def from_cycles(cls, n: int, *cycles: Sequence[int]) -> Permutation:
        """
        The product of cycles (not necessarily disjoint), rightmost applied first.

        >>> Permutation.from_cycles(4, (0, 1), (1, 2)).image
        (1, 2, 0, 3)
        """
        return functools.reduce(operator.mul,
                                (cls.cycle(n, c) for c in cycles),
                                cls.identity(n))

    @classmethod
    def from_matrix(cls, mat: np.ndarray) -> Permutation:
        mat = np.asarray(mat)
        if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
            raise InvalidPermutation(f"matrix of shape {mat.shape} is not square")
        if not (np.isin(mat, (0, 1)).all() and (mat.sum(axis=0) == 1).all()
                and (mat.sum(axis=1) == 1).all()):
            raise InvalidPermutation("not a permutation matrix")
        return cls(np.argmax(mat, axis=0).tolist())

    @property
    def image(self) -> tuple[int, ...]:
        return self._image

    @property
    def degree(self) -> int:
        return len(self._image)

    def to_list(self) -> list[int]:
        return list(self._image)

    def __len__(self):
        return len(self._image)

    def __iter__(self):
        return iter(self._image)

    def __hash__(self):
        if self._hash is None:
            self._hash = hash(self._image)
        return self._hash

    def __eq__(self, value) -> bool:
        if not isinstance(value, Permutation):
            return NotImplemented
        return self._image == value._image

    def __lt__(self, value: Permutation) -> bool:
        if not isinstance(value, Permutation):
            return NotImplemented
        return self._image < value._image

    def __repr__(self):
        return f'Permutation({list(self._image)!r})'

    def __str__(self):
        cycles = [c for c in self.cycles() if len(c) > 1]
        if not cycles:
            return '()'
        return ''.join('(' + ' '.join(map(str, c)) + ')' for c in cycles)

    def __call__(self, point: int) -> int:
        return self.apply(point)

    def apply(self, point: int) -> int:
        if not 0 <= point < len(self._image):
            raise OutOfRange(point, len(self._image))
        return self._image[point]

    def preimage(self, point: int) -> int:
        if not 0 <= point < len(self._image):
            raise OutOfRange(point, len(self._image))
        return self._image.index(point)

    def __mul__(self, other: Permutation) -> Permutation:
        """Returns the product of two permutations.

        The product ``a * b`` applies ``b`` first, i.e. (a * b)(i) = a(b(i)).
        """
        if not isinstance(other, Permutation):
            return NotImplemented
        if len(self._image) != len(other._image):
            raise DegreeMismatch(len(self._image), len(other._image))
        image = self._image
        return Permutation._from_image(tuple(image[j] for j in other._image))

    def __pow__(self, n: int) -> Permutation:
        if n == 0:
            return Permutation.identity(len(self._image))
        elif n > 0:
            n = n % self.order
            ret = Permutation.identity(len(self._image))
            base = self
            while n > 0:
                if n % 2 == 1:
                    ret = ret * base
                base = base * base
                n //= 2
            return ret
        else:
            return self.inv()**(-n)

    def inv(self) -> Permutation:
        inv = [0] * len(self._image)
        for i, x in enumerate(self._image):
            inv[x] = i
        return Permutation._from_image(tuple(inv))

    def is_identity(self) -> bool:
        return all(x == i for i, x in enumerate(self._image))

    @property
    def support(self) -> tuple[int, ...]:
        """Returns the points moved by the permutation, in increasing order."""
        return tuple(i for i, x in enumerate(self._image) if x != i)

    def first_moved_point(self) -> int | None:
        for i, x in enumerate(self._image):
            if x != i:
                return i
        return None

    def cycles(self) -> Iterator[tuple[int, ...]]:
        """
        Yield the disjoint cycles of the permutation, fixed points included.
        Each cycle starts at its smallest point and cycles are ordered by that
        point.

        >>> list(Permutation([2, 1, 0, 3, 4, 6, 5]).cycles())
        [(0, 2), (1,), (3,), (4,), (5, 6)]
        """
        visited = [False] * len(self._image)
        for i in range(len(self._image)):
            if visited[i]:
                continue
            cycle = []
            pos = i
            while not visited[pos]:
                cycle.append(pos)
                visited[pos] = True
                pos = self._image[pos]
            yield tuple(cycle)

    def cycle_type(self) -> tuple[int, ...]:
        """The lengths of the disjoint cycles in decreasing order."""
        return tuple(sorted((len(c) for c in self.cycles()), reverse=True))

    @property
    def order(self) -> int:
        """Returns the order of the permutation.

        The order of a permutation is the least integer n such that
        p**n = e, where e is the identity permutation.
        """
        return math.lcm(1, *self.cycle_type())

    @property
    def parity(self) -> int:
        # odd-length cycles are even, so count n minus the number of cycles
        return (len(self._image) - len(self.cycle_type())) % 2

    @property
    def signature(self) -> int:
        return 1 - 2 * self.parity

    def is_even(self) -> bool:
        return self.parity == 0

    def to_matrix(self) -> np.ndarray:
        """Returns the matrix M with M[p(i), i] = 1.

        Matrices multiply like permutations: M(a * b) = M(a) @ M(b).
        """
        n = len(self._image)
        mat = np.zeros((n, n), dtype=np.int8)
        mat[list(self._image), list(range(n))] = 1
        return mat

    def commutator(self, x: Permutation) -> Permutation:
        """Return the commutator of ``self`` and ``x``: ``self*x*self.inv()*x.inv()``"""
        return self * x * self.inv() * x.inv()

    def conjugate(self, x: Permutation) -> Permutation:
        """Return ``x * self * x.inv()``."""
        return x * self * x.inv()


def compose(a: Permutation, b: Permutation) -> Permutation:
    return a * b


def inverse(a: Permutation) -> Permutation:
    return a.inv()


def apply(a: Permutation, point: int) -> int:
    return a.apply(point)


def is_identity(a: Permutation) -> bool:
    return a.is_identity()


def cycle_decomposition(a: Permutation) -> Iterator[tuple[int, ...]]:
    return a.cycles()


def as_permutation(p: Permutation | Sequence[int]) -> Permutation:
    if isinstance(p, Permutation):
        return p
    return Permutation(p)


def permute(expr: list | tuple | str | bytes | np.ndarray, perm: Permutation):
    """moves the item at position i of expr to position perm(i)."""
    if len(expr) != len(perm):
        raise DegreeMismatch(len(perm), len(expr), 'sequence')
    ret = [None] * len(expr)
    for i, x in zip(perm.image, expr):
        ret[i] = x
    if isinstance(expr, list):
        return ret
    elif isinstance(expr, tuple):
        return tuple(ret)
    elif isinstance(expr, str):
        return ''.join(ret)
    elif isinstance(expr, bytes):
        return bytes(ret)
    elif isinstance(expr, np.ndarray):
        return np.array(ret)
    else:
        return ret


def random_permutation(n: int, rng: np.random.Generator | None = None) -> Permutation:
    """return a uniformly random permutation of n elements"""
    if rng is None:
        rng = np.random.default_rng()
    return Permutation(rng.permutation(n).tolist())
