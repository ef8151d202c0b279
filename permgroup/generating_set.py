from __future__ import annotations

from typing import Iterable, Iterator, Sequence, Union, overload

from .errors import DegreeMismatch
from .permutation import Permutation, as_permutation

PermLike = Union[Permutation, Sequence[int]]


class GeneratingSet(Sequence[Permutation]):
    """An ordered, duplicate-free collection of permutations of one degree.

    The degree is taken from the generators, or from ``degree`` when given
    (which is the only way to describe an empty set of generators over n
    points).
    """

    __slots__ = ('_gens', '_degree')

    def __init__(self,
                 generators: Iterable[PermLike] = (),
                 degree: int | None = None):
        gens = [as_permutation(g) for g in generators]
        if degree is None:
            degree = gens[0].degree if gens else 0
        elif degree < 0:
            raise ValueError(f"degree must be non-negative, got {degree}")
        for g in gens:
            if g.degree != degree:
                raise DegreeMismatch(degree, g.degree, 'generator')
        self._gens = tuple(dict.fromkeys(gens))
        self._degree = degree

    @classmethod
    def coerce(cls,
               generators: GeneratingSet | Iterable[PermLike],
               degree: int | None = None) -> GeneratingSet:
        if isinstance(generators, GeneratingSet):
            if degree is not None and degree != generators.degree:
                raise DegreeMismatch(degree, generators.degree, 'generator')
            return generators
        return cls(generators, degree)

    @property
    def degree(self) -> int:
        return self._degree

    @overload
    def __getitem__(self, i: int) -> Permutation:
        ...

    @overload
    def __getitem__(self, i: slice) -> tuple[Permutation, ...]:
        ...

    def __getitem__(self, i):
        return self._gens[i]

    def __len__(self):
        return len(self._gens)

    def __iter__(self) -> Iterator[Permutation]:
        return iter(self._gens)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GeneratingSet):
            return NotImplemented
        return self._degree == other._degree and self._gens == other._gens

    def __hash__(self):
        return hash((self._degree, self._gens))

    def __repr__(self):
        return f"GeneratingSet({list(self._gens)!r}, degree={self._degree})"

    def nontrivial(self) -> GeneratingSet:
        """Drop the identity, if present."""
        return GeneratingSet((g for g in self._gens if not g.is_identity()),
                             self._degree)

    @property
    def support(self) -> tuple[int, ...]:
        support = set()
        for g in self._gens:
            support.update(g.support)
        return tuple(sorted(support))

    def is_symmetric(self) -> bool:
        """True if the set is closed under inversion."""
        gens = set(self._gens)
        return all(g.inv() in gens for g in self._gens)

    def with_inverses(self) -> GeneratingSet:
        return GeneratingSet(
            [*self._gens, *(g.inv() for g in self._gens)], self._degree)
