r"""
Orbits and Schreier vectors.

For a base point `\alpha` and generators `g_0, \dots, g_{m-1}` the orbit is
computed breadth first. Each newly reached point `\beta = g_k(\gamma)`
records the pair ``(k, gamma)`` in the Schreier vector; the base point records
``ROOT``. Following these back-pointers from `\beta` to `\alpha` and
multiplying the generators met on the way gives a coset representative
`u_\beta` with `u_\beta(\alpha) = \beta`, without storing the transversal.
"""
from __future__ import annotations

from typing import Iterable, Iterator, Optional, Union

from .errors import OutOfRange, PointNotInOrbit
from .generating_set import GeneratingSet, PermLike
from .permutation import Permutation

ROOT = -1

SchreierEntry = Union[int, tuple[int, int], None]


class Orbit():
    """The orbit of a point under a set of generators, with Schreier vector.

    Instances are immutable once computed. Use :meth:`Orbit.compute`.
    """

    __slots__ = ('_base_point', '_generators', '_edges', '_points',
                 '_vector', '_edge_inverses', '_inverse_cache')

    def __init__(self, base_point: int, generators: GeneratingSet,
                 edges: tuple[Permutation, ...], points: tuple[int, ...],
                 vector: tuple[SchreierEntry, ...]):
        self._base_point = base_point
        self._generators = generators
        self._edges = edges
        self._points = points
        self._vector = vector
        self._edge_inverses = None
        self._inverse_cache: dict[int, Permutation] = {}

    @classmethod
    def compute(cls,
                base_point: int,
                generators: GeneratingSet | Iterable[PermLike] = (),
                degree: int | None = None,
                inverses: bool = False) -> Orbit:
        """Breadth first orbit of ``base_point``.

        With ``inverses=True`` the inverse of each generator is followed as
        well, which can make the Schreier tree shallower. It never changes the
        orbit, since in a finite group every inverse is a positive power.
        """
        gens = GeneratingSet.coerce(generators, degree)
        if (degree is None and not isinstance(generators, GeneratingSet)
                and not len(gens)):
            gens = GeneratingSet((), max(base_point + 1, 0))
        n = gens.degree
        if not 0 <= base_point < n:
            raise OutOfRange(base_point, n)

        edges = tuple(gens)
        if inverses:
            edges = edges + tuple(g.inv() for g in gens)
        images = [g.image for g in edges]

        vector: list[SchreierEntry] = [None] * n
        vector[base_point] = ROOT
        points = [base_point]
        for x in points:
            for k, img in enumerate(images):
                y = img[x]
                if vector[y] is None:
                    vector[y] = (k, x)
                    points.append(y)
        return cls(base_point, gens, edges, tuple(points), tuple(vector))

    @property
    def base_point(self) -> int:
        return self._base_point

    @property
    def generators(self) -> GeneratingSet:
        return self._generators

    @property
    def degree(self) -> int:
        return len(self._vector)

    @property
    def points(self) -> tuple[int, ...]:
        """Orbit points in discovery order, base point first."""
        return self._points

    @property
    def schreier_vector(self) -> tuple[SchreierEntry, ...]:
        return self._vector

    def edge(self, label: int) -> Permutation:
        """The permutation used by Schreier vector entries with this label."""
        return self._edges[label]

    def __len__(self):
        return len(self._points)

    def __iter__(self) -> Iterator[int]:
        return iter(self._points)

    def __contains__(self, point) -> bool:
        return (isinstance(point, int) and 0 <= point < len(self._vector)
                and self._vector[point] is not None)

    def __repr__(self):
        return f"Orbit({self._base_point}, {sorted(self._points)})"

    def _check(self, point: int):
        if not 0 <= point < len(self._vector):
            raise OutOfRange(point, len(self._vector))
        if self._vector[point] is None:
            raise PointNotInOrbit(point, self._base_point)

    def _path(self, point: int) -> Iterator[int]:
        """Edge labels met walking from point back to the base point."""
        self._check(point)
        entry = self._vector[point]
        while entry != ROOT:
            label, point = entry
            yield label
            entry = self._vector[point]

    def depth(self, point: int) -> int:
        return sum(1 for _ in self._path(point))

    def coset_representative(self, point: int) -> Permutation:
        """The transversal element u with u(base_point) == point."""
        u = Permutation.identity(self.degree)
        # walking back from point, each edge is applied after those before it
        for label in self._path(point):
            u = u * self._edges[label]
        return u

    def coset_representative_inverse(self, point: int) -> Permutation:
        try:
            return self._inverse_cache[point]
        except KeyError:
            pass
        if self._edge_inverses is None:
            self._edge_inverses = tuple(e.inv() for e in self._edges)
        u = Permutation.identity(self.degree)
        for label in self._path(point):
            u = self._edge_inverses[label] * u
        self._inverse_cache[point] = u
        return u

    def transversal(self) -> dict[int, Permutation]:
        """All coset representatives, keyed by orbit point."""
        tr = {self._base_point: Permutation.identity(self.degree)}
        for x in self._points[1:]:
            label, parent = self._vector[x]
            tr[x] = self._edges[label] * tr[parent]
        return tr

    def schreier_generators(self) -> Iterator[Permutation]:
        r"""Yield the non-trivial Schreier generators
        `u_{g(\beta)}^{-1} g u_\beta` of the point stabilizer."""
        tr = self.transversal()
        inverses: dict[int, Permutation] = {}
        for beta in self._points:
            u_beta = tr[beta]
            for gen in self._generators:
                gb = gen.image[beta]
                g1 = gen * u_beta
                if g1 == tr[gb]:
                    continue
                try:
                    u1_inv = inverses[gb]
                except KeyError:
                    u1_inv = inverses[gb] = tr[gb].inv()
                yield u1_inv * g1


def orbits(generators: GeneratingSet | Iterable[PermLike],
           degree: Optional[int] = None) -> list[list[int]]:
    """Partition [0, degree) into orbits, each sorted, ordered by smallest point."""
    gens = GeneratingSet.coerce(generators, degree)
    seen = [False] * gens.degree
    ret = []
    for x in range(gens.degree):
        if seen[x]:
            continue
        orbit = Orbit.compute(x, gens)
        for y in orbit:
            seen[y] = True
        ret.append(sorted(orbit))
    return ret
