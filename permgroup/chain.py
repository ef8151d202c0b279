from __future__ import annotations

import functools
import math
import operator
import random
from dataclasses import dataclass
from itertools import product
from typing import Iterable, Iterator, Sequence

from .config import Config
from .errors import DegreeMismatch, NotInGroup, OutOfRange
from .generating_set import GeneratingSet, PermLike
from .orbit import Orbit
from .permutation import Permutation, as_permutation
from .schreier_sims import distribute_gens_by_base, schreier_sims, sift


@dataclass(frozen=True)
class Level:
    base_point: int
    orbit: Orbit
    generators: tuple[Permutation, ...]


class StabilizerChain():
    r"""
    A base `(b_0, \dots, b_{k-1})` with strong generating set, stored level
    by level.

    Level `i` holds the generators of `G^{(i)} = G_{b_0, \dots, b_{i-1}}`
    and the orbit of `b_i` under them. The chain is immutable; operations
    that change the base return a new chain.
    """

    __slots__ = ('_degree', '_levels', '_strong_gens')

    def __init__(self, degree: int, levels: Iterable[Level],
                 strong_generators: Iterable[Permutation]):
        self._degree = degree
        self._levels = tuple(levels)
        self._strong_gens = tuple(strong_generators)

    @classmethod
    def from_bsgs(cls, base: Sequence[int],
                  strong_generators: Sequence[Permutation],
                  degree: int) -> StabilizerChain:
        """Assemble the chain of a known base and strong generating set."""
        strong_gens_distr = distribute_gens_by_base(base, strong_generators)
        levels = []
        for alpha, gens in zip(base, strong_gens_distr):
            orbit = Orbit.compute(alpha, gens, degree)
            levels.append(Level(alpha, orbit, tuple(orbit.generators)))
        return cls(degree, levels, strong_generators)

    @classmethod
    def build(cls,
              generators: GeneratingSet | Iterable[PermLike],
              base: Sequence[int] | None = None,
              degree: int | None = None,
              cfg: Config | None = None) -> StabilizerChain:
        gens = GeneratingSet.coerce(generators, degree)
        base, strong_gens = schreier_sims(gens, base, cfg)
        return cls.from_bsgs(base, strong_gens, gens.degree)

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def levels(self) -> tuple[Level, ...]:
        return self._levels

    @property
    def base(self) -> list[int]:
        return [level.base_point for level in self._levels]

    @property
    def strong_generators(self) -> list[Permutation]:
        return list(self._strong_gens)

    @property
    def basic_orbits(self) -> list[list[int]]:
        return [sorted(level.orbit) for level in self._levels]

    def basic_transversals(self) -> list[dict[int, Permutation]]:
        return [level.orbit.transversal() for level in self._levels]

    def __len__(self):
        return len(self._levels)

    def __iter__(self) -> Iterator[Level]:
        return iter(self._levels)

    def __repr__(self):
        return (f"StabilizerChain(degree={self._degree}, base={self.base}, "
                f"order={self.order()})")

    def order(self) -> int:
        return math.prod(len(level.orbit) for level in self._levels)

    def is_trivial(self) -> bool:
        return self.order() == 1

    def _coerce(self, perm: Permutation | Sequence[int]) -> Permutation:
        perm = as_permutation(perm)
        if perm.degree != self._degree:
            raise DegreeMismatch(self._degree, perm.degree)
        return perm

    def sift(self, perm: Permutation | Sequence[int]) -> tuple[Permutation, int]:
        """Sift through every level, see :func:`permgroup.schreier_sims.sift`."""
        return sift(self._coerce(perm), self.base,
                    [level.orbit for level in self._levels])

    def contains(self, perm: Permutation | Sequence[int]) -> bool:
        h, depth = self.sift(perm)
        return depth == len(self._levels) and h.is_identity()

    __contains__ = contains

    def coset_factor(self, perm: Permutation | Sequence[int]) -> list[Permutation]:
        """Return the coset factorization of ``perm``.

        The factors ``u_0, ..., u_{k-1}`` are transversal elements of the
        levels, and ``perm == u_0 * u_1 * ... * u_{k-1}``.
        """
        h = self._coerce(perm)
        factors = []
        for level in self._levels:
            beta = h.image[level.base_point]
            if beta not in level.orbit:
                raise NotInGroup(f"{perm!r} is not contained in the group")
            factors.append(level.orbit.coset_representative(beta))
            h = level.orbit.coset_representative_inverse(beta) * h
        if not h.is_identity():
            raise NotInGroup(f"{perm!r} is not contained in the group")
        return factors

    def coset_rank(self, perm: Permutation | Sequence[int]) -> int:
        """The position of ``perm`` in the listing of :meth:`elements`."""
        h = self._coerce(perm)
        rank = 0
        b = 1
        for level, orbit in zip(self._levels, self.basic_orbits):
            beta = h.image[level.base_point]
            if beta not in level.orbit:
                raise NotInGroup(f"{perm!r} is not contained in the group")
            rank += b * orbit.index(beta)
            b *= len(orbit)
            h = level.orbit.coset_representative_inverse(beta) * h
        if not h.is_identity():
            raise NotInGroup(f"{perm!r} is not contained in the group")
        return rank

    def coset_unrank(self, rank: int) -> Permutation:
        """Inverse of :meth:`coset_rank`."""
        if not 0 <= rank < self.order():
            raise OutOfRange(rank, self.order(), 'rank')
        ret = Permutation.identity(self._degree)
        for level, orbit in zip(self._levels, self.basic_orbits):
            rank, c = divmod(rank, len(orbit))
            ret = ret * level.orbit.coset_representative(orbit[c])
        return ret

    def elements(self) -> Iterator[Permutation]:
        """Yield every group element, in coset rank order."""
        identity = Permutation.identity(self._degree)
        transversals = [[tr[beta] for beta in sorted(tr)]
                        for tr in self.basic_transversals()]
        for factors in product(*reversed(transversals)):
            yield functools.reduce(operator.mul, reversed(factors), identity)

    def random_element(self, rng: random.Random | None = None) -> Permutation:
        """Return a uniformly distributed element of the group."""
        choice = rng.choice if rng is not None else random.choice
        g = Permutation.identity(self._degree)
        for level in self._levels:
            g = g * level.orbit.coset_representative(
                choice(level.orbit.points))
        return g

    def stabilizer(self, depth: int) -> StabilizerChain:
        """The chain of the pointwise stabilizer of the first ``depth`` base
        points."""
        if not 0 <= depth <= len(self._levels):
            raise OutOfRange(depth, len(self._levels) + 1, 'depth')
        fixed = self.base[:depth]
        gens = [
            g for g in self._strong_gens
            if all(g.image[x] == x for x in fixed)
        ]
        return StabilizerChain(self._degree, self._levels[depth:], gens)

    def extend_base(self, points: Iterable[int]) -> StabilizerChain:
        """A new chain whose base is this base followed by ``points``.

        The last stabilizer of a complete chain is trivial, so every added
        level has a trivial orbit.
        """
        base = self.base
        for b in points:
            if not 0 <= b < self._degree:
                raise OutOfRange(b, self._degree)
            if b in base:
                raise ValueError(f"point {b} is already a base point")
            base.append(b)
        return StabilizerChain.from_bsgs(base, self._strong_gens,
                                         self._degree)

    def change_base(self,
                    prefix: Sequence[int],
                    cfg: Config | None = None) -> StabilizerChain:
        """A new chain of the same group whose base starts with ``prefix``."""
        return StabilizerChain.build(self._strong_gens,
                                     base=prefix,
                                     degree=self._degree,
                                     cfg=cfg)

    def verify(self) -> bool:
        """Check that every level generates the full basic stabilizer.

        By Schreier's lemma this holds if each level's generators fix the
        earlier base points and every Schreier generator of each level sifts
        to the identity through the deeper levels.
        """
        base = self.base
        orbits = [level.orbit for level in self._levels]
        for i, level in enumerate(self._levels):
            if any(g.image[x] != x for g in level.generators
                   for x in base[:i]):
                return False
            for schreier_gen in level.orbit.schreier_generators():
                h, j = sift(schreier_gen, base, orbits, i + 1)
                if j < len(base) or not h.is_identity():
                    return False
        return True


def build_stabilizer_chain(generators: GeneratingSet | Iterable[PermLike],
                           base: Sequence[int] | None = None,
                           degree: int | None = None,
                           cfg: Config | None = None) -> StabilizerChain:
    return StabilizerChain.build(generators, base, degree, cfg)


def order(chain: StabilizerChain) -> int:
    return chain.order()


def contains(chain: StabilizerChain, perm: Permutation | Sequence[int]) -> bool:
    return chain.contains(perm)
