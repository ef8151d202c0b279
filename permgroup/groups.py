from __future__ import annotations

import math
from itertools import combinations
from typing import Iterable, Iterator, Sequence

from .chain import StabilizerChain
from .config import Config
from .errors import DegreeMismatch
from .generating_set import GeneratingSet, PermLike
from .orbit import Orbit, orbits
from .permutation import Permutation, as_permutation


class PermutationGroup():

    def __init__(self,
                 generators: GeneratingSet | Iterable[PermLike],
                 degree: int | None = None,
                 cfg: Config | None = None):
        self.generators = GeneratingSet.coerce(generators, degree)
        self.cfg = cfg
        self._chain: StabilizerChain | None = None
        self._is_abelian = None

    @property
    def degree(self) -> int:
        return self.generators.degree

    def __repr__(self) -> str:
        return f"PermutationGroup({list(self.generators)}, degree={self.degree})"

    def stabilizer_chain(self) -> StabilizerChain:
        if self._chain is None:
            self._chain = StabilizerChain.build(self.generators,
                                                degree=self.degree,
                                                cfg=self.cfg)
        return self._chain

    @property
    def base(self) -> list[int]:
        """Return a base from the Schreier-Sims algorithm."""
        return self.stabilizer_chain().base

    @property
    def strong_generators(self) -> list[Permutation]:
        return self.stabilizer_chain().strong_generators

    def order(self) -> int:
        return self.stabilizer_chain().order()

    def __contains__(self, perm: Permutation | Sequence[int]) -> bool:
        return self.stabilizer_chain().contains(perm)

    def __iter__(self) -> Iterator[Permutation]:
        return self.generate()

    def generate(self) -> Iterator[Permutation]:
        """Yield group elements in coset rank order."""
        return self.stabilizer_chain().elements()

    @property
    def elements(self) -> list[Permutation]:
        return sorted(self.generate())

    def random(self, N=1):
        """Return a random element of the group.

        If N > 1, return a list of N random elements.
        """
        chain = self.stabilizer_chain()
        ret = [chain.random_element() for _ in range(N)]
        if N == 1:
            return ret[0]
        return ret

    def is_trivial(self) -> bool:
        """Test if the group is the trivial group.

        This is true if the group contains only the identity permutation.
        """
        return all(g.is_identity() for g in self.generators)

    def is_abelian(self) -> bool:
        if self._is_abelian is None:
            self._is_abelian = all(
                x * y == y * x for x, y in combinations(self.generators, 2))
        return self._is_abelian

    def orbit(self, point: int) -> list[int]:
        return sorted(Orbit.compute(point, self.generators, self.degree))

    def orbits(self) -> list[list[int]]:
        return orbits(self.generators, self.degree)

    def stabilizer(self, point: int) -> PermutationGroup:
        """Return the stabilizer subgroup of ``point``."""
        chain = self.stabilizer_chain().change_base([point], cfg=self.cfg)
        return PermutationGroup(chain.stabilizer(1).strong_generators,
                                self.degree, self.cfg)

    def is_subgroup(self, G: PermutationGroup) -> bool:
        """Return ``True`` if all elements of ``self`` belong to ``G``."""
        if not isinstance(G, PermutationGroup):
            return False
        if self.degree != G.degree:
            raise DegreeMismatch(G.degree, self.degree, 'group')
        if self.is_trivial():
            return True
        if G.order() % self.order() != 0:
            return False
        return all(g in G for g in self.generators)

    def index(self, H: PermutationGroup) -> int:
        """Returns the index of the subgroup ``H`` in ``self``."""
        if not H.is_subgroup(self):
            raise ValueError(f"{H!r} is not a subgroup of {self!r}")
        return self.order() // H.order()

    def __eq__(self, other) -> bool:
        """Return ``True`` if both generate the same group."""
        if not isinstance(other, PermutationGroup):
            return NotImplemented
        if self.degree != other.degree:
            return False
        if set(self.generators) == set(other.generators):
            return True
        return (self.order() == other.order()
                and all(g in other for g in self.generators))

    def __hash__(self):
        return hash((self.degree, self.order()))

    def __le__(self, other) -> bool:
        if isinstance(other, PermutationGroup):
            return self.is_subgroup(other)
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, PermutationGroup):
            return self.is_subgroup(other) and self.order() < other.order()
        return NotImplemented


class SymmetricGroup(PermutationGroup):

    def __init__(self, N: int, cfg: Config | None = None):
        if N < 2:
            generators = []
        elif N == 2:
            generators = [Permutation.transposition(N, 0, 1)]
        else:
            generators = [
                Permutation.cycle(N, range(N)),
                Permutation.transposition(N, 0, 1)
            ]
        super().__init__(generators, N, cfg)
        self.N = N

    def __repr__(self) -> str:
        return f"SymmetricGroup({self.N})"

    def order(self) -> int:
        return math.factorial(self.N)

    def __contains__(self, perm: Permutation | Sequence[int]) -> bool:
        perm = as_permutation(perm)
        if perm.degree != self.N:
            raise DegreeMismatch(self.N, perm.degree)
        return True


class AlternatingGroup(PermutationGroup):

    def __init__(self, N: int, cfg: Config | None = None):
        if N <= 2:
            generators = []
        elif N == 3:
            generators = [Permutation.cycle(N, (0, 1, 2))]
        else:
            generators = [
                Permutation.cycle(N, (0, 1, 2)),
                Permutation.cycle(N, range(N))
                if N % 2 else Permutation.cycle(N, range(1, N))
            ]
        super().__init__(generators, N, cfg)
        self.N = N

    def __repr__(self) -> str:
        return f"AlternatingGroup({self.N})"

    def order(self) -> int:
        return max(math.factorial(self.N) // 2, 1)

    def __contains__(self, perm: Permutation | Sequence[int]) -> bool:
        perm = as_permutation(perm)
        if perm.degree != self.N:
            raise DegreeMismatch(self.N, perm.degree)
        return perm.is_even()


class CyclicGroup(PermutationGroup):

    def __init__(self, N: int, cfg: Config | None = None):
        if N < 2:
            generators = []
        else:
            generators = [Permutation.cycle(N, range(N))]
        super().__init__(generators, N, cfg)
        self.N = N

    def __repr__(self) -> str:
        return f"CyclicGroup({self.N})"

    def order(self) -> int:
        return max(self.N, 1)


class DihedralGroup(PermutationGroup):
    """Symmetries of the regular N-gon acting on its vertices."""

    def __init__(self, N: int, cfg: Config | None = None):
        if N < 2:
            generators = []
        elif N == 2:
            generators = [Permutation.transposition(N, 0, 1)]
        else:
            generators = [
                Permutation.cycle(N, range(N)),
                Permutation([(N - i) % N for i in range(N)])
            ]
        super().__init__(generators, N, cfg)
        self.N = N

    def __repr__(self) -> str:
        return f"DihedralGroup({self.N})"

    def order(self) -> int:
        if self.N < 3:
            return max(self.N, 1)
        return 2 * self.N
