from __future__ import annotations

import logging
import random
from typing import Iterable, Sequence

from .config import Config, get_config
from .errors import ConvergenceFailure, OutOfRange
from .generating_set import GeneratingSet, PermLike
from .orbit import Orbit
from .permutation import Permutation

logger = logging.getLogger(__name__)


def sift(h: Permutation,
         base: Sequence[int],
         orbits: Sequence[Orbit],
         start: int = 0) -> tuple[Permutation, int]:
    """Sift ``h`` through the levels ``start, start + 1, ...`` of a chain.

    Returns the residual and the level at which sifting stopped. The level is
    ``len(base)`` when ``h`` passed every level; the residual then fixes every
    base point and is the identity exactly when ``h`` is a member.
    """
    for i in range(start, len(base)):
        beta = h.image[base[i]]
        if beta == base[i]:
            continue
        if beta not in orbits[i]:
            return h, i
        h = orbits[i].coset_representative_inverse(beta) * h
    return h, len(base)


def distribute_gens_by_base(
        base: Sequence[int],
        gens: Iterable[Permutation]) -> list[list[Permutation]]:
    r"""
    Distribute the group elements ``gens`` by membership in basic stabilizers.

    For a base `(b_0, b_1, \dots, b_{k-1})` the `i`-th entry of the result
    contains those elements of ``gens`` which fix `b_0, \dots, b_{i-1}`, so
    the `0`-th entry is ``gens`` itself.
    """
    base_len = len(base)
    stabs = [[] for _ in range(base_len)]
    for gen in gens:
        j = 0
        while j < base_len - 1 and gen.image[base[j]] == base[j]:
            j += 1
        for k in range(j + 1):
            stabs[k].append(gen)
    return stabs


def _check_base(base: Sequence[int] | None, degree: int) -> list[int]:
    if base is None:
        return []
    base = list(base)
    for b in base:
        if not 0 <= b < degree:
            raise OutOfRange(b, degree)
    if len(set(base)) != len(base):
        raise ValueError(f"base {base!r} contains repeated points")
    return base


def schreier_sims(
    generators: GeneratingSet | Iterable[PermLike],
    base: Sequence[int] | None = None,
    cfg: Config | None = None,
    degree: int | None = None,
) -> tuple[list[int], list[Permutation]]:
    """Compute a base and strong generating set with the configured method."""
    cfg = cfg or get_config()
    if cfg.method == 'deterministic':
        return schreier_sims_incremental(generators, base, cfg, degree)
    elif cfg.method == 'random':
        return random_schreier_sims(generators, base, cfg, degree)
    else:
        raise ValueError(f"unknown Schreier-Sims method {cfg.method!r}")


def schreier_sims_incremental(
    generators: GeneratingSet | Iterable[PermLike],
    base: Sequence[int] | None = None,
    cfg: Config | None = None,
    degree: int | None = None,
) -> tuple[list[int], list[Permutation]]:
    """Extend a sequence of points and generating set to a base and strong
    generating set.

    Parameters
    ==========
    generators
        The generating set to be extended to a strong generating set
        relative to the base obtained.

    base
        The sequence of points to be extended to a base. Optional
        parameter with default value ``[]``.

    Returns
    =======

    (base, strong_gens)
        ``base`` is the base obtained, and ``strong_gens`` is the strong
        generating set relative to it. The original parameters ``base``,
        ``generators`` remain unchanged.
    """
    cfg = cfg or get_config()
    gens = GeneratingSet.coerce(generators, degree)
    degree = gens.degree
    base = _check_base(base, degree)
    # remove the identity as a generator
    gens = list(gens.nontrivial())
    if not gens:
        return base, []

    # make sure no generator fixes all base points
    for gen in gens:
        if all(gen.image[x] == x for x in base):
            base.append(gen.first_moved_point())
    logger.debug("Schreier-Sims: degree = %d, initial base = %s", degree,
                 base)

    strong_gens_distr = distribute_gens_by_base(base, gens)
    new_strong_gens = []
    orbs = [
        Orbit.compute(alpha, strong_gens_distr[i], degree)
        for i, alpha in enumerate(base)
    ]

    # main loop: amend the stabilizer chain until we have generators
    # for all stabilizers
    bound = cfg.iteration_bound(degree)
    iterations = 0
    i = len(base) - 1
    while i >= 0:
        iterations += 1
        if iterations > bound:
            raise ConvergenceFailure(bound)
        found = None
        for schreier_gen in orbs[i].schreier_generators():
            h, j = sift(schreier_gen, base, orbs, i + 1)
            if j < len(base):
                found = h, j
                break
            if not h.is_identity():
                # h fixes all base points
                base.append(h.first_moved_point())
                strong_gens_distr.append([])
                orbs.append(None)
                logger.debug("Schreier-Sims: base extended by %d", base[-1])
                found = h, len(base) - 1
                break
        if found is None:
            logger.debug("Schreier-Sims: level %d complete, orbit size %d", i,
                         len(orbs[i]))
            i -= 1
            continue

        # a new strong generator belongs to every level between i and j
        h, j = found
        new_strong_gens.append(h)
        for l in range(i + 1, j + 1):
            strong_gens_distr[l].append(h)
            orbs[l] = Orbit.compute(base[l], strong_gens_distr[l], degree)
        logger.debug("Schreier-Sims: new strong generator at level %d", j)
        i = j

    return base, gens + new_strong_gens


class ProductReplacer():
    """Generate approximately uniform random elements of a group.

    This uses the "rattle" variant of product replacement: a reservoir of
    group elements is repeatedly multiplied into itself, and an accumulator
    collects the results.
    """

    def __init__(self,
                 generators: GeneratingSet,
                 cfg: Config | None = None,
                 rng: random.Random | None = None):
        self.cfg = cfg or get_config()
        self.rng = rng or random.Random(self.cfg.seed)
        identity = Permutation.identity(generators.degree)
        self.identity = identity
        self.gen_size = len(generators)
        self.reservoir = [identity] * max(self.cfg.rng_extra_slots, 1)
        self.reservoir.extend(generators)
        self.accus = [identity] * max(self.cfg.rng_accus, 1)
        self.accu = 0
        self.scrambled = False

    def sample(self) -> Permutation:
        if self.gen_size == 0:
            return self.identity
        if not self.scrambled:
            self.scrambled = True
            self.scramble()
        return self.stir()

    def stir(self) -> Permutation:
        """Perform a random replacement step."""
        rng = self.rng
        i = rng.randrange(1, len(self.reservoir))
        j = rng.randrange(1, len(self.reservoir))

        p = self.reservoir[i]
        if rng.randrange(2):
            p = p.inv()
        self.reservoir[0] = c = self.reservoir[0] * p

        if rng.randrange(2):
            c = c.inv()
        self.reservoir[j] = q = self.reservoir[j] * c

        if rng.randrange(2):
            q = q.inv()
        self.accu = (self.accu + 1) % len(self.accus)
        self.accus[self.accu] = r = self.accus[self.accu] * q
        return r

    def scramble(self):
        steps = max(self.cfg.rng_scramble,
                    self.cfg.rng_scramble_factor * self.gen_size)
        for _ in range(steps):
            self.stir()


def random_schreier_sims(
    generators: GeneratingSet | Iterable[PermLike],
    base: Sequence[int] | None = None,
    cfg: Config | None = None,
    degree: int | None = None,
) -> tuple[list[int], list[Permutation]]:
    """Randomized Schreier-Sims followed by deterministic completion.

    Random elements are sifted into a growing chain until ``cfg.exit_rounds``
    of them in a row turn out to be members. The candidate base and strong
    generating set are then handed to :func:`schreier_sims_incremental`,
    which checks every Schreier generator and adds whatever is still
    missing, so the result is always exact.
    """
    cfg = cfg or get_config()
    gens = GeneratingSet.coerce(generators, degree).nontrivial()
    degree = gens.degree
    base = _check_base(base, degree)
    if not len(gens):
        return base, []

    strong_gens = []
    strong_gens_distr = [[] for _ in base]
    orbs = [Orbit.compute(alpha, (), degree) for alpha in base]

    def insert(g: Permutation) -> bool:
        h, j = sift(g, base, orbs)
        if j == len(base):
            if h.is_identity():
                return False
            base.append(h.first_moved_point())
            strong_gens_distr.append([])
            orbs.append(None)
        strong_gens.append(h)
        for l in range(j + 1):
            strong_gens_distr[l].append(h)
            orbs[l] = Orbit.compute(base[l], strong_gens_distr[l], degree)
        return True

    for g in gens:
        insert(g)

    replacer = ProductReplacer(gens, cfg)
    bound = cfg.iteration_bound(degree) * (cfg.exit_rounds + 1)
    rounds = 0
    without_progress = 0
    while without_progress < cfg.exit_rounds:
        rounds += 1
        if rounds > bound:
            raise ConvergenceFailure(bound)
        if insert(replacer.sample()):
            without_progress = 0
        else:
            without_progress += 1
    logger.debug(
        "random Schreier-Sims: %d rounds, base = %s, %d strong generators",
        rounds, base, len(strong_gens))

    return schreier_sims_incremental(strong_gens, base, cfg, degree)
