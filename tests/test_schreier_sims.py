import math

import pytest

from permgroup import (Config, ConvergenceFailure, DegreeMismatch,
                       GeneratingSet, OutOfRange, Permutation,
                       build_stabilizer_chain, random_schreier_sims,
                       schreier_sims, schreier_sims_incremental)
from permgroup.orbit import Orbit
from permgroup.schreier_sims import (ProductReplacer, distribute_gens_by_base,
                                     sift)


def symmetric_generators(n):
    if n == 1:
        return [Permutation.identity(1)]
    return [Permutation.cycle(n, range(n)), Permutation.transposition(n, 0, 1)]


def chain_order(base, strong_gens, degree):
    distr = distribute_gens_by_base(base, strong_gens)
    return math.prod(
        len(Orbit.compute(b, gens, degree)) for b, gens in zip(base, distr))


@pytest.mark.parametrize('n', range(1, 9))
@pytest.mark.parametrize('method', ['deterministic', 'random'])
def test_symmetric_order(n, method):
    cfg = Config(method=method)
    base, strong_gens = schreier_sims(symmetric_generators(n), cfg=cfg)
    assert chain_order(base, strong_gens, n) == math.factorial(n)
    assert len(base) <= max(n - 1, 0)


def test_alternating_order():
    gens = [Permutation.cycle(5, (0, 1, 2)), Permutation.cycle(5, range(5))]
    base, strong_gens = schreier_sims_incremental(gens)
    assert chain_order(base, strong_gens, 5) == 60
    assert all(g.is_even() for g in strong_gens)


def test_deterministic_base():
    gens = symmetric_generators(6)
    assert schreier_sims(gens) == schreier_sims(gens)
    base, _ = schreier_sims(gens)
    assert base[0] == 0

    gens = [Permutation.from_cycles(6, (2, 3, 4)), Permutation.from_cycles(6, (4, 5))]
    base, _ = schreier_sims(gens)
    assert base[0] == 2


def test_random_is_reproducible():
    gens = symmetric_generators(7)
    cfg = Config(method='random', seed=7)
    assert random_schreier_sims(gens, cfg=cfg) == random_schreier_sims(gens,
                                                                       cfg=cfg)


def test_empty():
    assert schreier_sims([]) == ([], [])
    assert schreier_sims([], degree=4) == ([], [])
    assert schreier_sims([Permutation.identity(3)]) == ([], [])
    assert schreier_sims([], base=[1], degree=3) == ([1], [])


def test_base_prefix():
    base, strong_gens = schreier_sims(symmetric_generators(4), base=[3, 1])
    assert base[:2] == [3, 1]
    assert chain_order(base, strong_gens, 4) == 24

    with pytest.raises(ValueError):
        schreier_sims(symmetric_generators(4), base=[1, 1])
    with pytest.raises(OutOfRange):
        schreier_sims(symmetric_generators(4), base=[4])


def test_degree_mismatch():
    with pytest.raises(DegreeMismatch):
        schreier_sims([Permutation.identity(3), Permutation([1, 0, 2, 3])])


def test_convergence_failure():
    with pytest.raises(ConvergenceFailure) as info:
        schreier_sims(symmetric_generators(5), cfg=Config(max_iterations=1))
    assert info.value.iterations == 1


def test_unknown_method():
    with pytest.raises(ValueError):
        schreier_sims(symmetric_generators(3), cfg=Config(method='magic'))


def test_distribute_gens_by_base():
    a = Permutation.from_cycles(4, (0, 1))
    b = Permutation.from_cycles(4, (1, 2))
    c = Permutation.from_cycles(4, (2, 3))
    distr = distribute_gens_by_base([0, 1, 2], [a, b, c])
    assert distr == [[a, b, c], [b, c], [c]]


def test_sift():
    chain = build_stabilizer_chain(symmetric_generators(4))
    orbits = [level.orbit for level in chain.levels]
    h, level = sift(Permutation.from_cycles(4, (0, 2, 1)), chain.base, orbits)
    assert level == len(chain.base)
    assert h.is_identity()

    a4 = build_stabilizer_chain(
        [Permutation.cycle(4, (0, 1, 2)), Permutation.cycle(4, (1, 2, 3))])
    orbits = [level.orbit for level in a4.levels]
    h, level = sift(Permutation.transposition(4, 2, 3), a4.base, orbits)
    assert not h.is_identity()
    assert all(h(b) == b for b in a4.base[:level])


def test_product_replacer():
    gens = GeneratingSet(
        [Permutation.cycle(6, (0, 1, 2)), Permutation.cycle(6, (2, 3, 4, 5))])
    chain = build_stabilizer_chain(gens)
    replacer = ProductReplacer(gens, Config(seed=3))
    samples = [replacer.sample() for _ in range(20)]
    assert all(chain.contains(g) for g in samples)

    replacer = ProductReplacer(gens, Config(seed=3))
    assert samples == [replacer.sample() for _ in range(20)]

    empty = ProductReplacer(GeneratingSet([], degree=3))
    assert empty.sample() == Permutation.identity(3)
