import pytest

from permgroup import (GeneratingSet, OutOfRange, Permutation, PointNotInOrbit,
                       orbits)
from permgroup.orbit import ROOT, Orbit


def s4_generators():
    return [
        Permutation.cycle(4, (0, 1, 2, 3)),
        Permutation.transposition(4, 0, 1)
    ]


def test_orbit():
    orbit = Orbit.compute(0, s4_generators())
    assert len(orbit) == 4
    assert set(orbit) == {0, 1, 2, 3}
    assert orbit.points[0] == 0
    assert orbit.base_point == 0
    assert orbit.degree == 4
    assert 3 in orbit


def test_partial_orbit():
    gens = [Permutation.from_cycles(6, (0, 1, 2)), Permutation.from_cycles(6, (3, 4))]
    orbit = Orbit.compute(1, gens)
    assert sorted(orbit) == [0, 1, 2]
    assert 3 not in orbit
    assert orbit.schreier_vector[3] is None
    with pytest.raises(PointNotInOrbit):
        orbit.coset_representative(3)
    with pytest.raises(OutOfRange):
        orbit.coset_representative(6)


def test_trivial_orbit():
    orbit = Orbit.compute(2, [], degree=5)
    assert list(orbit) == [2]
    assert orbit.coset_representative(2) == Permutation.identity(5)
    assert list(orbit.schreier_generators()) == []

    orbit = Orbit.compute(0, [])
    assert list(orbit) == [0]
    assert orbit.degree == 1

    with pytest.raises(OutOfRange):
        Orbit.compute(5, s4_generators())


def test_trivial_orbit_keeps_explicit_degree():
    orbit = Orbit.compute(1, GeneratingSet([], degree=4))
    assert orbit.degree == 4
    assert orbit.coset_representative(1) == Permutation.identity(4)
    g = Permutation.transposition(4, 2, 3)
    assert orbit.coset_representative(1) * g == g

    with pytest.raises(OutOfRange):
        Orbit.compute(5, GeneratingSet([], degree=3))


def test_schreier_vector():
    orbit = Orbit.compute(2, s4_generators())
    vector = orbit.schreier_vector
    assert vector[2] == ROOT
    order = {p: i for i, p in enumerate(orbit.points)}
    for p in orbit.points[1:]:
        label, parent = vector[p]
        assert orbit.edge(label)(parent) == p
        # parents are discovered earlier, so there are no cycles
        assert order[parent] < order[p]
        assert orbit.depth(p) == orbit.depth(parent) + 1
    assert orbit.depth(2) == 0


@pytest.mark.parametrize('inverses', [False, True])
def test_coset_representative(inverses):
    gens = [
        Permutation.from_cycles(8, (0, 3, 5), (1, 7)),
        Permutation.from_cycles(8, (3, 4, 6, 1)),
    ]
    orbit = Orbit.compute(0, gens, inverses=inverses)
    assert sorted(orbit) == [0, 1, 3, 4, 5, 6, 7]
    tr = orbit.transversal()
    for p in orbit:
        u = orbit.coset_representative(p)
        assert u(0) == p
        assert tr[p] == u
        assert orbit.coset_representative_inverse(p) == u.inv()
        # cached value is returned on the second call
        assert orbit.coset_representative_inverse(p) == u.inv()


def test_inverse_edges_do_not_change_orbit():
    gens = GeneratingSet([Permutation.cycle(9, range(9))])
    forward = Orbit.compute(4, gens)
    both = Orbit.compute(4, gens, inverses=True)
    assert set(forward) == set(both)
    assert max(both.depth(p) for p in both) < max(forward.depth(p) for p in forward)


def test_schreier_generators():
    orbit = Orbit.compute(0, s4_generators())
    schreier_gens = list(orbit.schreier_generators())
    assert schreier_gens
    for g in schreier_gens:
        assert g(0) == 0
        assert not g.is_identity()


def test_orbits():
    gens = [Permutation.from_cycles(6, (1, 2, 3)), Permutation.from_cycles(6, (4, 5))]
    assert orbits(gens) == [[0], [1, 2, 3], [4, 5]]
    assert orbits([], degree=3) == [[0], [1], [2]]
    assert orbits(s4_generators()) == [[0, 1, 2, 3]]
