import pytest

from permgroup import DegreeMismatch, GeneratingSet, InvalidPermutation, Permutation


def test_init():
    a = Permutation.cycle(4, (0, 1, 2, 3))
    b = Permutation.transposition(4, 0, 1)
    gens = GeneratingSet([a, b, a, [1, 0, 2, 3]])
    assert list(gens) == [a, b]
    assert len(gens) == 2
    assert gens[0] == a
    assert gens.degree == 4
    assert b in gens


def test_empty():
    assert GeneratingSet().degree == 0
    gens = GeneratingSet([], degree=5)
    assert gens.degree == 5
    assert len(gens) == 0
    assert gens.support == ()


def test_degree_mismatch():
    with pytest.raises(DegreeMismatch):
        GeneratingSet([Permutation.identity(3), Permutation.identity(4)])
    with pytest.raises(DegreeMismatch):
        GeneratingSet([Permutation.identity(3)], degree=4)
    with pytest.raises(DegreeMismatch):
        GeneratingSet.coerce(GeneratingSet([], degree=3), degree=4)


def test_invalid():
    with pytest.raises(InvalidPermutation):
        GeneratingSet([[0, 0, 1]])


def test_nontrivial():
    gens = GeneratingSet([Permutation.identity(3), Permutation([1, 0, 2])])
    assert list(gens.nontrivial()) == [Permutation([1, 0, 2])]
    assert gens.nontrivial().degree == 3
    assert gens.support == (0, 1)


def test_inverses():
    a = Permutation.cycle(4, (0, 1, 2))
    b = Permutation.transposition(4, 2, 3)
    gens = GeneratingSet([a, b])
    assert not gens.is_symmetric()
    sym = gens.with_inverses()
    assert sym.is_symmetric()
    assert list(sym) == [a, b, a.inv()]


def test_equality():
    a = Permutation([1, 0, 2])
    assert GeneratingSet([a]) == GeneratingSet([a, a])
    assert GeneratingSet([], degree=2) != GeneratingSet([], degree=3)
    assert GeneratingSet.coerce(GeneratingSet([a])) == GeneratingSet([a])
