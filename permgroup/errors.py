class PermutationGroupError(Exception):
    pass


class DegreeMismatch(PermutationGroupError, ValueError):

    def __init__(self, expected: int, actual: int, what: str = 'permutation'):
        super().__init__(
            f"{what} has degree {actual}, expected degree {expected}")
        self.expected = expected
        self.actual = actual


class InvalidPermutation(PermutationGroupError, ValueError):
    pass


class OutOfRange(PermutationGroupError, IndexError):

    def __init__(self, point: int, degree: int, what: str = 'point'):
        super().__init__(f"{what} {point} out of range [0, {degree})")
        self.point = point
        self.degree = degree


class PointNotInOrbit(PermutationGroupError, KeyError):

    def __init__(self, point: int, base_point: int):
        super().__init__(point)
        self.point = point
        self.base_point = base_point

    def __str__(self):
        return f"point {self.point} is not in the orbit of {self.base_point}"


class ConvergenceFailure(PermutationGroupError, RuntimeError):

    def __init__(self, iterations: int):
        super().__init__(
            f"Schreier-Sims did not converge within {iterations} iterations")
        self.iterations = iterations


class NotInGroup(PermutationGroupError):
    pass
