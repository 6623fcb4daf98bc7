import random
from typing import Iterator, List, Optional, Sequence


Permutation = List[int]


class InvariantError(AssertionError):
    """Raised when the engine produces or receives a non-bijection."""


def base_permutation(n: int) -> Permutation:
    return list(range(n))


def random_permutation(n: int, rng: random.Random) -> Permutation:
    p = base_permutation(n)
    rng.shuffle(p)
    return p


def is_permutation(p: Sequence[int]) -> bool:
    n = len(p)
    seen = [False] * n
    for v in p:
        if not 0 <= v < n or seen[v]:
            return False
        seen[v] = True
    return True


def check_permutation(p: Sequence[int], n: Optional[int] = None) -> None:
    if n is not None and len(p) != n:
        raise InvariantError(f"permutation has length {len(p)}, expected {n}: {list(p)}")
    if not is_permutation(p):
        raise InvariantError(f"not a permutation: {list(p)}")


def copy_permutation(p: Sequence[int]) -> Permutation:
    return list(p)


def is_base(p: Sequence[int]) -> bool:
    return all(v == i for i, v in enumerate(p))


def next_permutation(p: Sequence[int]) -> Permutation:
    """
    Return the lexicographic successor of p as a new list.

    The last permutation (n-1, ..., 1, 0) wraps around to the base permutation.
    """
    n = len(p)
    k = -1
    for i in range(n - 2, -1, -1):
        if p[i] < p[i + 1]:
            k = i
            break
    if k == -1:
        return base_permutation(n)

    # p[k+1:] is decreasing, so the last entry above p[k] is the smallest one.
    j = n - 1
    while p[j] <= p[k]:
        j -= 1

    q = list(p)
    q[k], q[j] = q[j], q[k]
    a, b = k + 1, n - 1
    while a < b:
        q[a], q[b] = q[b], q[a]
        a += 1
        b -= 1
    return q


def factorial(n: int) -> int:
    f = 1
    for i in range(2, n + 1):
        f *= i
    return f


def iter_permutations(n: int) -> Iterator[Permutation]:
    """Yield all n! permutations of range(n) in lexicographic order."""
    perm = base_permutation(n)
    while True:
        yield perm
        perm = next_permutation(perm)
        if is_base(perm):
            return
