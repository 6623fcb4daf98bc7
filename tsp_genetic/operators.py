import random
from typing import Callable, Sequence, Tuple

from .permutation import Permutation, copy_permutation


Crossover = Callable[[Sequence[int], Sequence[int], random.Random], Tuple[Permutation, Permutation]]
Mutation = Callable[[Sequence[int], random.Random], Permutation]


def _positions(p: Sequence[int]) -> list:
    pos = [0] * len(p)
    for i, v in enumerate(p):
        pos[v] = i
    return pos


def _place(child: Permutation, pos: list, i: int, value: int) -> None:
    # Swap value into slot i; the displaced entry takes value's old slot.
    j = pos[value]
    displaced = child[i]
    child[i], child[j] = value, displaced
    pos[value], pos[displaced] = i, j


def pmx(p: Sequence[int], q: Sequence[int], rng: random.Random) -> Tuple[Permutation, Permutation]:
    """
    Partially-mapped crossover.

    Transplants the prefix q[0..pivot] into a copy of p (and p[0..pivot] into a
    copy of q), resolving each duplicate by swapping it into the slot the
    transplanted value vacated. Both children are fresh bijections.
    """
    if len(p) != len(q):
        raise ValueError(f"parents differ in length: {len(p)} vs {len(q)}")
    n = len(p)
    u = copy_permutation(p)
    v = copy_permutation(q)
    if n == 0:
        return u, v
    pos_u = _positions(u)
    pos_v = _positions(v)
    pivot = rng.randrange(n)
    for i in range(pivot + 1):
        _place(u, pos_u, i, q[i])
        _place(v, pos_v, i, p[i])
    return u, v


def reverse_subsequence(p: Sequence[int], rng: random.Random) -> Permutation:
    """Reverse a random segment p[a..b] with 0 <= a < b <= n-1."""
    q = copy_permutation(p)
    n = len(q)
    if n < 2:
        return q
    b = rng.randint(1, n - 1)
    a = rng.randrange(b)
    while a < b:
        q[a], q[b] = q[b], q[a]
        a += 1
        b -= 1
    return q
