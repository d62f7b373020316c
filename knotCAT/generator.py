"""
Deterministic generation of knot candidates.

Candidates are built one element at a time. At each step the possible
next elements are listed (see element_candidates) and one is picked by a
Selector, a small reproducible pseudo-random source driven by a seed.
The same seed and crossing count always give the same candidate.

A candidate is canonical and proper by construction when it reaches full
length, but it is not guaranteed to be a valid knot. Run it through
validator.check_all before using it.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Sequence, Tuple

from .knot import KnotVector, as_vector, sign

SEED_MULTIPLIER = 31


@dataclass(frozen=True)
class Selector:
    """
    Reproducible digit source.

    Each draw takes the next digit of `remainder` in base `bound`. When
    the remainder is used up, `base` is multiplied by 31 and becomes the
    new remainder, so successive refills are seed*31, seed*31^2, ...

    Attributes:
        remainder: digits not yet drawn
        base: value the remainder is refilled from
    """
    remainder: int
    base: int

    @classmethod
    def from_seed(cls, seed: int) -> 'Selector':
        if seed < 0:
            raise ValueError(f"Seed must be non-negative, got {seed}")
        return cls(remainder=seed, base=seed)

    def draw(self, bound: int) -> Tuple[int, 'Selector']:
        """
        Draw a value in [0, bound).

        Returns:
            (digit, next_selector)

        Raises:
            ValueError: if bound is not positive
        """
        if bound <= 0:
            raise ValueError(f"Selector bound must be positive, got {bound}")
        digit = self.remainder % bound
        remainder = self.remainder // bound
        base = self.base
        if remainder == 0:
            base = base * SEED_MULTIPLIER
            remainder = base
        return digit, Selector(remainder, base)


def selector(seed: int) -> Callable[[int], int]:
    """
    Stateful select function over a Selector.

    Example:
        >>> select = selector(1234)
        >>> [select(10) for _ in range(5)]
        [4, 3, 2, 1, 4]

    The returned function must be called sequentially; do not share it
    between concurrent generations.
    """
    state = Selector.from_seed(seed)

    def select(bound: int) -> int:
        nonlocal state
        digit, state = state.draw(bound)
        return digit

    return select


def element_candidates(partial: Sequence[int], target_n: int) -> List[int]:
    """
    Possible next elements for a partial candidate.

    The first element is always 1. After that a candidate has the sign
    opposite to the last element, an absolute value of at most
    min(max used + 1, target_n), does not repeat an element of `partial`,
    and is not the negative of the last element (an immediate twist).
    Candidates are ordered by absolute value.
    """
    if not partial:
        return [1]

    last = partial[-1]
    limit = min(max(abs(x) for x in partial) + 1, target_n)
    wanted = -sign(last)
    present = set(partial)
    return [
        wanted * magnitude
        for magnitude in range(1, limit + 1)
        if wanted * magnitude not in present and wanted * magnitude != -last
    ]


def knot_candidate(seed: int, target_n: int) -> KnotVector:
    """
    Build a candidate vector with up to target_n crossings.

    Stops early, returning the partial vector, when no candidate element
    is left.
    """
    select = selector(seed)
    partial: List[int] = []

    while len(partial) < 2 * target_n:
        options = element_candidates(partial, target_n)
        if not options:
            break
        partial.append(options[select(len(options))])

    return as_vector(partial)


def candidate_stream(seeds: Iterable[int], target_n: int) -> Iterator[KnotVector]:
    """Lazily generate one candidate per seed."""
    for seed in seeds:
        yield knot_candidate(seed, target_n)
