"""
Knot simplification by untwisting.

A twist is a crossing that joins two otherwise separate parts of a knot:
walking the rope from +c to -c visits one part, walking from -c back to
+c visits the other, and no crossing is shared between them. Flipping
one part over removes the crossing without changing the knot.

Simplification applies untwists until none is left. Each one removes a
crossing, so the process always terminates.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .canonical import canonicalize
from .knot import KnotVector, as_vector, crossing_count, crossings


@dataclass(frozen=True)
class UntwistMove:
    """
    A single untwist applied during simplification.

    Attributes:
        crossing: crossing id (in `before`) that was removed
        before: vector the move was applied to
        after: canonical vector after removing the twist
    """
    crossing: int
    before: KnotVector
    after: KnotVector


def slice_between(v: Sequence[int], a: int, b: int) -> KnotVector:
    """
    Elements strictly between a and b, walking v cyclically from a.

    Example:
        >>> slice_between([1, 2, 3, 4, 5, 6], 5, 2)
        (6, 1)
    """
    vector = as_vector(v)
    if a not in vector:
        return ()
    doubled = vector + vector
    rest = doubled[doubled.index(a) + 1:]
    if b not in rest:
        return ()
    return rest[:rest.index(b)]


def try_untwist(v: Sequence[int], crossing: int) -> Optional[KnotVector]:
    """
    Remove `crossing` if it is a twist.

    Returns the canonical vector with the twist removed, or None if the
    two sides of the crossing share another crossing.
    """
    vector = as_vector(v)
    if crossing not in vector or -crossing not in vector:
        return None
    first = slice_between(vector, crossing, -crossing)
    second = slice_between(vector, -crossing, crossing)
    if crossings(first) & crossings(second):
        return None
    return canonicalize(first + tuple(reversed(second)))


def find_twist(v: Sequence[int]) -> Optional[Tuple[int, KnotVector]]:
    """First twist by ascending crossing id, as (crossing, untwisted vector)."""
    vector = as_vector(v)
    for crossing in range(1, crossing_count(vector) + 1):
        untwisted = try_untwist(vector, crossing)
        if untwisted is not None:
            return crossing, untwisted
    return None


def untwist(v: Sequence[int]) -> Optional[KnotVector]:
    """Remove the first twist found, or return None if v has no twists."""
    found = find_twist(v)
    if found is None:
        return None
    return found[1]


class KnotSimplifier:
    """
    Simplifies knot vectors by repeated untwisting.

    The move history of the last call to simplify() is kept so callers
    can inspect which crossings were removed.
    """

    def __init__(self, max_iterations: int = 10000):
        self.max_iterations = max_iterations
        self.move_history: List[UntwistMove] = []

    def simplify(self, v: Sequence[int]) -> KnotVector:
        """Untwist v until no twist is left and return the result."""
        self.move_history = []
        current = as_vector(v)

        for _ in range(self.max_iterations):
            found = find_twist(current)
            if found is None:
                break
            crossing, untwisted = found
            self.move_history.append(UntwistMove(crossing, current, untwisted))
            current = untwisted

        return current

    def get_move_history(self) -> List[UntwistMove]:
        """Return the untwists applied by the last simplify() call."""
        return self.move_history.copy()

    def crossings_removed(self) -> int:
        return len(self.move_history)


def simplify(v: Sequence[int]) -> KnotVector:
    """
    Simplify v to a fixpoint of untwist.

    The result is canonical whenever at least one twist was removed.
    """
    return KnotSimplifier().simplify(v)
