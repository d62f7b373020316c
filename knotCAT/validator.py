"""
Validation of knot vectors for knotCAT.

Three layers of checks are applied to a candidate vector:

1. Structure  - even length, no zero, ids within 1..n, no repeats
2. Alternation - the rope alternates above/under at every crossing
3. Geometry   - every ascending edge borders exactly two sectors

Invalid input is reported as a Violation value rather than raised, so
that checks compose and callers can count rejections by reason.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Sequence

from .knot import Edge, as_vector, cyclic_pairs
from .edges import index_edges
from .sectors import check_geometric


class Rejection(Enum):
    """Reasons a candidate does not make it into a catalog."""
    ODD_LENGTH = "odd-len"
    CONTAINS_ZERO = "contains-zero"
    INVALID_NODE = "invalid-node-number"
    REPEATED = "repeated"
    IMPROPER = "improper"
    GEOMETRY = "geometry"
    DUPLICATE = "dup"

    @property
    def tag(self) -> str:
        return self.value


@dataclass(frozen=True)
class ImproperSections:
    """
    Rope sections that do not alternate.

    Attributes:
        above: pairs (a, b) of consecutive elements going above-to-above
        under: pairs (a, b) of consecutive elements going under-to-under
    """
    above: FrozenSet[Edge] = frozenset()
    under: FrozenSet[Edge] = frozenset()

    def as_dict(self) -> Dict[str, Any]:
        return {"above": sorted(self.above), "under": sorted(self.under)}


@dataclass(frozen=True)
class Violation:
    """A failed check: the reason tag and what triggered it."""
    reason: Rejection
    detail: Any = True

    @property
    def tag(self) -> str:
        return self.reason.tag

    def as_dict(self) -> Dict[str, Any]:
        """Render as a tagged map, e.g. {"odd-len": 3}."""
        detail = self.detail
        if isinstance(detail, ImproperSections):
            detail = detail.as_dict()
        elif isinstance(detail, frozenset):
            detail = sorted(detail)
        return {self.tag: detail}

    def __str__(self) -> str:
        return f"{self.tag}: {self.as_dict()[self.tag]}"


def check_structure(v: Sequence[int]) -> Optional[Violation]:
    """
    Check that v is a permutation of 1..n and -n..-1.

    Returns None for a structurally valid vector (including the empty
    unknot), otherwise the first failing condition.
    """
    length = len(v)
    if length % 2 == 1:
        return Violation(Rejection.ODD_LENGTH, length)
    if 0 in v:
        return Violation(Rejection.CONTAINS_ZERO, True)

    n = length // 2
    for x in v:
        if abs(x) > n:
            return Violation(Rejection.INVALID_NODE, x)

    seen = set()
    for x in v:
        if x in seen:
            return Violation(Rejection.REPEATED, x)
        seen.add(x)
    return None


def check_alternation(v: Sequence[int]) -> Optional[Violation]:
    """
    Check that the rope alternates between above and under.

    Consecutive pairs (including last -> first) with the same sign are
    collected into above/under sets depending on their sum.
    """
    above = set()
    under = set()
    for a, b in cyclic_pairs(as_vector(v)):
        if a * b < 0:
            continue
        if a + b > 0:
            above.add((a, b))
        else:
            under.add((a, b))

    if not above and not under:
        return None
    return Violation(Rejection.IMPROPER,
                     ImproperSections(frozenset(above), frozenset(under)))


def check_all(v: Sequence[int]) -> Optional[Violation]:
    """
    Run structure, alternation and geometric checks in order.

    Returns None if v is a valid knot, otherwise the first Violation.
    """
    vector = as_vector(v)
    violation = check_structure(vector)
    if violation is not None:
        return violation

    violation = check_alternation(vector)
    if violation is not None:
        return violation

    edges = check_geometric(index_edges(vector))
    if edges:
        return Violation(Rejection.GEOMETRY, frozenset(edges))
    return None
