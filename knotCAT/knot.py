"""
Knot vector representation for knotCAT.

A knot with n crossings is written as a sequence of 2n nonzero integers,
read cyclically. Each crossing id c in 1..n appears twice: +c where the
rope passes above the crossing and -c where it passes under. The empty
vector is the unknot.

Vectors are plain tuples so they can be hashed, stored in sets and used
as catalog keys. Nothing in the package mutates a vector in place.
"""

import re
from typing import Dict, Iterable, List, Set, Tuple

KnotVector = Tuple[int, ...]
Edge = Tuple[int, int]


def as_vector(values: Iterable[int]) -> KnotVector:
    """Return the values as an immutable knot vector."""
    return tuple(int(x) for x in values)


_LITERAL_SEPARATORS = re.compile(r"[\s,]+")


def parse_vector(text: str) -> KnotVector:
    """
    Parse a knot vector literal.

    Accepts whitespace and/or comma separated integers, optionally wrapped
    in square brackets or parentheses, e.g. "[1 -2 3 -1 2 -3]" or
    "1, -2, 3, -1, 2, -3".

    Raises:
        ValueError: if a token is not an integer
    """
    body = text.strip()
    if body[:1] in "[(" and body[-1:] in "])":
        body = body[1:-1]
    tokens = [t for t in _LITERAL_SEPARATORS.split(body) if t]
    values = []
    for token in tokens:
        try:
            values.append(int(token))
        except ValueError:
            raise ValueError(f"Invalid knot vector element: {token!r}") from None
    return tuple(values)


def format_vector(v: Iterable[int]) -> str:
    """Render a vector the way it is written in the literature: [1 -2 3 ...]."""
    return "[" + " ".join(str(x) for x in v) + "]"


def sign(n: int) -> int:
    """Sign of a crossing occurrence; 0 is treated as positive."""
    return -1 if n < 0 else 1


def crossing_count(v: KnotVector) -> int:
    """Number of crossings, i.e. half the vector length."""
    return len(v) // 2


def crossings(v: Iterable[int]) -> Set[int]:
    """Set of crossing ids (absolute values) occurring in v."""
    return {abs(x) for x in v}


# Named canonical vectors used throughout the tests and examples.
KNOWN_KNOTS: Dict[str, KnotVector] = {
    "unknot": (),
    "trefoil": (1, -2, 3, -1, 2, -3),
}


def known_knot(name: str) -> KnotVector:
    """Look up a named knot from KNOWN_KNOTS."""
    if name not in KNOWN_KNOTS:
        raise ValueError(f"Unknown knot: {name}. "
                         f"Available: {', '.join(sorted(KNOWN_KNOTS))}")
    return KNOWN_KNOTS[name]


def cyclic_pairs(v: KnotVector) -> List[Edge]:
    """Consecutive pairs of v, including the pair wrapping last -> first."""
    if not v:
        return []
    return list(zip(v, v[1:] + v[:1]))
