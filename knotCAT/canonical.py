"""
Canonical representation of knot vectors.

A canonical vector starts on an above position (a positive value) and
numbers crossings 1, 2, 3, ... in the order the rope first reaches them.
The remaining freedom is the choice of starting crossing and direction,
so a knot with n crossings has at most 2n canonical vectors. Together
they form its equivalence class.
"""

from typing import Dict, FrozenSet, List, Sequence

from .knot import KnotVector, as_vector, sign


def canonicalize(v: Sequence[int]) -> KnotVector:
    """
    Renumber v into canonical form.

    If v starts with a negative value it is rotated left until it starts
    with a positive one. Crossing ids are then reassigned by order of
    first appearance, keeping each element's sign.

    Raises:
        ValueError: if v is non-empty and has no positive element
    """
    vector = as_vector(v)
    if not vector:
        return ()

    start = next((i for i, x in enumerate(vector) if x > 0), None)
    if start is None:
        raise ValueError(f"Cannot canonicalize {list(vector)}: no above position")
    vector = vector[start:] + vector[:start]

    mapping: Dict[int, int] = {}
    result = []
    for x in vector:
        crossing = abs(x)
        if crossing not in mapping:
            mapping[crossing] = len(mapping) + 1
        result.append(mapping[crossing] * sign(x))
    return tuple(result)


def is_canonical(v: Sequence[int]) -> bool:
    """True if v is already in canonical form."""
    vector = as_vector(v)
    return canonicalize(vector) == vector


def all_rotations(v: Sequence[int]) -> List[KnotVector]:
    """
    Rotations of v by an even number of positions.

    For a proper knot only even offsets keep the vector starting on an
    above position, so there are len(v) / 2 of them.
    """
    vector = as_vector(v)
    return [vector[i:] + vector[:i] for i in range(0, len(vector), 2)]


def rotate_reverse(v: Sequence[int]) -> KnotVector:
    """Rotate v left by one, then reverse it: the same rope walked backwards."""
    vector = as_vector(v)
    return tuple(reversed(vector[1:] + vector[:1]))


def all_equivalent(v: Sequence[int]) -> FrozenSet[KnotVector]:
    """All canonical vectors of the knot v, over every start and direction."""
    vector = as_vector(v)
    if not vector:
        return frozenset([()])
    return frozenset(
        canonicalize(rotation)
        for directed in (vector, rotate_reverse(vector))
        for rotation in all_rotations(directed)
    )
