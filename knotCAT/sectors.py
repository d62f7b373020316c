"""
Sector tracing and the geometric check.

Sectors are the regions of the plane enclosed by rope sections. They are
found by walking ascending edges: from crossing c, continue to each
above-neighbour of -c, until the walk returns to a crossing already on
the path. The closed part of the path is a sector, written starting from
its smallest crossing id.

In a diagram that makes geometric sense every rope section borders
exactly two sectors, so every ascending edge must be used by exactly two
of them. check_geometric reports the edges for which that fails.

Paths are tuples built head-first: path[0] is the current crossing and
path[-1] is where the walk started.
"""

from collections import Counter, deque
from itertools import chain
from typing import FrozenSet, List, Optional, Tuple

from .edges import SECTOR_SEED, EdgeIndex, ascending_edges
from .knot import Edge, cyclic_pairs

Path = Tuple[int, ...]
Sector = Tuple[int, ...]


def ascending_step(index: EdgeIndex, path: Path) -> List[Path]:
    """Extend path by each neighbour of the under position of its head."""
    neighbours = index.get(-path[0], ())
    return [(neighbour,) + tuple(path) for neighbour in neighbours]


def _rotate_to_min(cycle: Path) -> Sector:
    start = cycle.index(min(cycle))
    return cycle[start:] + cycle[:start]


def is_sector(path: Path) -> Optional[Sector]:
    """
    Return the closed sector at the head of path, or None if it is open.

    The path is closed when its head appears again further along. The
    sector is the part from the head up to (not including) that second
    appearance, rotated to start at its minimum.

    Raises:
        ValueError: if path is empty
    """
    path = tuple(path)
    if not path:
        raise ValueError("Cannot test an empty path for closure")
    head, rest = path[0], path[1:]
    if head not in rest:
        return None
    closing = rest.index(head)
    return _rotate_to_min(path[:closing + 1])


def all_sectors(index: EdgeIndex) -> FrozenSet[Sector]:
    """
    Enumerate sectors reachable from crossing 1.

    Breadth-first over open paths. Every path closes after at most n + 1
    steps since crossing ids cannot all be distinct beyond that.
    """
    frontier = deque([(SECTOR_SEED,)])
    sectors = set()
    while frontier:
        path = frontier.popleft()
        sector = is_sector(path)
        if sector is not None:
            sectors.add(sector)
        else:
            frontier.extend(ascending_step(index, path))
    return frozenset(sectors)


def sector_ascending_edges(sector: Sector) -> FrozenSet[Edge]:
    """Ascending edges around a sector: (-b, a) for each adjacent a, b."""
    return frozenset((-b, a) for a, b in cyclic_pairs(tuple(sector)))


def check_geometric(index: EdgeIndex) -> FrozenSet[Edge]:
    """
    Ascending edges that do not border exactly two sectors.

    An empty result means the knot is geometrically consistent.
    """
    edges = ascending_edges(index)
    counts = Counter(chain.from_iterable(
        sector_ascending_edges(sector) for sector in all_sectors(index)
    ))
    return frozenset(edge for edge in edges if counts[edge] != 2)
