"""
Edge index and ascending edges.

The edge index maps every signed crossing occurrence to its cyclic
neighbours (predecessor, successor) in the knot vector. An ascending edge
(-c, p) is a rope segment leaving the under position of crossing c
towards a neighbouring above position p.
"""

from typing import Dict, FrozenSet, Sequence, Set, Tuple

import networkx as nx

from .knot import Edge, as_vector

EdgeIndex = Dict[int, Tuple[int, int]]

SECTOR_SEED = 1


def index_edges(v: Sequence[int]) -> EdgeIndex:
    """
    Map each element of v to its (predecessor, successor) pair.

    Example:
        >>> index_edges([1, -2, 3, -1, 2, -3])[-2]
        (1, 3)
    """
    vector = as_vector(v)
    size = len(vector)
    return {
        x: (vector[i - 1], vector[(i + 1) % size])
        for i, x in enumerate(vector)
    }


def ascending_edges(index: EdgeIndex) -> FrozenSet[Edge]:
    """All ascending edges (k, p) for negative keys k and their neighbours p."""
    return frozenset(
        (key, neighbour)
        for key, pair in index.items()
        if key < 0
        for neighbour in pair
    )


def ascending_graph(index: EdgeIndex) -> nx.DiGraph:
    """
    Directed graph of ascending edges over crossing ids.

    Sector tracing moves from crossing c to every neighbour of -c, which
    is the edge |k| -> |p| for each ascending edge (k, p).
    """
    graph = nx.DiGraph()
    graph.add_nodes_from(abs(key) for key in index)
    graph.add_edges_from((abs(key), abs(p)) for key, p in ascending_edges(index))
    return graph


def unreached_crossings(index: EdgeIndex, seed: int = SECTOR_SEED) -> Set[int]:
    """
    Crossings that sector tracing from `seed` can never visit.

    all_sectors only starts from crossing 1; sectors made solely of
    crossings returned here would be missed by the geometric check.
    """
    graph = ascending_graph(index)
    if graph.number_of_nodes() == 0:
        return set()
    if seed not in graph:
        return set(graph.nodes)
    reached = nx.descendants(graph, seed) | {seed}
    return set(graph.nodes) - reached


def is_ascending_connected(index: EdgeIndex, seed: int = SECTOR_SEED) -> bool:
    """True if every crossing is reachable from `seed` along ascending edges."""
    return not unreached_crossings(index, seed)
