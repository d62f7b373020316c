"""
Knot catalog with incremental duplicate detection.

A catalog maps a crossing count to the set of known distinct knots with
that many crossings, one canonical representative each. Because a knot
has up to 2n canonical vectors, the catalog is kept together with an
index from every equivalent vector to its representative, and with
statistics of why candidates were turned away.

CatalogState is an immutable value. catalog_consider never modifies the
state it is given; it returns the next state. Only one writer should
feed a given chain of states, otherwise two new knots from the same
equivalence class could both be inserted. Independent partitions can be
combined afterwards with merge_states.
"""

import json
from collections import Counter
from dataclasses import dataclass, field, replace
from functools import reduce
from itertools import accumulate, islice
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, Optional

from .canonical import all_equivalent, canonicalize
from .knot import KnotVector, as_vector, crossing_count
from .simplifier import simplify
from .validator import Rejection, check_all

Catalog = Mapping[int, FrozenSet[KnotVector]]
CatalogIndex = Mapping[KnotVector, KnotVector]

STATS_TAGS = frozenset(r.tag for r in Rejection)


@dataclass(frozen=True)
class CatalogState:
    """
    Catalog, its index and rejection statistics.

    The three mappings are read-only views over private copies, so a
    state can be shared between threads or kept as a snapshot.

    Attributes:
        catalog: crossing count -> set of representative vectors
        index: every equivalent vector -> its representative
        stats: rejection tag -> number of candidates rejected for it
    """
    catalog: Catalog = field(default_factory=dict)
    index: CatalogIndex = field(default_factory=dict)
    stats: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("catalog", "index", "stats"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def __hash__(self) -> int:
        # index is derived from catalog
        return hash((frozenset(self.catalog.items()), frozenset(self.stats.items())))

    def representative(self, v: Iterable[int]) -> Optional[KnotVector]:
        """Catalog representative of v, or None if v is not known."""
        return self.index.get(as_vector(v))

    def num_knots(self) -> int:
        return sum(len(reps) for reps in self.catalog.values())

    def counts_by_crossings(self) -> Dict[int, int]:
        return {n: len(reps) for n, reps in sorted(self.catalog.items())}


def empty_state() -> CatalogState:
    return CatalogState()


def index_catalog(catalog: Mapping[int, Iterable[KnotVector]]) -> CatalogIndex:
    """Map every equivalent of every representative to that representative."""
    index: Dict[KnotVector, KnotVector] = {}
    for representatives in catalog.values():
        for rep in representatives:
            rep = as_vector(rep)
            for equivalent in all_equivalent(rep):
                index[equivalent] = rep
    return index


def _count(state: CatalogState, tag: str, amount: int = 1) -> CatalogState:
    stats = dict(state.stats)
    stats[tag] = stats.get(tag, 0) + amount
    return replace(state, stats=stats)


def _insert(state: CatalogState, knot: KnotVector) -> CatalogState:
    n = crossing_count(knot)
    catalog = dict(state.catalog)
    catalog[n] = catalog.get(n, frozenset()) | {knot}
    index = dict(state.index)
    for equivalent in all_equivalent(knot):
        index[equivalent] = knot
    return replace(state, catalog=catalog, index=index)


def catalog_reject(state: CatalogState, reason: Rejection) -> CatalogState:
    """Count a rejected candidate."""
    return _count(state, reason.tag)


def catalog_admit(state: CatalogState, reduced: Iterable[int]) -> CatalogState:
    """
    Insert an already validated and simplified knot unless it is known.

    This is the only step that must be serialized per catalog; checking
    and simplifying candidates can happen anywhere beforehand.
    """
    knot = canonicalize(reduced)
    if knot in state.index:
        return catalog_reject(state, Rejection.DUPLICATE)
    return _insert(state, knot)


def catalog_consider(state: CatalogState, candidate: Iterable[int]) -> CatalogState:
    """
    Consider a candidate for the catalog and return the next state.

    Invalid candidates and duplicates of known knots only bump the
    matching counter in stats. Valid new knots are simplified,
    canonicalized and inserted together with all their equivalents.
    """
    vector = as_vector(candidate)
    violation = check_all(vector)
    if violation is not None:
        return catalog_reject(state, violation.reason)
    return catalog_admit(state, simplify(vector))


def catalog_consider_all(state: CatalogState,
                         candidates: Iterable[Iterable[int]]) -> CatalogState:
    """Fold catalog_consider over candidates."""
    return reduce(catalog_consider, candidates, state)


def catalog_history(state: CatalogState,
                    candidates: Iterable[Iterable[int]]) -> Iterator[CatalogState]:
    """Lazily yield the state after each candidate is considered."""
    return islice(accumulate(candidates, catalog_consider, initial=state), 1, None)


def merge_states(first: CatalogState, second: CatalogState) -> CatalogState:
    """
    Combine two independently built states.

    Statistics are summed. Knots of `second` already known to `first`
    are counted as duplicates; the rest are inserted.
    """
    stats = Counter(first.stats)
    stats.update(second.stats)
    merged = replace(first, stats=dict(stats))
    for n in sorted(second.catalog):
        for knot in sorted(second.catalog[n]):
            merged = catalog_admit(merged, knot)
    return merged


def state_to_dict(state: CatalogState) -> Dict[str, Any]:
    """
    JSON-friendly export of a state.

    Crossing counts become string keys and vectors become sorted lists.
    The index is not exported; it is rebuilt on import.
    """
    return {
        "catalog": {
            str(n): [list(v) for v in sorted(reps)]
            for n, reps in sorted(state.catalog.items())
        },
        "stats": dict(sorted(state.stats.items())),
    }


def state_from_dict(data: Mapping[str, Any]) -> CatalogState:
    """
    Rebuild a state exported by state_to_dict.

    Raises:
        ValueError: on unknown stats tags or representatives that do not
            match their crossing count
    """
    catalog: Dict[int, FrozenSet[KnotVector]] = {}
    for key, vectors in data.get("catalog", {}).items():
        n = int(key)
        reps = frozenset(as_vector(v) for v in vectors)
        for rep in reps:
            if crossing_count(rep) != n or len(rep) % 2:
                raise ValueError(f"Vector {list(rep)} listed under {n} crossings")
        catalog[n] = reps

    stats: Dict[str, int] = {}
    for tag, count in data.get("stats", {}).items():
        if tag not in STATS_TAGS:
            raise ValueError(f"Unknown stats tag: {tag}. "
                             f"Expected one of: {', '.join(sorted(STATS_TAGS))}")
        stats[tag] = int(count)

    return CatalogState(catalog=catalog, index=index_catalog(catalog), stats=stats)


def save_state(state: CatalogState, filepath: str):
    """Write a state to a JSON file."""
    with open(filepath, 'w') as f:
        json.dump(state_to_dict(state), f, indent=2)


def load_state(filepath: str) -> CatalogState:
    """Read a state written by save_state."""
    with open(filepath) as f:
        return state_from_dict(json.load(f))
