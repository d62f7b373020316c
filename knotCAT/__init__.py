"""
knotCAT: Knot Canonicalization And Tabulation

A framework for enumerating distinct knots up to a given crossing count,
using a plain integer-vector representation of knot diagrams.

REPRESENTATION:
- A knot with n crossings is a cyclic sequence of 2n nonzero integers
- Crossing c appears once as +c (rope above) and once as -c (rope under)
- The empty sequence is the unknot

ALGORITHMS:
- Structural, alternation and geometric (sector) validation
- Canonical form by first-appearance numbering, and the equivalence
  class of a knot under rotation and reversal
- Sector tracing over ascending edges: each rope section must border
  exactly two sectors
- Untwisting: removal of crossings that join two independent parts,
  repeated to a fixpoint
- Deterministic, seeded candidate generation
- An immutable catalog state with an equivalence index for O(1)
  duplicate detection

PIPELINE:
    knot_candidate -> check_all -> simplify -> catalog_consider
"""

from .knot import (
    KnotVector,
    KNOWN_KNOTS,
    as_vector,
    parse_vector,
    format_vector,
    crossing_count,
    known_knot,
)
from .validator import (
    Rejection,
    Violation,
    ImproperSections,
    check_structure,
    check_alternation,
    check_all,
)
from .canonical import canonicalize, all_rotations, rotate_reverse, all_equivalent, is_canonical
from .edges import index_edges, ascending_edges, ascending_graph, is_ascending_connected
from .sectors import (
    ascending_step,
    is_sector,
    all_sectors,
    sector_ascending_edges,
    check_geometric,
)
from .simplifier import (
    KnotSimplifier,
    UntwistMove,
    slice_between,
    try_untwist,
    untwist,
    simplify,
)
from .generator import Selector, selector, element_candidates, knot_candidate, candidate_stream
from .catalog import (
    CatalogState,
    empty_state,
    index_catalog,
    catalog_consider,
    catalog_consider_all,
    catalog_history,
    catalog_admit,
    catalog_reject,
    merge_states,
    state_to_dict,
    state_from_dict,
    save_state,
    load_state,
)
from .discovery import (
    DiscoveryConfig,
    DiscoveryResult,
    run_discovery,
    quick_discovery,
)

__version__ = "1.0.0"
__all__ = [
    # Representation
    "KnotVector",
    "KNOWN_KNOTS",
    "as_vector",
    "parse_vector",
    "format_vector",
    "crossing_count",
    "known_knot",
    # Validation
    "Rejection",
    "Violation",
    "ImproperSections",
    "check_structure",
    "check_alternation",
    "check_all",
    # Canonical form
    "canonicalize",
    "all_rotations",
    "rotate_reverse",
    "all_equivalent",
    "is_canonical",
    # Geometry
    "index_edges",
    "ascending_edges",
    "ascending_graph",
    "is_ascending_connected",
    "ascending_step",
    "is_sector",
    "all_sectors",
    "sector_ascending_edges",
    "check_geometric",
    # Simplification
    "KnotSimplifier",
    "UntwistMove",
    "slice_between",
    "try_untwist",
    "untwist",
    "simplify",
    # Generation
    "Selector",
    "selector",
    "element_candidates",
    "knot_candidate",
    "candidate_stream",
    # Catalog
    "CatalogState",
    "empty_state",
    "index_catalog",
    "catalog_consider",
    "catalog_consider_all",
    "catalog_history",
    "catalog_admit",
    "catalog_reject",
    "merge_states",
    "state_to_dict",
    "state_from_dict",
    "save_state",
    "load_state",
    # Discovery
    "DiscoveryConfig",
    "DiscoveryResult",
    "run_discovery",
    "quick_discovery",
]
