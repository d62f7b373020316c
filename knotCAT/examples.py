"""
Examples demonstrating knotCAT usage.

Run with: python -m knotCAT.examples
"""

from knotCAT.knot import format_vector, known_knot
from knotCAT.validator import check_all, check_structure
from knotCAT.canonical import all_equivalent, canonicalize
from knotCAT.edges import index_edges
from knotCAT.sectors import all_sectors, check_geometric
from knotCAT.simplifier import KnotSimplifier
from knotCAT.generator import knot_candidate
from knotCAT.catalog import catalog_consider_all, empty_state
from knotCAT.discovery import quick_discovery


def example_validation():
    """Checking knot vectors."""
    print("=" * 60)
    print("Example 1: Validation")
    print("=" * 60)

    for vector in [[1, 2, 3], [1, 0], [1, -2], [1, 1],
                   [1, 2, 3, -1, -2, -3], [1, -2, 3, -1, 2, -3]]:
        violation = check_all(vector)
        print(f"{format_vector(vector):28s} -> {violation or 'valid'}")
    print()


def example_canonical_form():
    """Canonical vectors and equivalence classes."""
    print("=" * 60)
    print("Example 2: Canonical Form")
    print("=" * 60)

    vector = [3, -2, 1, -3, 2, -1]
    print(f"Input:      {format_vector(vector)}")
    print(f"Canonical:  {format_vector(canonicalize(vector))}")

    knot = (1, -2, 3, -4, 2, -3, 4, -1)
    print(f"\nEquivalents of {format_vector(knot)}:")
    for equivalent in sorted(all_equivalent(knot)):
        print(f"  {format_vector(equivalent)}")
    print()


def example_sectors():
    """Tracing sectors of the trefoil."""
    print("=" * 60)
    print("Example 3: Sectors")
    print("=" * 60)

    trefoil = known_knot("trefoil")
    index = index_edges(trefoil)
    print(f"Trefoil: {format_vector(trefoil)}")
    for sector in sorted(all_sectors(index)):
        print(f"  sector {format_vector(sector)}")
    print(f"Geometric violations: {sorted(check_geometric(index)) or 'none'}")
    print()


def example_simplification():
    """Removing twists."""
    print("=" * 60)
    print("Example 4: Untwisting")
    print("=" * 60)

    vector = (1, -2, 3, -4, 5, -5, 4, -1, 2, -3)
    print(f"Initial: {format_vector(vector)} ({check_structure(vector) or 'valid'})")

    simplifier = KnotSimplifier()
    simplified = simplifier.simplify(vector)
    for i, move in enumerate(simplifier.get_move_history()):
        print(f"  Move {i+1}: remove crossing {move.crossing} -> {format_vector(move.after)}")
    print(f"Final:   {format_vector(simplified)}")
    print()


def example_catalog():
    """Building a small catalog from seeded candidates."""
    print("=" * 60)
    print("Example 5: Catalog")
    print("=" * 60)

    candidates = [knot_candidate(seed, n) for n in (3, 4, 5) for seed in range(1000, 1020)]
    state = catalog_consider_all(empty_state(), candidates)

    for n, reps in sorted(state.catalog.items()):
        print(f"{n} crossings:")
        for rep in sorted(reps):
            print(f"  {format_vector(rep)}")
    print(f"Stats: {dict(sorted(state.stats.items()))}")
    print()


def example_discovery():
    """Running the discovery driver."""
    print("=" * 60)
    print("Example 6: Discovery")
    print("=" * 60)

    result = quick_discovery(max_crossings=5, samples=30, verbose=False)
    print(result.print_summary())
    print()


def run_all_examples():
    """Run all examples."""
    example_validation()
    example_canonical_form()
    example_sectors()
    example_simplification()
    example_catalog()
    example_discovery()


if __name__ == '__main__':
    run_all_examples()
