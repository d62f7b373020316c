"""
Tests for untwisting and simplification.
"""

import unittest
from knotCAT.simplifier import (
    KnotSimplifier,
    slice_between,
    try_untwist,
    untwist,
    simplify,
)
from knotCAT.generator import knot_candidate

TWISTED = (1, -2, 3, -4, 5, -5, 4, -1, 2, -3)
TREFOIL = (1, -2, 3, -1, 2, -3)


class TestSlice(unittest.TestCase):
    """Tests for slice_between."""

    def test_slice_forward(self):
        """Test the values strictly between two elements."""
        self.assertEqual(slice_between([1, 2, 3, 4, 5, 6], 2, 5), (3, 4))

    def test_slice_wraps(self):
        """Test the vector is treated as closed on itself."""
        self.assertEqual(slice_between([1, 2, 3, 4, 5, 6], 5, 2), (6, 1))

    def test_adjacent(self):
        """Test adjacent elements give an empty slice."""
        self.assertEqual(slice_between([1, -1], 1, -1), ())


class TestUntwist(unittest.TestCase):
    """Tests for try_untwist and untwist."""

    def test_not_a_twist(self):
        """Test a crossing whose sides share crossings is kept."""
        self.assertIsNone(try_untwist(TWISTED, 3))

    def test_twist_removed(self):
        """Test a twist is removed and the result canonicalized."""
        self.assertEqual(try_untwist(TWISTED, 4), (1, -2, 3, -1, 2, -4, 4, -3))

    def test_missing_crossing(self):
        """Test crossings absent from the vector are not twists."""
        self.assertIsNone(try_untwist(TREFOIL, 7))

    def test_no_twists(self):
        """Test the trefoil has no twists."""
        self.assertIsNone(untwist(TREFOIL))

    def test_untwist_first(self):
        """Test untwist removes the lowest numbered twist."""
        self.assertEqual(untwist(TWISTED), (1, -2, 3, -1, 2, -4, 4, -3))

    def test_twisted_unknot(self):
        """Test a single twist reduces to the unknot."""
        self.assertEqual(untwist([1, -1]), ())


class TestSimplify(unittest.TestCase):
    """Tests for simplification to a fixpoint."""

    def test_simplify(self):
        """Test repeated untwisting down to the trefoil."""
        self.assertEqual(simplify(TWISTED), TREFOIL)

    def test_simplify_unknot(self):
        """Test the unknot is already simple."""
        self.assertEqual(simplify(()), ())

    def test_fixpoint(self):
        """Test simplify is idempotent."""
        for seed in range(1000, 1030):
            for n in (3, 4, 5, 6):
                v = knot_candidate(seed, n)
                if len(v) != 2 * n:
                    continue
                once = simplify(v)
                self.assertEqual(simplify(once), once)

    def test_move_history(self):
        """Test the simplifier records each untwist."""
        simplifier = KnotSimplifier()
        result = simplifier.simplify(TWISTED)
        history = simplifier.get_move_history()

        self.assertEqual(result, TREFOIL)
        self.assertEqual(simplifier.crossings_removed(), 2)
        self.assertEqual([m.crossing for m in history], [4, 4])
        self.assertEqual(history[0].before, TWISTED)
        self.assertEqual(history[-1].after, TREFOIL)

    def test_history_reset(self):
        """Test history only covers the last call."""
        simplifier = KnotSimplifier()
        simplifier.simplify(TWISTED)
        simplifier.simplify(TREFOIL)

        self.assertEqual(simplifier.get_move_history(), [])

    def test_iteration_bound(self):
        """Test max_iterations limits the number of untwists."""
        simplifier = KnotSimplifier(max_iterations=1)
        result = simplifier.simplify(TWISTED)

        self.assertEqual(result, (1, -2, 3, -1, 2, -4, 4, -3))


if __name__ == '__main__':
    unittest.main()
