"""
Tests for the discovery driver.
"""

import json
import os
import tempfile
import unittest
from knotCAT.catalog import catalog_consider_all, empty_state
from knotCAT.discovery import (
    DiscoveryConfig,
    run_discovery,
    screen_candidate,
    save_results,
    quick_discovery,
)
from knotCAT.generator import knot_candidate
from knotCAT.validator import Rejection

TREFOIL = (1, -2, 3, -1, 2, -3)


class TestScreenCandidate(unittest.TestCase):
    """Tests for screening a single candidate."""

    def test_valid_candidate(self):
        """Test a valid candidate is simplified."""
        screened = screen_candidate((1001, 3))

        self.assertTrue(screened.valid)
        self.assertEqual(screened.candidate, TREFOIL)
        self.assertEqual(screened.reduced, TREFOIL)
        self.assertEqual(screened.untwists, 0)
        self.assertTrue(screened.connected)

    def test_rejected_candidate(self):
        """Test a rejected candidate keeps its reason."""
        screened = screen_candidate((1001, 4))

        self.assertFalse(screened.valid)
        self.assertEqual(screened.rejection, Rejection.GEOMETRY)
        self.assertIsNone(screened.reduced)


class TestRunDiscovery(unittest.TestCase):
    """Tests for run_discovery."""

    def test_three_crossings(self):
        """Test every 3-crossing candidate is the trefoil."""
        config = DiscoveryConfig(target_crossings=[3], seeds=range(1000, 1010), num_workers=1)
        result = run_discovery(config)

        self.assertEqual(result.state.catalog, {3: frozenset({TREFOIL})})
        self.assertEqual(result.state.stats, {"dup": 9})
        self.assertEqual(result.num_candidates(), 10)

    def test_matches_catalog_fold(self):
        """Test the driver agrees with folding catalog_consider."""
        seeds = range(1000, 1030)
        config = DiscoveryConfig(target_crossings=[3, 4, 5], seeds=seeds, num_workers=1)
        result = run_discovery(config)

        candidates = [knot_candidate(seed, n) for n in (3, 4, 5) for seed in seeds]
        expected = catalog_consider_all(empty_state(), candidates)
        self.assertEqual(result.state, expected)

    def test_every_candidate_accounted_for(self):
        """Test each candidate is either catalogued or counted."""
        config = DiscoveryConfig(target_crossings=[4, 5, 6], seeds=range(20), num_workers=1)
        result = run_discovery(config)

        total = result.state.num_knots() + sum(result.state.stats.values())
        self.assertEqual(total, 60)

    def test_thread_pool_matches_sequential(self):
        """Test a thread pool gives the same catalog as a sequential run."""
        sequential = run_discovery(DiscoveryConfig(
            target_crossings=[4, 5], seeds=range(1000, 1040), num_workers=1))
        threaded = run_discovery(DiscoveryConfig(
            target_crossings=[4, 5], seeds=range(1000, 1040),
            num_workers=3, executor="thread"))

        self.assertEqual(threaded.state, sequential.state)

    def test_process_pool_matches_sequential(self):
        """Test a process pool gives the same catalog as a sequential run."""
        sequential = run_discovery(DiscoveryConfig(
            target_crossings=[3, 5], seeds=range(1000, 1020), num_workers=1))
        parallel = run_discovery(DiscoveryConfig(
            target_crossings=[3, 5], seeds=range(1000, 1020),
            num_workers=2, executor="process"))

        self.assertEqual(parallel.state, sequential.state)

    def test_unknown_executor(self):
        """Test an unknown executor is rejected."""
        config = DiscoveryConfig(target_crossings=[3], seeds=range(4),
                                 num_workers=2, executor="gpu")
        with self.assertRaises(ValueError):
            run_discovery(config)

    def test_extends_existing_state(self):
        """Test a run can continue from an earlier catalog."""
        start = catalog_consider_all(empty_state(), [TREFOIL])
        result = run_discovery(DiscoveryConfig(target_crossings=[3], seeds=range(3),
                                               num_workers=1), state=start)

        self.assertEqual(result.state.stats, {"dup": 3})


class TestDiscoveryResult(unittest.TestCase):
    """Tests for summaries and saved results."""

    def setUp(self):
        self.result = run_discovery(DiscoveryConfig(
            target_crossings=[3, 4], seeds=range(1000, 1010), num_workers=1))

    def test_summary_stats(self):
        """Test aggregate numbers."""
        summary = self.result.summary_stats()

        self.assertEqual(summary["candidates"], 20)
        self.assertGreaterEqual(summary["valid"], 10)
        self.assertEqual(summary["knots_by_crossings"][3], 1)
        self.assertGreaterEqual(summary["acceptance_rate"], 0.5)
        self.assertLessEqual(summary["disconnected"], summary["stats"].get("geometry", 0))

    def test_print_summary(self):
        """Test the text summary."""
        text = self.result.print_summary()

        self.assertIn("DISCOVERY SUMMARY", text)
        self.assertIn("Distinct knots:", text)
        self.assertIn("dup", text)

    def test_save(self):
        """Test results are written as JSON."""
        with tempfile.TemporaryDirectory() as tmp:
            config = DiscoveryConfig(results_dir=os.path.join(tmp, "results"))
            filepath = save_results(self.result, config)

            with open(filepath) as f:
                data = json.load(f)

        self.assertEqual(data["summary"]["candidates"], 20)
        self.assertEqual(data["state"]["catalog"]["3"], [list(TREFOIL)])
        self.assertEqual(data["metadata"]["num_seeds"], 10)
        self.assertEqual(len(data["accepted"]), data["summary"]["valid"])

    def test_quick_discovery(self):
        """Test the quick sequential run."""
        result = quick_discovery(max_crossings=4, samples=5, verbose=False)
        self.assertEqual(result.num_candidates(), 10)


if __name__ == '__main__':
    unittest.main()
