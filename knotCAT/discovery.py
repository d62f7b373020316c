"""
Knot discovery driver for knotCAT.

Runs the full pipeline over a pool of seeds:

    knot_candidate -> check_all -> simplify -> catalog_admit

Candidate generation, validation and simplification are independent per
candidate and are screened in a worker pool. Admission into the catalog
is the single-writer step and happens in the calling process, in seed
order, so a run is reproducible regardless of the number of workers.

Usage:
    from knotCAT.discovery import DiscoveryConfig, run_discovery
    result = run_discovery(DiscoveryConfig(target_crossings=[3, 4, 5],
                                           seeds=range(1000, 1200)))
    print(result.print_summary())
    result.save("discovery_results.json")
"""

import json
import os
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .catalog import (
    CatalogState,
    catalog_admit,
    catalog_reject,
    empty_state,
    state_to_dict,
)
from .edges import index_edges, is_ascending_connected
from .generator import knot_candidate
from .knot import KnotVector
from .simplifier import KnotSimplifier
from .validator import Rejection, check_all


@dataclass
class DiscoveryConfig:
    """
    Settings for a discovery run.

    Attributes:
        target_crossings: crossing counts to generate candidates for
        seeds: seeds tried for each crossing count
        num_workers: worker count (default: CPU count; 0 or 1 = sequential)
        executor: "process" or "thread" worker pool
        verbose: print progress
        results_dir: where save_results() writes JSON
    """
    target_crossings: List[int] = field(default_factory=lambda: [3, 4, 5])
    seeds: Sequence[int] = field(default_factory=lambda: range(1000, 1100))
    num_workers: Optional[int] = None
    executor: str = "process"
    verbose: bool = False
    results_dir: str = "results"

    def jobs(self) -> List[Tuple[int, int]]:
        return [(seed, n) for n in self.target_crossings for seed in self.seeds]

    def to_metadata(self) -> Dict[str, Any]:
        return {
            "target_crossings": list(self.target_crossings),
            "seeds": [min(self.seeds), max(self.seeds)] if len(self.seeds) else [],
            "num_seeds": len(self.seeds),
            "num_workers": self.num_workers,
            "executor": self.executor,
        }


@dataclass
class ScreenedCandidate:
    """Outcome of checking and simplifying a single generated candidate."""
    seed: int
    target_n: int
    candidate: KnotVector
    rejection: Optional[Rejection] = None
    reduced: Optional[KnotVector] = None
    untwists: int = 0
    connected: bool = True

    @property
    def valid(self) -> bool:
        return self.rejection is None


def screen_candidate(job: Tuple[int, int]) -> ScreenedCandidate:
    """Generate, check and simplify the candidate for (seed, target_n)."""
    seed, target_n = job
    candidate = knot_candidate(seed, target_n)
    screened = ScreenedCandidate(seed=seed, target_n=target_n, candidate=candidate)

    violation = check_all(candidate)
    if violation is not None:
        screened.rejection = violation.reason
        if violation.reason is Rejection.GEOMETRY:
            screened.connected = is_ascending_connected(index_edges(candidate))
        return screened

    simplifier = KnotSimplifier()
    screened.reduced = simplifier.simplify(candidate)
    screened.untwists = simplifier.crossings_removed()
    return screened


@dataclass
class DiscoveryResult:
    """Catalog state produced by a run, plus per-candidate bookkeeping."""
    state: CatalogState
    screened: List[ScreenedCandidate] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def num_candidates(self) -> int:
        return len(self.screened)

    def num_valid(self) -> int:
        return sum(1 for s in self.screened if s.valid)

    def num_disconnected(self) -> int:
        """
        Geometry rejections with crossings unreachable from crossing 1.

        Sector tracing starts from crossing 1 only, so such candidates
        are rejected without their other sectors ever being traced.
        """
        return sum(1 for s in self.screened if not s.connected)

    def summary_stats(self) -> Dict[str, Any]:
        """Aggregate numbers for the run."""
        sizes = np.array([n for n, reps in self.state.catalog.items()
                          for _ in reps], dtype=int)
        histogram = np.bincount(sizes).tolist() if sizes.size else []
        untwists = np.array([s.untwists for s in self.screened if s.valid], dtype=float)
        total = self.num_candidates()

        return {
            "candidates": total,
            "valid": self.num_valid(),
            "knots": self.state.num_knots(),
            "acceptance_rate": float(self.num_valid() / total) if total else 0.0,
            "mean_untwists": float(untwists.mean()) if untwists.size else 0.0,
            "max_untwists": int(untwists.max()) if untwists.size else 0,
            "knots_by_crossings": histogram,
            "disconnected": self.num_disconnected(),
            "stats": dict(sorted(self.state.stats.items())),
        }

    def print_summary(self) -> str:
        """Return a human-readable summary of the run."""
        summary = self.summary_stats()
        lines = []
        lines.append("=" * 70)
        lines.append("DISCOVERY SUMMARY")
        lines.append("=" * 70)
        lines.append(f"Candidates:      {summary['candidates']}")
        lines.append(f"Valid:           {summary['valid']} "
                     f"({100 * summary['acceptance_rate']:.1f}%)")
        lines.append(f"Distinct knots:  {summary['knots']}")
        lines.append(f"Mean untwists:   {summary['mean_untwists']:.2f} "
                     f"(max {summary['max_untwists']})")
        if summary["disconnected"]:
            lines.append(f"Disconnected:    {summary['disconnected']} "
                         f"(geometry rejections not traced from crossing 1)")

        lines.append("\nKnots by crossing count:")
        for n, count in self.state.counts_by_crossings().items():
            lines.append(f"  {n:3d}: {count}")

        lines.append("\nRejections:")
        for tag, count in summary["stats"].items():
            lines.append(f"  {tag:20s}: {count}")
        lines.append("=" * 70)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata,
            "summary": self.summary_stats(),
            "state": state_to_dict(self.state),
            "accepted": [
                {"seed": s.seed, "target_n": s.target_n,
                 "candidate": list(s.candidate), "reduced": list(s.reduced)}
                for s in self.screened if s.valid
            ],
        }

    def save(self, filepath: str):
        """Save the run to a JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def _screen_all(jobs: List[Tuple[int, int]], config: DiscoveryConfig) -> Iterable[ScreenedCandidate]:
    workers = config.num_workers if config.num_workers is not None else (os.cpu_count() or 4)
    if workers <= 1:
        return map(screen_candidate, jobs)

    if config.executor == "process":
        pool_cls = ProcessPoolExecutor
    elif config.executor == "thread":
        pool_cls = ThreadPoolExecutor
    else:
        raise ValueError(f"Unknown executor: {config.executor}")

    chunksize = max(1, len(jobs) // (workers * 4))
    with pool_cls(max_workers=workers) as pool:
        return list(pool.map(screen_candidate, jobs, chunksize=chunksize))


def run_discovery(config: DiscoveryConfig = None,
                  state: CatalogState = None) -> DiscoveryResult:
    """
    Run discovery and return the resulting catalog.

    Args:
        config: run settings (defaults to DiscoveryConfig())
        state: catalog state to extend (defaults to an empty catalog)

    Returns:
        DiscoveryResult holding the final state and screened candidates
    """
    config = config or DiscoveryConfig()
    if state is None:
        state = empty_state()
    jobs = config.jobs()

    result = DiscoveryResult(state=state, metadata={
        "timestamp": datetime.now().isoformat(),
        **config.to_metadata(),
    })

    total = len(jobs)
    for current, screened in enumerate(_screen_all(jobs, config), 1):
        if screened.valid:
            state = catalog_admit(state, screened.reduced)
        else:
            state = catalog_reject(state, screened.rejection)
        result.screened.append(screened)

        if config.verbose:
            pct = (current / total) * 100
            print(f"\r[{pct:5.1f}%] n={screened.target_n}, seed {screened.seed}, "
                  f"knots={state.num_knots()}...", end="", flush=True)

    if config.verbose:
        print("\nDiscovery complete!")

    result.state = state
    return result


def save_results(result: DiscoveryResult, config: DiscoveryConfig) -> str:
    """Save a run into config.results_dir with a timestamped name."""
    os.makedirs(config.results_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = os.path.join(config.results_dir, f"discovery_{timestamp}.json")
    result.save(filepath)
    return filepath


def quick_discovery(max_crossings: int = 5, samples: int = 50,
                    verbose: bool = True) -> DiscoveryResult:
    """
    Small sequential run for fast experiments.

    Args:
        max_crossings: largest crossing count to generate
        samples: seeds per crossing count
        verbose: print progress
    """
    config = DiscoveryConfig(
        target_crossings=list(range(3, max_crossings + 1)),
        seeds=range(1000, 1000 + samples),
        num_workers=1,
        verbose=verbose,
    )
    return run_discovery(config)


if __name__ == "__main__":
    print("knotCAT Discovery")
    print("=" * 60)

    config = DiscoveryConfig(target_crossings=[3, 4, 5, 6],
                             seeds=range(1000, 1200), verbose=True)
    result = run_discovery(config)
    print(result.print_summary())

    results_dir = os.path.join(os.path.dirname(__file__), "results")
    config.results_dir = results_dir
    filepath = save_results(result, config)
    print(f"\nResults saved to: {filepath}")
