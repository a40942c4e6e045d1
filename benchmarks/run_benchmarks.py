#!/usr/bin/env python3
"""Benchmark suite for skipset comparing against a bisect-backed sorted list."""

import argparse
import json
import random
import time
from bisect import bisect_left, insort
from pathlib import Path
from typing import Dict, List

import numpy as np
import plotly.graph_objects as go
from tqdm import tqdm

from skipset import LevelGenerator, OrderedSet

class BisectSet:
    """Baseline: a plain Python list kept sorted with `bisect`."""

    def __init__(self):
        self._items: List[int] = []

    def add(self, value: int):
        idx = bisect_left(self._items, value)
        if idx == len(self._items) or self._items[idx] != value:
            insort(self._items, value)

    def contains(self, value: int) -> bool:
        idx = bisect_left(self._items, value)
        return idx < len(self._items) and self._items[idx] == value

    def remove(self, value: int):
        idx = bisect_left(self._items, value)
        if idx < len(self._items) and self._items[idx] == value:
            del self._items[idx]

class Metrics:
    def __init__(self):
        self.add_latencies: List[float] = []
        self.contains_latencies: List[float] = []
        self.remove_latencies: List[float] = []

    @staticmethod
    def _summary(latencies: List[float]) -> Dict:
        return {
            "p50": float(np.percentile(latencies, 50)),
            "p95": float(np.percentile(latencies, 95)),
            "p99": float(np.percentile(latencies, 99)),
            "mean": float(np.mean(latencies)),
        }

    def to_dict(self) -> Dict:
        return {
            "add": self._summary(self.add_latencies),
            "contains": self._summary(self.contains_latencies),
            "remove": self._summary(self.remove_latencies),
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()
        for name, latencies in (
            ("add", self.add_latencies),
            ("contains", self.contains_latencies),
            ("remove", self.remove_latencies),
        ):
            fig.add_trace(go.Box(
                y=latencies,
                name=f"{name} latency",
                boxpoints="outliers"
            ))

        fig.update_layout(
            title=title,
            yaxis_title="Latency (µs)",
            boxmode="group"
        )

        fig.write_html(output_path)

def level_distribution(s: OrderedSet) -> Dict:
    """Share of nodes reaching each level versus the geometric expectation."""
    heights = []
    node = s._header.forward[0]
    while node is not None:
        heights.append(len(node.forward))
        node = node.forward[0]
    if not heights:
        return {}
    heights_arr = np.array(heights)
    return {
        "mean_level": {
            "observed": float(np.mean(heights_arr)),
            "expected": LevelGenerator(s.probability, s.max_level).expected_level,
        },
        "share_at_least": {
            str(k): {
                "observed": float(np.mean(heights_arr >= k)),
                "expected": s.probability ** (k - 1),
            }
            for k in range(1, int(heights_arr.max()) + 1)
        },
    }

class BenchmarkSuite:
    def __init__(self, num_entries: int, probability: float, seed: int):
        self.num_entries = num_entries
        self.probability = probability
        rnd = random.Random(seed)
        self._values = rnd.sample(range(num_entries * 10), num_entries)
        self._lookups = rnd.sample(range(num_entries * 10), num_entries)
        self._seed = seed

    def _run(self, label: str, target) -> Metrics:
        metrics = Metrics()

        for v in tqdm(self._values, desc=f"{label} add"):
            start = time.perf_counter()
            target.add(v)
            metrics.add_latencies.append((time.perf_counter() - start) * 1e6)

        for v in tqdm(self._lookups, desc=f"{label} contains"):
            start = time.perf_counter()
            target.contains(v)
            metrics.contains_latencies.append((time.perf_counter() - start) * 1e6)

        for v in tqdm(self._values, desc=f"{label} remove"):
            start = time.perf_counter()
            target.remove(v)
            metrics.remove_latencies.append((time.perf_counter() - start) * 1e6)

        return metrics

    def run_skipset_benchmark(self) -> Metrics:
        s = OrderedSet(probability=self.probability, rng=random.Random(self._seed))
        return self._run("skipset", s)

    def run_bisect_benchmark(self) -> Metrics:
        return self._run("bisect", BisectSet())

    def measure_levels(self) -> Dict:
        s = OrderedSet(self._values, probability=self.probability, rng=random.Random(self._seed))
        return level_distribution(s)

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of values")
    parser.add_argument("--probability", type=float, default=0.5, help="Promotion probability")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.probability, args.seed)
    skipset_metrics = suite.run_skipset_benchmark()
    bisect_metrics = suite.run_bisect_benchmark()

    # Generate reports
    skipset_metrics.plot_latencies(
        "skipset Latency Distribution",
        args.output / "skipset_latencies.html"
    )
    bisect_metrics.plot_latencies(
        "bisect Latency Distribution",
        args.output / "bisect_latencies.html"
    )

    # Save metrics
    with open(args.output / "metrics.json", "w") as f:
        json.dump({
            "skipset": skipset_metrics.to_dict(),
            "bisect": bisect_metrics.to_dict(),
            "levels": suite.measure_levels(),
        }, f, indent=2)

if __name__ == "__main__":
    main()
