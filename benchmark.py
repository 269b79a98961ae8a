import argparse
import csv
import os
import platform
import time

import numpy as np

from fractals.registry import get_fractal, list_fractals
from rendering.evaluators.dedup import DeduplicatingGridEvaluator
from rendering.evaluators.grid_merge import GridMergingEvaluator
from rendering.evaluators.naive import NaiveGridEvaluator
from utils.coords import ViewportMapping

cpu_info = platform.processor() or platform.machine()


def benchmark_evaluator(evaluator_cls, name, rule, mapping, iterations):
    print(f'Benchmarking {name} ({iterations} iterations)...')
    start = time.perf_counter()
    evaluator = evaluator_cls(rule, mapping)
    snapshot = evaluator.run(iterations)
    elapsed = time.perf_counter() - start
    counts = snapshot.counts()
    print(f'{name} total time: {elapsed:.3f}s | '
          + ', '.join(f'{s.name.lower()}={n}' for s, n in counts.items()))
    return elapsed, snapshot, evaluator


def main():
    parser = argparse.ArgumentParser(description="Compare the naive, deduplicating and grid-merging evaluators")
    parser.add_argument('--size', type=int, nargs='+', default=[50, 100, 200],
                        help='Square grid sizes to run.')
    parser.add_argument('--iterations', type=int, default=100)
    parser.add_argument('--fractal', default='Julia Set 1-phi',
                        choices=[rule.display_name() for rule in list_fractals()
                                 if not rule.depends_on_position])
    parser.add_argument('--csv', default='benchmark_results.csv')
    args = parser.parse_args()

    rule = get_fractal(args.fractal)

    if os.path.exists(args.csv):
        os.remove(args.csv)

    with open(args.csv, 'w', newline='') as f:
        writer = csv.writer(f)
        # Hardware summary header
        writer.writerow(['Hardware Summary'])
        writer.writerow(['CPU', cpu_info])
        writer.writerow(['Fractal', rule.display_name()])
        writer.writerow(['Iterations', args.iterations])
        writer.writerow([])
        writer.writerow(['Grid', 'Naive Time (s)', 'Dedup Time (s)', 'Speedup',
                         'Linked Cells', 'Identical', 'Grid Time (s)', 'Grid Agreement'])
        for size in args.size:
            print(f'=== Benchmarking grid: {size}x{size} ===')
            mapping = ViewportMapping.create(rule.initial_view_center(),
                                             rule.initial_view_diameter(), size, size)
            naive_time, naive_snap, _ = benchmark_evaluator(
                NaiveGridEvaluator, 'Naive', rule, mapping, args.iterations)
            dedup_time, dedup_snap, dedup = benchmark_evaluator(
                DeduplicatingGridEvaluator, 'Dedup', rule, mapping, args.iterations)

            grid_time, grid_snap, _ = benchmark_evaluator(
                GridMergingEvaluator, 'Grid', rule, mapping, args.iterations)

            identical = (np.array_equal(naive_snap.status, dedup_snap.status)
                         and np.array_equal(naive_snap.escape, dedup_snap.escape))
            # Share of cells where the grid merge agrees on diverged vs. not
            agreement = float(np.mean(naive_snap.diverged == grid_snap.diverged))
            speedup = naive_time / dedup_time if dedup_time > 0 else 0
            writer.writerow([f'{size}x{size}', f'{naive_time:.3f}', f'{dedup_time:.3f}',
                             f'{speedup:.2f}', dedup.linked_count(), identical,
                             f'{grid_time:.3f}', f'{agreement:.3f}'])
        print(f'Benchmark results saved to {args.csv}')


if __name__ == '__main__':
    main()
