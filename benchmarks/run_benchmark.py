"""
CLI entry point for running the timing benchmark.

Usage:
    python -m benchmarks.run_benchmark                          # 100 jobs, 50ms delay
    python -m benchmarks.run_benchmark --num-jobs 1000          # more jobs
    python -m benchmarks.run_benchmark --fail-prob 0.2 --seed 7 # reproducible failures
    python -m benchmarks.run_benchmark --cancel-ratio 0.5       # cancel half mid-run
"""

import argparse
import asyncio
import json
import logging

from benchmarks.timing import TimingBenchmark
from config.settings import settings


def main(argv=None):
    parser = argparse.ArgumentParser(description="Mock Job Timing Benchmark")
    parser.add_argument(
        "--num-jobs", type=int, default=100,
        help="Number of concurrent jobs (default: 100)",
    )
    parser.add_argument(
        "--delay", type=float, default=50,
        help="Job delay in milliseconds (default: 50)",
    )
    parser.add_argument(
        "--fail-prob", type=float, default=0.0,
        help="Failure probability per job (default: 0.0)",
    )
    parser.add_argument(
        "--cancel-ratio", type=float, default=0.0,
        help="Fraction of jobs to cancel halfway through (default: 0.0)",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.JOB_RANDOM_SEED,
        help="Seed for failure draws (default: JOB_RANDOM_SEED)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    print(f"=== Mock Job Timing Benchmark ===")
    print(f"Jobs: {args.num_jobs} | Delay: {args.delay}ms\n")

    bench = TimingBenchmark(
        num_jobs=args.num_jobs,
        delay_ms=args.delay,
        fail_prob=args.fail_prob,
        cancel_ratio=args.cancel_ratio,
        seed=args.seed,
    )
    result = asyncio.run(bench.run())

    print("=== RESULTS ===")
    print(json.dumps(result, indent=2))

    print("\n{:>8} {:>8} {:>8} {:>14} {:>14}".format(
        "Done", "Failed", "Canceled", "Mean over (ms)", "Max over (ms)"
    ))
    print("-" * 56)
    print("{:>8} {:>8} {:>8} {:>14} {:>14}".format(
        result["done"], result["failed"], result["canceled"],
        str(result["mean_overhead_ms"]), str(result["max_overhead_ms"]),
    ))
    return result


if __name__ == "__main__":
    main()
