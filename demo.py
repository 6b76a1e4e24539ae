#!/usr/bin/env python3
"""
Demo and benchmarks for sequential random sampling.

Usage:
    python3 demo.py --sampler     # Draw a sorted sample in blocks
    python3 demo.py --assistant   # Sample a list in one pass
    python3 demo.py --benchmark   # Time the sampler over an (n, N) grid
    python3 demo.py --tune        # Sweep the Method D -> A switch-over constant
"""

import argparse
import time

from srswor import (
    NEG_ALPHA_INV,
    MersenneTwister,
    RandomSampler,
    RandomSamplingAssistant,
    sample,
    sample_array,
    select_method,
)


DEFAULT_N = 50
DEFAULT_SAMPLE_SIZE = 9
DEFAULT_LOW = 1
DEFAULT_BLOCK_SIZE = 3
DEFAULT_SEED = MersenneTwister.DEFAULT_SEED

# (n, N) pairs of the published Method D timing table
BENCHMARK_GRID = [
    (10**3, 12 * 10**2),
    (10**3, 10**7),
    (10**5, 10**7),
    (9 * 10**6, 10**7),
    (99 * 10**5, 10**7),
    (10**4, 10**12),
]

TUNE_VALUES = [-1, -5, -10, -13, -20, -50, -100]


# =============================================================================
# Formatting Utilities
# =============================================================================


def format_count(n: int) -> str:
    """Format number with K/M/G suffix."""
    if n >= 1_000_000_000:
        return f"{n/1_000_000_000:.1f}G"
    if n >= 1_000_000:
        return f"{n/1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n/1_000:.1f}K"
    return str(n)


def format_time(seconds: float) -> str:
    """Format time with appropriate unit."""
    if seconds >= 1:
        return f"{seconds:.2f}s"
    if seconds >= 0.001:
        return f"{seconds*1000:.2f}ms"
    return f"{seconds*1_000_000:.1f}us"


def format_block(values: list[int], limit: int = 10) -> str:
    """Format a block of sample positions, eliding the middle of long blocks."""
    if len(values) <= limit:
        return "(" + ", ".join(str(v) for v in values) + ")"
    head = ", ".join(str(v) for v in values[: limit // 2])
    tail = ", ".join(str(v) for v in values[-(limit // 2):])
    return f"({head}, ..., {tail})"


# =============================================================================
# Sampler Demo
# =============================================================================


def run_sampler_demo(n: int, N: int, low: int, block_size: int, seed: int):
    """Draw n of [low, low+N-1] in blocks and print every block."""
    print("=" * 70)
    print("Sequential Random Sampler - Demo")
    print("=" * 70)

    print(f"\n{'Parameters':─^70}")
    print(f"  Population:   [{low}, {low + N - 1}]  (N = {format_count(N)})")
    print(f"  Sample size:  {n:>12}")
    print(f"  Block size:   {block_size:>12}")
    print(f"  Seed:         {seed:>12}")
    print(f"  Method:       {select_method(n, N, n).value:>12}")

    sampler = RandomSampler(n, N, low, MersenneTwister(seed))
    block = [0] * block_size

    print(f"\n{'Blocks':─^70}")
    start = time.perf_counter()
    index = 0
    while sampler.n > 0:
        count = min(block_size, sampler.n)
        sampler.next_block(count, block, 0)
        print(f"  Block {index:>4}: {format_block(block[:count])}")
        index += 1
    elapsed = time.perf_counter() - start
    print(f"\n  Time: {format_time(elapsed)}")


# =============================================================================
# Assistant Demo
# =============================================================================


def run_assistant_demo(n: int, N: int, seed: int):
    """Sample n elements from a list of N elements in one pass."""
    print("=" * 70)
    print("Random Sampling Assistant - Demo")
    print("=" * 70)

    elements = list(range(N))

    print(f"\n{'Array Sampling':─^70}")
    start = time.perf_counter()
    picked = sample_array(n, elements, MersenneTwister(seed))
    elapsed = time.perf_counter() - start
    print(f"  Picked {len(picked)} of {N}: {format_block(picked)}")
    print(f"  Time: {format_time(elapsed)}")

    print(f"\n{'Element by Element':─^70}")
    assistant = RandomSamplingAssistant(n, N, MersenneTwister(seed))
    decisions = assistant.sample_next_elements(N)
    print("  " + "".join("x" if d else "." for d in decisions[:64]))
    print(f"  Accepted: {sum(decisions)} / {N}")


# =============================================================================
# Benchmarks
# =============================================================================


def time_sample(n: int, N: int, seed: int, neg_alpha_inv: int = NEG_ALPHA_INV) -> float:
    """Time one full sample of n from N."""
    values = [0] * n
    rng = MersenneTwister(seed)
    start = time.perf_counter()
    sample(n, N, n, 0, values, 0, rng, neg_alpha_inv)
    return time.perf_counter() - start


def run_benchmark(seed: int, max_n: int):
    """Time the sampler over the published (n, N) grid."""
    print("=" * 70)
    print("Sequential Random Sampler - Benchmark")
    print("=" * 70)

    print(f"\n  {'n':>10}  {'N':>10}  {'method':>10}  {'time':>10}  {'per element':>12}")
    print(f"  {'─' * 58}")
    for n, N in BENCHMARK_GRID:
        if n > max_n:
            print(f"  {format_count(n):>10}  {format_count(N):>10}  {'skipped (--max-n)':>36}")
            continue
        method = select_method(n, N, n)
        elapsed = time_sample(n, N, seed)
        print(
            f"  {format_count(n):>10}  {format_count(N):>10}  {method.value:>10}  "
            f"{format_time(elapsed):>10}  {format_time(elapsed / n):>12}"
        )


def run_tune(n: int, N: int, seed: int, repeats: int):
    """Compare Method D -> A switch-over constants on one (n, N)."""
    print("=" * 70)
    print("Method D Tuning (neg_alpha_inv)")
    print("=" * 70)
    print(f"\n  n = {format_count(n)}, N = {format_count(N)}, {repeats} runs each\n")

    for neg_alpha_inv in TUNE_VALUES:
        total = sum(time_sample(n, N, seed + i, neg_alpha_inv) for i in range(repeats))
        marker = "  (default)" if neg_alpha_inv == NEG_ALPHA_INV else ""
        print(f"  {neg_alpha_inv:>6}: {format_time(total / repeats):>10}{marker}")


def main():
    parser = argparse.ArgumentParser(
        description="Sequential random sampling demo and benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 demo.py --sampler                  # n=9 of [1, 50] in blocks of 3
  python3 demo.py --sampler -n 20 -N 1000000000  # large population
  python3 demo.py --assistant                # one-pass list sampling
  python3 demo.py --benchmark                # published timing grid
  python3 demo.py --tune -n 1000 -N 100000   # switch-over constant sweep
        """,
    )
    parser.add_argument("--sampler", action="store_true", help="Run block sampler demo")
    parser.add_argument("--assistant", action="store_true", help="Run sampling assistant demo")
    parser.add_argument("--benchmark", action="store_true", help="Run timing benchmark")
    parser.add_argument("--tune", action="store_true", help="Sweep neg_alpha_inv")
    parser.add_argument("-n", type=int, default=DEFAULT_SAMPLE_SIZE, help=f"Sample size (default: {DEFAULT_SAMPLE_SIZE})")
    parser.add_argument("-N", type=int, default=DEFAULT_N, help=f"Population size (default: {DEFAULT_N})")
    parser.add_argument("--low", type=int, default=DEFAULT_LOW, help=f"First population element (default: {DEFAULT_LOW})")
    parser.add_argument("--block", type=int, default=DEFAULT_BLOCK_SIZE, help=f"Block size (default: {DEFAULT_BLOCK_SIZE})")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help=f"MersenneTwister seed (default: {DEFAULT_SEED})")
    parser.add_argument("--max-n", type=int, default=10**6, help="Skip benchmark rows with larger n (default: 10^6)")
    parser.add_argument("--repeats", type=int, default=5, help="Runs per value for --tune (default: 5)")
    args = parser.parse_args()

    if args.benchmark:
        run_benchmark(args.seed, args.max_n)
    elif args.tune:
        run_tune(args.n, args.N, args.seed, args.repeats)
    elif args.assistant:
        run_assistant_demo(args.n, args.N, args.seed)
    elif args.sampler:
        run_sampler_demo(args.n, args.N, args.low, args.block, args.seed)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
