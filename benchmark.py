"""
Benchmark suite and text interface for the binomial-coefficient algorithms.

Benchmarks:
1. Sample Input: 306255 choose 151923 mod 343, all three algorithms
2. Growing a: fixed prime-power modulus, a from 10^3 to 10^300
3. Composite Moduli: CRT over several prime powers
4. Cache Performance: first call vs. memoized unit-factorial tables

Run without arguments to be prompted for a, b and n, or with --suite to run
the canned benchmarks.
"""

import argparse
import time
import sys
import statistics
from typing import List, Callable

from binomial import (
    basic_binomial_mod_n, compute_binomial_mod_n, direct_binomial_mod_n,
    clear_caches
)


# Algorithm variants, from naive to efficient
ALGORITHMS: dict[str, Callable[[int, int, int], int]] = {
    "Basic": direct_binomial_mod_n,
    "Basic (w/intermediate mod.)": basic_binomial_mod_n,
    "Improved": compute_binomial_mod_n,
}

# a is capped for the two baseline algorithms: their cost grows with min(b, a - b)
_BASELINE_LIMIT = 10 ** 6


# ============================================================================
# BENCHMARK UTILITIES
# ============================================================================

class BenchmarkResult:
    """Store benchmark results with statistics."""

    def __init__(self, name: str, times: List[float], operations: int = 1):
        self.name = name
        self.times = sorted(times)
        self.operations = operations

        # Calculate statistics
        self.min = min(times)
        self.max = max(times)
        self.mean = statistics.mean(times)
        self.median = statistics.median(times)
        self.stdev = statistics.stdev(times) if len(times) > 1 else 0

    def __str__(self):
        return (f"{self.name:40} | "
                f"Mean: {self.mean*1000:10.3f}ms | "
                f"Median: {self.median*1000:10.3f}ms | "
                f"StdDev: {self.stdev*1000:8.3f}ms | "
                f"Min: {self.min*1000:10.3f}ms | "
                f"Max: {self.max*1000:10.3f}ms")


def benchmark(func: Callable, *args, iterations: int = 5, warmup: bool = True, **kwargs) -> BenchmarkResult:
    """
    Benchmark a function and return statistics.

    Args:
        func: Function to benchmark
        *args: Positional arguments to function
        iterations: Number of iterations to run
        warmup: Call func once, untimed, before measuring
        **kwargs: Keyword arguments to function

    Returns:
        BenchmarkResult with timing statistics
    """
    times = []

    if warmup:
        func(*args, **kwargs)

    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        elapsed = time.perf_counter() - start
        times.append(elapsed)

    return BenchmarkResult(func.__name__, times)


def timed(func: Callable, *args) -> tuple[int, float]:
    """Run func once; return (result, elapsed seconds)."""
    start = time.perf_counter()
    result = func(*args)
    return result, time.perf_counter() - start


def compare_algorithms(a: int, b: int, n: int, iterations: int = 1,
                       names: List[str] | None = None) -> list[tuple[str, int, BenchmarkResult]]:
    """
    Run each algorithm on the same input.

    Returns:
        (name, result, timing) per algorithm, in ALGORITHMS order

    Raises:
        RuntimeError: if the algorithms disagree
    """
    rows = []
    for name in names or ALGORITHMS:
        func = ALGORITHMS[name]
        times = []
        result = None
        for _ in range(iterations):
            result, elapsed = timed(func, a, b, n)
            times.append(elapsed)
        rows.append((name, result, BenchmarkResult(name, times)))

    results = {result for _, result, _ in rows}
    if len(results) > 1:
        summary = ", ".join(f"{name}={result}" for name, result, _ in rows)
        raise RuntimeError(f"algorithms disagree on C({a}, {b}) mod {n}: {summary}")
    return rows


def print_comparison(rows: list[tuple[str, int, BenchmarkResult]]):
    for name, result, timing in rows:
        print(f"{name} Result: {result}")
        print(f"{name} Time: {timing.mean*1000:.3f} ms\n")


def prompt_and_compare():
    """Prompt for a, b and n, then print every algorithm's result and time."""
    print("Computing a choose b modulo n")
    a = int(input("a: "))
    b = int(input("b: "))
    n = int(input("n: "))
    print()

    print_comparison(compare_algorithms(a, b, n))


# ============================================================================
# 1. SAMPLE INPUT
# ============================================================================

def benchmark_sample():
    """Benchmark the sample input: 306255 choose 151923 mod 7^3 (= 98)."""
    print("\n" + "="*100)
    print("SAMPLE INPUT: C(306255, 151923) mod 343")
    print("="*100)

    rows = compare_algorithms(306255, 151923, 343)
    for name, result, timing in rows:
        timing.name = f"{name} = {result}"
        print(timing)

    speedup = rows[0][2].mean / rows[-1][2].mean
    print(f"  → Improved speedup over basic: {speedup:.1f}x\n")


# ============================================================================
# 2. GROWING a
# ============================================================================

def benchmark_growing_a():
    """Benchmark all algorithms as a grows, with n = 7^3 fixed."""
    print("\n" + "="*100)
    print("GROWING a (n = 343)")
    print("="*100)

    n = 343
    for digits in (3, 4, 5, 50, 300):
        a = 10 ** digits + 7
        b = a // 3
        names = list(ALGORITHMS) if a < _BASELINE_LIMIT else ["Improved"]
        for name, result, timing in compare_algorithms(a, b, n, iterations=3, names=names):
            timing.name = f"a ~ 10^{digits:<4} {name}"
            print(timing)


# ============================================================================
# 3. COMPOSITE MODULI
# ============================================================================

def benchmark_composite_moduli():
    """Benchmark the improved algorithm across moduli with several prime powers."""
    print("\n" + "="*100)
    print("COMPOSITE MODULI")
    print("="*100)

    a = 10 ** 100 + 267
    b = 10 ** 99 + 31
    test_cases = [
        (2 ** 10, "2^10"),
        (3 ** 7, "3^7"),
        (2 ** 3 * 3 ** 2 * 5 * 7, "2^3 * 3^2 * 5 * 7"),
        (10 ** 6, "10^6"),
        (1000003, "Prime 1000003"),
    ]

    for n, description in test_cases:
        clear_caches()
        result = benchmark(compute_binomial_mod_n, a, b, n, iterations=5)
        result.name = description
        print(result)


# ============================================================================
# 4. CACHE PERFORMANCE
# ============================================================================

def benchmark_caching_impact():
    """Compare a cold call (tables built) with warm calls (tables memoized)."""
    print("\n" + "="*100)
    print("CACHE PERFORMANCE")
    print("="*100)

    a, b, n = 10 ** 50 + 3, 10 ** 49, 5 ** 8

    clear_caches()
    _, cold = timed(compute_binomial_mod_n, a, b, n)
    result_cold = BenchmarkResult("First call (tables built)", [cold])
    print(result_cold)

    result_warm = benchmark(compute_binomial_mod_n, a, b, n, iterations=20, warmup=False)
    result_warm.name = "Repeated calls (memoized)"
    print(result_warm)

    print(f"  → Cache speedup: {result_cold.mean / result_warm.mean:.1f}x\n")


# ============================================================================
# MAIN BENCHMARK SUITE
# ============================================================================

def run_all_benchmarks():
    """Run all benchmarks."""
    print("\n")
    print("╔" + "="*98 + "╗")
    print("║" + " "*25 + "BINOMIAL COEFFICIENT MOD N BENCHMARK SUITE" + " "*31 + "║")
    print("╚" + "="*98 + "╝")

    try:
        benchmark_sample()
        benchmark_growing_a()
        benchmark_composite_moduli()
        benchmark_caching_impact()

        print("\n" + "="*100)
        print("BENCHMARK COMPLETE")
        print("="*100 + "\n")

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)


def main(argv: List[str] | None = None):
    parser = argparse.ArgumentParser(description="Compute a choose b modulo n with three algorithms and time them.")
    parser.add_argument("a", nargs="?", help="a (decimal integer)")
    parser.add_argument("b", nargs="?", help="b (decimal integer)")
    parser.add_argument("n", nargs="?", help="n (decimal integer, > 0)")
    parser.add_argument("--suite", action="store_true", help="run the canned benchmark suite")
    parser.add_argument("--iterations", type=int, default=1, help="timed runs per algorithm")
    args = parser.parse_args(argv)

    if args.suite:
        run_all_benchmarks()
        return

    try:
        if args.n is None:
            prompt_and_compare()
        else:
            print_comparison(compare_algorithms(int(args.a), int(args.b), int(args.n),
                                                iterations=args.iterations))
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
