"""Benchmark: woflang tokenize and exec_line throughput.

Measures how many source lines can be tokenized, and how many can be
executed end to end, per second.
"""
from __future__ import annotations

import io
import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from woflang.lexer.lexer import tokenize
from woflang.runtime.interpreter import Interpreter

_ITERATIONS: int = 5_000
_TOKENIZE_ITERATIONS: int = 20_000

_SAMPLE_LINE = '1 2 + 3.5 * dup "a quoted string" drop 4 / swap drop clear # trailing comment'


def _report(result: dict[str, object]) -> dict[str, object]:
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_exec_throughput() -> dict[str, object]:
    """Benchmark ``Interpreter.exec_line`` on a mixed arithmetic line.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    with Interpreter(output=io.StringIO()) as interp:
        start = time.perf_counter()
        for _ in range(_ITERATIONS):
            interp.exec_line(_SAMPLE_LINE)
        total = time.perf_counter() - start

    return _report({
        "operation": "woflang_exec_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
    })


def bench_tokenize_throughput() -> dict[str, object]:
    """Benchmark the tokenizer alone.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    start = time.perf_counter()
    for _ in range(_TOKENIZE_ITERATIONS):
        tokenize(_SAMPLE_LINE)
    total = time.perf_counter() - start

    return _report({
        "operation": "woflang_tokenize_throughput",
        "iterations": _TOKENIZE_ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_TOKENIZE_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _TOKENIZE_ITERATIONS * 1000, 4),
    })


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_exec_throughput, "exec_throughput_baseline.json"),
        (bench_tokenize_throughput, "tokenize_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
