"""Benchmark: woflang exec_line latency (p50/p95/mean).

Measures per-line latency for a short arithmetic line and for a line
that dispatches to extension-style operators registered at runtime.
"""
from __future__ import annotations

import io
import json
import math
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from woflang.core.value import Value
from woflang.runtime.interpreter import Interpreter

_WARMUP: int = 100
_ITERATIONS: int = 3_000

_SHORT_LINE = "5 3 + 2 * drop"
_PLUGIN_LINE = "pi 2 / sin 1 + drop"


def _register_trig(interp: Interpreter) -> None:
    interp.register("pi", lambda i: i.push(Value.from_float(math.pi)))
    interp.register("sin", lambda i: i.push(Value.from_float(math.sin(i.stack.pop_numeric("sin")))))


def _measure(interp: Interpreter, line: str) -> list[float]:
    for _ in range(_WARMUP):
        interp.exec_line(line)
    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        interp.exec_line(line)
        latencies_ms.append((time.perf_counter() - t0) * 1000)
    return latencies_ms


def _summarise(operation: str, latencies_ms: list[float]) -> dict[str, object]:
    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": operation,
        "iterations": n,
        "total_seconds": round(total, 4),
        "ops_per_second": round(n / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def bench_exec_latency() -> dict[str, object]:
    """Benchmark ``exec_line`` latency on a short built-in line.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    with Interpreter(output=io.StringIO()) as interp:
        return _summarise("woflang_exec_latency_builtin", _measure(interp, _SHORT_LINE))


def bench_plugin_latency() -> dict[str, object]:
    """Benchmark ``exec_line`` latency through runtime-registered operators."""
    with Interpreter(output=io.StringIO()) as interp:
        _register_trig(interp)
        return _summarise("woflang_exec_latency_plugin", _measure(interp, _PLUGIN_LINE))


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    for bench_fn, fname in [
        (bench_exec_latency, "latency_baseline.json"),
        (bench_plugin_latency, "plugin_latency_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
