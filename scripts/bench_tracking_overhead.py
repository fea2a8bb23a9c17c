# scripts/bench_tracking_overhead.py
"""
Microbench: unary ops with and without a gradient tape.

What it measures
----------------
- Per-op latency of each elementwise op (and `mean`) on a non-tracking tensor
  versus a tracking tensor (forward + one tape record).
- Latency of a full traced chain followed by `backward`.
- Uses warmup iterations (not recorded), then repeats with median/p95.

Notes
-----
- The tracking timing includes `trace()` (fresh tape) so that every
  iteration records onto an empty tape; the non-tracking timing includes the
  same Tensor construction to keep the comparison fair.

Example
-------
python -O scripts/bench_tracking_overhead.py --ops sin exp sigmoid mean \
    --shape 256 32 --dtype float32 --warmup 50 --repeats 200
"""

from __future__ import annotations

import argparse
import math
import statistics
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

import numpy as np

import os
import sys

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from tapegrad import Tensor, ops  # noqa: E402


def _median(xs: Sequence[float]) -> float:
    return statistics.median(xs) if xs else float("nan")


def _p95(xs: Sequence[float]) -> float:
    if not xs:
        return float("nan")
    ys = sorted(xs)
    k = int(math.ceil(0.95 * len(ys))) - 1
    k = max(0, min(k, len(ys) - 1))
    return ys[k]


def _fmt_us(sec: float) -> str:
    return f"{sec * 1e6:8.1f} us"


@dataclass
class OpResult:
    name: str
    plain_med: float
    plain_p95: float
    tracked_med: float
    tracked_p95: float


def _time_op(fn: Callable[[], object], *, warmup: int, repeats: int) -> List[float]:
    for _ in range(warmup):
        fn()

    times: List[float] = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def _build_ops() -> Dict[str, Callable[[Tensor], Tensor]]:
    table: Dict[str, Callable[[Tensor], Tensor]] = {
        name: getattr(ops, name) for name in ops.UNARY_FUNCTIONS
    }
    table["mean"] = ops.mean
    return table


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--ops",
        nargs="+",
        default=None,
        help="Subset of ops to run (default: all unary ops and mean).",
    )
    ap.add_argument("--shape", nargs="+", type=int, default=[256, 32])
    ap.add_argument("--dtype", choices=["float32", "float64"], default="float32")
    ap.add_argument("--warmup", type=int, default=50)
    ap.add_argument("--repeats", type=int, default=200)
    ap.add_argument("--seed", type=int, default=0)
    args = ap.parse_args()

    rng = np.random.default_rng(args.seed)
    # positive inputs keep ln finite
    x_np = rng.uniform(0.1, 2.0, size=tuple(args.shape)).astype(args.dtype)

    table = _build_ops()
    names = args.ops or list(table)
    unknown = [n for n in names if n not in table]
    if unknown:
        ap.error(f"unknown ops: {unknown}; choose from {sorted(table)}")

    print("=" * 72)
    print(
        f"tapegrad tracking overhead | shape={tuple(args.shape)} dtype={args.dtype} "
        f"warmup={args.warmup} repeats={args.repeats}"
    )
    print("=" * 72)

    results: List[OpResult] = []
    for name in names:
        op = table[name]
        plain = _time_op(
            lambda: op(Tensor(x_np)), warmup=args.warmup, repeats=args.repeats
        )
        tracked = _time_op(
            lambda: op(Tensor(x_np).trace()),
            warmup=args.warmup,
            repeats=args.repeats,
        )
        results.append(
            OpResult(
                name=name,
                plain_med=_median(plain),
                plain_p95=_p95(plain),
                tracked_med=_median(tracked),
                tracked_p95=_p95(tracked),
            )
        )

    print(f"{'op':<10}{'plain med':>14}{'plain p95':>14}{'traced med':>14}{'traced p95':>14}{'ratio':>8}")
    for r in results:
        ratio = r.tracked_med / r.plain_med if r.plain_med > 0 else float("nan")
        print(
            f"{r.name:<10}{_fmt_us(r.plain_med):>14}{_fmt_us(r.plain_p95):>14}"
            f"{_fmt_us(r.tracked_med):>14}{_fmt_us(r.tracked_p95):>14}{ratio:>8.2f}"
        )

    chain = _time_op(
        lambda: Tensor(x_np).trace().sin().exp().tanh().square().mean().backward(),
        warmup=args.warmup,
        repeats=args.repeats,
    )
    print("-" * 72)
    print(
        f"chain sin>exp>tanh>square>mean + backward: "
        f"med={_fmt_us(_median(chain))} p95={_fmt_us(_p95(chain))}"
    )


if __name__ == "__main__":
    main()
