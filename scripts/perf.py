#!/usr/bin/env python3
"""Throughput micro-benchmarks for the streaming MD5 context."""
from __future__ import annotations

import argparse
import hashlib
import os
import random
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from md5stream.context import Md5Context
from md5stream.numba_core import numba_available


def bench_update(data: bytes, chunk: int, label: str) -> None:
    start = time.perf_counter()
    ctx = Md5Context()
    for off in range(0, len(data), chunk):
        ctx.update(data[off : off + chunk])
    out = ctx.final()
    elapsed = time.perf_counter() - start
    ok = out == hashlib.md5(data).digest()
    rate = len(data) / elapsed / (1 << 20) if elapsed else 0.0
    print(f"{label}: chunk={chunk} bytes={len(data)} time={elapsed:.3f}s rate={rate:.2f}MiB/s {'OK' if ok else 'MISMATCH'}")


def main() -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--size", type=int, default=1 << 20, help="input size in bytes")
    ap.add_argument("--chunk", type=int, action="append", help="update chunk size (repeatable)")
    ap.add_argument("--seed", type=int, default=1)
    ns = ap.parse_args()

    rng = random.Random(ns.seed)
    data = rng.randbytes(ns.size)
    chunks = ns.chunk or [1 << 16, 4096, 64, 7]

    os.environ["MD5STREAM_JIT_MIN_BLOCKS"] = str(1 << 62)
    for chunk in chunks:
        bench_update(data, chunk, "python")

    if not numba_available():
        print("numba: not available, skipping JIT runs")
        return 0
    os.environ["MD5STREAM_JIT_MIN_BLOCKS"] = "1"
    # first call pays for compilation
    bench_update(data[: 64 * 4], 64 * 4, "numba-warmup")
    for chunk in chunks:
        bench_update(data, chunk, "numba")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
