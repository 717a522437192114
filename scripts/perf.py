#!/usr/bin/env python3
"""Performance micro-benchmarks for the block compressor and stream feeder."""
from __future__ import annotations

import argparse
import time
from pathlib import Path
import sys

import numpy as np

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from sha1stream.core import SHA1_IV, compress_block
from sha1stream.engine import SHA1Hash


def bench_compress(blocks: int, seed: int) -> None:
    rng = np.random.default_rng(seed)
    data = rng.integers(0, 256, size=64 * blocks, dtype=np.uint8).tobytes()
    state = list(SHA1_IV)
    start = time.time()
    for off in range(0, len(data), 64):
        compress_block(state, data, off)
    elapsed = time.time() - start
    rate = blocks / elapsed if elapsed else 0.0
    print(f"compress_block: blocks={blocks} time={elapsed:.3f}s rate={rate:.2f} blocks/s")


def bench_update(size: int, chunk: int, seed: int) -> None:
    rng = np.random.default_rng(seed)
    data = rng.integers(0, 256, size=size, dtype=np.uint8).tobytes()
    h = SHA1Hash()
    start = time.time()
    for off in range(0, size, chunk):
        h.update(data[off : off + chunk])
    h.finalize()
    elapsed = time.time() - start
    rate = size / elapsed / (1 << 20) if elapsed else 0.0
    print(f"update: size={size} chunk={chunk} time={elapsed:.3f}s rate={rate:.3f} MiB/s")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--blocks", type=int, default=2000)
    ap.add_argument("--size", type=int, default=1 << 17)
    ap.add_argument("--seed", type=int, default=2024)
    args = ap.parse_args()

    bench_compress(args.blocks, args.seed)
    for chunk in (1, 7, 64, 1000, args.size):
        bench_update(args.size if chunk > 1 else args.size // 16, chunk, args.seed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
