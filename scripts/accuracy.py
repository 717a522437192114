#!/usr/bin/env python3
"""Accuracy checks for the streaming SHA-1 engine against hashlib."""
from __future__ import annotations

import argparse
import hashlib
from pathlib import Path
import sys

import numpy as np

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from sha1stream.engine import SHA1Hash
from sha1stream.sha1 import sha1_hex
from sha1stream.verify import check_boundaries, check_chunking, check_known_vectors, cross_check, random_buffer


def check_vectors() -> bool:
    ok, bad = check_known_vectors()
    print(f"sha1_vectors: {'PASS' if ok else 'FAIL'}" + (f" bad={bad}" if bad else ""))
    return ok


def check_oneshot_vs_stream(trials: int, seed: int) -> bool:
    rng = np.random.default_rng(seed)
    ok = True
    for _ in range(trials):
        buf = random_buffer(rng, 2048)
        if sha1_hex(buf) != SHA1Hash(buf).hexdigest():
            print(f"oneshot/stream mismatch on {len(buf)} bytes")
            ok = False
    print(f"oneshot_vs_stream: {'PASS' if ok else 'FAIL'}")
    return ok


def check_padding_edges(seed: int) -> bool:
    ok, bad = check_boundaries(np.random.default_rng(seed))
    print(f"padding_edges: {'PASS' if ok else 'FAIL'}" + (f" bad={bad}" if bad else ""))
    return ok


def check_partitions(trials: int, seed: int) -> bool:
    rng = np.random.default_rng(seed)
    fails = 0
    for _ in range(trials):
        ok, _ = check_chunking(random_buffer(rng, 1024), rng)
        fails += 0 if ok else 1
    print(f"chunk_partitions: {'PASS' if fails == 0 else 'FAIL'} fails={fails}/{trials}")
    return fails == 0


def check_single_byte_flip(seed: int) -> bool:
    rng = np.random.default_rng(seed)
    buf = bytearray(rng.integers(0, 256, size=50000, dtype=np.uint8).tobytes())
    before = SHA1Hash().compute(buf)
    pos = int(rng.integers(0, len(buf)))
    buf[pos] ^= 0x01
    after = SHA1Hash().compute(buf)
    ok = before != after and after == hashlib.sha1(buf).digest()
    print(f"single_byte_flip: {'PASS' if ok else 'FAIL'} pos={pos}")
    return ok


def check_random(runs: int, seed: int) -> bool:
    res = cross_check(runs, seed=seed)
    print(f"random_buffers: {'PASS' if res.ok else 'FAIL'} runs={res.runs}")
    return res.ok


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--trials", type=int, default=50)
    ap.add_argument("--runs", type=int, default=20)
    ap.add_argument("--seed", type=int, default=123)
    args = ap.parse_args()

    ok = True
    ok &= check_vectors()
    ok &= check_oneshot_vs_stream(args.trials, args.seed)
    ok &= check_padding_edges(args.seed)
    ok &= check_partitions(args.trials, args.seed)
    ok &= check_single_byte_flip(args.seed)
    ok &= check_random(args.runs, args.seed)

    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
