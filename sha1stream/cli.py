from __future__ import annotations

import argparse
import hashlib
import os
from typing import List

import numpy as np

from .engine import SHA1Hash
from .sha1 import to_hex
from .verify import (
    BOUNDARY_LENGTHS,
    KNOWN_VECTORS,
    MAX_BUFFER_LEN,
    check_boundaries,
    check_chunking,
    cross_check,
    random_buffer,
)


def _seed(x: str) -> int:
    return int(x, 0)


def _env_seed() -> int | None:
    raw = os.getenv("SHA1STREAM_SEED")
    if raw is None or raw == "":
        return None
    return _seed(raw)


def cmd_verify_core(ns: argparse.Namespace) -> int:
    ok_all = True
    for m, expected in KNOWN_VECTORS:
        ours = to_hex(SHA1Hash().compute(m))
        ref = hashlib.sha1(m).hexdigest()
        status = "OK" if ours == ref == expected else "FAIL"
        print(f"SHA1('{m[:20] + (b'...' if len(m) > 20 else b'')}') -> {status}")
        if status != "OK":
            print(f"  ours={ours}\n  ref ={ref}")
            ok_all = False

    rng = np.random.default_rng(ns.seed)
    ok, bad = check_boundaries(rng)
    print(f"boundary lengths {list(BOUNDARY_LENGTHS)} -> {'OK' if ok else 'FAIL'}")
    if not ok:
        print(f"  bad={bad}")
        ok_all = False

    ok, bad = check_chunking(random_buffer(rng, 4096), rng)
    print(f"chunking invariance -> {'OK' if ok else 'FAIL'}")
    if not ok:
        print(f"  bad={bad}")
        ok_all = False

    print("verify-core:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


def cmd_cross_check(ns: argparse.Namespace) -> int:
    if ns.runs < 0:
        print("cross-check: --runs must be >= 0")
        return 1

    def _report(i: int, ours: str, ref: str) -> None:
        if not ns.quiet:
            print(ours)
            print(ref)
        if ours != ref or not ns.quiet:
            print(f"{i + 1} {'OK' if ours == ref else 'ERROR'}")

    res = cross_check(ns.runs, max_len=ns.max_len, seed=ns.seed, chunked=ns.chunked, on_result=_report)
    print(f"cross-check: runs={res.runs} failures={res.failures}")
    if res.first_failure is not None:
        print(f"cross-check: first mismatch on a {len(res.first_failure)}-byte buffer")
    return 0 if res.ok else 1


def cmd_hash(ns: argparse.Namespace) -> int:
    if ns.chunk is not None and ns.chunk <= 0:
        print("hash: --chunk must be > 0")
        return 1
    for text in ns.text:
        data = text.encode("utf-8")
        h = SHA1Hash()
        step = ns.chunk or max(len(data), 1)
        for off in range(0, len(data), step):
            h.update(data[off : off + step])
        print(f"{to_hex(h.finalize())}  {text}")
    return 0


def cmd_bench(ns: argparse.Namespace) -> int:
    import time

    if ns.size < 0 or ns.repeat < 1:
        print("bench: --size must be >= 0 and --repeat >= 1")
        return 1
    rng = np.random.default_rng(ns.seed)
    data = rng.integers(0, 256, size=ns.size, dtype=np.uint8).tobytes()
    h = SHA1Hash()
    start = time.perf_counter()
    for _ in range(ns.repeat):
        digest = h.compute(data)
    elapsed = time.perf_counter() - start
    total = ns.size * ns.repeat
    rate = total / elapsed / (1 << 20) if elapsed else 0.0
    print(f"bench: bytes={total} time={elapsed:.3f}s rate={rate:.3f} MiB/s sha1={to_hex(digest)}")
    return 0


def main(argv: List[str] | None = None) -> int:
    try:
        env_seed = _env_seed()
    except ValueError:
        print("sha1stream: SHA1STREAM_SEED must be an integer")
        return 1

    p = argparse.ArgumentParser(prog="sha1stream")
    sub = p.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("verify-core", help="验证 SHA-1 实现是否与已知向量及 hashlib 一致")
    s1.add_argument("--seed", type=_seed, default=env_seed, help="随机种子（或使用 SHA1STREAM_SEED）")
    s1.set_defaults(func=cmd_verify_core)

    s2 = sub.add_parser("cross-check", help="随机缓冲区与 hashlib.sha1 对比，遇到第一个不一致即停止")
    s2.add_argument("--runs", type=int, default=100)
    s2.add_argument("--max-len", type=int, default=MAX_BUFFER_LEN, help="缓冲区最大长度（不含）")
    s2.add_argument("--seed", type=_seed, default=env_seed, help="随机种子（或使用 SHA1STREAM_SEED）")
    s2.add_argument("--chunked", action="store_true", help="按随机分块多次 update")
    s2.add_argument("--quiet", "-q", action="store_true")
    s2.set_defaults(func=cmd_cross_check)

    s3 = sub.add_parser("hash", help="计算参数字符串（UTF-8）的 SHA-1")
    s3.add_argument("text", nargs="*", default=[])
    s3.add_argument("--chunk", type=int, default=None, help="每次 update 的字节数")
    s3.set_defaults(func=cmd_hash)

    s4 = sub.add_parser("bench", help="基准测试：重复计算并输出吞吐量")
    s4.add_argument("--size", type=int, default=1 << 16)
    s4.add_argument("--repeat", type=int, default=4)
    s4.add_argument("--seed", type=_seed, default=env_seed)
    s4.set_defaults(func=cmd_bench)

    args = p.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
