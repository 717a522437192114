from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .engine import SHA1Hash
from .sha1 import to_hex


# (message, expected hex digest)
KNOWN_VECTORS: List[Tuple[bytes, str]] = [
    (b"", "da39a3ee5e6b4b0d3255bfef95601890afd80709"),
    (b"abc", "a9993e364706816aba3e25717850c26c9cd0d89d"),
    (
        b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
        "84983e441c3bd26ebaae4aa1f95129e5e54670f1",
    ),
    (b"The quick brown fox jumps over the lazy dog", "2fd4e1c67a2d28fced849ee1bb76e7391b93eb12"),
]

# lengths around the 55/56 and 63/64 padding edges
BOUNDARY_LENGTHS = (0, 1, 55, 56, 63, 64, 65, 119, 120)

MAX_BUFFER_LEN = 50000


def random_buffer(rng: np.random.Generator, max_len: int = MAX_BUFFER_LEN) -> bytes:
    n = int(rng.integers(0, max_len)) if max_len > 0 else 0
    return rng.integers(0, 256, size=n, dtype=np.uint8).tobytes()


def random_chunks(rng: np.random.Generator, data: bytes, max_parts: int = 8) -> List[bytes]:
    """Split ``data`` into consecutive non-empty chunks at random cut points."""
    if len(data) < 2:
        return [data] if data else []
    parts = int(rng.integers(1, max_parts + 1))
    k = min(parts - 1, len(data) - 1)
    cuts = np.sort(rng.choice(np.arange(1, len(data)), size=k, replace=False))
    bounds = [0] + [int(c) for c in cuts] + [len(data)]
    return [data[bounds[i] : bounds[i + 1]] for i in range(len(bounds) - 1)]


def digest_chunks(chunks: List[bytes]) -> bytes:
    h = SHA1Hash()
    for chunk in chunks:
        h.update(chunk)
    return h.finalize()


def check_known_vectors() -> Tuple[bool, Dict[str, str]]:
    issues: Dict[str, str] = {}
    for msg, expected in KNOWN_VECTORS:
        ours = to_hex(SHA1Hash().compute(msg))
        if ours != expected:
            issues[repr(msg[:20])] = ours
    return (len(issues) == 0), issues


def check_boundaries(rng: np.random.Generator) -> Tuple[bool, Dict[int, str]]:
    issues: Dict[int, str] = {}
    for n in BOUNDARY_LENGTHS:
        data = rng.integers(0, 256, size=n, dtype=np.uint8).tobytes()
        ours = SHA1Hash().compute(data)
        if ours != hashlib.sha1(data).digest():
            issues[n] = to_hex(ours)
    return (len(issues) == 0), issues


def check_chunking(data: bytes, rng: np.random.Generator, partitions: int = 4) -> Tuple[bool, Dict[str, str]]:
    issues: Dict[str, str] = {}
    whole = SHA1Hash()
    whole.update(data)
    ref = whole.finalize()
    if SHA1Hash().compute(data) != ref:
        issues["compute"] = "differs from single update"
    for p in range(partitions):
        chunks = random_chunks(rng, data)
        if digest_chunks(chunks) != ref:
            issues[f"partition{p}"] = ",".join(str(len(c)) for c in chunks)
    return (len(issues) == 0), issues


@dataclass
class CrossCheckResult:
    runs: int = 0
    failures: int = 0
    first_failure: Optional[bytes] = None

    @property
    def ok(self) -> bool:
        return self.failures == 0


def cross_check(
    count: int,
    max_len: int = MAX_BUFFER_LEN,
    seed: Optional[int] = None,
    chunked: bool = False,
    on_result: Optional[Callable[[int, str, str], None]] = None,
) -> CrossCheckResult:
    """Compare against ``hashlib.sha1`` on random buffers, stopping at the first mismatch.

    ``on_result(index, ours_hex, ref_hex)`` is called after every run.
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    rng = np.random.default_rng(seed)
    res = CrossCheckResult()
    for i in range(count):
        buf = random_buffer(rng, max_len)
        if chunked:
            ours = digest_chunks(random_chunks(rng, buf))
        else:
            ours = SHA1Hash().compute(buf, len(buf))
        ref = hashlib.sha1(buf).digest()
        res.runs += 1
        if on_result is not None:
            on_result(i, to_hex(ours), to_hex(ref))
        if ours != ref:
            res.failures += 1
            res.first_failure = buf
            break
    return res
