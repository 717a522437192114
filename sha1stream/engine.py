"""
Streaming SHA-1: a per-session context, the stream feeder that cuts input
into 64-byte blocks, and the finalizer that pads and emits the digest.

Bit counts are kept as two 32-bit words, so a message longer than 2^64 - 1
bits wraps around like the reference algorithm; that limit is not guarded.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .core import MASK32, SHA1_IV, compress_block, words_to_bytes_be
from .sha1 import to_hex

BytesLike = Union[bytes, bytearray, memoryview]


class DigestStateError(RuntimeError):
    """Context used outside its init -> update -> finalize lifecycle."""


class DigestState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


@dataclass
class SHA1Context:
    state: List[int] = field(default_factory=lambda: [0] * 5)
    count: List[int] = field(default_factory=lambda: [0, 0])  # bits: [low, high]
    buffer: bytearray = field(default_factory=lambda: bytearray(64))
    status: DigestState = DigestState.UNINITIALIZED

    def buffered(self) -> int:
        # valid bytes at the front of buffer
        return (self.count[0] >> 3) & 63

    def bit_length(self) -> int:
        return (self.count[1] << 32) | self.count[0]

    def copy(self) -> "SHA1Context":
        return SHA1Context(
            state=list(self.state),
            count=list(self.count),
            buffer=bytearray(self.buffer),
            status=self.status,
        )


def sha1_init(ctx: SHA1Context) -> None:
    ctx.state[:] = SHA1_IV
    ctx.count[:] = (0, 0)
    ctx.buffer[:] = bytes(64)
    ctx.status = DigestState.READY


def _as_bytes_view(data: BytesLike) -> memoryview:
    if isinstance(data, str):
        raise TypeError("Strings must be encoded before hashing")
    return memoryview(data).cast("B")


def _feed(ctx: SHA1Context, data: BytesLike, length: int) -> None:
    j = ctx.count[0]
    ctx.count[0] = (j + (length << 3)) & MASK32
    if ctx.count[0] < j:
        ctx.count[1] = (ctx.count[1] + 1) & MASK32
    ctx.count[1] = (ctx.count[1] + (length >> 29)) & MASK32
    j = (j >> 3) & 63

    if j + length > 63:
        i = 64 - j
        ctx.buffer[j:64] = data[0:i]
        compress_block(ctx.state, ctx.buffer)
        # full blocks go straight from the input
        while i + 63 < length:
            compress_block(ctx.state, data, i)
            i += 64
        j = 0
    else:
        i = 0
    ctx.buffer[j : j + length - i] = data[i:length]


def sha1_update(ctx: SHA1Context, data: BytesLike, length: Optional[int] = None) -> None:
    """Feed the first ``length`` bytes of ``data`` (all of it by default)."""
    view = _as_bytes_view(data)
    if length is None:
        length = len(view)
    if length < 0:
        raise ValueError("length must be non-negative")
    if length > len(view):
        raise ValueError(f"length {length} exceeds data size {len(view)}")
    if ctx.status is DigestState.UNINITIALIZED:
        raise DigestStateError("context used before init")
    if ctx.status is DigestState.FINALIZED:
        raise DigestStateError("update after finalize; call init to start a new message")

    _feed(ctx, view, length)
    ctx.status = DigestState.ACCUMULATING


def sha1_finalize(ctx: SHA1Context) -> bytes:
    if ctx.status is DigestState.UNINITIALIZED:
        raise DigestStateError("finalize on a context that was never initialized")
    if ctx.status is DigestState.FINALIZED:
        raise DigestStateError("finalize called twice; call init to start a new message")

    # length field is taken before padding changes the count
    finalcount = words_to_bytes_be((ctx.count[1], ctx.count[0]))
    _feed(ctx, b"\x80", 1)
    zeros = (56 - ctx.buffered()) % 64
    _feed(ctx, bytes(zeros), zeros)
    _feed(ctx, finalcount, 8)
    assert ctx.buffered() == 0

    ctx.status = DigestState.FINALIZED
    return words_to_bytes_be(ctx.state)


class SHA1Hash:
    """
    Incremental SHA-1 engine owning one private context.

    ``update`` may be called with any chunking; ``finalize`` ends the
    message and may only be called once until ``init``. ``digest`` and
    ``hexdigest`` finalize a copy instead, so they can be used mid-stream.
    Instances are not thread-safe; use one per hashing session.
    """

    name = "sha1"
    digest_size = 20
    block_size = 64

    def __init__(self, data: Optional[BytesLike] = None) -> None:
        self._ctx = SHA1Context()
        sha1_init(self._ctx)
        if data is not None:
            self.update(data)

    @property
    def state(self) -> DigestState:
        return self._ctx.status

    def init(self) -> None:
        sha1_init(self._ctx)

    def update(self, data: BytesLike, length: Optional[int] = None) -> None:
        sha1_update(self._ctx, data, length)

    def finalize(self) -> bytes:
        return sha1_finalize(self._ctx)

    def compute(self, data: BytesLike, length: Optional[int] = None) -> bytes:
        sha1_init(self._ctx)
        sha1_update(self._ctx, data, length)
        return sha1_finalize(self._ctx)

    def copy(self) -> "SHA1Hash":
        h = SHA1Hash.__new__(SHA1Hash)
        h._ctx = self._ctx.copy()
        return h

    def digest(self) -> bytes:
        return sha1_finalize(self._ctx.copy())

    def hexdigest(self) -> str:
        return to_hex(self.digest())


def sha1_compute(data: BytesLike, length: Optional[int] = None) -> bytes:
    return SHA1Hash().compute(data, length)
