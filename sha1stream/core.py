from __future__ import annotations

from typing import List, Sequence

MASK32 = 0xFFFFFFFF


def u32(x: int) -> int:
    return x & MASK32


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


# SHA-1 initial value (H0..H4)
SHA1_IV = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

# Kt per 20-round range
_K = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)


def ft(t: int, b: int, c: int, d: int) -> int:
    if 0 <= t < 20:
        # Ch, written without the complement
        return (b & (c ^ d)) ^ d
    if 20 <= t < 40:
        return b ^ c ^ d
    if 40 <= t < 60:
        # Maj
        return (b & c) | (b & d) | (c & d)
    if 60 <= t < 80:
        return b ^ c ^ d
    raise ValueError("t out of range")


def kt(t: int) -> int:
    if 0 <= t < 80:
        return _K[t // 20]
    raise ValueError("t out of range")


def bytes_to_words_be(buf: Sequence[int], ofs: int = 0) -> List[int]:
    """Read 16 big-endian words from ``buf[ofs:ofs+64]``.

    Words are assembled byte by byte, so the result does not depend on the
    host byte order.
    """
    if ofs < 0 or len(buf) - ofs < 64:
        raise ValueError("block needs 64 bytes")
    return [
        (buf[i] << 24) | (buf[i + 1] << 16) | (buf[i + 2] << 8) | buf[i + 3]
        for i in range(ofs, ofs + 64, 4)
    ]


def words_to_bytes_be(words: Sequence[int]) -> bytes:
    out = bytearray()
    for w in words:
        w = u32(w)
        out += bytes(((w >> 24) & 0xFF, (w >> 16) & 0xFF, (w >> 8) & 0xFF, w & 0xFF))
    return bytes(out)


def compress_block(state: List[int], buf: Sequence[int], ofs: int = 0) -> None:
    """
    SHA-1 compression of one 64-byte block, applied to ``state`` in place.
    Inputs:
      - state: list of the 5 chaining words (H0..H4)
      - buf, ofs: the block is ``buf[ofs:ofs+64]``
    The message schedule lives in a 16-word circular window; from round 16 on
    each slot is overwritten with the expanded word it produces.
    """
    if len(state) != 5:
        raise ValueError("state must have 5 words")

    w = bytes_to_words_be(buf, ofs)
    a, b, c, d, e = state

    for t in range(80):
        if t < 16:
            wt = w[t]
        else:
            i = t & 15
            wt = rl(w[(i + 13) & 15] ^ w[(i + 8) & 15] ^ w[(i + 2) & 15] ^ w[i], 1)
            w[i] = wt

        e = (e + ft(t, b, c, d) + wt + kt(t) + rl(a, 5)) & MASK32
        b = rl(b, 30)
        # the updated e becomes the next round's a
        a, b, c, d, e = e, a, b, c, d

    state[0] = u32(state[0] + a)
    state[1] = u32(state[1] + b)
    state[2] = u32(state[2] + c)
    state[3] = u32(state[3] + d)
    state[4] = u32(state[4] + e)


def sha1_padding(msg_len_bytes: int) -> bytes:
    if msg_len_bytes < 0:
        raise ValueError("message length must be non-negative")
    bit_len = (msg_len_bytes * 8) & ((1 << 64) - 1)
    # 0x80 then zeros then length (big-endian 64-bit)
    pad = b"\x80"
    # k such that (msg_len + 1 + k) % 64 == 56
    k = (56 - (msg_len_bytes + 1) % 64) % 64
    pad += b"\x00" * k
    pad += words_to_bytes_be((bit_len >> 32, bit_len))
    return pad
