from __future__ import annotations

from .core import SHA1_IV, compress_block, sha1_padding, words_to_bytes_be


def sha1_bytes(data: bytes) -> bytes:
    # pad the whole message up front; no streaming state involved
    state = list(SHA1_IV)
    msg = bytes(data) + sha1_padding(len(data))
    for off in range(0, len(msg), 64):
        compress_block(state, msg, off)
    return words_to_bytes_be(state)


def to_hex(buf: bytes) -> str:
    return "".join(f"{b:02x}" for b in buf)


def sha1_hex(data: bytes) -> str:
    return to_hex(sha1_bytes(data))
