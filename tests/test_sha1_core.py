import hashlib
import unittest

from sha1stream.core import (
    MASK32,
    SHA1_IV,
    bytes_to_words_be,
    compress_block,
    ft,
    kt,
    rl,
    sha1_padding,
    words_to_bytes_be,
)
from sha1stream.sha1 import sha1_bytes, sha1_hex, to_hex


def _compress_full_schedule(state, block):
    # textbook form: all 80 schedule words materialized
    w = bytes_to_words_be(block)
    for t in range(16, 80):
        w.append(rl(w[t - 3] ^ w[t - 8] ^ w[t - 14] ^ w[t - 16], 1))
    a, b, c, d, e = state
    for t in range(80):
        tmp = (rl(a, 5) + ft(t, b, c, d) + e + w[t] + kt(t)) & MASK32
        a, b, c, d, e = tmp, a, rl(b, 30), c, d
    return [(x + y) & MASK32 for x, y in zip(state, (a, b, c, d, e))]


class TestSHA1Core(unittest.TestCase):
    def test_sha1_matches_hashlib(self) -> None:
        vectors = [
            b"",
            b"a",
            b"abc",
            b"message digest",
            b"abcdefghijklmnopqrstuvwxyz",
            b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
            b"1234567890" * 8,
        ]
        for m in vectors:
            self.assertEqual(sha1_bytes(m), hashlib.sha1(m).digest())
            self.assertEqual(sha1_hex(m), hashlib.sha1(m).hexdigest())

    def test_round_functions(self) -> None:
        b, c, d = 0xF0F0F0F0, 0xCCCCCCCC, 0xAAAAAAAA
        self.assertEqual(ft(0, b, c, d), (b & c) | (~b & d) & MASK32)
        self.assertEqual(ft(19, b, c, d), (b & c) | (~b & d) & MASK32)
        self.assertEqual(ft(20, b, c, d), b ^ c ^ d)
        self.assertEqual(ft(45, b, c, d), (b & c) | (b & d) | (c & d))
        self.assertEqual(ft(79, b, c, d), b ^ c ^ d)
        with self.assertRaises(ValueError):
            ft(80, b, c, d)
        with self.assertRaises(ValueError):
            ft(-1, b, c, d)

    def test_round_constants(self) -> None:
        self.assertEqual([kt(t) for t in (0, 19, 20, 39, 40, 59, 60, 79)], [
            0x5A827999, 0x5A827999,
            0x6ED9EBA1, 0x6ED9EBA1,
            0x8F1BBCDC, 0x8F1BBCDC,
            0xCA62C1D6, 0xCA62C1D6,
        ])
        with self.assertRaises(ValueError):
            kt(80)

    def test_rotate(self) -> None:
        self.assertEqual(rl(0x80000000, 1), 1)
        self.assertEqual(rl(0x12345678, 8), 0x34567812)
        self.assertEqual(rl(0x00000001, 30), 0x40000000)

    def test_big_endian_words(self) -> None:
        block = bytes(range(64))
        words = bytes_to_words_be(block)
        self.assertEqual(len(words), 16)
        self.assertEqual(words[0], 0x00010203)
        self.assertEqual(words[15], 0x3C3D3E3F)
        self.assertEqual(words_to_bytes_be(words), block)
        self.assertEqual(bytes_to_words_be(b"\xff" + block, 1), words)
        with self.assertRaises(ValueError):
            bytes_to_words_be(block[:63])
        with self.assertRaises(ValueError):
            bytes_to_words_be(block, 1)

    def test_compress_single_block(self) -> None:
        block = b"abc" + sha1_padding(3)
        self.assertEqual(len(block), 64)
        state = list(SHA1_IV)
        compress_block(state, block)
        self.assertEqual(to_hex(words_to_bytes_be(state)), "a9993e364706816aba3e25717850c26c9cd0d89d")

    def test_circular_schedule_matches_full_schedule(self) -> None:
        block = bytes((i * 37 + 11) & 0xFF for i in range(64))
        state = [0x01234567, 0x89ABCDEF, 0xFEDCBA98, 0x76543210, 0xF0E1D2C3]
        expected = _compress_full_schedule(state, block)
        compress_block(state, block)
        self.assertEqual(state, expected)

    def test_compress_at_offset(self) -> None:
        block = bytes(range(64))
        s1 = list(SHA1_IV)
        s2 = list(SHA1_IV)
        compress_block(s1, block)
        compress_block(s2, memoryview(b"\x00" * 10 + block), 10)
        self.assertEqual(s1, s2)

    def test_padding_lengths(self) -> None:
        for n in (0, 1, 55, 56, 63, 64, 65, 119, 120):
            pad = sha1_padding(n)
            self.assertEqual((n + len(pad)) % 64, 0)
            self.assertEqual(pad[0], 0x80)
            self.assertEqual(int.from_bytes(pad[-8:], "big"), n * 8)
        self.assertEqual(len(sha1_padding(55)), 9)
        self.assertEqual(len(sha1_padding(56)), 72)
        with self.assertRaises(ValueError):
            sha1_padding(-1)


if __name__ == "__main__":
    unittest.main()
