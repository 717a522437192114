import hashlib
import unittest

import numpy as np

from sha1stream.verify import (
    KNOWN_VECTORS,
    check_boundaries,
    check_chunking,
    check_known_vectors,
    cross_check,
    digest_chunks,
    random_buffer,
    random_chunks,
)


class TestVerify(unittest.TestCase):
    def test_known_vectors_agree_with_hashlib(self) -> None:
        for msg, expected in KNOWN_VECTORS:
            self.assertEqual(hashlib.sha1(msg).hexdigest(), expected)
        ok, bad = check_known_vectors()
        self.assertTrue(ok, bad)

    def test_boundaries(self) -> None:
        ok, bad = check_boundaries(np.random.default_rng(1))
        self.assertTrue(ok, bad)

    def test_random_chunks_cover_data(self) -> None:
        rng = np.random.default_rng(5)
        data = random_buffer(rng, 3000)
        for _ in range(20):
            chunks = random_chunks(rng, data)
            self.assertEqual(b"".join(chunks), data)
            self.assertTrue(all(chunks))
        self.assertEqual(random_chunks(rng, b""), [])
        self.assertEqual(random_chunks(rng, b"x"), [b"x"])

    def test_chunking(self) -> None:
        rng = np.random.default_rng(9)
        data = random_buffer(rng, 2000)
        ok, bad = check_chunking(data, rng)
        self.assertTrue(ok, bad)
        self.assertEqual(digest_chunks([data]), hashlib.sha1(data).digest())

    def test_cross_check(self) -> None:
        seen = []
        res = cross_check(4, max_len=5000, seed=3, on_result=lambda i, a, b: seen.append((i, a == b)))
        self.assertTrue(res.ok)
        self.assertEqual(res.runs, 4)
        self.assertIsNone(res.first_failure)
        self.assertEqual(seen, [(0, True), (1, True), (2, True), (3, True)])

    def test_cross_check_chunked(self) -> None:
        res = cross_check(3, max_len=3000, seed=11, chunked=True)
        self.assertTrue(res.ok)
        self.assertEqual(res.runs, 3)

    def test_cross_check_rejects_negative_count(self) -> None:
        with self.assertRaises(ValueError):
            cross_check(-1)


if __name__ == "__main__":
    unittest.main()
