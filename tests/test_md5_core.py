import hashlib
import unittest

from md5stream.core import (
    AC,
    K,
    MD5_IV,
    RC,
    blocks_to_words_le,
    bytes_to_words_le,
    compress_block,
    rl,
    words_to_bytes_le,
)
from md5stream.md5 import digest, md5_hex


class TestMD5Core(unittest.TestCase):
    def test_md5_matches_hashlib(self) -> None:
        vectors = [
            b"",
            b"a",
            b"abc",
            b"message digest",
            b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
            b"a" * 112,
        ]
        for m in vectors:
            self.assertEqual(digest(m), hashlib.md5(m).digest())

    def test_known_answers(self) -> None:
        self.assertEqual(md5_hex(b""), "d41d8cd98f00b204e9800998ecf8427e")
        self.assertEqual(md5_hex(b"a"), "0cc175b9c0f1b6a831c399e269772661")
        self.assertEqual(md5_hex(b"abc"), "900150983cd24fb0d6963f7d28e17f72")
        self.assertEqual(md5_hex(b"message digest"), "f96b697d7cb7938d525a2f31aaf161d0")

    def test_padding_boundaries(self) -> None:
        for n in (0, 55, 56, 57, 63, 64, 65, 119, 120, 127, 128, 129):
            m = bytes((i * 7 + 3) & 0xFF for i in range(n))
            self.assertEqual(digest(m), hashlib.md5(m).digest(), msg=f"len={n}")

    def test_digest_is_deterministic(self) -> None:
        m = bytes(range(256)) * 3
        self.assertEqual(digest(m), digest(m))
        self.assertEqual(len(digest(m)), 16)

    def test_round_tables(self) -> None:
        self.assertEqual(len(K), 64)
        self.assertEqual(len(RC), 64)
        self.assertEqual(len(AC), 64)
        self.assertEqual(AC[0], 0xD76AA478)
        self.assertEqual(AC[63], 0xEB86D391)
        self.assertEqual(K[16:20], (1, 6, 11, 0))
        self.assertEqual(K[48:52], (0, 7, 14, 5))
        for group in range(4):
            self.assertEqual(sorted(K[group * 16 : group * 16 + 16]), list(range(16)))

    def test_compress_single_padded_block(self) -> None:
        # "abc" fits into one block together with its padding and length
        m = [0] * 16
        m[0] = 0x80636261
        m[14] = 24
        self.assertEqual(
            words_to_bytes_le(compress_block(MD5_IV, m)).hex(),
            "900150983cd24fb0d6963f7d28e17f72",
        )

    def test_compress_is_pure(self) -> None:
        m = [(i * 0x1234567 + 0x89ABCDEF) & 0xFFFFFFFF for i in range(16)]
        before = list(m)
        out1 = compress_block(MD5_IV, m)
        out2 = compress_block(MD5_IV, m)
        self.assertEqual(out1, out2)
        self.assertEqual(m, before)
        self.assertNotEqual(out1, MD5_IV)

    def test_compress_rejects_bad_shapes(self) -> None:
        with self.assertRaises(ValueError):
            compress_block(MD5_IV, [0] * 15)
        with self.assertRaises(ValueError):
            compress_block(MD5_IV[:3], [0] * 16)

    def test_rotation_wraps(self) -> None:
        self.assertEqual(rl(0x80000001, 1), 0x00000003)
        self.assertEqual(rl(0x12345678, 8), 0x34567812)


class TestByteOrder(unittest.TestCase):
    def test_words_are_little_endian(self) -> None:
        words = bytes_to_words_le(bytes(range(64)))
        self.assertEqual(len(words), 16)
        self.assertEqual(words[0], 0x03020100)
        self.assertEqual(words[15], 0x3F3E3D3C)

    def test_words_to_bytes_le(self) -> None:
        self.assertEqual(words_to_bytes_le([0x67452301]), b"\x01\x23\x45\x67")
        self.assertEqual(words_to_bytes_le(MD5_IV).hex(), "0123456789abcdeffedcba9876543210")

    def test_blocks_to_words_le(self) -> None:
        data = bytes(range(128))
        blocks = blocks_to_words_le(data)
        self.assertEqual(blocks.shape, (2, 16))
        self.assertEqual(int(blocks[1][0]), 0x43424140)
        self.assertEqual([int(x) for x in blocks[0]], bytes_to_words_le(data[:64]))

    def test_rejects_partial_blocks(self) -> None:
        with self.assertRaises(ValueError):
            bytes_to_words_le(bytes(63))
        with self.assertRaises(ValueError):
            blocks_to_words_le(bytes(100))


if __name__ == "__main__":
    unittest.main()
