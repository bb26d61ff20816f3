from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

BLOCK_SIZE = 64
DIGEST_SIZE = 16

# MD5 initial value (A, B, C, D)
MD5_IV = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

# Message word index per step (RFC 1321 round schedule)
K: Tuple[int, ...] = (
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15,
    1, 6, 11, 0, 5, 10, 15, 4, 9, 14, 3, 8, 13, 2, 7, 12,
    5, 8, 11, 14, 1, 4, 7, 10, 13, 0, 3, 6, 9, 12, 15, 2,
    0, 7, 14, 5, 12, 3, 10, 1, 8, 15, 6, 13, 4, 11, 2, 9,
)

# Rotation counts per step
RC: Tuple[int, ...] = (
    7, 12, 17, 22, 7, 12, 17, 22, 7, 12, 17, 22, 7, 12, 17, 22,
    5, 9, 14, 20, 5, 9, 14, 20, 5, 9, 14, 20, 5, 9, 14, 20,
    4, 11, 16, 23, 4, 11, 16, 23, 4, 11, 16, 23, 4, 11, 16, 23,
    6, 10, 15, 21, 6, 10, 15, 21, 6, 10, 15, 21, 6, 10, 15, 21,
)

# Additive constants T[1..64] from RFC 1321
AC: Tuple[int, ...] = (
    0xd76aa478, 0xe8c7b756, 0x242070db, 0xc1bdceee,
    0xf57c0faf, 0x4787c62a, 0xa8304613, 0xfd469501,
    0x698098d8, 0x8b44f7af, 0xffff5bb1, 0x895cd7be,
    0x6b901122, 0xfd987193, 0xa679438e, 0x49b40821,
    0xf61e2562, 0xc040b340, 0x265e5a51, 0xe9b6c7aa,
    0xd62f105d, 0x02441453, 0xd8a1e681, 0xe7d3fbc8,
    0x21e1cde6, 0xc33707d6, 0xf4d50d87, 0x455a14ed,
    0xa9e3e905, 0xfcefa3f8, 0x676f02d9, 0x8d2a4c8a,
    0xfffa3942, 0x8771f681, 0x6d9d6122, 0xfde5380c,
    0xa4beea44, 0x4bdecfa9, 0xf6bb4b60, 0xbebfbc70,
    0x289b7ec6, 0xeaa127fa, 0xd4ef3085, 0x04881d05,
    0xd9d4d039, 0xe6db99e5, 0x1fa27cf8, 0xc4ac5665,
    0xf4292244, 0x432aff97, 0xab9423a7, 0xfc93a039,
    0x655b59c3, 0x8f0ccc92, 0xffeff47d, 0x85845dd1,
    0x6fa87e4f, 0xfe2ce6e0, 0xa3014314, 0x4e0811a1,
    0xf7537e82, 0xbd3af235, 0x2ad7d2bb, 0xeb86d391,
)

# Explicit little-endian word layout; never the host's native order
LE_U32 = np.dtype("<u4")


def u32(x: int) -> int:
    return x & MASK32


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


def ft(t: int, X: int, Y: int, Z: int) -> int:
    X, Y, Z = u32(X), u32(Y), u32(Z)
    if 0 <= t < 16:
        # F
        return u32((X & Y) | ((~X) & Z))
    if 16 <= t < 32:
        # G
        return u32((X & Z) | (Y & (~Z)))
    if 32 <= t < 48:
        # H
        return u32(X ^ Y ^ Z)
    if 48 <= t < 64:
        # I
        return u32(Y ^ (X | (~Z)))
    raise ValueError("t out of range")


def compress_block(
    ihv: Sequence[int],
    m: Sequence[int],
) -> Tuple[int, int, int, int]:
    """
    MD5 compression function.
    Inputs:
      - ihv: (A, B, C, D) running state
      - m: 16 little-endian 32-bit message words
    Returns:
      - the next state, each word already added back into ihv
    """
    if len(ihv) != 4:
        raise ValueError("ihv must have 4 words")
    if len(m) != 16:
        raise ValueError("m must have 16 words")

    A, B, C, D = (u32(ihv[0]), u32(ihv[1]), u32(ihv[2]), u32(ihv[3]))
    a, b, c, d = A, B, C, D

    for t in range(64):
        Tt = u32(a + ft(t, b, c, d) + u32(m[K[t]]) + AC[t])
        # registers shift roles: the old d becomes the next a
        a, b, c, d = d, u32(b + rl(Tt, RC[t])), b, c

    return (u32(A + a), u32(B + b), u32(C + c), u32(D + d))


def bytes_to_words_le(block) -> List[int]:
    if len(block) != BLOCK_SIZE:
        raise ValueError("block must be 64 bytes")
    return np.frombuffer(block, dtype=LE_U32).astype(np.uint32).tolist()


def blocks_to_words_le(data) -> np.ndarray:
    """Native-order (n, 16) uint32 view of consecutive 64-byte blocks."""
    if len(data) % BLOCK_SIZE:
        raise ValueError("data length must be a multiple of 64")
    return np.frombuffer(data, dtype=LE_U32).astype(np.uint32).reshape(-1, 16)


def words_to_bytes_le(words: Sequence[int]) -> bytes:
    return np.array([u32(w) for w in words], dtype=np.uint32).astype(LE_U32).tobytes()
