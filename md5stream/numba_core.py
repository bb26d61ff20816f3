"""
MD5 compression over runs of blocks using Numba JIT.

The kernel is a drop-in replacement for repeated `core.compress_block` calls
and produces identical states. Set MD5STREAM_NO_NUMBA=1 to disable it.
"""

from __future__ import annotations

import logging
import os
from typing import Sequence, Tuple

import numpy as np

from .core import AC, K, RC, blocks_to_words_le, u32

logger = logging.getLogger(__name__)

try:
    if os.getenv("MD5STREAM_NO_NUMBA") == "1":
        raise ImportError("MD5STREAM_NO_NUMBA=1")
    from numba import njit
except Exception as exc:  # pragma: no cover
    logger.debug("numba kernel disabled: %s", exc)
    njit = None


# Plain int tuples keep typing deterministic inside `@njit` functions
_MD5_AC_T = tuple(int(x) for x in AC)
_MD5_RC_T = tuple(int(x) for x in RC)
_MD5_G_T = tuple(int(x) for x in K)


def numba_available() -> bool:
    return njit is not None


if njit is not None:

    @njit(cache=True, inline="always")
    def _rol_u32(x: np.uint32, n: int) -> np.uint32:
        y = np.uint32(x)
        return (y << n) | (y >> (32 - n))

    @njit(cache=True)
    def md5_compress_u32(ihv: np.ndarray, block: np.ndarray) -> tuple[np.uint32, np.uint32, np.uint32, np.uint32]:
        a0 = ihv[0]
        b0 = ihv[1]
        c0 = ihv[2]
        d0 = ihv[3]
        a = a0
        b = b0
        c = c0
        d = d0
        for i in range(64):
            if i < 16:
                f = d ^ (b & (c ^ d))
            elif i < 32:
                f = c ^ (d & (b ^ c))
            elif i < 48:
                f = b ^ c ^ d
            else:
                f = c ^ (b | np.uint32(~d))

            g = _MD5_G_T[i]
            tmp = np.uint32(a + f + np.uint32(_MD5_AC_T[i]) + block[g])
            tmp = _rol_u32(tmp, _MD5_RC_T[i])
            tmp = np.uint32(tmp + b)
            a, d, c, b = d, c, b, tmp
        return (np.uint32(a0 + a), np.uint32(b0 + b), np.uint32(c0 + c), np.uint32(d0 + d))

    @njit(cache=True)
    def md5_compress_blocks(ihv: np.ndarray, blocks: np.ndarray) -> np.ndarray:
        for i in range(blocks.shape[0]):
            a, b, c, d = md5_compress_u32(ihv, blocks[i])
            ihv[0] = a
            ihv[1] = b
            ihv[2] = c
            ihv[3] = d
        return ihv


def compress_blocks(state: Sequence[int], data) -> Tuple[int, int, int, int]:
    """Fold every 64-byte block of `data` into `state` and return the new state."""
    if njit is None:
        raise RuntimeError("numba is not available (pip install numba) or disabled via MD5STREAM_NO_NUMBA=1")
    if len(state) != 4:
        raise ValueError("state must have 4 words")
    blocks = blocks_to_words_le(data)
    ihv = np.array([u32(state[0]), u32(state[1]), u32(state[2]), u32(state[3])], dtype=np.uint32)
    md5_compress_blocks(ihv, blocks)
    return (int(ihv[0]), int(ihv[1]), int(ihv[2]), int(ihv[3]))
