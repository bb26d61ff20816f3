from __future__ import annotations

import os
from typing import Tuple

from .core import (
    BLOCK_SIZE,
    DIGEST_SIZE,
    MASK32,
    MASK64,
    MD5_IV,
    bytes_to_words_le,
    compress_block,
    words_to_bytes_le,
)
from .numba_core import compress_blocks, numba_available


class FinalizedContextError(RuntimeError):
    """Raised when a context is used after `final()` without a fresh `init()`."""


def _jit_min_blocks() -> int:
    return int(os.getenv("MD5STREAM_JIT_MIN_BLOCKS", "16"))


class Md5Context:
    """
    Streaming MD5 state.

    Feed data with `update()` in chunks of any size, then call `final()` once
    to get the 16-byte digest. `final()` wipes the context; call `init()` to
    reuse it.
    """

    name = "md5"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self) -> None:
        self._buffer = bytearray(BLOCK_SIZE)
        self.init()

    def init(self) -> None:
        self._state: Tuple[int, int, int, int] = MD5_IV
        self._buffer[:] = bytes(BLOCK_SIZE)
        self._bytes = 0
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_live(self, op: str) -> None:
        if self._finalized:
            raise FinalizedContextError(f"{op}() called on a finalized context; call init() first")

    def update(self, data) -> None:
        self._check_live("update")
        view = memoryview(data).cast("B")
        n = len(view)

        # free space in the pending buffer, always 1..64
        t = BLOCK_SIZE - (self._bytes & 0x3F)
        self._bytes = (self._bytes + n) & MASK64

        if n < t:
            off = BLOCK_SIZE - t
            self._buffer[off : off + n] = view
            return

        self._buffer[BLOCK_SIZE - t :] = view[:t]
        self._state = compress_block(self._state, bytes_to_words_le(self._buffer))
        pos = t

        whole = (n - pos) // BLOCK_SIZE
        if whole:
            end = pos + whole * BLOCK_SIZE
            self._state = self._compress_run(view[pos:end], whole)
            pos = end

        self._buffer[: n - pos] = view[pos:]

    def _compress_run(self, run: memoryview, whole: int) -> Tuple[int, int, int, int]:
        if whole >= _jit_min_blocks() and numba_available():
            return compress_blocks(self._state, run)
        state = self._state
        for off in range(0, whole * BLOCK_SIZE, BLOCK_SIZE):
            state = compress_block(state, bytes_to_words_le(run[off : off + BLOCK_SIZE]))
        return state

    def final(self) -> bytes:
        self._check_live("final")
        buf = self._buffer
        count = self._bytes & 0x3F

        # there is always room for the 0x80 marker
        buf[count] = 0x80
        p = count + 1
        pad = 56 - 1 - count
        if pad < 0:
            # marker overran byte 56: the length goes into an extra block
            buf[p:] = bytes(pad + 8)
            self._state = compress_block(self._state, bytes_to_words_le(buf))
            buf[:] = bytes(BLOCK_SIZE)
            p = 0
            pad = 56
        buf[p : p + pad] = bytes(pad)

        m = bytes_to_words_le(buf)
        bit_len = (self._bytes << 3) & MASK64
        m[14] = bit_len & MASK32
        m[15] = bit_len >> 32
        self._state = compress_block(self._state, m)

        out = words_to_bytes_le(self._state)
        self._wipe()
        return out

    def _wipe(self) -> None:
        self._state = (0, 0, 0, 0)
        self._buffer[:] = bytes(BLOCK_SIZE)
        self._bytes = 0
        self._finalized = True

    def copy(self) -> Md5Context:
        self._check_live("copy")
        other = type(self).__new__(type(self))
        other._state = self._state
        other._buffer = bytearray(self._buffer)
        other._bytes = self._bytes
        other._finalized = False
        return other


def init() -> Md5Context:
    return Md5Context()


def update(ctx: Md5Context, data) -> None:
    ctx.update(data)


def final(ctx: Md5Context) -> bytes:
    return ctx.final()
