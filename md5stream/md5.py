from __future__ import annotations

from .context import final, init, update


def digest(data) -> bytes:
    ctx = init()
    update(ctx, data)
    return final(ctx)


def md5_hex(data) -> str:
    return digest(data).hex()


md5_bytes = digest
