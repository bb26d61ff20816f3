from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from .md5 import digest

# RFC 1321 appendix A.5 test suite
RFC1321_VECTORS: List[Tuple[bytes, str]] = [
    (b"", "d41d8cd98f00b204e9800998ecf8427e"),
    (b"a", "0cc175b9c0f1b6a831c399e269772661"),
    (b"abc", "900150983cd24fb0d6963f7d28e17f72"),
    (b"message digest", "f96b697d7cb7938d525a2f31aaf161d0"),
    (b"abcdefghijklmnopqrstuvwxyz", "c3fcd3d76192e4007dfb496cca67e13b"),
    (
        b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
        "d174ab98d277d9f5a5611c2c9f419d9f",
    ),
    (b"1234567890" * 8, "57edf4a22be3c955ac49da2e2107b67a"),
]


def verify_known_answers(
    digest_fn: Callable[[bytes], bytes] = digest,
) -> Tuple[bool, Dict[bytes, str]]:
    bad: Dict[bytes, str] = {}
    for msg, expected in RFC1321_VECTORS:
        got = digest_fn(msg).hex()
        if got != expected:
            bad[msg] = got
    return len(bad) == 0, bad
