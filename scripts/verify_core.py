#!/usr/bin/env python3
"""Check the MD5 engine against the RFC 1321 test suite and hashlib."""
from __future__ import annotations

import hashlib
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from md5stream.md5 import md5_hex
from md5stream.verify import RFC1321_VECTORS, verify_known_answers


def main() -> int:
    ok_all, bad = verify_known_answers()
    for m, expected in RFC1321_VECTORS:
        status = "FAIL" if m in bad else "OK"
        print(f"MD5('{m[:20] + (b'...' if len(m) > 20 else b'')}') -> {status}")
        if m in bad:
            print(f"  ours={bad[m]}\n  ref ={expected}")

    # lengths around the one/two padding block split
    for n in (55, 56, 63, 64, 65, 112):
        m = b"a" * n
        ours = md5_hex(m)
        ref = hashlib.md5(m).hexdigest()
        status = "OK" if ours == ref else "FAIL"
        print(f"MD5('a' * {n}) -> {status}")
        if ours != ref:
            print(f"  ours={ours}\n  ref ={ref}")
            ok_all = False

    print("verify-core:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


if __name__ == "__main__":
    raise SystemExit(main())
