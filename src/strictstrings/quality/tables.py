"""
Static lookup tables used by the quality filters.
"""

from __future__ import annotations

from typing import FrozenSet, Tuple

# Percent-encoded separators that stand in for whitespace in URL-encoded text.
# Matched case-sensitively as exact substrings.
ENCODED_SEPARATORS: Tuple[str, ...] = (
    "%20",  # space
    "%09",  # tab
    "%0A",  # newline
    "%0D%0A",  # CRLF
    "%0D",  # carriage return
    "%0C",  # form feed
    "%5C",  # backslash
    "%3E",  # >
    "%3C",  # <
    "%3A",  # :
    "%2F",  # /
)

# Letter pairs that practically never occur in English words.
# Not applied to strings containing '.', see NgramFilter.
# fmt: off
IMPOSSIBLE_BIGRAMS: FrozenSet[str] = frozenset(
    {
        "bk", "fq", "jc", "jt", "mj", "qh", "qx", "vj", "wz", "zh",
        "bq", "fv", "jd", "jv", "mq", "qj", "qy", "vk", "xb", "zj",
        "bx", "fx", "jf", "jw", "mx", "qk", "qz", "vm", "xg", "zn",
        "cb", "fz", "jg", "jx", "mz", "ql", "sx", "vn", "xj", "zq",
        "cf", "gq", "jh", "jy", "pq", "qm", "sz", "vp", "xk", "zr",
        "cg", "gv", "jk", "jz", "pv", "qn", "tq", "vq", "xv", "zs",
        "cj", "gx", "jl", "kq", "px", "qo", "tx", "vt", "xz", "zx",
        "cp", "hk", "jm", "kv", "qb", "qp", "vb", "vw", "yq",
        "cv", "hv", "jn", "kx", "qc", "qr", "vc", "vx", "yv",
        "cw", "hx", "jp", "kz", "qd", "qs", "vd", "vz", "yz",
        "cx", "hz", "jq", "lq", "qe", "qt", "vf", "wq", "zb",
        "dx", "iy", "jr", "lx", "qf", "qv", "vg", "wv", "zc",
        "fk", "jb", "js", "mg", "qg", "qw", "vh", "wx", "zg",
    }
)
# fmt: on
