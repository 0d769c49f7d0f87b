"""Human-readable size tokens ("6.9 GB") to exact byte counts.

Units are binary multiples: 1 kb == 1024 bytes.
"""

from __future__ import annotations

import re

from osm_catalog.errors import ParseError

# "&nbsp;" appears when the token is cut from raw markup, U+00A0 once an HTML
# parser has decoded it.
SIZE_SEPARATORS = ("&nbsp;", "\xa0", " ")

UNIT_MULTIPLIERS = {
    "b": 1,
    "byte": 1,
    "bytes": 1,
    "kb": 1024,
    "mb": 1024 ** 2,
    "gb": 1024 ** 3,
}

_MAGNITUDE_RE = re.compile(r"(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)


def parse_size(token: str) -> int:
    """Convert a size token such as ``"462\xa0MB"`` to bytes.

    A wrapping pair of parentheses is tolerated. Raises ParseError when the
    token has no separator, the magnitude is not a plain decimal number, or
    the unit is unknown.
    """
    text = (token or "").strip()
    if text.startswith("(") and text.endswith(")"):
        text = text[1:-1].strip()

    for sep in SIZE_SEPARATORS:
        if sep in text:
            magnitude, unit = text.split(sep, 1)
            break
    else:
        raise ParseError(f"No separator in size token {token!r}", token=token)

    magnitude = magnitude.strip()
    unit = unit.strip().lower()
    if not _MAGNITUDE_RE.fullmatch(magnitude):
        raise ParseError(f"Invalid magnitude {magnitude!r} in size token {token!r}", token=token)
    multiplier = UNIT_MULTIPLIERS.get(unit)
    if multiplier is None:
        raise ParseError(f"Unknown unit {unit!r} in size token {token!r}", token=token)

    return int(float(magnitude) * multiplier)
