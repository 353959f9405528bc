"""
Canonical JSON stringifier.

Pocket nodes recompute the sign document with Go's `sdk.MustSortJSON`: object
keys sorted at every depth, arrays untouched, compact separators. The bytes a
signer signs must equal that recomputation exactly, so this module renders a
restricted value tree by hand instead of trusting `json.dumps(sort_keys=True)`
with arbitrary objects.

Supported values
----------------
- None, bool, int, str
- float (finite only; rendered like JavaScript numbers, so `1.0` -> `1`)
- list / tuple (order preserved)
- dict with str or int keys (int keys rendered as their decimal string)

Strings are escaped the way Go's encoding/json escapes them (`<`, `>`, `&`,
U+2028, U+2029 and control characters as `\\u00XX`), since that is what the
node re-marshals.

Anything else (bytes, sets, Decimal, callables, custom classes) and cyclic
structures raise `MalformedValueError`.
"""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any, List, Set

from ..errors import MalformedValueError

__all__ = ["canonicalize", "stringify_object_with_sort"]

_MAX_DEPTH = 512

# encoding/json escapes these even though JSON does not require it.
_GO_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _quote(s: str) -> str:
    out = ['"']
    for ch in s:
        esc = _GO_ESCAPES.get(ch)
        if esc is not None:
            out.append(esc)
        elif ord(ch) < 0x20:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def _format_float(value: float) -> str:
    """ECMAScript Number::toString: shortest round-trip digits, integral values without a fraction."""
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    _, digits, exp = Decimal(repr(abs(value))).normalize().as_tuple()
    s = "".join(map(str, digits))
    k = len(s)
    n = exp + k  # decimal point position relative to the digit string
    if k <= n <= 21:
        return sign + s + "0" * (n - k)
    if 0 < n <= 21:
        return sign + s[:n] + "." + s[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + s
    e = n - 1
    mantissa = s if k == 1 else s[0] + "." + s[1:]
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def _key_str(k: Any) -> str:
    # bool is an int subclass and has no key rendering
    if isinstance(k, bool) or not isinstance(k, (str, int)):
        raise MalformedValueError(f"unsupported object key type: {type(k).__name__}")
    return k if isinstance(k, str) else str(k)


def _render(value: Any, out: List[str], active: Set[int], depth: int) -> None:
    if depth > _MAX_DEPTH:
        raise MalformedValueError("maximum nesting exceeded")

    if value is None or isinstance(value, (bool, str)):
        out.append(_quote(value) if isinstance(value, str) else json.dumps(value))
        return
    if isinstance(value, int):
        out.append(str(int(value)))
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise MalformedValueError(f"non-finite number: {value!r}")
        out.append(_format_float(value))
        return

    if isinstance(value, (list, tuple, dict)):
        marker = id(value)
        if marker in active:
            raise MalformedValueError("cyclic structure")
        active.add(marker)
        try:
            if isinstance(value, dict):
                items = [(_key_str(k), v) for k, v in value.items()]
                if len({k for k, _ in items}) != len(items):
                    raise MalformedValueError("duplicate object key after key normalization")
                # Go sorts map keys by byte order; UTF-8 byte order == code point order.
                items.sort(key=lambda kv: kv[0].encode("utf-8"))
                out.append("{")
                for i, (k, v) in enumerate(items):
                    if i:
                        out.append(",")
                    out.append(_quote(k))
                    out.append(":")
                    _render(v, out, active, depth + 1)
                out.append("}")
            else:
                out.append("[")
                for i, item in enumerate(value):
                    if i:
                        out.append(",")
                    _render(item, out, active, depth + 1)
                out.append("]")
        finally:
            active.discard(marker)
        return

    raise MalformedValueError(f"value of type {type(value).__name__} is not JSON serializable")


def canonicalize(value: Any) -> str:
    """
    Return the canonical JSON rendering of `value`.

    Idempotent (`canonicalize(json.loads(canonicalize(v))) == canonicalize(v)`),
    independent of key insertion order, and never reorders arrays.
    """
    out: List[str] = []
    _render(value, out, set(), 0)
    return "".join(out)


# Alias kept for callers that know the stringifier by this name.
stringify_object_with_sort = canonicalize
