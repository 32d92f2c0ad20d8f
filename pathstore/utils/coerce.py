"""
Best-effort coercion of document values into concrete Python types.

Every ``try_*`` helper returns ``(value, ok)``. The public ``to_*`` functions
drop the flag and hand back the zero value of the target type when the
conversion fails, so a typed lookup never raises on a type mismatch.
"""
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
import json
import math
import re
from typing import Any

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

# Same spellings as Go's strconv.ParseBool, which document producers often follow
_TRUE_STRINGS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_STRINGS = {"0", "f", "F", "FALSE", "false", "False"}

# "12.000" -> "12"
_ZERO_DECIMAL = re.compile(r"^([+-]?\d+)\.0*$")
# "0755" is octal
_LEGACY_OCTAL = re.compile(r"^[+-]?0[0-7]+$")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

# --- Strings ---

def _format_float(f: float) -> str:
    """Shortest decimal form without an exponent: 1.0 -> "1", 1e21 -> "1000000000000000000000"."""
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "+Inf" if f > 0 else "-Inf"
    return format(Decimal(repr(f)).normalize(), "f")

def try_string(v: Any) -> tuple[str, bool]:
    """Helper converts primitives to str."""
    if v is None:
        return "", True
    if isinstance(v, str):
        return v, True
    if isinstance(v, (bytes, bytearray)):
        try:
            return bytes(v).decode("utf-8"), True
        except UnicodeDecodeError:
            return "", False
    if isinstance(v, bool):
        return ("true" if v else "false"), True
    if isinstance(v, int):
        return str(v), True
    if isinstance(v, float):
        return _format_float(v), True
    return "", False

def to_string(v: Any) -> str:
    return try_string(v)[0]

def stringify_key(k: Any) -> str:
    """String form of a mapping key. Keys that are not primitives fall back to str()."""
    if k is not None:
        s, ok = try_string(k)
        if ok:
            return s
    return str(k)

def string_keyed(m: Mapping) -> Mapping[str, Any]:
    """Return m keyed by strings. A mapping that already is comes back unchanged (not copied)."""
    if all(isinstance(k, str) for k in m):
        return m
    return {stringify_key(k): v for k, v in m.items()}

# --- Booleans ---

def try_bool(v: Any) -> tuple[bool, bool]:
    """Helper converts various values to bool."""
    if v is None:
        return False, True
    if isinstance(v, bool):
        return v, True
    if isinstance(v, (int, float)):
        return v != 0, True
    if isinstance(v, str):
        if v in _TRUE_STRINGS:
            return True, True
        if v in _FALSE_STRINGS:
            return False, True
    return False, False

def to_bool(v: Any) -> bool:
    return try_bool(v)[0]

# --- Integers ---

def _parse_int(s: str) -> int | None:
    """
    Parse a base-prefixed integer string ("42", "0x2A", "0o52", "052", "42.0").
    Surrounding whitespace and values outside the signed 64-bit range are rejected.
    """
    if s != s.strip():
        return None
    match = _ZERO_DECIMAL.match(s)
    if match:
        s = match.group(1)
    try:
        if _LEGACY_OCTAL.match(s):
            n = int(s, 8)
        else:
            n = int(s, 0)
    except ValueError:
        return None
    if not _INT64_MIN <= n <= _INT64_MAX:
        return None
    return n

def _wrap(n: int, bits: int, signed: bool) -> int:
    """Truncate n to a fixed-width two's complement integer."""
    n &= (1 << bits) - 1
    if signed and n >= 1 << (bits - 1):
        n -= 1 << bits
    return n

def try_int(v: Any) -> tuple[int, bool]:
    """Helper converts various values to an unbounded int."""
    if v is None:
        return 0, True
    if isinstance(v, bool):
        return int(v), True
    if isinstance(v, int):
        return v, True
    if isinstance(v, float):
        if math.isnan(v) or math.isinf(v):
            return 0, False
        return int(v), True
    if isinstance(v, str):
        n = _parse_int(v)
        if n is None:
            return 0, False
        return n, True
    return 0, False

def try_fixed_int(v: Any, bits: int, *, signed: bool = True) -> tuple[int, bool]:
    """
    Convert to an integer of the given width. Signed values wrap around,
    unsigned ones refuse negatives.
    """
    n, ok = try_int(v)
    if not ok:
        return 0, False
    if not signed and n < 0:
        return 0, False
    return _wrap(n, bits, signed), True

def to_int(v: Any) -> int:
    return try_fixed_int(v, 64)[0]

def to_int8(v: Any) -> int:
    return try_fixed_int(v, 8)[0]

def to_int32(v: Any) -> int:
    return try_fixed_int(v, 32)[0]

def to_int64(v: Any) -> int:
    return try_fixed_int(v, 64)[0]

def to_uint(v: Any) -> int:
    return try_fixed_int(v, 64, signed=False)[0]

def to_uint8(v: Any) -> int:
    return try_fixed_int(v, 8, signed=False)[0]

def to_uint32(v: Any) -> int:
    return try_fixed_int(v, 32, signed=False)[0]

def to_uint64(v: Any) -> int:
    return try_fixed_int(v, 64, signed=False)[0]

# --- Floats ---

def try_float(v: Any) -> tuple[float, bool]:
    """Helper converts various values to float."""
    if v is None:
        return 0.0, True
    if isinstance(v, (bool, int, float)):
        try:
            return float(v), True
        except OverflowError:  # int beyond float range
            return 0.0, False
    if isinstance(v, str):
        try:
            return float(v), True
        except ValueError:
            return 0.0, False
    return 0.0, False

def to_float64(v: Any) -> float:
    return try_float(v)[0]

# --- Time ---

# Tried in order after ISO 8601
_TIME_LAYOUTS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%a, %d %b %Y %H:%M:%S %z",   # RFC 1123, numeric zone
    "%a, %d %b %Y %H:%M:%S %Z",   # RFC 1123
    "%d %b %y %H:%M %z",          # RFC 822, numeric zone
    "%d %b %y %H:%M %Z",          # RFC 822
    "%A, %d-%b-%y %H:%M:%S %Z",   # RFC 850
    "%a %b %d %H:%M:%S %Y",       # ANSI C
    "%a %b %d %H:%M:%S %Z %Y",    # Unix date
    "%a %b %d %H:%M:%S %z %Y",    # Ruby date
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S",
    "%d %b %Y",
)

def _utc_if_naive(t: datetime) -> datetime:
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t

def _parse_time(s: str) -> datetime | None:
    s = s.strip()
    iso = s[:-1] + "+00:00" if s.endswith("Z") else s
    try:
        return _utc_if_naive(datetime.fromisoformat(iso))
    except ValueError:
        pass
    for layout in _TIME_LAYOUTS:
        try:
            return _utc_if_naive(datetime.strptime(s, layout))
        except ValueError:
            continue
    return None

def try_time(v: Any) -> tuple[datetime, bool]:
    """Helper converts datetimes, dates, epoch seconds and date strings to an aware datetime."""
    if isinstance(v, datetime):
        return _utc_if_naive(v), True
    if isinstance(v, date):
        return datetime(v.year, v.month, v.day, tzinfo=timezone.utc), True
    if isinstance(v, bool):
        return ZERO_TIME, False
    if isinstance(v, (int, float)):
        try:
            return datetime.fromtimestamp(v, tz=timezone.utc), True
        except (OverflowError, OSError, ValueError):
            return ZERO_TIME, False
    if isinstance(v, str):
        t = _parse_time(v)
        if t is not None:
            return t, True
    return ZERO_TIME, False

def to_time(v: Any) -> datetime:
    return try_time(v)[0]

# --- Durations ---

_DURATION_UNITS = {
    "ns": 1,
    "us": 1e3,
    "µs": 1e3,  # micro sign
    "μs": 1e3,  # greek mu
    "ms": 1e6,
    "s": 1e9,
    "m": 60e9,
    "h": 3600e9,
}
# "ms" must be tried before "m" and "s"
_DURATION_PART = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

def parse_duration(s: str) -> timedelta | None:
    """
    Parse a duration string such as "300ms", "1.5h" or "2h45m".
    Returns None if the string is not a valid duration.
    """
    sign = 1
    if s and s[0] in "+-":
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if s == "0":
        return timedelta(0)
    if not s:
        return None
    pos = 0
    total_ns = 0.0
    while pos < len(s):
        match = _DURATION_PART.match(s, pos)
        if match is None:
            return None
        total_ns += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    try:
        return timedelta(microseconds=sign * total_ns / 1000)
    except OverflowError:
        return None

def try_duration(v: Any) -> tuple[timedelta, bool]:
    """Helper converts timedeltas, nanosecond counts and duration strings to a timedelta."""
    if isinstance(v, timedelta):
        return v, True
    if isinstance(v, bool):
        return timedelta(0), False
    if isinstance(v, (int, float)):
        try:
            return timedelta(microseconds=v / 1000), True
        except (OverflowError, ValueError):
            return timedelta(0), False
    if isinstance(v, str):
        # bare numbers are nanoseconds
        if not any(c in "nsuµμmh" for c in v):
            v += "ns"
        d = parse_duration(v)
        if d is not None:
            return d, True
    return timedelta(0), False

def to_duration(v: Any) -> timedelta:
    return try_duration(v)[0]

# --- Sequences ---

def try_slice(v: Any) -> tuple[list, bool]:
    if isinstance(v, list):
        return v, True
    if isinstance(v, tuple):
        return list(v), True
    return [], False

def to_slice(v: Any) -> list:
    return try_slice(v)[0]

def try_int_slice(v: Any) -> tuple[list[int], bool]:
    """All-or-nothing: a single unconvertible element fails the whole list."""
    if not isinstance(v, (list, tuple)):
        return [], False
    out = []
    for x in v:
        n, ok = try_fixed_int(x, 64)
        if not ok:
            return [], False
        out.append(n)
    return out, True

def to_int_slice(v: Any) -> list[int]:
    return try_int_slice(v)[0]

def try_string_slice(v: Any) -> tuple[list[str], bool]:
    """Helper converts lists to list[str]; a plain string is split on whitespace."""
    if isinstance(v, (list, tuple)):
        return [to_string(x) for x in v], True
    if isinstance(v, str):
        return v.split(), True
    return [], False

def to_string_slice(v: Any) -> list[str]:
    return try_string_slice(v)[0]

# --- Mappings ---

def try_string_map(v: Any) -> tuple[dict[str, Any], bool]:
    """
    Mappings come back keyed by strings. A string holding a JSON object is
    decoded first. String-keyed dicts are returned as-is, not copied.
    """
    if isinstance(v, str):
        try:
            v = json.loads(v)
        except json.JSONDecodeError:
            return {}, False
    if isinstance(v, Mapping):
        m = string_keyed(v)
        return (m if isinstance(m, dict) else dict(m)), True
    return {}, False

def to_string_map(v: Any) -> dict[str, Any]:
    return try_string_map(v)[0]

def try_string_map_string(v: Any) -> tuple[dict[str, str], bool]:
    m, ok = try_string_map(v)
    if not ok:
        return {}, False
    return {k: to_string(val) for k, val in m.items()}, True

def to_string_map_string(v: Any) -> dict[str, str]:
    return try_string_map_string(v)[0]

def try_string_map_string_slice(v: Any) -> tuple[dict[str, list[str]], bool]:
    """Values may be lists or single strings ("a" -> ["a"])."""
    m, ok = try_string_map(v)
    if not ok:
        return {}, False
    out = {}
    for k, val in m.items():
        if isinstance(val, str):
            out[k] = [val]
        elif isinstance(val, (list, tuple)):
            out[k] = [to_string(x) for x in val]
        else:
            return {}, False
    return out, True

def to_string_map_string_slice(v: Any) -> dict[str, list[str]]:
    return try_string_map_string_slice(v)[0]

def try_string_map_slice(v: Any) -> tuple[list[dict[str, Any]], bool]:
    """Elements that are not mappings become empty dicts."""
    if not isinstance(v, (list, tuple)):
        return [], False
    return [to_string_map(u) for u in v], True

def to_string_map_slice(v: Any) -> list[dict[str, Any]]:
    return try_string_map_slice(v)[0]
