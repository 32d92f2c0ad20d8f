"""
Parse human-readable byte sizes like "1GB", "12 mb" or "512".
"""
from pathstore.utils.coerce import to_int

# Binary multipliers, selected by the letter before the trailing "b"
_MULTIPLIERS = {"k": 1 << 10, "m": 1 << 20, "g": 1 << 30}
MAX_UINT64 = (1 << 64) - 1

def parse_size_in_bytes(size_str: str) -> int:
    """
    Converts strings like 1GB or 12 mb into an integer number of bytes.

    Bare digits are bytes. Unparseable or negative numbers give 0, and so
    does a result that would not fit in an unsigned 64-bit integer.
    """
    size_str = size_str.strip()
    last = len(size_str) - 1
    multiplier = 1

    if last > 1 and size_str[last] in "bB":
        unit = size_str[last - 1].lower()
        if unit in _MULTIPLIERS:
            multiplier = _MULTIPLIERS[unit]
            size_str = size_str[:last - 1].strip()
        else:
            size_str = size_str[:last].strip()

    size = to_int(size_str)
    if size < 0:
        size = 0

    total = size * multiplier
    if total > MAX_UINT64:
        return 0
    return total
