"""
Canonical form for document nodes.

Decoders disagree about what a mapping looks like: JSON only produces string
keys, YAML happily produces int, bool or date keys. A node is canonical when
every mapping in it is a dict keyed by strings. Values are brought into that
shape once, when they enter a PathStore, rather than at every lookup.
"""
from collections.abc import Mapping, MutableMapping
from typing import Any

from pathstore.utils.coerce import stringify_key

# Marks "no value at this path"; None is a legitimate stored value
MISSING = object()


def canonical_copy(m: Mapping) -> dict[str, Any]:
    """
    Deep-copy a mapping into canonical form. Nested mappings are copied too,
    key casing is left as-is. Sequences and primitives are shared, not copied.
    """
    copied: dict[str, Any] = {}
    for key, val in m.items():
        if isinstance(val, Mapping):
            copied[stringify_key(key)] = canonical_copy(val)
        else:
            copied[stringify_key(key)] = val
    return copied


def normalize_value(value: Any) -> Any:
    """Canonical copy of a mapping; any other value passes through."""
    if isinstance(value, Mapping):
        return canonical_copy(value)
    return value


def lookup(m: Mapping, key: str) -> Any:
    """
    Get key from a mapping that may not be keyed by strings.
    Returns MISSING when no key (or stringified key) matches.
    """
    if key in m:
        return m[key]
    if all(isinstance(k, str) for k in m):
        return MISSING
    # e.g. {80: "http"} from YAML, looked up as "80"
    for k, v in m.items():
        if not isinstance(k, str) and stringify_key(k) == key:
            return v
    return MISSING


def assign(m: MutableMapping, key: str, value: Any) -> None:
    """
    Set m[key] = value. Non-string keys that stringify to key are removed
    first, so {80: "x"} becomes {"80": value} rather than holding both.
    """
    if key not in m:
        aliases = [k for k in m if not isinstance(k, str) and stringify_key(k) == key]
        for k in aliases:
            del m[k]
    m[key] = value
