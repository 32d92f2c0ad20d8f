"""
Delimiter-path access to a nested document.

A PathStore wraps one dict (as produced by json.loads or yaml.safe_load, or
built by hand) and resolves keys like "event:simulator" by walking nested
mappings. Reads never raise: a missing or shadowed path is simply absent, and
the typed get_* accessors fall back to zero values.

Not thread-safe. Callers sharing a store between threads must lock around it.
"""
from collections.abc import Mapping, MutableMapping
from datetime import datetime, timedelta
import json
import logging
from typing import Any

import yaml

from pathstore.core.normalize import MISSING, assign, canonical_copy, lookup, normalize_value
from pathstore.utils import coerce
from pathstore.utils.size import parse_size_in_bytes

logger = logging.getLogger("pathstore")

DEFAULT_DELIMITER = ":"


def deep_search(m: MutableMapping, path: list[str]) -> MutableMapping:
    """
    Scan nested mappings following the keys in path and return the innermost one.

    Intermediate keys that do not exist, or hold a non-mapping value, get a new
    empty dict and the search continues from there: m may be modified!
    Read-only mappings on the way are replaced with a writable copy.
    """
    for k in path:
        nxt = lookup(m, k)
        if isinstance(nxt, MutableMapping):
            m = nxt
            continue
        if isinstance(nxt, Mapping):
            nxt = canonical_copy(nxt)
        else:
            nxt = {}
        assign(m, k, nxt)
        m = nxt
    return m


def search_map(source: Mapping, path: list[str]) -> Any:
    """Recursively look up path in source. Returns MISSING if not found."""
    if not path:
        return source

    nxt = lookup(source, path[0])
    if nxt is MISSING:
        return MISSING
    # Fast path
    if len(path) == 1:
        return nxt
    if isinstance(nxt, Mapping):
        return search_map(nxt, path[1:])
    # got a value but a nested key was expected: shadowed
    return MISSING


class PathStore:
    """
    A nested document with delimiter-path get/set and typed accessors.

    The document passed in is wrapped, not copied. Values written with set()
    are copied if they are mappings, so later changes to the caller's dict
    do not leak into the store.
    """

    def __init__(self, data: dict[str, Any] | None = None, *,
                 delimiter: str = DEFAULT_DELIMITER):
        if not delimiter:
            raise ValueError("PathStore delimiter must be a non-empty string")
        # Separates the keys used to reach a nested value in one go
        self.delimiter = delimiter
        self._data = data if data is not None else {}

    @classmethod
    def from_json(cls, raw: bytes | str, *,
                  delimiter: str = DEFAULT_DELIMITER) -> "PathStore":
        """
        Decode a JSON object into a new PathStore. Malformed input, or JSON
        that is not an object, is logged and gives an empty store.
        """
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            # ValueError covers JSONDecodeError, bad UTF-8 and over-long integers
            logger.warning("Could not decode JSON document, using an empty one: %s", e)
            return cls({}, delimiter=delimiter)
        if not isinstance(data, dict):
            logger.warning("JSON document is %s, not an object. Using an empty one.",
                           type(data).__name__)
            return cls({}, delimiter=delimiter)
        return cls(data, delimiter=delimiter)

    @classmethod
    def from_yaml(cls, raw: bytes | str, *,
                  delimiter: str = DEFAULT_DELIMITER) -> "PathStore":
        """
        Decode a YAML mapping into a new PathStore. Non-string keys are turned
        into strings. Failures are logged and give an empty store.
        """
        try:
            data = yaml.safe_load(raw)
            if isinstance(data, Mapping):
                data = canonical_copy(data)
        except (yaml.YAMLError, ValueError, RecursionError) as e:
            logger.warning("Could not decode YAML document, using an empty one: %s", e)
            return cls({}, delimiter=delimiter)
        if data is None:  # empty file
            return cls({}, delimiter=delimiter)
        if not isinstance(data, Mapping):
            logger.warning("YAML document is %s, not a mapping. Using an empty one.",
                           type(data).__name__)
            return cls({}, delimiter=delimiter)
        return cls(data, delimiter=delimiter)

    def __repr__(self) -> str:
        return f"PathStore({self._data!r}, delimiter={self.delimiter!r})"

    def __contains__(self, key: str) -> bool:
        """True if key resolves to a value, even a stored None."""
        return self._find(key) is not MISSING

    @property
    def data(self) -> dict[str, Any]:
        """The underlying document."""
        return self._data

    def _split(self, key: str) -> list[str]:
        return key.split(self.delimiter)

    # --- Read / write ---

    def set(self, key: str, value: Any) -> "PathStore":
        """
        Set the value at key, creating intermediate mappings as needed.
        Whatever was at key before is overwritten. Returns self for chaining.
        """
        value = normalize_value(value)
        path = self._split(key)
        deepest = deep_search(self._data, path[:-1])
        assign(deepest, path[-1], value)
        return self

    def _find(self, key: str) -> Any:
        path = self._split(key)
        val = search_map(self._data, path)
        if val is MISSING and len(path) > 1 and logger.isEnabledFor(logging.DEBUG):
            shadow = self.shadowed_path(key)
            if shadow:
                logger.debug("Key %r is shadowed by a value at %r", key, shadow)
        return val

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get any value by key. Mappings, lists and primitives are returned as
        stored; for a specific type use one of the get_* methods.
        Returns default if the key is absent or shadowed.
        """
        val = self._find(key)
        if val is MISSING:
            return default
        return val

    def shadowed_path(self, key: str) -> str:
        """
        The prefix of key that holds a non-mapping value, or "" if none does.
        e.g. if "foo:bar" holds 5, it shadows "foo:bar:baz".
        """
        path = self._split(key)
        for i in range(1, len(path)):
            parent = search_map(self._data, path[:i])
            if parent is MISSING:
                # not found, no need to add more path elements
                return ""
            if not isinstance(parent, Mapping):
                return self.delimiter.join(path[:i])
        return ""

    def sub(self, key: str) -> "PathStore":
        """A PathStore over the mapping at key (empty if there is none)."""
        return PathStore(self.get_string_map(key), delimiter=self.delimiter)

    # --- Typed accessors ---

    def get_string(self, key: str) -> str:
        return coerce.to_string(self.get(key))

    def get_bool(self, key: str) -> bool:
        return coerce.to_bool(self.get(key))

    def get_int(self, key: str) -> int:
        return coerce.to_int(self.get(key))

    def get_int8(self, key: str) -> int:
        return coerce.to_int8(self.get(key))

    def get_int32(self, key: str) -> int:
        return coerce.to_int32(self.get(key))

    def get_int64(self, key: str) -> int:
        return coerce.to_int64(self.get(key))

    def get_uint(self, key: str) -> int:
        return coerce.to_uint(self.get(key))

    def get_uint8(self, key: str) -> int:
        return coerce.to_uint8(self.get(key))

    def get_uint32(self, key: str) -> int:
        return coerce.to_uint32(self.get(key))

    def get_uint64(self, key: str) -> int:
        return coerce.to_uint64(self.get(key))

    def get_float64(self, key: str) -> float:
        return coerce.to_float64(self.get(key))

    def get_time(self, key: str) -> datetime:
        return coerce.to_time(self.get(key))

    def get_duration(self, key: str) -> timedelta:
        return coerce.to_duration(self.get(key))

    def get_slice(self, key: str) -> list:
        return coerce.to_slice(self.get(key))

    def get_int_slice(self, key: str) -> list[int]:
        return coerce.to_int_slice(self.get(key))

    def get_string_slice(self, key: str) -> list[str]:
        return coerce.to_string_slice(self.get(key))

    def get_string_map_slice(self, key: str) -> list[dict[str, Any]]:
        """The list at key as a list of string-keyed dicts."""
        return coerce.to_string_map_slice(self.get(key))

    def get_string_map(self, key: str) -> dict[str, Any]:
        return coerce.to_string_map(self.get(key))

    def get_string_map_string(self, key: str) -> dict[str, str]:
        return coerce.to_string_map_string(self.get(key))

    def get_string_map_string_slice(self, key: str) -> dict[str, list[str]]:
        return coerce.to_string_map_string_slice(self.get(key))

    def get_size_in_bytes(self, key: str) -> int:
        """Size at key in bytes, e.g. "1GB" -> 1073741824."""
        return parse_size_in_bytes(coerce.to_string(self.get(key)))
