"""
Tests for PathStore path resolution: get, set, shadowing and normalization.
"""
import logging
from types import MappingProxyType

import pytest

from pathstore.core.store import PathStore

def test_get_missing_is_none():
    """Nothing stored means nothing found, at any depth."""
    store = PathStore()
    assert store.get("name") is None
    assert store.get("a:b:c") is None
    assert store.get("a:b", default="fallback") == "fallback"
    assert "a" not in store

def test_set_then_get():
    store = PathStore()
    store.set("name", "jack")
    assert store.get("name") == "jack"
    assert store.data["name"] == "jack"

def test_set_is_chainable():
    store = PathStore().set("a", 1).set("b:c", 2)
    assert store.get("a") == 1
    assert store.get("b:c") == 2

def test_overwrite():
    store = PathStore()
    store.set("a", 1)
    store.set("a", 2)
    assert store.get("a") == 2

def test_overwrite_replaces_mapping():
    store = PathStore()
    store.set("a:b", 1)
    store.set("a", [1, 2])
    assert store.get("a") == [1, 2]
    assert store.get("a:b") is None

def test_shadowed_path_is_absent():
    """A plain value at "a" hides everything below "a"."""
    store = PathStore()
    store.set("a", 5)
    assert store.get("a:b") is None
    assert "a:b" not in store
    assert store.shadowed_path("a:b") == "a"
    assert store.shadowed_path("a:b:c") == "a"

def test_shadowed_path_diagnostic():
    store = PathStore({"a": {"b": "leaf"}})
    assert store.shadowed_path("a:b:c") == "a:b"
    assert store.shadowed_path("a:b") == ""
    assert store.shadowed_path("x:y") == ""
    assert store.shadowed_path("a") == ""

def test_auto_vivification():
    store = PathStore()
    store.set("a:b:c", 1)
    assert isinstance(store.data["a"], dict)
    assert isinstance(store.data["a"]["b"], dict)
    assert store.data["a"]["b"]["c"] == 1

    store.set("a", "x")
    assert store.get("a:b:c") is None
    assert store.get("a") == "x"

def test_set_replaces_plain_values_on_the_way():
    """Writing below a plain value turns it into a mapping."""
    store = PathStore({"a": 5})
    store.set("a:b", 1)
    assert store.data == {"a": {"b": 1}}

def test_set_keeps_siblings():
    store = PathStore({"a": {"keep": True}})
    store.set("a:b:c", 1)
    assert store.get("a:keep") is True
    assert store.get("a:b:c") == 1

def test_set_copies_mappings():
    """Changing the caller's dict after set() must not change the store."""
    store = PathStore()
    source = {"inner": {"x": 1}, "Mixed": "Case"}
    store.set("cfg", source)
    source["inner"]["x"] = 2
    source["new"] = "value"

    assert store.get("cfg:inner:x") == 1
    assert store.get("cfg:new") is None
    # key casing is kept
    assert store.get("cfg:Mixed") == "Case"
    assert store.get("cfg:mixed") is None

def test_set_stringifies_mapping_keys():
    store = PathStore()
    store.set("m", {1: {"a": 2}, False: "no"})
    assert store.data["m"] == {"1": {"a": 2}, "false": "no"}
    assert store.get("m:1:a") == 2

def test_get_non_string_keys():
    """Mappings keyed by ints or bools are reachable by their string form."""
    store = PathStore({"ports": {80: "http", True: "on"}})
    assert store.get("ports:80") == "http"
    assert store.get("ports:true") == "on"
    assert store.get("ports:443") is None

def test_set_through_non_string_key_replaces_it():
    """Writing "p:80:..." over an int key 80 leaves a single "80" key."""
    store = PathStore({"p": {80: "x"}})
    store.set("p:80:y", 1)
    assert store.data["p"] == {"80": {"y": 1}}
    assert store.get("p:80:y") == 1

    store = PathStore({"p": {80: "x", 443: "tls"}})
    store.set("p:80", "http")
    assert store.data["p"] == {443: "tls", "80": "http"}
    assert store.get_string_map("p") == {"443": "tls", "80": "http"}

def test_set_descends_into_non_string_key():
    store = PathStore({"p": {80: {"name": "http"}}})
    store.set("p:80:secure", False)
    assert store.data["p"] == {80: {"name": "http", "secure": False}}

def test_write_through_read_only_mapping():
    store = PathStore({"ro": MappingProxyType({"a": 1})})
    assert store.get("ro:a") == 1
    store.set("ro:b", 2)
    assert store.get("ro:a") == 1
    assert store.get("ro:b") == 2

def test_stored_none_is_present():
    store = PathStore().set("empty", None)
    assert "empty" in store
    assert store.get("empty", default="x") is None

def test_get_returns_values_verbatim():
    doc = {"list": [1, {"a": 2}], "map": {"k": "v"}, "num": 1.5}
    store = PathStore(doc)
    assert store.get("list") is doc["list"]
    assert store.get("map") is doc["map"]
    assert store.get("num") == 1.5

def test_constructor_wraps_without_copy():
    doc = {"a": 1}
    store = PathStore(doc)
    store.set("b", 2)
    assert doc == {"a": 1, "b": 2}

def test_empty_segments_are_keys():
    store = PathStore()
    store.set("a::b", 1)
    assert store.data == {"a": {"": {"b": 1}}}
    assert store.get("a::b") == 1
    store.set("", "root-empty")
    assert store.get("") == "root-empty"

def test_custom_delimiter():
    store = PathStore(delimiter=".")
    store.set("a.b", 1)
    store.set("c:d", 2)
    assert store.get("a.b") == 1
    assert store.data["c:d"] == 2

def test_multi_character_delimiter():
    store = PathStore(delimiter="::")
    store.set("a::b", 1)
    assert store.data == {"a": {"b": 1}}

def test_empty_delimiter_is_rejected():
    with pytest.raises(ValueError, match="delimiter"):
        PathStore(delimiter="")

def test_sub_store():
    store = PathStore({"outer": {"inner": {"x": 1}}}, delimiter="/")
    sub = store.sub("outer")
    assert sub.delimiter == "/"
    assert sub.get("inner/x") == 1
    assert PathStore().sub("missing").data == {}

# --- Construction from documents ---

def test_from_json_end_to_end(sample_store: PathStore):
    assert sample_store.get_bool("event:simulator") is True

    client_context = PathStore(sample_store.get_string_map_slice("clientContext")[1])
    assert client_context.get_int("payload:offsetInMilliseconds") == 1023785

def test_from_json_accepts_str():
    store = PathStore.from_json('{"a": {"b": "c"}}')
    assert store.get("a:b") == "c"

@pytest.mark.parametrize("raw", [
    b"not json",
    b"[1, 2]",
    b"",
    b"\xff\xfe{",
    b'{"a":' + b"[" * 100000 + b"]" * 100000 + b"}",  # nested too deep to decode
    b'{"n": ' + b"1" * 5000 + b"}",  # integer too long to convert
])
def test_from_json_failure_gives_empty_store(raw, caplog):
    with caplog.at_level(logging.WARNING, logger="pathstore"):
        store = PathStore.from_json(raw)
    assert store.data == {}
    assert store.get("a") is None
    assert "empty one" in caplog.text

def test_from_yaml_normalizes_keys():
    store = PathStore.from_yaml("server:\n  ports:\n    80: http\n  enabled: yes\n")
    assert store.data["server"]["ports"] == {"80": "http"}
    assert store.get("server:ports:80") == "http"
    assert store.get_bool("server:enabled") is True

def test_from_yaml_failures(caplog):
    with caplog.at_level(logging.WARNING, logger="pathstore"):
        assert PathStore.from_yaml("a: [unclosed").data == {}
        assert PathStore.from_yaml("- just\n- a list\n").data == {}
    assert "YAML" in caplog.text
    assert PathStore.from_yaml("").data == {}

def test_shadowed_lookup_logs_at_debug(caplog):
    store = PathStore({"a": 5})
    with caplog.at_level(logging.DEBUG, logger="pathstore"):
        assert store.get("a:b") is None
    assert "shadowed" in caplog.text

def test_from_yaml_too_deep_gives_empty_store(caplog):
    raw = "a: " + "{b: " * 5000 + "1" + "}" * 5000
    with caplog.at_level(logging.WARNING, logger="pathstore"):
        store = PathStore.from_yaml(raw)
    assert store.data == {}
    assert "empty one" in caplog.text
