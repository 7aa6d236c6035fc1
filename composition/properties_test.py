import io

import pytest

from composition.properties import (
    Properties,
    destroy_by_super_class,
    inconsistency_caused_by_default_value,
)
from composition.util import PropertyTypeError


def test_Properties_accessors_disagree_on_defaults() -> None:
    def_p = Properties()
    def_p.set_property("key", "100")
    p = Properties(def_p)
    assert p.get_property("key") == "100"
    assert p.get("key") is None
    assert "key" not in p
    with pytest.raises(KeyError):
        p["key"]


def test_inconsistency_caused_by_default_value() -> None:
    raw, via_property = inconsistency_caused_by_default_value()
    assert raw is None
    assert via_property == "100"
    assert raw != via_property


def test_Properties_own_value_shadows_default() -> None:
    def_p = Properties()
    def_p.set_property("key", "100")
    p = Properties(def_p)
    assert p.set_property("key", "200") is None
    assert p.get_property("key") == "200"
    assert p.set_property("key", "300") == "200"


def test_Properties_default_chain_and_fallback() -> None:
    grandparent = Properties()
    grandparent.set_property("a", "1")
    parent = Properties(grandparent)
    parent.set_property("b", "2")
    p = Properties(parent)
    assert p.get_property("a") == "1"
    assert p.get_property("b") == "2"
    assert p.get_property("c") is None
    assert p.get_property("c", "fallback") == "fallback"


def test_Properties_raw_insert_breaks_text_accessor() -> None:
    p = Properties()
    key_obj = object()
    p.put(key_obj, "value")
    assert p[key_obj] == "value"
    with pytest.raises(PropertyTypeError):
        p.get_property(key_obj)  # type: ignore


def test_destroy_by_super_class() -> None:
    with pytest.raises(TypeError, match="cannot be cast to str"):
        destroy_by_super_class()


def test_Properties_raw_non_text_value_breaks_text_accessor() -> None:
    p = Properties()
    p["count"] = 3
    with pytest.raises(PropertyTypeError):
        p.get_property("count")


def test_Properties_own_api_refuses_non_text() -> None:
    p = Properties()
    with pytest.raises(PropertyTypeError):
        p.set_property("k", 1)  # type: ignore
    with pytest.raises(PropertyTypeError):
        p.set_property(1, "v")  # type: ignore
    assert len(p) == 0


def test_Properties_text_only_use_never_fails() -> None:
    p = Properties()
    for i in range(20):
        p.set_property(f"k{i}", f"v{i}")
    for i in range(20):
        assert p.get_property(f"k{i}") == f"v{i}"
    assert p.property_names() == frozenset(f"k{i}" for i in range(20))


def test_Properties_property_names_skip_non_text_entries() -> None:
    def_p = Properties()
    def_p.set_property("inherited", "x")
    p = Properties(def_p)
    p.set_property("own", "y")
    p.put("bad_value", 3)
    p.put(7, "bad_key")
    assert p.property_names() == frozenset({"inherited", "own"})


def test_Properties_store_and_load() -> None:
    p = Properties()
    p.set_property("plain", "value")
    p.set_property("a=b", "c:d")
    p.set_property("multi", "line\nbreak")
    out = io.StringIO()
    p.store(out, comments="saved")
    text = out.getvalue()
    assert text.startswith("#saved\n")
    loaded = Properties()
    loaded.load(io.StringIO(text))
    assert loaded == p


@pytest.mark.parametrize(
    "key,value",
    [
        ("plain", "value"),
        ("#hidden", "v"),
        ("!bang", "v"),
        (" lead", "v"),
        ("trail ", "v"),
        ("tab\tkey", "v\tx"),
        ("k", " lead"),
        ("k", "  two"),
        ("k", "tail\r"),
        ("k", "tail "),
        ("k", "back\\slash\\"),
        ("", "empty key"),
        ("a=b:c", "=x:y"),
    ],
)
def test_Properties_store_and_load_preserve_text(key: str, value: str) -> None:
    p = Properties()
    p.set_property(key, value)
    out = io.StringIO()
    p.store(out)
    loaded = Properties()
    loaded.load(io.StringIO(out.getvalue()))
    assert loaded == {key: value}


def test_Properties_load_formats() -> None:
    p = Properties()
    p.load(["# comment", "! also comment", "", "a = 1", "b:2", "  c=3  ", "flag"])
    assert p == {"a": "1", "b": "2", "c": "3  ", "flag": ""}


def test_Properties_store_fails_on_non_text_entries() -> None:
    p = Properties()
    p.put(object(), "value")
    with pytest.raises(PropertyTypeError):
        p.store(io.StringIO())
