"""
Guarded alternatives to ``composition.properties``.

Here the table wraps a plain ``dict`` instead of extending it. Only a curated
surface is exposed, and every path that inserts is checked before the insertion is
forwarded, so nothing can reach the backing table that the accessors cannot read.
"""

from typing import Any, FrozenSet, MutableMapping, Optional

from composition.forwarding import ForwardingMap
from composition.util import PropertyTypeError, debug, describe_type, is_instance_of


class TypedMap(ForwardingMap):
    """
    A mapping that only accepts keys and values of the given types.

    Types may be plain classes or annotations such as ``Optional[str]``.

    >>> m = TypedMap(key_type=str, value_type=int)
    >>> m["a"] = 1
    >>> m["b"] = "two"
    Traceback (most recent call last):
      ...
    composition.util.PropertyTypeError: value 'two' is not of type int
    >>> dict(m)
    {'a': 1}
    """

    key_type: Any = object
    value_type: Any = object

    def __init__(
        self,
        inner: Optional[MutableMapping] = None,
        key_type: Any = None,
        value_type: Any = None,
    ):
        super().__init__({} if inner is None else inner)
        if key_type is not None:
            self.key_type = key_type
        if value_type is not None:
            self.value_type = value_type
        for key, value in self._inner.items():
            self._check(key, value)

    def _check(self, key: object, value: object) -> None:
        if not is_instance_of(key, self.key_type):
            raise PropertyTypeError(
                f"key {key!r} is not of type {describe_type(self.key_type)}"
            )
        if not is_instance_of(value, self.value_type):
            raise PropertyTypeError(
                f"value {value!r} is not of type {describe_type(self.value_type)}"
            )

    def __setitem__(self, key, value):
        self._check(key, value)
        return super().__setitem__(key, value)

    def setdefault(self, key, default=None):
        if key not in self._inner:
            self._check(key, default)
        return super().setdefault(key, default)

    def update(self, other: Any = (), **kw):
        # Check everything before forwarding, so a bad pair leaves no partial update.
        if hasattr(other, "keys"):
            pairs = [(k, other[k]) for k in other.keys()]
        else:
            pairs = [(k, v) for (k, v) in other]
        pairs.extend(kw.items())
        for key, value in pairs:
            self._check(key, value)
        return super().update(pairs)


class TextProperties(TypedMap):
    """
    A table of string properties, with an optional table of defaults behind it.

    Every accessor consults the defaults, so they always agree:

    >>> defaults = TextProperties()
    >>> defaults.set_property("key", "100")
    >>> p = TextProperties(defaults)
    >>> p.get("key"), p["key"], p.get_property("key")
    ('100', '100', '100')

    Only the table's own entries are counted by ``len()`` and visited by iteration.
    """

    key_type = str
    value_type = str

    defaults: Optional["TextProperties"]

    def __init__(
        self,
        defaults: Optional["TextProperties"] = None,
        inner: Optional[MutableMapping] = None,
    ):
        super().__init__(inner)
        self.defaults = defaults

    def __getitem__(self, key):
        try:
            return super().__getitem__(key)
        except KeyError:
            if self.defaults is None:
                raise
            return self.defaults[key]

    def __contains__(self, key: object) -> bool:
        if super().__contains__(key):
            return True
        return self.defaults is not None and key in self.defaults

    def get(self, key, default=None):
        try:
            return self[key]
        except KeyError:
            return default

    def set_property(self, key: str, value: str) -> Optional[str]:
        previous = self._inner.get(key)
        self[key] = value
        return previous

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        if not isinstance(key, str):
            raise PropertyTypeError(f"key {key!r} is not of type str")
        return self.get(key, default)

    def property_names(self) -> FrozenSet[str]:
        names = set() if self.defaults is None else set(self.defaults.property_names())
        names.update(self._inner.keys())
        debug("Found", len(names), "property names")
        return frozenset(names)
