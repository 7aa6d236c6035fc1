"""
Reusable forwarding wrappers.

A forwarding wrapper holds exactly one backing collection and implements the whole
collection contract by calling the identical operation on it and returning the
result untouched. It has no semantics of its own, so a subclass may override a few
entry points without depending on how the backing collection is built internally.

The wrapper does not own a copy: mutations through the wrapper are visible in the
backing collection, and vice versa.
"""

import collections.abc
from typing import Any, Iterable, Iterator, MutableMapping

from typing_extensions import Protocol, runtime_checkable

from composition.util import debug, name_of_type

AbcSet = collections.abc.Set
AbcMutableSet = collections.abc.MutableSet


@runtime_checkable
class SupportsSetMethods(Protocol):
    """
    The named set methods ``ForwardingSet`` calls on its backing set.

    ``collections.abc.MutableSet`` only guarantees the operators, so these are
    checked separately. ``set`` and ``HashSet`` provide all of them.
    """

    def add(self, x) -> Any:
        ...

    def update(self, *iterables: Iterable) -> Any:
        ...

    def difference_update(self, *iterables: Iterable) -> Any:
        ...

    def intersection_update(self, *iterables: Iterable) -> Any:
        ...

    def symmetric_difference_update(self, other: Iterable) -> Any:
        ...

    def union(self, *others: Iterable) -> Any:
        ...

    def intersection(self, *others: Iterable) -> Any:
        ...

    def difference(self, *others: Iterable) -> Any:
        ...

    def symmetric_difference(self, other: Iterable) -> Any:
        ...

    def issubset(self, other: Iterable) -> bool:
        ...

    def issuperset(self, other: Iterable) -> bool:
        ...


def _unwrap(x: object) -> object:
    # Builtin sets and dicts only compare with their own kind, so hand them
    # the backing collection rather than another wrapper.
    while isinstance(x, (ForwardingSet, ForwardingMap)):
        x = x._inner
    return x


class ForwardingSet(AbcMutableSet):
    """
    A mutable set that forwards every operation to another set.

    >>> backing = {1, 2}
    >>> s = ForwardingSet(backing)
    >>> s.add(3)
    >>> sorted(backing)
    [1, 2, 3]
    >>> s == {1, 2, 3}
    True
    >>> s |= {4}
    >>> type(s).__name__, len(backing)
    ('ForwardingSet', 4)
    """

    _inner: Any

    def __init__(self, inner: AbcSet):
        if not (isinstance(inner, AbcSet) and isinstance(inner, SupportsSetMethods)):
            raise TypeError(
                f"cannot forward to '{name_of_type(type(inner))}'; "
                "a mutable set with the named set methods is required"
            )
        self._inner = inner
        debug("Forwarding to", name_of_type(type(inner)))

    # queries
    def __contains__(self, x: object) -> bool:
        return self._inner.__contains__(x)

    def __iter__(self) -> Iterator:
        return self._inner.__iter__()

    def __len__(self) -> int:
        return self._inner.__len__()

    def __bool__(self) -> bool:
        return bool(self._inner)

    def __repr__(self):
        return repr(self._inner)

    def __str__(self):
        return str(self._inner)

    def __hash__(self):
        return hash(self._inner)

    def __le__(self, x):
        return self._inner.__le__(_unwrap(x))

    def __lt__(self, x):
        return self._inner.__lt__(_unwrap(x))

    def __eq__(self, x):
        return self._inner.__eq__(_unwrap(x))

    def __ne__(self, x):
        return self._inner.__ne__(_unwrap(x))

    def __gt__(self, x):
        return self._inner.__gt__(_unwrap(x))

    def __ge__(self, x):
        return self._inner.__ge__(_unwrap(x))

    def isdisjoint(self, x: Iterable) -> bool:
        return self._inner.isdisjoint(_unwrap(x))

    def issubset(self, x: Iterable) -> bool:
        return self._inner.issubset(_unwrap(x))

    def issuperset(self, x: Iterable) -> bool:
        return self._inner.issuperset(_unwrap(x))

    # operations that produce a new set (of the backing set's kind)
    def union(self, *itrs: Iterable):
        return self._inner.union(*map(_unwrap, itrs))

    def intersection(self, *itrs: Iterable):
        return self._inner.intersection(*map(_unwrap, itrs))

    def difference(self, *itrs: Iterable):
        return self._inner.difference(*map(_unwrap, itrs))

    def symmetric_difference(self, x: Iterable):
        return self._inner.symmetric_difference(_unwrap(x))

    def __or__(self, x):
        return self._inner.__or__(_unwrap(x))

    def __ror__(self, x):
        return self._inner.__ror__(_unwrap(x))

    def __and__(self, x):
        return self._inner.__and__(_unwrap(x))

    def __rand__(self, x):
        return self._inner.__rand__(_unwrap(x))

    def __xor__(self, x):
        return self._inner.__xor__(_unwrap(x))

    def __rxor__(self, x):
        return self._inner.__rxor__(_unwrap(x))

    def __sub__(self, x):
        return self._inner.__sub__(_unwrap(x))

    def __rsub__(self, x):
        return self._inner.__rsub__(_unwrap(x))

    # mutation operations
    def add(self, x):
        return self._inner.add(x)

    def update(self, *itrs: Iterable):
        return self._inner.update(*itrs)

    def discard(self, x) -> None:
        return self._inner.discard(x)

    def remove(self, x) -> None:
        return self._inner.remove(x)

    def pop(self):
        return self._inner.pop()

    def clear(self) -> None:
        return self._inner.clear()

    def difference_update(self, *itrs: Iterable) -> None:
        return self._inner.difference_update(*map(_unwrap, itrs))

    def intersection_update(self, *itrs: Iterable) -> None:
        return self._inner.intersection_update(*map(_unwrap, itrs))

    def symmetric_difference_update(self, x: Iterable) -> None:
        return self._inner.symmetric_difference_update(_unwrap(x))

    # In-place operators keep the name bound to the wrapper.
    # |= goes through self.update so that bulk insertion has a single entry point.
    def __ior__(self, x):
        if not isinstance(x, AbcSet):
            return NotImplemented
        self.update(x)
        return self

    def __iand__(self, x):
        if not isinstance(x, AbcSet):
            return NotImplemented
        self.intersection_update(x)
        return self

    def __ixor__(self, x):
        if not isinstance(x, AbcSet):
            return NotImplemented
        self.symmetric_difference_update(x)
        return self

    def __isub__(self, x):
        if not isinstance(x, AbcSet):
            return NotImplemented
        self.difference_update(x)
        return self


_MISSING = object()


class ForwardingMap(collections.abc.MutableMapping):
    """
    A mutable mapping that forwards every operation to another mapping.

    >>> backing = {"a": 1}
    >>> m = ForwardingMap(backing)
    >>> m["b"] = 2
    >>> backing
    {'a': 1, 'b': 2}
    >>> m.get("c", 0)
    0
    """

    _inner: MutableMapping

    def __init__(self, inner: MutableMapping):
        if not isinstance(inner, collections.abc.MutableMapping):
            raise TypeError(f"cannot forward to '{name_of_type(type(inner))}'")
        self._inner = inner

    def __getitem__(self, key):
        return self._inner.__getitem__(key)

    def __setitem__(self, key, value):
        return self._inner.__setitem__(key, value)

    def __delitem__(self, key):
        return self._inner.__delitem__(key)

    def __iter__(self) -> Iterator:
        return self._inner.__iter__()

    def __len__(self) -> int:
        return self._inner.__len__()

    def __contains__(self, key: object) -> bool:
        return self._inner.__contains__(key)

    def __eq__(self, other):
        return self._inner.__eq__(_unwrap(other))

    def __ne__(self, other):
        return self._inner.__ne__(_unwrap(other))

    def __hash__(self):
        return hash(self._inner)

    def __repr__(self):
        return repr(self._inner)

    def __str__(self):
        return str(self._inner)

    def get(self, key, default=None):
        return self._inner.get(key, default)

    def keys(self):
        return self._inner.keys()

    def values(self):
        return self._inner.values()

    def items(self):
        return self._inner.items()

    def pop(self, key, default=_MISSING):
        if default is _MISSING:
            return self._inner.pop(key)
        return self._inner.pop(key, default)

    def popitem(self):
        return self._inner.popitem()

    def clear(self) -> None:
        return self._inner.clear()

    def setdefault(self, key, default=None):
        return self._inner.setdefault(key, default)

    def update(self, other: Any = (), **kw):
        if isinstance(other, collections.abc.Mapping):
            other = _unwrap(other)
        return self._inner.update(other, **kw)
