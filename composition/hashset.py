import collections.abc
from typing import Iterable, Iterator, Set

from composition.util import debug


class HashSet(collections.abc.MutableSet):
    """
    A general-purpose, concrete set, backed by a builtin ``set``.

    This class was not designed for inheritance. In particular, its bulk-insert
    operation (``update``) is implemented in terms of its single-insert operation
    (``add``), and nothing in its public contract says so. A subclass that overrides
    both will see ``add`` called once for each element of every ``update``.

    >>> s = HashSet(["b", "a"])
    >>> sorted(s)
    ['a', 'b']
    >>> s.add("a")
    False
    >>> s.update(["c", "d"])
    True
    >>> len(s)
    4
    """

    _items: Set

    def __init__(self, items: Iterable = ()):
        self._items = set()
        self.update(items)

    def __contains__(self, x: object) -> bool:
        return x in self._items

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self):
        contents = ", ".join(map(repr, self._items))
        return f"{type(self).__name__}({{{contents}}})"

    def add(self, x) -> bool:
        """
        Add ``x``, returning whether the set changed.

        post[self]: x in self
        """
        if x in self._items:
            return False
        self._items.add(x)
        return True

    def update(self, *iterables: Iterable) -> bool:
        """
        Add every element of every argument, returning whether the set changed.

        Each element goes through ``self.add``.
        """
        modified = False
        for itr in iterables:
            for x in itr:
                if self.add(x):
                    modified = True
        debug("HashSet.update changed:", modified)
        return modified

    def discard(self, x) -> None:
        self._items.discard(x)

    def remove(self, x) -> None:
        self._items.remove(x)

    def clear(self) -> None:
        self._items.clear()

    def copy(self) -> "HashSet":
        return HashSet(self._items)

    # Mirror the mutator names of the builtin set:
    def difference_update(self, *iterables: Iterable) -> None:
        self._items.difference_update(*iterables)

    def intersection_update(self, *iterables: Iterable) -> None:
        self._items.intersection_update(*iterables)

    def symmetric_difference_update(self, x: Iterable) -> None:
        self._items.symmetric_difference_update(x)

    # Non-mutating operations produce a plain HashSet:
    @classmethod
    def _from_iterable(cls, it):
        # overrides collections.abc.Set's version
        return HashSet(it)

    def issubset(self, other: Iterable) -> bool:
        return self._items.issubset(other)

    def issuperset(self, other: Iterable) -> bool:
        return self._items.issuperset(other)

    def union(self, *others: Iterable) -> "HashSet":
        return HashSet(self._items.union(*others))

    def intersection(self, *others: Iterable) -> "HashSet":
        return HashSet(self._items.intersection(*others))

    def difference(self, *others: Iterable) -> "HashSet":
        return HashSet(self._items.difference(*others))

    def symmetric_difference(self, other: Iterable) -> "HashSet":
        return HashSet(self._items.symmetric_difference(other))
