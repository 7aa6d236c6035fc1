"""
A counting set built by subclassing a concrete set.

This is the cautionary version: see ``composition.instrumented`` for the one
that works.
"""

from typing import Iterable, Sequence

from composition.hashset import HashSet
from composition.util import debug


class InstrumentedHashSet(HashSet):
    """
    Count every element ever offered to the set, including ones later removed.

    Both insertion entry points are overridden, which looks reasonable, but
    ``HashSet.update`` calls ``add`` for each element, so every element that
    arrives through ``update`` is counted twice:

    >>> s = InstrumentedHashSet()
    >>> s.update(["Snap", "Crakle", "Pop"])
    True
    >>> s.get_add_count()
    6
    """

    add_count: int = 0

    def __init__(self, items: Iterable = ()):
        self.add_count = 0
        super().__init__(items)

    def get_add_count(self) -> int:
        return self.add_count

    def add(self, x) -> bool:
        self.add_count += 1
        return super().add(x)

    def update(self, *iterables: Iterable) -> bool:
        materialized = [list(itr) for itr in iterables]
        self.add_count += sum(map(len, materialized))
        return super().update(*materialized)


def demo_double_count(elements: Sequence = ("Snap", "Crakle", "Pop")) -> int:
    s = InstrumentedHashSet()
    s.update(list(elements))
    debug("InstrumentedHashSet contents:", s)
    return s.get_add_count()
