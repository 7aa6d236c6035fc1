from typing import Iterable, List, Sequence

from composition.forwarding import AbcSet, ForwardingSet
from composition.util import check_postcondition, debug


def _holds_element(s: "InstrumentedSet", x) -> bool:
    return x in s


def _holds_batches(s: "InstrumentedSet", batches: List[list]) -> bool:
    return all(x in s for batch in batches for x in batch)


class InstrumentedSet(ForwardingSet):
    """
    Count every element ever offered to a set, including ones later removed.

    Unlike ``InstrumentedHashSet``, this wraps an existing set instead of
    extending one, so the count is the same whatever the backing set does
    inside its own ``update``:

    >>> from composition.hashset import HashSet
    >>> s = InstrumentedSet(HashSet())
    >>> s.update(["Snap", "Crakle", "Pop"])
    True
    >>> s.get_add_count()
    3

    Any mutable set will do as the backing set, including one already in use:

    >>> seen = {"Snap"}
    >>> s = InstrumentedSet(seen)
    >>> s.add("Snap")
    >>> s.get_add_count(), len(seen)
    (1, 1)
    """

    add_count: int

    def __init__(self, inner: AbcSet):
        super().__init__(inner)
        self.add_count = 0

    def get_add_count(self) -> int:
        return self.add_count

    @check_postcondition(_holds_element)
    def add(self, x):
        self.add_count += 1
        return super().add(x)

    def update(self, *itrs: Iterable):
        # Materialize first: one-shot iterators must be both counted and inserted.
        return self._counted_update([list(itr) for itr in itrs])

    @check_postcondition(_holds_batches)
    def _counted_update(self, batches: List[list]):
        self.add_count += sum(map(len, batches))
        debug("Counted", self.add_count, "insertion attempts so far")
        return super().update(*batches)


def demo_forwarded_count(
    inner: AbcSet, elements: Sequence = ("Snap", "Crakle", "Pop")
) -> int:
    s = InstrumentedSet(inner)
    s.update(list(elements))
    debug("InstrumentedSet contents:", s)
    return s.get_add_count()
