from __future__ import annotations
import typing
from ..comparers import resolve_equality
from ..enumerators import LazyEnumerator, Enumerator
from ..hashing import Hash
from ..types import *

if typing.TYPE_CHECKING:
    from ..comparers import EqualityComparer
    from ..enumerable import Enumerable


class _ConcatEnumerator(LazyEnumerator[T]):
    def __init__(self, first: Enumerator[T], second: Enumerator[T]):
        super().__init__()
        self._first = first
        self._second = second
        self._active = first

    def _advance(self) -> bool:
        if self._active.move_next():
            self._current = self._active.current
            return True
        if self._active is self._first:
            self._active = self._second
            return self._advance()
        return False

    def _rewind(self) -> None:
        self._first.reset()
        self._second.reset()
        self._active = self._first


class _DistinctEnumerator(LazyEnumerator[T]):
    """first-occurrence filter. the Hash is built on the first move_next and emptied by reset()."""

    def __init__(self, parent: Enumerator[T], comparer: Optional['EqualityComparer[T]']):
        super().__init__()
        self._parent = parent
        self._comparer = comparer
        self._seen: Optional[Hash[T, bool]] = None

    def _initialize(self) -> None:
        if self._seen is None:
            self._seen = Hash(self._comparer)

    def _advance(self) -> bool:
        while self._parent.move_next():
            item = self._parent.current
            if self._seen.put(item, True):
                self._current = item
                return True
        return False

    def _rewind(self) -> None:
        self._parent.reset()
        if self._seen is not None:
            self._seen.empty()


class SetAccessor(Generic[T]):
    """
    provides distinct and the set-theoretic operators. every operator takes an
    optional equality comparer; without one, native equality is used.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def distinct(self, comparer: Optional['EqualityComparer[T]'] = None) -> 'Enumerable[T]':
        """return distinct elements. preserves order of first appearance."""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _DistinctEnumerator(self._enumerable.get_enumerator(), comparer))

    def concat(self, other: Iterable[T]) -> 'Enumerable[T]':
        """concatenate with another sequence, preserving all elements and order."""
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        second = from_iterable(other)
        return Enumerable(lambda: _ConcatEnumerator(self._enumerable.get_enumerator(), second.get_enumerator()))

    def union(self, other: Iterable[T], comparer: Optional['EqualityComparer[T]'] = None) -> 'Enumerable[T]':
        """return the order-preserving union of two sequences (distinct elements)."""
        return self.concat(other).set.distinct(comparer)

    def intersect(self, other: Iterable[T], comparer: Optional['EqualityComparer[T]'] = None) -> 'Enumerable[T]':
        """
        return the distinct elements of this sequence that also occur in the other.
        membership is a scan of the other sequence per element, o(n * m).
        """
        is_member = _membership(other, comparer)
        return self.distinct(comparer).where(is_member)

    def except_(self, other: Iterable[T], comparer: Optional['EqualityComparer[T]'] = None) -> 'Enumerable[T]':
        """return elements from this sequence that do not occur in the other, o(n * m)."""
        is_member = _membership(other, comparer)
        return self._enumerable.where(lambda item: not is_member(item))


def _membership(other: Iterable[T], comparer: Optional['EqualityComparer[T]']) -> Predicate[T]:
    """a predicate scanning `other` for item. equals() always gets this sequence's element first."""
    from ..factories import from_iterable
    second = from_iterable(other)
    equals = resolve_equality(comparer).equals
    return lambda item: second.to.any(lambda candidate: equals(item, candidate))
