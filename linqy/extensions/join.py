from __future__ import annotations
import logging
import typing
from ..config import get_settings
from ..enumerators import LazyEnumerator, Enumerator, IndexedEnumerator
from ..hashing import Hash
from ..types import *

if typing.TYPE_CHECKING:
    from ..comparers import EqualityComparer
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


def _build_lookup(inner: 'Enumerable[U]', inner_key_selector: KeySelector[U, K],
                  comparer: Optional['EqualityComparer[K]']) -> Hash[K, List[U]]:
    """bucket the inner side by key, keeping source order inside each bucket"""
    lookup = Hash(comparer)
    enumerator = inner.get_enumerator()
    count = 0
    while enumerator.move_next():
        item = enumerator.current
        lookup.append(inner_key_selector(item), item)
        count += 1
    if get_settings().log_materialization:
        logger.debug(f"join: hashed {count} inner elements into {len(lookup)} keys ({lookup.store!r})")
    return lookup


class _JoinEnumerator(LazyEnumerator[V]):
    """
    streams the inner join. the current outer element's bucket and a position in
    it survive between move_next calls, so pairs are produced one at a time.
    """

    def __init__(self, outer: Enumerator[T], inner: 'Enumerable[U]',
                 outer_key_selector: KeySelector[T, K], inner_key_selector: KeySelector[U, K],
                 result_selector: Callable[[T, U], V], comparer: Optional['EqualityComparer[K]']):
        super().__init__()
        self._outer = outer
        self._inner = inner
        self._outer_key_selector = outer_key_selector
        self._inner_key_selector = inner_key_selector
        self._result_selector = result_selector
        self._comparer = comparer
        self._lookup: Optional[Hash[K, List[U]]] = None
        self._outer_item = None
        self._bucket: Optional[List[U]] = None
        self._bucket_index = -1

    def _initialize(self) -> None:
        if self._lookup is None:
            self._lookup = _build_lookup(self._inner, self._inner_key_selector, self._comparer)

    def _advance(self) -> bool:
        while True:
            if self._bucket is not None:
                self._bucket_index += 1
                if self._bucket_index < len(self._bucket):
                    self._current = self._result_selector(self._outer_item, self._bucket[self._bucket_index])
                    return True
                self._bucket = None
            if not self._outer.move_next():
                return False
            outer_item = self._outer.current
            bucket = self._lookup.try_get(self._outer_key_selector(outer_item), MISSING)
            if bucket is not MISSING:
                self._outer_item = outer_item
                self._bucket = bucket
                self._bucket_index = -1

    def _rewind(self) -> None:
        self._outer.reset()
        self._outer_item = None
        self._bucket = None
        self._bucket_index = -1


class _GroupJoinEnumerator(LazyEnumerator[V]):
    def __init__(self, outer: Enumerator[T], inner: 'Enumerable[U]',
                 outer_key_selector: KeySelector[T, K], inner_key_selector: KeySelector[U, K],
                 result_selector: Callable[[T, 'Enumerable[U]'], V], comparer: Optional['EqualityComparer[K]']):
        super().__init__()
        self._outer = outer
        self._inner = inner
        self._outer_key_selector = outer_key_selector
        self._inner_key_selector = inner_key_selector
        self._result_selector = result_selector
        self._comparer = comparer
        self._lookup: Optional[Hash[K, List[U]]] = None

    def _initialize(self) -> None:
        if self._lookup is None:
            self._lookup = _build_lookup(self._inner, self._inner_key_selector, self._comparer)

    def _advance(self) -> bool:
        from ..enumerable import Enumerable
        if not self._outer.move_next():
            return False
        outer_item = self._outer.current
        bucket = self._lookup.try_get(self._outer_key_selector(outer_item), [])
        self._current = self._result_selector(outer_item, Enumerable(lambda: IndexedEnumerator(bucket)))
        return True

    def _rewind(self) -> None:
        self._outer.reset()


class _ZipEnumerator(LazyEnumerator[V]):
    def __init__(self, first: Enumerator[T], second: Enumerator[U], result_selector: Callable[[T, U], V]):
        super().__init__()
        self._first = first
        self._second = second
        self._result_selector = result_selector

    def _advance(self) -> bool:
        if self._first.move_next() and self._second.move_next():
            self._current = self._result_selector(self._first.current, self._second.current)
            return True
        return False

    def _rewind(self) -> None:
        self._first.reset()
        self._second.reset()


class JoinAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
             inner_key_selector: KeySelector[U, K],
             result_selector: Callable[[T, U], V],
             comparer: Optional['EqualityComparer[K]'] = None) -> 'Enumerable[V]':
        """inner join two sequences based on matching keys"""
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        inner_seq = from_iterable(inner)
        return Enumerable(lambda: _JoinEnumerator(
            self._enumerable.get_enumerator(), inner_seq,
            outer_key_selector, inner_key_selector, result_selector, comparer))

    def group_join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
                   inner_key_selector: KeySelector[U, K],
                   result_selector: Callable[[T, 'Enumerable[U]'], V],
                   comparer: Optional['EqualityComparer[K]'] = None) -> 'Enumerable[V]':
        """
        group join - pairs every outer element with the sequence of matching inner
        elements, which is empty when nothing matches
        """
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        inner_seq = from_iterable(inner)
        return Enumerable(lambda: _GroupJoinEnumerator(
            self._enumerable.get_enumerator(), inner_seq,
            outer_key_selector, inner_key_selector, result_selector, comparer))

    def left_join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
                  inner_key_selector: KeySelector[U, K],
                  result_selector: Callable[[T, Optional[U]], V],
                  default_inner: Optional[U] = None,
                  comparer: Optional['EqualityComparer[K]'] = None) -> 'Enumerable[V]':
        """left outer join - includes all outer elements even without matches"""
        return self.group_join(
            inner, outer_key_selector, inner_key_selector,
            lambda outer_item, matches: (outer_item, matches), comparer
        ).select_many(
            lambda pair: pair[1].default_if_empty(default_inner),
            lambda pair, inner_item: result_selector(pair[0], inner_item))

    def zip_with(self, other: Iterable[U], result_selector: Callable[[T, U], V]) -> 'Enumerable[V]':
        """zip two sequences with custom result selector, stopping at the shorter one"""
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        second = from_iterable(other)
        return Enumerable(lambda: _ZipEnumerator(
            self._enumerable.get_enumerator(), second.get_enumerator(), result_selector))
