from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cmp_to_key
from typing import NamedTuple

from .comparers import Comparer, resolve_comparer
from .enumerators import Enumerator, IndexedEnumerator, BufferedEnumerator, drain
from .types import *

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.set import SetAccessor
from .extensions.join import JoinAccessor
from .extensions.grouping import GroupingAccessor
from .extensions.stats import StatsAccessor
from .extensions.terminal import TerminalAccessor


ASCENDING = 1
DESCENDING = -1

# --- abstract base class ---

class IEnumerable(ABC, Generic[T]):
    @abstractmethod
    def get_enumerator(self) -> Enumerator[T]:
        """a fresh cursor over the sequence"""
        pass

# --- base enumerable implementation ---

class _BaseEnumerable(IEnumerable[T]):
    def __init__(self, enumerator_factory: Callable[[], Enumerator[T]]):
        """init with a function that builds a new enumerator when called"""
        self._enumerator_factory = enumerator_factory

    def get_enumerator(self) -> Enumerator[T]:
        return self._enumerator_factory()

    def __iter__(self) -> Iterator[T]:
        return self.get_enumerator()

# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """a lazy, linq-inspired sequence. nothing runs until an enumerator is driven."""
    def __init__(self, enumerator_factory: Callable[[], Enumerator[T]]):
        super().__init__(enumerator_factory)
        # --- initialize accessors ---
        self.set = SetAccessor(self)
        self.join = JoinAccessor(self)
        self.group = GroupingAccessor(self)
        self.stats = StatsAccessor(self)
        self.to = TerminalAccessor(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<lazy>)"

# --- grouping ---

class Grouping(Enumerable[T], Generic[K, T]):
    """the elements that share one key"""

    def __init__(self, key: K, elements: List[T]):
        super().__init__(lambda: IndexedEnumerator(elements))
        self.key = key
        self._elements = elements

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"Grouping(key={self.key!r}, items={len(self._elements)})"

# --- ordered enumerable class ---

class SortKey(NamedTuple):
    """one level of an ordering: how to get the key, which way, and how to compare"""
    key_selector: Callable[[Any], Any]
    direction: int
    comparer: Comparer


class _OrderedEnumerator(BufferedEnumerator[T]):
    label = "order_by"

    def __init__(self, source: 'Enumerable[T]', sort_keys: Tuple[SortKey, ...]):
        super().__init__()
        self._source = source
        self._sort_keys = sort_keys

    def _materialize(self) -> List[T]:
        sort_keys = self._sort_keys
        # every key is computed once per element, not once per comparison
        decorated = [(tuple(link.key_selector(item) for link in sort_keys), item)
                     for item in drain(self._source.get_enumerator())]

        def compare_items(a, b):
            for link, key_a, key_b in zip(sort_keys, a[0], b[0]):
                result = link.comparer.compare(key_a, key_b)
                if result:
                    return result * link.direction
            return 0

        # list.sort is stable: items tied on every key keep their source order
        decorated.sort(key=cmp_to_key(compare_items))
        return [item for _, item in decorated]


class OrderedEnumerable(Enumerable[T]):
    """
    represents a sorted sequence, allowing for subsequent orderings.
    then_by does not sort the already sorted result again: it returns a new
    OrderedEnumerable over the same unsorted source with one more sort key,
    and the whole key chain is applied in a single sort.
    """

    def __init__(self, source: 'Enumerable[T]', sort_keys: Tuple[SortKey, ...]):
        self._source = source
        self._sort_keys = tuple(sort_keys)
        super().__init__(lambda: _OrderedEnumerator(self._source, self._sort_keys))

    @property
    def sort_keys(self) -> Tuple[SortKey, ...]:
        return self._sort_keys

    def _extend(self, key_selector: KeySelector[T, K], direction: int,
                comparer: Union[Comparer, CompareFunc, None]) -> 'OrderedEnumerable[T]':
        link = SortKey(key_selector, direction, resolve_comparer(comparer))
        return OrderedEnumerable(self._source, self._sort_keys + (link,))

    def then_by(self, key_selector: KeySelector[T, K],
                comparer: Union[Comparer, CompareFunc, None] = None) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        return self._extend(key_selector, ASCENDING, comparer)

    def then_by_descending(self, key_selector: KeySelector[T, K],
                           comparer: Union[Comparer, CompareFunc, None] = None) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        return self._extend(key_selector, DESCENDING, comparer)
