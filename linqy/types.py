from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
CompareFunc = Callable[[T, T], int]
Accumulator = Callable[[U, T], U]


class _Missing:
    """sentinel type for 'no value' where None is a legitimate value"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool: return False

    def __repr__(self) -> str: return "MISSING"


MISSING: Any = _Missing()


class HashEntry(Generic[K, V]):
    """a (key, element) binding stored in a Hash"""

    def __init__(self, key: K, element: V):
        self.key = key
        self.element = element

    def __eq__(self, other) -> bool:
        if not isinstance(other, HashEntry):
            return NotImplemented
        return self.key == other.key and self.element == other.element

    def __repr__(self) -> str:
        return f"HashEntry(key={self.key!r}, element={self.element!r})"


class MemoizedSource(Generic[T]):
    """
    caches the elements of a one-shot iterator as they are pulled.
    every enumerator over the same source reads through the same cache, so a
    generator can be traversed more than once and unbounded ones stay lazy.
    """

    def __init__(self, iterator: Iterator[T]):
        self._source_iterator = iterator
        self._cache: List[T] = []
        self._is_fully_enumerated = False

    def _materialize_to_index(self, target_index: int):
        """materialize the cache up to (and including) the target index"""
        while len(self._cache) <= target_index and not self._is_fully_enumerated:
            try:
                self._cache.append(next(self._source_iterator))
            except StopIteration:
                self._is_fully_enumerated = True

    def has_index(self, index: int) -> bool:
        self._materialize_to_index(index)
        return index < len(self._cache)

    def __getitem__(self, index: int) -> T:
        if not self.has_index(index):
            raise IndexError("index out of range")
        return self._cache[index]

    @property
    def cached_count(self) -> int: return len(self._cache)

    def __repr__(self) -> str:
        return f"MemoizedSource(cached={len(self._cache)}, complete={self._is_fully_enumerated})"
