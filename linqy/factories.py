import typing
from collections import abc
from .enumerators import IndexedEnumerator, IterableEnumerator, MemoizedEnumerator
from .errors import ArgumentOutOfRangeError
from .types import *

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable


class _RangeView:
    """len() and indexing over an arithmetic run, without building a list"""

    def __init__(self, start: int, count: int):
        self._start = start
        self._count = count

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, index: int) -> int:
        return self._start + index


class _RepeatView:
    def __init__(self, item: Any, count: int):
        self._item = item
        self._count = count

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, index: int) -> Any:
        return self._item


def from_iterable(data: Any) -> 'Enumerable[T]':
    """
    create enumerable from data.
    sequences (list, tuple, str, range, ...) are read by index, other iterables are
    re-iterated per traversal, one-shot iterators are cached as they are pulled,
    and anything not iterable becomes a one-element sequence.
    """
    from .enumerable import Enumerable
    if isinstance(data, Enumerable):
        return data
    if isinstance(data, abc.Sequence):
        return Enumerable(lambda: IndexedEnumerator(data))
    if isinstance(data, abc.Iterator):
        source = MemoizedSource(data)
        return Enumerable(lambda: MemoizedEnumerator(source))
    if isinstance(data, abc.Iterable):
        return Enumerable(lambda: IterableEnumerator(data))
    # scalar
    singleton = [data]
    return Enumerable(lambda: IndexedEnumerator(singleton))

def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable from range"""
    from .enumerable import Enumerable
    if count < 0:
        raise ArgumentOutOfRangeError('count')
    view = _RangeView(start, count)
    return Enumerable(lambda: IndexedEnumerator(view))

def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with repeated item"""
    from .enumerable import Enumerable
    if count < 0:
        raise ArgumentOutOfRangeError('count')
    view = _RepeatView(item, count)
    return Enumerable(lambda: IndexedEnumerator(view))

def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    from .enumerable import Enumerable
    return Enumerable(lambda: IndexedEnumerator(()))

def generate(generator_func: Callable[[], T], count: int) -> 'Enumerable[T]':
    """generate a sequence by calling a function 'count' times. calls happen lazily, once per element."""
    if count < 0:
        raise ArgumentOutOfRangeError('count')
    return from_iterable(generator_func() for _ in range(count))

# --- aliases ---
linqy = from_iterable
P = from_iterable
p = from_iterable
