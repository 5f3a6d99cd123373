"""
the cursor protocol every sequence exposes, the state machine shared by the
operator enumerators, and the source adapters that put backing data behind it.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum, auto

from .config import get_settings
from .errors import InvalidStateError
from .types import *

logger = logging.getLogger(__name__)


class EnumeratorState(Enum):
    NOT_STARTED = auto()
    INITIALIZED = auto()
    EXHAUSTED = auto()


class Enumerator(ABC, Generic[T]):
    """
    a mutable cursor over a sequence.
    move_next() advances and reports whether an element is available,
    current returns it, reset() goes back to before the first element.
    """

    @abstractmethod
    def move_next(self) -> bool:
        pass

    @property
    @abstractmethod
    def current(self) -> T:
        pass

    @abstractmethod
    def reset(self) -> None:
        pass

    # --- python iterator protocol ---

    def __iter__(self) -> 'Enumerator[T]':
        return self

    def __next__(self) -> T:
        if self.move_next():
            return self.current
        raise StopIteration


class LazyEnumerator(Enumerator[T]):
    """
    base for every enumerator in the package.

    the first move_next() runs _initialize() (NOT_STARTED -> INITIALIZED), then
    each call asks _advance() for the next element. once _advance() reports the
    end the enumerator is EXHAUSTED and stays there until reset().
    subclasses set self._current inside _advance().
    """

    def __init__(self):
        self._state = EnumeratorState.NOT_STARTED
        self._current: Any = None
        self._has_current = False

    @property
    def state(self) -> EnumeratorState:
        return self._state

    def move_next(self) -> bool:
        if self._state is EnumeratorState.EXHAUSTED:
            return False
        self._has_current = False
        if self._state is EnumeratorState.NOT_STARTED:
            self._initialize()
            self._state = EnumeratorState.INITIALIZED
        if self._advance():
            self._has_current = True
            return True
        self._state = EnumeratorState.EXHAUSTED
        self._current = None
        return False

    @property
    def current(self) -> T:
        if not self._has_current:
            raise InvalidStateError()
        return self._current

    def reset(self) -> None:
        self._rewind()
        self._state = EnumeratorState.NOT_STARTED
        self._has_current = False
        self._current = None

    def _initialize(self) -> None:
        """runs on the first move_next after construction or reset"""
        pass

    @abstractmethod
    def _advance(self) -> bool:
        pass

    def _rewind(self) -> None:
        """undo cursor state for reset(); buffers meant to survive a reset stay"""
        pass


# --- source adapters ---

class IndexedEnumerator(LazyEnumerator[T]):
    """walks anything with len() and integer indexing"""

    def __init__(self, source):
        super().__init__()
        self._source = source
        self._index = -1

    def _advance(self) -> bool:
        self._index += 1
        if self._index < len(self._source):
            self._current = self._source[self._index]
            return True
        return False

    def _rewind(self) -> None:
        self._index = -1


class MemoizedEnumerator(LazyEnumerator[T]):
    """walks a MemoizedSource, pulling from the underlying iterator only on demand"""

    def __init__(self, source: MemoizedSource[T]):
        super().__init__()
        self._source = source
        self._index = -1

    def _advance(self) -> bool:
        self._index += 1
        if self._source.has_index(self._index):
            self._current = self._source[self._index]
            return True
        return False

    def _rewind(self) -> None:
        self._index = -1


class IterableEnumerator(LazyEnumerator[T]):
    """walks a re-iterable container (set, dict, ...) by calling iter() per traversal"""

    def __init__(self, iterable: Iterable[T]):
        super().__init__()
        self._iterable = iterable
        self._iterator: Optional[Iterator[T]] = None

    def _initialize(self) -> None:
        self._iterator = iter(self._iterable)

    def _advance(self) -> bool:
        item = next(self._iterator, MISSING)
        if item is MISSING:
            return False
        self._current = item
        return True

    def _rewind(self) -> None:
        self._iterator = None


class BufferedEnumerator(LazyEnumerator[T]):
    """
    base for operators that must see their whole source before yielding.
    _materialize() runs once, on the first move_next; reset() rewinds the
    buffer without recomputing it.
    """
    label = "buffer"

    def __init__(self):
        super().__init__()
        self._buffer: Optional[List[T]] = None
        self._index = -1

    @abstractmethod
    def _materialize(self) -> List[T]:
        pass

    def _initialize(self) -> None:
        if self._buffer is None:
            self._buffer = self._materialize()
            if get_settings().log_materialization:
                logger.debug(f"{self.label}: materialized {len(self._buffer)} elements")

    def _advance(self) -> bool:
        self._index += 1
        if self._index < len(self._buffer):
            self._current = self._buffer[self._index]
            return True
        return False

    def _rewind(self) -> None:
        self._index = -1


def drain(enumerator: Enumerator[T]) -> List[T]:
    """move an enumerator to its end, collecting every element"""
    result = []
    while enumerator.move_next():
        result.append(enumerator.current)
    return result
