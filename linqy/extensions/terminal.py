from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from ..comparers import resolve_equality
from ..enumerators import drain
from ..errors import InvalidStateError, ArgumentOutOfRangeError
from ..types import *

if typing.TYPE_CHECKING:
    from ..comparers import EqualityComparer
    from ..enumerable import Enumerable

_NONE, _ONE, _MANY = 0, 1, 2


class TerminalAccessor(Generic[T]):
    """
    operations that drive an enumerator and return a value instead of a sequence.
    the *_or_default variants search with a sentinel, so an exception raised by a
    predicate or selector is never mistaken for "no element".
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    # --- conversions ---

    def list(self) -> List[T]:
        """convert to list"""
        return drain(self._enumerable.get_enumerator())

    def array(self) -> List[T]:
        return self.list()

    def ndarray(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.list())

    def set(self) -> Set[T]:
        """convert to set"""
        return set(self.list())

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to dictionary. later elements win on duplicate keys."""
        val_sel = value_selector if value_selector else lambda item: item
        return {key_selector(item): val_sel(item) for item in self.list()}

    def series(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self.list())

    def frame(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self.list())

    # --- quantifiers ---

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        enumerator = self._enumerable.get_enumerator()
        total = 0
        while enumerator.move_next():
            if predicate is None or predicate(enumerator.current):
                total += 1
        return total

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition"""
        return self._find_first(predicate) is not MISSING

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition"""
        enumerator = self._enumerable.get_enumerator()
        while enumerator.move_next():
            if not predicate(enumerator.current):
                return False
        return True

    def contains(self, value: T, comparer: Optional['EqualityComparer[T]'] = None) -> bool:
        """check whether the sequence holds value, scanning with the comparer"""
        equals = resolve_equality(comparer).equals
        return self.any(lambda item: equals(item, value))

    def sequence_equal(self, other: Iterable[T], comparer: Optional['EqualityComparer[T]'] = None) -> bool:
        """same length and pairwise equal elements"""
        from ..factories import from_iterable
        second = from_iterable(other)
        if second is self._enumerable:
            return True
        equals = resolve_equality(comparer).equals
        first_enumerator = self._enumerable.get_enumerator()
        second_enumerator = second.get_enumerator()
        while True:
            has_first = first_enumerator.move_next()
            has_second = second_enumerator.move_next()
            if has_first != has_second:
                return False
            if not has_first:
                return True
            if not equals(first_enumerator.current, second_enumerator.current):
                return False

    # --- element access ---

    def _find_first(self, predicate: Optional[Predicate[T]]) -> Any:
        enumerator = self._enumerable.get_enumerator()
        while enumerator.move_next():
            item = enumerator.current
            if predicate is None or predicate(item):
                return item
        return MISSING

    def _find_last(self, predicate: Optional[Predicate[T]]) -> Any:
        enumerator = self._enumerable.get_enumerator()
        found = MISSING
        while enumerator.move_next():
            item = enumerator.current
            if predicate is None or predicate(item):
                found = item
        return found

    def _find_single(self, predicate: Optional[Predicate[T]]) -> Tuple[int, Any]:
        enumerator = self._enumerable.get_enumerator()
        found = MISSING
        while enumerator.move_next():
            item = enumerator.current
            if predicate is None or predicate(item):
                if found is not MISSING:
                    return _MANY, None
                found = item
        return (_NONE, None) if found is MISSING else (_ONE, found)

    def _find_at(self, index: int) -> Any:
        if index < 0:
            return MISSING
        enumerator = self._enumerable.get_enumerator()
        position = 0
        while enumerator.move_next():
            if position == index:
                return enumerator.current
            position += 1
        return MISSING

    def first(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get first element"""
        item = self._find_first(predicate)
        if item is MISSING:
            raise InvalidStateError("sequence contains no elements" if predicate is None
                                    else "no element satisfies the condition")
        return item

    def first_or_default(self, predicate: Optional[Predicate[T]] = None,
                         default: Optional[T] = None) -> Optional[T]:
        """get first element or default"""
        item = self._find_first(predicate)
        return default if item is MISSING else item

    def last(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get last element"""
        item = self._find_last(predicate)
        if item is MISSING:
            raise InvalidStateError("sequence contains no elements" if predicate is None
                                    else "no element satisfies the condition")
        return item

    def last_or_default(self, predicate: Optional[Predicate[T]] = None,
                        default: Optional[T] = None) -> Optional[T]:
        """get last element or default"""
        item = self._find_last(predicate)
        return default if item is MISSING else item

    def single(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get single element, erroring if not exactly one"""
        outcome, item = self._find_single(predicate)
        if outcome == _NONE:
            raise InvalidStateError("sequence contains no matching elements")
        if outcome == _MANY:
            raise InvalidStateError("sequence contains more than one matching element")
        return item

    def single_or_default(self, predicate: Optional[Predicate[T]] = None,
                          default: Optional[T] = None) -> Optional[T]:
        """get single element, or default when there is not exactly one"""
        outcome, item = self._find_single(predicate)
        return item if outcome == _ONE else default

    def element_at(self, index: int) -> T:
        """get the element at a zero-based position"""
        item = self._find_at(index)
        if item is MISSING:
            raise ArgumentOutOfRangeError('index')
        return item

    def element_at_or_default(self, index: int, default: Optional[T] = None) -> Optional[T]:
        item = self._find_at(index)
        return default if item is MISSING else item

    # --- accumulation ---

    def aggregate(self, accumulator: Accumulator[Any, T], seed: Any = MISSING,
                  result_selector: Optional[Selector[Any, V]] = None) -> Any:
        """
        applies accumulator function over sequence.
        without a seed the first element starts the fold and an empty sequence is an
        error; with a seed an empty sequence folds to the seed.
        """
        enumerator = self._enumerable.get_enumerator()
        if seed is MISSING:
            if not enumerator.move_next():
                raise InvalidStateError("cannot aggregate empty sequence without seed")
            running = enumerator.current
        else:
            running = seed
        while enumerator.move_next():
            running = accumulator(running, enumerator.current)
        return result_selector(running) if result_selector else running
