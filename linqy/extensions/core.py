from __future__ import annotations
import typing
from ..comparers import resolve_comparer
from ..enumerators import LazyEnumerator, BufferedEnumerator, Enumerator, drain
from ..types import *

if typing.TYPE_CHECKING:
    from ..comparers import Comparer
    from ..enumerable import Enumerable, OrderedEnumerable

# --- operator enumerators ---

class _WhereEnumerator(LazyEnumerator[T]):
    def __init__(self, parent: Enumerator[T], predicate: Predicate[T]):
        super().__init__()
        self._parent = parent
        self._predicate = predicate

    def _advance(self) -> bool:
        while self._parent.move_next():
            item = self._parent.current
            if self._predicate(item):
                self._current = item
                return True
        return False

    def _rewind(self) -> None:
        self._parent.reset()


class _SelectEnumerator(LazyEnumerator[U]):
    def __init__(self, parent: Enumerator[T], selector: Callable[..., U], with_index: bool = False):
        super().__init__()
        self._parent = parent
        self._selector = selector
        self._with_index = with_index
        self._index = -1

    def _advance(self) -> bool:
        if not self._parent.move_next():
            return False
        self._index += 1
        item = self._parent.current
        self._current = self._selector(item, self._index) if self._with_index else self._selector(item)
        return True

    def _rewind(self) -> None:
        self._parent.reset()
        self._index = -1


class _SelectManyEnumerator(LazyEnumerator[V]):
    def __init__(self, parent: Enumerator[T], collection_selector: Selector[T, Iterable[U]],
                 result_selector: Optional[Callable[[T, U], V]]):
        super().__init__()
        self._parent = parent
        self._collection_selector = collection_selector
        self._result_selector = result_selector
        self._item = None
        self._inner: Optional[Enumerator[U]] = None

    def _advance(self) -> bool:
        from ..factories import from_iterable
        while True:
            if self._inner is not None and self._inner.move_next():
                sub_item = self._inner.current
                self._current = (self._result_selector(self._item, sub_item)
                                 if self._result_selector else sub_item)
                return True
            if not self._parent.move_next():
                self._inner = None
                return False
            self._item = self._parent.current
            self._inner = from_iterable(self._collection_selector(self._item)).get_enumerator()

    def _rewind(self) -> None:
        self._parent.reset()
        self._item = None
        self._inner = None


class _TakeEnumerator(LazyEnumerator[T]):
    def __init__(self, parent: Enumerator[T], count: int):
        super().__init__()
        self._parent = parent
        self._count = count
        self._taken = 0

    def _initialize(self) -> None:
        self._taken = 0

    def _advance(self) -> bool:
        # never pull past the last element that will be yielded
        if self._taken >= self._count or not self._parent.move_next():
            return False
        self._taken += 1
        self._current = self._parent.current
        return True

    def _rewind(self) -> None:
        self._parent.reset()


class _TakeWhileEnumerator(LazyEnumerator[T]):
    """stops at the first failing element. EXHAUSTED keeps it closed until reset()."""

    def __init__(self, parent: Enumerator[T], predicate: Predicate[T]):
        super().__init__()
        self._parent = parent
        self._predicate = predicate

    def _advance(self) -> bool:
        if self._parent.move_next():
            item = self._parent.current
            if self._predicate(item):
                self._current = item
                return True
        return False

    def _rewind(self) -> None:
        self._parent.reset()


class _SkipWhileEnumerator(LazyEnumerator[T]):
    """the skipped prefix is consumed on the first move_next, then elements are forwarded"""

    def __init__(self, parent: Enumerator[T], predicate: Callable[..., bool], with_index: bool = False):
        super().__init__()
        self._parent = parent
        self._predicate = predicate
        self._with_index = with_index
        self._pending = False

    def _initialize(self) -> None:
        self._pending = False
        index = 0
        while self._parent.move_next():
            item = self._parent.current
            keep_skipping = self._predicate(item, index) if self._with_index else self._predicate(item)
            if not keep_skipping:
                self._pending = True
                return
            index += 1

    def _advance(self) -> bool:
        if self._pending:
            self._pending = False
        elif not self._parent.move_next():
            return False
        self._current = self._parent.current
        return True

    def _rewind(self) -> None:
        self._parent.reset()


class _ReverseEnumerator(BufferedEnumerator[T]):
    label = "reverse"

    def __init__(self, source: 'Enumerable[T]'):
        super().__init__()
        self._source = source

    def _materialize(self) -> List[T]:
        data = drain(self._source.get_enumerator())
        data.reverse()
        return data


class _DefaultIfEmptyEnumerator(LazyEnumerator[T]):
    def __init__(self, parent: Enumerator[T], default_value: T):
        super().__init__()
        self._parent = parent
        self._default_value = default_value
        self._emitted = False
        self._defaulted = False

    def _initialize(self) -> None:
        self._emitted = False
        self._defaulted = False

    def _advance(self) -> bool:
        if self._defaulted:
            return False
        if self._parent.move_next():
            self._emitted = True
            self._current = self._parent.current
            return True
        if not self._emitted:
            self._defaulted = True
            self._current = self._default_value
            return True
        return False

    def _rewind(self) -> None:
        self._parent.reset()

# --- operations ---

class _CoreOperations(Generic[T]):
    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _WhereEnumerator(self.get_enumerator(), predicate))

    def select(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _SelectEnumerator(self.get_enumerator(), selector))

    def select_with_index(self: 'Enumerable[T]', selector: Callable[[T, int], U]) -> 'Enumerable[U]':
        """project each element to a new form, using the element's index"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _SelectEnumerator(self.get_enumerator(), selector, with_index=True))

    def select_many(self: 'Enumerable[T]', collection_selector: Selector[T, Iterable[U]],
                    result_selector: Optional[Callable[[T, U], V]] = None) -> 'Enumerable[V]':
        """
        project each element to a sequence and flatten the results.
        with a result_selector, each (element, sub_element) pair is projected instead.
        """
        from ..enumerable import Enumerable
        return Enumerable(lambda: _SelectManyEnumerator(self.get_enumerator(), collection_selector, result_selector))

    def order_by(self: 'Enumerable[T]', key_selector: Callable[[T], K],
                 comparer: Union[Comparer, CompareFunc, None] = None) -> 'OrderedEnumerable[T]':
        """sort elements by a key"""
        from ..enumerable import OrderedEnumerable, SortKey, ASCENDING
        return OrderedEnumerable(self, (SortKey(key_selector, ASCENDING, resolve_comparer(comparer)),))

    def order_by_descending(self: 'Enumerable[T]', key_selector: Callable[[T], K],
                            comparer: Union[Comparer, CompareFunc, None] = None) -> 'OrderedEnumerable[T]':
        """sort elements by a key in descending order"""
        from ..enumerable import OrderedEnumerable, SortKey, DESCENDING
        return OrderedEnumerable(self, (SortKey(key_selector, DESCENDING, resolve_comparer(comparer)),))

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _TakeEnumerator(self.get_enumerator(), count))

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        from ..enumerable import Enumerable
        if count <= 0:
            return self
        return Enumerable(lambda: _SkipWhileEnumerator(
            self.get_enumerator(), lambda _, index: index < count, with_index=True))

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _TakeWhileEnumerator(self.get_enumerator(), predicate))

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _SkipWhileEnumerator(self.get_enumerator(), predicate))

    def reverse(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """inverts the order of the elements in a sequence"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _ReverseEnumerator(self))

    def append(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """appends a value to the end of the sequence"""
        return self.set.concat([element])

    def prepend(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """adds a value to the beginning of the sequence"""
        from ..factories import from_iterable
        return from_iterable([element]).set.concat(self)

    def default_if_empty(self: 'Enumerable[T]', default_value: T = None) -> 'Enumerable[T]':
        """returns the elements of a sequence, or a default value in a singleton collection if the sequence is empty"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _DefaultIfEmptyEnumerator(self.get_enumerator(), default_value))

    def of_type(self: 'Enumerable[T]', type_filter: Type[U]) -> 'Enumerable[U]':
        """filters the elements of a sequence based on a specified type"""
        # the type hint Type[U] ensures the user passes a class/type, not an instance
        return self.where(lambda item: isinstance(item, type_filter))
