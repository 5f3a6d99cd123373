from __future__ import annotations
import typing
from ..enumerators import BufferedEnumerator, drain
from ..hashing import Hash
from ..types import *

if typing.TYPE_CHECKING:
    from ..comparers import EqualityComparer
    from ..enumerable import Enumerable, Grouping


class _GroupByEnumerator(BufferedEnumerator['Grouping[K, U]']):
    """groups are built on the first move_next, in order of first key occurrence, and kept across reset()"""
    label = "group_by"

    def __init__(self, source: 'Enumerable[T]', key_selector: KeySelector[T, K],
                 element_selector: Optional[Selector[T, U]], comparer: Optional['EqualityComparer[K]']):
        super().__init__()
        self._source = source
        self._key_selector = key_selector
        self._element_selector = element_selector
        self._comparer = comparer

    def _materialize(self) -> List['Grouping[K, U]']:
        from ..enumerable import Grouping
        groups = Hash(self._comparer)
        for item in drain(self._source.get_enumerator()):
            element = self._element_selector(item) if self._element_selector else item
            groups.append(self._key_selector(item), element)
        return [Grouping(entry.key, entry.element) for entry in groups.to_list()]


class GroupingAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def group_by(self, key_selector: KeySelector[T, K],
                 element_selector: Optional[Selector[T, U]] = None,
                 comparer: Optional['EqualityComparer[K]'] = None) -> 'Enumerable[Grouping[K, U]]':
        """group elements by a key. each group is a sequence with a .key"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _GroupByEnumerator(self._enumerable, key_selector, element_selector, comparer))

    def group_by_result(self, key_selector: KeySelector[T, K],
                        result_selector: Callable[[K, 'Enumerable[U]'], V],
                        element_selector: Optional[Selector[T, U]] = None,
                        comparer: Optional['EqualityComparer[K]'] = None) -> 'Enumerable[V]':
        """group by key then transform each group with result_selector(key, elements)"""
        return self.group_by(key_selector, element_selector, comparer).select(
            lambda group: result_selector(group.key, group))
