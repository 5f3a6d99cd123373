"""
an associative container whose key equality is pluggable.

python dicts only honour __hash__/__eq__, which is not enough when a query
supplies its own equality comparer or uses unhashable keys (lists, dicts).
Hash delegates storage to a key-store strategy chosen once at construction:

- NativeKeyStore: native equality. hashable keys are found in O(1) through a
  dict; unhashable keys are found with a linear == scan.
- ComparerKeyStore: a custom comparer's equals(). always a linear scan, so
  each lookup is O(n). hashing here would change what "equal" means.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .comparers import EqualityComparer
from .config import get_settings
from .types import *

logger = logging.getLogger(__name__)


class KeyStore(ABC, Generic[K, V]):
    """storage and key-equality strategy behind a Hash"""

    @abstractmethod
    def find(self, key: K) -> Optional[HashEntry[K, V]]:
        pass

    @abstractmethod
    def add(self, entry: HashEntry[K, V]) -> None:
        pass

    @abstractmethod
    def entries(self) -> List[HashEntry[K, V]]:
        """every binding, in insertion order"""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self.entries())


class NativeKeyStore(KeyStore[K, V]):
    def __init__(self):
        self._entries: List[HashEntry[K, V]] = []
        self._hashed: Dict[K, HashEntry[K, V]] = {}
        self._unhashable: List[HashEntry[K, V]] = []

    @staticmethod
    def _is_hashable(key: Any) -> bool:
        try:
            hash(key)
        except TypeError:
            return False
        return True

    def find(self, key: K) -> Optional[HashEntry[K, V]]:
        if self._is_hashable(key):
            return self._hashed.get(key)
        for entry in self._unhashable:
            if entry.key == key:
                return entry
        return None

    def add(self, entry: HashEntry[K, V]) -> None:
        if self._is_hashable(entry.key):
            self._hashed[entry.key] = entry
        else:
            self._unhashable.append(entry)
        self._entries.append(entry)

    def entries(self) -> List[HashEntry[K, V]]:
        return self._entries

    def clear(self) -> None:
        self._entries = []
        self._hashed = {}
        self._unhashable = []

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"NativeKeyStore(hashed={len(self._hashed)}, scanned={len(self._unhashable)})"


class ComparerKeyStore(KeyStore[K, V]):
    def __init__(self, comparer: EqualityComparer[K]):
        self._comparer = comparer
        self._entries: List[HashEntry[K, V]] = []
        self._warned = False

    @property
    def comparer(self) -> EqualityComparer[K]:
        return self._comparer

    def find(self, key: K) -> Optional[HashEntry[K, V]]:
        equals = self._comparer.equals
        for entry in self._entries:
            if equals(entry.key, key):
                return entry
        return None

    def add(self, entry: HashEntry[K, V]) -> None:
        self._entries.append(entry)
        threshold = get_settings().scan_warning_threshold
        if threshold and not self._warned and len(self._entries) > threshold:
            self._warned = True
            logger.warning(
                f"linear-scan key store passed {threshold} keys using "
                f"{type(self._comparer).__name__}; each lookup is O(n)")

    def entries(self) -> List[HashEntry[K, V]]:
        return self._entries

    def clear(self) -> None:
        self._entries = []
        self._warned = False

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ComparerKeyStore(comparer={type(self._comparer).__name__}, keys={len(self._entries)})"


def key_store_for(comparer: Optional[EqualityComparer[K]] = None) -> KeyStore[K, Any]:
    """the key store matching an equality comparer (None means native equality)"""
    if comparer is None or comparer is EqualityComparer.default():
        return NativeKeyStore()
    return ComparerKeyStore(comparer)


class Hash(Generic[K, V]):
    """key -> element container with the equality rule of its key store"""

    def __init__(self, comparer: Optional[EqualityComparer[K]] = None,
                 store: Optional[KeyStore[K, V]] = None):
        if comparer is not None and store is not None:
            raise TypeError("pass either a comparer or a key store, not both")
        self._store = store if store is not None else key_store_for(comparer)

    @property
    def store(self) -> KeyStore[K, V]:
        return self._store

    def look_up(self, key: K, func: Callable[[Any], Tuple]) -> Any:
        """
        the primitive every other operation is built on.
        func receives the element bound to key, or MISSING if there is none, and
        returns (result,) or (result, replacement). a replacement is stored,
        inserting the key if it was absent. returns result.
        """
        entry = self._store.find(key)
        outcome = func(MISSING if entry is None else entry.element)
        if len(outcome) > 1:
            if entry is None:
                self._store.add(HashEntry(key, outcome[1]))
            else:
                entry.element = outcome[1]
        return outcome[0]

    def key_exists(self, key: K) -> bool:
        return self.look_up(key, lambda element: (element is not MISSING,))

    def get(self, key: K) -> V:
        """the element bound to key. raises KeyError when absent."""
        element = self.look_up(key, lambda element: (element,))
        if element is MISSING:
            raise KeyError(key)
        return element

    def try_get(self, key: K, default: Any = None) -> Any:
        element = self.look_up(key, lambda element: (element,))
        return default if element is MISSING else element

    def put(self, key: K, value: V, overwrite: bool = False) -> bool:
        """insert when absent, replace when present and overwrite is set. returns whether a write happened."""
        def write(element):
            if element is MISSING or overwrite:
                return True, value
            return (False,)
        return self.look_up(key, write)

    def append(self, key: K, element: Any) -> bool:
        """add element to the list bound to key, creating it if needed. returns whether the key was new."""
        def add_to_bucket(bucket):
            if bucket is MISSING:
                return True, [element]
            bucket.append(element)
            return (False,)
        return self.look_up(key, add_to_bucket)

    def to_list(self) -> List[HashEntry[K, V]]:
        return list(self._store.entries())

    def keys(self) -> List[K]:
        return [entry.key for entry in self._store.entries()]

    def empty(self) -> None:
        self._store.clear()

    def __contains__(self, key: K) -> bool:
        return self.key_exists(key)

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[HashEntry[K, V]]:
        return iter(self.to_list())

    def __repr__(self) -> str:
        return f"Hash({self._store!r})"
