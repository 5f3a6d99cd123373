from __future__ import annotations
from .types import *


class EqualityComparer(Generic[T]):
    """decides whether two values are equal. the base class uses ==."""

    _default: Optional['EqualityComparer[Any]'] = None

    def equals(self, a: T, b: T) -> bool:
        return a == b

    @classmethod
    def default(cls) -> 'EqualityComparer[Any]':
        """the process-wide comparer used when an operation gets none"""
        if EqualityComparer._default is None:
            EqualityComparer._default = EqualityComparer()
        return EqualityComparer._default


class Comparer(Generic[T]):
    """orders two values. the base class uses < and >."""

    _default: Optional['Comparer[Any]'] = None

    def compare(self, a: T, b: T) -> int:
        return -1 if a < b else (1 if a > b else 0)

    @classmethod
    def default(cls) -> 'Comparer[Any]':
        """the process-wide comparer used when an ordering gets none"""
        if Comparer._default is None:
            Comparer._default = Comparer()
        return Comparer._default


class KeyEqualityComparer(EqualityComparer[T]):
    """equality on a projection of each value, e.g. KeyEqualityComparer(str.lower)"""

    def __init__(self, key: Selector[T, Any]):
        self._key = key

    def equals(self, a: T, b: T) -> bool:
        return self._key(a) == self._key(b)


class KeyComparer(Comparer[T]):
    """ordering on a projection of each value"""

    def __init__(self, key: Selector[T, Any]):
        self._key = key

    def compare(self, a: T, b: T) -> int:
        return super().compare(self._key(a), self._key(b))


class _FunctionComparer(Comparer[T]):
    """adapts a plain cmp-style function to the Comparer interface"""

    def __init__(self, func: CompareFunc[T]):
        self._func = func

    def compare(self, a: T, b: T) -> int:
        return self._func(a, b)


class IgnoreCaseComparer(EqualityComparer[T], Comparer[T]):
    """string equality and ordering that ignore case. non-strings compare natively."""

    @staticmethod
    def _fold(value):
        return value.casefold() if isinstance(value, str) else value

    def equals(self, a: T, b: T) -> bool:
        return self._fold(a) == self._fold(b)

    def compare(self, a: T, b: T) -> int:
        return Comparer.compare(self, self._fold(a), self._fold(b))


IGNORE_CASE = IgnoreCaseComparer()


def resolve_equality(comparer: Optional[EqualityComparer[T]]) -> EqualityComparer[T]:
    """the given equality comparer, or the default one"""
    return EqualityComparer.default() if comparer is None else comparer


def resolve_comparer(comparer: Union[Comparer[T], CompareFunc[T], None]) -> Comparer[T]:
    """the given ordering comparer (plain functions are wrapped), or the default one"""
    if comparer is None:
        return Comparer.default()
    if hasattr(comparer, 'compare'):
        return comparer
    if callable(comparer):
        return _FunctionComparer(comparer)
    raise TypeError(f"expected a Comparer or a two-argument function, got {type(comparer).__name__}")
