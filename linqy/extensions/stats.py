from __future__ import annotations
import typing
import numpy as np
from ..errors import InvalidStateError
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

Number = Union[int, float]


class StatsAccessor(Generic[T]):
    """numeric folds. sum/average/min/max are thin wrappers over to.aggregate()."""

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def _values(self, selector: Optional[Selector[T, Any]]) -> 'Enumerable[Any]':
        return self._enumerable.select(selector) if selector else self._enumerable

    def sum(self, selector: Optional[Selector[T, Number]] = None) -> Number:
        """calc sum. an empty sequence sums to 0"""
        return self._values(selector).to.aggregate(lambda running, x: running + x, 0)

    def average(self, selector: Optional[Selector[T, Number]] = None) -> float:
        """calc average"""
        count, total = self._values(selector).to.aggregate(
            lambda running, x: (running[0] + 1, running[1] + x), (0, 0))
        if count == 0:
            raise InvalidStateError("cannot calculate average of empty sequence")
        return total / count

    def min(self, selector: Optional[Selector[T, Any]] = None) -> Any:
        """find minimum (of the projected values when a selector is given)"""
        # an empty sequence raises InvalidStateError from aggregate
        return self._values(selector).to.aggregate(lambda running, x: x if x < running else running)

    def max(self, selector: Optional[Selector[T, Any]] = None) -> Any:
        """find maximum (of the projected values when a selector is given)"""
        return self._values(selector).to.aggregate(lambda running, x: x if x > running else running)

    def median(self, selector: Optional[Selector[T, Number]] = None) -> float:
        """calculate median value"""
        values = self._values(selector).to.list()
        if not values:
            raise InvalidStateError("cannot calculate median of empty sequence")
        return np.median(values).item()

    def std_dev(self, selector: Optional[Selector[T, Number]] = None) -> float:
        """population standard deviation (ddof=0, as numpy/pandas default)"""
        values = self._values(selector).to.list()
        if not values:
            raise InvalidStateError("cannot calculate standard deviation of empty sequence")
        return np.std(values).item()
