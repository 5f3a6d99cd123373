r"""
'    .__  .__
'    |  | |__| ____   ______ ___.__.
'    |  | |  |/    \ / ____/<   |  |
'    |  |_|  |   |  < <_|  | \___  |
'    |____/__|___|  /\__   | / ____|
'                 \/    |__| \/
"""
import logging

# expose the main classes
from .enumerable import Enumerable, OrderedEnumerable, Grouping, SortKey, ASCENDING, DESCENDING
from .enumerators import Enumerator, EnumeratorState

# expose the factory functions
from .factories import (
    from_iterable,
    from_range,
    repeat,
    empty,
    generate,
    linqy,
    P,
)

# expose comparers, the associative container and errors
from .comparers import (
    EqualityComparer,
    Comparer,
    KeyEqualityComparer,
    KeyComparer,
    IgnoreCaseComparer,
    IGNORE_CASE,
)
from .hashing import Hash, KeyStore, NativeKeyStore, ComparerKeyStore
from .errors import LinqyError, InvalidStateError, ArgumentOutOfRangeError
from .config import Settings, get_settings, configure
from .types import HashEntry, MemoizedSource, MISSING

logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "Enumerable",
    "OrderedEnumerable",
    "Grouping",
    "SortKey",
    "ASCENDING",
    "DESCENDING",
    "Enumerator",
    "EnumeratorState",
    "from_iterable",
    "from_range",
    "repeat",
    "empty",
    "generate",
    "linqy",
    "P",
    "EqualityComparer",
    "Comparer",
    "KeyEqualityComparer",
    "KeyComparer",
    "IgnoreCaseComparer",
    "IGNORE_CASE",
    "Hash",
    "KeyStore",
    "NativeKeyStore",
    "ComparerKeyStore",
    "LinqyError",
    "InvalidStateError",
    "ArgumentOutOfRangeError",
    "Settings",
    "get_settings",
    "configure",
    "HashEntry",
    "MemoizedSource",
    "MISSING",
]
