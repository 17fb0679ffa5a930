__all__ = [
    "ProxySet",
    "ProxyIterator",
    "Mapper",
    "IdentityMapper",
    "FunctionMapper",
    "InverseMapper",
    "Cursor",
    "SetCursor",
    "IndexedSet",
    "cursor_of",
    "ProxySetError",
    "UnsupportedOperationError",
    "IllegalStateError",
    "ConcurrentModificationError",
    "MapperError",
    "constants",
]
from . import constants
from .core.iterator import ProxyIterator
from .core.mapper import FunctionMapper, IdentityMapper, InverseMapper, Mapper
from .core.proxy_set import ProxySet
from .exceptions import (
    ConcurrentModificationError,
    IllegalStateError,
    MapperError,
    ProxySetError,
    UnsupportedOperationError,
)
from .generic import Cursor, IndexedSet, SetCursor, cursor_of
