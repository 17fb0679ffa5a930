# flake8: noqa
"""
Type hints for the proxyset package.

Note:
-----
To avoid circular imports if this module needs to import anything from proxyset,
the import should be accomplished conditionally under `TYPE_CHECKING` ie:

```
if TYPE_CHECKING:
    from .generic import Cursor
```
"""
from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    TypeAlias,
    TypeVar,
    runtime_checkable,
)

if TYPE_CHECKING:  # avoid circular imports
    from .generic import Cursor as _Cursor
else:
    _Cursor = Any

# =====================================================================================================================
_T_co = TypeVar("_T_co", covariant=True)

TypeWitness: TypeAlias = "type | tuple[type, ...] | None"
"""Optional runtime witness for the proxy or subject type of a `Mapper`."""


# =====================================================================================================================
# - Protocols
# =====================================================================================================================
@runtime_checkable
class SupportsCursor(Protocol[_T_co]):
    """A container that hands out a cursor capable of live element removal."""

    def cursor(self) -> _Cursor[_T_co]:
        ...
