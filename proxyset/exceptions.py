from __future__ import annotations


class ProxySetError(Exception):
    """Base class for every error raised by proxyset itself."""


class UnsupportedOperationError(ProxySetError, NotImplementedError):
    """The backing container does not support the requested mutation."""


class IllegalStateError(ProxySetError, RuntimeError):
    """A cursor was asked to `remove()` without a preceding `next()`."""


class ConcurrentModificationError(ProxySetError, RuntimeError):
    """The backing container was structurally modified during traversal."""


class MapperError(ProxySetError, ValueError):
    """A mapper failed to preserve subject identity across a round trip."""
