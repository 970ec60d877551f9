"""Reentrancy guard for cross-language requests."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class RequestGuard:
    """Lets one request run at a time on a resolver.

    Cross-language aggregation calls back into the host's own reference and
    implementation queries. A host that routes those queries through the same
    resolver would recurse forever; while the guard is held, nested requests
    are turned away instead.
    """

    def __init__(self) -> None:
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @contextmanager
    def hold(self) -> Iterator[bool]:
        """Yield True when the guard was acquired, False when already held.

        The guard is released on exit, including when the body raises.
        """
        if self._active:
            yield False
            return

        self._active = True
        try:
            yield True
        finally:
            self._active = False


__all__ = ["RequestGuard"]
