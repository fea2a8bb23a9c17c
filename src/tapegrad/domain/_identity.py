"""
Tensor identity tokens.

Every tensor receives a `UniqueId` when it is created. Gradient tapes key
their gradient slots by this token rather than by object identity, so two
tensor objects that share a token (e.g. a tensor and its tape-less split)
address the same gradient slot.

This module does not depend on any numerical backend.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, order=True)
class UniqueId:
    """
    Opaque, process-unique tensor identity.

    Equality and hashing are defined solely on the wrapped token.

    Attributes
    ----------
    value : int
        The raw token. Callers should treat it as opaque; it is exposed for
        debugging and deterministic test ordering only.
    """

    value: int

    def __repr__(self) -> str:
        return f"UniqueId({self.value})"


class IdAllocator:
    """
    Issues `UniqueId` tokens that are never reused by the same allocator.

    Tokens come from a monotonically increasing counter. The counter is
    guarded by a lock so that independent computation chains running on
    different threads can allocate from a shared allocator.

    Parameters
    ----------
    start : int, optional
        First token value to hand out. Defaults to 0.
    """

    __slots__ = ("_counter", "_lock")

    def __init__(self, start: int = 0) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> UniqueId:
        """
        Return a token never returned before by this allocator.

        Returns
        -------
        UniqueId
            A fresh identity.
        """
        with self._lock:
            return UniqueId(next(self._counter))


_DEFAULT_ALLOCATOR = IdAllocator()


def unique_id(allocator: Optional[IdAllocator] = None) -> UniqueId:
    """Allocate a fresh identity from `allocator`, or the process-wide default."""
    return (allocator or _DEFAULT_ALLOCATOR).next_id()
