"""Growable storage shared by the line reader and the tokenizer.

Capacity at least doubles on overflow and is never reduced while a line
is being read, so arbitrarily long input is never truncated.
"""

from __future__ import annotations

import logging
from typing import Any, List

from csh.errors import AllocationError

logger = logging.getLogger(__name__)


class GrowableBuffer:
    """Sequence with an explicit capacity that grows geometrically."""

    def __init__(self, initial_capacity: int):
        """Initialize buffer.

        Args:
            initial_capacity: Number of slots allocated up front

        Raises:
            ValueError: If initial_capacity is not positive
        """
        if initial_capacity <= 0:
            raise ValueError(f"Buffer capacity must be positive, got {initial_capacity}")

        self._slots: List[Any] = [None] * initial_capacity
        self._length = 0

    @property
    def capacity(self) -> int:
        """Number of allocated slots."""
        return len(self._slots)

    def __len__(self) -> int:
        return self._length

    def append(self, item: Any) -> None:
        """Store an item, doubling capacity first if the buffer is full.

        Args:
            item: Item to store

        Raises:
            AllocationError: If the storage cannot be grown
        """
        if self._length >= len(self._slots):
            self._grow()
        self._slots[self._length] = item
        self._length += 1

    def items(self) -> List[Any]:
        """Return a copy of the used part of the buffer."""
        return self._slots[:self._length]

    def clear(self) -> None:
        """Forget stored items, keeping the allocated capacity."""
        for i in range(self._length):
            self._slots[i] = None
        self._length = 0

    def _grow(self) -> None:
        old_capacity = len(self._slots)
        try:
            self._slots.extend([None] * old_capacity)
        except MemoryError as e:
            raise AllocationError("allocation error") from e
        logger.debug(f"Buffer grown from {old_capacity} to {len(self._slots)} slots")
