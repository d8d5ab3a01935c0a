"""Small deterministic replacements for the library routines the benchmarks use."""

from __future__ import annotations

RAND_MAX = (1 << 15) - 1
"""Largest value :meth:`Random.rand` can return."""

VERIFY_DOUBLE_EPS = 1.0e-13
VERIFY_FLOAT_EPS = 1.0e-5

_SEED_MASK = (1 << 31) - 1
_MULTIPLIER = 1103515245
_INCREMENT = 12345

ALIGNMENT = 8
"""Allocation granularity of :class:`Heap`, the size of a pointer."""


def float_eq(expected: float, actual: float) -> bool:
    """Return True if two single-precision results agree within tolerance."""
    return abs(expected - actual) < VERIFY_FLOAT_EPS


def double_eq(expected: float, actual: float) -> bool:
    """Return True if two double-precision results agree within tolerance."""
    return abs(expected - actual) < VERIFY_DOUBLE_EPS


class Random:
    """Linear congruential generator yielding values in ``[0, RAND_MAX]``.

    The same multiplier and offset are used on every platform, so a given
    seed always produces the same sequence.
    """

    def __init__(self, seed: int = 0) -> None:
        self._state = 0
        self.seed(seed)

    def seed(self, new_seed: int) -> None:
        """Restart the sequence from ``new_seed``."""
        if new_seed < 0:
            raise ValueError("seed must be non-negative")
        self._state = new_seed & 0xFFFFFFFF

    def rand(self) -> int:
        """Return the next value of the sequence."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) & _SEED_MASK
        return self._state >> 16


class HeapExhausted(MemoryError):
    """Raised when an allocation does not fit in the remaining heap."""


class Heap:
    """A bump allocator over a fixed block of memory that never reclaims space.

    Allocations are handed out as offsets into :attr:`memory` and are padded
    so that every allocation starts on an :data:`ALIGNMENT` boundary.
    """

    def __init__(self, size: int) -> None:
        if size < 0 or size % ALIGNMENT:
            raise ValueError(f"heap size must be a non-negative multiple of {ALIGNMENT}")
        self.size = size
        self.memory = bytearray(size)
        self._next = 0
        self.requested = 0

    def allocate(self, size: int) -> int | None:
        """Reserve ``size`` bytes and return their offset, or None for zero bytes."""
        if size < 0:
            raise ValueError("size must be non-negative")
        if size == 0:
            return None
        next_offset = self._next + size
        self.requested += size
        remainder = next_offset % ALIGNMENT
        if remainder:
            padding = ALIGNMENT - remainder
            next_offset += padding
            self.requested += padding
        if next_offset > self.size:
            raise HeapExhausted(
                f"cannot allocate {size} bytes: {self.size - self._next} bytes left"
            )
        offset = self._next
        self._next = next_offset
        return offset

    def allocate_zeroed(self, count: int, size: int) -> int | None:
        """Reserve ``count * size`` zero-filled bytes and return their offset."""
        total = count * size
        offset = self.allocate(total)
        if offset is not None:
            self.memory[offset:offset + total] = bytes(total)
        return offset

    def reallocate(self, offset: int | None, size: int) -> int | None:
        """Move a block to a fresh allocation of ``size`` bytes, copying its contents."""
        if offset is None:
            return None
        new_offset = self.allocate(size)
        if new_offset is not None:
            chunk = self.memory[offset:offset + size]
            self.memory[new_offset:new_offset + len(chunk)] = chunk
        return new_offset

    def free(self, offset: int | None) -> None:
        """Release a block.

        Memory is never reclaimed; the offset is only checked to lie within
        the space handed out so far.
        """
        if offset is None:
            return
        if not 0 <= offset < self._next:
            raise ValueError(f"offset {offset} was not allocated from this heap")

    def within_budget(self) -> bool:
        """Return True if no allocation has asked for more than the heap holds."""
        return self.requested <= self.size