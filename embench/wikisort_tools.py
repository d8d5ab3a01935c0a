"""Building blocks of the in-place, stable block merge sort."""

from __future__ import annotations

from collections.abc import Callable, MutableSequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Item:
    """A value tagged with its original position, to check sort stability."""

    value: int
    index: int


@dataclass
class Range:
    """A half-open span ``[start, end)`` of positions within an array."""

    start: int = 0
    end: int = 0

    def length(self) -> int:
        """Return the number of positions the span covers."""
        return self.end - self.start


Compare = Callable[[Item, Item], bool]


def item_less(first: Item, second: Item) -> bool:
    """Order items by value alone, ignoring their original position."""
    return first.value < second.value


def floor_power_of_two(value: int) -> int:
    """Return the largest power of two not above ``value`` (63 -> 32, 64 -> 64).

    Zero and negative values give zero.
    """
    if value <= 0:
        return 0
    return 1 << (value.bit_length() - 1)


def binary_first(
    array: MutableSequence[Item], index: int, span: Range, compare: Compare
) -> int:
    """Return the first position in ``span`` whose item is not less than ``array[index]``."""
    start, end = span.start, span.end - 1
    target = array[index]
    while start < end:
        mid = start + (end - start) // 2
        if compare(array[mid], target):
            start = mid + 1
        else:
            end = mid
    if start == span.end - 1 and compare(array[start], target):
        start += 1
    return start


def binary_last(
    array: MutableSequence[Item], index: int, span: Range, compare: Compare
) -> int:
    """Return the position after the last item in ``span`` not greater than ``array[index]``."""
    start, end = span.start, span.end - 1
    target = array[index]
    while start < end:
        mid = start + (end - start) // 2
        if not compare(target, array[mid]):
            start = mid + 1
        else:
            end = mid
    if start == span.end - 1 and not compare(target, array[start]):
        start += 1
    return start


def insertion_sort(array: MutableSequence[Item], span: Range, compare: Compare) -> None:
    """Stably sort the items of ``span`` in place."""
    for i in range(span.start + 1, span.end):
        item = array[i]
        j = i
        while j > span.start and compare(item, array[j - 1]):
            array[j] = array[j - 1]
            j -= 1
        array[j] = item


def reverse(array: MutableSequence[Item], span: Range) -> None:
    """Reverse the order of the items in ``span``."""
    array[span.start:span.end] = array[span.start:span.end][::-1]


def block_swap(
    array: MutableSequence[Item], start1: int, start2: int, block_size: int
) -> None:
    """Swap ``block_size`` items starting at ``start1`` with those at ``start2``, pair by pair."""
    for first, second in zip(
        range(start1, start1 + block_size), range(start2, start2 + block_size)
    ):
        array[first], array[second] = array[second], array[first]


def rotate(
    array: MutableSequence[Item],
    amount: int,
    span: Range,
    cache: MutableSequence[Item],
    cache_size: int,
) -> None:
    """Rotate ``span`` left by ``amount`` (right when negative).

    ``[0 1 2 3]`` rotated by 1 becomes ``[1 2 3 0]``. When the smaller side
    fits in ``cache_size`` items it is staged in ``cache``.
    """
    if span.length() == 0:
        return
    split = span.start + amount if amount >= 0 else span.end + amount
    first = Range(span.start, split)
    second = Range(split, span.end)
    len1, len2 = first.length(), second.length()

    if len1 <= len2:
        if len1 <= cache_size:
            cache[:len1] = array[first.start:first.end]
            array[first.start:first.start + len2] = array[second.start:second.end]
            array[first.start + len2:second.end] = cache[:len1]
            return
    elif len2 <= cache_size:
        cache[:len2] = array[second.start:second.end]
        array[second.end - len1:second.end] = array[first.start:first.end]
        array[first.start:first.start + len2] = cache[:len2]
        return

    reverse(array, first)
    reverse(array, second)
    reverse(array, span)


def wiki_merge(
    array: MutableSequence[Item],
    buffer: Range,
    a: Range,
    b: Range,
    compare: Compare,
    cache: MutableSequence[Item],
    cache_size: int,
) -> None:
    """Merge the sorted runs ``a`` and ``b`` into the span starting at ``a.start``.

    If ``a`` fits in ``cache_size`` its items are read from the front of
    ``cache``; otherwise they are read from ``buffer``, whose original
    contents end up back in ``buffer`` in some order.
    """
    len_a, len_b = a.length(), b.length()
    if len_a <= cache_size:
        a_pos, b_pos, insert = 0, b.start, a.start
        if len_b > 0 and len_a > 0:
            while True:
                if not compare(array[b_pos], cache[a_pos]):
                    array[insert] = cache[a_pos]
                    a_pos += 1
                    insert += 1
                    if a_pos == len_a:
                        break
                else:
                    array[insert] = array[b_pos]
                    b_pos += 1
                    insert += 1
                    if b_pos == b.end:
                        break
        remaining = len_a - a_pos
        array[insert:insert + remaining] = cache[a_pos:len_a]
        return

    a_count = b_count = insert = 0
    if len_b > 0 and len_a > 0:
        while True:
            if not compare(array[b.start + b_count], array[buffer.start + a_count]):
                target, source = a.start + insert, buffer.start + a_count
                array[target], array[source] = array[source], array[target]
                a_count += 1
                insert += 1
                if a_count >= len_a:
                    break
            else:
                target, source = a.start + insert, b.start + b_count
                array[target], array[source] = array[source], array[target]
                b_count += 1
                insert += 1
                if b_count >= len_b:
                    break
    block_swap(array, buffer.start + a_count, a.start + insert, len_a - a_count)