"""Counting of distinct colour values and ranking them by frequency."""

from __future__ import annotations


class ColorCounter:
    """Counts occurrences of colour values and ranks them by frequency.

    Before :meth:`rank` is called, :meth:`get_rank` gives the order in which a
    value was first seen.  After :meth:`rank`, it gives the value's position
    when sorted by decreasing count (ties keep first-seen order).  Unknown
    values have rank ``-1``.
    """

    def __init__(self) -> None:
        self._slots: dict[int, int] = {}
        self._cells: list[list[int]] = []

    def start(self) -> None:
        """Forget every value counted so far."""
        self._slots.clear()
        self._cells.clear()

    def incr(self, value: int) -> None:
        """Count one more occurrence of ``value``."""
        slot = self._slots.get(value)
        if slot is None:
            self._slots[value] = len(self._cells)
            self._cells.append([value, 1])
        else:
            self._cells[slot][1] += 1

    def distinct_count(self) -> int:
        """Number of distinct values counted since the last :meth:`start`."""
        return len(self._cells)

    def rank(self) -> None:
        """Order the values by decreasing count and assign ranks."""
        self._cells.sort(key=lambda cell: cell[1], reverse=True)
        self._slots = {value: index for index, (value, _count) in enumerate(self._cells)}

    def get_rank(self, value: int) -> int:
        """Rank (or first-seen index) of ``value``, ``-1`` if never counted."""
        return self._slots.get(value, -1)

    def count(self, value: int) -> int:
        """Number of times ``value`` was counted."""
        slot = self._slots.get(value)
        return 0 if slot is None else self._cells[slot][1]

    def __len__(self) -> int:
        return len(self._cells)