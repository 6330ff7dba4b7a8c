"""Split raw buffers into line ranges without copying the bytes."""
from __future__ import annotations

from typing import Iterator


def iter_line_ranges(data: bytes, start: int = 0) -> Iterator[tuple[int, int]]:
    """Yield half-open ``(start, end)`` ranges for each line in ``data``.

    ``\\n`` and ``\\r\\n`` terminators are excluded from the range. A final line
    without a terminator is still reported; an empty trailing line is not.
    """

    length = len(data)
    cursor = start
    while cursor < length:
        newline = data.find(b"\n", cursor)
        if newline < 0:
            end = next_cursor = length
        else:
            end = newline
            next_cursor = newline + 1
        if end > cursor and data[end - 1] == 0x0D:
            end -= 1
        yield cursor, end
        cursor = next_cursor


def line_ranges(data: bytes, start: int = 0) -> list[tuple[int, int]]:
    return list(iter_line_ranges(data, start))


__all__ = ["iter_line_ranges", "line_ranges"]
