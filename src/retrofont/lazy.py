"""Write-once glyph cells and the shared lazy glyph source."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, Sequence, TypeVar

from .glyph import Glyph

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
L = TypeVar("L")

_UNSET = object()


class OnceCell(Generic[T]):
    """Value computed at most once and then shared by every reader.

    Concurrent first readers serialise on a lock; readers arriving after the
    value is published take the lock-free path.
    """

    __slots__ = ("_value", "_lock")

    def __init__(self) -> None:
        self._value: object = _UNSET
        self._lock = threading.Lock()

    @property
    def is_set(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T | None:
        value = self._value
        return None if value is _UNSET else value  # type: ignore[return-value]

    def get_or_init(self, factory: Callable[[], T]) -> T:
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                self._value = factory()
            return self._value  # type: ignore[return-value]


class LazyGlyphSource(Generic[L]):
    """Immutable raw bytes plus a per-slot locator table and decode cache.

    ``locators[index]`` is ``None`` for an absent glyph, otherwise a
    format-specific value handed to ``decoder`` together with the buffer.
    Instances are never mutated after construction and are shared between
    font clones.
    """

    __slots__ = ("data", "locators", "_decoder", "_cells")

    def __init__(
        self,
        data: bytes,
        locators: Sequence[L | None],
        decoder: Callable[[bytes, L], Glyph],
    ) -> None:
        self.data = data
        self.locators = tuple(locators)
        self._decoder = decoder
        self._cells: tuple[OnceCell[Glyph], ...] = tuple(OnceCell() for _ in self.locators)

    def __len__(self) -> int:
        return len(self.locators)

    def has(self, index: int) -> bool:
        return 0 <= index < len(self.locators) and self.locators[index] is not None

    def is_decoded(self, index: int) -> bool:
        return 0 <= index < len(self._cells) and self._cells[index].is_set

    def get(self, index: int) -> Glyph | None:
        """Return the glyph at ``index``, decoding it on first access."""

        if not 0 <= index < len(self.locators):
            return None
        locator = self.locators[index]
        if locator is None:
            return None
        return self._cells[index].get_or_init(lambda: self._decode(index, locator))

    def _decode(self, index: int, locator: L) -> Glyph:
        LOGGER.debug("decoding glyph slot %d", index)
        return self._decoder(self.data, locator)


__all__ = ["LazyGlyphSource", "OnceCell"]
