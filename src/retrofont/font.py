"""Glyph storage and rendering behaviour shared by TDF and FIGlet fonts."""
from __future__ import annotations

import abc
import copy
import logging
from typing import Any, ClassVar, Iterator

from .errors import CharacterRangeError, UnknownCharacterError
from .glyph import FontTarget, Glyph, RenderOptions, render_glyph
from .lazy import LazyGlyphSource

LOGGER = logging.getLogger(__name__)


class BaseFont(abc.ABC):
    """Two-layer glyph storage: a mutable overlay over an optional lazy source.

    Lookups consult the overlay first and then decode from the shared source
    on demand. Removing a glyph clears its overlay slot and tombstones the
    source slot; the source bytes themselves are never touched.
    """

    format_name: ClassVar[str]
    slot_count: ClassVar[int]

    def __init__(self, name: str, *, source: LazyGlyphSource[Any] | None = None) -> None:
        self.name = name
        self._overlay: list[Glyph | None] = [None] * self.slot_count
        self._source = source
        self._removed: set[int] = set()

    @abc.abstractmethod
    def slot_index(self, char: str) -> int | None:
        """Map ``char`` to a storage slot or ``None`` when it cannot be held."""

    @abc.abstractmethod
    def slot_char(self, index: int) -> str:
        """Inverse of :meth:`slot_index`."""

    @property
    @abc.abstractmethod
    def type_name(self) -> str:
        """Short lowercase label for the font's type."""

    @property
    @abc.abstractmethod
    def spacing(self) -> int:
        """Horizontal spacing hint in columns."""

    # -- storage -----------------------------------------------------------

    def _slot_glyph(self, index: int) -> Glyph | None:
        overlay = self._overlay[index]
        if overlay is not None:
            return overlay
        if index in self._removed or self._source is None:
            return None
        return self._source.get(index)

    def _slot_present(self, index: int) -> bool:
        if self._overlay[index] is not None:
            return True
        if index in self._removed or self._source is None:
            return False
        return self._source.has(index)

    def glyph(self, char: str) -> Glyph | None:
        """Return the glyph for ``char`` or ``None`` when undefined."""

        index = self.slot_index(char)
        if index is None:
            return None
        return self._slot_glyph(index)

    def has_char(self, char: str) -> bool:
        index = self.slot_index(char)
        return index is not None and self._slot_present(index)

    def add_glyph(self, char: str, glyph: Glyph) -> None:
        """Store ``glyph`` for ``char`` in the overlay, replacing any previous one."""

        index = self.slot_index(char)
        if index is None:
            raise CharacterRangeError(char)
        self._overlay[index] = glyph

    def remove_glyph(self, char: str) -> bool:
        """Remove ``char``; returns ``False`` when nothing was defined."""

        index = self.slot_index(char)
        if index is None or not self._slot_present(index):
            return False
        self._overlay[index] = None
        if self._source is not None and self._source.has(index):
            self._removed.add(index)
        return True

    def is_decoded(self, char: str) -> bool:
        """Return whether the source glyph for ``char`` has been decoded yet."""

        index = self.slot_index(char)
        return index is not None and self._source is not None and self._source.is_decoded(index)

    def glyph_count(self) -> int:
        return sum(1 for index in range(self.slot_count) if self._slot_present(index))

    def iter_glyphs(self) -> Iterator[tuple[str, Glyph]]:
        """Yield ``(char, glyph)`` pairs in slot order, decoding lazily."""

        for index in range(self.slot_count):
            glyph = self._slot_glyph(index)
            if glyph is not None:
                yield self.slot_char(index), glyph

    def defined_chars(self) -> list[str]:
        return [self.slot_char(index) for index in range(self.slot_count) if self._slot_present(index)]

    def copy(self):
        """Return a clone sharing the lazy source but owning its overlay."""

        return copy.copy(self)

    def __copy__(self):
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._overlay = list(self._overlay)
        clone._removed = set(self._removed)
        return clone

    # -- rendering ---------------------------------------------------------

    def resolve_glyph(self, char: str) -> Glyph:
        """Return the glyph for ``char``, falling back to its uppercase form."""

        glyph = self.glyph(char)
        if glyph is not None:
            return glyph
        upper = char.upper()
        if upper != char and len(upper) == 1:
            glyph = self.glyph(upper)
            if glyph is not None:
                LOGGER.debug("%s: rendering %r with uppercase glyph", self.name, char)
                return glyph
        raise UnknownCharacterError(char)

    def render_char(
        self,
        target: FontTarget,
        char: str,
        options: RenderOptions | None = None,
    ) -> None:
        render_glyph(self.resolve_glyph(char), target, options)

    def render_text(
        self,
        target: FontTarget,
        text: str,
        options: RenderOptions | None = None,
    ) -> None:
        """Render ``text`` glyph after glyph, moving to a new line after each."""

        for char in text:
            self.render_char(target, char, options)
            target.next_line()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, type={self.type_name}, glyphs={self.glyph_count()})"


__all__ = ["BaseFont"]
