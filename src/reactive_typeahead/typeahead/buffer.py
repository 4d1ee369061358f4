"""Text buffer mirrored into the typeahead's input widget."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["TextRange", "TextSelection", "TextBuffer"]


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open ``[start, end)`` range; ``(-1, -1)`` means empty."""

    start: int = -1
    end: int = -1

    @classmethod
    def empty(cls) -> TextRange:
        return cls(-1, -1)

    @property
    def is_empty(self) -> bool:
        return self.start == -1 and self.end == -1

    @property
    def is_collapsed(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class TextSelection(TextRange):
    """Selection inside the buffer; collapsed selections are a plain cursor."""

    @classmethod
    def collapsed(cls, offset: int) -> TextSelection:
        return cls(offset, offset)

    @property
    def cursor(self) -> int:
        return self.end


@dataclass(slots=True)
class TextBuffer:
    """Mutable (text, selection, composing) triple owned by one widget."""

    text: str = ""
    selection: TextSelection = field(default_factory=lambda: TextSelection.collapsed(0))
    composing: TextRange = field(default_factory=TextRange.empty)

    def replace(self, text: str) -> None:
        """Set ``text``, collapse the selection to its end and clear composing."""
        self.text = text
        self.selection = TextSelection.collapsed(len(text))
        self.composing = TextRange.empty()

    def edit(self, text: str, cursor: int) -> None:
        """Record a user edit coming from the input widget."""
        self.text = text
        self.selection = TextSelection.collapsed(max(0, min(cursor, len(text))))
