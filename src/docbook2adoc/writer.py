#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/writer.py
"""Line-oriented output buffer for the DocBook visitor.

Block handlers push whole lines while inline handlers extend the last line
in place. Nested inline content is rendered into fresh lines, taken back
with :meth:`LineBuffer.splice_back` and merged into its enclosing line.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator

_DIRECTIVE_WITH_TEXT_RE = re.compile(r"((?:ifdef|endif)::.+?\[\])(.+)\Z", re.DOTALL)


class LineBuffer:
    """Ordered buffer of output lines.

    Only the last line may be modified in place. Two one-shot flags absorb
    the next blank line: ``continuation`` is set after a list continuation
    marker (``+``) and ``adjoin_next`` after a block title, so that the block
    that follows stays attached. When both are set, ``continuation`` is
    consumed first.

    Examples
    --------
        >>> buffer = LineBuffer()
        >>> buffer.append_blank_line()
        >>> buffer.append_text("Hello")
        >>> buffer.append_text(", world")
        >>> buffer.lines
        ('Hello, world',)

    """

    def __init__(self) -> None:
        self._lines: list[str] = []
        self.continuation = False
        self.adjoin_next = False

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    @property
    def lines(self) -> tuple[str, ...]:
        """Snapshot of the buffered lines."""
        return tuple(self._lines)

    @property
    def last(self) -> str | None:
        """The last line, or None when the buffer is empty."""
        return self._lines[-1] if self._lines else None

    def last_is_empty(self) -> bool:
        """Return True when the buffer ends with an empty line."""
        return bool(self._lines) and not self._lines[-1]

    def append_line(self, line: str = "") -> None:
        self._lines.append(line)

    def append_blank_line(self) -> None:
        """Push an empty line unless a pending flag absorbs it."""
        if self.continuation:
            self.continuation = False
        elif self.adjoin_next:
            self.adjoin_next = False
        else:
            self._lines.append("")

    def append_text(self, text: str) -> None:
        """Concatenate ``text`` onto the last line.

        Raises
        ------
        AssertionError
            If the buffer holds no line yet.

        """
        if not self._lines:
            raise AssertionError("append_text requires an existing line; emit a line first")
        self._lines[-1] += text

    def extend(self, lines: Iterable[str]) -> None:
        self._lines.extend(lines)

    def splice_back(self, count: int) -> list[str]:
        """Remove and return the last ``count`` lines, in order."""
        if count <= 0:
            return []
        taken = self._lines[-count:]
        del self._lines[-count:]
        return taken

    def to_text(self) -> str:
        """Flatten the buffer, moving text glued to a directive onto its own line."""
        return "\n".join(split_directive_lines(self._lines))


def split_directive_lines(lines: Iterable[str]) -> list[str]:
    """Split ``ifdef::x[]text`` style lines into directive and text lines.

    Inline content that follows a conditional start or end directive is
    appended to the directive's line by the inline handlers; AsciiDoc only
    recognizes directives that stand alone on their line.

    Examples
    --------
        >>> split_directive_lines(["a", "ifdef::foo[]b", "endif::foo[]c"])
        ['a', 'ifdef::foo[]', 'b', 'endif::foo[]', 'c']

    """
    result: list[str] = []
    for line in lines:
        match = _DIRECTIVE_WITH_TEXT_RE.match(line)
        while match:
            result.append(match.group(1))
            line = match.group(2)
            match = _DIRECTIVE_WITH_TEXT_RE.match(line)
        result.append(line)
    return result
