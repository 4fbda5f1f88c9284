"""Markdown-aware stripping of document text.

The stripper removes structural syntax (front matter, heading/quote/list
markers, rules, table separator rows, tags, link targets) and keeps what a
reader sees as written text. Code and math spans are kept with their
content intact; only their delimiters are dropped.

Delimiters are matched by first occurrence. An unterminated span leaves the
scanner inside that span until the end of the document.
"""

import re
from collections.abc import Callable
from enum import Enum

FENCE_MARKER = "```"
INLINE_SPAN_MARKER = "`"
MATH_BLOCK_MARKER = "$$"
INLINE_MATH_MARKER = "$"
FRONTMATTER_MARKER = "---"
MAX_HEADING_LEVEL = 6
LIST_MARKERS = frozenset("-*+")
CHECKBOX_MARKERS = ("[ ]", "[x]", "[X]")

_HORIZONTAL_SPACE_RE = re.compile(r"[ \t]+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")


class StripState(str, Enum):
    """Scanner states; each has exactly one handler."""

    NORMAL = "normal"
    FRONTMATTER = "frontmatter"
    FENCE = "fence"
    INLINE_SPAN = "inline_span"
    MATH_BLOCK = "math_block"
    INLINE_MATH = "inline_math"
    TAG = "tag"  # after an opening tag, until its closing tag


# Verbatim states and the marker that ends each of them.
_SPAN_CLOSERS: dict[StripState, str] = {
    StripState.FENCE: FENCE_MARKER,
    StripState.INLINE_SPAN: INLINE_SPAN_MARKER,
    StripState.MATH_BLOCK: MATH_BLOCK_MARKER,
    StripState.INLINE_MATH: INLINE_MATH_MARKER,
}

# Openers checked in NORMAL/TAG, longest first so ``` wins over `.
_SPAN_OPENERS: tuple[tuple[str, StripState], ...] = (
    (FENCE_MARKER, StripState.FENCE),
    (INLINE_SPAN_MARKER, StripState.INLINE_SPAN),
    (MATH_BLOCK_MARKER, StripState.MATH_BLOCK),
    (INLINE_MATH_MARKER, StripState.INLINE_MATH),
)


class _Scanner:
    """One left-to-right pass over a document.

    ``run`` dispatches on ``state``; every handler consumes at least one
    character and returns the index to continue from.
    """

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self.out: list[str] = []
        self.state = StripState.NORMAL
        # State to go back to when a verbatim span closes.
        self.resume_state = StripState.NORMAL
        self.frontmatter_end = 0
        # True while only line-leading markers have been consumed on this line.
        self.at_line_start = True
        self.after_list_marker = False

        if text.startswith(FRONTMATTER_MARKER):
            closing = text.find(FRONTMATTER_MARKER, len(FRONTMATTER_MARKER))
            if closing != -1:
                self.state = StripState.FRONTMATTER
                self.frontmatter_end = closing + len(FRONTMATTER_MARKER)

        self._handlers: dict[StripState, Callable[[int], int]] = {
            StripState.NORMAL: self._markup,
            StripState.TAG: self._markup,
            StripState.FRONTMATTER: self._frontmatter,
            StripState.FENCE: self._verbatim,
            StripState.INLINE_SPAN: self._verbatim,
            StripState.MATH_BLOCK: self._verbatim,
            StripState.INLINE_MATH: self._verbatim,
        }

    def run(self) -> str:
        i = 0
        while i < self.length:
            i = self._handlers[self.state](i)
        return "".join(self.out)

    # -- output helpers ---------------------------------------------------

    def _emit(self, chunk: str) -> None:
        if not chunk:
            return
        self.out.append(chunk)
        self.at_line_start = chunk.endswith("\n")

    def _line_end(self, i: int) -> int:
        """Index of the newline ending the line at ``i`` (or the text length)."""
        end = self.text.find("\n", i)
        return self.length if end == -1 else end

    # -- state handlers ---------------------------------------------------

    def _frontmatter(self, i: int) -> int:
        # The newline after the closing marker is copied by NORMAL.
        self.state = StripState.NORMAL
        self.at_line_start = False
        return self.frontmatter_end

    def _verbatim(self, i: int) -> int:
        closer = _SPAN_CLOSERS[self.state]
        end = self.text.find(closer, i)
        if end == -1:
            self._emit(self.text[i:])
            return self.length
        self._emit(self.text[i:end])
        self.state = self.resume_state
        self.at_line_start = False
        return end + len(closer)

    def _markup(self, i: int) -> int:
        text = self.text
        char = text[i]
        line_start = self.at_line_start
        checkbox_allowed = line_start or self.after_list_marker
        self.after_list_marker = False

        for marker, span_state in _SPAN_OPENERS:
            if text.startswith(marker, i):
                self.resume_state = self.state
                self.state = span_state
                self.at_line_start = False
                return i + len(marker)

        if char == "<":
            end = self._tag(i)
            if end is not None:
                return end

        if char == "!" and text.startswith("[", i + 1):
            end = self._link(i, i + 2)
            if end is not None:
                return end

        if char == "[":
            end = self._link(i, i + 1)
            if end is not None:
                return end
            if checkbox_allowed and text.startswith(CHECKBOX_MARKERS, i):
                after = i + len(CHECKBOX_MARKERS[0])
                if after < self.length and text[after] == " ":
                    self.at_line_start = False
                    return after + 1

        if line_start:
            end = self._line_marker(i)
            if end is not None:
                return end

        self._emit(char)
        return i + 1

    # -- constructs -------------------------------------------------------

    def _tag(self, i: int) -> int | None:
        """Discard ``<...>`` tags; returns None when ``<`` is plain text."""
        close = self.text.find(">", i + 1)
        if close == -1:
            return None
        inner = self.text[i + 1 : close]
        if not inner or not (inner[0].isalpha() or inner[0] in "/!"):
            return None

        if inner.startswith("!--"):
            return close + 1
        if inner.startswith("/"):
            if self.state is StripState.TAG:
                self.state = StripState.NORMAL
                return close + 1
            return None
        if not inner.endswith("/"):
            self.state = StripState.TAG
        return close + 1

    def _link(self, i: int, label_start: int) -> int | None:
        """Keep the label of ``[label](target)``; returns None if not a link."""
        text = self.text
        close_bracket = text.find("]", label_start)
        if close_bracket == -1 or not text.startswith("(", close_bracket + 1):
            return None
        close_paren = text.find(")", close_bracket + 2)
        if close_paren == -1:
            return None
        self._emit(text[label_start:close_bracket])
        self.at_line_start = False
        return close_paren + 1

    def _line_marker(self, i: int) -> int | None:
        """Handle constructs only recognised at the start of a line."""
        text = self.text
        char = text[i]

        if char == "#":
            j = i
            while j < self.length and text[j] == "#":
                j += 1
            if j - i > MAX_HEADING_LEVEL:
                return None
            while j < self.length and text[j] == " ":
                j += 1
            self.at_line_start = False
            return j

        if char == ">":
            j = i + 1
            while j < self.length and text[j] == " ":
                j += 1
            # Still at line start: nested quotes and list markers may follow.
            return j

        line_end = self._line_end(i)

        if char == "-":
            j = i
            while j < self.length and text[j] == "-":
                j += 1
            if j - i >= 3 and j == line_end:
                return line_end + 1

        if char == "|" and "-" in text[i:line_end]:
            # Table separator row; the newline goes with it.
            return line_end + 1

        if char in LIST_MARKERS and text.startswith(" ", i + 1):
            self.at_line_start = False
            self.after_list_marker = True
            return i + 2

        return None


def normalize_whitespace(text: str) -> str:
    """Collapse space runs and blank-line runs, then trim."""
    text = _HORIZONTAL_SPACE_RE.sub(" ", text)
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


class MarkupStripper:
    """Turns raw markdown into content text."""

    def strip(self, raw_text: str) -> str:
        if not raw_text:
            return ""
        return normalize_whitespace(_Scanner(raw_text).run())


def strip_markup(raw_text: str) -> str:
    return MarkupStripper().strip(raw_text)
