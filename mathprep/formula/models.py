from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class FormulaLayout(Enum):
    """How a formula is presented once it reaches the formatter.

    Assigned once, at detection time, from the delimiter family.
    """

    FORCED_INLINE = "forced_inline"
    FORCED_BLOCK = "forced_block"
    # Block when the trimmed payload spans several lines, inline otherwise.
    CONTENT_DEPENDENT = "content_dependent"


class DelimiterFamily(Enum):
    """The four supported formula-marking conventions.

    Members are declared in detection priority order: a longer opener must be
    tried before a shorter one that is a prefix of it (``$$`` before ``$``).
    """

    DISPLAY_DOLLAR = ("$$", "$$")
    INLINE_DOLLAR = ("$", "$")
    PAREN_ESCAPE = ("\\(", "\\)")
    BRACKET_ESCAPE = ("\\[", "\\]")

    @property
    def opener(self) -> str:
        return self.value[0]

    @property
    def closer(self) -> str:
        return self.value[1]

    @property
    def layout(self) -> FormulaLayout:
        if self is DelimiterFamily.DISPLAY_DOLLAR:
            return FormulaLayout.FORCED_BLOCK
        if self is DelimiterFamily.BRACKET_ESCAPE:
            return FormulaLayout.CONTENT_DEPENDENT
        return FormulaLayout.FORCED_INLINE

    @property
    def keeps_raw_payload(self) -> bool:
        """``\\[…\\]`` keeps its line breaks so the formatter can choose block vs inline."""
        return self is DelimiterFamily.BRACKET_ESCAPE


class SegmentKind(Enum):
    TEXT = "text"
    FORMULA = "formula"


@dataclass(frozen=True)
class FormulaSpan:
    """A delimiter-bounded formula located in a source text.

    ``start_index``/``end_index`` are half-open offsets into the source and
    ``full_match`` is the delimited substring between them.
    """

    full_match: str
    latex: str
    start_index: int
    end_index: int
    family: DelimiterFamily
    layout: FormulaLayout

    @property
    def kind(self) -> str:
        # Presentation is carried by ``layout``; every detected span is tagged inline.
        return "inline"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_match": self.full_match,
            "latex": self.latex,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "kind": self.kind,
            "family": self.family.name.lower(),
            "layout": self.layout.value,
        }


@dataclass(frozen=True)
class TextSegment:
    """One tile of the source text, either plain text or a formula."""

    kind: SegmentKind
    content: str
    start_index: int
    end_index: int
    formula: Optional[FormulaSpan] = None

    @property
    def is_formula(self) -> bool:
        return self.kind is SegmentKind.FORMULA

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "content": self.content,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "formula": self.formula.to_dict() if self.formula else None,
        }
