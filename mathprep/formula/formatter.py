from __future__ import annotations

import re
from typing import Optional, Sequence

from loguru import logger

from mathprep.formula.models import (
    DelimiterFamily,
    FormulaLayout,
    FormulaSpan,
    SegmentKind,
    TextSegment,
)

TABLE_CELL_SEPARATOR = "|"

_WHITESPACE_RUN = re.compile(r"\s+")


def _collapse_whitespace(s: str) -> str:
    return _WHITESPACE_RUN.sub(" ", s).strip()


def is_in_table_context(
    emitted: str, segments: Sequence[TextSegment], index: int
) -> bool:
    """Whether the formula at ``segments[index]`` sits inside a pipe table row.

    True when the current output line already holds a ``|``, or when the first
    line of the nearest following text segment does. Only that one text
    segment is looked at.
    """

    current_line = emitted.rsplit("\n", 1)[-1]
    if TABLE_CELL_SEPARATOR in current_line:
        return True

    for segment in segments[index + 1 :]:
        if segment.kind is SegmentKind.TEXT:
            first_line = segment.content.split("\n", 1)[0]
            return TABLE_CELL_SEPARATOR in first_line
    return False


def format_display_math(
    latex: str, emitted: str, next_segment: Optional[TextSegment] = None
) -> str:
    """Render ``latex`` as a ``$$`` block on its own lines.

    A newline is injected first when the output so far does not end with one.
    A newline also follows the closing ``$$`` unless the next segment is text
    that already starts on a fresh line.
    """

    parts = []
    if emitted and not emitted.endswith("\n"):
        parts.append("\n")
    parts.append(f"$$\n{latex}\n$$")

    already_breaks = (
        next_segment is not None
        and next_segment.kind is SegmentKind.TEXT
        and next_segment.content.startswith("\n")
    )
    if not already_breaks:
        parts.append("\n")
    return "".join(parts)


def format_formula(
    formula: FormulaSpan,
    in_table: bool,
    emitted: str,
    next_segment: Optional[TextSegment] = None,
) -> str:
    """Canonical rendering of a single formula given its surroundings."""

    if in_table:
        # Table rows are single lines, so everything collapses to inline math.
        flat = _collapse_whitespace(formula.latex)
        return f"${flat}$"

    if formula.family is DelimiterFamily.INLINE_DOLLAR:
        return formula.full_match

    latex = formula.latex.strip()
    if formula.layout is FormulaLayout.FORCED_BLOCK:
        return format_display_math(latex, emitted, next_segment)
    if formula.layout is FormulaLayout.CONTENT_DEPENDENT and "\n" in latex:
        return format_display_math(latex, emitted, next_segment)
    return f"${latex}$"


def format_segments(segments: Sequence[TextSegment]) -> str:
    """Concatenate ``segments`` with every formula rewritten canonically.

    Text segments pass through untouched. Each formula may look back at what
    has been emitted already and ahead at the next text segment only.
    """

    emitted = ""
    for index, segment in enumerate(segments):
        if segment.kind is SegmentKind.TEXT or segment.formula is None:
            emitted += segment.content
            continue

        in_table = is_in_table_context(emitted, segments, index)
        next_segment = segments[index + 1] if index + 1 < len(segments) else None
        rendered = format_formula(segment.formula, in_table, emitted, next_segment)
        if in_table:
            logger.debug(
                f"format_segments: flattened table formula at {segment.start_index}"
            )
        elif rendered.lstrip("\n").startswith("$$\n"):
            logger.debug(
                f"format_segments: promoted formula at {segment.start_index} to block"
            )
        emitted += rendered

    return emitted
