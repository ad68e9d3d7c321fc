from __future__ import annotations

from typing import List, Optional, Sequence

from mathprep.formula.detector import detect_math_formulas
from mathprep.formula.models import FormulaSpan, SegmentKind, TextSegment


def split_text_with_math_formulas(
    text: str, spans: Optional[Sequence[FormulaSpan]] = None
) -> List[TextSegment]:
    """Tile ``text`` into alternating text and formula segments.

    ``spans`` defaults to the detector's output for ``text``. Gap text is kept
    verbatim (no trimming), so joining every segment's ``content`` in order
    gives back ``text`` exactly.
    """

    if spans is None:
        spans = detect_math_formulas(text)

    if not spans:
        return [TextSegment(SegmentKind.TEXT, text, 0, len(text))]

    segments: List[TextSegment] = []
    cursor = 0
    for span in sorted(spans, key=lambda s: s.start_index):
        if cursor < span.start_index:
            segments.append(
                TextSegment(
                    SegmentKind.TEXT,
                    text[cursor : span.start_index],
                    cursor,
                    span.start_index,
                )
            )
        segments.append(
            TextSegment(
                SegmentKind.FORMULA,
                span.full_match,
                span.start_index,
                span.end_index,
                formula=span,
            )
        )
        cursor = span.end_index

    if cursor < len(text):
        segments.append(TextSegment(SegmentKind.TEXT, text[cursor:], cursor, len(text)))

    return segments
