from __future__ import annotations

from typing import List

from loguru import logger
from pydantic import BaseModel, Field

from mathprep.formula.detector import detect_math_formulas
from mathprep.formula.formatter import _collapse_whitespace
from mathprep.formula.models import DelimiterFamily, SegmentKind
from mathprep.formula.segmenter import split_text_with_math_formulas

_ESCAPE_FAMILIES = (DelimiterFamily.PAREN_ESCAPE, DelimiterFamily.BRACKET_ESCAPE)


class ValidationReport(BaseModel):
    is_valid: bool
    issues: List[str] = Field(default_factory=list)


def validate_preprocessing(original: str, processed: str) -> ValidationReport:
    """Sanity-check the output of a preprocessing pass against its input.

    Reports prose that went missing and ``\\(…\\)`` / ``\\[…\\]`` formulas that
    were not rewritten. Whitespace inside a payload is compared loosely since
    table rows flatten multi-line formulas.
    """

    issues: List[str] = []

    spans = detect_math_formulas(original)
    segments = split_text_with_math_formulas(original, spans)

    for segment in segments:
        if segment.kind is not SegmentKind.TEXT:
            continue
        if segment.content.strip() and segment.content not in processed:
            issues.append(f'missing text segment: "{segment.content}"')

    collapsed_output = _collapse_whitespace(processed)
    for span in spans:
        if span.family not in _ESCAPE_FAMILIES:
            continue
        converted = (
            span.full_match not in processed
            and _collapse_whitespace(span.latex) in collapsed_output
        )
        if not converted:
            issues.append(f'formula not converted: "{span.full_match}"')

    if issues:
        logger.debug(f"validate_preprocessing: {len(issues)} issue(s) found")

    return ValidationReport(is_valid=not issues, issues=issues)
