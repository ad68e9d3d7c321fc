from __future__ import annotations

from typing import List, Optional

from loguru import logger

from mathprep.formula.models import DelimiterFamily, FormulaSpan

# Detection priority; see DelimiterFamily.
_FAMILIES = tuple(DelimiterFamily)


def _match_family(
    text: str, start: int, family: DelimiterFamily
) -> Optional[FormulaSpan]:
    """Try to read one ``family`` formula whose opener sits at ``start``.

    The first closer after the opener ends the candidate; nothing inside the
    payload is treated specially. Returns ``None`` when there is no closer or
    the payload is blank.
    """

    opener, closer = family.opener, family.closer
    if not text.startswith(opener, start):
        return None

    payload_start = start + len(opener)
    close_at = text.find(closer, payload_start)
    if close_at == -1:
        return None

    payload = text[payload_start:close_at]
    if not payload.strip():
        return None

    end = close_at + len(closer)
    return FormulaSpan(
        full_match=text[start:end],
        latex=payload if family.keeps_raw_payload else payload.strip(),
        start_index=start,
        end_index=end,
        family=family,
        layout=family.layout,
    )


def find_formula_at(text: str, pos: int) -> Optional[FormulaSpan]:
    """Return the formula starting exactly at ``pos``, trying families in priority order."""
    for family in _FAMILIES:
        span = _match_family(text, pos, family)
        if span is not None:
            return span
    return None


def detect_math_formulas(text: str) -> List[FormulaSpan]:
    """Scan ``text`` left to right and return non-overlapping formula spans.

    After a successful match scanning resumes just past the closer; after a
    failed attempt the cursor moves forward by a single character, so a
    rejected opener can still take part in a shorter candidate later on
    (``$$x$`` yields ``$x$``).
    """

    spans: List[FormulaSpan] = []
    if not text:
        return spans

    i = 0
    n = len(text)
    while i < n:
        # Every opener starts with one of these two characters.
        if text[i] not in "$\\":
            i += 1
            continue

        span = find_formula_at(text, i)
        if span is None:
            i += 1
            continue

        spans.append(span)
        i = span.end_index

    if spans:
        logger.debug(
            f"detect_math_formulas: found {len(spans)} formula(s) in {n} chars"
        )
    return spans
