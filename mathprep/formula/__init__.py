"""Formula detection, segmentation and canonical formatting.

The three stages are deliberately small and stateless: the detector reports
delimiter-bounded spans, the segmenter tiles the source text around them and
the formatter renders each formula in the canonical ``$…$`` / ``$$…$$`` form.
"""

from mathprep.formula.detector import detect_math_formulas, find_formula_at
from mathprep.formula.formatter import format_segments
from mathprep.formula.models import (
    DelimiterFamily,
    FormulaLayout,
    FormulaSpan,
    SegmentKind,
    TextSegment,
)
from mathprep.formula.segmenter import split_text_with_math_formulas

__all__ = [
    "DelimiterFamily",
    "FormulaLayout",
    "FormulaSpan",
    "SegmentKind",
    "TextSegment",
    "detect_math_formulas",
    "find_formula_at",
    "format_segments",
    "split_text_with_math_formulas",
]
