from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Sequence

from loguru import logger

from mathprep.config import PreprocessorConfig
from mathprep.formula.detector import detect_math_formulas
from mathprep.formula.formatter import format_segments
from mathprep.formula.segmenter import split_text_with_math_formulas
from mathprep.validation import ValidationReport, validate_preprocessing


def preprocess_math_formulas(text: Any) -> Any:
    """Rewrite every formula in ``text`` into the canonical ``$``/``$$`` convention.

    - ``\\(…\\)`` becomes ``$…$``
    - ``\\[…\\]`` becomes ``$…$`` on one line, or a ``$$`` block when it spans lines
    - ``$$…$$`` always becomes a ``$$`` block
    - ``$…$`` is left as is

    Formulas inside pipe-table rows are flattened to a single inline ``$…$``.
    Anything that is not a non-empty string is returned unchanged, and text
    without formulas is returned as the very same object.
    """

    if not text or not isinstance(text, str):
        return text

    spans = detect_math_formulas(text)
    if not spans:
        return text

    segments = split_text_with_math_formulas(text, spans)
    return format_segments(segments)


def preprocess_math_formulas_batch(
    texts: Sequence[Any], config: Optional[PreprocessorConfig] = None
) -> List[Any]:
    """Apply :func:`preprocess_math_formulas` to each element of ``texts``.

    Elements are independent of each other. When ``config.max_workers`` is
    above one they are spread over a thread pool; results always come back
    in input order.
    """

    if not isinstance(texts, (list, tuple)):
        raise TypeError(
            f"texts must be a list or tuple of strings, got {type(texts).__name__}"
        )

    config = config or PreprocessorConfig()
    if config.max_workers <= 1 or len(texts) <= 1:
        return [preprocess_math_formulas(text) for text in texts]

    logger.debug(
        f"preprocess_math_formulas_batch: {len(texts)} item(s) on {config.max_workers} workers"
    )
    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        return list(executor.map(preprocess_math_formulas, texts))


class MathPreprocessor:
    """Convenience wrapper binding the preprocessing functions to one config."""

    def __init__(self, config: Optional[PreprocessorConfig] = None):
        self.config = config or PreprocessorConfig()
        self.log_handler_id: Optional[int] = None

    @classmethod
    def from_env(cls, log_sink: Any = None) -> "MathPreprocessor":
        """Build from the environment and apply its log level to loguru.

        ``log_sink`` defaults to stderr.
        """
        preprocessor = cls(PreprocessorConfig.from_env())
        preprocessor.log_handler_id = preprocessor.config.apply_logging(log_sink)
        return preprocessor

    def preprocess(self, text: Any) -> Any:
        return preprocess_math_formulas(text)

    def preprocess_batch(self, texts: Sequence[Any]) -> List[Any]:
        return preprocess_math_formulas_batch(texts, self.config)

    def validate(self, original: str, processed: Optional[str] = None) -> ValidationReport:
        """Validate ``processed`` (by default, this preprocessor's own output) against ``original``."""
        if processed is None:
            processed = self.preprocess(original)
        return validate_preprocessing(original, processed)
