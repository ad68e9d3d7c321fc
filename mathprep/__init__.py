"""Normalize math delimiters in document text.

Formulas written as ``$$…$$``, ``$…$``, ``\\(…\\)`` or ``\\[…\\]`` are located
and rewritten into the single ``$…$`` / ``$$\\n…\\n$$`` convention expected by
markdown math renderers.
"""

from mathprep.config import PreprocessorConfig, configure_logging
from mathprep.errors import ConfigurationError, MathPrepError
from mathprep.preprocessor import (
    MathPreprocessor,
    preprocess_math_formulas,
    preprocess_math_formulas_batch,
)
from mathprep.validation import ValidationReport, validate_preprocessing

__all__ = [
    "ConfigurationError",
    "MathPrepError",
    "MathPreprocessor",
    "PreprocessorConfig",
    "ValidationReport",
    "configure_logging",
    "preprocess_math_formulas",
    "preprocess_math_formulas_batch",
    "validate_preprocessing",
]
