class MathPrepError(Exception):
    """Base exception for mathprep errors."""
    pass


class ConfigurationError(MathPrepError):
    """Raised when a preprocessor setting is missing or malformed."""
    pass
