"""superprompt - turn a short idea into an optimized super prompt."""

__version__ = "0.1.0"
