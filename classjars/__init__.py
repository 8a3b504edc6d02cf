"""classjars — library jar resolution and class staleness checks for Blaze projects."""

__version__ = "0.1.0"
