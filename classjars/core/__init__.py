"""Core — domain models, configuration, and query services."""
