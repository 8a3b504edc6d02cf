"""Observability — logging and in-process metrics."""
