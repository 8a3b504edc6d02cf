"""Persistence — on-disk state."""
