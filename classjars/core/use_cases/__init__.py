"""Use cases — wire configuration and adapters into the query services."""
