"""Adapters connecting tunnelsync to external services."""
