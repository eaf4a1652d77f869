"""Infrastructure adapters (report exporters)."""
