"""Word-based names for temporary accounts."""

__version__ = "0.1.0"
