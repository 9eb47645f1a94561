"""Programming language ranking aggregation and PDF reporting."""

__version__ = "0.1.0"
