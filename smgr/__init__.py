"""Parse, filter, fetch and increment Semantic Versioning compliant versions."""

__version__ = "0.1.0"