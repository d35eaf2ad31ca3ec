"""Three-card poker engine with text, table-model and echo utilities."""

__version__ = "1.0.0"