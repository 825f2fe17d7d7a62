"""Story Doctor: reader/work suitability assessment service."""

__version__ = "0.1.0"
