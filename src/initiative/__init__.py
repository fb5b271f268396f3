"""Local persistent store for things and settings with versioned schema migrations."""

__version__ = "0.7.0"
