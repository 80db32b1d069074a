"""Command-bar address classification and new-tab placement."""

__version__ = "0.1.0"
