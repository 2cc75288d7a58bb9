"""Job match and filter engine."""

__version__ = "0.1.0"
