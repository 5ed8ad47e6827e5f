"""homelist: apartment listing API and async client."""

__version__ = "0.1.0"
