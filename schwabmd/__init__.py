"""Typed, synchronous HTTP client for the Schwab Market Data API."""

__version__ = "0.1.0"