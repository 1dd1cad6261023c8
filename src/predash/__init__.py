"""PreDash - prediction market dashboard."""

__version__ = "0.1.0"
