"""Provider-neutral interfaces, record types and test helpers for DNS zones."""

__version__ = "1.0.0"