"""Mini Social: a small social-network backend."""

__version__ = "1.0.0"
