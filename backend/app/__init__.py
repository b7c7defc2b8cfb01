"""Account signup service backend."""

__version__ = "1.0.0"
