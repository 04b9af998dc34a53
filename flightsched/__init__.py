"""Flight scheduling simulation for a single airport, with a text menu command."""

__version__ = "0.1.0"
__all__ = ["__version__"]