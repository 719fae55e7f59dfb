"""Status line generator built from small Linux system readings."""

__version__ = "0.1.0"