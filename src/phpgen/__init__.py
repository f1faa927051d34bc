"""phpgen - deterministic PHP source generator."""

__version__ = "0.1.0"
