"""Point-of-sale and bookkeeping core for a small retail shop."""

__version__ = "0.3.0"
