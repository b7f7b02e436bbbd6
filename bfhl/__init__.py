"""BFHL service: numeric operations and a one-word AI answer behind one endpoint."""

__version__ = "1.0.0"
