"""Validator and error reporter for block stylesheet files."""

__version__ = "0.1.0"
