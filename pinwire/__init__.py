"""Pinentry helper speaking the stdio subset of the Assuan protocol."""

__version__ = '0.1.0'
