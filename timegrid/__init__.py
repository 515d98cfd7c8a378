"""Pointer interaction handlers for creating entries on a time grid."""

__version__ = "0.1.0"
