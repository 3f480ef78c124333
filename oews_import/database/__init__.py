"""Relational store access for the canonical OEWS table."""

from .connection import OEWSStore
from .schema import metadata, oews_data

__all__ = [
    "OEWSStore",
    "metadata",
    "oews_data",
]
