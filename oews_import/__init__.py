"""BLS OEWS annual release importer."""

__version__ = "1.0.0"
