"""Command-line interface for the OEWS importer."""
