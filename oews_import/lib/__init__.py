"""Shared helpers: exceptions and logging configuration."""
