"""
Exception Hierarchy

Custom exceptions for the OEWS import pipeline.
"""

from typing import Optional


class OEWSException(Exception):
    """Base exception for the OEWS import pipeline"""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Configuration Exceptions
class ConfigurationException(OEWSException):
    """Exception related to configuration"""
    pass


class MissingConfigurationException(ConfigurationException):
    """Exception when required configuration is missing"""
    pass


class InvalidConfigurationException(ConfigurationException):
    """Exception when configuration is invalid"""
    pass


# Database Exceptions
class DatabaseException(OEWSException):
    """Exception related to database operations"""
    pass


class ConnectionException(DatabaseException):
    """Exception when database connection fails"""
    pass


class QueryException(DatabaseException):
    """Exception when database query fails"""
    pass


# File Discovery Exceptions
class FileDiscoveryException(OEWSException):
    """Exception during file discovery"""
    pass


# Per-year load Exceptions
class YearLoadException(OEWSException):
    """Exception while loading a single year of data"""

    def __init__(self, year: int, message: str, details: Optional[dict] = None):
        self.year = year
        super().__init__(message, details)


def format_exception_details(exception: OEWSException) -> str:
    """
    Format exception details for logging

    Args:
        exception: OEWS exception instance

    Returns:
        Formatted string with exception details
    """
    details_str = f"{exception.__class__.__name__}: {exception.message}"

    if exception.details:
        details_list = [f"  {k}: {v}" for k, v in exception.details.items()]
        details_str += "\nDetails:\n" + "\n".join(details_list)

    return details_str
