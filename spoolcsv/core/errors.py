"""Custom exceptions used across spoolcsv."""


class SpoolCsvError(Exception):
    """Base error for the application."""


class ConfigError(SpoolCsvError):
    """Configuration related error."""


class FileAccessError(SpoolCsvError):
    """Raised when an input cannot be read or an output cannot be written."""
