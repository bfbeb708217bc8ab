"""
Service-level exceptions.

This module contains exceptions that can be raised by various services
in the application.
"""

class LunaflowError(Exception):
    """Base exception for all service errors."""
    pass

class ImportDataError(LunaflowError):
    """Base exception for import failures. The current data is left untouched."""
    pass

class ImportParseError(ImportDataError):
    """Raised when an import payload is not valid JSON."""
    pass

class InvalidFormatError(ImportDataError):
    """
    Raised when a payload parses but is not a valid document: no users
    array, a user or entry that is not an object, entries that are not an
    array, or a record that fails validation.
    """
    pass

class EntryNotFoundError(LunaflowError):
    """Raised when an entry id does not exist in the profile."""
    pass

class ProfileNotFoundError(LunaflowError):
    """Raised when a profile id does not exist in the document."""
    pass

class StorageError(LunaflowError):
    """Raised when the data document cannot be read from or written to storage."""
    pass
