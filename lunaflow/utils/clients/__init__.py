"""
Centralized client initialization module.

This module provides lazy-loaded shared clients for the handlers.
"""
from lunaflow.services.storage import DataStore

# Initialize shared clients (lazy loading)
_store = None

def get_store() -> DataStore:
    """Get or create the data store."""
    global _store
    if _store is None:
        _store = DataStore()
    return _store
