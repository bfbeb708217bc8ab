"""
Lambda handlers package for AWS Lambda functions.
"""
from .statistics import handler as statistics_handler
from .entries import handler as entries_handler
from .profiles import handler as profiles_handler
from .backup import handler as backup_handler

__all__ = ["statistics_handler", "entries_handler", "profiles_handler", "backup_handler"]
