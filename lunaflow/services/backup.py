"""
Import and export of the whole data document.

Exports are the persisted JSON document. Imports accept the current shape
or documents holding legacy entries, and either fully succeed or leave the
caller's data untouched.

Typical usage:
    try:
        data = import_data(uploaded_text)
    except ImportDataError as e:
        return str(e)
"""
import json

from aws_lambda_powertools import Logger

from lunaflow.models.profile import AppData
from lunaflow.services.constants import BACKUP_FILENAME_TEMPLATE
from lunaflow.services.exceptions import ImportParseError
from lunaflow.services.migration import migrate_data
from lunaflow.utils.dates import today

logger = Logger()


def export_data(data: AppData) -> str:
    """Serialize the document as indented JSON."""
    return json.dumps(data.to_document(), indent=2)


def backup_filename(clock=None) -> str:
    """File name for an export made today."""
    return BACKUP_FILENAME_TEMPLATE.format(date=today(clock))


def import_data(raw: str, clock=None) -> AppData:
    """
    Parse and migrate an exported document.

    Args:
        raw: File contents
        clock: Optional clock used when migrating open legacy entries

    Returns:
        The imported document

    Raises:
        ImportParseError: If the contents are not valid JSON
        InvalidFormatError: If the document has no users array or bad records
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning("Failed to parse import file", extra={"error": str(e)})
        raise ImportParseError("Failed to parse file.")

    data = migrate_data(payload, clock=clock)
    logger.info("Imported data", extra={
        "profiles": len(data.users),
        "entries": sum(len(u.entries) for u in data.users)
    })
    return data
