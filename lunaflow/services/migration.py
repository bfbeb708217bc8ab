"""
Migration of persisted records into the current entry shape.

Two entry shapes exist in stored and exported data:

- current: has a ``days`` list with one flow intensity per day
- legacy: a date range with one ``flowIntensity`` for the whole span

Every record goes through ``migrate_entry``, which is idempotent.
"""
from typing import Any, Dict, Union

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from lunaflow.models.entry import CycleEntry, DailyLog, LegacyCycleEntry
from lunaflow.models.profile import AppData, UserProfile
from lunaflow.services.constants import DEFAULT_FLOW_INTENSITY
from lunaflow.services.exceptions import InvalidFormatError
from lunaflow.utils.dates import expand_range

logger = Logger()

EntryRecord = Union[Dict[str, Any], CycleEntry, LegacyCycleEntry]


def is_current_record(record: Dict[str, Any]) -> bool:
    """Check whether a raw record already carries per-day logs."""
    return isinstance(record.get("days"), list)


def parse_entry_record(record: EntryRecord) -> Union[CycleEntry, LegacyCycleEntry]:
    """
    Parse a raw record into the matching entry model.

    Raises:
        InvalidFormatError: If the record is not an object
        pydantic.ValidationError: If the record is malformed
    """
    if isinstance(record, (CycleEntry, LegacyCycleEntry)):
        return record
    if not isinstance(record, dict):
        raise InvalidFormatError("Invalid file format: entry must be an object")
    if is_current_record(record):
        return CycleEntry.model_validate(record)
    return LegacyCycleEntry.model_validate(record)


def migrate_entry(record: EntryRecord, clock=None) -> CycleEntry:
    """
    Convert any entry record into the current shape without losing data.

    Legacy records get one daily log per date of their span (through today
    when open), each tagged with the legacy intensity or Medium.

    Args:
        record: Raw dict or parsed entry model
        clock: Optional clock used for open legacy spans

    Returns:
        CycleEntry; current entries are returned unchanged
    """
    entry = parse_entry_record(record)
    if isinstance(entry, CycleEntry):
        return entry

    intensity = entry.flow_intensity or DEFAULT_FLOW_INTENSITY
    days = [
        DailyLog(date=day, flow_intensity=intensity)
        for day in expand_range(entry.start_date, entry.end_date, clock=clock)
    ]
    logger.debug("Migrated legacy entry", extra={"entry_id": entry.id, "days": len(days)})

    return CycleEntry(
        id=entry.id,
        start_date=entry.start_date,
        end_date=entry.end_date,
        days=days,
        notes=entry.notes
    )


def migrate_data(payload: Any, clock=None) -> AppData:
    """
    Migrate a whole persisted document, entry by entry.

    Args:
        payload: Decoded JSON document
        clock: Optional clock used for open legacy spans

    Returns:
        AppData with every entry in the current shape

    Raises:
        InvalidFormatError: If there is no users array or a record is malformed
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("users"), list):
        raise InvalidFormatError("Invalid file format: missing users array")

    try:
        users = []
        for user in payload["users"]:
            if not isinstance(user, dict):
                raise InvalidFormatError("Invalid file format: user must be an object")
            records = user.get("entries")
            if records is None:
                records = []
            if not isinstance(records, list):
                raise InvalidFormatError("Invalid file format: entries must be an array")
            entries = [migrate_entry(record, clock=clock) for record in records]
            users.append(UserProfile.model_validate({**user, "entries": entries}))

        return AppData.model_validate({**payload, "users": users})

    except ValidationError as e:
        logger.warning("Rejected malformed document", extra={"errors": e.error_count()})
        raise InvalidFormatError(f"Invalid file format: {e.errors()[0]['msg']}")
