"""
Service module for logging, editing and deleting periods.

Typical usage:
    entry, error = save_entry(profile, "2024-01-29", intensities={"2024-01-29": "Heavy"})
    if error:
        return error  # shown to the user, e.g. invalid date order
"""
import uuid
from typing import Dict, List, Optional, Tuple

from aws_lambda_powertools import Logger

from lunaflow.models.entry import CycleEntry, DailyLog, FlowIntensity
from lunaflow.models.profile import UserProfile
from lunaflow.models.stats import HistoryItem
from lunaflow.services.constants import (
    DEFAULT_FLOW_INTENSITY,
    INVALID_DATE_FORMAT_MESSAGE,
    INVALID_DATE_ORDER_MESSAGE,
    INVALID_INTENSITIES_MESSAGE
)
from lunaflow.services.exceptions import EntryNotFoundError
from lunaflow.services.statistics import sort_entries
from lunaflow.utils.dates import duration_in_days, expand_range, parse_date, today

logger = Logger()


def validate_entry_dates(start_date: Optional[str], end_date: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate the date range of an entry before it is saved.

    Args:
        start_date: First day of the period
        end_date: Last day of the period, None if ongoing

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not start_date:
        return False, "Start date is required."
    if not isinstance(start_date, str) or (end_date is not None and not isinstance(end_date, str)):
        return False, INVALID_DATE_FORMAT_MESSAGE

    try:
        start = parse_date(start_date)
        end = parse_date(end_date) if end_date else None
    except ValueError:
        return False, INVALID_DATE_FORMAT_MESSAGE

    if end is not None and end < start:
        return False, INVALID_DATE_ORDER_MESSAGE

    return True, None


def build_daily_logs(
    start_date: str,
    end_date: Optional[str] = None,
    intensities: Optional[Dict[str, FlowIntensity]] = None,
    clock=None
) -> List[DailyLog]:
    """
    Create one daily log per day of the span.

    Days without a chosen intensity default to Medium. Days after today are
    left out, but the start date is always logged.

    Args:
        start_date: First day of the period
        end_date: Last day, None to run through today
        intensities: Optional mapping of date string to intensity
        clock: Optional clock used for "today"

    Returns:
        Daily logs in chronological order
    """
    intensities = intensities or {}
    current_day = today(clock)
    return [
        DailyLog(date=day, flow_intensity=intensities.get(day, DEFAULT_FLOW_INTENSITY))
        for day in expand_range(start_date, end_date, clock=clock)
        if day == start_date or day <= current_day
    ]


def find_entry(profile: UserProfile, entry_id: str) -> Optional[CycleEntry]:
    """Look up an entry of the profile by id."""
    return next((e for e in profile.entries if e.id == entry_id), None)


def list_entries(profile: UserProfile, clock=None) -> List[HistoryItem]:
    """
    List every entry of the profile, most recent first.

    Args:
        profile: Profile whose entries are listed
        clock: Optional clock used for ongoing entries

    Returns:
        One HistoryItem per entry with its inclusive duration
    """
    return [
        HistoryItem(
            entry=entry,
            duration=duration_in_days(entry.start_date, entry.end_date, clock=clock),
            is_ongoing=entry.is_ongoing
        )
        for entry in sort_entries(profile.entries)
    ]


def save_entry(
    profile: UserProfile,
    start_date: str,
    end_date: Optional[str] = None,
    intensities: Optional[Dict[str, FlowIntensity]] = None,
    entry_id: Optional[str] = None,
    clock=None
) -> Tuple[Optional[CycleEntry], Optional[str]]:
    """
    Add a new entry to the profile or replace an existing one.

    Editing keeps the notes of the entry being replaced.

    Args:
        profile: Profile that owns the entry
        start_date: First day of the period
        end_date: Last day of the period, None if ongoing
        intensities: Optional per-day intensities
        entry_id: Id of the entry to replace, None to add a new one
        clock: Optional clock used for "today"

    Returns:
        Tuple of (saved entry, None) or (None, validation message)

    Raises:
        EntryNotFoundError: If entry_id does not belong to the profile
    """
    end_date = end_date or None
    is_valid, error = validate_entry_dates(start_date, end_date)
    if not is_valid:
        logger.info("Entry rejected", extra={
            "profile_id": profile.id,
            "start_date": start_date,
            "end_date": end_date,
            "reason": error
        })
        return None, error

    if intensities is not None and not isinstance(intensities, dict):
        logger.info("Entry rejected", extra={"profile_id": profile.id, "reason": INVALID_INTENSITIES_MESSAGE})
        return None, INVALID_INTENSITIES_MESSAGE

    existing = None
    if entry_id is not None:
        existing = find_entry(profile, entry_id)
        if existing is None:
            raise EntryNotFoundError(f"Entry {entry_id} not found")

    entry = CycleEntry(
        id=entry_id or str(uuid.uuid4()),
        start_date=start_date,
        end_date=end_date,
        days=build_daily_logs(start_date, end_date, intensities, clock=clock),
        notes=existing.notes if existing else None
    )

    if existing:
        profile.entries = [entry if e.id == entry_id else e for e in profile.entries]
    else:
        profile.entries.append(entry)

    logger.info("Entry saved", extra={
        "profile_id": profile.id,
        "entry_id": entry.id,
        "is_update": existing is not None,
        "days": len(entry.days)
    })

    return entry, None


def delete_entry(profile: UserProfile, entry_id: str) -> bool:
    """
    Remove an entry from the profile.

    Returns:
        True if an entry was removed
    """
    remaining = [e for e in profile.entries if e.id != entry_id]
    removed = len(remaining) != len(profile.entries)
    profile.entries = remaining
    if removed:
        logger.info("Entry deleted", extra={"profile_id": profile.id, "entry_id": entry_id})
    return removed
