"""
Statistics calculation service for logged periods.

This module turns a profile's entries into period durations, cycle lengths,
averages, variation and regularity. All functions are pure: entries are
only read, never modified.
"""
import math
from typing import List, Optional, Sequence

from aws_lambda_powertools import Logger

from lunaflow.models.entry import CycleEntry
from lunaflow.models.stats import CycleStats, DurationPoint
from lunaflow.services.constants import DURATION_HISTORY_LIMIT, REGULARITY_THRESHOLD_DAYS
from lunaflow.utils.dates import days_between, duration_in_days, format_short_date

logger = Logger()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def sort_entries(entries: Sequence[CycleEntry]) -> List[CycleEntry]:
    """
    Sort entries by start date, most recent first.

    The sort is stable, so entries sharing a start date keep their input order.
    """
    return sorted(entries, key=lambda e: e.start_date, reverse=True)


def calculate_cycle_length(current_start: str, previous_start: str) -> int:
    """Days from one period's start to the next one's, always positive."""
    return abs(days_between(previous_start, current_start))


def calculate_cycle_statistics(entries: Sequence[CycleEntry], clock=None) -> Optional[CycleStats]:
    """
    Calculate summary statistics for a profile's entries.

    Args:
        entries: Every entry of the profile, in any order
        clock: Optional clock used for ongoing entries

    Returns:
        CycleStats, or None when there are no entries. With one entry the
        cycle fields are zero; variation needs at least three entries.

    Example:
        >>> stats = calculate_cycle_statistics(profile.entries)
        >>> if stats and not stats.is_regular:
        ...     print(f"Cycle changed by {stats.cycle_variation} days")
    """
    if not entries:
        return None

    ordered = sort_entries(entries)
    recent = ordered[0]

    is_ongoing = recent.is_ongoing
    # Ongoing periods report their running count through today
    last_duration = duration_in_days(recent.start_date, recent.end_date, clock=clock)

    last_cycle_length = 0
    cycle_variation = 0
    if len(ordered) > 1:
        previous = ordered[1]
        last_cycle_length = calculate_cycle_length(recent.start_date, previous.start_date)

        if len(ordered) > 2:
            previous_cycle_length = calculate_cycle_length(previous.start_date, ordered[2].start_date)
            cycle_variation = last_cycle_length - previous_cycle_length

    # Ongoing entries are still growing and would drag the average down
    completed = [e for e in ordered if not e.is_ongoing]
    average_duration = 0
    if completed:
        total_duration = sum(duration_in_days(e.start_date, e.end_date) for e in completed)
        average_duration = round_half_up(total_duration / len(completed))

    average_cycle_length = 0
    if len(ordered) > 1:
        span = days_between(ordered[-1].start_date, recent.start_date)
        average_cycle_length = round_half_up(span / (len(ordered) - 1))

    stats = CycleStats(
        average_duration=average_duration,
        average_cycle_length=average_cycle_length,
        last_cycle_length=last_cycle_length,
        last_duration=last_duration,
        cycle_variation=cycle_variation,
        is_regular=abs(cycle_variation) < REGULARITY_THRESHOLD_DAYS,
        is_ongoing=is_ongoing
    )

    logger.info(
        "Calculated cycle statistics",
        extra={
            "entries": len(ordered),
            "completed_entries": len(completed),
            "average_cycle_length": average_cycle_length,
            "is_ongoing": is_ongoing
        }
    )

    return stats


def calculate_duration_history(
    entries: Sequence[CycleEntry],
    limit: int = DURATION_HISTORY_LIMIT,
    clock=None
) -> List[DurationPoint]:
    """
    Durations of the most recent entries, oldest first.

    Args:
        entries: Every entry of the profile
        limit: Maximum number of entries to include
        clock: Optional clock used for ongoing entries

    Returns:
        List of DurationPoint, empty when there are no entries
    """
    recent = list(reversed(sort_entries(entries)[:limit]))
    return [
        DurationPoint(
            start_date=entry.start_date,
            label=format_short_date(entry.start_date),
            duration=duration_in_days(entry.start_date, entry.end_date, clock=clock),
            is_ongoing=entry.is_ongoing
        )
        for entry in recent
    ]
