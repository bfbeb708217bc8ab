"""
Service module for next-period prediction and current cycle position.

Typical usage:
    stats = calculate_cycle_statistics(profile.entries)
    prediction = predict_next_period(profile.entries, stats)
    status = get_cycle_status(profile.entries)
"""
from typing import Optional, Sequence

from lunaflow.models.entry import CycleEntry
from lunaflow.models.stats import CycleStats, CycleStatus, Prediction
from lunaflow.services.statistics import calculate_cycle_statistics, sort_entries
from lunaflow.utils.dates import add_days, days_between, duration_in_days, today


def predict_next_period(
    entries: Sequence[CycleEntry],
    stats: Optional[CycleStats] = None,
    clock=None
) -> Optional[Prediction]:
    """
    Predict the start of the next period.

    The estimate is the latest start date plus the average cycle length.

    Args:
        entries: Every entry of the profile
        stats: Statistics already computed for the same entries, if any
        clock: Optional clock used for "today"

    Returns:
        Prediction, or None with fewer than two entries or a zero average

    Example:
        >>> prediction = predict_next_period(entries)
        >>> if prediction and prediction.days_until < 0:
        ...     print(f"{-prediction.days_until} days late")
    """
    if len(entries) < 2:
        return None

    if stats is None:
        stats = calculate_cycle_statistics(entries, clock=clock)
    if stats is None or stats.average_cycle_length <= 0:
        return None

    latest = sort_entries(entries)[0]
    predicted = add_days(latest.start_date, stats.average_cycle_length)

    return Prediction(
        date=predicted,
        days_until=days_between(today(clock), predicted)
    )


def get_cycle_status(entries: Sequence[CycleEntry], clock=None) -> Optional[CycleStatus]:
    """
    Determine the day of the current period or cycle.

    While a period is ongoing, period_day counts its days. Otherwise
    cycle_day counts days since the latest period started (day 1).

    Returns:
        CycleStatus, or None when there are no entries
    """
    if not entries:
        return None

    ongoing = next((e for e in entries if e.is_ongoing), None)
    if ongoing:
        return CycleStatus(
            is_ongoing=True,
            period_day=duration_in_days(ongoing.start_date, clock=clock)
        )

    latest = sort_entries(entries)[0]
    return CycleStatus(
        is_ongoing=False,
        cycle_day=duration_in_days(latest.start_date, clock=clock)
    )
