"""Tests for statistics calculation service."""
from lunaflow.models.entry import CycleEntry
from lunaflow.services.statistics import (
    calculate_cycle_length,
    calculate_cycle_statistics,
    calculate_duration_history,
    round_half_up,
    sort_entries
)
from lunaflow.utils.dates import FixedClock

def make_entry(start_date, end_date=None, entry_id=None):
    """Create an entry without daily logs."""
    return CycleEntry(id=entry_id or start_date, start_date=start_date, end_date=end_date)

def test_calculate_cycle_statistics_empty_entries():
    """Test that no entries gives no stats at all."""
    assert calculate_cycle_statistics([]) is None

def test_calculate_cycle_statistics_with_ongoing_period():
    """Test statistics while the latest period is still in progress."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-01-29"),
    ]

    stats = calculate_cycle_statistics(entries, clock=FixedClock("2024-02-02"))

    assert stats.last_duration == 5
    assert stats.last_cycle_length == 28
    assert stats.is_ongoing is True
    assert stats.average_duration == 5
    assert stats.average_cycle_length == 28
    assert stats.cycle_variation == 0
    assert stats.is_regular is True

def test_calculate_cycle_statistics_irregular_cycles():
    """Test variation between the last two cycles."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-01-29", "2024-02-02"),  # 28 days later
        make_entry("2024-03-01", "2024-03-04"),  # 32 days later
    ]

    stats = calculate_cycle_statistics(entries)

    assert stats.last_cycle_length == 32
    assert stats.cycle_variation == 4
    assert stats.is_regular is False
    assert stats.is_ongoing is False
    assert stats.last_duration == 4
    assert stats.average_cycle_length == 30

def test_calculate_cycle_statistics_shorter_cycle_is_negative_variation():
    """Test that a shorter latest cycle gives a negative variation."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-02-01", "2024-02-05"),  # 31 days later
        make_entry("2024-03-01", "2024-03-05"),  # 29 days later
    ]

    stats = calculate_cycle_statistics(entries)

    assert stats.cycle_variation == -2
    assert stats.is_regular is True

def test_calculate_cycle_statistics_regularity_threshold():
    """Test that a change of exactly three days counts as irregular."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-01-29", "2024-02-02"),  # 28 days later
        make_entry("2024-02-29", "2024-03-04"),  # 31 days later
    ]

    stats = calculate_cycle_statistics(entries)

    assert stats.cycle_variation == 3
    assert stats.is_regular is False

def test_calculate_cycle_statistics_single_entry():
    """Test that one entry gives stats with zeroed cycle fields."""
    stats = calculate_cycle_statistics([make_entry("2024-01-01", "2024-01-06")])

    assert stats is not None
    assert stats.last_cycle_length == 0
    assert stats.cycle_variation == 0
    assert stats.average_cycle_length == 0
    assert stats.average_duration == 6
    assert stats.last_duration == 6

def test_calculate_cycle_statistics_average_over_whole_span():
    """Test that the average cycle length spans first to last start."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-03-01", "2024-03-05"),
    ]

    stats = calculate_cycle_statistics(entries)

    assert stats.average_cycle_length == 60

def test_calculate_cycle_statistics_average_duration_excludes_ongoing():
    """Test that ongoing entries do not count toward the average duration."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-01-29"),
    ]

    stats = calculate_cycle_statistics(entries, clock=FixedClock("2024-01-31"))

    assert stats.last_duration == 3
    assert stats.average_duration == 5

def test_calculate_cycle_statistics_no_completed_entries():
    """Test average duration when the only entry is ongoing."""
    stats = calculate_cycle_statistics([make_entry("2024-01-29")], clock=FixedClock("2024-01-31"))

    assert stats.average_duration == 0
    assert stats.last_duration == 3
    assert stats.is_ongoing is True

def test_calculate_cycle_statistics_rounds_halves_up():
    """Test rounding of averages ending in .5."""
    entries = [
        make_entry("2024-01-01", "2024-01-04"),  # 4 days
        make_entry("2024-01-29", "2024-02-02"),  # 5 days, 28 days later
        make_entry("2024-02-26", "2024-03-01"),  # 5 days, 28 days later
        make_entry("2024-03-26", "2024-03-29"),  # 4 days, 29 days later
    ]

    stats = calculate_cycle_statistics(entries)

    # 85 days over 3 cycles and 18 days over 4 periods
    assert stats.average_cycle_length == 28
    assert stats.average_duration == 5

    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-01-29", "2024-02-02"),
        make_entry("2024-02-27", "2024-03-02"),
    ]
    # 57 days over 2 cycles
    assert calculate_cycle_statistics(entries).average_cycle_length == 29

def test_calculate_cycle_statistics_ignores_input_order():
    """Test that entries are analyzed newest first regardless of input order."""
    entries = [
        make_entry("2024-01-29", "2024-02-02"),
        make_entry("2024-03-01", "2024-03-04"),
        make_entry("2024-01-01", "2024-01-05"),
    ]

    stats = calculate_cycle_statistics(entries)

    assert stats.last_cycle_length == 32
    assert stats.cycle_variation == 4

def test_calculate_cycle_statistics_does_not_modify_entries():
    """Test that the input list is left as it was."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-01-29", "2024-02-02"),
    ]
    before = [e.model_copy(deep=True) for e in entries]

    calculate_cycle_statistics(entries)

    assert entries == before

def test_sort_entries_is_stable_for_equal_dates():
    """Test that entries with the same start keep their order."""
    first = make_entry("2024-01-01", entry_id="a")
    second = make_entry("2024-01-01", entry_id="b")
    latest = make_entry("2024-02-01", entry_id="c")

    ordered = sort_entries([first, second, latest])

    assert [e.id for e in ordered] == ["c", "a", "b"]

def test_calculate_cycle_length_is_positive():
    """Test cycle length in either argument order."""
    assert calculate_cycle_length("2024-01-29", "2024-01-01") == 28
    assert calculate_cycle_length("2024-01-01", "2024-01-29") == 28

def test_round_half_up():
    """Test rounding helper."""
    assert round_half_up(28.5) == 29
    assert round_half_up(4.5) == 5
    assert round_half_up(4.49) == 4

def test_calculate_duration_history():
    """Test that history keeps the most recent entries, oldest first."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-01-29", "2024-02-02"),
        make_entry("2024-02-26", "2024-03-01"),
        make_entry("2024-03-25", "2024-03-28"),
        make_entry("2024-04-22", "2024-04-27"),
        make_entry("2024-05-20"),
    ]

    history = calculate_duration_history(entries, clock=FixedClock("2024-05-22"))

    assert len(history) == 5
    assert history[0].start_date == "2024-01-29"
    assert history[0].label == "Jan 29"
    assert history[0].duration == 5
    assert history[-1].start_date == "2024-05-20"
    assert history[-1].duration == 3
    assert history[-1].is_ongoing is True
    assert not any(point.is_ongoing for point in history[:-1])

def test_calculate_duration_history_empty():
    """Test history with no entries."""
    assert calculate_duration_history([]) == []
