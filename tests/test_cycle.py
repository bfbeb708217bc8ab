"""Tests for next-period prediction and cycle status."""
from lunaflow.models.entry import CycleEntry
from lunaflow.models.stats import CycleStats
from lunaflow.services.cycle import get_cycle_status, predict_next_period
from lunaflow.utils.dates import FixedClock

def make_entry(start_date, end_date=None):
    """Create an entry without daily logs."""
    return CycleEntry(id=start_date, start_date=start_date, end_date=end_date)

def regular_entries():
    """Two periods 28 days apart."""
    return [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-01-29", "2024-02-02"),
    ]

def test_predict_next_period_days_remaining():
    """Test prediction before the expected date."""
    prediction = predict_next_period(regular_entries(), clock=FixedClock("2024-02-20"))

    assert prediction.date == "2024-02-26"
    assert prediction.days_until == 6

def test_predict_next_period_overdue():
    """Test that an overdue period has negative days until."""
    prediction = predict_next_period(regular_entries(), clock=FixedClock("2024-03-01"))

    assert prediction.date == "2024-02-26"
    assert prediction.days_until == -4

def test_predict_next_period_due_today():
    """Test prediction on the expected date."""
    prediction = predict_next_period(regular_entries(), clock=FixedClock("2024-02-26"))

    assert prediction.days_until == 0

def test_predict_next_period_needs_two_entries():
    """Test that a single entry gives no prediction."""
    assert predict_next_period([make_entry("2024-01-01", "2024-01-05")]) is None
    assert predict_next_period([]) is None

def test_predict_next_period_zero_average():
    """Test that a zero average cycle length gives no prediction."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-01-01", "2024-01-04"),
    ]

    assert predict_next_period(entries) is None

def test_predict_next_period_uses_given_stats():
    """Test that precomputed statistics are used as is."""
    stats = CycleStats(average_cycle_length=30)

    prediction = predict_next_period(regular_entries(), stats, clock=FixedClock("2024-02-20"))

    assert prediction.date == "2024-02-28"
    assert prediction.days_until == 8

def test_predict_next_period_from_ongoing_period():
    """Test that an ongoing latest period still anchors the prediction."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-03-01"),
    ]

    prediction = predict_next_period(entries, clock=FixedClock("2024-03-03"))

    assert prediction.date == "2024-04-30"
    assert prediction.days_until == 58

def test_get_cycle_status_during_period():
    """Test the running day count of an ongoing period."""
    entries = [
        make_entry("2024-01-01", "2024-01-05"),
        make_entry("2024-01-29"),
    ]

    status = get_cycle_status(entries, clock=FixedClock("2024-02-01"))

    assert status.is_ongoing is True
    assert status.period_day == 4
    assert status.cycle_day is None

def test_get_cycle_status_between_periods():
    """Test the cycle day counted from the latest start."""
    status = get_cycle_status(regular_entries(), clock=FixedClock("2024-02-10"))

    assert status.is_ongoing is False
    assert status.cycle_day == 13
    assert status.period_day is None

def test_get_cycle_status_no_entries():
    """Test that no entries gives no status."""
    assert get_cycle_status([]) is None
