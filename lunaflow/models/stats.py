"""
Derived, read-only views computed from an entry collection.

None of these are persisted; regenerate them whenever entries change.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from lunaflow.models.entry import CycleEntry


class CycleStats(BaseModel):
    """
    Summary statistics for one profile's entries.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    average_duration: int = Field(0, alias="averageDuration")
    average_cycle_length: int = Field(0, alias="averageCycleLength")
    last_cycle_length: int = Field(0, alias="lastCycleLength")
    last_duration: int = Field(0, alias="lastDuration")
    cycle_variation: int = Field(0, alias="cycleVariation")
    is_regular: bool = Field(True, alias="isRegular")
    is_ongoing: bool = Field(False, alias="isOngoing")


class Prediction(BaseModel):
    """
    Estimated start of the next period.

    days_until is positive while days remain, negative once overdue.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date: str
    days_until: int = Field(..., alias="daysUntil")


class CycleStatus(BaseModel):
    """
    Where the profile currently is: inside a period or between periods.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_ongoing: bool = Field(..., alias="isOngoing")
    period_day: Optional[int] = Field(None, alias="periodDay")
    cycle_day: Optional[int] = Field(None, alias="cycleDay")


class DurationPoint(BaseModel):
    """
    One bar of the duration history.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    start_date: str = Field(..., alias="startDate")
    label: str
    duration: int
    is_ongoing: bool = Field(..., alias="isOngoing")


class HistoryItem(BaseModel):
    """
    One row of the period history: an entry with its inclusive duration.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    entry: CycleEntry
    duration: int
    is_ongoing: bool = Field(..., alias="isOngoing")
