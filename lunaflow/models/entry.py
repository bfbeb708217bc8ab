"""
Entry model definitions for logged periods.

Dates are kept as YYYY-MM-DD calendar strings, never timestamps, so that
they always name the same day regardless of the caller's clock offset.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _check_calendar_date(value: Optional[str]) -> Optional[str]:
    if value is not None:
        datetime.strptime(value, "%Y-%m-%d")
    return value


class FlowIntensity(str, Enum):
    """
    Flow intensity recorded for a single day.
    """
    LIGHT = "Light"
    MEDIUM = "Medium"
    HEAVY = "Heavy"
    SPOTTING = "Spotting"


class DailyLog(BaseModel):
    """
    One logged day within an entry's span.
    """
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    date: str = Field(..., pattern=DATE_PATTERN)
    flow_intensity: FlowIntensity = Field(FlowIntensity.MEDIUM, alias="flowIntensity")

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return _check_calendar_date(value)


class CycleEntry(BaseModel):
    """
    Represents one period, with one daily log per day of its span.

    A missing end date means the period is still ongoing.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    start_date: str = Field(..., alias="startDate", pattern=DATE_PATTERN)
    end_date: Optional[str] = Field(None, alias="endDate", pattern=DATE_PATTERN)
    days: List[DailyLog] = Field(default_factory=list)
    notes: Optional[str] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_dates(cls, value: Optional[str]) -> Optional[str]:
        return _check_calendar_date(value)

    @property
    def is_ongoing(self) -> bool:
        """Check if the period has not ended yet."""
        return self.end_date is None


class LegacyCycleEntry(BaseModel):
    """
    Older entry shape with a single flow intensity for the whole span.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    start_date: str = Field(..., alias="startDate", pattern=DATE_PATTERN)
    end_date: Optional[str] = Field(None, alias="endDate", pattern=DATE_PATTERN)
    flow_intensity: Optional[FlowIntensity] = Field(None, alias="flowIntensity")
    notes: Optional[str] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_dates(cls, value: Optional[str]) -> Optional[str]:
        return _check_calendar_date(value)
