"""
Profile and document models for the persisted data file.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from lunaflow.models.entry import CycleEntry


class UserProfile(BaseModel):
    """
    A person whose periods are tracked. Entries belong to exactly one profile.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    theme_color: str = Field("rose", alias="themeColor")
    entries: List[CycleEntry] = Field(default_factory=list)


class AppData(BaseModel):
    """
    The whole persisted document: every profile plus the active one.
    """
    model_config = ConfigDict(populate_by_name=True)

    users: List[UserProfile] = Field(default_factory=list)
    active_user_id: Optional[str] = Field(None, alias="activeUserId")
    version: int = 1

    def to_document(self) -> dict:
        """Serialize using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
