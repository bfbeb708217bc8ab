"""
Service module for managing profiles within a data document.

Only one profile is active at a time; statistics are always computed for
the active profile's entries.
"""
import uuid
from typing import Optional

from aws_lambda_powertools import Logger

from lunaflow.models.profile import AppData, UserProfile
from lunaflow.services.constants import DEFAULT_THEME_COLOR
from lunaflow.services.exceptions import ProfileNotFoundError

logger = Logger()


def get_active_profile(data: AppData) -> Optional[UserProfile]:
    """Return the active profile, or None when none is selected."""
    return next((u for u in data.users if u.id == data.active_user_id), None)


def add_profile(data: AppData, name: str) -> UserProfile:
    """
    Create a profile and make it the active one.

    Raises:
        ValueError: If the name is blank
    """
    if not name or not name.strip():
        raise ValueError("Profile name is required")

    profile = UserProfile(
        id=str(uuid.uuid4()),
        name=name.strip(),
        theme_color=DEFAULT_THEME_COLOR
    )
    data.users.append(profile)
    data.active_user_id = profile.id

    logger.info("Profile added", extra={"profile_id": profile.id, "profiles": len(data.users)})
    return profile


def switch_profile(data: AppData, user_id: str) -> UserProfile:
    """
    Make another profile the active one.

    Raises:
        ProfileNotFoundError: If no profile has the given id
    """
    profile = next((u for u in data.users if u.id == user_id), None)
    if profile is None:
        raise ProfileNotFoundError(f"Profile {user_id} not found")

    data.active_user_id = profile.id
    logger.info("Switched active profile", extra={"profile_id": profile.id})
    return profile
