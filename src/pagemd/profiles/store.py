"""Read-only access to the profile collection.

Profiles are kept in a JSON array with camelCase keys, the same shape the
browser extension exports. Nothing here ever writes the file.
"""

import json
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from pagemd.exceptions import ProfileLoadError, ProfileNotFoundError
from pagemd.logger import logger
from pagemd.profiles.builtin import BUILTIN_PROFILES, DEFAULT_PROFILE
from pagemd.profiles.models import ConversionProfile

_PROFILE_LIST = TypeAdapter(list[ConversionProfile])


def load_profiles(path: str | Path | None = None) -> list[ConversionProfile]:
    """Load and validate a profile collection.

    Args:
        path: JSON file with a list of profiles. Empty or None returns the
            built-in profiles.

    Returns:
        Profiles in file order, with the built-in default prepended when the
        file does not designate one.

    Raises:
        ProfileLoadError: If the file is unreadable, is not valid JSON, fails
            validation or marks more than one profile as default.

    """
    if not path:
        return list(BUILTIN_PROFILES)

    profile_file = Path(path)
    try:
        raw = profile_file.read_text(encoding="utf-8")
    except OSError as e:
        raise ProfileLoadError(f"Cannot read profiles from {profile_file}: {e}") from e

    try:
        profiles = parse_profiles(json.loads(raw))
    except json.JSONDecodeError as e:
        raise ProfileLoadError(f"Invalid JSON in {profile_file}: {e}") from e

    logger.info("Loaded %d profile(s) from %s", len(profiles), profile_file)
    return profiles


def parse_profiles(data: object) -> list[ConversionProfile]:
    """Validate already decoded profile data.

    Raises:
        ProfileLoadError: On validation errors or more than one default profile.

    """
    try:
        profiles = _PROFILE_LIST.validate_python(data)
    except ValidationError as e:
        raise ProfileLoadError(f"Invalid profile collection: {e}") from e

    defaults = [profile.id for profile in profiles if profile.is_default]
    if len(defaults) > 1:
        raise ProfileLoadError(f"Only one default profile is allowed, found: {', '.join(defaults)}")

    if not defaults:
        logger.debug("No default profile in collection, adding built-in %r", DEFAULT_PROFILE.id)
        profiles = [DEFAULT_PROFILE, *(p for p in profiles if p.id != DEFAULT_PROFILE.id)]

    return profiles


def get_profile(profiles: Sequence[ConversionProfile], profile_id: str) -> ConversionProfile:
    """Return the profile with ``profile_id``.

    Raises:
        ProfileNotFoundError: If no profile has that id.

    """
    for profile in profiles:
        if profile.id == profile_id:
            return profile
    raise ProfileNotFoundError(f"Unknown conversion profile: {profile_id!r}")


def get_default_profile(profiles: Sequence[ConversionProfile]) -> ConversionProfile:
    """Return the collection's default profile, or the built-in one."""
    return next((profile for profile in profiles if profile.is_default), DEFAULT_PROFILE)
