"""creation, metadata sync and upgrade checks for special profiles."""
import logging
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..domain.models import Profile, ProfileSource, new_profile
from .catalog import (
    CATALOG,
    SpecialProfileID,
    definition_for,
    is_internal_profile,
    special_profile_id,
)

logger = logging.getLogger(__name__)

# dates (day.month.year, UTC) at which the default definition of a special
# profile changed so that older unedited records must be rebuilt.
# append new entries when a definition changes again; never edit old ones.
UPGRADE_CUTOFFS: Mapping[SpecialProfileID, str] = MappingProxyType({
    SpecialProfileID.SYSTEM_RESOLVER: "20.11.2021",
    SpecialProfileID.APP: "8.9.2021",
})

CUTOFF_DATE_FORMAT = "%d.%m.%Y"


def create_special_profile(profile_id: str, linked_path: str) -> Optional[Profile]:
    """
    build a fresh profile for a special identity.

    the profile is not saved; persisting it is up to the caller.

    args:
        profile_id: identity key
        linked_path: executable path to link the profile to

    returns:
        the new profile, or None if profile_id is not a special identity
    """
    identity = special_profile_id(profile_id)
    if identity is None:
        return None
    definition = CATALOG[identity]

    # the catalog owns the template, the new profile gets its own copy
    profile = new_profile(
        ProfileSource.LOCAL,
        identity.value,
        linked_path,
        definition.settings_copy(),
    )
    profile.name = definition.name
    profile.description = definition.description
    profile.internal = is_internal_profile(identity)
    return profile


def reconcile(profile: Profile, linked_path: str) -> Tuple[bool, bool]:
    """
    bring the name, description and linked path of a special profile up to date.

    settings are never touched.

    returns:
        (recognized, changed)
    """
    definition, found = definition_for(profile.id)
    if not found:
        return False, False

    changed = False
    if profile.name != definition.name:
        profile.name = definition.name
        changed = True

    if profile.description != definition.description:
        profile.description = definition.description
        changed = True

    if profile.linked_path != linked_path:
        profile.linked_path = linked_path
        changed = True

    return True, changed


def needs_reset(profile: Optional[Profile]) -> bool:
    """
    check whether an unedited special profile predates a definition change.

    this stands in for proper profile layering: if the user never touched
    the profile and it is older than the last definition change of its
    identity, the caller should discard it and create a new one.
    """
    if profile is None:
        return False

    if profile.source != ProfileSource.LOCAL:
        # special profiles live in the local scope only
        return False
    if profile.last_edited > 0:
        # edited by the user, keep their settings
        return False

    identity = special_profile_id(profile.id)
    cutoff = UPGRADE_CUTOFFS.get(identity) if identity is not None else None
    if cutoff is None:
        return False

    return can_be_upgraded(profile, cutoff)


def can_be_upgraded(profile: Profile, upgrade_date: str) -> bool:
    """return True if profile was created before upgrade_date."""
    try:
        upgrade_time = datetime.strptime(upgrade_date, CUTOFF_DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError as e:
        logger.warning(f"failed to parse upgrade date {upgrade_date!r}: {e}")
        return False

    if profile.created < upgrade_time.timestamp():
        logger.info(f"upgrading special profile {profile.scoped_id}")
        return True

    return False
