import logging
import time
from typing import Any, Dict, List, NamedTuple

from ..domain.errors import ProfileError
from ..domain.models import Profile, ProfileSource, make_scoped_id
from .catalog import is_special_profile
from .special import create_special_profile, needs_reset, reconcile
from .store import ProfileStore

logger = logging.getLogger(__name__)

ACTION_CREATED = "created"
ACTION_RESET = "reset"
ACTION_UPDATED = "updated"
ACTION_UNCHANGED = "unchanged"


class SyncResult(NamedTuple):
    profile: Profile
    action: str


class ProfileLoader:
    """loads special profiles, creating, resetting or updating them as needed."""
    
    def __init__(self, store: ProfileStore):
        self.store = store
    
    def get_special_profile(self, profile_id: str, linked_path: str) -> SyncResult:
        """
        load the special profile for profile_id and bring it up to date.
        
        args:
            profile_id: special identity key
            linked_path: executable path the profile should link to
            
        returns:
            the current profile and what was done to it
            
        raises:
            ProfileError: if profile_id is not a special identity
        """
        if not is_special_profile(profile_id):
            raise ProfileError(f"'{profile_id}' is not a special profile")
        
        scoped_id = make_scoped_id(ProfileSource.LOCAL, profile_id)
        profile = self.store.get(scoped_id)
        
        if profile is None:
            profile = create_special_profile(profile_id, linked_path)
            self.store.put(profile)
            logger.info(f"created special profile {scoped_id}")
            return SyncResult(profile, ACTION_CREATED)
        
        if needs_reset(profile):
            # put replaces the outdated record in a single write
            profile = create_special_profile(profile_id, linked_path)
            self.store.put(profile)
            return SyncResult(profile, ACTION_RESET)
        
        _, changed = reconcile(profile, linked_path)
        if not changed:
            return SyncResult(profile, ACTION_UNCHANGED)
        
        self.store.put(profile)
        logger.debug(f"updated metadata of special profile {scoped_id}")
        return SyncResult(profile, ACTION_UPDATED)
    
    def sync_all(self, linked_paths: Dict[str, str]) -> List[SyncResult]:
        """run get_special_profile for every profile id in linked_paths."""
        return [
            self.get_special_profile(profile_id, linked_path)
            for profile_id, linked_path in linked_paths.items()
        ]
    
    def edit_setting(self, scoped_id: str, key: str, value: Any) -> Profile:
        """
        change a setting on behalf of the user.
        
        marks the profile as edited, which exempts it from automatic resets.
        
        raises:
            ProfileError: if the profile does not exist
        """
        profile = self.store.get(scoped_id)
        if profile is None:
            raise ProfileError(f"Profile '{scoped_id}' not found", scoped_id=scoped_id)
        
        profile.settings[key] = value
        profile.last_edited = int(time.time())
        self.store.put(profile)
        return profile
