import json
import logging
from pathlib import Path
from typing import List, Optional

from ..domain.models import Profile
from .models import ProfileData

logger = logging.getLogger(__name__)


class ProfileStore:
    """handles profile persistence to JSON."""
    
    def __init__(self, profiles_file: Path):
        self.profiles_file = profiles_file
        
    def load(self) -> ProfileData:
        """load profiles from JSON file."""
        if not self.profiles_file.exists():
            return ProfileData.empty()
        
        try:
            with open(self.profiles_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return ProfileData.model_validate(data)
        except ValueError as e:
            # corrupted file (bad encoding, JSON or schema), start over
            logger.warning(f"ignoring corrupt profile store {self.profiles_file}: {e}")
            return ProfileData.empty()
    
    def save(self, data: ProfileData) -> None:
        """save profiles to JSON file."""
        self.profiles_file.parent.mkdir(parents=True, exist_ok=True)
        
        with open(self.profiles_file, 'w', encoding='utf-8') as f:
            json.dump(data.model_dump(mode="json"), f, indent=2)
    
    def get(self, scoped_id: str) -> Optional[Profile]:
        """get a profile by scoped id, None if it does not exist."""
        return self.load().profiles.get(scoped_id)
    
    def put(self, profile: Profile) -> None:
        """add or replace a profile."""
        data = self.load()
        data.profiles[profile.scoped_id] = profile
        self.save(data)
    
    def delete(self, scoped_id: str) -> bool:
        """remove profile from store, returns False if it was not stored."""
        data = self.load()
        
        if scoped_id not in data.profiles:
            return False
        
        del data.profiles[scoped_id]
        self.save(data)
        return True
    
    def list(self) -> List[Profile]:
        """list all stored profiles."""
        return list(self.load().profiles.values())
