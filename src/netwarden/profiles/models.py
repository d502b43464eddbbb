"""data models for profile persistence."""
from typing import Dict
from pydantic import BaseModel, Field

from ..domain.models import Profile


class ProfileData(BaseModel):
    """complete contents of the profile store, keyed by scoped id."""
    profiles: Dict[str, Profile] = Field(default_factory=dict)
    
    @classmethod
    def empty(cls) -> "ProfileData":
        """create empty profile data."""
        return cls(profiles={})
