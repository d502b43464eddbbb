import time
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileSource(str, Enum):
    LOCAL = "local"
    SYNCED = "synced"


class ProfileDefinition(BaseModel):
    """built-in definition of a special profile."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    default_settings: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("default_settings")
    @classmethod
    def freeze_settings(cls, value):
        # shared by every profile created from this definition
        return _freeze(value)

    def settings_copy(self) -> Dict[str, Any]:
        """return an independent, mutable copy of the default settings."""
        return _thaw(self.default_settings)


class Profile(BaseModel):
    """a stored application profile."""
    id: str
    source: ProfileSource = ProfileSource.LOCAL
    name: str = ""
    description: str = ""
    linked_path: str = ""
    internal: bool = False  # only global rules apply to internal profiles
    settings: Dict[str, Any] = Field(default_factory=dict)
    created: int = 0  # unix seconds
    last_edited: int = 0  # 0 means never edited by the user

    @property
    def scoped_id(self) -> str:
        return make_scoped_id(self.source, self.id)

    @property
    def edited(self) -> bool:
        return self.last_edited > 0


def make_scoped_id(source: ProfileSource, profile_id: str) -> str:
    return f"{ProfileSource(source).value}/{profile_id}"


def new_profile(
    source: ProfileSource,
    profile_id: str,
    linked_path: str,
    settings: Optional[Dict[str, Any]] = None,
) -> Profile:
    """
    allocate a new profile record.

    args:
        source: scope the profile lives in
        profile_id: identity key of the profile
        linked_path: path of the executable the profile belongs to
        settings: initial settings, None means no overrides

    returns:
        fresh profile with its creation time set to now
    """
    return Profile(
        id=profile_id,
        source=source,
        linked_path=linked_path,
        settings=settings if settings is not None else {},
        created=int(time.time()),
    )


def _freeze(value):
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value):
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value
