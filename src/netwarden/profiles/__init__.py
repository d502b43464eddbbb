"""built-in special profiles and their maintenance."""
from .catalog import (
    SpecialProfileID,
    CATALOG,
    SPECIAL_PROFILE_NAMES,
    definition_for,
    is_special_profile,
)
from .special import create_special_profile, reconcile, needs_reset, can_be_upgraded
from .store import ProfileStore
from .loader import ProfileLoader, SyncResult

__all__ = [
    "SpecialProfileID",
    "CATALOG",
    "SPECIAL_PROFILE_NAMES",
    "definition_for",
    "is_special_profile",
    "create_special_profile",
    "reconcile",
    "needs_reset",
    "can_be_upgraded",
    "ProfileStore",
    "ProfileLoader",
    "SyncResult",
]
