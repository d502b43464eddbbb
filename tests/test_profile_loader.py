"""test suite for ProfileLoader."""
import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from netwarden.domain.errors import ProfileError
from netwarden.domain.models import Profile, ProfileSource
from netwarden.profiles.catalog import CATALOG, SpecialProfileID
from netwarden.profiles.loader import ProfileLoader
from netwarden.profiles.store import ProfileStore

OLD = int(datetime(2021, 1, 1, tzinfo=timezone.utc).timestamp())


class TestProfileLoader:
    @pytest.fixture
    def store(self, tmp_path):
        return ProfileStore(tmp_path / "profiles.json")
    
    @pytest.fixture
    def loader(self, store):
        return ProfileLoader(store)
    
    def test_creates_missing_profile(self, loader, store):
        result = loader.get_special_profile("_system-resolver", "/usr/sbin/resolved")
        
        assert result.action == "created"
        assert result.profile.name == "System DNS Client"
        assert store.get("local/_system-resolver") == result.profile
    
    def test_second_load_is_unchanged(self, loader):
        loader.get_special_profile("_system", "/boot/kernel")
        result = loader.get_special_profile("_system", "/boot/kernel")
        
        assert result.action == "unchanged"
    
    def test_unchanged_profile_is_not_saved(self, loader):
        loader.get_special_profile("_system", "")
        loader.store = MagicMock(wraps=loader.store)
        
        loader.get_special_profile("_system", "")
        
        loader.store.put.assert_not_called()
    
    def test_updates_metadata(self, loader, store):
        store.put(Profile(
            id="_netwarden",
            name="Old Name",
            description="Old description",
            linked_path="/opt/netwarden-1.0/core",
            internal=True,
            settings={"filter/defaultAction": "prompt"},
            created=OLD,
        ))
        
        result = loader.get_special_profile("_netwarden", "/opt/netwarden-2.0/core")
        
        assert result.action == "updated"
        saved = store.get("local/_netwarden")
        assert saved.name == CATALOG[SpecialProfileID.CORE].name
        assert saved.description == CATALOG[SpecialProfileID.CORE].description
        assert saved.linked_path == "/opt/netwarden-2.0/core"
        assert saved.settings == {"filter/defaultAction": "prompt"}
        assert saved.created == OLD
    
    def test_resets_outdated_profile(self, loader, store):
        store.put(Profile(
            id="_system-resolver",
            name="System DNS Client",
            settings={"filter/defaultAction": "block"},
            created=OLD,
        ))
        
        result = loader.get_special_profile("_system-resolver", "")
        
        assert result.action == "reset"
        saved = store.get("local/_system-resolver")
        assert saved.settings["filter/defaultAction"] == "permit"
        assert saved.created > OLD
        assert len(store.list()) == 1
    
    def test_reset_replaces_record_in_one_write(self, loader, store):
        store.put(Profile(id="_netwarden-app", created=OLD))
        loader.store = MagicMock(wraps=store)
        
        result = loader.get_special_profile("_netwarden-app", "/opt/netwarden/app")
        
        assert result.action == "reset"
        loader.store.delete.assert_not_called()
        loader.store.put.assert_called_once_with(result.profile)
        assert store.get("local/_netwarden-app").created > OLD
    
    def test_keeps_edited_outdated_profile(self, loader, store):
        store.put(Profile(
            id="_system-resolver",
            name="System DNS Client",
            settings={"filter/defaultAction": "block"},
            created=OLD,
            last_edited=OLD + 1,
        ))
        
        result = loader.get_special_profile("_system-resolver", "")
        
        assert result.action == "updated"
        assert store.get("local/_system-resolver").settings == {"filter/defaultAction": "block"}
    
    def test_rejects_ordinary_profile(self, loader, store):
        with pytest.raises(ProfileError, match="not a special profile"):
            loader.get_special_profile("firefox", "/usr/bin/firefox")
        assert store.list() == []
    
    def test_sync_all(self, loader):
        results = loader.sync_all({identity.value: "" for identity in SpecialProfileID})
        
        assert [r.action for r in results] == ["created"] * len(SpecialProfileID)
        assert len(loader.store.list()) == len(SpecialProfileID)
    
    def test_edit_setting_marks_profile_edited(self, loader, store):
        loader.get_special_profile("_netwarden-app", "")
        
        profile = loader.edit_setting("local/_netwarden-app", "filter/defaultAction", "permit")
        
        assert profile.last_edited > 0
        saved = store.get("local/_netwarden-app")
        assert saved.settings["filter/defaultAction"] == "permit"
        assert saved.last_edited == profile.last_edited
    
    def test_edit_setting_missing_profile(self, loader):
        with pytest.raises(ProfileError) as exc_info:
            loader.edit_setting("local/_system", "filter/defaultAction", "block")
        assert exc_info.value.scoped_id == "local/_system"
    
    def test_synced_profile_is_not_touched(self, loader, store):
        synced = Profile(id="_system", source=ProfileSource.SYNCED, name="Shared", created=OLD)
        store.put(synced)
        
        loader.get_special_profile("_system", "")
        
        assert store.get("synced/_system") == synced


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
