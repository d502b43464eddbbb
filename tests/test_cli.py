"""test suite for the special profile commands."""
import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from typer.testing import CliRunner

from netwarden import config
from netwarden.cli.main import app
from netwarden.domain.models import Profile
from netwarden.profiles import ProfileLoader, ProfileStore

runner = CliRunner()


class TestSpecialCommands:
    @pytest.fixture
    def loader(self, tmp_path):
        return ProfileLoader(ProfileStore(tmp_path / "profiles.json"))
    
    @pytest.fixture(autouse=True)
    def patched(self, loader):
        with patch("netwarden.cli.special_commands.get_profile_loader", return_value=loader), \
             patch("netwarden.cli.main.configure_logging"):
            yield
    
    def test_list(self):
        result = runner.invoke(app, ["special", "list"])
        assert result.exit_code == 0
        assert "Special Profiles" in result.output
    
    def test_sync_creates_profile(self, loader):
        result = runner.invoke(app, ["special", "sync", "_system", "--path", "/boot/kernel"])
        
        assert result.exit_code == 0
        assert "created" in result.output
        assert loader.store.get("local/_system").linked_path == "/boot/kernel"
    
    def test_sync_unknown_profile(self):
        result = runner.invoke(app, ["special", "sync", "firefox"])
        assert result.exit_code == 1
        assert "not a special profile" in result.output
    
    def test_show(self, loader):
        loader.get_special_profile("_system-resolver", "/usr/sbin/resolved")
        
        result = runner.invoke(app, ["special", "show", "_system-resolver"])
        
        assert result.exit_code == 0
        assert "System DNS Client" in result.output
        assert "filter/defaultAction" in result.output
    
    def test_show_missing(self):
        result = runner.invoke(app, ["special", "show", "_system"])
        assert result.exit_code == 1
    
    def test_set_parses_json(self, loader):
        loader.get_special_profile("_netwarden-app", "")
        
        result = runner.invoke(app, ["special", "set", "_netwarden-app", "filter/endpoints", '["+ Localhost"]'])
        
        assert result.exit_code == 0
        profile = loader.store.get("local/_netwarden-app")
        assert profile.settings["filter/endpoints"] == ["+ Localhost"]
        assert profile.last_edited > 0
    
    def test_set_missing_profile(self):
        result = runner.invoke(app, ["special", "set", "_system", "filter/defaultAction", "block"])
        assert result.exit_code == 1
    
    def test_check(self, loader):
        old = int(datetime(2021, 1, 1, tzinfo=timezone.utc).timestamp())
        loader.store.put(Profile(id="_system-resolver", created=old))
        
        result = runner.invoke(app, ["special", "check", "_system-resolver"])
        
        assert result.exit_code == 0
        assert "outdated" in result.output
    
    def test_unknown_log_level_does_not_break_commands(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config"
        config_file.write_text("NETWARDEN_LOG_LEVEL=LOUD\n")
        monkeypatch.setattr(config, "CONFIG_FILE", config_file)
        
        with patch("netwarden.cli.main.configure_logging") as configure_logging:
            result = runner.invoke(app, ["version"])
        
        assert result.exit_code == 0
        configure_logging.assert_called_once_with("INFO", None)
    
    def test_dump_stack(self, tmp_path):
        with patch("netwarden.cli.main.get_log_dir", return_value=tmp_path):
            result = runner.invoke(app, ["dump-stack"])
        
        assert result.exit_code == 0
        assert len(list(tmp_path.glob("*.stack.log"))) == 1
    
    def test_dump_stack_failure(self, tmp_path):
        with patch("netwarden.cli.main.log_stack", return_value=None):
            result = runner.invoke(app, ["dump-stack"])
        assert result.exit_code == 1
    
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
