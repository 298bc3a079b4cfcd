"""
Tests for the developer profile — loading, saving and the configure use case.
"""

import json
from pathlib import Path

import pytest

from devutils.core.config.loader import ConfigError, config_path, load_config, save_config
from devutils.core.models.profile import UserProfile
from devutils.core.use_cases.configure import build_profile, configure, current_config


class TestLoader:
    def test_missing_file(self, tmp_path: Path):
        assert load_config(tmp_path / ".devutils") is None

    def test_first_save_created_equals_updated(self, tmp_path: Path):
        path = tmp_path / ".devutils"
        config = save_config(UserProfile(name="Ada", email="ada@example.com"), path)
        assert config.created == config.updated

        data = json.loads(path.read_text())
        assert data["user"] == {"name": "Ada", "email": "ada@example.com"}
        assert data["created"] == data["updated"]

    def test_url_written_only_when_set(self, tmp_path: Path):
        path = tmp_path / ".devutils"
        save_config(UserProfile(name="Ada", email="ada@example.com"), path)
        assert "url" not in json.loads(path.read_text())["user"]
        assert load_config(path).user.url is None

        save_config(UserProfile(name="Ada", email="ada@example.com", url="https://ada.dev"), path)
        assert json.loads(path.read_text())["user"]["url"] == "https://ada.dev"

    def test_resave_keeps_created(self, tmp_path: Path):
        path = tmp_path / ".devutils"
        first = save_config(UserProfile(name="Ada", email="ada@example.com"), path)
        second = save_config(UserProfile(name="Ada L", email="ada@example.com"), path)
        assert second.created == first.created
        assert load_config(path).user.name == "Ada L"

    def test_round_trip(self, tmp_path: Path):
        path = tmp_path / ".devutils"
        saved = save_config(UserProfile(name="Ada", email="ada@example.com", url="https://ada.dev"), path)
        loaded = load_config(path)
        assert loaded == saved

    def test_corrupt_file(self, tmp_path: Path):
        path = tmp_path / ".devutils"
        path.write_text("{not json")
        assert load_config(path) is None
        with pytest.raises(ConfigError):
            load_config(path, strict=True)

    def test_invalid_document(self, tmp_path: Path):
        path = tmp_path / ".devutils"
        path.write_text(json.dumps({"user": {"name": "", "email": "x@y.z"}}))
        assert load_config(path) is None

    def test_no_temp_files_left_behind(self, tmp_path: Path):
        save_config(UserProfile(name="Ada", email="ada@example.com"), tmp_path / ".devutils")
        assert [p.name for p in tmp_path.iterdir()] == [".devutils"]

    def test_default_path_uses_home(self, home: Path):
        assert config_path() == home / ".devutils"


class TestConfigureUseCase:
    def test_name_required(self):
        with pytest.raises(ConfigError, match="Name is required."):
            build_profile("  ", "ada@example.com")

    def test_email_required(self):
        with pytest.raises(ConfigError, match="Email is required."):
            build_profile("Ada", None)

    def test_blank_url_becomes_none(self):
        assert build_profile("Ada", "ada@example.com", "  ").url is None

    def test_values_are_trimmed(self):
        profile = build_profile("  Ada ", " ada@example.com ")
        assert profile.name == "Ada"
        assert profile.email == "ada@example.com"

    def test_configure_writes_file(self, tmp_path: Path):
        path = tmp_path / ".devutils"
        configure("Ada", "ada@example.com", path=path)
        assert current_config(path).user.email == "ada@example.com"
