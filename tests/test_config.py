"""Tests for loading settings files."""

import pytest

from wlls.config import Settings, find_config, load_settings, parse_file
from wlls.discovery import WalkOptions
from wlls.errors import ConfigError


class TestParseFile:
    """Tests for parsing settings files by suffix."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("recursive: true\n", encoding="utf-8")
        assert parse_file(path) == {"recursive": True}

    def test_toml(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("recursive = true\n", encoding="utf-8")
        assert parse_file(path) == {"recursive": True}

    def test_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text('{"recursive": true}', encoding="utf-8")
        assert parse_file(path) == {"recursive": True}

    def test_unknown_suffix_falls_back_to_yaml(self, tmp_path):
        path = tmp_path / "settings.conf"
        path.write_text("gitignore: true\n", encoding="utf-8")
        assert parse_file(path) == {"gitignore": True}

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="cannot parse"):
            parse_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read"):
            parse_file(tmp_path / "absent.yaml")


class TestLoadSettings:
    """Tests for turning parsed files into Settings."""

    def test_defaults(self):
        settings = load_settings(None)
        assert settings == Settings()
        assert settings.walk_options() == WalkOptions()

    def test_empty_file(self, tmp_path):
        path = tmp_path / ".wlls.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == Settings()

    def test_values_applied(self, tmp_path):
        path = tmp_path / ".wlls.yaml"
        path.write_text(
            "recursive: true\n"
            "skip-missing-refs: true\n"
            "ignore_file: .wllsignore\n"
            "include_hidden: true\n"
            "document_extensions: [md, .markdown]\n",
            encoding="utf-8",
        )

        settings = load_settings(path)

        assert settings.recursive
        assert settings.skip_missing_refs
        assert settings.document_extensions == (".md", ".markdown")
        assert settings.walk_options() == WalkOptions(
            ignore_filename=".wllsignore",
            ignore_hidden=False,
            honor_gitignore=False,
        )

    def test_unknown_key(self, tmp_path):
        path = tmp_path / ".wlls.toml"
        path.write_text("colour = 'blue'\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="unknown setting 'colour'"):
            load_settings(path)

    def test_wrong_type(self, tmp_path):
        path = tmp_path / ".wlls.json"
        path.write_text('{"recursive": "yes"}', encoding="utf-8")
        with pytest.raises(ConfigError, match="must be true or false"):
            load_settings(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / ".wlls.yaml"
        path.write_text("- recursive\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)


class TestFindConfig:
    """Tests for locating the vault settings file."""

    def test_none_present(self, tmp_path):
        assert find_config(tmp_path) is None

    def test_yaml_preferred(self, tmp_path):
        (tmp_path / ".wlls.toml").write_text("", encoding="utf-8")
        (tmp_path / ".wlls.yaml").write_text("", encoding="utf-8")
        assert find_config(tmp_path) == tmp_path / ".wlls.yaml"
