"""Tests for config loading."""

from pathlib import Path

import pytest

from pivotal_tracker.services import CONFIG_FILE, ConfigError, default_config_paths, load_config


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Create a temporary home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


class TestDefaultConfigPaths:
    """Tests for default_config_paths."""

    def test_home_then_cwd(self, home_dir: Path, tmp_path: Path):
        """Home config comes before the project-local one."""
        paths = default_config_paths(home=home_dir, cwd=tmp_path)

        assert paths == [home_dir / CONFIG_FILE, tmp_path / CONFIG_FILE]

    def test_override_last(self, home_dir: Path, tmp_path: Path):
        """An explicit file has the highest precedence."""
        override = tmp_path / "custom.yml"
        paths = default_config_paths(home=home_dir, cwd=tmp_path, override=override)

        assert paths[-1] == override

    def test_cwd_is_home(self, home_dir: Path):
        """Running from the home directory does not list the file twice."""
        paths = default_config_paths(home=home_dir, cwd=home_dir)

        assert paths == [home_dir / CONFIG_FILE]


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_single_file(self, home_dir: Path):
        """A valid file loads into TrackerConfig."""
        config_file = home_dir / CONFIG_FILE
        config_file.write_text(
            """
General:
  APIKey: abc123
  Me: Alice
  DefaultProject: website
Projects:
  website: 42
  mobile: 77
"""
        )

        config = load_config([config_file])

        assert config.api_key == "abc123"
        assert config.me == "Alice"
        assert config.projects == {"website": 42, "mobile": 77}
        assert config.default_project_id == 42

    def test_later_files_override(self, home_dir: Path, tmp_path: Path):
        """Later files override keys and add projects."""
        global_file = home_dir / CONFIG_FILE
        global_file.write_text(
            """
General:
  APIKey: global-key
  Me: Alice
Projects:
  website: 42
"""
        )
        local_file = tmp_path / CONFIG_FILE
        local_file.write_text(
            """
General:
  APIKey: local-key
  DefaultProject: mobile
Projects:
  mobile: 77
"""
        )

        config = load_config([global_file, local_file])

        assert config.api_key == "local-key"
        assert config.me == "Alice"
        assert config.projects == {"website": 42, "mobile": 77}
        assert config.default_project_id == 77

    def test_missing_files_are_skipped(self, home_dir: Path):
        """Missing files do not prevent loading the others."""
        config_file = home_dir / CONFIG_FILE
        config_file.write_text("General:\n  APIKey: abc\n")

        config = load_config([home_dir / "missing.yml", config_file])

        assert config.api_key == "abc"

    def test_missing_required_file_raises(self, home_dir: Path, tmp_path: Path):
        """An explicitly named file that does not exist is an error, even if others load."""
        config_file = home_dir / CONFIG_FILE
        config_file.write_text("General:\n  APIKey: abc\n")
        typo = tmp_path / "typo.yml"

        with pytest.raises(ConfigError) as exc_info:
            load_config([config_file, typo], required=[typo])
        assert str(exc_info.value) == f"Config file not found: {typo}"

    def test_existing_required_file_loads(self, home_dir: Path, tmp_path: Path):
        """A required file that exists is merged like any other."""
        config_file = home_dir / CONFIG_FILE
        config_file.write_text("General:\n  APIKey: abc\n")
        custom = tmp_path / "custom.yml"
        custom.write_text("General:\n  Me: Alice\n")

        config = load_config([config_file, custom], required=[custom])

        assert config.api_key == "abc"
        assert config.me == "Alice"

    def test_no_files_raises(self, home_dir: Path):
        """ConfigError when no candidate file exists."""
        with pytest.raises(ConfigError) as exc_info:
            load_config([home_dir / CONFIG_FILE])
        assert "No config file found" in str(exc_info.value)

    def test_empty_file_skipped(self, home_dir: Path, tmp_path: Path):
        """Empty files are skipped."""
        empty = home_dir / CONFIG_FILE
        empty.write_text("")
        real = tmp_path / CONFIG_FILE
        real.write_text("General:\n  APIKey: abc\n")

        assert load_config([empty, real]).api_key == "abc"

    def test_invalid_yaml_raises(self, home_dir: Path):
        """Malformed YAML raises ConfigError naming the file."""
        config_file = home_dir / CONFIG_FILE
        config_file.write_text("General: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config([config_file])
        assert "Invalid YAML" in str(exc_info.value)

    def test_non_mapping_raises(self, home_dir: Path):
        """A top-level list is rejected."""
        config_file = home_dir / CONFIG_FILE
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            load_config([config_file])

    def test_unknown_default_project_raises(self, home_dir: Path):
        """DefaultProject must be a configured project."""
        config_file = home_dir / CONFIG_FILE
        config_file.write_text(
            """
General:
  DefaultProject: nope
Projects:
  website: 42
"""
        )

        with pytest.raises(ConfigError) as exc_info:
            load_config([config_file])
        assert "Invalid configuration" in str(exc_info.value)

    def test_negative_project_id_raises(self, home_dir: Path):
        """Project IDs must be positive."""
        config_file = home_dir / CONFIG_FILE
        config_file.write_text("Projects:\n  website: -5\n")

        with pytest.raises(ConfigError):
            load_config([config_file])
