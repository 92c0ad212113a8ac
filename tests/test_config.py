from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from depmirror.config import (
    DepMirrorConfig,
    _parse_section,
    _pyproject_has_section,
    _read_toml,
    discover_config_file,
    load_config,
)
from depmirror.exceptions import ConfigError


@pytest.mark.unit
class TestDepMirrorConfig:
    """Tests for DepMirrorConfig dataclass."""

    def test_defaults(self) -> None:
        config = DepMirrorConfig()

        assert config.registry_file is None
        assert config.manifest_path == Path("Cargo.toml")
        assert config.cargo == "cargo"
        assert config.artifact_suffix == ""
        assert config.backup is False
        assert config.source_path is None

    def test_to_log_dict(self) -> None:
        """Test to_log_dict omits the source path."""
        config = DepMirrorConfig(
            registry_file=Path("mirror/crates.txt"),
            source_path=Path("/ws/depmirror.toml"),
        )

        result = config.to_log_dict()

        assert result["registry_file"] == str(Path("mirror/crates.txt"))
        assert result["manifest_path"] == "Cargo.toml"
        assert "source_path" not in result


@pytest.mark.unit
class TestDiscoverConfigFile:
    """Tests for discover_config_file function."""

    def test_explicit_path_priority(self, tmp_path: Path) -> None:
        """Test explicit path wins over auto-discovered files."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[depmirror]\n", encoding="utf-8")
        (tmp_path / "depmirror.toml").write_text("[depmirror]\n", encoding="utf-8")

        with patch("depmirror.config.Path.cwd", return_value=tmp_path):
            result = discover_config_file(config_file)

        assert result == config_file.resolve()

    def test_explicit_path_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            discover_config_file(tmp_path / "missing.toml")

    def test_dedicated_file_before_pyproject(self, tmp_path: Path) -> None:
        (tmp_path / "depmirror.toml").write_text("[depmirror]\n", encoding="utf-8")
        (tmp_path / "pyproject.toml").write_text("[tool.depmirror]\n", encoding="utf-8")

        with patch("depmirror.config.Path.cwd", return_value=tmp_path):
            result = discover_config_file()

        assert result == tmp_path / "depmirror.toml"

    def test_pyproject_with_section(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[tool.depmirror]\nbackup = true\n', encoding="utf-8"
        )

        with patch("depmirror.config.Path.cwd", return_value=tmp_path):
            result = discover_config_file()

        assert result == tmp_path / "pyproject.toml"

    def test_pyproject_without_section_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.black]\nline-length = 88\n', encoding="utf-8")

        with patch("depmirror.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None

    def test_nothing_found(self, tmp_path: Path) -> None:
        with patch("depmirror.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        with patch("depmirror.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config == DepMirrorConfig()

    def test_dedicated_file(self, tmp_path: Path) -> None:
        """Test values are loaded and paths resolved against the config dir."""
        config_file = tmp_path / "depmirror.toml"
        config_file.write_text(
            "[depmirror]\n"
            'registry_file = "mirror/crates.txt"\n'
            'manifest_path = "app/Cargo.toml"\n'
            'cargo = "/opt/cargo/bin/cargo"\n'
            'artifact_suffix = ".crate"\n'
            "backup = true\n",
            encoding="utf-8",
        )

        config = load_config(config_file)

        assert config.registry_file == tmp_path.resolve() / "mirror" / "crates.txt"
        assert config.manifest_path == tmp_path.resolve() / "app" / "Cargo.toml"
        assert config.cargo == "/opt/cargo/bin/cargo"
        assert config.artifact_suffix == ".crate"
        assert config.backup is True
        assert config.source_path == config_file.resolve()

    def test_pyproject_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.depmirror]\nregistry_file = "crates.txt"\n', encoding="utf-8")

        config = load_config(pyproject)

        assert config.registry_file == tmp_path.resolve() / "crates.txt"

    def test_empty_section_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "depmirror.toml"
        config_file.write_text("# nothing here\n", encoding="utf-8")

        config = load_config(config_file)

        assert config.registry_file is None
        assert config.source_path == config_file.resolve()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "depmirror.toml"
        config_file.write_text("[depmirror\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(config_file)


@pytest.mark.unit
class TestParseSection:
    """Tests for _parse_section validation."""

    def _parse(self, section: dict) -> DepMirrorConfig:
        return _parse_section(section, base_dir=Path("/ws"), config_path="/ws/depmirror.toml")

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="Unknown configuration keys: registry"):
            self._parse({"registry": "crates.txt"})

    def test_wrong_string_type(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            self._parse({"registry_file": 42})

        assert exc_info.value.option == "registry_file"

    def test_wrong_bool_type(self) -> None:
        with pytest.raises(ConfigError, match="backup must be a boolean"):
            self._parse({"backup": "yes"})

    def test_empty_cargo(self) -> None:
        with pytest.raises(ConfigError, match="cargo must not be empty"):
            self._parse({"cargo": "  "})


@pytest.mark.unit
class TestReadToml:
    """Tests for TOML helpers."""

    def test_read_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "depmirror.toml"
        path.write_text('[depmirror]\ncargo = "cargo"\n', encoding="utf-8")

        assert _read_toml(path) == {"depmirror": {"cargo": "cargo"}}

    def test_unreadable_pyproject_has_no_section(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("not = [valid", encoding="utf-8")

        assert _pyproject_has_section(path) is False
