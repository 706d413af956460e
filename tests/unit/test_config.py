"""Unit tests for filed_recipes.config module.

Tests StoreConfig validation, loading, and serialization.
"""

import logging
import tomllib
from pathlib import Path

import pytest

from filed_recipes.config import StoreConfig
from filed_recipes.exceptions import ConfigurationError


class TestStoreConfigDefaults:
    """Tests for StoreConfig default values."""

    def test_default_recipes_file_is_path(self) -> None:
        """Default recipes_file is a Path object."""
        config = StoreConfig()
        assert isinstance(config.recipes_file, Path)
        assert config.recipes_file == Path("recipes.txt")

    def test_default_encoding(self) -> None:
        """Default encoding is UTF-8."""
        assert StoreConfig().encoding == "utf-8"

    def test_atomic_save_on_by_default(self) -> None:
        """Saves go through a temporary file by default."""
        assert StoreConfig().atomic_save is True

    def test_default_logging(self) -> None:
        """Logging defaults to WARNING on stderr."""
        config = StoreConfig()
        assert config.log_level == "WARNING"
        assert config.log_level_value == logging.WARNING
        assert config.log_file is None


class TestStoreConfigValidation:
    """Tests for StoreConfig validation logic."""

    def test_known_encodings_accepted(self) -> None:
        """Any codec Python knows is accepted."""
        for encoding in ("utf-8", "latin-1", "cp1252", "utf-16"):
            assert StoreConfig(encoding=encoding).encoding == encoding

    def test_unknown_encoding_raises(self) -> None:
        """Unknown encodings raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="encoding"):
            StoreConfig(encoding="utf-9")

    def test_log_level_normalized(self) -> None:
        """Level names are case-insensitive and stored upper case."""
        config = StoreConfig(log_level="debug")
        assert config.log_level == "DEBUG"
        assert config.log_level_value == logging.DEBUG

    def test_invalid_log_level_raises(self) -> None:
        """Unknown level names raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="log level"):
            StoreConfig(log_level="LOUD")

    def test_atomic_save_must_be_bool(self) -> None:
        """Strings are not silently accepted as booleans."""
        with pytest.raises(ConfigurationError, match="atomic_save"):
            StoreConfig(atomic_save="maybe")  # type: ignore[arg-type]

    def test_string_paths_converted(self) -> None:
        """String paths become Path objects."""
        config = StoreConfig(recipes_file="data/recipes.txt", log_file="logs/app.log")  # type: ignore[arg-type]
        assert config.recipes_file == Path("data/recipes.txt")
        assert config.log_file == Path("logs/app.log")

    def test_empty_recipes_file_raises(self) -> None:
        """recipes_file must not be empty."""
        with pytest.raises(ConfigurationError, match="recipes_file"):
            StoreConfig(recipes_file="  ")  # type: ignore[arg-type]


class TestStoreConfigLoad:
    """Tests for StoreConfig.load."""

    def test_defaults_when_nothing_configured(self, clean_env: None) -> None:
        """With no files or variables, defaults are used."""
        assert StoreConfig.load() == StoreConfig()

    def test_project_file_in_working_directory(self, clean_env: None, tmp_path: Path) -> None:
        """.filed-recipes.toml in the working directory is picked up."""
        (tmp_path / ".filed-recipes.toml").write_text(
            '[filed-recipes]\nrecipes_file = "mine.txt"\nencoding = "latin-1"\n'
        )
        config = StoreConfig.load()
        assert config.recipes_file == Path("mine.txt")
        assert config.encoding == "latin-1"

    def test_top_level_keys_without_section(self, clean_env: None, tmp_path: Path) -> None:
        """A TOML file without the section table is read as-is."""
        path = tmp_path / "custom.toml"
        path.write_text("atomic_save = false\n")
        assert StoreConfig.load(path).atomic_save is False

    def test_user_file_overridden_by_project_file(self, clean_env: None, tmp_path: Path) -> None:
        """The project file wins over the user file."""
        user_dir = tmp_path / "home" / ".config" / "filed-recipes"
        user_dir.mkdir(parents=True)
        (user_dir / "config.toml").write_text('encoding = "latin-1"\nlog_level = "INFO"\n')
        (tmp_path / ".filed-recipes.toml").write_text('encoding = "cp1252"\n')

        config = StoreConfig.load()
        assert config.encoding == "cp1252"
        assert config.log_level == "INFO"

    def test_user_file_can_be_skipped(self, clean_env: None, tmp_path: Path) -> None:
        """load_user_config=False ignores the user file."""
        user_dir = tmp_path / "home" / ".config" / "filed-recipes"
        user_dir.mkdir(parents=True)
        (user_dir / "config.toml").write_text('encoding = "latin-1"\n')

        assert StoreConfig.load(load_user_config=False).encoding == "utf-8"

    def test_env_overrides_files(
        self, clean_env: None, mock_env: dict[str, str], tmp_path: Path
    ) -> None:
        """FILED_RECIPES_* variables win over config files."""
        (tmp_path / ".filed-recipes.toml").write_text('encoding = "cp1252"\n')
        mock_env["ENCODING"] = "latin-1"
        mock_env["ATOMIC_SAVE"] = "false"
        mock_env["RECIPES_FILE"] = "env.txt"

        config = StoreConfig.load()
        assert config.encoding == "latin-1"
        assert config.atomic_save is False
        assert config.recipes_file == Path("env.txt")

    def test_env_can_be_skipped(self, clean_env: None, mock_env: dict[str, str]) -> None:
        """load_env=False ignores environment variables."""
        mock_env["ENCODING"] = "latin-1"
        assert StoreConfig.load(load_env=False).encoding == "utf-8"

    def test_missing_explicit_file_raises(self, clean_env: None, tmp_path: Path) -> None:
        """An explicit config path must exist."""
        with pytest.raises(ConfigurationError, match="not found"):
            StoreConfig.load(tmp_path / "nope.toml")

    def test_invalid_toml_raises(self, clean_env: None, tmp_path: Path) -> None:
        """Malformed TOML raises ConfigurationError."""
        path = tmp_path / "bad.toml"
        path.write_text("encoding = \n")
        with pytest.raises(ConfigurationError, match="Failed to load"):
            StoreConfig.load(path)

    def test_unknown_keys_raise(self, clean_env: None, mock_env: dict[str, str]) -> None:
        """Unknown settings are reported rather than passed to the constructor."""
        mock_env["COLOUR"] = "blue"
        with pytest.raises(ConfigurationError, match="Unknown configuration keys"):
            StoreConfig.load()


class TestStoreConfigSerialization:
    """Tests for to_dict, save and update."""

    def test_to_dict_stringifies_paths(self) -> None:
        """Paths become strings and None values are dropped."""
        result = StoreConfig().to_dict()
        assert result["recipes_file"] == "recipes.txt"
        assert "log_file" not in result

    def test_save_and_load(self, clean_env: None, tmp_path: Path) -> None:
        """A saved config loads back equal."""
        config = StoreConfig(encoding="latin-1", atomic_save=False, log_file=Path("app.log"))
        path = tmp_path / "out" / "config.toml"
        config.save(path)

        with open(path, "rb") as f:
            assert "filed-recipes" in tomllib.load(f)
        assert StoreConfig.load(path, load_user_config=False, load_env=False) == config

    def test_update_revalidates(self) -> None:
        """update() applies values and validates them."""
        config = StoreConfig()
        config.update(encoding="latin-1", recipes_file="other.txt")
        assert config.encoding == "latin-1"
        assert config.recipes_file == Path("other.txt")

        with pytest.raises(ConfigurationError):
            config.update(encoding="nope")

    def test_update_unknown_key_raises(self) -> None:
        """update() rejects unknown keys."""
        with pytest.raises(ConfigurationError, match="Unknown configuration key"):
            StoreConfig().update(colour="blue")
