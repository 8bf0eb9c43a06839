"""Tests for configuration reading and updating."""

from pathlib import Path

import pytest

from huaci.config import (
    TEMPLATE_PATH,
    Config,
    ConfigStore,
    PartialConfig,
    detect_portable,
    get_config_path,
)
from huaci.errors import (
    ConfigIOError,
    ConfigNotFound,
    ConfigParseError,
    ConfigSchemaError,
    InvalidConfigValue,
    MissingConfigKey,
)


def test_read(config_path: Path) -> None:
    """Test reading of a valid configuration."""

    assert ConfigStore(config_path, portable=True).read() == Config(
        anki_connect_url="http://localhost:8765",
        deck_name="English",
        model_name="Basic",
    )


def test_serialization_aliases(config_path: Path) -> None:
    """Test names used by the surrounding application."""

    assert ConfigStore(config_path, portable=True).read().model_dump(
        by_alias=True
    ) == {
        "ankiConnectURL": "http://localhost:8765",
        "deckName": "English",
        "modelName": "Basic",
    }


def test_commit_partial(config_path: Path) -> None:
    """Test that only fields present in the partial config are changed."""

    store: ConfigStore = ConfigStore(config_path, portable=True)
    store.commit(PartialConfig(deck_name="Japanese"))

    assert store.read() == Config(
        anki_connect_url="http://localhost:8765",
        deck_name="Japanese",
        model_name="Basic",
    )


def test_commit_preserves_document(config_path: Path) -> None:
    """Test that comments, formatting, and unknown keys are kept."""

    store: ConfigStore = ConfigStore(config_path, portable=True)
    store.commit(
        PartialConfig.model_validate(
            {"ankiConnectURL": "http://127.0.0.1:8765", "modelName": "Cloze"}
        )
    )

    assert config_path.read_text(encoding="utf-8") == (
        "# Anki settings.\n"
        'anki-connect-url = "http://127.0.0.1:8765"\n'
        'deck-name = "English"\n'
        "\n"
        'model-name = "Cloze"\n'
        'theme = "dark"  # not used by Huaci\n'
    )


def test_commit_preserves_line_endings(tmp_path: Path) -> None:
    """Test that Windows line endings are written back as they were."""

    config_path: Path = tmp_path / "config.toml"
    config_path.write_bytes(
        b"# Anki settings.\r\n"
        b'anki-connect-url = "http://localhost:8765"\r\n'
        b'deck-name = "English"\r\n'
        b'model-name = "Basic"\r\n'
    )
    ConfigStore(config_path, portable=True).commit(
        PartialConfig(deck_name="Japanese")
    )

    assert config_path.read_bytes() == (
        b"# Anki settings.\r\n"
        b'anki-connect-url = "http://localhost:8765"\r\n'
        b'deck-name = "Japanese"\r\n'
        b'model-name = "Basic"\r\n'
    )


def test_commit_empty(config_path: Path) -> None:
    """Test that empty partial config does not write the file."""

    modified_time: int = config_path.stat().st_mtime_ns
    ConfigStore(config_path, portable=True).commit(PartialConfig())

    assert config_path.stat().st_mtime_ns == modified_time


def test_commit_empty_missing_file(tmp_path: Path) -> None:
    """Test that empty partial config still requires a readable file."""

    store: ConfigStore = ConfigStore(tmp_path / "config.toml", portable=True)

    with pytest.raises(ConfigIOError):
        store.commit(PartialConfig())


def test_commit_empty_malformed_file(tmp_path: Path) -> None:
    """Test that empty partial config still requires a valid document."""

    config_path: Path = tmp_path / "config.toml"
    config_path.write_text("deck-name = ", encoding="utf-8")

    with pytest.raises(ConfigParseError):
        ConfigStore(config_path, portable=True).commit(PartialConfig())


def test_commit_missing_file(tmp_path: Path) -> None:
    """Test that missing file cannot be updated."""

    store: ConfigStore = ConfigStore(tmp_path / "config.toml", portable=False)

    with pytest.raises(ConfigIOError):
        store.commit(PartialConfig(deck_name="English"))


def test_missing_key(tmp_path: Path) -> None:
    """Test that missing key is a schema error, not an I/O error."""

    path: Path = tmp_path / "config.toml"
    path.write_text(
        'anki-connect-url = "http://localhost:8765"\nmodel-name = "Basic"\n',
        encoding="utf-8",
    )

    with pytest.raises(MissingConfigKey) as error_info:
        ConfigStore(path, portable=True).read()

    assert error_info.value.key == "deck-name"
    assert isinstance(error_info.value, ConfigSchemaError)
    assert not isinstance(error_info.value, ConfigIOError)


def test_wrong_type(tmp_path: Path) -> None:
    """Test that non-string value is reported."""

    path: Path = tmp_path / "config.toml"
    path.write_text(
        'anki-connect-url = "http://localhost:8765"\n'
        "deck-name = 42\n"
        'model-name = "Basic"\n',
        encoding="utf-8",
    )

    with pytest.raises(InvalidConfigValue) as error_info:
        ConfigStore(path, portable=True).read()

    assert error_info.value.key == "deck-name"


def test_malformed(tmp_path: Path) -> None:
    """Test that invalid TOML is a parse error."""

    path: Path = tmp_path / "config.toml"
    path.write_text('deck-name = "English\n', encoding="utf-8")

    with pytest.raises(ConfigParseError):
        ConfigStore(path, portable=True).read()


def test_portable_missing(tmp_path: Path) -> None:
    """Test that missing file is an error in portable mode."""

    path: Path = tmp_path / "config.toml"

    with pytest.raises(ConfigNotFound):
        ConfigStore(path, portable=True).read()
    assert not path.exists()


def test_installed_bootstrap(tmp_path: Path) -> None:
    """Test that missing file is created from template in installed mode."""

    path: Path = tmp_path / "user" / "huaci" / "config.toml"
    config: Config = ConfigStore(path, portable=False).read()

    assert path.read_bytes() == TEMPLATE_PATH.read_bytes()
    assert config.anki_connect_url == "http://localhost:8765"


def test_missing_template(tmp_path: Path) -> None:
    """Test that failed bootstrap is an I/O error."""

    store: ConfigStore = ConfigStore(
        tmp_path / "config.toml",
        portable=False,
        template_path=tmp_path / "missing-template.toml",
    )

    with pytest.raises(ConfigIOError):
        store.read()


def test_detect_portable(tmp_path: Path) -> None:
    """Test portable mode detection and path selection."""

    assert not detect_portable(tmp_path)
    assert get_config_path(False, tmp_path) != tmp_path / "config.toml"

    (tmp_path / "config.toml").touch()

    assert detect_portable(tmp_path)
    assert get_config_path(True, tmp_path) == tmp_path / "config.toml"
