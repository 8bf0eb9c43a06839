"""Configuration of Huaci: the TOML file with Anki settings.

The configuration file looks like this:

    anki-connect-url = "http://localhost:8765"
    deck-name = "Huaci"
    model-name = "Huaci word"

Huaci only reads and updates these three keys.  Any other keys, comments, and
formatting are preserved when the file is updated.
"""

import logging
import shutil
from pathlib import Path

import tomlkit
from platformdirs import user_config_dir
from pydantic import BaseModel, ConfigDict, Field
from tomlkit import TOMLDocument
from tomlkit.exceptions import TOMLKitError

from huaci import RESOURCES_DIRECTORY
from huaci.errors import (
    ConfigIOError,
    ConfigNotFound,
    ConfigParseError,
    InvalidConfigValue,
    MissingConfigKey,
)
from huaci.util import write_atomic

APPLICATION_NAME: str = "huaci"
CONFIGURATION_FILE_NAME: str = "config.toml"
TEMPLATE_PATH: Path = RESOURCES_DIRECTORY / "config-template.toml"

TOML_KEYS: dict[str, str] = {
    "anki_connect_url": "anki-connect-url",
    "deck_name": "deck-name",
    "model_name": "model-name",
}
"""Mapping from field names to keys of the TOML document."""


class Config(BaseModel):
    """Configuration of Anki interaction."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    anki_connect_url: str = Field(alias="ankiConnectURL")
    """URL of the AnkiConnect service."""

    deck_name: str = Field(alias="deckName")
    """Name of the deck to add lookup results to."""

    model_name: str = Field(alias="modelName")
    """Name of the note type used for lookup results."""


class PartialConfig(BaseModel):
    """Modified fields of the configuration.

    Fields that are `None` are not modified.
    """

    model_config = ConfigDict(populate_by_name=True)

    anki_connect_url: str | None = Field(default=None, alias="ankiConnectURL")
    deck_name: str | None = Field(default=None, alias="deckName")
    model_name: str | None = Field(default=None, alias="modelName")

    def get_modified(self) -> dict[str, str]:
        """Get modified fields as a mapping from TOML keys to values."""
        return {
            TOML_KEYS[name]: value
            for name, value in self.model_dump().items()
            if value is not None
        }


def detect_portable(executable_directory: Path) -> bool:
    """Check whether Huaci runs in portable mode.

    Huaci is portable if the configuration file lies beside the executable.

    :param executable_directory: directory of the running application
    """
    config_path: Path = executable_directory / CONFIGURATION_FILE_NAME
    try:
        return config_path.exists()
    except OSError as error:
        raise ConfigIOError(
            f"failed to detect if {CONFIGURATION_FILE_NAME} exists: {error}",
            config_path,
        ) from error


def get_config_path(portable: bool, executable_directory: Path) -> Path:
    """Get the path to the configuration file.

    :param portable: whether Huaci runs in portable mode
    :param executable_directory: directory of the running application
    """
    if portable:
        return executable_directory / CONFIGURATION_FILE_NAME
    return Path(user_config_dir(APPLICATION_NAME)) / CONFIGURATION_FILE_NAME


def copy_template_config(template_path: Path, config_path: Path) -> None:
    """Copy the configuration template to the configuration file path.

    :param template_path: path to the bundled template
    :param config_path: path to the configuration file to create
    """
    logging.info(
        "Creating configuration `%s` from template `%s`...",
        config_path,
        template_path,
    )
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise ConfigIOError(
            f"failed to create directory {config_path.parent}: {error}",
            config_path,
        ) from error
    try:
        shutil.copyfile(template_path, config_path)
    except OSError as error:
        raise ConfigIOError(
            f"failed to copy template config from {template_path} to "
            f"{config_path}: {error}",
            config_path,
        ) from error


def parse_config_document(config_path: Path) -> TOMLDocument:
    """Read the configuration file as a format-preserving TOML document.

    :param config_path: path to the configuration file
    """
    try:
        # Keep line endings as they are in the file.
        with config_path.open(encoding="utf-8", newline="") as config_file:
            text: str = config_file.read()
    except OSError as error:
        raise ConfigIOError(
            f"failed to read config file {config_path}: {error}", config_path
        ) from error
    except UnicodeDecodeError as error:
        raise ConfigParseError(
            f"failed to decode config file {config_path}: {error}",
            config_path,
        ) from error

    try:
        return tomlkit.parse(text)
    except TOMLKitError as error:
        raise ConfigParseError(
            f"failed to parse toml from config file {config_path}: {error}",
            config_path,
        ) from error


def get_string(document: TOMLDocument, key: str) -> str:
    """Get required string value from the document.

    :param document: parsed configuration
    :param key: TOML key
    """
    if key not in document:
        raise MissingConfigKey(f'toml key "{key}" does not exist', key)

    value = document[key]
    if not isinstance(value, str):
        raise InvalidConfigValue(
            f'the value of "{key}" is not a string', key
        )
    return str(value)


class ConfigStore:
    """Manager of the configuration file.

    In portable mode the configuration file must exist.  Otherwise, a missing
    configuration file is created from the bundled template on first read.
    """

    def __init__(
        self,
        path: Path,
        portable: bool,
        template_path: Path = TEMPLATE_PATH,
    ) -> None:
        self.path: Path = path
        self.is_portable: bool = portable
        self.template_path: Path = template_path

    def ensure_exists(self) -> None:
        """Bootstrap the configuration file if it is allowed."""
        try:
            exists: bool = self.path.exists()
        except OSError as error:
            raise ConfigIOError(
                f"failed to detect if {self.path} exists: {error}", self.path
            ) from error

        if exists:
            return

        if self.is_portable:
            raise ConfigNotFound(
                f"{CONFIGURATION_FILE_NAME} does not exist", self.path
            )
        copy_template_config(self.template_path, self.path)

    def read(self) -> Config:
        """Read the configuration.

        All three keys must be present and have string values.
        """
        self.ensure_exists()
        document: TOMLDocument = parse_config_document(self.path)

        values: dict[str, str] = {
            name: get_string(document, key) for name, key in TOML_KEYS.items()
        }
        return Config(**values)

    def commit(self, modified: PartialConfig) -> None:
        """Write modified fields to the configuration file.

        Fields that are not set in `modified` keep their values, the rest of
        the document is written back as it was.

        :param modified: fields to update
        """
        document: TOMLDocument = parse_config_document(self.path)

        values: dict[str, str] = modified.get_modified()
        if not values:
            return

        for key, value in values.items():
            document[key] = value

        logging.info(
            "Updating `%s` in `%s`...", "`, `".join(values.keys()), self.path
        )
        try:
            write_atomic(self.path, tomlkit.dumps(document))
        except OSError as error:
            raise ConfigIOError(
                f"failed to write to config file {self.path}: {error}",
                self.path,
            ) from error
