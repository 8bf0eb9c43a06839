"""Application context: the state shared by all Huaci commands.

The context is constructed once at startup and holds everything that has to
outlive one command: the mode, paths, the dictionary connection, the
configuration watcher, and the notification queue.
"""

import logging
import queue
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Self

from huaci import RESOURCES_DIRECTORY, shell
from huaci.config import (
    Config,
    ConfigStore,
    PartialConfig,
    detect_portable,
    get_config_path,
)
from huaci.dictionary.core import (
    CollinsEntry,
    DictionaryDatabase,
    LookupResult,
    OxfordEntry,
)
from huaci.util import get_executable_directory
from huaci.watcher import DEFAULT_DEBOUNCE_WINDOW, ConfigWatcher

DICTIONARY_FILE_NAME: str = "dict.db"
PORTABLE_RESOURCES_DIRECTORY_NAME: str = "resources"


class Notification(Enum):
    """Notification sent to the surrounding application."""

    CONFIG_CHANGED = "config-changed"
    """Configuration file was changed by someone else."""

    CONFIG_WATCHER_ERROR = "config-watcher-error"
    """Configuration watcher failed."""


def get_dictionary_path(portable: bool, executable_directory: Path) -> Path:
    """Get the path to the bundled dictionary database.

    :param portable: whether Huaci runs in portable mode
    :param executable_directory: directory of the running application
    """
    if portable:
        return (
            executable_directory
            / PORTABLE_RESOURCES_DIRECTORY_NAME
            / DICTIONARY_FILE_NAME
        )
    return RESOURCES_DIRECTORY / DICTIONARY_FILE_NAME


@dataclass
class Application:
    """Registry of the state shared by Huaci commands."""

    portable: bool
    """Whether the configuration file lies beside the executable."""

    config_store: ConfigStore
    """Manager of the configuration file."""

    dictionary: DictionaryDatabase
    """Bundled dictionary database."""

    notifications: queue.Queue
    """Queue of `Notification` for the surrounding application."""

    watcher: ConfigWatcher
    """Watcher of the configuration file, started on demand."""

    @classmethod
    def from_directory(
        cls,
        executable_directory: Path | None = None,
        dictionary_path: Path | None = None,
        config_path: Path | None = None,
        debounce_window: float = DEFAULT_DEBOUNCE_WINDOW,
    ) -> Self:
        """Initialize the application state.

        The mode is decided here once and never changes.

        :param executable_directory: directory of the running application,
            used to detect portable mode
        :param dictionary_path: path to the dictionary database, by default
            it depends on the mode
        :param config_path: path to the configuration file, by default it
            depends on the mode
        :param debounce_window: debounce window of the configuration watcher
        """
        if executable_directory is None:
            executable_directory = get_executable_directory()

        portable: bool = detect_portable(executable_directory)
        if config_path is None:
            config_path = get_config_path(portable, executable_directory)
        if dictionary_path is None:
            dictionary_path = get_dictionary_path(
                portable, executable_directory
            )

        logging.debug(
            "Mode: %s, configuration: `%s`, dictionary: `%s`.",
            "portable" if portable else "installed",
            config_path,
            dictionary_path,
        )

        notifications: queue.Queue = queue.Queue()
        watcher: ConfigWatcher = ConfigWatcher(
            config_path,
            lambda: notifications.put(Notification.CONFIG_CHANGED),
            lambda: notifications.put(Notification.CONFIG_WATCHER_ERROR),
            debounce_window,
        )
        return cls(
            portable,
            ConfigStore(config_path, portable),
            DictionaryDatabase(dictionary_path),
            notifications,
            watcher,
        )

    # Configuration commands.

    def read_config(self) -> Config:
        return self.config_store.read()

    def commit_config(self, modified: PartialConfig) -> None:
        self.config_store.commit(modified)

    def config_path(self) -> str:
        return str(self.config_store.path)

    def is_portable(self) -> bool:
        return self.portable

    def start_config_watcher(self) -> bool:
        """Start the watcher.

        :return: true if the watcher was started, false if it was already
            watching
        """
        return self.watcher.start()

    # Dictionary commands.

    def search_collins(self, word: str) -> list[CollinsEntry]:
        return self.dictionary.search_collins(word)

    def search_oxford(self, word: str) -> list[OxfordEntry]:
        return self.dictionary.search_oxford(word)

    def get_word_base(self, word: str) -> str | None:
        return self.dictionary.get_word_base(word)

    def lookup(self, word: str, auto_convert: bool = True) -> LookupResult:
        return self.dictionary.lookup(word, auto_convert)

    # Shell commands.

    @staticmethod
    def show_in_explorer(path: str) -> None:
        shell.show_in_explorer(path)

    @staticmethod
    def open_filepath(path: str) -> None:
        shell.open_filepath(path)

    @staticmethod
    def open_in_browser(url: str) -> None:
        shell.open_in_browser(url)

    @staticmethod
    def sanitize_filename(file_name: str) -> str:
        return shell.sanitize_filename(file_name)

    def close(self) -> None:
        """Stop the watcher and close the dictionary connection."""
        self.watcher.stop()
        if self.dictionary.lock.is_poisoned:
            logging.warning("Dictionary lock is poisoned, not closing.")
            return
        self.dictionary.close()
