"""Watcher for external changes of the configuration file.

File system events are collected by a `watchdog` observer and debounced by a
single background thread: a batch of events is handled only when no new event
arrived during the debounce window.  After each batch the file is checked
again, so that deleting the file does not look like a change.
"""

import logging
import queue
import threading
from collections.abc import Callable
from pathlib import Path
from typing import override

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from huaci.errors import ConfigIOError
from huaci.util import GuardedLock

DEFAULT_DEBOUNCE_WINDOW: float = 2.0
"""Time in seconds to wait for new events before handling the batch."""

HEALTH_CHECK_INTERVAL: float = 1.0
"""Time in seconds between checks of the observer thread."""


class FileEventHandler(FileSystemEventHandler):
    """Forward events that touch one file to the queue."""

    def __init__(self, path: Path, events: queue.Queue) -> None:
        self.path: Path = path
        self.events: queue.Queue = events

    def touches(self, event: FileSystemEvent) -> bool:
        """Check whether the event concerns the watched file."""
        paths: list[str | bytes] = [event.src_path]
        if dest_path := getattr(event, "dest_path", ""):
            paths.append(dest_path)
        for path in paths:
            if isinstance(path, bytes):
                path = path.decode()
            if Path(path) == self.path:
                return True
        return False

    @override
    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or not self.touches(event):
            return
        self.events.put(event)


class ConfigWatcher:
    """Watcher of one file with two states: stopped and watching.

    Once started, the watcher runs until the process ends.
    """

    def __init__(
        self,
        path: Path,
        on_change: Callable[[], None],
        on_error: Callable[[], None],
        debounce_window: float = DEFAULT_DEBOUNCE_WINDOW,
    ) -> None:
        """
        :param path: path to the watched file
        :param on_change: called when the file was changed and still exists
        :param on_error: called when the underlying observer fails
        :param debounce_window: time in seconds to coalesce events over
        """
        self.path: Path = path.absolute()
        self.on_change: Callable[[], None] = on_change
        self.on_error: Callable[[], None] = on_error
        self.debounce_window: float = debounce_window

        self.lock: GuardedLock = GuardedLock("is_watching")
        self.is_watching: bool = False

        self.events: queue.Queue = queue.Queue()
        self._stopped: threading.Event = threading.Event()
        self._observer: BaseObserver | None = None
        self._thread: threading.Thread | None = None

    def start(self) -> bool:
        """Start watching.

        :return: true if the watcher was started, false if it was already
            watching
        """
        with self.lock.hold():
            if self.is_watching:
                return False

            try:
                self._observer = self._schedule()
            except OSError as error:
                raise ConfigIOError(
                    f"failed to watch file change for {self.path}: {error}",
                    self.path,
                ) from error
            self._stopped.clear()
            self._thread = threading.Thread(
                target=self._run, name="config-watcher", daemon=True
            )
            self._thread.start()
            self.is_watching = True

        logging.info(
            "Watching `%s` with debounce window %s s.",
            self.path,
            self.debounce_window,
        )
        return True

    def stop(self) -> None:
        """Stop watching and wait for the background thread."""
        with self.lock.hold():
            if not self.is_watching:
                return
            self._stopped.set()
            if self._observer is not None:
                self._observer.stop()
                self._observer.join()
            if self._thread is not None:
                self._thread.join()
            self.is_watching = False

    def _schedule(self) -> BaseObserver:
        """Create and start an observer for the parent directory."""
        observer: BaseObserver = Observer()
        observer.schedule(
            FileEventHandler(self.path, self.events),
            str(self.path.parent),
            recursive=False,
        )
        observer.daemon = True
        observer.start()
        return observer

    def _collect_batch(self) -> list[FileSystemEvent] | None:
        """Wait for events and coalesce them over the debounce window.

        :return: events of the batch or `None` if no event arrived before
            the health check interval passed
        """
        try:
            first: FileSystemEvent = self.events.get(
                timeout=HEALTH_CHECK_INTERVAL
            )
        except queue.Empty:
            return None

        batch: list[FileSystemEvent] = [first]
        while not self._stopped.is_set():
            try:
                batch.append(self.events.get(timeout=self.debounce_window))
            except queue.Empty:
                break
        return batch

    def handle_batch(self, batch: list[FileSystemEvent]) -> bool:
        """Report the change if the file still exists.

        :param batch: debounced events
        :return: true if the change was reported
        """
        try:
            exists: bool = self.path.exists()
        except OSError:
            exists = False

        if not exists:
            logging.debug(
                "`%s` does not exist after %d events, ignoring.",
                self.path,
                len(batch),
            )
            return False

        logging.debug("`%s` changed (%d events).", self.path, len(batch))
        self._notify(self.on_change)
        return True

    def check_observer(self) -> bool:
        """Restart the observer if its thread has died.

        :return: true if the observer is alive
        """
        if (
            self._stopped.is_set()
            or self._observer is None
            or self._observer.is_alive()
        ):
            return True

        logging.error("Observer for `%s` stopped unexpectedly.", self.path)
        self._notify(self.on_error)
        try:
            self._observer = self._schedule()
        except OSError as error:
            logging.error("Failed to restart observer: %s", error)
        return False

    @staticmethod
    def _notify(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:  # pylint: disable=broad-exception-caught
            logging.exception("Notification callback failed.")

    def _run(self) -> None:
        while not self._stopped.is_set():
            batch: list[FileSystemEvent] | None = self._collect_batch()
            if batch is not None and not self._stopped.is_set():
                self.handle_batch(batch)
            if not self._stopped.is_set():
                self.check_observer()
