"""Utility functions."""

import logging
import shutil
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from huaci.errors import HuaciError, LockError


def write_atomic(path: Path, data: str) -> None:
    """Write data to a file atomically.

    If the path is a symbolic link, its target is replaced.  Permissions of
    the existing file are kept.
    """
    path = path.resolve()

    # Write to a temporary file.
    temp_path: Path = path.with_suffix(path.suffix + ".tmp")
    try:
        with temp_path.open("w+", encoding="utf-8", newline="") as output_file:
            output_file.write(data)
        if path.exists():
            shutil.copymode(path, temp_path)

        # Atomically move the temporary file to the target path.
        temp_path.replace(path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def get_executable_directory() -> Path:
    """Get the directory of the running application.

    For frozen builds this is the directory of the executable, otherwise it
    is the current working directory.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path.cwd()


class GuardedLock:
    """Mutual exclusion lock that becomes poisoned on unexpected failures.

    If an exception that is not a `HuaciError` escapes the guarded section,
    the state protected by the lock is considered corrupted and every
    following acquisition fails with `LockError`.
    """

    def __init__(self, name: str) -> None:
        self.name: str = name
        self._lock: threading.Lock = threading.Lock()
        self._poisoned: bool = False

    @property
    def is_poisoned(self) -> bool:
        """Whether the guarded state was left in an unknown condition."""
        return self._poisoned

    @contextmanager
    def hold(self) -> Iterator[None]:
        """Acquire the lock for the duration of the `with` block."""
        with self._lock:
            if self._poisoned:
                raise LockError(
                    f"failed to lock {self.name}: lock is poisoned"
                )
            try:
                yield
            except HuaciError:
                raise
            except Exception:
                logging.error("Lock `%s` is poisoned.", self.name)
                self._poisoned = True
                raise
