"""SQLite 3 utility."""

import logging
import sqlite3
from pathlib import Path
from sqlite3.dbapi2 import Connection

from huaci.errors import DatabaseError
from huaci.util import GuardedLock


class Database:
    """Read-only SQLite database with one lazily opened connection.

    The connection is opened on first use and shared by all threads;
    accesses are serialized by the lock, since `sqlite3` connections are not
    assumed to be safe for concurrent use.
    """

    def __init__(self, database_file_path: Path) -> None:
        """
        :param database_file_path: path to SQLite database file
        """
        self.path: Path = database_file_path
        self.lock: GuardedLock = GuardedLock("connection")
        self._connection: Connection | None = None

    def _open(self) -> Connection:
        """Open read-only connection without shared cache."""

        logging.debug("Opening dictionary database `%s`...", self.path)
        uri: str = f"{self.path.absolute().as_uri()}?mode=ro&cache=private"
        try:
            return sqlite3.connect(uri, uri=True, check_same_thread=False)
        except sqlite3.Error as error:
            raise DatabaseError(
                f"failed to open `{self.path}`, error: {error}"
            ) from error

    def connection(self) -> Connection:
        """Get the connection, opening it if needed.

        Should be called only while holding `self.lock`.
        """
        if self._connection is None:
            self._connection = self._open()
        return self._connection

    def close(self) -> None:
        """Close the connection if it is open."""
        with self.lock.hold():
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def get_table_ids(self) -> list[str]:
        """Get identifiers of all tables in the database."""
        with self.lock.hold():
            try:
                rows: list[tuple] = (
                    self.connection()
                    .execute("SELECT name FROM sqlite_master WHERE type='table'")
                    .fetchall()
                )
            except sqlite3.Error as error:
                raise DatabaseError(f"failed to list tables: {error}") from error
        return [x[0] for x in rows]

    def has_table(self, table_id: str) -> bool:
        """Check whether table is in the database."""
        return table_id in self.get_table_ids()
