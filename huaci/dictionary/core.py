"""Dictionary: entries of the bundled dictionary and lookups over them.

Dictionary database.
  - Collins entries: one row per sense of a headword.
  - Oxford entries: one row per sense or phrase of a headword.
  - Forms: word form to base form, e.g. `ran` to `run`.

Words are matched case-insensitively, entries are returned in the order they
were inserted into the database.
"""

import logging
import sqlite3
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from huaci.database import Database
from huaci.errors import DatabaseError

COLLINS_QUERY: str = (
    "SELECT word, phonetic, sense, enDef, cnDef FROM collins "
    "WHERE word = ? COLLATE NOCASE ORDER BY rowid"
)
OXFORD_QUERY: str = (
    "SELECT word, phrase, phonetic, sense, ext, enDef, cnDef FROM oxford "
    "WHERE word = ? COLLATE NOCASE ORDER BY rowid"
)
BASE_QUERY: str = (
    "SELECT base FROM forms WHERE word = ? COLLATE NOCASE ORDER BY rowid"
)


class Entry(BaseModel):
    """Dictionary entry: one sense of a word."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    word: str
    """Headword, as it is written in the dictionary."""

    phonetic: str | None = None
    """Transcription of the headword."""

    sense: str | None = None
    """Sense identifier or part of speech."""

    english_definition: str | None = Field(default=None, alias="enDef")
    """Definition in English."""

    chinese_definition: str | None = Field(default=None, alias="cnDef")
    """Definition in Chinese."""

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Self:
        """Create an entry from a database row.

        :param row: row with columns named as in the database
        """
        try:
            return cls.model_validate(dict(row))
        except ValidationError as error:
            raise DatabaseError(
                f"failed to decode {cls.__name__} row: {error}"
            ) from error


class CollinsEntry(Entry):
    """Entry of the Collins dictionary."""


class OxfordEntry(Entry):
    """Entry of the Oxford dictionary."""

    phrase: str | None = None
    """Phrase the sense belongs to, if the sense is not of the word itself."""

    extension: str | None = Field(default=None, alias="ext")
    """Additional information: grammar patterns, usage notes."""


class LookupResult(BaseModel):
    """Entries found for a word and for its base form."""

    word: str
    """Requested word."""

    base: str | None = None
    """Base form of the requested word, if it is known."""

    collins: list[CollinsEntry] = Field(default_factory=list)
    """Collins entries, for the word first and then for the base form."""

    oxford: list[OxfordEntry] = Field(default_factory=list)
    """Oxford entries, for the word first and then for the base form."""

    def is_empty(self) -> bool:
        """Check whether nothing was found."""
        return not self.collins and not self.oxford


class DictionaryDatabase(Database):
    """Database with tables:

    Table collins:
        word, phonetic, sense, enDef, cnDef: TEXT
    Table oxford:
        word, phrase, phonetic, sense, ext, enDef, cnDef: TEXT
    Table forms:
        word, base: TEXT
    """

    def _fetch(self, table_id: str, query: str, word: str) -> list[Any]:
        with self.lock.hold():
            connection = self.connection()
            try:
                cursor: sqlite3.Cursor = connection.cursor()
                cursor.row_factory = sqlite3.Row
                return cursor.execute(query, (word,)).fetchall()
            except sqlite3.Error as error:
                raise DatabaseError(
                    f"failed to query {table_id}: {error}"
                ) from error

    def search_collins(self, word: str) -> list[CollinsEntry]:
        """Get all Collins entries for the word.

        :param word: headword, case is ignored
        :return: entries in database order, empty if there are none
        """
        rows: list[sqlite3.Row] = self._fetch("collins", COLLINS_QUERY, word)
        logging.debug("Found %d Collins entries for `%s`.", len(rows), word)
        return [CollinsEntry.from_row(row) for row in rows]

    def search_oxford(self, word: str) -> list[OxfordEntry]:
        """Get all Oxford entries for the word.

        :param word: headword, case is ignored
        :return: entries in database order, empty if there are none
        """
        rows: list[sqlite3.Row] = self._fetch("oxford", OXFORD_QUERY, word)
        logging.debug("Found %d Oxford entries for `%s`.", len(rows), word)
        return [OxfordEntry.from_row(row) for row in rows]

    def get_word_base(self, word: str) -> str | None:
        """Get the base form of the word.

        If the forms table has several rows for the word, the first one is
        used.

        :param word: word form, case is ignored
        :return: base form or `None` if the word is not a known form
        """
        rows: list[sqlite3.Row] = self._fetch("forms", BASE_QUERY, word)
        if not rows:
            return None

        base: Any = rows[0]["base"]
        if not isinstance(base, str):
            raise DatabaseError(
                f"failed to query word base: `{base!r}` is not a string"
            )
        return base

    def lookup(self, word: str, auto_convert: bool = True) -> LookupResult:
        """Search both dictionaries for the word and its base form.

        :param word: word or word form
        :param auto_convert: also search for the base form of the word
        """
        base: str | None = self.get_word_base(word) if auto_convert else None

        words: list[str] = [word]
        if base is not None:
            words.append(base)

        result: LookupResult = LookupResult(word=word, base=base)
        for current in words:
            result.collins += self.search_collins(current)
            result.oxford += self.search_oxford(current)

        return result
