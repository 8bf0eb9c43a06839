"""Fixtures: small dictionary database and configuration files."""

import sqlite3
from collections.abc import Iterator
from pathlib import Path
from textwrap import dedent

import pytest

from huaci.dictionary.core import DictionaryDatabase

COLLINS_ROWS: list[tuple] = [
    ("run", "rʌn", "1", "move fast", "跑"),
    ("book", "bʊk", "1", "a written work", "书"),
    ("book", "bʊk", "2", "to reserve", "预订"),
    ("Paris", None, None, "capital of France", "巴黎"),
]
OXFORD_ROWS: list[tuple] = [
    ("run", None, "rʌn", "verb", "[intransitive]", "move at a speed", "跑"),
    ("run", "run away", "rʌn", "phrasal verb", None, "escape", "逃跑"),
]
FORMS_ROWS: list[tuple] = [
    ("ran", "run"),
    ("running", "run"),
    ("books", "book"),
    ("axes", "axe"),
    ("axes", "axis"),
]

CONFIG_TEXT: str = dedent(
    """\
    # Anki settings.
    anki-connect-url = "http://localhost:8765"
    deck-name = "English"

    model-name = "Basic"
    theme = "dark"  # not used by Huaci
    """
)


def create_dictionary(path: Path) -> None:
    """Create dictionary database with test entries."""

    connection: sqlite3.Connection = sqlite3.connect(path)
    connection.execute(
        "CREATE TABLE collins "
        "(word TEXT, phonetic TEXT, sense TEXT, enDef TEXT, cnDef TEXT)"
    )
    connection.execute(
        "CREATE TABLE oxford (word TEXT, phrase TEXT, phonetic TEXT, "
        "sense TEXT, ext TEXT, enDef TEXT, cnDef TEXT)"
    )
    connection.execute("CREATE TABLE forms (word TEXT, base TEXT)")
    connection.executemany(
        "INSERT INTO collins VALUES (?,?,?,?,?)", COLLINS_ROWS
    )
    connection.executemany(
        "INSERT INTO oxford VALUES (?,?,?,?,?,?,?)", OXFORD_ROWS
    )
    connection.executemany("INSERT INTO forms VALUES (?,?)", FORMS_ROWS)
    connection.commit()
    connection.close()


@pytest.fixture(name="dictionary_path")
def fixture_dictionary_path(tmp_path: Path) -> Path:
    """Path to the test dictionary database."""

    path: Path = tmp_path / "dict.db"
    create_dictionary(path)
    return path


@pytest.fixture(name="dictionary")
def fixture_dictionary(
    dictionary_path: Path,
) -> Iterator[DictionaryDatabase]:
    """Test dictionary database."""

    database: DictionaryDatabase = DictionaryDatabase(dictionary_path)
    yield database
    database.close()


@pytest.fixture(name="config_path")
def fixture_config_path(tmp_path: Path) -> Path:
    """Path to a valid configuration file with comments and extra keys."""

    path: Path = tmp_path / "config.toml"
    path.write_text(CONFIG_TEXT, encoding="utf-8")
    return path
