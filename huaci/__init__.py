"""Huaci: backend of the word lookup and flashcard assistant.

Huaci answers three kinds of requests coming from the surrounding desktop
application:
  - dictionary lookups in the bundled Collins and Oxford tables,
  - base form (lemma) resolution, e.g. `ran` -> `run`,
  - reading, updating, and watching the TOML configuration file.
"""
from pathlib import Path

RESOURCES_DIRECTORY: Path = Path(__file__).parent / "resources"
