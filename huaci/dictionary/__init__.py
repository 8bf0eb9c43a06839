"""
This module is for dictionaries.

The bundled dictionary is a read-only SQLite database with three tables:
  - `collins`: senses of headwords from the Collins dictionary,
  - `oxford`: senses and phrases from the Oxford dictionary,
  - `forms`: mapping from inflected word forms to their base forms.
"""
