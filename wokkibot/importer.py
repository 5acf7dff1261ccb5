"""Bulk import of names from a text file into the names table."""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path
from typing import Sequence

USAGE = "Usage: wokkibot-import <database_path> <names_file>"

_CREATE_NAMES = """CREATE TABLE IF NOT EXISTS names (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE
)"""


def import_names(database_path: str, names_file: str) -> int:
    """Insert every line of the file as a name, skipping duplicates.

    Returns the number of lines read.
    """
    connection = sqlite3.connect(str(database_path))
    try:
        connection.execute(_CREATE_NAMES)
        connection.commit()

        content = Path(names_file).read_text(encoding="utf-8")
        lines = content.strip().split("\n")
        names = [line.strip() for line in lines]

        with connection:
            connection.executemany(
                "INSERT OR IGNORE INTO names (name) VALUES (?)",
                ((name,) for name in names if name),
            )
    finally:
        connection.close()
    return len(lines)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print(USAGE, file=sys.stderr)
        return 1
    database_path, names_file = args
    try:
        count = import_names(database_path, names_file)
    except (OSError, sqlite3.Error) as exc:
        print(f"Failed to import names: {exc}", file=sys.stderr)
        return 1
    print(f"Successfully imported {count} names")
    return 0


if __name__ == "__main__":
    sys.exit(main())