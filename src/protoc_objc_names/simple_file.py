"""Reader for the small line-oriented config files.

Package-to-prefix mappings, the expected-prefixes registry and the package
exception list all use this format: one entry per line, ``#`` starts a
comment, blank lines are ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Set


class SimpleFileError(Exception):
    """Raised when a config file can't be read or has a malformed line."""


def parse_simple_file(file_path: str, consume_line: Callable[[str], None]) -> None:
    """Feed every non-blank, comment-stripped line of a file to ``consume_line``."""
    try:
        text = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SimpleFileError(f"error: Unable to open file {file_path}, {e}") from e

    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            consume_line(line)
        except SimpleFileError as e:
            raise SimpleFileError(f"error: {file_path} Line {lineno}, {e}") from e


def _maybe_unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in ("'", '"') and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_prefix_line(line: str, usage: str):
    """Split a ``key = value`` line, stripping quotes around the value."""
    key, sep, value = line.partition("=")
    if not sep:
        raise SimpleFileError(f"{usage} file line without equal sign: '{line}'.")
    return key.strip(), _maybe_unquote(value.strip())


def load_package_prefixes(file_path: str, usage: str) -> Dict[str, str]:
    """Load a ``package = prefix`` file into a dict.

    Package and prefix are not checked for validity; the file is assumed to be
    validated when it is edited.
    """
    prefixes: Dict[str, str] = {}

    def consume(line: str) -> None:
        key, value = parse_prefix_line(line, usage)
        prefixes[key] = value

    parse_simple_file(file_path, consume)
    return prefixes


def load_line_set(file_path: str) -> Set[str]:
    lines: Set[str] = set()
    parse_simple_file(file_path, lines.add)
    return lines
