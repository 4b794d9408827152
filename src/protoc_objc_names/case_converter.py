"""Splitting declared names into words and re-joining them in camel case.

Every schema-declared name goes through :func:`camel_case` before it is
sanitized; the suffix rules in :mod:`protoc_objc_names.sanitizer` assume their
input is already camel cased.
"""

from __future__ import annotations

from typing import List, Tuple

from protoc_objc_names.models import FieldKind, FieldNode
from protoc_objc_names.reserved_words import UPPER_SEGMENTS


def _is_ascii_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_ascii_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_ascii_upper(c: str) -> bool:
    return "A" <= c <= "Z"


def split_segments(input: str) -> List[str]:
    """Break ``input`` into lower-cased word segments.

    A new segment starts at a digit following a non-digit, at a lower case
    letter that does not follow a letter, and at an upper case letter that
    does not follow another upper case letter. Any other character only ends
    the current run. Empty segments are kept.
    """
    segments: List[str] = []
    current = ""
    last_was_number = last_was_lower = last_was_upper = False

    for c in input:
        if _is_ascii_digit(c):
            if not last_was_number:
                segments.append(current)
                current = ""
            current += c
            last_was_number, last_was_lower, last_was_upper = True, False, False
        elif _is_ascii_lower(c):
            # a lower case letter continues a word started by either case
            if not last_was_lower and not last_was_upper:
                segments.append(current)
                current = ""
            current += c
            last_was_number, last_was_lower, last_was_upper = False, True, False
        elif _is_ascii_upper(c):
            if not last_was_upper:
                segments.append(current)
                current = ""
            current += c.lower()
            last_was_number, last_was_lower, last_was_upper = False, False, True
        else:
            last_was_number = last_was_lower = last_was_upper = False
    segments.append(current)
    return segments


def camel_case(input: str, capitalize_first: bool) -> str:
    """Convert ``input`` (snake, camel or mixed) to camel case.

    ``url``, ``http`` and ``https`` segments are upper-cased whole; when one
    of them is the first rendered segment the result keeps its leading
    capital even if ``capitalize_first`` is false.

    >>> camel_case("http_request_url", True)
    'HTTPRequestURL'
    >>> camel_case("foo_bar", False)
    'fooBar'
    """
    result = ""
    first_segment_forces_upper = False
    for segment in split_segments(input):
        all_upper = segment in UPPER_SEGMENTS
        if all_upper and not result:
            first_segment_forces_upper = True
        if all_upper:
            result += segment.upper()
        else:
            result += segment[:1].upper() + segment[1:]
    if result and not capitalize_first and not first_segment_forces_upper:
        result = result[0].lower() + result[1:]
    return result


def upper_first(name: str) -> str:
    if not name:
        return name
    return name[0].upper() + name[1:]


def un_camel_case_enum_short_name(name: str) -> str:
    """``FooBar`` -> ``FOO_BAR``; reverses an enum value short name."""
    result = ""
    for i, c in enumerate(name):
        if i > 0 and _is_ascii_upper(c):
            result += "_"
        result += c.upper()
    return result


def un_camel_case_field_name(name: str, field: FieldNode) -> str:
    """Recover the declared spelling of a field from its generated name."""
    worker = name
    if worker.endswith("_p"):
        worker = worker[:-len("_p")]
    if field.is_repeated and worker.endswith("Array"):
        worker = worker[:-len("Array")]

    if field.kind is FieldKind.GROUP:
        if worker and _is_ascii_lower(worker[0]):
            return worker[0].upper() + worker[1:]
        return worker

    result = ""
    for i, c in enumerate(worker):
        if _is_ascii_upper(c):
            if i > 0:
                result += "_"
            result += c.lower()
        else:
            result += c
    return result


def strip_proto(filename: str) -> str:
    for extension in (".protodevel", ".proto"):
        if filename.endswith(extension):
            return filename[:-len(extension)]
    return filename


def path_split(path: str) -> Tuple[str, str]:
    """Split on the last ``/`` into ``(directory, basename)``."""
    directory, sep, basename = path.rpartition("/")
    if not sep:
        return "", path
    return directory, basename
