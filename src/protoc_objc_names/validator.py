"""Checks the declared class prefixes of a set of files against policy.

An optional expected-prefixes registry file lists ``package = prefix`` pairs
(``no_package:path`` for files without a package). Validation raises
:class:`PrefixValidationError` on the first hard error and prints warnings
for style problems and unregistered prefixes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, TextIO

from protoc_objc_names.diagnostics import bool_from_env, warn
from protoc_objc_names.models import NO_PACKAGE_PREFIX, SchemaFile
from protoc_objc_names.simple_file import SimpleFileError, load_package_prefixes

# Passing this as the registry path turns validation off entirely.
DISABLE_VALIDATION_PATH = "-"


class PrefixValidationError(Exception):
    """Raised when a file's class prefix breaks the prefix policy."""


@dataclass
class ValidationOptions:
    expected_prefixes_path: str = ""
    expected_prefixes_suppressions: List[str] = field(default_factory=list)
    prefixes_must_be_registered: bool = False
    require_prefixes: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ValidationOptions:
        if environ is None:
            environ = os.environ
        suppressions = environ.get("GPB_OBJC_EXPECTED_PACKAGE_PREFIXES_SUPPRESSIONS", "")
        return cls(
            expected_prefixes_path=environ.get("GPB_OBJC_EXPECTED_PACKAGE_PREFIXES", ""),
            expected_prefixes_suppressions=[s for s in suppressions.split(";") if s],
            prefixes_must_be_registered=bool_from_env(
                environ, "GPB_OBJC_PREFIXES_MUST_BE_REGISTERED", False
            ),
            require_prefixes=bool_from_env(environ, "GPB_OBJC_REQUIRE_PREFIXES", False),
        )


def load_expected_prefixes(expected_prefixes_path: str) -> Dict[str, str]:
    if not expected_prefixes_path:
        return {}
    try:
        return load_package_prefixes(expected_prefixes_path, "Expected prefixes")
    except SimpleFileError as e:
        raise PrefixValidationError(str(e)) from e


def _registered_value(prefix: str) -> str:
    return prefix if prefix else '""'


def _describe_key(lookup_key: str) -> str:
    if lookup_key.startswith(NO_PACKAGE_PREFIX):
        return f"file '{lookup_key[len(NO_PACKAGE_PREFIX):]}'"
    return f"'package {lookup_key};'"


def _find_other_key_for_prefix(prefix: str, expected: Mapping[str, str]) -> str:
    """First key registered with ``prefix``, preferring real packages."""
    other = ""
    for key in sorted(expected):
        if expected[key] == prefix:
            other = key
            # keep looking past no_package entries for a package one
            if not key.startswith(NO_PACKAGE_PREFIX):
                break
    return other


def validate_class_prefix(
    file: SchemaFile,
    expected_prefixes_path: str,
    expected_prefixes: Mapping[str, str],
    prefixes_must_be_registered: bool,
    require_prefixes: bool,
    warning_stream: Optional[TextIO] = None,
) -> None:
    """Validate one file. An explicit empty prefix option is a valid choice."""
    has_prefix = file.has_class_prefix
    have_expected_prefix_file = bool(expected_prefixes_path)
    prefix = file.class_prefix or ""
    package = file.package
    lookup_key = file.lookup_key

    # Error: the registry expects a prefix for this package and it differs.
    if lookup_key in expected_prefixes:
        expected = expected_prefixes[lookup_key]
        if has_prefix and expected == prefix:
            return
        message = f"error: Expected 'option objc_class_prefix = \"{expected}\";'"
        if package:
            message += f" for package '{package}'"
        message += f" in '{file.name}'"
        if has_prefix:
            message += f"; but found '{prefix}' instead"
        raise PrefixValidationError(message + ".")

    if not has_prefix:
        if require_prefixes:
            raise PrefixValidationError(
                f"error: '{file.name}' does not have a required 'option objc_class_prefix'."
            )
        return

    if prefix and have_expected_prefix_file:
        # Error: the prefix is registered to someone else. Sharing is allowed
        # only when listed in the registry.
        other = _find_other_key_for_prefix(prefix, expected_prefixes)
        if other:
            raise PrefixValidationError(
                f"error: Found 'option objc_class_prefix = \"{prefix}\";' in "
                f"'{file.name}'; that prefix is already used for {_describe_key(other)}."
                f" It can only be reused by adding '{lookup_key} = {prefix}' to the"
                f" expected prefixes file ({expected_prefixes_path})."
            )

    if prefix and not ("A" <= prefix[0] <= "Z"):
        warn(
            f"Invalid 'option objc_class_prefix = \"{prefix}\";' in '{file.name}';"
            " it should start with a capital letter.",
            warning_stream,
        )
    if prefix and len(prefix) < 3:
        # Two character prefixes are reserved by Apple.
        warn(
            f"Invalid 'option objc_class_prefix = \"{prefix}\";' in '{file.name}';"
            " Apple recommends they should be at least 3 characters long.",
            warning_stream,
        )

    if have_expected_prefix_file:
        entry = f"{lookup_key} = {_registered_value(prefix)}"
        if prefixes_must_be_registered:
            raise PrefixValidationError(
                f"error: '{file.name}' has 'option objc_class_prefix = \"{prefix}\";', "
                f"but it is not registered. Add '{entry}' to the expected prefixes "
                f"file ({expected_prefixes_path})."
            )
        warn(
            f"Found unexpected 'option objc_class_prefix = \"{prefix}\";' in "
            f"'{file.name}'; consider adding '{entry}' to the expected prefixes "
            f"file ({expected_prefixes_path}).",
            warning_stream,
        )


def _check_overlap(
    file: SchemaFile,
    first_user: Dict[str, SchemaFile],
    expected_prefixes: Mapping[str, str],
    resolve_prefix: Callable[[SchemaFile], str],
) -> None:
    # Package-less files are exempt; sharing one prefix between them is common.
    if not file.package:
        return
    prefix = resolve_prefix(file)
    if not prefix:
        return
    other = first_user.setdefault(prefix, file)
    if other is file or other.lookup_key == file.lookup_key:
        return
    if (
        expected_prefixes.get(file.lookup_key) == prefix
        and expected_prefixes.get(other.lookup_key) == prefix
    ):
        return
    raise PrefixValidationError(
        f"error: Class prefix '{prefix}' of '{file.name}' is already used for "
        f"{_describe_key(other.lookup_key)} in '{other.name}'. It can only be "
        f"shared by adding '{other.lookup_key} = {prefix}' and "
        f"'{file.lookup_key} = {prefix}' to the expected prefixes file."
    )


def check_prefix_overlap(
    files: Sequence[SchemaFile],
    expected_prefixes: Mapping[str, str],
    resolve_prefix: Callable[[SchemaFile], str],
) -> None:
    """Error if two packages end up with the same prefix in one run.

    Sharing is allowed only when the registry lists the prefix against both
    lookup keys. Files without a package are never compared.
    """
    first_user: Dict[str, SchemaFile] = {}
    for file in files:
        _check_overlap(file, first_user, expected_prefixes, resolve_prefix)


def _declared_prefix(file: SchemaFile) -> str:
    return file.class_prefix or ""


def validate_class_prefixes(
    files: Sequence[SchemaFile],
    options: Optional[ValidationOptions] = None,
    warning_stream: Optional[TextIO] = None,
    resolve_prefix: Optional[Callable[[SchemaFile], str]] = None,
) -> None:
    """Validate every file in order, stopping at the first hard error.

    ``options`` defaults to the ``GPB_OBJC_*`` environment variables.
    ``resolve_prefix`` gives the prefix each file will really be generated
    with (e.g. ``ObjCNames.file_class_prefix``); without it only declared
    prefixes are compared across files. Each file is checked against the
    files before it, so an overlap is reported at the file that causes it.
    """
    if options is None:
        options = ValidationOptions.from_env()

    if options.expected_prefixes_path == DISABLE_VALIDATION_PATH:
        return

    expected_prefixes = load_expected_prefixes(options.expected_prefixes_path)
    suppressions = set(options.expected_prefixes_suppressions)
    resolve_prefix = resolve_prefix or _declared_prefix
    first_user: Dict[str, SchemaFile] = {}

    for file in files:
        if file.name in suppressions:
            continue
        validate_class_prefix(
            file,
            options.expected_prefixes_path,
            expected_prefixes,
            options.prefixes_must_be_registered,
            options.require_prefixes,
            warning_stream,
        )
        _check_overlap(file, first_user, expected_prefixes, resolve_prefix)
