"""Working out the class prefix for a schema file.

The answer comes from, in order: the file's own prefix option, the
package-to-prefix mappings file, and finally (when enabled) a prefix derived
from the package name. Loaded tables live on a :class:`PrefixCache`; a cache
belongs to one set of file paths, and pointing at different files means
building a new cache.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Set, TextIO

from protoc_objc_names.case_converter import camel_case
from protoc_objc_names.diagnostics import bool_from_env, warn
from protoc_objc_names.models import SchemaFile
from protoc_objc_names.simple_file import SimpleFileError, load_line_set, load_package_prefixes

# Keeps an empty exceptions file from being re-read on every lookup.
_NOT_A_REAL_PACKAGE = "<not a real package>"


@dataclass(frozen=True)
class PrefixOptions:
    use_package_as_prefix: bool = False
    # Put in front of package-derived prefixes.
    forced_package_prefix: str = ""
    package_to_prefix_mappings_path: str = ""
    package_prefix_exceptions_path: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> PrefixOptions:
        """Read the ``GPB_OBJC_*`` environment back door."""
        if environ is None:
            environ = os.environ
        return cls(
            use_package_as_prefix=bool_from_env(environ, "GPB_OBJC_USE_PACKAGE_AS_PREFIX", False),
            forced_package_prefix=environ.get("GPB_OBJC_USE_PACKAGE_AS_PREFIX_PREFIX", ""),
            package_to_prefix_mappings_path=environ.get("GPB_OBJC_PACKAGE_TO_PREFIX_MAPPINGS_PATH", ""),
            package_prefix_exceptions_path=environ.get("GPB_OBJC_PACKAGE_PREFIX_EXCEPTIONS_PATH", ""),
        )

    def with_mappings_path(self, path: str) -> PrefixOptions:
        return dataclasses.replace(self, package_to_prefix_mappings_path=path)

    def with_exceptions_path(self, path: str) -> PrefixOptions:
        return dataclasses.replace(self, package_prefix_exceptions_path=path)


class PrefixCache:
    """Lazily loaded mappings table and exception set for one pair of paths.

    Not safe to share between threads; give each one its own cache.
    """

    def __init__(
        self,
        mappings_path: str = "",
        exceptions_path: str = "",
        warning_stream: Optional[TextIO] = None,
    ) -> None:
        self.mappings_path = mappings_path
        self.exceptions_path = exceptions_path
        self.warning_stream = warning_stream
        self._mappings: Optional[Dict[str, str]] = None
        self._exceptions: Set[str] = set()

    @classmethod
    def for_options(
        cls,
        options: PrefixOptions,
        current: Optional[PrefixCache] = None,
        warning_stream: Optional[TextIO] = None,
    ) -> PrefixCache:
        """Reuse ``current`` if it was built for the same files, else start fresh."""
        if (
            current is not None
            and current.mappings_path == options.package_to_prefix_mappings_path
            and current.exceptions_path == options.package_prefix_exceptions_path
        ):
            return current
        if warning_stream is None and current is not None:
            warning_stream = current.warning_stream
        return cls(
            options.package_to_prefix_mappings_path,
            options.package_prefix_exceptions_path,
            warning_stream,
        )

    @property
    def mappings(self) -> Dict[str, str]:
        if self._mappings is None:
            self._mappings = {}
            if self.mappings_path:
                try:
                    self._mappings = load_package_prefixes(self.mappings_path, "Package to prefixes")
                except SimpleFileError as e:
                    warn(
                        f"Failed to parse prefix to proto package mappings file: "
                        f"{self.mappings_path} ({e})",
                        self.warning_stream,
                    )
        return self._mappings

    @property
    def exceptions(self) -> Set[str]:
        if not self._exceptions and self.exceptions_path:
            try:
                self._exceptions = load_line_set(self.exceptions_path)
            except SimpleFileError as e:
                warn(
                    f"Failed to parse package prefix exceptions file: "
                    f"{self.exceptions_path} ({e})",
                    self.warning_stream,
                )
                self._exceptions = set()
            if not self._exceptions:
                self._exceptions.add(_NOT_A_REAL_PACKAGE)
        return self._exceptions

    def prefix_from_mappings(self, file: SchemaFile) -> str:
        return self.mappings.get(file.lookup_key, "")

    def is_package_exempted(self, package: str) -> bool:
        return package in self.exceptions


def prefix_from_package(package: str, forced_prefix: str = "") -> str:
    """``foo.bar_baz`` -> ``Foo_BarBaz_`` (with ``forced_prefix`` in front).

    An empty package gives an empty prefix, without ``forced_prefix``.
    """
    parts = [camel_case(segment, True) for segment in package.split(".") if segment]
    parts = [part for part in parts if part]
    if not parts:
        return ""
    return forced_prefix + "_".join(parts) + "_"


def resolve_prefix(
    file: SchemaFile,
    options: PrefixOptions,
    cache: Optional[PrefixCache] = None,
) -> str:
    """Return the class prefix to use for everything generated from ``file``."""
    # An explicit "" is honored; it turns off package prefixing for a file.
    if file.has_class_prefix:
        return file.class_prefix

    if cache is None:
        cache = PrefixCache.for_options(options)

    mapped = cache.prefix_from_mappings(file)
    if mapped:
        return mapped

    if not options.use_package_as_prefix:
        return ""
    if cache.is_package_exempted(file.package):
        return ""

    return prefix_from_package(file.package, options.forced_package_prefix)
