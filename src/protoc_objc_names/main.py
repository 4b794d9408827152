from __future__ import annotations

import argparse
import dataclasses
import sys
from typing import List, Optional

from google.protobuf.message import DecodeError

from protoc_objc_names.descriptor_loader import (
    compile_descriptor_set,
    files_from_descriptor_set,
    load_descriptor_set,
)
from protoc_objc_names.models import SchemaFile
from protoc_objc_names.names import ObjCNames
from protoc_objc_names.prefix_policy import PrefixOptions
from protoc_objc_names.report import render_names_report
from protoc_objc_names.validator import (
    PrefixValidationError,
    ValidationOptions,
    validate_class_prefixes,
)

# Raised while reading or compiling the input schemas.
LOAD_ERRORS = (RuntimeError, OSError, DecodeError)


def _load_files(args: argparse.Namespace) -> List[SchemaFile]:
    if args.descriptor_set:
        return load_descriptor_set(args.descriptor_set)
    return files_from_descriptor_set(compile_descriptor_set(args.proto, args.include))


def _prefix_options(args: argparse.Namespace) -> PrefixOptions:
    """Command line flags override the GPB_OBJC_* environment variables."""
    options = PrefixOptions.from_env()
    overrides = {}
    if args.use_package_as_prefix:
        overrides["use_package_as_prefix"] = True
    if args.forced_package_prefix is not None:
        overrides["forced_package_prefix"] = args.forced_package_prefix
    if args.package_to_prefix_mappings is not None:
        overrides["package_to_prefix_mappings_path"] = args.package_to_prefix_mappings
    if args.package_prefix_exceptions is not None:
        overrides["package_prefix_exceptions_path"] = args.package_prefix_exceptions
    return dataclasses.replace(options, **overrides)


def _validation_options(args: argparse.Namespace) -> ValidationOptions:
    options = ValidationOptions.from_env()
    if args.expected_prefixes is not None:
        options.expected_prefixes_path = args.expected_prefixes
    if args.suppress:
        options.expected_prefixes_suppressions = list(args.suppress)
    if args.prefixes_must_be_registered:
        options.prefixes_must_be_registered = True
    if args.require_prefixes:
        options.require_prefixes = True
    return options


def run_validate(args: argparse.Namespace) -> int:
    names = ObjCNames(_prefix_options(args))
    try:
        files = _load_files(args)
        validate_class_prefixes(
            files,
            _validation_options(args),
            resolve_prefix=names.file_class_prefix,
        )
    except (PrefixValidationError, *LOAD_ERRORS) as e:
        print(f"FATAL: {e}", file=sys.stderr)
        return 1
    print(f"Validated class prefixes of {len(files)} file(s)")
    return 0


def run_names(args: argparse.Namespace) -> int:
    try:
        files = _load_files(args)
    except LOAD_ERRORS as e:
        print(f"FATAL: {e}", file=sys.stderr)
        return 1
    names = ObjCNames(_prefix_options(args))
    sys.stdout.write(render_names_report(files, names))
    return 0


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--descriptor-set",
        help="Binary FileDescriptorSet written by protoc --descriptor_set_out",
    )
    source.add_argument(
        "--proto",
        nargs="+",
        help="One or more .proto files to compile with protoc",
    )
    parser.add_argument(
        "-I", "--include",
        action="append",
        default=[],
        help="Import path for --proto (repeatable)",
    )


def _add_prefix_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--use-package-as-prefix",
        action="store_true",
        help="Derive a class prefix from the package when a file declares none",
    )
    parser.add_argument(
        "--forced-package-prefix",
        help="String put in front of every package-derived prefix",
    )
    parser.add_argument(
        "--package-to-prefix-mappings",
        help="File of 'package = prefix' lines to consult before deriving a prefix",
    )
    parser.add_argument(
        "--package-prefix-exceptions",
        help="File listing packages that never get a package-derived prefix",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Objective-C class prefix and name tool for protobuf schemas",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser(
        "validate",
        help="Check declared class prefixes against the expected prefixes registry",
    )
    _add_input_args(validate)
    _add_prefix_args(validate)
    validate.add_argument(
        "--expected-prefixes",
        help="Registry of 'package = prefix' lines; '-' disables validation",
    )
    validate.add_argument(
        "--suppress",
        action="append",
        default=[],
        help="File name (as in the descriptor) to skip (repeatable)",
    )
    validate.add_argument(
        "--prefixes-must-be-registered",
        action="store_true",
        help="Fail when a prefix is missing from the registry instead of warning",
    )
    validate.add_argument(
        "--require-prefixes",
        action="store_true",
        help="Fail when a file has no objc_class_prefix option",
    )
    validate.set_defaults(func=run_validate)

    names = subparsers.add_parser("names", help="List the names generated for each file")
    _add_input_args(names)
    _add_prefix_args(names)
    names.set_defaults(func=run_names)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
