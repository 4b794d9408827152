"""Objective-C names for everything generated from a schema.

Each method applies its own concatenation and suffix rule on top of
:func:`~protoc_objc_names.sanitizer.sanitize` so the same entity always gets
the same name, whichever template asks for it.
"""

from __future__ import annotations

from typing import List, Optional, TextIO, Tuple

from protoc_objc_names.case_converter import camel_case, path_split, strip_proto, upper_first
from protoc_objc_names.models import (
    EnumNode,
    EnumValueNode,
    FieldNode,
    MessageNode,
    OneofNode,
    SchemaFile,
    TypeNode,
)
from protoc_objc_names.prefix_policy import PrefixCache, PrefixOptions, resolve_prefix
from protoc_objc_names.sanitizer import sanitize

PROTOBUF_LIBRARY_FRAMEWORK_NAME = "Protobuf"

# Well known types shipped pre-generated with the runtime library.
BUNDLED_PROTO_FILES = frozenset({
    "google/protobuf/any.proto",
    "google/protobuf/api.proto",
    "google/protobuf/duration.proto",
    "google/protobuf/empty.proto",
    "google/protobuf/field_mask.proto",
    "google/protobuf/source_context.proto",
    "google/protobuf/struct.proto",
    "google/protobuf/timestamp.proto",
    "google/protobuf/type.proto",
    "google/protobuf/wrappers.proto",
})


def type_path_name(descriptor: TypeNode) -> str:
    """Join the names from the outermost containing type down with ``_``."""
    parts: List[str] = []
    node: Optional[TypeNode] = descriptor
    while node is not None:
        parts.append(node.name)
        node = node.containing_type
    return "_".join(reversed(parts))


def _file_of(descriptor: TypeNode) -> SchemaFile:
    node: Optional[TypeNode] = descriptor
    while node is not None:
        if node.file is not None:
            return node.file
        node = node.containing_type
    raise ValueError(f"'{descriptor.name}' is not attached to a SchemaFile; call link_file() first")


def protobuf_framework_import_symbol(framework_name: str = PROTOBUF_LIBRARY_FRAMEWORK_NAME) -> str:
    return f"GPB_USE_{framework_name.upper()}_FRAMEWORK_IMPORTS"


def is_protobuf_library_bundled_proto_file(file: SchemaFile) -> bool:
    return file.name in BUNDLED_PROTO_FILES


class ObjCNames:
    """Name synthesis for one prefix configuration.

    The only state is the lazily filled :class:`PrefixCache`; build a new
    ``ObjCNames`` (or cache) after changing the mapping or exception files.
    """

    def __init__(
        self,
        options: Optional[PrefixOptions] = None,
        cache: Optional[PrefixCache] = None,
        warning_stream: Optional[TextIO] = None,
    ) -> None:
        self.options = options if options is not None else PrefixOptions()
        self.cache = PrefixCache.for_options(self.options, cache, warning_stream)

    # Files

    def file_class_prefix(self, file: SchemaFile) -> str:
        return resolve_prefix(file, self.options, self.cache)

    def file_class_name(self, file: SchemaFile) -> str:
        _, basename = path_split(file.name)
        name = camel_case(strip_proto(basename), True) + "Root"
        # Nothing reserved ends in "Root", but check anyway.
        return sanitize(self.file_class_prefix(file), name, "_RootClass")[0]

    def file_path(self, file: SchemaFile) -> str:
        """Output path (without extension) of the generated sources."""
        directory, basename = path_split(file.name)
        basename = camel_case(strip_proto(basename), True)
        if directory:
            return directory + "/" + basename
        return basename

    def file_path_basename(self, file: SchemaFile) -> str:
        _, basename = path_split(file.name)
        return camel_case(strip_proto(basename), True)

    # Messages and enums

    def class_name_with_suffix(self, descriptor: MessageNode) -> Tuple[str, str]:
        """Class name for a message plus the suffix sanitizing added, if any.

        Message names are used as declared; style already calls for camel case.
        """
        prefix = self.file_class_prefix(_file_of(descriptor))
        return sanitize(prefix, type_path_name(descriptor), "_Class")

    def class_name(self, descriptor: MessageNode) -> str:
        return self.class_name_with_suffix(descriptor)[0]

    def enum_name(self, descriptor: EnumNode) -> str:
        # message Fixed { enum Mumble {...} } yields Fixed_Class and Fixed_Mumble;
        # the reserved check only looks at the full path.
        prefix = self.file_class_prefix(_file_of(descriptor))
        return sanitize(prefix, type_path_name(descriptor), "_Enum")[0]

    def enum_value_name(self, descriptor: EnumValueNode) -> str:
        # The value hangs off the sanitized enum name, so enum Fixed { FOO = 1; }
        # yields Fixed_Enum and Fixed_Enum_Foo.
        class_name = self.enum_name(descriptor.enum)
        name = class_name + "_" + camel_case(descriptor.name, True)
        return sanitize("", name, "_Value")[0]

    def enum_value_short_name(self, descriptor: EnumValueNode) -> str:
        """Leaf part of :meth:`enum_value_name`.

        Stripping the enum name off the full name instead of sanitizing the
        bare value keeps the two consistent: ``StorageModes_Retain`` must give
        ``Retain``, where sanitizing ``retain`` alone would add a suffix.
        """
        long_name_prefix = self.enum_name(descriptor.enum) + "_"
        long_name = self.enum_value_name(descriptor)
        if long_name.startswith(long_name_prefix):
            return long_name[len(long_name_prefix):]
        return long_name

    # Fields

    def field_name(self, field: FieldNode) -> str:
        result = camel_case(field.source_name, False)
        if field.is_repeated and not field.is_map:
            # Added before the reserved word check.
            result += "Array"
        elif result.endswith("Array"):
            # Otherwise it would look like a repeated field's accessor.
            result += "_p"
        return sanitize("", result, "_p")[0]

    def field_name_capitalized(self, field: FieldNode) -> str:
        return upper_first(self.field_name(field))

    def extension_method_name(self, field: FieldNode) -> str:
        result = camel_case(field.source_name, False)
        return sanitize("", result, "_Extension")[0]

    # Oneofs; nothing reserved ends in OneOfCase, so these skip sanitizing.

    def oneof_name(self, descriptor: OneofNode) -> str:
        return camel_case(descriptor.name, False)

    def oneof_name_capitalized(self, descriptor: OneofNode) -> str:
        return upper_first(self.oneof_name(descriptor))

    def oneof_enum_name(self, descriptor: OneofNode) -> str:
        class_name = self.class_name(descriptor.containing_type)
        return class_name + "_" + camel_case(descriptor.name, True) + "_OneOfCase"
