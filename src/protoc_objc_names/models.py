from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Union

# Files without a package are addressed in mapping/registry files by this key
# prefix followed by the file's path.
NO_PACKAGE_PREFIX = "no_package:"


class FieldKind(Enum):
    SCALAR = auto()
    MESSAGE = auto()
    ENUM = auto()
    GROUP = auto()


@dataclass
class OneofNode:
    name: str
    containing_type: Optional[MessageNode] = None


@dataclass
class FieldNode:
    name: str
    kind: FieldKind = FieldKind.SCALAR
    is_repeated: bool = False
    is_map: bool = False
    group_type_name: Optional[str] = None
    oneof: Optional[OneofNode] = None
    containing_type: Optional[MessageNode] = None

    @property
    def source_name(self) -> str:
        """Name the generator starts from: the group's type name for groups."""
        if self.kind is FieldKind.GROUP and self.group_type_name:
            return self.group_type_name
        return self.name


@dataclass
class EnumValueNode:
    name: str
    number: int = 0
    enum: Optional[EnumNode] = None


@dataclass
class EnumNode:
    name: str
    containing_type: Optional[MessageNode] = None
    values: List[EnumValueNode] = field(default_factory=list)
    file: Optional[SchemaFile] = None


@dataclass
class MessageNode:
    name: str
    containing_type: Optional[MessageNode] = None
    fields: List[FieldNode] = field(default_factory=list)
    nested_messages: List[MessageNode] = field(default_factory=list)
    nested_enums: List[EnumNode] = field(default_factory=list)
    oneofs: List[OneofNode] = field(default_factory=list)
    extensions: List[FieldNode] = field(default_factory=list)
    file: Optional[SchemaFile] = None
    # Synthesized for map fields; gets no class of its own.
    is_map_entry: bool = False


TypeNode = Union[MessageNode, EnumNode]


@dataclass
class SchemaFile:
    """A compiled schema file.

    ``class_prefix`` is ``None`` when the file does not declare the prefix
    option at all; an empty string is an explicit "no prefix".
    """

    name: str
    package: str = ""
    class_prefix: Optional[str] = None
    messages: List[MessageNode] = field(default_factory=list)
    enums: List[EnumNode] = field(default_factory=list)
    extensions: List[FieldNode] = field(default_factory=list)

    @property
    def has_class_prefix(self) -> bool:
        return self.class_prefix is not None

    @property
    def lookup_key(self) -> str:
        if self.package:
            return self.package
        return NO_PACKAGE_PREFIX + self.name


def iter_messages(messages: List[MessageNode]):
    """Yield messages depth first, parents before their nested messages."""
    stack = list(reversed(messages))
    while stack:
        message = stack.pop()
        yield message
        stack.extend(reversed(message.nested_messages))


def iter_enums(file: SchemaFile):
    yield from file.enums
    for message in iter_messages(file.messages):
        yield from message.nested_enums


def link_file(file: SchemaFile) -> SchemaFile:
    """Fill in the back references (file, containing_type, enum) of a tree.

    Lets callers build a schema bottom-up without wiring parents by hand.
    """
    for enum in file.enums:
        enum.file = file
        enum.containing_type = None
        for value in enum.values:
            value.enum = enum
    for message in file.messages:
        message.containing_type = None
    for message in iter_messages(file.messages):
        message.file = file
        for nested in message.nested_messages:
            nested.containing_type = message
        for enum in message.nested_enums:
            enum.file = file
            enum.containing_type = message
            for value in enum.values:
                value.enum = enum
        for oneof in message.oneofs:
            oneof.containing_type = message
        for f in message.fields:
            f.containing_type = message
    return file
