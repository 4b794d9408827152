"""Build :mod:`protoc_objc_names.models` trees from compiled descriptor sets.

Schemas are never parsed here: ``protoc --descriptor_set_out`` does that, and
this module only maps the resulting ``FileDescriptorSet`` into our model.
"""

from __future__ import annotations

import os
import subprocess
import tempfile
from typing import Dict, List, Optional, Sequence, Set

from google.protobuf import descriptor_pb2 as d2

from protoc_objc_names.models import (
    EnumNode,
    EnumValueNode,
    FieldKind,
    FieldNode,
    MessageNode,
    OneofNode,
    SchemaFile,
    link_file,
)

_KIND_BY_TYPE = {
    d2.FieldDescriptorProto.TYPE_MESSAGE: FieldKind.MESSAGE,
    d2.FieldDescriptorProto.TYPE_ENUM: FieldKind.ENUM,
    d2.FieldDescriptorProto.TYPE_GROUP: FieldKind.GROUP,
}


def _collect_map_entries(fds: d2.FileDescriptorSet) -> Set[str]:
    """Fully qualified names (with leading '.') of every map entry message."""
    found: Set[str] = set()

    def walk(scope: str, messages) -> None:
        for m in messages:
            full_name = f"{scope}.{m.name}"
            if m.options.map_entry:
                found.add(full_name)
            walk(full_name, m.nested_type)

    for f in fds.file:
        walk(f".{f.package}" if f.package else "", f.message_type)
    return found


def _build_field(fd: d2.FieldDescriptorProto, map_entries: Set[str]) -> FieldNode:
    kind = _KIND_BY_TYPE.get(fd.type, FieldKind.SCALAR)
    group_type_name = None
    if kind is FieldKind.GROUP:
        group_type_name = fd.type_name.rsplit(".", 1)[-1]
    return FieldNode(
        name=fd.name,
        kind=kind,
        is_repeated=fd.label == d2.FieldDescriptorProto.LABEL_REPEATED,
        is_map=kind is FieldKind.MESSAGE and fd.type_name in map_entries,
        group_type_name=group_type_name,
    )


def _build_enum(desc: d2.EnumDescriptorProto) -> EnumNode:
    enum = EnumNode(name=desc.name)
    enum.values = [EnumValueNode(name=v.name, number=v.number, enum=enum) for v in desc.value]
    return enum


def _build_message(desc: d2.DescriptorProto, map_entries: Set[str]) -> MessageNode:
    message = MessageNode(name=desc.name, is_map_entry=desc.options.map_entry)

    # proto3 "optional" fields get a synthetic oneof each; those aren't real
    # oneofs and get no accessors of their own.
    synthetic = {fd.oneof_index for fd in desc.field if fd.proto3_optional}
    oneofs_by_index: Dict[int, OneofNode] = {}
    for index, oneof in enumerate(desc.oneof_decl):
        if index in synthetic:
            continue
        node = OneofNode(name=oneof.name, containing_type=message)
        oneofs_by_index[index] = node
        message.oneofs.append(node)

    for fd in desc.field:
        node = _build_field(fd, map_entries)
        if fd.HasField("oneof_index"):
            node.oneof = oneofs_by_index.get(fd.oneof_index)
        message.fields.append(node)

    message.nested_messages = [_build_message(n, map_entries) for n in desc.nested_type]
    message.nested_enums = [_build_enum(e) for e in desc.enum_type]
    message.extensions = [_build_field(x, map_entries) for x in desc.extension]
    return message


def file_from_descriptor(fdp: d2.FileDescriptorProto, map_entries: Optional[Set[str]] = None) -> SchemaFile:
    if map_entries is None:
        fds = d2.FileDescriptorSet()
        fds.file.append(fdp)
        map_entries = _collect_map_entries(fds)

    class_prefix = None
    if fdp.options.HasField("objc_class_prefix"):
        class_prefix = fdp.options.objc_class_prefix

    schema = SchemaFile(
        name=fdp.name,
        package=fdp.package,
        class_prefix=class_prefix,
        messages=[_build_message(m, map_entries) for m in fdp.message_type],
        enums=[_build_enum(e) for e in fdp.enum_type],
        extensions=[_build_field(x, map_entries) for x in fdp.extension],
    )
    return link_file(schema)


def files_from_descriptor_set(fds: d2.FileDescriptorSet) -> List[SchemaFile]:
    map_entries = _collect_map_entries(fds)
    return [file_from_descriptor(f, map_entries) for f in fds.file]


def load_descriptor_set(path: str) -> List[SchemaFile]:
    """Read a binary ``FileDescriptorSet`` written by ``protoc``."""
    fds = d2.FileDescriptorSet()
    with open(path, "rb") as f:
        fds.ParseFromString(f.read())
    return files_from_descriptor_set(fds)


def compile_descriptor_set(
    proto_paths: Sequence[str],
    include_dirs: Sequence[str] = (),
) -> d2.FileDescriptorSet:
    """Run ``protoc`` on ``proto_paths`` and return the descriptor set it writes.

    Imports are left out of the set; only the named files are returned.
    """
    includes = list(include_dirs) or sorted({os.path.dirname(os.path.abspath(p)) for p in proto_paths})
    inc_args: List[str] = []
    for inc in includes:
        inc_args.extend(["-I", inc])

    with tempfile.TemporaryDirectory() as td:
        desc_path = os.path.join(td, "descriptor_set.pb")
        cmd = ["protoc", f"--descriptor_set_out={desc_path}"] + inc_args + list(proto_paths)
        try:
            subprocess.run(cmd, check=True, capture_output=True)
        except FileNotFoundError as e:
            raise RuntimeError("'protoc' not found. Please install Protocol Buffers compiler and ensure it is in PATH.") from e
        except subprocess.CalledProcessError as e:
            raise RuntimeError(f"protoc failed: {e.stderr.decode('utf-8', errors='ignore')}") from e

        fds = d2.FileDescriptorSet()
        with open(desc_path, "rb") as f:
            fds.ParseFromString(f.read())
    return fds
