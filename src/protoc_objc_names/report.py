from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader

from protoc_objc_names.models import FieldNode, MessageNode, SchemaFile, iter_enums, iter_messages
from protoc_objc_names.names import ObjCNames


def _get_template_env() -> Environment:
    template_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _field_entry(field: FieldNode, names: ObjCNames) -> Dict[str, str]:
    return {
        "declared": field.name,
        "name": names.field_name(field),
        "capitalized": names.field_name_capitalized(field),
    }


def _message_entry(message: MessageNode, names: ObjCNames) -> Dict:
    class_name, suffix = names.class_name_with_suffix(message)
    return {
        "declared": message.name,
        "class_name": class_name,
        "suffix_added": suffix,
        "fields": [_field_entry(f, names) for f in message.fields],
        "oneofs": [
            {
                "declared": oneof.name,
                "name": names.oneof_name(oneof),
                "enum_name": names.oneof_enum_name(oneof),
            }
            for oneof in message.oneofs
        ],
        "extensions": [
            {"declared": x.name, "name": names.extension_method_name(x)}
            for x in message.extensions
        ],
    }


def build_file_entry(file: SchemaFile, names: ObjCNames) -> Dict:
    """Collect every name assigned for ``file`` into plain dicts."""
    messages: List[Dict] = [
        _message_entry(m, names) for m in iter_messages(file.messages) if not m.is_map_entry
    ]
    enums: List[Dict] = []
    for enum in iter_enums(file):
        enums.append({
            "declared": enum.name,
            "name": names.enum_name(enum),
            "values": [
                {
                    "declared": value.name,
                    "name": names.enum_value_name(value),
                    "short_name": names.enum_value_short_name(value),
                }
                for value in enum.values
            ],
        })
    return {
        "name": file.name,
        "package": file.package,
        "prefix": names.file_class_prefix(file),
        "root_class": names.file_class_name(file),
        "file_path": names.file_path(file),
        "messages": messages,
        "enums": enums,
        "extensions": [
            {"declared": x.name, "name": names.extension_method_name(x)}
            for x in file.extensions
        ],
    }


def render_names_report(files: Sequence[SchemaFile], names: ObjCNames) -> str:
    """Render a plain-text listing of the names assigned to ``files``."""
    env = _get_template_env()
    template = env.get_template("names_report.txt.j2")
    return template.render(files=[build_file_entry(f, names) for f in files])
