from __future__ import annotations

from typing import Sequence, Tuple

from protoc_objc_names.reserved_words import NSOBJECT_METHODS, RESERVED_WORDS

RETAINED_NAMES = ("new", "alloc", "copy", "mutableCopy")
INIT_NAMES = ("init",)
CREATE_NAMES = ("Create", "Copy")


def is_reserved_c_identifier(name: str) -> bool:
    """True for ``__x`` and ``_X`` style names, which C reserves."""
    if len(name) > 2 and name[0] == "_":
        return name[1] == "_" or "A" <= name[1] <= "Z"
    return False


def is_reserved_name(name: str) -> bool:
    return (
        is_reserved_c_identifier(name)
        or name in RESERVED_WORDS
        or name in NSOBJECT_METHODS
    )


def needs_prefix(prefix: str, name: str) -> bool:
    """Whether ``name`` still has to have ``prefix`` put in front of it.

    ``ABCFoo`` already carries ``ABC``; ``ABCfoo`` and ``ABC`` itself do not,
    since the character after the prefix has to start a new word.
    """
    if not name.startswith(prefix):
        return True
    if len(name) == len(prefix):
        return True
    return not ("A" <= name[len(prefix)] <= "Z")


def sanitize(prefix: str, name: str, suffix: str) -> Tuple[str, str]:
    """Prefix ``name`` and append ``suffix`` if the result is reserved.

    Returns ``(sanitized_name, suffix_added)`` where ``suffix_added`` is empty
    when no suffix was needed. The reserved check runs on the prefixed
    spelling.
    """
    sanitized = prefix + name if needs_prefix(prefix, name) else name
    if is_reserved_name(sanitized):
        return sanitized + suffix, suffix
    return sanitized, ""


def _is_special_name_prefix(name: str, special_names: Sequence[str]) -> bool:
    for special in special_names:
        if name.startswith(special):
            # newton vs newTon vs new_ton
            if len(name) > len(special):
                return not ("a" <= name[len(special)] <= "z")
            return True
    return False


def is_retained_name(name: str) -> bool:
    """Names that fall under the "returns retained" memory management rule."""
    return _is_special_name_prefix(name, RETAINED_NAMES)


def is_init_name(name: str) -> bool:
    return _is_special_name_prefix(name, INIT_NAMES)


def is_create_name(name: str) -> bool:
    """Names matching the Core Foundation "Create Rule" anywhere in them.

    Characters before the matched word are not checked, so ``FOOCreate``
    counts as a create name.
    """
    for special in CREATE_NAMES:
        pos = name.find(special)
        if pos == -1:
            continue
        end = pos + len(special)
        # Copyright vs CopyFoo vs Copy_Foo
        if len(name) > end:
            return not ("a" <= name[end] <= "z")
        return True
    return False
