from __future__ import annotations

import sys
from typing import Mapping, Optional, TextIO

WARNING_PREFIX = "protoc:0: warning: "


def warn(message: str, stream: Optional[TextIO] = None) -> None:
    """Print a non-fatal diagnostic the way protoc plugins report them."""
    out = stream if stream is not None else sys.stderr
    print(WARNING_PREFIX + message, file=out)
    out.flush()


def bool_from_env(environ: Mapping[str, str], name: str, default: bool) -> bool:
    value = environ.get(name)
    if value is None:
        return default
    return value.upper() == "YES"
