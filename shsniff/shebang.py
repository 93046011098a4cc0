"""
Shebang parsing.

Commonly encountered forms:

    #!/bin/bash
    #!/usr/local/bin/bash
    #!/usr/bin/env python
    #!/usr/bin/env MathKernel -script
    #!/bin/busybox python
    #!someapplication

The interpreter is the basename of the command, with one leading
`/usr/bin/env` or `/bin/busybox` indirection removed. Anything after the
interpreter is passed to it as flags.
"""
from __future__ import annotations
from typing import List, Optional, Tuple
from dataclasses import dataclass
import posixpath

from shsniff.smell import Interpreter, KnownInterpreter, GenericPosix, interpreter_from_name
from shsniff.tables import ClassificationTables


# Only a single layer is removed, so `/usr/bin/env busybox sh` or `env -S`
# chains resolve to `busybox` and `-S` respectively.
INDIRECTIONS = ("/usr/bin/env", "/bin/busybox")


@dataclass(frozen=True)
class Shebang:
    text: str
    interpreter: Interpreter
    flags: Tuple[str, ...]


def split_command(shebang: str) -> List[str]:
    if not shebang.startswith("#!"):
        raise ValueError(f"Not a shebang: {shebang!r}")
    command = shebang[2:].strip()
    parts = [part for part in command.split(" ") if part]
    if parts and parts[0] in INDIRECTIONS:
        parts = parts[1:]
    return parts


def parse_shebang(shebang: str, tables: ClassificationTables, fallback: Optional[str] = None) -> Shebang:
    """
    Parses a `#!` line with its line terminator already trimmed.

    `fallback` is the interpreter implied by the file extension, used when
    the shebang names no interpreter at all (e.g. a bare `#!`).
    """
    parts = split_command(shebang)

    interpreter_filename = posixpath.basename(parts[0]) if parts else ""
    if not interpreter_filename:
        interpreter: Interpreter = KnownInterpreter(fallback) if fallback else GenericPosix()
        return Shebang(shebang, interpreter, ())

    name = tables.filename_interpreter(interpreter_filename) or interpreter_filename
    return Shebang(shebang, interpreter_from_name(name), tuple(parts[1:]))
