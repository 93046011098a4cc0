from __future__ import annotations
from typing import Any, Dict, Optional, Tuple
from dataclasses import dataclass
from pathlib import Path
import errno
import logging
import os
import stat

from shsniff.content import read_head, probe_final_eol, contains_cr, split_shebang
from shsniff.shebang import parse_shebang
from shsniff.smell import Smell, Interpreter, KnownInterpreter, GenericPosix, Unresolved
from shsniff.tables import ClassificationTables, DEFAULT_TABLES


@dataclass(frozen=True)
class SniffConfig:
    """
    Optional probes. Each costs an extra read of the file, so both default
    to off for scans over large trees.
    """
    eol_check: bool = False
    cr_check: bool = False


class SniffError(Exception):
    """
    Raised when a file cannot be fully classified. `smell` holds whatever
    was learned before the failure; it is not a verdict of "not POSIXy".
    """
    def __init__(self, message: str, smell: Smell) -> None:
        super().__init__(message)
        self.smell = smell


class PathNotFound(SniffError):
    pass


class PathPermissionDenied(SniffError):
    pass


class ProbeIOError(SniffError):
    pass


def _stat_error(e: OSError, smell: Smell) -> SniffError:
    if isinstance(e, FileNotFoundError) or e.errno == errno.ENOTDIR:
        return PathNotFound(f"No such file: {smell.path}", smell)
    if isinstance(e, PermissionError):
        return PathPermissionDenied(f"Permission denied: {smell.path}", smell)
    return ProbeIOError(f"Could not stat {smell.path}: {e}", smell)


def extension_of(filename: str) -> str:
    # Everything from the last dot, so `.profile` is its own extension.
    index = filename.rfind(".")
    return filename[index:] if index >= 0 else ""


def sniff(path: str | Path, config: SniffConfig = SniffConfig(), tables: ClassificationTables = DEFAULT_TABLES) -> Smell:
    """
    Analyzes the holistic smell of a path.

    For performance, obvious cases short-circuit and return a record with
    some fields left at their defaults: directories, symlinks, editor
    backup files and special files are never opened.

    Raises a SniffError subclass carrying the partial record on I/O failure.
    """
    pth = str(path)
    file = Path(pth)
    scent: Dict[str, Any] = {"path": pth}

    def partial() -> Smell:
        return Smell(**scent)

    try:
        st = os.lstat(pth)
    except OSError as e:
        raise _stat_error(e, partial()) from e

    if stat.S_ISDIR(st.st_mode):
        scent["directory"] = True
        return partial()

    permissions = stat.S_IMODE(st.st_mode) & 0o777
    filename = os.path.basename(pth.rstrip("/")) or pth
    extension = extension_of(filename)
    owner_executable = bool(permissions & stat.S_IXUSR)
    scent.update(
        permissions=permissions,
        owner_executable=owner_executable,
        filename=filename,
        basename=filename,
        extension=extension,
    )

    if filename.endswith("~"):
        logging.debug(f"Skipping editor backup file {pth}")
        return partial()

    scent["machine_generated"] = tables.is_machine_generated(extension)

    extension_posixy = tables.extension_posixy(extension)
    filename_posixy = tables.filename_posixy(filename)

    posixy = False
    if extension_posixy is not None:
        posixy = extension_posixy
    # Filenames are rarer and more specific than extensions, so they win.
    if filename_posixy is not None:
        posixy = filename_posixy
    scent["posixy"] = posixy

    core_configuration = tables.is_config(extension, filename)
    scent["core_configuration"] = core_configuration
    scent["library"] = (core_configuration or extension != "") and not owner_executable

    if stat.S_ISLNK(st.st_mode):
        scent["symlink"] = True
        return partial()

    if not stat.S_ISREG(st.st_mode):
        # Opening a FIFO, socket or device can block. Never classify one as a script.
        logging.debug(f"Skipping special file {pth}")
        scent["posixy"] = False
        return partial()

    extension_interpreter = tables.extension_interpreter(extension)
    if extension_interpreter is not None:
        scent["interpreter"] = KnownInterpreter(extension_interpreter)

    try:
        head = read_head(file, tables)
    except OSError as e:
        raise ProbeIOError(f"Could not read {pth}: {e}", partial()) from e

    scent["bom"] = head.bom
    scent["line_ending"] = head.line_ending

    if config.eol_check and st.st_size > 0:
        try:
            scent["final_eol"] = probe_final_eol(file, st.st_size)
        except OSError as e:
            raise ProbeIOError(f"Could not read the end of {pth}: {e}", partial()) from e

    parseable, shebang_text = split_shebang(head.first_line)
    scent["shebang"] = shebang_text

    interpreter: Interpreter = scent.get("interpreter", Unresolved())

    if parseable:
        shebang = parse_shebang(shebang_text, tables, fallback=extension_interpreter)
        interpreter = shebang.interpreter
        scent["interpreter"] = interpreter
        scent["interpreter_flags"] = shebang.flags

        # Explicit non-POSIX metadata vetoes a POSIXy shebang.
        posixy = tables.interpreter_posixy(interpreter.name) and \
            (extension_posixy is None or extension_posixy) and \
            (filename_posixy is None or filename_posixy)
        scent["posixy"] = posixy
    elif posixy and extension_interpreter is None:
        # A POSIXy name without a shebang: a shell script of unknown dialect.
        interpreter = GenericPosix()
        scent["interpreter"] = interpreter

    scent["bash"] = tables.is_full_bash(interpreter.name)
    scent["ksh"] = tables.is_ksh(interpreter.name)

    alt_shell_script = not posixy and tables.is_alt_shell(interpreter.name, extension, filename)
    scent["alt_shell_script"] = alt_shell_script

    # A whole file scan, so only worth it for files already known to be shell scripts.
    if config.cr_check and (posixy or alt_shell_script):
        try:
            scent["contains_cr"] = contains_cr(file)
        except OSError as e:
            raise ProbeIOError(f"Could not scan {pth} for carriage returns: {e}", partial()) from e

    return partial()


def sniff_partial(path: str | Path, config: SniffConfig = SniffConfig(), tables: ClassificationTables = DEFAULT_TABLES) -> Tuple[Smell, Optional[SniffError]]:
    """
    Like `sniff`, but returns the partial record alongside the error instead
    of raising, for tools that log and move on to the next path.
    """
    try:
        return sniff(path, config, tables), None
    except SniffError as e:
        return e.smell, e
