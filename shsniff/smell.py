from __future__ import annotations
from typing import Any, Dict, Tuple, Union
from dataclasses import dataclass, field, fields
import enum
import json


GENERIC_SH = "generic-sh"


class LineEnding(enum.Enum):
    """
    Line ending style of the first line of a file.
    """
    NONE = ""
    LF   = "\n"
    CRLF = "\r\n"
    CR   = "\r"


class FinalEOL(enum.Enum):
    """
    Whether a file ends with a POSIX end of line. Only probed on request,
    so "not computed" is kept apart from "absent".
    """
    NOT_COMPUTED = None
    PRESENT = True
    ABSENT = False


@dataclass(frozen=True)
class KnownInterpreter:
    name: str


@dataclass(frozen=True)
class GenericPosix:
    """A confirmed shell script whose dialect is unknown."""

    @property
    def name(self) -> str:
        return GENERIC_SH


@dataclass(frozen=True)
class Unresolved:
    @property
    def name(self) -> str:
        return ""


Interpreter = Union[KnownInterpreter, GenericPosix, Unresolved]


def interpreter_from_name(name: str) -> Interpreter:
    if name == "":
        return Unresolved()
    if name == GENERIC_SH:
        return GenericPosix()
    return KnownInterpreter(name)


@dataclass(frozen=True)
class Smell:
    """
    The overall impression of a file, gathered from cheap local signals.

    Directory and symlink records are short-circuited: check `directory`
    and `symlink` before trusting the remaining fields.
    """
    path: str = ""
    filename: str = ""
    basename: str = ""
    extension: str = ""
    symlink: bool = False
    shebang: str = ""
    interpreter: Interpreter = field(default_factory=Unresolved)
    interpreter_flags: Tuple[str, ...] = ()
    line_ending: LineEnding = LineEnding.NONE
    final_eol: FinalEOL = FinalEOL.NOT_COMPUTED
    contains_cr: bool = False
    permissions: int = 0
    directory: bool = False
    owner_executable: bool = False
    library: bool = False
    bom: bool = False
    posixy: bool = False
    bash: bool = False
    ksh: bool = False
    alt_shell_script: bool = False
    core_configuration: bool = False
    machine_generated: bool = False

    @property
    def interpreter_name(self) -> str:
        return self.interpreter.name

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            match value:
                case LineEnding() | FinalEOL():
                    value = value.value
                case KnownInterpreter() | GenericPosix() | Unresolved():
                    value = value.name
                case tuple():
                    value = list(value)
            result[f.name] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Smell':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown smell fields: {', '.join(sorted(unknown))}")

        kwargs = dict(data)
        if "interpreter" in kwargs:
            kwargs["interpreter"] = interpreter_from_name(kwargs["interpreter"] or "")
        if "interpreter_flags" in kwargs:
            kwargs["interpreter_flags"] = tuple(kwargs["interpreter_flags"] or ())
        if "line_ending" in kwargs:
            kwargs["line_ending"] = LineEnding(kwargs["line_ending"])
        if "final_eol" in kwargs:
            kwargs["final_eol"] = FinalEOL(kwargs["final_eol"])
        return cls(**kwargs)

    def to_json(self, pretty: bool = False) -> str:
        if pretty:
            return json.dumps(self.to_dict(), indent=2)
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> 'Smell':
        return cls.from_dict(json.loads(text))
