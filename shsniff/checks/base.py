import abc
from typing import Any, List, Mapping, Tuple
from dataclasses import dataclass, field
import enum
import uuid

from shsniff.smell import Smell


@dataclass(frozen=True)
class FileLocation:
    path: str
    lines: Tuple[int, ...] = ()

    def __add__(self, other: 'FileLocation') -> 'FileLocation':
        """
        Combines two FileLocations.
        """
        if self.path != other.path:
            raise ValueError("Cannot combine different file locations.")
        return FileLocation(self.path, tuple(sorted(set(self.lines + other.lines))))

    def __str__(self) -> str:
        if not self.lines:
            return self.path
        return self.path + ':' + ','.join(str(line) for line in self.lines)


class Severity(enum.Enum):
    """
    Picks the output channel a finding is reported through.
    """
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class IssueType:
    """
    A lint rule outcome. `message` is a format string filled from the
    issue data. `id` is a stable UUID.
    """
    id: str
    message: str
    severity: Severity = Severity.ERROR

    def __post_init__(self):
        if not isinstance(self.id, str):
            raise ValueError(f"Invalid ID: {self.id}")
        try:
            uuid.UUID(self.id)
        except ValueError:
            raise ValueError(f"Invalid UUID: {self.id}")

    def make(self, **kwargs) -> 'Issue':
        return Issue(self, data=kwargs)

    def at(self, path: str, line: int | None = None) -> 'Issue':
        return Issue(self).at(path, line=line)


@dataclass
class Issue:
    """
    One finding, located at a script path and optional line numbers.
    """
    issue_type: IssueType
    data: Mapping[str, Any] | None = None
    location: FileLocation | None = None

    def at(self, path: str, line: int | None = None) -> 'Issue':
        lines = (line,) if line is not None else ()
        if self.location is None:
            self.location = FileLocation(path, lines)
        else:
            self.location = self.location + FileLocation(path, lines)
        return self

    def describe(self) -> str:
        msg = f"{self.location} > " if self.location is not None else '> '
        msg += self.issue_type.message.format(**(self.data or {}))
        return msg


@dataclass
class IssueList:
    """
    Issues found during a check, with consecutive repeats of the same
    issue folded into one.
    """
    issues: List[Issue] = field(default_factory=list)

    def append(self, issue: Issue) -> None:
        if self.issues:
            last = self.issues[-1]
            if last.issue_type == issue.issue_type and last.data == issue.data:
                if last.location is not None and issue.location is not None:
                    last.location = last.location + issue.location
                return
        self.issues.append(issue)

    def extend(self, issues: List[Issue] | 'IssueList') -> None:
        for issue in issues:
            self.append(issue)

    def __iter__(self):
        return iter(self.issues)

    def __len__(self) -> int:
        return len(self.issues)


class ScriptCheck(abc.ABC):
    """
    A lint rule over a classified file. Checks only see POSIXy or
    alternative shell scripts.
    """
    @abc.abstractmethod
    def check(self, smell: Smell) -> List[Issue]:
        raise NotImplementedError()
