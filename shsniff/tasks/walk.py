from typing import Generator, Iterable, List, Optional, Tuple, TypeAlias
from pathlib import Path
import logging

from shsniff.ignore import IgnoreSet, walk_paths
from shsniff.sniff import SniffConfig, SniffError, ProbeIOError, sniff_partial
from shsniff.smell import Smell

SniffResult: TypeAlias = Tuple[Smell, Optional[SniffError]]


def _listing_failures(failures: List[OSError]) -> Generator[SniffResult, None, None]:
    while failures:
        e = failures.pop(0)
        smell = Smell(path=str(e.filename or ""), directory=True)
        yield smell, ProbeIOError(f"Could not list {smell.path}: {e}", smell)


def _sniff_all(roots: Iterable[str], config: SniffConfig, ignore: Optional[IgnoreSet]) -> Generator[SniffResult, None, None]:
    failures: List[OSError] = []
    for root in roots:
        for path in walk_paths(Path(root), ignore, onerror=failures.append):
            yield from _listing_failures(failures)
            yield sniff_partial(path, config)
        yield from _listing_failures(failures)


def sniff_paths(roots: Iterable[str], config: SniffConfig, ignore: Optional[IgnoreSet] = None) -> Generator[SniffResult, None, None]:
    """
    Classifies every file below each root. Failures, including directories
    that cannot be listed, are logged and yielded with their partial record,
    so callers can decide whether to skip them.
    """
    for smell, err in _sniff_all(roots, config, ignore):
        if err is not None:
            logging.warning(f"{err}")
        yield smell, err
