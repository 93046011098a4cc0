from typing import Callable, Generator, List, Optional
from pathlib import Path
import logging
import os

import pathspec


# Version control and dependency directories that never hold the project's own scripts.
DEFAULT_IGNORES: List[str] = [
    ".git/",
    ".venv/",
    "node_modules/",
    "vendor/",
]


class IgnoreSet:
    def __init__(self, positive: List[str], negative: Optional[List[str]] = None):
        self.positive = list(positive)
        self.negative = list(negative or [])
        self.path_spec = pathspec.PathSpec.from_lines(
            "gitwildmatch",
            self.positive + ['!' + n for n in self.negative])

    def __call__(self, path: Path, is_dir: bool = False) -> bool:
        """Returns True when `path` should be skipped."""
        rel_path = path.as_posix()
        if is_dir and not rel_path.endswith('/'):
            rel_path += '/'
        return self.path_spec.match_file(rel_path)

    def __add__(self, other: 'IgnoreSet') -> 'IgnoreSet':
        return IgnoreSet(
            self.positive + other.positive,
            self.negative + other.negative)


def default_ignores() -> IgnoreSet:
    return IgnoreSet(DEFAULT_IGNORES)


def read_ignore_file(path: Path) -> IgnoreSet:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"

    with open(path, 'rt', encoding='utf-8') as f:
        lines = [line.strip() for line in f.readlines()]
        lines = [line for line in lines if line and not line.startswith("#")]

    positive = [line for line in lines if not line.startswith("!")]
    negative = [line[1:] for line in lines if line.startswith("!")]
    return IgnoreSet(positive, negative)


def walk_paths(
        root: Path,
        ignore: IgnoreSet | None = None,
        onerror: Callable[[OSError], None] | None = None) -> Generator[Path, None, None]:
    """
    Yields every non-directory entry below `root` (or `root` itself when it is
    not a directory), in sorted order. Directory symlinks are not followed.

    Directories that cannot be listed are skipped. Their `OSError` goes to
    `onerror` when given, and is logged otherwise.
    """
    assert isinstance(root, Path), f"Expected Path, got {type(root)}"
    ignore = ignore or default_ignores()

    def go(path: Path, rel: Path) -> Generator[Path, None, None]:
        is_dir = path.is_dir() and not path.is_symlink()
        if rel.parts and ignore(rel, is_dir=is_dir):
            return

        if not is_dir:
            yield path
            return

        try:
            names = sorted(os.listdir(path))
        except OSError as e:
            if onerror is None:
                logging.warning(f"Could not list {path}: {e}")
            else:
                onerror(e)
            return

        for name in names:
            yield from go(path / name, rel / name)

    yield from go(root, Path())
