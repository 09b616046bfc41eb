"""Source code helper utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Generator, Iterable

SKIPPED_DIRECTORIES = frozenset({
    "__pycache__",
    ".git",
    ".hg",
    ".svn",
    ".tox",
    ".venv",
    "venv",
    "node_modules",
})


def iter_code_files(root_paths: Iterable[str], extensions: tuple[str, ...] = (".py",)) -> Generator[Path, None, None]:
    """Yield code files beneath the provided directories in a stable order."""

    for root in root_paths:
        for path in sorted(Path(root).rglob("*")):
            if SKIPPED_DIRECTORIES.intersection(path.relative_to(root).parts[:-1]):
                continue
            if path.suffix in extensions and path.is_file():
                yield path
