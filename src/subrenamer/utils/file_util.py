"""
Filesystem collaborators and text helpers.

This module holds the two thin I/O pieces the renamer depends on: the directory
enumerator that lists candidate files, and the rename executor that performs a
single filesystem-level move. It also contains the text normalization helpers
shared by the parser and the configuration layer.
"""
import os
import re
from pathlib import Path
from typing import Iterable, Iterator, Tuple

from subrenamer.utils import logger
from subrenamer.utils.constants import SEPARATOR_REGEX
from subrenamer.utils.logger import LogLevel


def normalize_text(text: str) -> str:
    """Collapse separators (dots, underscores, dashes, whitespace) to single spaces and case-fold."""
    return SEPARATOR_REGEX.sub(" ", text).strip().casefold()


def parse_extensions(value: str | Iterable[str]) -> set[str]:
    """
    Parse an extension list into a set of lowercased, dot-prefixed extensions.

    Accepts a comma separated string ("srt, .ASS,vtt") or an iterable of strings.
    Empty items are ignored.
    """
    items = re.split(r"[,\s]+", value) if isinstance(value, str) else value
    extensions = set()
    for item in items:
        ext = item.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        extensions.add(ext)
    return extensions


def list_directory(root: Path, recursive: bool = False) -> Iterator[Tuple[Path, bool]]:
    """
    Yield (path, is_file) for every entry under `root`.

    Order is whatever the filesystem returns; callers must not rely on it.
    Entries that cannot be inspected are logged and skipped.
    """
    paths = root.rglob("*") if recursive else root.glob("*")
    for p in paths:
        try:
            is_file = p.is_file()
        except OSError as e:
            logger.log("scan.error", LogLevel.WARN, path=str(p), error=str(e))
            continue
        yield p, is_file


class FileRenamer:
    """Rename executor backed by a single `os.rename` call."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def rename(self, source: Path, destination: Path) -> None:
        """Move `source` to `destination`; raises OSError on failure."""
        os.rename(source, destination)
