"""Shared fixtures for the subtitle renamer tests."""

from pathlib import Path

import pytest

from subrenamer.rename.models import MatchConfidence, MatchPair, MediaEntry, MediaKind
from subrenamer.utils import logger
from subrenamer.utils.file_util import FileRenamer
from subrenamer.utils.logger import LogLevel


@pytest.fixture(autouse=True)
def reset_log_level():
    """Keep the module-level log level from leaking between tests"""
    logger.set_log_level(LogLevel.INFO)
    yield
    logger.set_log_level(LogLevel.INFO)


def video(path) -> MediaEntry:
    path = Path(path)
    return MediaEntry(path=path, stem=path.stem, extension=path.suffix.lower(), kind=MediaKind.VIDEO)


def subtitle(path) -> MediaEntry:
    path = Path(path)
    return MediaEntry(path=path, stem=path.stem, extension=path.suffix.lower(), kind=MediaKind.SUBTITLE)


def pair(video_path, subtitle_path, confidence=MatchConfidence.EXACT) -> MatchPair:
    return MatchPair(video(video_path), subtitle(subtitle_path), confidence)


def touch(root: Path, *names: str) -> list[Path]:
    paths = []
    for name in names:
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("x")
        paths.append(p)
    return paths


class StubRenamer(FileRenamer):
    """Rename executor that only records calls; existence comes from the real filesystem."""

    def __init__(self, fail_on=()):
        self.calls = []
        self.fail_on = set(fail_on)

    def rename(self, source, destination):
        if source.name in self.fail_on:
            raise PermissionError(13, "Permission denied", str(source))
        self.calls.append((source, destination))
