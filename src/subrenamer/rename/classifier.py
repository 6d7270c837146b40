"""
Partition a directory listing into video and subtitle entries.

The classifier is a pure transformation over the enumerator's output: it drops
directories and files whose extension belongs to neither configured set, and
returns videos and subtitles in traversal order.
"""
from pathlib import Path
from typing import Iterable, Tuple

from subrenamer.rename.models import MediaEntry, MediaKind
from subrenamer.utils import SUBTITLE_EXTENSIONS, VIDEO_EXTENSIONS
from subrenamer.utils.file_util import parse_extensions


class Classifier:
    """Assigns a MediaKind to each discovered file based on its extension."""

    def __init__(self, video_extensions: Iterable[str] = VIDEO_EXTENSIONS,
                 subtitle_extensions: Iterable[str] = SUBTITLE_EXTENSIONS):
        self.video_extensions = parse_extensions(video_extensions)
        self.subtitle_extensions = parse_extensions(subtitle_extensions)

    def classify_entry(self, path: Path) -> MediaEntry:
        ext = path.suffix.lower()
        if ext in self.video_extensions:
            kind = MediaKind.VIDEO
        elif ext in self.subtitle_extensions:
            kind = MediaKind.SUBTITLE
        else:
            kind = MediaKind.IGNORED
        return MediaEntry(path=path, stem=path.stem, extension=ext, kind=kind)

    def classify(self, listing: Iterable[Tuple[Path, bool]]) -> tuple[list[MediaEntry], list[MediaEntry]]:
        """Return (videos, subtitles), each in the order the listing produced them."""
        videos: list[MediaEntry] = []
        subtitles: list[MediaEntry] = []
        for path, is_file in listing:
            if not is_file:
                continue
            entry = self.classify_entry(Path(path))
            if entry.kind is MediaKind.VIDEO:
                videos.append(entry)
            elif entry.kind is MediaKind.SUBTITLE:
                subtitles.append(entry)
        return videos, subtitles


def classify(listing, video_extensions=VIDEO_EXTENSIONS, subtitle_extensions=SUBTITLE_EXTENSIONS):
    """Convenience wrapper around Classifier.classify."""
    return Classifier(video_extensions, subtitle_extensions).classify(listing)
