#!/usr/bin/env python3
"""
Tests for extension-based classification of directory listings
"""

from pathlib import Path

from subrenamer.rename.classifier import Classifier, classify
from subrenamer.rename.models import MediaKind


LISTING = [
    (Path("/media/Show.S01E01.MKV"), True),
    (Path("/media/Show.S01E01.srt"), True),
    (Path("/media/Subs"), False),
    (Path("/media/notes.txt"), True),
    (Path("/media/Show.S01E02.ass"), True),
    (Path("/media/extras.mkv"), False),
]


class TestClassifier:
    """Classifier partitions a listing by extension"""

    def test_partition_keeps_traversal_order(self):
        videos, subtitles = Classifier({"mkv"}, {"srt", ".ASS"}).classify(LISTING)
        assert [v.name for v in videos] == ["Show.S01E01.MKV"]
        assert [s.name for s in subtitles] == ["Show.S01E01.srt", "Show.S01E02.ass"]

    def test_extension_is_normalized(self):
        videos, _ = Classifier({".mkv"}, {".srt"}).classify(LISTING)
        assert videos[0].extension == ".mkv"
        assert videos[0].stem == "Show.S01E01"

    def test_directories_are_dropped_even_with_video_extension(self):
        """A directory named like a video is not a video"""
        videos, _ = Classifier({".mkv"}, {".srt"}).classify(LISTING)
        assert Path("/media/extras.mkv") not in [v.path for v in videos]

    def test_unknown_extension_is_ignored(self):
        entry = Classifier({".mkv"}, {".srt"}).classify_entry(Path("/media/notes.txt"))
        assert entry.kind is MediaKind.IGNORED

    def test_file_without_extension(self):
        entry = Classifier().classify_entry(Path("/media/README"))
        assert entry.kind is MediaKind.IGNORED
        assert entry.extension == ""

    def test_module_level_helper_uses_defaults(self):
        videos, subtitles = classify(LISTING)
        assert len(videos) == 1
        assert len(subtitles) == 2
