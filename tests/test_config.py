#!/usr/bin/env python3
"""
Tests for run configuration: normalization, validation and environment overrides
"""

import pytest

from subrenamer.utils import constants
from subrenamer.utils.config import RenameConfig, load_config
from subrenamer.utils.errors import SetupError, SubRenamerError
from subrenamer.utils.file_util import parse_extensions


class TestParseExtensions:

    def test_comma_separated_string(self):
        assert parse_extensions("mkv, .MP4,,avi") == {".mkv", ".mp4", ".avi"}

    def test_iterable(self):
        assert parse_extensions([".SRT", "ass", " "]) == {".srt", ".ass"}


class TestRenameConfig:
    """Defaults, normalization and validation"""

    def test_defaults(self):
        config = RenameConfig().validate()
        assert ".mkv" in config.video_extensions
        assert ".srt" in config.subtitle_extensions
        assert config.on_collision == constants.ON_COLLISION_SUFFIX
        assert config.dry_run is False

    def test_extensions_are_normalized(self):
        config = RenameConfig(video_extensions={"MKV"}, subtitle_extensions="srt,.Ass")
        assert config.video_extensions == frozenset({".mkv"})
        assert config.subtitle_extensions == frozenset({".srt", ".ass"})

    def test_single_pattern_applies_to_both_sides(self):
        config = RenameConfig(subtitle_pattern=r"E(\d+)")
        assert config.video_pattern == r"E(\d+)"
        config = RenameConfig(video_pattern=r"x(\d+)")
        assert config.subtitle_pattern == r"x(\d+)"

    def test_separate_patterns_are_kept(self):
        config = RenameConfig(video_pattern="a(\\d+)", subtitle_pattern="b(\\d+)")
        assert (config.video_pattern, config.subtitle_pattern) == ("a(\\d+)", "b(\\d+)")

    @pytest.mark.parametrize("kwargs", [
        {"video_extensions": set()},
        {"subtitle_extensions": set()},
        {"video_extensions": {".srt", ".mkv"}},
        {"on_collision": "overwrite"},
        {"subtitle_pattern": "S(\\d+"},
    ])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(SetupError):
            RenameConfig(**kwargs).validate()

    def test_setup_error_is_a_subrenamer_error(self):
        assert issubclass(SetupError, SubRenamerError)

    def test_overrides_ignore_none(self):
        config = RenameConfig(recursive=True).with_overrides(recursive=None, dry_run=True)
        assert config.recursive is True
        assert config.dry_run is True


class TestLoadConfig:
    """Environment variables and explicit overrides"""

    @pytest.fixture(autouse=True)
    def _env(self, monkeypatch, tmp_path):
        for name in (
            constants.ENV_VIDEO_EXTENSIONS,
            constants.ENV_SUBTITLE_EXTENSIONS,
            constants.ENV_LANGUAGE_TAGS,
            constants.ENV_ON_COLLISION,
        ):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.chdir(tmp_path)
        self.monkeypatch = monkeypatch

    def test_defaults_without_environment(self):
        assert load_config() == RenameConfig()

    def test_environment_overrides_defaults(self):
        self.monkeypatch.setenv(constants.ENV_VIDEO_EXTENSIONS, "mkv,webm")
        self.monkeypatch.setenv(constants.ENV_SUBTITLE_EXTENSIONS, "srt")
        self.monkeypatch.setenv(constants.ENV_ON_COLLISION, "SKIP")
        config = load_config()
        assert config.video_extensions == frozenset({".mkv", ".webm"})
        assert config.subtitle_extensions == frozenset({".srt"})
        assert config.on_collision == constants.ON_COLLISION_SKIP

    def test_extra_language_tags_extend_the_defaults(self):
        self.monkeypatch.setenv(constants.ENV_LANGUAGE_TAGS, "Klingon, elvish")
        config = load_config()
        assert {"klingon", "elvish", "eng"} <= config.language_tags

    def test_explicit_overrides_win(self):
        self.monkeypatch.setenv(constants.ENV_ON_COLLISION, "skip")
        config = load_config(on_collision=constants.ON_COLLISION_SUFFIX, dry_run=True)
        assert config.on_collision == constants.ON_COLLISION_SUFFIX
        assert config.dry_run is True
