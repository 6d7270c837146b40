"""
Run configuration for the subtitle renamer.

`RenameConfig` is the explicit configuration value threaded through the
classifier, correlator and plan builder. Defaults come from `constants`; the
environment (optionally populated from a `.env` file) can override them, and
explicit overrides (CLI flags) win over both.
"""
import os
import re
from dataclasses import dataclass, field, replace

from dotenv import load_dotenv

from subrenamer.utils import constants
from subrenamer.utils.errors import SetupError
from subrenamer.utils.file_util import parse_extensions


@dataclass(frozen=True)
class RenameConfig:
    """Settings for one renaming run."""

    video_extensions: frozenset[str] = field(default_factory=lambda: frozenset(constants.VIDEO_EXTENSIONS))
    subtitle_extensions: frozenset[str] = field(default_factory=lambda: frozenset(constants.SUBTITLE_EXTENSIONS))
    language_tags: frozenset[str] = constants.LANGUAGE_TAGS
    video_pattern: str | None = None
    subtitle_pattern: str | None = None
    on_collision: str = constants.ON_COLLISION_SUFFIX
    recursive: bool = False
    dry_run: bool = False

    def __post_init__(self):
        # Normalize so user-supplied sets are case-insensitive and dot-tolerant.
        object.__setattr__(self, "video_extensions", frozenset(parse_extensions(self.video_extensions)))
        object.__setattr__(self, "subtitle_extensions", frozenset(parse_extensions(self.subtitle_extensions)))
        object.__setattr__(self, "language_tags", frozenset(t.strip().casefold() for t in self.language_tags))
        # A single pattern applies to both sides.
        if self.video_pattern and not self.subtitle_pattern:
            object.__setattr__(self, "subtitle_pattern", self.video_pattern)
        elif self.subtitle_pattern and not self.video_pattern:
            object.__setattr__(self, "video_pattern", self.subtitle_pattern)

    def validate(self) -> "RenameConfig":
        """Raise SetupError when the configuration cannot produce a meaningful run."""
        if not self.video_extensions:
            raise SetupError("No video extensions configured")
        if not self.subtitle_extensions:
            raise SetupError("No subtitle extensions configured")
        overlap = self.video_extensions & self.subtitle_extensions
        if overlap:
            raise SetupError(f"Extensions configured as both video and subtitle: {', '.join(sorted(overlap))}")
        if self.on_collision not in constants.ON_COLLISION_CHOICES:
            raise SetupError(
                f"Invalid collision policy '{self.on_collision}' (expected one of {', '.join(constants.ON_COLLISION_CHOICES)})"
            )
        for label, pattern in (("video", self.video_pattern), ("subtitle", self.subtitle_pattern)):
            if pattern is None:
                continue
            try:
                re.compile(pattern)
            except re.error as e:
                raise SetupError(f"Invalid {label} pattern '{pattern}': {e}") from e
        return self

    def with_overrides(self, **overrides) -> "RenameConfig":
        """Return a copy with the non-None overrides applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def load_config(**overrides) -> RenameConfig:
    """
    Build a RenameConfig from the environment, then apply explicit overrides.

    Reads a `.env` file when one is found. Recognized
    variables are listed in `constants` (SUBRENAMER_*).
    """
    load_dotenv()

    env_values = {}
    video_env = os.getenv(constants.ENV_VIDEO_EXTENSIONS)
    if video_env:
        env_values["video_extensions"] = parse_extensions(video_env)
    subtitle_env = os.getenv(constants.ENV_SUBTITLE_EXTENSIONS)
    if subtitle_env:
        env_values["subtitle_extensions"] = parse_extensions(subtitle_env)
    tags_env = os.getenv(constants.ENV_LANGUAGE_TAGS)
    if tags_env:
        extra = {t for t in re.split(r"[,\s]+", tags_env) if t}
        env_values["language_tags"] = constants.LANGUAGE_TAGS | extra
    collision_env = os.getenv(constants.ENV_ON_COLLISION)
    if collision_env:
        env_values["on_collision"] = collision_env.strip().lower()

    return RenameConfig(**env_values).with_overrides(**overrides)
