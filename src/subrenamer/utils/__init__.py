"""
Constants, configuration, logging and filesystem helpers for subtitle renaming.

This package collects the default extension sets and filename patterns, the
run configuration, the exception types, the structured logger, and the thin
filesystem collaborators (directory enumerator and rename executor) used by
the `subrenamer.rename` engine.
"""

from .constants import (
    LANGUAGE_TAGS,
    ON_COLLISION_CHOICES,
    ON_COLLISION_SKIP,
    ON_COLLISION_SUFFIX,
    REASON_AMBIGUOUS,
    REASON_NO_KEY_MATCH,
    REASON_NO_STRUCTURAL_KEY,
    STATUS_COLLISION,
    STATUS_FAILED,
    STATUS_RENAMED,
    STATUS_UNMATCHED,
    SUBTITLE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)
from .errors import SetupError, SubRenamerError
from .logger import LogLevel

__all__ = [
    "VIDEO_EXTENSIONS",
    "SUBTITLE_EXTENSIONS",
    "LANGUAGE_TAGS",
    "ON_COLLISION_SUFFIX",
    "ON_COLLISION_SKIP",
    "ON_COLLISION_CHOICES",
    "STATUS_RENAMED",
    "STATUS_UNMATCHED",
    "STATUS_COLLISION",
    "STATUS_FAILED",
    "REASON_NO_KEY_MATCH",
    "REASON_AMBIGUOUS",
    "REASON_NO_STRUCTURAL_KEY",
    "SetupError",
    "SubRenamerError",
    "LogLevel",
]
