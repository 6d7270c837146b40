"""
Constants and default settings for subtitle renaming.

This module contains the default extension sets used to tell videos apart from
subtitles, the filename patterns used to extract episode keys, the vocabulary of
language/variant tags preserved when a subtitle is renamed, the status codes used
in run reports, and the names of the environment variables read at startup.
"""

import re

# Accepted file extensions
VIDEO_EXTENSIONS = {".mkv", ".mp4", ".avi", ".mov", ".m4v", ".wmv", ".webm", ".ts"}
SUBTITLE_EXTENSIONS = {".srt", ".ass", ".ssa", ".vtt", ".sub", ".idx", ".sup"}

# Collision handling
ON_COLLISION_SUFFIX = "suffix"
ON_COLLISION_SKIP = "skip"
ON_COLLISION_CHOICES = (ON_COLLISION_SUFFIX, ON_COLLISION_SKIP)

# Largest number accepted as a season or episode
MAX_KEY_NUMBER = 2 ** 32 - 1

# Regex patterns for filename parsing (priority order)
SEASON_EPISODE_REGEX = re.compile(r"(?<![a-z0-9])s(\d{1,3})[ ._-]?e(\d{1,4})(?!\d)", re.IGNORECASE)
CROSS_EPISODE_REGEX = re.compile(r"(?<![a-z0-9])(\d{1,2})x(\d{1,4})(?![0-9])", re.IGNORECASE)
EPISODE_ONLY_REGEX = re.compile(r"(?<![a-z])(?:episode|ep|e)[ ._-]*(\d{1,4})(?![0-9a-z])", re.IGNORECASE)
NUMERIC_TOKEN_REGEX = re.compile(r"\d+")
NOISE_REGEX = re.compile(
    r"(?<![a-z0-9])("
    r"\d{3,4}[pi]|[248]k|"
    r"[xh]\.?26[45]|"
    r"\d\.\d|"
    r"(?:19|20)\d{2}|"
    r"10bit|8bit|"
    r"ddp?\d?(?:\.\d)?|aac\d?(?:\.\d)?|ac3|dts"
    r")(?![a-z0-9])",
    re.IGNORECASE,
)
SEPARATOR_REGEX = re.compile(r"[._\-\s]+")
TRAILING_TAG_REGEX = re.compile(
    r"[._\s-]*(\[[^\]]*\]|\([^)]*\)|[A-Za-z]{2,3}-[A-Za-z]{2,4}|[^._\s\[\]()-]+)$"
)
REGION_TAG_REGEX = re.compile(r"^[a-z]{2,3}-[a-z]{2,4}$", re.IGNORECASE)

# Language and variant tags kept when a subtitle is renamed
LANGUAGE_TAGS = frozenset({
    # ISO 639-1
    "en", "es", "fr", "de", "it", "pt", "ru", "ja", "ko", "zh", "ar", "nl", "pl", "tr",
    "vi", "th", "id", "hi", "he", "cs", "sv", "no", "da", "fi", "el", "hu", "ro", "uk",
    "bg", "hr", "sr", "sk", "sl", "ca", "eu", "gl", "ms", "fa", "lt", "lv", "et",
    # ISO 639-2
    "eng", "spa", "fra", "fre", "deu", "ger", "ita", "por", "rus", "jpn", "kor", "zho",
    "chi", "ara", "nld", "dut", "pol", "tur", "vie", "tha", "ind", "hin", "heb", "ces",
    "cze", "swe", "nor", "dan", "fin", "ell", "gre", "hun", "ron", "rum", "ukr", "bul",
    "hrv", "srp", "slk", "slo", "slv", "cat", "lat",
    # Names
    "english", "spanish", "french", "german", "italian", "portuguese", "russian",
    "japanese", "korean", "chinese", "arabic", "dutch", "polish", "turkish", "latino",
    "castellano", "brazilian",
    # Variants
    "forced", "sdh", "cc", "default", "full", "signs", "songs", "commentary",
})

# Processing status codes
STATUS_RENAMED = "RENAMED"
STATUS_UNMATCHED = "UNMATCHED"
STATUS_COLLISION = "COLLISION"
STATUS_FAILED = "FAILED"

# Unmatched reasons
REASON_NO_KEY_MATCH = "no-key-match"
REASON_AMBIGUOUS = "ambiguous"
REASON_NO_STRUCTURAL_KEY = "no-structural-key"

# Environment variables
ENV_VIDEO_EXTENSIONS = "SUBRENAMER_VIDEO_EXTENSIONS"
ENV_SUBTITLE_EXTENSIONS = "SUBRENAMER_SUBTITLE_EXTENSIONS"
ENV_LANGUAGE_TAGS = "SUBRENAMER_LANGUAGE_TAGS"
ENV_ON_COLLISION = "SUBRENAMER_ON_COLLISION"
ENV_LOG_LEVEL = "SUBRENAMER_LOG_LEVEL"
