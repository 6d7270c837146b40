"""
Match subtitles to videos using identity keys.

The correlator pairs each subtitle with at most one video. Episodic keys are
compared first, then literal (normalized stem) keys; anything that matches zero
or several videos is reported unmatched rather than guessed. Only when a group
carries no structural signal at all, and both sides have the same size, are
files paired positionally in natural filename order.

Functions:
- correlate: Pair the subtitles of one group with that group's videos.
- group_by_scope: Split a recursive scan into per-directory correlation groups.
- assign_ordinal_keys: Order entries naturally and number them.
"""
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Sequence

from subrenamer.rename import parser
from subrenamer.rename.models import (
    CorrelationResult,
    EpisodicKey,
    IdentityKey,
    LiteralKey,
    MatchConfidence,
    MatchPair,
    MediaEntry,
    OrdinalKey,
    UnmatchedSubtitle,
)
from subrenamer.utils import LANGUAGE_TAGS, REASON_AMBIGUOUS, REASON_NO_KEY_MATCH, REASON_NO_STRUCTURAL_KEY, logger
from subrenamer.utils.file_util import normalize_text
from subrenamer.utils.logger import LogLevel


def _entry_sort_key(entry: MediaEntry):
    return parser.natural_sort_key(entry.name), str(entry.path)


def assign_ordinal_keys(entries: Iterable[MediaEntry]) -> list[tuple[MediaEntry, OrdinalKey]]:
    """Sort entries by natural filename order and give each its position (starting at 1)."""
    ordered = sorted(entries, key=_entry_sort_key)
    return [(entry, OrdinalKey(position)) for position, entry in enumerate(ordered, start=1)]


def _unique(entries: Iterable[MediaEntry]) -> list[MediaEntry]:
    seen = set()
    out = []
    for entry in entries:
        if entry.path not in seen:
            seen.add(entry.path)
            out.append(entry)
    return out


def _episodic_candidates(by_episode: dict, key: EpisodicKey) -> list[MediaEntry]:
    """
    Videos sharing the subtitle's episode number.

    Identical (season, episode) tuples win. When none exist, a missing season
    on either side matches any season.
    """
    entries = by_episode.get(key.episode, [])
    exact = _unique(v for season, v in entries if season == key.season)
    if exact:
        return exact
    return _unique(v for season, v in entries if season is None or key.season is None)


def _literal_candidates(
        literal_index: dict, subtitle: MediaEntry, key: LiteralKey, language_tags
) -> list[MediaEntry]:
    """Videos whose normalized stem equals the subtitle's, with or without its language tags."""
    candidates = list(literal_index.get(key.normalized_stem, []))
    if not candidates:
        base, tags = parser.split_language_suffix(subtitle.stem, key, language_tags)
        if tags:
            candidates = list(literal_index.get(normalize_text(base), []))
    return _unique(candidates)


def correlate(
        videos: Sequence[MediaEntry],
        subtitles: Sequence[MediaEntry],
        video_pattern=None,
        subtitle_pattern=None,
        language_tags=LANGUAGE_TAGS,
) -> CorrelationResult:
    """
    Pair each subtitle with at most one video.

    Parameters:
    - videos: Video entries of the group.
    - subtitles: Subtitle entries of the group.
    - video_pattern / subtitle_pattern: Optional custom key patterns (see parser.extract_key).
    - language_tags: Tags stripped from subtitle stems when comparing literal keys.

    Returns:
    CorrelationResult with EXACT pairs (or ORDINAL pairs when the fallback
    applies) and the unmatched subtitles with a reason.
    """
    video_keys: list[tuple[MediaEntry, IdentityKey]] = [
        (v, parser.extract_key(v.stem, video_pattern, v.name)) for v in videos
    ]
    subtitle_keys: list[tuple[MediaEntry, IdentityKey]] = [
        (s, parser.extract_key(s.stem, subtitle_pattern, s.name)) for s in subtitles
    ]

    by_episode: dict[int, list[tuple[int | None, MediaEntry]]] = defaultdict(list)
    literal_index: dict[str, list[MediaEntry]] = defaultdict(list)
    for video, key in video_keys:
        if isinstance(key, EpisodicKey):
            by_episode[key.episode].append((key.season, video))
        elif isinstance(key, LiteralKey):
            literal_index[key.normalized_stem].append(video)

    result = CorrelationResult()
    for subtitle, key in subtitle_keys:
        if isinstance(key, EpisodicKey):
            candidates = _episodic_candidates(by_episode, key)
        else:
            candidates = _literal_candidates(literal_index, subtitle, key, language_tags)

        if len(candidates) == 1:
            video = candidates[0]
            result.pairs.append(MatchPair(video, subtitle, MatchConfidence.EXACT))
            logger.log(
                "correlate.match", LogLevel.DEBUG,
                subtitle=subtitle.name, video=video.name, key=key.label, confidence=MatchConfidence.EXACT.value,
            )
            continue

        if len(candidates) > 1:
            reason = REASON_AMBIGUOUS
        elif isinstance(key, EpisodicKey):
            reason = REASON_NO_KEY_MATCH
        else:
            reason = REASON_NO_STRUCTURAL_KEY
        result.unmatched.append(UnmatchedSubtitle(subtitle, reason))

    # A custom pattern asks for a structural key; never pair positionally then.
    has_structure = video_pattern is not None or subtitle_pattern is not None or any(
        isinstance(k, EpisodicKey) for _, k in video_keys + subtitle_keys
    )
    if not result.pairs and subtitles and len(videos) == len(subtitles) and not has_structure:
        return _ordinal_fallback(videos, subtitles)
    return result


def _ordinal_fallback(videos: Sequence[MediaEntry], subtitles: Sequence[MediaEntry]) -> CorrelationResult:
    result = CorrelationResult()
    for (video, video_pos), (subtitle, sub_pos) in zip(assign_ordinal_keys(videos), assign_ordinal_keys(subtitles)):
        result.pairs.append(MatchPair(video, subtitle, MatchConfidence.ORDINAL))
        logger.log(
            "correlate.ordinal", LogLevel.DEBUG,
            subtitle=subtitle.name, video=video.name, position=sub_pos.position,
        )
    return result


def _find_scope(directory: Path, video_dirs, root: Path | None) -> Path | None:
    for candidate in (directory, *directory.parents):
        if candidate in video_dirs:
            return candidate
        if root is not None and candidate == root:
            break
    return None


def group_by_scope(
        videos: Sequence[MediaEntry], subtitles: Sequence[MediaEntry], root: Path | None = None
) -> tuple[list[tuple[Path, list[MediaEntry], list[MediaEntry]]], list[MediaEntry]]:
    """
    Split entries into correlation groups.

    A subtitle's scope is the nearest directory, starting with its own and
    walking up (no further than `root`), that holds at least one video.
    Returns ([(scope, videos, subtitles), ...] in natural order of scope, orphans)
    where orphans are subtitles with no video anywhere on their path.
    """
    videos_by_dir: dict[Path, list[MediaEntry]] = defaultdict(list)
    for video in videos:
        videos_by_dir[video.path.parent].append(video)

    subtitles_by_scope: dict[Path, list[MediaEntry]] = defaultdict(list)
    orphans: list[MediaEntry] = []
    for subtitle in subtitles:
        scope = _find_scope(subtitle.path.parent, videos_by_dir, root)
        if scope is None:
            orphans.append(subtitle)
        else:
            subtitles_by_scope[scope].append(subtitle)

    groups = [
        (scope, videos_by_dir[scope], subs)
        for scope, subs in sorted(subtitles_by_scope.items(), key=lambda item: parser.natural_sort_key(str(item[0])))
    ]
    return groups, orphans
