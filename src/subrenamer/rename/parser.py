"""
Module for extracting identity keys from filename stems.

An identity key is the structural signature used to pair a subtitle with its
video: a season/episode tuple when one can be recognized, otherwise the
normalized stem itself. The module also splits the trailing language/variant
tags off a subtitle stem and provides the natural (numeric-aware) sort key used
wherever ordering matters.
"""

import re

from subrenamer.rename.models import EpisodicKey, IdentityKey, LiteralKey
from subrenamer.utils import file_util
from subrenamer.utils.constants import (
    CROSS_EPISODE_REGEX,
    EPISODE_ONLY_REGEX,
    LANGUAGE_TAGS,
    MAX_KEY_NUMBER,
    NOISE_REGEX,
    NUMERIC_TOKEN_REGEX,
    REGION_TAG_REGEX,
    SEASON_EPISODE_REGEX,
    TRAILING_TAG_REGEX,
)


def _to_number(text: str | None) -> int | None:
    """Parse a numeric token; anything unparsable or out of range counts as absent."""
    if text is None:
        return None
    try:
        value = int(text)
    except ValueError:
        return None
    if value < 0 or value > MAX_KEY_NUMBER:
        return None
    return value


def parse_tv_filename(stem: str) -> EpisodicKey | None:
    """
    Extract season and episode numbers from a filename stem.

    Patterns are tried in priority order:
      "Show.S01E02" / "show s1.e2"  -> season 1, episode 2
      "Show 1x02"                   -> season 1, episode 2
      "Show Episode 02" / "Ep02" / "E02" -> episode 2, no season
      "subs_02_eng" (the only number left once quality/codec/year tags are ignored)
                                    -> episode 2, no season
    Returns None when no pattern yields a usable number.
    """
    for rx in (SEASON_EPISODE_REGEX, CROSS_EPISODE_REGEX):
        m = rx.search(stem)
        if m:
            season, episode = _to_number(m.group(1)), _to_number(m.group(2))
            if season is not None and episode is not None:
                return EpisodicKey(season, episode, span=m.span())

    m = EPISODE_ONLY_REGEX.search(stem)
    if m:
        episode = _to_number(m.group(1))
        if episode is not None:
            return EpisodicKey(None, episode, span=m.span())

    return _parse_standalone_number(stem)


def _parse_standalone_number(stem: str) -> EpisodicKey | None:
    # Blank out noise with same-length padding so token spans still index into `stem`.
    cleaned = NOISE_REGEX.sub(lambda m: " " * len(m.group(0)), stem)
    tokens = list(NUMERIC_TOKEN_REGEX.finditer(cleaned))
    if len(tokens) != 1 or len(tokens[0].group(0)) < 2:
        return None
    episode = _to_number(tokens[0].group(0))
    if episode is None:
        return None
    return EpisodicKey(None, episode, span=tokens[0].span())


def _parse_with_pattern(stem: str, pattern: re.Pattern) -> IdentityKey | None:
    """
    Apply a user-supplied pattern.

    Named groups `season`/`episode` are used when present; otherwise two numeric
    groups mean (season, episode) and one means episode. Non-numeric captures
    (e.g. `(S\\d{2}E\\d{2})`) become a literal key of the captured text.
    """
    m = pattern.search(stem)
    if not m:
        return None

    named = m.groupdict()
    if named.get("episode") is not None:
        episode = _to_number(named["episode"])
        if episode is not None:
            return EpisodicKey(_to_number(named.get("season")), episode, span=m.span())

    captured = [g for g in m.groups() if g is not None]
    numbers = [_to_number(g) if g.isdigit() else None for g in captured]
    if captured and None not in numbers:
        if len(numbers) >= 2:
            return EpisodicKey(numbers[0], numbers[1], span=m.span())
        return EpisodicKey(None, numbers[0], span=m.span())

    text = captured[0] if captured else m.group(0)
    normalized = file_util.normalize_text(text)
    if not normalized:
        return None
    return LiteralKey(normalized)


def extract_key(stem: str, pattern: str | re.Pattern | None = None, name: str | None = None) -> IdentityKey:
    """
    Derive the identity key of a filename stem.

    A custom `pattern` is tried first, against the full filename `name` when
    given (so patterns may include the extension, e.g. `E(\\d+)\\.srt`); then the
    built-in episode patterns; and finally the stem falls back to a LiteralKey
    of its normalized text. Ordinal keys are never produced here since they
    depend on sibling files.
    """
    if pattern is not None:
        rx = re.compile(pattern, re.IGNORECASE) if isinstance(pattern, str) else pattern
        key = _parse_with_pattern(name or stem, rx)
        if key is not None:
            return key

    key = parse_tv_filename(stem)
    if key is not None:
        return key
    return LiteralKey(file_util.normalize_text(stem))


def is_language_tag(text: str, language_tags=LANGUAGE_TAGS) -> bool:
    """Check whether `text` is a known language/variant tag ("eng", "forced", "pt-BR")."""
    tag = text.strip().casefold()
    if tag in language_tags:
        return True
    return bool(REGION_TAG_REGEX.match(tag)) and tag.split("-", 1)[0] in language_tags


def split_language_suffix(
        stem: str, key: IdentityKey | None = None, language_tags=LANGUAGE_TAGS
) -> tuple[str, list[str]]:
    """
    Split trailing language/variant tags off a subtitle stem.

    Tags are collected from the end while they are recognized tags, do not
    overlap the matched episode key and are not the whole stem. Returns
    (base, tags) with tags verbatim and in their original order.
    Examples:
      "subs_02_eng"          -> ("subs_02", ["eng"])
      "Show.S01E02.en.forced" -> ("Show.S01E02", ["en", "forced"])
      "Movie [pt-BR]"        -> ("Movie", ["[pt-BR]"])
    """
    if key is None:
        key = extract_key(stem)
    key_end = key.span[1] if isinstance(key, EpisodicKey) and key.span else 0

    base = stem
    tags: list[str] = []
    while base:
        m = TRAILING_TAG_REGEX.search(base)
        if not m or m.start(1) < key_end:
            break
        head = base[: m.start()]
        if not head.strip("._- "):
            break
        tag = m.group(1)
        if not is_language_tag(tag.strip("[]()"), language_tags):
            break
        tags.insert(0, tag)
        base = head
    return base, tags


def natural_sort_key(text: str) -> list[tuple[int, int, str]]:
    """Key for natural sorting: 'ep2' sorts before 'ep10'; text runs compare case-insensitively."""
    key = []
    for digits, other in re.findall(r"(\d+)|(\D+)", text):
        if digits:
            key.append((0, int(digits), ""))
        else:
            key.append((1, 0, other.casefold()))
    return key
