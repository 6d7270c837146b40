"""
Utilities for turning subtitle/video pairs into a rename plan.

Each pair yields one proposed destination: the paired video's stem, the
subtitle's preserved language/variant tags and the subtitle's original
extension, inside the subtitle's own directory. The plan is deterministic
(pairs are processed in natural order of the subtitle path) and collision-free.

Functions:
- build_new_name: Compute the new filename for a single pair.
- build_plan: Build the full plan with no-op removal, collision handling and chain ordering.
- _disambiguate: Find the first free `.2`, `.3`, ... variant of a destination.
- _order_chains: Order items so a rename never targets a path another item still has to vacate.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from subrenamer.rename import parser
from subrenamer.rename.models import MatchPair, RenamePlan, RenamePlanItem
from subrenamer.utils import LANGUAGE_TAGS, ON_COLLISION_SKIP, ON_COLLISION_SUFFIX, logger
from subrenamer.utils.logger import LogLevel


@dataclass(frozen=True)
class _Proposal:
    source: Path
    video_stem: str
    tag_suffix: str
    extension: str

    def destination(self, counter: int | None = None) -> Path:
        marker = f".{counter}" if counter else ""
        return self.source.with_name(f"{self.video_stem}{marker}{self.tag_suffix}{self.extension}")

    def holds_counter_name(self) -> bool:
        """True when the source already is one of this proposal's `.2`, `.3`, ... names."""
        name = self.source.name
        prefix = f"{self.video_stem}."
        suffix = f"{self.tag_suffix}{self.extension}"
        if len(name) <= len(prefix) + len(suffix):
            return False
        if not (name.startswith(prefix) and name.endswith(suffix)):
            return False
        counter = name[len(prefix):len(name) - len(suffix)]
        return counter.isdigit() and int(counter) >= 2


def _propose(pair: MatchPair, language_tags, subtitle_pattern) -> _Proposal:
    subtitle = pair.subtitle
    key = parser.extract_key(subtitle.stem, subtitle_pattern, subtitle.name)
    _, tags = parser.split_language_suffix(subtitle.stem, key, language_tags)
    video_stem = pair.video.stem
    tag_suffix = "".join(f".{tag}" for tag in tags)
    # Video already carries the same tags (e.g. "Movie.eng.mkv"): don't double them.
    if tag_suffix and video_stem.casefold().endswith(tag_suffix.casefold()):
        tag_suffix = ""
    return _Proposal(subtitle.path, video_stem, tag_suffix, subtitle.path.suffix)


def build_new_name(pair: MatchPair, language_tags=LANGUAGE_TAGS, subtitle_pattern=None) -> str:
    """
    Compute the new filename for a subtitle.

    Examples:
      video "Show.S01E02.mkv", subtitle "subs_02_eng.srt" -> "Show.S01E02.eng.srt"
      video "A.mkv", subtitle "1.srt"                     -> "A.srt"
    """
    return _propose(pair, language_tags, subtitle_pattern).destination().name


def _disambiguate(proposal: _Proposal, taken: set[Path]) -> Path:
    counter = 2
    while True:
        candidate = proposal.destination(counter)
        if candidate not in taken or candidate == proposal.source:
            return candidate
        counter += 1


def _order_chains(items: list[RenamePlanItem]) -> list[RenamePlanItem]:
    """
    Put items whose destination is still another item's source after that item.

    Order is otherwise preserved. Cycles (a -> b, b -> a) are appended as they are;
    the executor reports them as failures.
    """
    pending = list(items)
    ordered: list[RenamePlanItem] = []
    while pending:
        sources = {item.source_path for item in pending}
        ready = [item for item in pending if item.destination_path not in sources]
        if not ready:
            ordered.extend(pending)
            break
        ordered.extend(ready)
        ready_ids = {id(item) for item in ready}
        pending = [item for item in pending if id(item) not in ready_ids]
    return ordered


def build_plan(
        pairs: Iterable[MatchPair],
        on_collision: str = ON_COLLISION_SUFFIX,
        language_tags=LANGUAGE_TAGS,
        subtitle_pattern=None,
) -> RenamePlan:
    """
    Convert pairs into rename instructions.

    Parameters:
    - pairs (Iterable[MatchPair]): Correlated subtitle/video pairs.
    - on_collision (str): "suffix" inserts `.2`, `.3`, ... after the video stem for
      every item but the first that targets a taken name; "skip" drops those items.
    - language_tags: Tags preserved from the subtitle's original stem.
    - subtitle_pattern: Custom key pattern, so the key span is not mistaken for a tag.

    Returns:
    RenamePlan:
    - items: Items to execute; destinations are pairwise unique and never equal their source.
    - skipped: Items dropped by the "skip" collision policy.
    """
    ordered = sorted(pairs, key=lambda p: parser.natural_sort_key(str(p.subtitle.path)))
    proposals = [_propose(pair, language_tags, subtitle_pattern) for pair in ordered]

    # Files already carrying their final name, or a counter variant of it from an
    # earlier run, are reserved before anything else is placed.
    taken: set[Path] = {
        p.source for p in proposals if p.destination() == p.source or p.holds_counter_name()
    }

    plan = RenamePlan()
    for proposal in proposals:
        destination = proposal.destination()
        if destination == proposal.source:
            logger.log("plan.noop", LogLevel.TRACE, file=proposal.source.name)
            continue

        resolved = False
        if destination in taken:
            if on_collision == ON_COLLISION_SKIP:
                plan.skipped.append(RenamePlanItem(proposal.source, destination))
                logger.log(
                    "plan.collision", LogLevel.WARN,
                    file=proposal.source.name, target=destination.name, action="skip",
                )
                continue
            original = destination
            destination = _disambiguate(proposal, taken)
            if destination == proposal.source:
                logger.log("plan.noop", LogLevel.TRACE, file=proposal.source.name)
                continue
            resolved = True
            logger.log(
                "plan.collision", LogLevel.INFO,
                file=proposal.source.name, target=original.name, resolved=destination.name,
            )

        taken.add(destination)
        plan.items.append(RenamePlanItem(proposal.source, destination, resolved))
        logger.log("plan.item", LogLevel.DEBUG, source=proposal.source.name, target=destination.name)

    plan.items = _order_chains(plan.items)
    return plan
