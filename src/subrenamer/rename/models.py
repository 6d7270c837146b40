"""Data models for the renaming engine."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from subrenamer.utils.constants import (
    STATUS_COLLISION,
    STATUS_FAILED,
    STATUS_RENAMED,
    STATUS_UNMATCHED,
)


class MediaKind(Enum):
    """What a discovered file is used for."""
    VIDEO = "video"
    SUBTITLE = "subtitle"
    IGNORED = "ignored"


class MatchConfidence(Enum):
    """How a subtitle/video pair was established."""
    EXACT = "exact"
    ORDINAL = "ordinal"


@dataclass(frozen=True)
class MediaEntry:
    """Represents a discovered file."""
    path: Path
    stem: str
    extension: str
    kind: MediaKind

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class EpisodicKey:
    """Season/episode signature; `span` locates the matched text in the stem."""
    season: int | None
    episode: int
    span: tuple[int, int] | None = field(default=None, compare=False)

    @property
    def label(self) -> str:
        if self.season is None:
            return f"E{self.episode:02d}"
        return f"S{self.season:02d}E{self.episode:02d}"


@dataclass(frozen=True)
class OrdinalKey:
    """Position within a naturally sorted group."""
    position: int

    @property
    def label(self) -> str:
        return f"#{self.position}"


@dataclass(frozen=True)
class LiteralKey:
    """Separator-collapsed, case-folded stem."""
    normalized_stem: str

    @property
    def label(self) -> str:
        return self.normalized_stem


IdentityKey = EpisodicKey | OrdinalKey | LiteralKey


@dataclass(frozen=True)
class MatchPair:
    """A subtitle paired with its video."""
    video: MediaEntry
    subtitle: MediaEntry
    confidence: MatchConfidence


@dataclass(frozen=True)
class UnmatchedSubtitle:
    """A subtitle left without a video, with the reason."""
    subtitle: MediaEntry
    reason: str


@dataclass
class CorrelationResult:
    """Represents the outcome of correlating one group of files."""
    pairs: list[MatchPair] = field(default_factory=list)
    unmatched: list[UnmatchedSubtitle] = field(default_factory=list)

    def extend(self, other: "CorrelationResult") -> None:
        self.pairs.extend(other.pairs)
        self.unmatched.extend(other.unmatched)


@dataclass(frozen=True)
class RenamePlanItem:
    """A single proposed rename."""
    source_path: Path
    destination_path: Path
    collision_resolved: bool = False


@dataclass
class RenamePlan:
    """Planned renames plus the items dropped by the 'skip' collision policy."""
    items: list[RenamePlanItem] = field(default_factory=list)
    skipped: list[RenamePlanItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


@dataclass(frozen=True)
class ItemOutcome:
    """Represents what happened (or would happen) to one subtitle."""
    source_path: Path
    destination_path: Path | None
    status: str
    reason: str | None = None
    collision_resolved: bool = False


@dataclass
class RunReport:
    """Aggregate outcome of a run; counts are derived from `details`."""
    dry_run: bool = False
    details: list[ItemOutcome] = field(default_factory=list)

    def _count(self, status: str) -> int:
        return sum(1 for d in self.details if d.status == status)

    @property
    def renamed(self) -> int:
        return self._count(STATUS_RENAMED)

    @property
    def skipped_unmatched(self) -> int:
        return self._count(STATUS_UNMATCHED)

    @property
    def skipped_collision(self) -> int:
        return self._count(STATUS_COLLISION)

    @property
    def failed(self) -> int:
        return self._count(STATUS_FAILED)

    def counts(self) -> dict[str, int]:
        return {
            "renamed": self.renamed,
            "skipped_unmatched": self.skipped_unmatched,
            "skipped_collision": self.skipped_collision,
            "failed": self.failed,
        }
