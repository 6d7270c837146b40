"""Batch subtitle renaming: run every phase over a directory and apply the plan.

This module scans a folder for videos and subtitles, correlates them, builds a
rename plan and applies it through the rename executor, collecting a RunReport.
It is non-interactive; the CLI decides how to present the report.
"""
from pathlib import Path
from typing import Callable, Iterable

from tqdm import tqdm

from subrenamer.rename import correlator, core
from subrenamer.rename.classifier import Classifier
from subrenamer.rename.models import (
    CorrelationResult,
    ItemOutcome,
    RenamePlan,
    RenamePlanItem,
    RunReport,
    UnmatchedSubtitle,
)
from subrenamer.utils import (
    REASON_NO_KEY_MATCH,
    STATUS_COLLISION,
    STATUS_FAILED,
    STATUS_RENAMED,
    STATUS_UNMATCHED,
    SetupError,
    logger,
)
from subrenamer.utils.config import RenameConfig
from subrenamer.utils.file_util import FileRenamer, list_directory
from subrenamer.utils.logger import LogLevel

DESTINATION_EXISTS = "destination already exists"
DESTINATION_TAKEN = "destination taken by another subtitle"


def execute_plan(
        plan: RenamePlan | Iterable[RenamePlanItem],
        dry_run: bool = False,
        renamer: FileRenamer | None = None,
        progress: bool = True,
) -> RunReport:
    """Apply a rename plan item by item.

    Each item is independent: a destination that is already occupied, or an
    OSError raised by the renamer, marks that item FAILED and processing moves
    on. Nothing is rolled back. Earlier renames in the batch are taken into
    account when checking destinations, so a dry run reports exactly what a
    real run would do, without calling `renamer.rename`.

    Args:
        plan (RenamePlan | Iterable[RenamePlanItem]): Items in execution order.
        dry_run (bool): If True, report without touching the filesystem.
        renamer (FileRenamer | None): Rename executor; defaults to os.rename.
        progress (bool): Show a progress bar.

    Returns:
        RunReport: One RENAMED/FAILED outcome per item, plus COLLISION
        outcomes for items the plan skipped.
    """
    renamer = renamer or FileRenamer()
    report = RunReport(dry_run=dry_run)

    if isinstance(plan, RenamePlan):
        items = plan.items
        for skipped in plan.skipped:
            report.details.append(
                ItemOutcome(skipped.source_path, skipped.destination_path, STATUS_COLLISION, DESTINATION_TAKEN)
            )
    else:
        items = list(plan)

    occupied: set[Path] = set()
    vacated: set[Path] = set()

    def _is_occupied(path: Path) -> bool:
        if path in occupied:
            return True
        return path not in vacated and renamer.exists(path)

    for item in tqdm(items, desc="Renaming subtitles", disable=not progress or not items):
        source, target = item.source_path, item.destination_path

        if _is_occupied(target):
            report.details.append(
                ItemOutcome(source, target, STATUS_FAILED, DESTINATION_EXISTS, item.collision_resolved)
            )
            logger.log("rename.failed", LogLevel.ERROR, file=source.name, target=target.name, error=DESTINATION_EXISTS)
            continue

        if not dry_run:
            try:
                renamer.rename(source, target)
            except OSError as e:
                report.details.append(ItemOutcome(source, target, STATUS_FAILED, str(e), item.collision_resolved))
                logger.log("rename.failed", LogLevel.ERROR, file=source.name, target=target.name, error=str(e))
                continue

        occupied.add(target)
        occupied.discard(source)
        vacated.add(source)
        vacated.discard(target)
        report.details.append(ItemOutcome(source, target, STATUS_RENAMED, None, item.collision_resolved))
        logger.log("rename.applied", LogLevel.INFO, file=source.name, target=target.name, dry_run=dry_run)

    return report


def correlate_all(videos, subtitles, root: Path, config: RenameConfig) -> CorrelationResult:
    """Correlate every scope group; subtitles with no video on their path are unmatched."""
    groups, orphans = correlator.group_by_scope(videos, subtitles, root)
    result = CorrelationResult()
    for scope, group_videos, group_subtitles in groups:
        logger.log(
            "correlate.group", LogLevel.DEBUG,
            scope=str(scope), videos=len(group_videos), subtitles=len(group_subtitles),
        )
        result.extend(
            correlator.correlate(
                group_videos,
                group_subtitles,
                video_pattern=config.video_pattern,
                subtitle_pattern=config.subtitle_pattern,
                language_tags=config.language_tags,
            )
        )
    result.unmatched.extend(UnmatchedSubtitle(orphan, REASON_NO_KEY_MATCH) for orphan in orphans)
    return result


def rename_subtitles(
        root_directory: str | Path,
        video_extensions: Iterable[str] | None = None,
        subtitle_extensions: Iterable[str] | None = None,
        dry_run: bool | None = None,
        recursive: bool | None = None,
        config: RenameConfig | None = None,
        lister: Callable[[Path, bool], Iterable[tuple[Path, bool]]] = list_directory,
        renamer: FileRenamer | None = None,
        progress: bool = True,
) -> RunReport:
    """Rename the subtitles under `root_directory` to match their videos.

    The function:
    - Validates the configuration and the root directory.
    - Lists and classifies files (recursively if requested).
    - Correlates subtitles with videos, per scope directory.
    - Builds a collision-free plan and applies it unless `dry_run` is set.

    Explicit arguments override the matching `config` fields.

    Returns:
        RunReport: Renamed, unmatched, collision-skipped and failed subtitles.

    Raises:
        SetupError: When the root is missing or not a directory, or the configuration is invalid.
    """
    config = (config or RenameConfig()).with_overrides(
        video_extensions=video_extensions,
        subtitle_extensions=subtitle_extensions,
        dry_run=dry_run,
        recursive=recursive,
    ).validate()

    root = Path(root_directory).expanduser().resolve()
    if not root.exists():
        raise SetupError(f"Root directory does not exist: {root}")
    if not root.is_dir():
        raise SetupError(f"Root path is not a directory: {root}")

    listing = list(lister(root, config.recursive))
    videos, subtitles = Classifier(config.video_extensions, config.subtitle_extensions).classify(listing)
    logger.log(
        "scan.complete", LogLevel.INFO,
        root=str(root), recursive=config.recursive, entries=len(listing), videos=len(videos), subtitles=len(subtitles),
    )

    correlation = correlate_all(videos, subtitles, root, config)
    plan = core.build_plan(
        correlation.pairs,
        on_collision=config.on_collision,
        language_tags=config.language_tags,
        subtitle_pattern=config.subtitle_pattern,
    )
    logger.log(
        "plan.complete", LogLevel.INFO,
        pairs=len(correlation.pairs), items=len(plan.items), skipped=len(plan.skipped),
        unmatched=len(correlation.unmatched),
    )

    report = execute_plan(plan, dry_run=config.dry_run, renamer=renamer, progress=progress)
    for unmatched in correlation.unmatched:
        report.details.append(ItemOutcome(unmatched.subtitle.path, None, STATUS_UNMATCHED, unmatched.reason))
        logger.log("correlate.unmatched", LogLevel.WARN, file=unmatched.subtitle.name, reason=unmatched.reason)

    logger.log("run.end", LogLevel.INFO, dry_run=config.dry_run, **report.counts())
    return report
