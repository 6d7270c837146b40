#!/usr/bin/env python3
"""
Command line front end for the subtitle renamer.

Parses arguments, loads the configuration (defaults, environment/.env, flags),
runs the renaming pipeline and prints the report.
"""

import argparse
import os
import sys

import subrenamer as subrenamer_module
from subrenamer.rename import rename_subtitles
from subrenamer.rename.models import RunReport
from subrenamer.utils import (
    ON_COLLISION_CHOICES,
    STATUS_COLLISION,
    STATUS_FAILED,
    STATUS_RENAMED,
    STATUS_UNMATCHED,
    LogLevel,
    SetupError,
    constants,
    logger,
)
from subrenamer.utils.config import load_config
from subrenamer.utils.file_util import parse_extensions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subrenamer",
        description="Rename subtitle files so they match the video files they belong to. "
                    "Language tags such as '.eng' or '.forced' are kept.",
        epilog="Example: subrenamer ~/Media/Show --recursive --dry-run",
    )
    parser.add_argument("directory", nargs="?", default=".", help="Directory to scan (default: current directory)")
    parser.add_argument("-r", "--recursive", action="store_true", help="Scan subdirectories too")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be renamed without renaming")
    parser.add_argument("--video-ext", help="Comma separated video extensions (e.g. mkv,mp4,avi)")
    parser.add_argument("--subtitle-ext", help="Comma separated subtitle extensions (e.g. srt,ass,vtt)")
    parser.add_argument(
        "--subtitle-pattern",
        help="Regex matched against the full subtitle filename to extract the episode key "
             "(e.g. 'S(\\d{2})E(\\d{2})'); "
             "also used for videos when --video-pattern is not given",
    )
    parser.add_argument(
        "--video-pattern",
        help="Regex matched against the full video filename to extract the episode key; "
             "also used for subtitles when --subtitle-pattern is not given",
    )
    parser.add_argument(
        "--on-collision",
        choices=ON_COLLISION_CHOICES,
        help="What to do when two subtitles would get the same name: add .2, .3, ... (suffix) or skip",
    )
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show errors")
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show detailed matching information")
    parser.add_argument("--version", action="version", version=f"%(prog)s {subrenamer_module.__version__}")
    return parser


def print_report(report: RunReport) -> None:
    """Print every outcome grouped by status, then the totals."""
    renamed = [d for d in report.details if d.status == STATUS_RENAMED]
    unmatched = [d for d in report.details if d.status == STATUS_UNMATCHED]
    collisions = [d for d in report.details if d.status == STATUS_COLLISION]
    failed = [d for d in report.details if d.status == STATUS_FAILED]

    if renamed:
        print("\n📋 Proposed renames:" if report.dry_run else "\n✅ Renamed:")
        for d in renamed:
            note = " (name collision resolved)" if d.collision_resolved else ""
            print(f"  {d.source_path.name} → {d.destination_path.name}{note}")
    if unmatched:
        print("\n⚠️ Unmatched subtitles:")
        for d in unmatched:
            print(f"  {d.source_path} ({d.reason})")
    if collisions:
        print("\n⚠️ Skipped (name collision):")
        for d in collisions:
            print(f"  {d.source_path.name} → {d.destination_path.name}")
    if failed:
        print("\n❌ Failed:")
        for d in failed:
            print(f"  {d.source_path.name} → {d.destination_path.name}: {d.reason}")

    if not report.details:
        print("ℹ️ No subtitles to rename.")

    print("\n📈 Summary:")
    print(f"  Renamed: {report.renamed}")
    print(f"  Unmatched: {report.skipped_unmatched}")
    print(f"  Skipped (collision): {report.skipped_collision}")
    print(f"  Failed: {report.failed}")
    if report.dry_run:
        print("\n🧪 Dry-run mode: no changes were made.")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Flags left unset (None) fall back to the environment and defaults.
    config = load_config(
        video_extensions=parse_extensions(args.video_ext) if args.video_ext else None,
        subtitle_extensions=parse_extensions(args.subtitle_ext) if args.subtitle_ext else None,
        video_pattern=args.video_pattern,
        subtitle_pattern=args.subtitle_pattern,
        on_collision=args.on_collision,
        recursive=args.recursive or None,
        dry_run=args.dry_run or None,
    )

    if args.verbose:
        logger.set_log_level(LogLevel.DEBUG)
    elif args.quiet:
        logger.set_log_level(LogLevel.ERROR)
    else:
        logger.set_log_level(logger.parse_log_level(os.getenv(constants.ENV_LOG_LEVEL)))

    try:
        report = rename_subtitles(args.directory, config=config, progress=not (args.quiet or args.no_progress))
    except SetupError as e:
        logger.log("startup.error", LogLevel.ERROR, msg=str(e), root=args.directory)
        return 2

    if not args.quiet:
        print_report(report)
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
