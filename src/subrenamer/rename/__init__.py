"""
Subtitle renaming engine.

This package contains the phases that turn a directory listing into applied
renames: key extraction, classification, correlation, plan building and plan
execution.

Package organization:
- parser: Identity key extraction (season/episode, literal stem), language tag
  splitting and natural ordering.
- classifier: Split a listing into videos and subtitles by extension.
- correlator: Pair each subtitle with at most one video; ordinal fallback.
- core: Build a collision-free rename plan from the pairs.
- batch: Execute a plan and run the whole pipeline over a directory.

Public API (top-level exports)
- `extract_key`, `split_language_suffix`, `natural_sort_key`
- `Classifier`, `classify`
- `correlate`
- `build_plan`, `build_new_name`
- `execute_plan`, `rename_subtitles`

Behavior notes:
- Only `execute_plan` (and `rename_subtitles` through it) touches the filesystem,
  and never in dry-run mode.
- Ambiguous matches are never guessed; they are reported unmatched.

Example:
    from subrenamer import rename
    report = rename.rename_subtitles("/media/Show/Season 1", dry_run=True)
"""
# Public parsing functions
from .parser import (
    extract_key,
    natural_sort_key,
    split_language_suffix,
)

# Classification and correlation
from .classifier import Classifier, classify
from .correlator import correlate

# Planning
from .core import build_new_name, build_plan

# Batch processing
from .batch import execute_plan, rename_subtitles

__all__ = [
    # Parsing
    "extract_key",
    "natural_sort_key",
    "split_language_suffix",
    # Classification and correlation
    "Classifier",
    "classify",
    "correlate",
    # Planning
    "build_new_name",
    "build_plan",
    # Batch processing
    "execute_plan",
    "rename_subtitles",
]
