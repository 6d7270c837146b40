"""
A subtitle renaming module that pairs subtitles with their videos.

This module scans a directory for video and subtitle files, works out which
subtitle belongs to which video from the structure of their filenames, and
renames each subtitle so its stem matches its video while keeping language and
variant tags such as `.eng` or `.forced`.

The module is organized into several categories:
- Renaming engine: key extraction, classification, correlation, plan building
  and plan execution (`subrenamer.rename`).
- Utilities: constants, configuration, structured logging and filesystem
  collaborators (`subrenamer.utils`).
- Command line front end (`subrenamer.cli`).
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
