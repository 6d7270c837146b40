"""Exception types raised by the subtitle renamer."""


class SubRenamerError(Exception):
    """Base exception for subtitle renamer errors."""

    pass


class SetupError(SubRenamerError):
    """Exception for problems detected before any phase runs (bad root, bad configuration)."""

    pass
