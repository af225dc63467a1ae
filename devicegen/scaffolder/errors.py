"""Exception hierarchy for the device-service scaffolder.

Every failure the generator can report derives from :class:`ScaffoldError`.
The CLI maps the four top-level kinds to exit codes:

* :class:`InvalidInput` -- user error, reported together with the usage text.
* :class:`DestinationExists` -- the service root is already on disk.
* :class:`TemplateMissing` / :class:`CatalogError` -- installation defects the
  user cannot fix by changing flags.
* :class:`IOFailure` -- environment errors (permissions, disk full, ...).
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every scaffolder failure."""


# ---------------------------------------------------------------------------
# User input
# ---------------------------------------------------------------------------


class InvalidInput(ScaffoldError):
    """Raised when a command-line argument is syntactically illegal."""


class MissingDeviceName(InvalidInput):
    """The required device name was not supplied."""

    def __init__(self) -> None:
        super().__init__("device-name is required")


class InvalidDeviceName(InvalidInput):
    """The device name is not made of lower-case letters and dashes."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        self.name = name
        super().__init__(
            reason
            or f"device-name {name!r} must start with a lower-case letter and "
            "contain only lower-case letters and dashes"
        )


class UpperCaseInDeviceName(InvalidDeviceName):
    """The device name contains at least one upper-case character."""

    def __init__(self, name: str) -> None:
        super().__init__(name, "device-name cannot contain upper-case letters")


class InvalidDisplayName(InvalidInput):
    """The display (camel-case) name contains unsupported characters."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        self.name = name
        super().__init__(
            reason
            or f"camel-case-name {name!r} may only contain letters, digits, "
            "dashes and underscores"
        )


class DisplayNameNotCapitalized(InvalidDisplayName):
    """The display name does not begin with an upper-case letter."""

    def __init__(self, name: str) -> None:
        super().__init__(name, "camel-case-name must begin with an upper case letter")


class DestinationNotADirectory(InvalidInput):
    """The destination directory does not exist (or is not a directory)."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f'Directory "{path}" does not exist.')


# ---------------------------------------------------------------------------
# Planning / execution
# ---------------------------------------------------------------------------


class DestinationExists(ScaffoldError):
    """The computed service root already exists on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Directory {path} already exists. Not creating a new device service."
        )


class TemplateMissing(ScaffoldError):
    """A catalog source file is not present in the template directory."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Template source not found: {path}")


class CatalogError(ScaffoldError):
    """The template catalog descriptor is malformed."""


class IOFailure(ScaffoldError):
    """A filesystem operation failed; the ``OSError`` is chained as the cause."""

    def __init__(self, action: str, path: str | Path, error: OSError) -> None:
        self.action = action
        self.path = Path(path)
        self.error = error
        reason = error.strerror or str(error)
        super().__init__(f"Failed to {action} {path}: {reason}")
