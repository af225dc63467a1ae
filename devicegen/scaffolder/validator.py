"""Syntactic validation of the generator's command-line arguments."""

from __future__ import annotations

import re
from pathlib import Path

from .errors import (
    DestinationNotADirectory,
    DisplayNameNotCapitalized,
    InvalidDeviceName,
    InvalidDisplayName,
    MissingDeviceName,
    UpperCaseInDeviceName,
)
from .models import Invocation

DEVICE_NAME_PATTERN = re.compile(r"[a-z][a-z-]*")
DISPLAY_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def validate_device_name(name: str | None) -> str:
    """Return *name* if it is a legal device name, else raise.

    Upper-case letters are reported separately from other illegal
    characters since that is the most common mistake.
    """
    if not name:
        raise MissingDeviceName()
    if any(ch.isupper() for ch in name):
        raise UpperCaseInDeviceName(name)
    if not DEVICE_NAME_PATTERN.fullmatch(name):
        raise InvalidDeviceName(name)
    return name


def validate_display_name(name: str | None) -> str | None:
    """Return the display name, or ``None`` when it was not supplied."""
    if not name:
        return None
    if not ("A" <= name[0] <= "Z"):
        raise DisplayNameNotCapitalized(name)
    if not DISPLAY_NAME_PATTERN.fullmatch(name):
        raise InvalidDisplayName(name)
    return name


def validate_destination(path: str | Path | None) -> Path:
    """Return the destination directory, defaulting to the working directory.

    The check is eager so a bad ``-d`` is reported before anything is
    written.
    """
    if path is None or str(path) == "":
        return Path.cwd()
    try:
        destination = Path(path).expanduser()
    except RuntimeError as exc:
        # ~user naming an unknown user
        raise DestinationNotADirectory(path) from exc
    if not destination.is_dir():
        raise DestinationNotADirectory(path)
    return destination


def validate_invocation(
    device_name: str | None,
    display_name: str | None = "",
    destination_dir: str | Path | None = "",
) -> Invocation:
    """Validate raw arguments and build an :class:`Invocation`.

    Args:
        device_name: Value of ``-n``; lower-case letters and dashes.
        display_name: Value of ``-c``; empty or ``None`` when omitted.
        destination_dir: Value of ``-d``; empty or ``None`` for the
            current directory.

    Raises:
        InvalidInput: One of its sub-kinds, checked in flag order.
    """
    return Invocation(
        device_name=validate_device_name(device_name),
        display_name=validate_display_name(display_name),
        destination_dir=validate_destination(destination_dir),
    )
