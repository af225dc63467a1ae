"""Execution of a :class:`~devicegen.scaffolder.models.ScaffoldPlan`.

The engine creates the planned directories, instantiates every catalog entry
in order and finally hands the root to the
:class:`~devicegen.scaffolder.assets.StaticAssetCopier`.  Blocking
filesystem calls run through :func:`asyncio.to_thread`, one at a time.

With ``atomic=True`` the tree is built in a hidden staging directory next to
the service root and renamed into place only once it is complete; a failure
removes the staging directory and leaves the destination untouched.  With
``atomic=False`` files are written in place and a failure leaves whatever
was already written.
"""

from __future__ import annotations

import asyncio
import errno
import os
import shutil
import stat
import tempfile
from pathlib import Path

from devicegen.config import Config

from .assets import StaticAssetCopier
from .errors import CatalogError, DestinationExists, IOFailure, TemplateMissing
from .models import ScaffoldPlan, TemplateEntry


class ScaffoldEngine:
    """Materialises a scaffold plan on disk."""

    def __init__(self, assets: StaticAssetCopier, *, atomic: bool = True) -> None:
        self.assets = assets
        self.atomic = atomic

    @classmethod
    def from_config(cls, config: Config) -> "ScaffoldEngine":
        return cls(
            StaticAssetCopier(config.license_path, config.version),
            atomic=config.atomic,
        )

    # -- Public API --------------------------------------------------------

    async def execute(self, plan: ScaffoldPlan) -> Path:
        """Generate the tree described by *plan*.

        Returns:
            The service root.

        Raises:
            DestinationExists: The service root appeared after planning.
            TemplateMissing: A catalog source is not installed.
            CatalogError: A source with rules is not UTF-8 text.
            IOFailure: Any other filesystem error.
        """
        if not self.atomic:
            await self._build(plan, plan.service_root)
            return plan.service_root

        staging = await asyncio.to_thread(_make_staging_dir, plan.service_root)
        try:
            staged_root = staging / plan.service_root.name
            await self._build(plan, staged_root)
            await asyncio.to_thread(_move_into_place, staged_root, plan.service_root)
        finally:
            await asyncio.to_thread(shutil.rmtree, staging, True)
        return plan.service_root

    # -- Steps -------------------------------------------------------------

    async def _build(self, plan: ScaffoldPlan, root: Path) -> None:
        """Write the whole tree under *root* (the real or the staged root)."""
        for directory in plan.directories:
            await asyncio.to_thread(_make_dir, root / plan.relative(directory))

        for entry in plan.entries:
            await self._instantiate(entry, root / plan.relative(entry.dest_path))

        await self.assets.copy(root)

    async def _instantiate(self, entry: TemplateEntry, dest: Path) -> None:
        data = await asyncio.to_thread(_read_source, entry.source_path)
        if entry.rules:
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise CatalogError(
                    f"{entry.source_path} has substitution rules but is not UTF-8 text"
                ) from exc
            data = entry.render(text).encode("utf-8")
        await asyncio.to_thread(_write_file, dest, data, entry.executable)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _make_staging_dir(service_root: Path) -> Path:
    """Create a hidden staging directory beside *service_root*."""
    try:
        return Path(
            tempfile.mkdtemp(prefix=f".{service_root.name}.", dir=service_root.parent)
        )
    except OSError as exc:
        raise IOFailure("create a staging directory in", service_root.parent, exc) from exc


def _make_dir(path: Path) -> None:
    try:
        path.mkdir()
    except FileExistsError as exc:
        raise DestinationExists(path) from exc
    except OSError as exc:
        raise IOFailure("create directory", path, exc) from exc


def _read_source(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise TemplateMissing(path) from exc
    except OSError as exc:
        raise IOFailure("read", path, exc) from exc


def _write_file(path: Path, data: bytes, executable: bool = False) -> None:
    try:
        path.write_bytes(data)
        if executable:
            _make_executable(path)
    except OSError as exc:
        raise IOFailure("write", path, exc) from exc


def _make_executable(path: Path) -> None:
    """Set the executable bit on a file."""
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def _move_into_place(staged_root: Path, service_root: Path) -> None:
    """Rename the finished tree to its final location."""
    if service_root.exists() or service_root.is_symlink():
        raise DestinationExists(service_root)
    try:
        os.rename(staged_root, service_root)
    except OSError as exc:
        if exc.errno in (errno.EEXIST, errno.ENOTEMPTY):
            raise DestinationExists(service_root) from exc
        raise IOFailure("move the generated tree to", service_root, exc) from exc
