"""Files copied into every service without any substitution."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from .errors import IOFailure, TemplateMissing

VERSION_FILE = "VERSION"


class StaticAssetCopier:
    """Writes the version marker and copies the license into a service root."""

    def __init__(self, license_path: Path, version: str) -> None:
        self.license_path = Path(license_path)
        self.version = version

    async def copy(self, service_root: Path) -> list[Path]:
        """Write ``VERSION`` and copy the license; return the written paths.

        Raises:
            TemplateMissing: The license source is not installed.
            IOFailure: A write failed.
        """
        version_path = service_root / VERSION_FILE
        try:
            await asyncio.to_thread(
                version_path.write_text, f"{self.version}\n", "utf-8"
            )
        except OSError as exc:
            raise IOFailure("write", version_path, exc) from exc

        license_dest = service_root / self.license_path.name
        try:
            await asyncio.to_thread(shutil.copyfile, self.license_path, license_dest)
        except FileNotFoundError as exc:
            if not self.license_path.is_file():
                raise TemplateMissing(self.license_path) from exc
            raise IOFailure("copy license to", license_dest, exc) from exc
        except OSError as exc:
            raise IOFailure("copy license to", license_dest, exc) from exc

        return [version_path, license_dest]
