"""devicegen configuration.

Typed configuration for the generator. Settings use a Pydantic v2 model so
they are validated at construction time and can be serialised to/from JSON
or read from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "scaffolder" / "payload"
DEFAULT_CATALOG_PATH = Path(__file__).parent / "scaffolder" / "catalog.yaml"
DEFAULT_VERSION = "0.1.0"

_SEMVER_PATTERN = r"^\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
_FALSE_VALUES = {"0", "false", "no", "off"}


class Config(BaseModel):
    """Global devicegen configuration.

    Instances are typically created once by the CLI entry point and then
    passed to :class:`~devicegen.scaffolder.generator.ServiceGenerator`.
    """

    template_dir: Path = Field(
        default=DEFAULT_TEMPLATE_DIR,
        description="Directory holding the template and example payload",
    )
    catalog_path: Path = Field(
        default=DEFAULT_CATALOG_PATH,
        description="YAML descriptor listing the files to generate",
    )
    license_file: str = Field(
        default="LICENSE",
        min_length=1,
        description="License file, relative to template_dir, copied verbatim",
    )
    version: str = Field(
        default=DEFAULT_VERSION,
        pattern=_SEMVER_PATTERN,
        description="Initial semantic version written to VERSION",
    )
    atomic: bool = Field(
        default=True,
        description="Stage the tree and move it into place once complete",
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def license_path(self) -> Path:
        """Absolute path of the license source."""
        return self.template_dir / self.license_file

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            DEVICEGEN_TEMPLATE_DIR, DEVICEGEN_CATALOG, DEVICEGEN_VERSION,
            DEVICEGEN_ATOMIC (``0``/``false``/``no``/``off`` disables staging).
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("DEVICEGEN_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["DEVICEGEN_TEMPLATE_DIR"])
        if os.environ.get("DEVICEGEN_CATALOG"):
            kwargs["catalog_path"] = Path(os.environ["DEVICEGEN_CATALOG"])
        if os.environ.get("DEVICEGEN_VERSION"):
            kwargs["version"] = os.environ["DEVICEGEN_VERSION"]
        if os.environ.get("DEVICEGEN_ATOMIC"):
            kwargs["atomic"] = os.environ["DEVICEGEN_ATOMIC"].strip().lower() not in _FALSE_VALUES
        return cls(**kwargs)
