"""Pydantic v2 models shared by the scaffolder components.

Every model is frozen: an invocation, its derived names and the resulting
plan are built once per run and never mutated afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class Invocation(BaseModel):
    """A validated generator invocation."""

    model_config = ConfigDict(frozen=True)

    device_name: str = Field(..., description="Lower-case device name, e.g. 'my-device'")
    display_name: Optional[str] = Field(
        default=None, description="Explicit camel-case name, e.g. 'MyDevice'"
    )
    destination_dir: Path = Field(..., description="Existing parent directory of the service root")


class DerivedNames(BaseModel):
    """Every name derived from an :class:`Invocation`.

    The field names double as the variables available to the catalog's
    replacement and destination expressions.
    """

    model_config = ConfigDict(frozen=True)

    device_name: str
    camel_name: str
    service_name: str = Field(..., description="Service root / Go module name: device-<name>-go")
    service_id: str = Field(..., description="Runtime service key: device-<name>")
    module_qualifier: str = Field(..., description="Go package of version.go: device_<name>")
    driver_type: str = Field(..., description="Protocol driver type: <Camel>Driver")


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------

class SubstitutionRule(BaseModel):
    """A literal ``match -> replace`` rewrite applied over a whole file."""

    model_config = ConfigDict(frozen=True)

    match: str = Field(..., min_length=1)
    replace: str

    def apply(self, content: str) -> str:
        return content.replace(self.match, self.replace)


class TemplateEntry(BaseModel):
    """One concrete file to instantiate: source, destination and its rules."""

    model_config = ConfigDict(frozen=True)

    source_path: Path
    dest_path: Path
    rules: tuple[SubstitutionRule, ...] = ()
    executable: bool = False
    description: str = ""

    def render(self, content: str) -> str:
        """Apply every rule, in order, to *content*."""
        for rule in self.rules:
            content = rule.apply(content)
        return content


class ScaffoldPlan(BaseModel):
    """The ordered directories and entries for one service root."""

    model_config = ConfigDict(frozen=True)

    names: DerivedNames
    service_root: Path
    directories: tuple[Path, ...]
    entries: tuple[TemplateEntry, ...]

    def relative(self, path: Path) -> Path:
        """Return *path* relative to the service root."""
        return path.relative_to(self.service_root)
