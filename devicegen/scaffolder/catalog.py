"""The template catalog: which files a new service is made of.

The catalog is a packaged YAML descriptor (``catalog.yaml``) listing, in
order, every file to instantiate::

    entries:
      - source: example/driver/simpledriver.go
        dest: "internal/driver/{{ device_name }}driver.go"
        rules:
          - match: Simple
            replace: "{{ camel_name }}"

``source`` is relative to the template directory, ``dest`` is a Jinja2
expression relative to the service root, and ``rules`` are applied in the
listed order as literal substitutions.  Replacements are Jinja2 expressions
over the :class:`~devicegen.scaffolder.models.DerivedNames` fields; match
texts are literal.

Because substitution is sequential, a rule must never match text produced
by an earlier rule of the same entry.  The shipped catalog is authored (rule
order and match context) so that sequential and simultaneous application
agree for every legal name.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from devicegen.config import DEFAULT_CATALOG_PATH

from .errors import CatalogError
from .models import DerivedNames, SubstitutionRule, TemplateEntry
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Descriptor models
# ---------------------------------------------------------------------------

class RuleSpec(BaseModel):
    """A substitution rule as written in the descriptor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    match: str = Field(..., min_length=1)
    replace: str = Field(..., description="Jinja2 expression over the derived names")


class CatalogEntry(BaseModel):
    """One catalog entry as written in the descriptor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str = Field(..., min_length=1, description="Path relative to the template directory")
    dest: str = Field(..., min_length=1, description="Jinja2 path expression relative to the service root")
    rules: tuple[RuleSpec, ...] = ()
    executable: bool = False
    description: str = ""


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class TemplateCatalog(BaseModel):
    """The ordered, immutable list of catalog entries."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    entries: tuple[CatalogEntry, ...] = Field(..., min_length=1)

    @classmethod
    def from_dict(cls, data: Any) -> "TemplateCatalog":
        """Build a catalog from already-parsed descriptor data."""
        if not isinstance(data, dict):
            raise CatalogError("Catalog descriptor must be a mapping with an 'entries' list")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise CatalogError(f"Invalid catalog descriptor: {exc}") from exc

    @classmethod
    def load(cls, path: str | Path) -> "TemplateCatalog":
        """Load and validate a YAML catalog descriptor.

        Raises:
            CatalogError: The file is missing, is not valid YAML, or does not
                describe a catalog.
        """
        catalog_path = Path(path)
        try:
            raw = catalog_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogError(f"Cannot read catalog {catalog_path}: {exc}") from exc
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise CatalogError(f"Catalog {catalog_path} is not valid YAML: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def default(cls) -> "TemplateCatalog":
        """Return the catalog shipped with the package."""
        return cls.load(DEFAULT_CATALOG_PATH)

    def sources(self) -> list[str]:
        """Return every source path referenced by the catalog, in order."""
        return [entry.source for entry in self.entries]

    def resolve(
        self,
        names: DerivedNames,
        template_dir: Path,
        service_root: Path,
        renderer: TemplateRenderer | None = None,
    ) -> tuple[TemplateEntry, ...]:
        """Bind every entry to concrete paths and rule texts.

        Args:
            names: Derived names providing the expression variables.
            template_dir: Directory holding the template payload.
            service_root: Root of the service being generated.
            renderer: Expression renderer; a fresh one by default.

        Returns:
            The concrete entries, in catalog order.

        Raises:
            CatalogError: An expression cannot be rendered, a destination
                leaves the service root, or two entries share a destination.
        """
        renderer = renderer or TemplateRenderer()
        context = names.model_dump()
        resolved: list[TemplateEntry] = []
        seen: set[Path] = set()

        for entry in self.entries:
            dest = service_root.joinpath(*renderer.render_path(entry.dest, context).parts)
            if dest in seen:
                raise CatalogError(f"Duplicate catalog destination: {entry.dest}")
            seen.add(dest)
            rules = tuple(
                SubstitutionRule(
                    match=rule.match,
                    replace=renderer.render_string(rule.replace, context),
                )
                for rule in entry.rules
            )
            resolved.append(
                TemplateEntry(
                    source_path=template_dir.joinpath(*Path(entry.source).parts),
                    dest_path=dest,
                    rules=rules,
                    executable=entry.executable,
                    description=entry.description,
                )
            )
        return tuple(resolved)
