"""devicegen scaffolder -- generates new device-service trees.

Clones the packaged template and example files into a new
``device-<name>-go`` directory, rewriting placeholder tokens for the
supplied device name.

Quick usage::

    from devicegen.scaffolder import ServiceGenerator

    generator = ServiceGenerator()
    root = await generator.generate("mydevice", "MyDevice", "/tmp/services")
"""

from devicegen.scaffolder.catalog import CatalogEntry, RuleSpec, TemplateCatalog
from devicegen.scaffolder.engine import ScaffoldEngine
from devicegen.scaffolder.errors import (
    CatalogError,
    DestinationExists,
    DestinationNotADirectory,
    DisplayNameNotCapitalized,
    InvalidDeviceName,
    InvalidDisplayName,
    InvalidInput,
    IOFailure,
    MissingDeviceName,
    ScaffoldError,
    TemplateMissing,
    UpperCaseInDeviceName,
)
from devicegen.scaffolder.generator import ServiceGenerator
from devicegen.scaffolder.models import (
    DerivedNames,
    Invocation,
    ScaffoldPlan,
    SubstitutionRule,
    TemplateEntry,
)
from devicegen.scaffolder.templates import TemplateRenderer

__all__ = [
    "CatalogEntry",
    "CatalogError",
    "DerivedNames",
    "DestinationExists",
    "DestinationNotADirectory",
    "DisplayNameNotCapitalized",
    "IOFailure",
    "InvalidDeviceName",
    "InvalidDisplayName",
    "InvalidInput",
    "Invocation",
    "MissingDeviceName",
    "RuleSpec",
    "ScaffoldEngine",
    "ScaffoldError",
    "ScaffoldPlan",
    "ServiceGenerator",
    "SubstitutionRule",
    "TemplateCatalog",
    "TemplateEntry",
    "TemplateMissing",
    "TemplateRenderer",
    "UpperCaseInDeviceName",
]
