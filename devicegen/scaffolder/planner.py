"""Destination planning and the collision guard."""

from __future__ import annotations

from pathlib import Path

from .catalog import TemplateCatalog
from .errors import DestinationExists
from .models import Invocation, ScaffoldPlan
from .names import derive_names
from .templates import TemplateRenderer

# Subdirectories of the service root, in creation order (parents first).
SERVICE_SUBDIRS: tuple[str, ...] = (
    "bin",
    "cmd",
    "cmd/res",
    "cmd/res/docker",
    "internal",
    "internal/driver",
)


def plan_scaffold(
    invocation: Invocation,
    camel_name: str,
    catalog: TemplateCatalog,
    template_dir: Path,
    renderer: TemplateRenderer | None = None,
) -> ScaffoldPlan:
    """Compute the full tree for a new service.

    Only the service root is checked: it is freshly named from the device
    name, so nothing below it can exist when it does not.

    Raises:
        DestinationExists: ``<destination>/device-<name>-go`` is already on
            disk (as a directory or anything else).
        CatalogError: The catalog cannot be resolved for these names.
    """
    names = derive_names(invocation, camel_name)
    service_root = invocation.destination_dir / names.service_name

    if service_root.exists() or service_root.is_symlink():
        raise DestinationExists(service_root)

    directories = (service_root,) + tuple(
        service_root.joinpath(*sub.split("/")) for sub in SERVICE_SUBDIRS
    )
    entries = catalog.resolve(names, template_dir, service_root, renderer)

    return ScaffoldPlan(
        names=names,
        service_root=service_root,
        directories=directories,
        entries=entries,
    )
