"""Main scaffolding orchestrator.

Runs the fixed, linear sequence: validate the arguments, derive the names,
plan the tree (failing if the service root exists), then let the engine
create the directories, instantiate every catalog entry and copy the static
assets.  There is no retry and no branching back.
"""

from __future__ import annotations

from pathlib import Path

from devicegen.config import Config

from .catalog import TemplateCatalog
from .engine import ScaffoldEngine
from .models import ScaffoldPlan
from .names import derive_camel_name
from .planner import plan_scaffold
from .templates import TemplateRenderer
from .validator import validate_invocation


class ServiceGenerator:
    """Generates a new ``device-<name>-go`` service tree.

    The catalog is injectable so tests (or alternative payloads) can supply
    their own; by default it is loaded from ``config.catalog_path``.
    """

    def __init__(
        self,
        config: Config | None = None,
        catalog: TemplateCatalog | None = None,
    ) -> None:
        self.config = config or Config()
        self.catalog = catalog or TemplateCatalog.load(self.config.catalog_path)
        self.renderer = TemplateRenderer()
        self.engine = ScaffoldEngine.from_config(self.config)

    # -- Public API --------------------------------------------------------

    def prepare(
        self,
        device_name: str | None,
        display_name: str | None = "",
        destination_dir: str | Path | None = "",
    ) -> ScaffoldPlan:
        """Validate the arguments and build the plan, without writing anything."""
        invocation = validate_invocation(device_name, display_name, destination_dir)
        camel_name = derive_camel_name(invocation.device_name, invocation.display_name)
        return plan_scaffold(
            invocation,
            camel_name,
            self.catalog,
            self.config.template_dir,
            self.renderer,
        )

    async def generate(
        self,
        device_name: str | None,
        display_name: str | None = "",
        destination_dir: str | Path | None = "",
    ) -> Path:
        """Generate the service and return its root.

        Args:
            device_name: Lower-case device name (``-n``).
            display_name: Optional camel-case name (``-c``).
            destination_dir: Optional parent directory (``-d``); defaults to
                the current working directory.

        Raises:
            ScaffoldError: Any of its kinds; see :mod:`devicegen.scaffolder.errors`.
        """
        plan = self.prepare(device_name, display_name, destination_dir)
        return await self.execute(plan)

    async def execute(self, plan: ScaffoldPlan) -> Path:
        """Materialise a plan previously returned by :meth:`prepare`."""
        return await self.engine.execute(plan)
