"""
Load-and-validate cycle for a single component.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any

from .config import ComponentSettings
from .core import ComponentShape
from .errors import ComponentError
from .loader import ComponentLoader, component_name_for
from .validator import ComponentValidator, field_names

logger = logging.getLogger(__name__)


@dataclass
class CheckReport:
    """Outcome of one load-and-validate cycle."""

    reference: str
    name: str
    success: bool = False
    shape: ComponentShape | None = None
    fields: list[str] = field(default_factory=list)
    duration_ms: float = 0.0
    error: ComponentError | None = None
    component: Any = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "reference": self.reference,
            "name": self.name,
            "success": self.success,
            "shape": self.shape.value if self.shape else None,
            "fields": self.fields,
            "duration_ms": round(self.duration_ms, 3),
            "error": self.error.to_dict() if self.error else None,
        }


class ComponentChecker:
    """Runs the resolve, construct, init, validate and probe sequence."""

    def __init__(self, loader: ComponentLoader, validator: ComponentValidator):
        self.loader = loader
        self.validator = validator

    @classmethod
    def from_settings(cls, settings: ComponentSettings) -> "ComponentChecker":
        loader = ComponentLoader(
            search_paths=settings.search_paths,
            props=settings.resolved_props(),
            hook_timeout=settings.hook_timeout,
        )
        validator = ComponentValidator(
            probe_prefix=settings.probe_prefix,
            hook_timeout=settings.hook_timeout,
        )
        return cls(loader, validator)

    async def load_and_validate(
        self, reference: str, shape: ComponentShape | str | None = None
    ) -> Any:
        """Load and validate a component, raising on the first failure."""
        component = await self.loader.load(reference, shape)
        await self.validator.validate(component, reference)
        return component

    async def check(
        self, reference: str, shape: ComponentShape | str | None = None
    ) -> CheckReport:
        """Load and validate a component, capturing failures in the report."""
        report = CheckReport(reference=reference, name=component_name_for(reference or ""))
        started = time.perf_counter()

        try:
            loaded = await self.loader.load_component(reference, shape)
            report.shape = loaded.shape
            component = loaded.component
            await self.validator.validate(component, reference)
        except ComponentError as e:
            if e.component_name is None:
                e.component_name = report.name
            report.error = e
            logger.error(
                f"Component check failed for {reference}: {e}",
                extra={"component": report.name, "error_type": type(e).__name__},
            )
        else:
            report.success = True
            report.component = component
            report.fields = field_names(component)
            logger.info(f"Component {report.name} passed all checks")
        finally:
            report.duration_ms = (time.perf_counter() - started) * 1000

        return report


async def check_component(settings: ComponentSettings | None = None) -> CheckReport:
    """Check the component named by the settings' module reference.

    Raises ConfigurationError before any loading when no reference is set.
    """
    settings = settings or ComponentSettings()
    reference = settings.require_module()
    checker = ComponentChecker.from_settings(settings)
    return await checker.check(reference, settings.shape)
