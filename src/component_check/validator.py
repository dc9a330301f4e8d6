"""
Structural validation of constructed components.
"""

import logging
from typing import Any

from .errors import ContractError
from .testing import exercise_lifecycle

logger = logging.getLogger(__name__)

DEFAULT_PROBE_PREFIX = "hello-component"


def field_names(component: Any) -> list[str]:
    """Names of the component's own fields, for diagnostics."""
    if isinstance(component, dict):
        return list(component.keys())
    try:
        return list(vars(component).keys())
    except TypeError:
        return [name for name in dir(component) if not name.startswith("_")]


class ComponentValidator:
    """Checks a component against the minimal lifecycle contract.

    Structural checks are pure and may be repeated. Components whose name
    starts with ``probe_prefix`` additionally have ``start`` and ``end``
    exercised once per ``validate`` call, so validating such a component
    twice runs its lifecycle twice.
    """

    def __init__(
        self,
        probe_prefix: str | None = DEFAULT_PROBE_PREFIX,
        hook_timeout: float | None = None,
    ):
        self.probe_prefix = probe_prefix
        self.hook_timeout = hook_timeout

    def validate_structure(self, component: Any, reference: str | None = None) -> None:
        if component is None:
            raise ContractError("component: empty", reference=reference)

        name = getattr(component, "name", None)
        fields = field_names(component)
        logger.info(
            f"Validating component {name} fields={fields}",
            extra={"component": name, "fields": fields},
        )

        if not name:
            raise ContractError("component name: empty", reference=reference)
        if not callable(getattr(component, "start", None)):
            raise ContractError("component: start", reference=reference, component_name=name)
        if not callable(getattr(component, "end", None)):
            raise ContractError("component: end", reference=reference, component_name=name)

    def should_probe(self, component: Any) -> bool:
        if not self.probe_prefix:
            return False
        name = getattr(component, "name", None)
        return isinstance(name, str) and name.startswith(self.probe_prefix)

    async def validate(self, component: Any, reference: str | None = None) -> None:
        """Validate a component, raising ContractError or LifecycleError."""
        self.validate_structure(component, reference)

        if self.should_probe(component):
            await exercise_lifecycle(component, timeout=self.hook_timeout, reference=reference)

        logger.info(f"OK {component.name}", extra={"component": component.name})
