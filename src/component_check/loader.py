"""
Component loader.

Resolves a module reference to a callable export, decides whether the export
is class-shaped or factory-shaped and constructs the component with a fresh
state bundle.

Reference forms:
- a file path, with or without the ``.py`` suffix
- a name looked up in the search paths as ``NAME.py`` or ``NAME/__init__.py``
- a dotted importable module path

Any form may end in ``:attr`` to name the export; otherwise the module's
``default`` attribute is the export.
"""

import importlib
import importlib.util
import inspect
import logging
import sys
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType, SimpleNamespace
from typing import Any

from .collaborators import ComponentLogger, MetricsRecorder, ServiceContext
from .core import ComponentShape, ComponentState, declared_shape
from .errors import InitError, ResolutionError, ShapeError
from .testing import call_hook

DEFAULT_EXPORT = "default"
DEFAULT_HOOK_TIMEOUT = 60.0


def parse_reference(reference: str) -> tuple[str, str | None]:
    """Split ``module:attr`` into its module and export parts."""
    module_part, sep, attr = reference.rpartition(":")
    # Windows drive letters ("C:\\...") are not export separators
    if not sep or not attr or "/" in attr or "\\" in attr or not module_part:
        return reference, None
    return module_part, attr


def component_name_for(reference: str) -> str:
    """Component name derived from the last path segment of a reference."""
    module_part, _ = parse_reference(reference)
    name = module_part.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
    if name.endswith(".py"):
        name = name[: -len(".py")]
    return name


def classify_export(export: Any) -> ComponentShape:
    """Shape of an export without an explicit tag: classes are class-shaped."""
    declared = declared_shape(export)
    if declared is not None:
        return declared
    if inspect.isclass(export):
        return ComponentShape.CLASS
    return ComponentShape.FACTORY


def accepted_positional_count(factory: Callable[..., Any], offered: int) -> int:
    """How many of ``offered`` positional arguments ``factory`` accepts."""
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        return offered

    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return offered
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return min(count, offered)


@dataclass
class LoadedComponent:
    """A constructed component with the name and shape it was loaded under."""

    name: str
    shape: ComponentShape
    component: Any


class ComponentLoader:
    """Loads and constructs components from module references."""

    def __init__(
        self,
        search_paths: list[Path | str] | None = None,
        props: Mapping[str, Any] | None = None,
        hook_timeout: float | None = DEFAULT_HOOK_TIMEOUT,
        service: ServiceContext | None = None,
    ):
        self.search_paths = [Path(p) for p in (search_paths or ["."])]
        self.props = dict(props or {})
        self.hook_timeout = hook_timeout
        self.service = service or ServiceContext()
        self.logger = logging.getLogger("component.loader")

    def create_state(self, name: str) -> ComponentState:
        """Build the state bundle for one component."""
        return ComponentState(
            name=name,
            props=self.props,
            logger=ComponentLogger(name),
            metrics=MetricsRecorder(name),
            context=self.service,
        )

    async def load(self, reference: str, shape: ComponentShape | str | None = None) -> Any:
        """Resolve, construct and initialize the component named by ``reference``.

        Args:
            reference: Module reference, see the module docstring
            shape: Explicit construction shape; classified from the export when omitted

        Returns:
            The constructed component
        """
        loaded = await self.load_component(reference, shape)
        return loaded.component

    async def load_component(
        self, reference: str, shape: ComponentShape | str | None = None
    ) -> LoadedComponent:
        """Like ``load``, also reporting the derived name and resolved shape."""
        if not reference or not reference.strip():
            raise ResolutionError("component reference: empty", reference=reference)

        name = component_name_for(reference)
        self.logger.info(f"Loading component {name} from {reference}")
        started = time.perf_counter()

        export = self.resolve_export(reference, name)
        resolved_shape = self._resolve_shape(export, shape, reference, name)
        state = self.create_state(name)

        self.logger.info(
            f"Constructing component {name} as {resolved_shape.value}",
            extra={"shape": resolved_shape.value},
        )
        if resolved_shape is ComponentShape.CLASS:
            component = await self._construct_class(export, state, reference)
        else:
            component = await self._construct_factory(export, state, reference)

        duration_ms = (time.perf_counter() - started) * 1000
        self.logger.info(
            f"Loaded component {name} in {duration_ms:.1f}ms",
            extra={"duration_ms": duration_ms},
        )
        return LoadedComponent(name=name, shape=resolved_shape, component=component)

    def resolve_export(self, reference: str, name: str | None = None) -> Any:
        """Import the referenced module and return its primary export."""
        name = name or component_name_for(reference)
        module_ref, attr = parse_reference(reference)
        module = self._import_module(module_ref, reference, name)

        if attr is not None:
            if not hasattr(module, attr):
                raise ResolutionError(
                    f"module {module.__name__} has no export {attr}",
                    reference=reference,
                    component_name=name,
                )
            export = getattr(module, attr)
        else:
            export = getattr(module, DEFAULT_EXPORT, module)

        self.logger.debug(
            f"Resolved export of {reference}: {type(export).__name__}",
            extra={"export_type": type(export).__name__},
        )
        if not callable(export):
            raise ShapeError(
                f"component export is not callable: {type(export).__name__}",
                reference=reference,
                component_name=name,
            )
        return export

    def find_module_file(self, module_ref: str) -> Path | None:
        """Locate a module file for path-like or search-path references."""
        candidates: list[Path] = []
        path = Path(module_ref)
        bases = [Path()] if path.is_absolute() else self.search_paths

        for base in bases:
            target = base / path
            if target.suffix == ".py":
                candidates.append(target)
            else:
                candidates.append(target.parent / f"{target.name}.py")
                candidates.append(target / "__init__.py")

        for candidate in candidates:
            if candidate.is_file():
                return candidate
        return None

    def _import_module(self, module_ref: str, reference: str, name: str) -> ModuleType:
        module_file = self.find_module_file(module_ref)
        if module_file is not None:
            return self._load_module_file(module_file, reference, name)

        if "/" in module_ref or "\\" in module_ref or module_ref.endswith(".py"):
            raise ResolutionError(
                f"component module not found: {module_ref}",
                reference=reference,
                component_name=name,
            )

        try:
            return importlib.import_module(module_ref)
        except ModuleNotFoundError as e:
            raise ResolutionError(
                f"component module not found: {module_ref}",
                reference=reference,
                component_name=name,
                cause=e,
            ) from e
        except Exception as e:
            raise ResolutionError(
                f"component module failed to load: {e}",
                reference=reference,
                component_name=name,
                cause=e,
            ) from e

    def _load_module_file(self, module_file: Path, reference: str, name: str) -> ModuleType:
        module_name = f"component.{name}"
        submodule_locations = (
            [str(module_file.parent)] if module_file.name == "__init__.py" else None
        )
        spec = importlib.util.spec_from_file_location(
            module_name, module_file, submodule_search_locations=submodule_locations
        )
        if not spec or not spec.loader:
            raise ResolutionError(
                f"could not load spec for {module_file}",
                reference=reference,
                component_name=name,
            )

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise ResolutionError(
                f"component module failed to load: {e}",
                reference=reference,
                component_name=name,
                cause=e,
            ) from e

        self.logger.debug(f"Loaded module {module_name} from {module_file}")
        return module

    def _resolve_shape(
        self,
        export: Any,
        shape: ComponentShape | str | None,
        reference: str,
        name: str,
    ) -> ComponentShape:
        if shape is None:
            return classify_export(export)

        try:
            requested = ComponentShape(shape)
        except ValueError as e:
            raise ShapeError(
                f"unknown component shape: {shape}",
                reference=reference,
                component_name=name,
                cause=e,
            ) from e
        declared = declared_shape(export)
        if declared is not None and declared is not requested:
            raise ShapeError(
                f"component shape is ambiguous: declared {declared.value}, "
                f"requested {requested.value}",
                reference=reference,
                component_name=name,
            )
        if requested is ComponentShape.CLASS and not inspect.isclass(export):
            raise ShapeError(
                f"component shape is ambiguous: {type(export).__name__} is not a class",
                reference=reference,
                component_name=name,
            )
        return requested

    async def _construct_class(self, cls: Any, state: ComponentState, reference: str) -> Any:
        try:
            component = cls(state)
        except Exception as e:
            raise InitError(
                f"component constructor failed: {e}",
                reference=reference,
                component_name=state.name,
                cause=e,
            ) from e

        init = getattr(component, "init", None)
        if not callable(init):
            raise InitError(
                "component: init", reference=reference, component_name=state.name
            )

        try:
            await call_hook(init, state, timeout=self.hook_timeout)
        except Exception as e:
            raise InitError(
                f"component init: {e}",
                reference=reference,
                component_name=state.name,
                cause=e,
            ) from e
        return component

    async def _construct_factory(
        self, factory: Any, state: ComponentState, reference: str
    ) -> Any:
        offered = state.factory_arguments()
        args = offered[: accepted_positional_count(factory, len(offered))]

        try:
            component = await call_hook(factory, *args, timeout=self.hook_timeout)
        except Exception as e:
            raise InitError(
                f"component factory: {e}",
                reference=reference,
                component_name=state.name,
                cause=e,
            ) from e

        if component is None:
            return None
        if isinstance(component, Mapping):
            component = SimpleNamespace(**component)

        try:
            component.name = state.name
        except (AttributeError, TypeError) as e:
            raise InitError(
                f"component name could not be assigned: {e}",
                reference=reference,
                component_name=state.name,
                cause=e,
            ) from e
        return component
