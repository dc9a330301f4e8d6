"""
Core component types.

Defines the context bundle handed to each component, the two accepted
construction shapes and the lifecycle interfaces a loaded component is
expected to satisfy.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from .collaborators import ComponentLogger, MetricsRecorder, ServiceContext

SHAPE_ATTRIBUTE = "__component_shape__"

ExportT = TypeVar("ExportT", bound=Callable[..., Any])


class ComponentShape(Enum):
    """Construction convention of a component export."""

    CLASS = "class"
    FACTORY = "factory"


@runtime_checkable
class Component(Protocol):
    """Minimal lifecycle interface every loaded component satisfies."""

    name: str

    async def start(self) -> Any: ...

    async def end(self) -> Any: ...


@runtime_checkable
class InitializableComponent(Component, Protocol):
    """Class-shaped components are initialized with the state after construction."""

    async def init(self, state: "ComponentState") -> Any: ...


@dataclass(frozen=True)
class ComponentState:
    """Collaborators and identity handed to exactly one component instance.

    The bundle is built fresh per load and never mutated afterwards; ``props``
    is exposed as a read-only mapping.
    """

    name: str
    props: Mapping[str, Any] = field(default_factory=dict)
    logger: "ComponentLogger | None" = None
    metrics: "MetricsRecorder | None" = None
    context: "ServiceContext | None" = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("Component name is required")
        object.__setattr__(self, "props", MappingProxyType(dict(self.props)))

    @property
    def config(self) -> Mapping[str, Any]:
        """Alias for ``props``."""
        return self.props

    @property
    def service(self) -> "ServiceContext | None":
        """Alias for ``context``."""
        return self.context

    def factory_arguments(self) -> tuple[Any, ...]:
        """Positional arguments offered to factory-shaped exports."""
        return (self, self.props, self.logger, self.metrics, self.context)


class BaseComponent(ABC):
    """Convenience base for class-shaped components.

    Stores the state during ``init``; subclasses implement ``start`` and
    ``end`` and may override ``_init_component`` for their own setup.
    """

    def __init__(self, state: ComponentState):
        self.name = state.name
        self._state: ComponentState | None = None

    @property
    def state(self) -> ComponentState:
        if self._state is None:
            raise RuntimeError(f"Component {self.name} used before init")
        return self._state

    async def init(self, state: ComponentState) -> None:
        self._state = state
        await self._init_component()

    async def _init_component(self) -> None:
        """Override this method for component-specific initialization."""

    @abstractmethod
    async def start(self) -> None:
        """Begin the component's work."""

    @abstractmethod
    async def end(self) -> None:
        """Stop the component's work and release its resources."""


def component_shape(shape: ComponentShape | str) -> Callable[[ExportT], ExportT]:
    """Declare the construction shape of an export at its definition.

    Example:
        @component_shape(ComponentShape.FACTORY)
        class Greeter:
            ...
    """
    resolved = ComponentShape(shape)

    def decorator(export: ExportT) -> ExportT:
        setattr(export, SHAPE_ATTRIBUTE, resolved)
        return export

    return decorator


def declared_shape(export: Any) -> ComponentShape | None:
    """Return the shape declared with ``component_shape``, if any."""
    declared = getattr(export, SHAPE_ATTRIBUTE, None)
    if declared is None:
        return None
    return ComponentShape(declared)
