"""
Component convention checker.

Loads a single component module by reference, constructs it as either a
class-shaped or a factory-shaped export, wires it with a fresh state bundle
and validates the minimal ``start``/``end`` lifecycle contract.

Example Usage:
    from component_check import ComponentLoader, ComponentValidator

    loader = ComponentLoader(search_paths=["components"])
    component = await loader.load("hello-component")
    await ComponentValidator().validate(component)
"""

__version__ = "1.0.0"

# Collaborators
from .collaborators import ComponentLogger, MetricsRecorder, MetricSummary, ServiceContext

# Core types
from .core import (
    BaseComponent,
    Component,
    ComponentShape,
    ComponentState,
    InitializableComponent,
    component_shape,
)

# Errors
from .errors import (
    ComponentError,
    ConfigurationError,
    ContractError,
    InitError,
    LifecycleError,
    ResolutionError,
    ShapeError,
)

# Loading and validation
from .loader import ComponentLoader, LoadedComponent, classify_export, component_name_for
from .validator import ComponentValidator

# Configuration and the check cycle
from .config import ComponentSettings
from .runner import CheckReport, ComponentChecker, check_component

__all__ = [
    # Core types
    "BaseComponent",
    "Component",
    "ComponentShape",
    "ComponentState",
    "InitializableComponent",
    "component_shape",

    # Collaborators
    "ComponentLogger",
    "MetricsRecorder",
    "MetricSummary",
    "ServiceContext",

    # Errors
    "ComponentError",
    "ConfigurationError",
    "ContractError",
    "InitError",
    "LifecycleError",
    "ResolutionError",
    "ShapeError",

    # Loading and validation
    "ComponentLoader",
    "ComponentValidator",
    "LoadedComponent",
    "classify_export",
    "component_name_for",

    # Configuration and the check cycle
    "CheckReport",
    "ComponentChecker",
    "ComponentSettings",
    "check_component",
]
