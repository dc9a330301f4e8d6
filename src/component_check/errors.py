"""
Error taxonomy for component loading and validation.

Every failure in a load-and-validate cycle is raised as a subclass of
ComponentError carrying the module reference and derived component name,
so the top-level caller can report which convention was violated.
"""


class ComponentError(Exception):
    """Base class for component convention errors."""

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        component_name: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.reference = reference
        self.component_name = component_name
        self.cause = cause

    def to_dict(self) -> dict[str, str | None]:
        """Serializable view used by reports and structured logs."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "reference": self.reference,
            "component": self.component_name,
            "cause": repr(self.cause) if self.cause is not None else None,
        }


class ConfigurationError(ComponentError):
    """Required process configuration is missing or invalid."""


class ResolutionError(ComponentError):
    """Module reference could not be found or loaded."""


class ShapeError(ComponentError):
    """Resolved export is not callable or its shape is ambiguous."""


class InitError(ComponentError):
    """Construction, factory invocation or init failed."""


class ContractError(ComponentError):
    """Constructed component does not satisfy the structural contract."""


class LifecycleError(ComponentError):
    """A start/end lifecycle hook failed when exercised."""
