"""
Collaborators wired into every component state.

Components receive a logger, a metrics recorder and a service context
through their state rather than reaching for module-level globals.
"""

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any


class ComponentLogger:
    """Logger handed to a component, bound to its name.

    Accepts a message and an optional structured payload, which is attached
    to the log record as ``payload``.
    """

    def __init__(self, component_name: str, base_logger: logging.Logger | None = None):
        self.component_name = component_name
        self._logger = base_logger or logging.getLogger(f"component.{component_name}")

    def debug(self, message: str, payload: Any = None) -> None:
        self._log(logging.DEBUG, message, payload)

    def info(self, message: str, payload: Any = None) -> None:
        self._log(logging.INFO, message, payload)

    def warning(self, message: str, payload: Any = None) -> None:
        self._log(logging.WARNING, message, payload)

    def error(self, message: str, payload: Any = None) -> None:
        self._log(logging.ERROR, message, payload)

    def _log(self, level: int, message: str, payload: Any) -> None:
        extra: dict[str, Any] = {"component": self.component_name}
        if payload:
            extra["payload"] = payload
            self._logger.log(level, "%s %s", message, payload, extra=extra)
        else:
            self._logger.log(level, message, extra=extra)


@dataclass(frozen=True)
class MetricSummary:
    """Aggregate of the observations recorded under one name."""

    name: str
    count: int
    total: float

    @property
    def average(self) -> float:
        return self.total / self.count if self.count else 0.0


class MetricsRecorder:
    """Records named numeric observations for one component."""

    def __init__(self, component_name: str):
        self.component_name = component_name
        self._observations: dict[str, list[float]] = defaultdict(list)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(f"component.{component_name}.metrics")

    def sum(self, name: str, value: float) -> None:
        """Record an observation to be summed under ``name``."""
        with self._lock:
            self._observations[name].append(float(value))
        self._logger.info(
            "sum %s=%s", name, value, extra={"metric_name": name, "value": value}
        )

    def get(self, name: str) -> MetricSummary | None:
        with self._lock:
            values = self._observations.get(name)
            if not values:
                return None
            return MetricSummary(name=name, count=len(values), total=sum(values))

    def snapshot(self) -> dict[str, MetricSummary]:
        """Summaries of every metric recorded so far."""
        with self._lock:
            return {
                name: MetricSummary(name=name, count=len(values), total=sum(values))
                for name, values in self._observations.items()
            }


class ServiceContext:
    """Error reporting hook available to components.

    ``error`` logs the failure and keeps it so the caller can inspect what a
    component reported during its lifecycle.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("component.service")
        self.reported: list[tuple[str | None, BaseException | Any]] = []

    def error(self, component: Any, err: BaseException | Any) -> None:
        name = getattr(component, "name", None)
        self.reported.append((name, err))
        self._logger.error(
            "component %s reported error: %s", name, err, extra={"component": name}
        )
