"""
Contract conformance helpers.

``exercise_lifecycle`` drives a component through ``start`` then ``end``
once, the behavioural half of the component contract. Test suites use it
directly; the validator only delegates to it for components whose name
carries the reserved probe prefix.
"""

import asyncio
import inspect
import logging
from typing import Any

from .errors import LifecycleError

logger = logging.getLogger(__name__)


class HookTimeout(Exception):
    """A hook outlived its time bound."""

    def __init__(self, timeout: float):
        super().__init__(f"timed out after {timeout}s")
        self.timeout = timeout


async def call_hook(hook: Any, *args: Any, timeout: float | None = None) -> Any:
    """Call a lifecycle hook and await its result when it is awaitable.

    Raises HookTimeout only when ``timeout`` expires; a TimeoutError raised
    by the hook itself propagates unchanged.
    """
    result = hook(*args)
    if not inspect.isawaitable(result):
        return result
    if timeout is None:
        return await result

    try:
        async with asyncio.timeout(timeout) as deadline:
            return await result
    except TimeoutError as e:
        if deadline.expired():
            raise HookTimeout(timeout) from e
        raise


async def exercise_lifecycle(
    component: Any,
    timeout: float | None = None,
    reference: str | None = None,
) -> None:
    """Run ``start`` then ``end`` on a component, in that order.

    ``end`` is never called when ``start`` fails. Any failure is raised as a
    LifecycleError chained to the original exception.
    """
    name = getattr(component, "name", None)

    for hook_name in ("start", "end"):
        logger.info(
            f"Exercising {hook_name} on component {name}", extra={"component": name}
        )
        try:
            await call_hook(getattr(component, hook_name), timeout=timeout)
        except Exception as e:
            raise LifecycleError(
                f"component {hook_name}: {e}",
                reference=reference,
                component_name=name,
                cause=e,
            ) from e
