"""Factory-shaped fixture component."""

from types import SimpleNamespace


async def default(state, props, logger, metrics, service):
    logger.info("hello", dict(props))
    events = []

    async def start():
        events.append("start")
        metrics.sum("hello.started", 1)
        logger.info("state ready")

    async def end():
        events.append("end")
        logger.info("goodbye")

    return SimpleNamespace(start=start, end=end, events=events, props=props)
