"""Fixture exporting a plain object instead of a constructor or factory."""


async def _noop():
    return None


default = {"start": _noop, "end": _noop}
