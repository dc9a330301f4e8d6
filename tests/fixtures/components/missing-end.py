"""Factory-shaped fixture without an end hook."""


def default(state):
    async def start():
        return None

    return {"start": start}
