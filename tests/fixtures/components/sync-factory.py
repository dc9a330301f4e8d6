"""Synchronous factory taking only the state and returning a mapping."""


def default(state):
    started = []

    def start():
        started.append(state.name)

    def end():
        started.clear()

    return {"start": start, "end": end, "started": started}
