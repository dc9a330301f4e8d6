"""Package-style fixture with an explicitly named export."""

from component_check import ComponentShape, component_shape


@component_shape(ComponentShape.FACTORY)
class Greeter:
    def __init__(self, state, props):
        self.audience = props.get("audience", "world")

    async def start(self):
        return f"hello {self.audience}"

    async def end(self):
        return f"goodbye {self.audience}"


greeter = Greeter
