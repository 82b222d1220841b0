class ScriptedRandom:
    """Random source that replays a fixed sequence of ``randrange`` results."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randrange(self, stop):
        value = self.values.pop(0)
        assert 0 <= value < stop, f"scripted value {value} outside [0, {stop})"
        self.calls.append(stop)
        return value
