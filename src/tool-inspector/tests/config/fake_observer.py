"""Fake ConfigObserver for use in tests — records events without mocking."""


class FakeConfigObserver:
    def __init__(self) -> None:
        self.loaded: list[dict[str, str]] = []
        self.defaults_used: list[str] = []

    def config_loaded(self, name: str, server_type: str, model: str) -> None:
        self.loaded.append({"name": name, "server_type": server_type, "model": model})

    def config_default_used(self, variable: str) -> None:
        self.defaults_used.append(variable)
