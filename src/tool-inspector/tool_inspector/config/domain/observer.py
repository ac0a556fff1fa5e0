"""Observer port for the config domain — defines events in domain language."""

from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, name: str, server_type: str, model: str) -> None: ...

    def config_default_used(self, variable: str) -> None: ...
