"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, name: str, server_type: str, model: str) -> None:
        self._log.info(
            "config.loaded", name=name, server_type=server_type, model=model
        )

    def config_default_used(self, variable: str) -> None:
        self._log.debug("config.default_used", variable=variable)
