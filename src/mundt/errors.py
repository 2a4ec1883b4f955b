from __future__ import annotations

import logging


class MundtConfigError(ValueError):
    """Invalid static configuration of a zone, node or surface."""


class MundtFatalError(RuntimeError):
    """Simulation cannot proceed; carries every severe message collected."""

    def __init__(self, message: str, severe: tuple[str, ...] = ()):
        self.severe = tuple(severe)
        if self.severe:
            message = message + "\n" + "\n".join(f"  ** Severe ** {m}" for m in self.severe)
        super().__init__(message)


class ErrorCollector:
    """Records severe errors so that a whole zone can be scanned before
    terminating with a single fatal error."""

    def __init__(self, logger: logging.Logger):
        self._log = logger
        self.messages: list[str] = []

    def severe(self, message: str) -> None:
        self._log.error(message)
        self.messages.append(message)

    @property
    def errors_found(self) -> bool:
        return bool(self.messages)

    def raise_if_errors(self, message: str) -> None:
        if self.messages:
            self._log.critical(message)
            raise MundtFatalError(message, tuple(self.messages))
