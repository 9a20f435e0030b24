from __future__ import annotations

import logging


class LivenessScope:
    """
    Marks whether the context that started an async operation still exists.

    Completion handlers check `alive` before applying results; `close()` is
    called once on teardown and cannot be undone.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._alive = True
        self._logger = logging.getLogger(__name__)

    @property
    def alive(self) -> bool:
        return self._alive

    def close(self) -> None:
        if self._alive:
            self._alive = False
            self._logger.debug("Scope closed", extra={"reason": self._name})

    def admits(self, operation: str) -> bool:
        """True if results of `operation` may still be applied; logs the drop otherwise."""
        if self._alive:
            return True
        self._logger.info(
            "Discarding late async result",
            extra={"reason": f"{self._name}:{operation}"},
        )
        return False
