from __future__ import annotations

import logging
from typing import Callable

from salon.application.ports.identity import AuthStateCallback
from salon.domain.entities.profile import Identity


class AuthStateNotifier:
    def __init__(self) -> None:
        self._callbacks: list[AuthStateCallback] = []
        self._logger = logging.getLogger(__name__)

    def __len__(self) -> int:
        return len(self._callbacks)

    def subscribe(self, callback: AuthStateCallback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def notify(self, user: Identity | None) -> None:
        for callback in list(self._callbacks):
            try:
                callback(user)
            except Exception:
                self._logger.exception("Auth state listener failed")
