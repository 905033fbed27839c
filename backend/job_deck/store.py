"""Shared plumbing for the job and activity caches."""

import asyncio
import logging
from typing import Any, Callable, Optional

from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


def resolve_api(api=None):
    """Default to the HTTP client module; anything with the same functions works."""
    if api is None:
        from job_deck import api as http_api
        return http_api
    return api


def wire_keys(fields: dict) -> dict:
    """Accept snake_case or camelCase keys, send camelCase."""
    return {to_camel(k) if "_" in k else k: v for k, v in fields.items()}


class Store:
    """Base for a cache mutated only by its own operations.

    Network calls are the only suspension points: the blocking call runs in a
    worker thread and the state change is applied back on the event loop, so
    two completions never touch the state at the same time.
    """

    def __init__(self, api=None, token: Optional[str] = None):
        self.api = resolve_api(api)
        self.token = token
        self._listeners: list[Listener] = []

    async def _call(self, name: str, *args) -> Any:
        fn = getattr(self.api, name)
        if getattr(self.api, "is_local", False):
            return fn(*args, token=self.token)
        return await asyncio.to_thread(fn, *args, token=self.token)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Store listener %r failed", listener)
