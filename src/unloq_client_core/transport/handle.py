"""Result handle returned by ``RequestTransport.run``.

The handle pairs a single-resolution future with an abort flag and an
event listener registry:

```python
handle = transport.set_endpoint("authenticate").post({"email": email})
handle.on("step", lambda payload: print("step", payload))

try:
    response = await handle
except DeniedError:
    ...
```
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Generator
from typing import Any

from unloq_client_core.errors.exceptions import AbortedError, TransportError

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], "Awaitable[None] | None"]


class RequestHandle:
    """Pending outcome of one transport call."""

    def __init__(self) -> None:
        self._future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._listeners: dict[str, list[EventHandler]] = {}
        self._task: asyncio.Task[None] | None = None
        self._aborted = False

    def __await__(self) -> Generator[Any, None, Any]:
        return self._future.__await__()

    async def result(self) -> Any:
        """Wait for the response; raises the ``TransportError`` on failure."""
        return await self._future

    @property
    def settled(self) -> bool:
        return self._future.done()

    @property
    def aborted(self) -> bool:
        return self._aborted

    def done(self) -> bool:
        return self._future.done()

    def attach(self, task: "asyncio.Task[None]") -> None:
        """Bind the task driving the request so ``cancel`` can stop it."""
        self._task = task

    def on(self, name: str, handler: EventHandler) -> "RequestHandle":
        """Subscribe to a named event. Handlers run in registration order."""
        self._listeners.setdefault(name, []).append(handler)
        return self

    def off(self, name: str, handler: EventHandler | None = None) -> "RequestHandle":
        """Remove one handler, or every handler for ``name`` when none is given."""
        if handler is None:
            self._listeners.pop(name, None)
        elif handler in self._listeners.get(name, []):
            self._listeners[name].remove(handler)
        return self

    async def emit(self, name: str, payload: Any = None) -> None:
        handlers = list(self._listeners.get(name, ()))
        if not handlers:
            if name == "error":
                logger.warning(f"Unhandled error event: {payload!r}")
            return

        for handler in handlers:
            try:
                outcome = handler(payload)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception:
                logger.exception(f"Listener for event '{name}' failed")

    def resolve(self, value: Any) -> bool:
        """Settle successfully. Returns False if already settled."""
        if self._future.done():
            return False
        self._future.set_result(value)
        return True

    def reject(self, error: TransportError) -> bool:
        """Settle with an error. Returns False if already settled."""
        if self._future.done():
            return False
        self._future.set_exception(error)
        return True

    def cancel(self) -> bool:
        """Abort the request.

        Rejects with ``AbortedError`` and stops the underlying HTTP call.
        After the handle has settled this is a no-op and returns False.
        """
        if self._future.done():
            return False

        self._aborted = True
        self._future.set_exception(AbortedError())
        # Caller asked for the abort; don't report it as never retrieved
        self._future.exception()

        if self._task is not None and not self._task.done():
            self._task.cancel()
        logger.debug("Request aborted by caller")
        return True
