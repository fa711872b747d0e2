"""
One-shot flash messages kept in the Flask session.

Register :class:`Flash` on the app to make the capability available as
``request.flash``:

.. code-block:: python

   from flask import Flask
   from passwordless.flash import Flash

   app = Flask('someapp')
   app.secret_key = 'not-so-secret'
   Flash(app)

Messages are queued per namespace. :meth:`FlashQueue.drain` hands the queued
messages over and removes them from the session, so a message is read at
most once.
"""

from typing import Any, List, MutableMapping, Optional

from flask import Flask, request, session

import logging

logger = logging.getLogger(__name__)

SESSION_KEY = '_passwordless_flashes'


class FlashQueue(object):
    """Namespaced, read-once message queue bound to one session."""

    def __init__(self, store: MutableMapping[str, Any]) -> None:
        self._store = store

    def _queues(self) -> dict:
        queues: dict = self._store.setdefault(SESSION_KEY, {})
        return queues

    def enqueue(self, namespace: str, message: str) -> None:
        """Add ``message`` to the queue for ``namespace``."""
        queues = self._queues()
        queues.setdefault(namespace, []).append(message)
        # Nested mutation is invisible to Flask's session tracking.
        self._mark_modified()
        logger.debug('Flashed message under %s', namespace)

    def drain(self, namespace: str) -> List[str]:
        """Take every message queued under ``namespace`` and clear them."""
        queues = self._store.get(SESSION_KEY)
        if not queues or namespace not in queues:
            return []
        messages: List[str] = queues.pop(namespace)
        if not queues:
            self._store.pop(SESSION_KEY, None)
        self._mark_modified()
        return messages

    def _mark_modified(self) -> None:
        if hasattr(self._store, 'modified'):
            self._store.modified = True  # type: ignore


class Flash(object):
    """Attaches a :class:`FlashQueue` to every request as ``request.flash``."""

    def __init__(self, app: Optional[Flask] = None) -> None:
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Register the capability on ``app``."""
        app.before_request(self.attach)
        app.extensions['passwordless.flash'] = self

    def attach(self) -> None:
        """Bind a queue to the session of the current request."""
        request.flash = FlashQueue(session)


def has_flash() -> bool:
    """Whether the flash capability is registered on the current request."""
    return isinstance(getattr(request, 'flash', None), FlashQueue)


def current_flash() -> FlashQueue:
    """Get the flash capability of the current request."""
    flash: FlashQueue = request.flash
    return flash
