"""
Keeps the authenticated marker across requests.

The marker lives in the Flask session (a signed cookie by default, or any
server-side session interface the app installs). On each request
:func:`restore` copies it onto the request, where the gate looks for it.
"""

from typing import Any, Optional

from flask import current_app, request, session

import logging

from .exceptions import SessionStoreError

logger = logging.getLogger(__name__)


def _user_property() -> str:
    prop: str = current_app.config['PASSWORDLESS_USER_PROPERTY']
    return prop


def _session_key() -> str:
    key: str = current_app.config['PASSWORDLESS_SESSION_KEY']
    return key


def current_marker() -> Optional[Any]:
    """Get the authenticated marker of the current request, if any."""
    return getattr(request, _user_property(), None)


def set_marker(uid: Optional[Any]) -> None:
    """Set (or clear, with ``None``) the marker for this request only."""
    setattr(request, _user_property(), uid)


def restore() -> None:
    """Attach the marker stored in the session to the current request."""
    uid = session.get(_session_key()) if session else None
    # Another stage may already have authenticated this request.
    if current_marker() is None:
        set_marker(uid)
    if uid is not None:
        logger.debug('Restored authenticated marker from session')


def persist(uid: Any) -> None:
    """
    Mark the request as authenticated and keep the marker in the session.

    Raises
    ------
    :class:`.SessionStoreError`
        Raised when the session cannot be written, e.g. no secret key is set.

    """
    set_marker(uid)
    try:
        session[_session_key()] = uid
    except RuntimeError as e:
        raise SessionStoreError(f'Cannot persist marker: {e}') from e


def forget() -> None:
    """Drop the marker from the request and the session."""
    set_marker(None)
    try:
        session.pop(_session_key(), None)
    except RuntimeError as e:
        raise SessionStoreError(f'Cannot drop marker: {e}') from e
