"""
Accepts login tokens presented on incoming requests.

The hook returned by :func:`accept_token` runs before the routes. If the
request carries a token and a user id, they are verified against the token
store; on success the request is marked as authenticated and the marker is
kept in the session. Requests without a token pass untouched.
"""

from typing import Any, Callable, Optional
import re

from flask import Response, redirect, request

import logging

from . import gate, sessions
from .domain import FLASH_NAMESPACE, AcceptOptions, TokenCredential
from .flash import current_flash, has_flash
from .tokens import TokenVerifier

logger = logging.getLogger(__name__)

# Relative paths only; no scheme, no protocol-relative ``//host``.
_relative_url = re.compile(r'^/(?![/\\])[^\s]*$')


def good_origin(origin: Optional[str]) -> bool:
    """Whether ``origin`` is safe to redirect to after a login."""
    return bool(origin and len(origin) < 2000 and _relative_url.match(origin))


def read_credential(options: AcceptOptions) -> TokenCredential:
    """Get the token and user id from the current request."""
    token = request.args.get(options.token_field)
    uid = request.args.get(options.uid_field)
    if options.allow_post and request.method == 'POST':
        token = token or request.form.get(options.token_field)
        uid = uid or request.form.get(options.uid_field)
    return TokenCredential(token, uid)


def accept_token(get_verifier: Callable[[], TokenVerifier],
                 **options: Any) -> Callable[[], Optional[Response]]:
    """
    Generate a ``before_request`` hook that accepts tokens.

    Parameters
    ----------
    get_verifier : function
        Returns the :class:`.TokenVerifier` to use for the current app.
    token_field : str
        Query (or form) parameter carrying the token. Default ``token``.
    uid_field : str
        Query (or form) parameter carrying the user id. Default ``uid``.
    allow_post : bool
        Also accept tokens sent as form data.
    success_redirect : str
    failure_redirect : str
    success_flash : str
        Requires ``success_redirect``, also with ``enable_origin_redirect``.
    failure_flash : str
        Requires ``failure_redirect``.
    enable_origin_redirect : bool
        After a successful login, redirect to the relative URL passed in
        ``origin_field``. Takes precedence over ``success_redirect``.
    origin_field : str
        Default ``origin``.

    Returns
    -------
    function

    """
    opts = AcceptOptions(**options)

    def accept() -> Optional[Response]:
        gate.resolve_accept(opts, has_flash())
        credential = read_credential(opts)
        if not credential.is_complete:
            return None

        # Store failures propagate; only a negative answer is a failed login.
        uid = get_verifier().accept(credential)
        if uid is None:
            logger.debug('Token not accepted')
            if opts.failure_flash:
                current_flash().enqueue(FLASH_NAMESPACE, opts.failure_flash)
            if opts.failure_redirect:
                return redirect(opts.failure_redirect)
            return None

        sessions.persist(uid)
        if opts.success_flash:
            current_flash().enqueue(FLASH_NAMESPACE, opts.success_flash)
        if opts.enable_origin_redirect:
            origin = request.args.get(opts.origin_field)
            if good_origin(origin):
                return redirect(origin)
            elif origin:
                logger.debug('Ignoring origin %s', origin)
        if opts.success_redirect:
            return redirect(opts.success_redirect)
        return None
    return accept
