"""
Flask bindings for restricted routes and logout.

:func:`restricted` is a decorator factory used to protect individual routes:

.. code-block:: python

   from passwordless.decorators import restricted


   @blueprint.route('/account', methods=['GET'])
   @restricted(not_auth_redirect='/login', origin_url_param='origin')
   def account():
       '''Only reachable with an authenticated marker.'''
       return render_template('account.html')


To protect everything under a blueprint (or a whole app), register the hook
returned by :func:`restricted_hook` with ``before_request``; requests to
routes outside that blueprint never reach the gate.

When the decorated route is called...

- If the request carries the authenticated marker, the route is called with
  the original parameters.
- Otherwise the options are validated. An invalid combination raises a
  :class:`.ConfigurationError`, which Flask turns into a ``500``.
- Without a redirect target, :class:`werkzeug.exceptions.Forbidden` is
  raised.
- With a redirect target, a ``302`` is returned, after enqueueing the
  configured flash message if there is one.
"""

from functools import wraps
from typing import Any, Callable, Optional
from urllib.parse import quote

from flask import Response, redirect, request
from werkzeug.exceptions import abort

import logging

from . import gate, sessions
from .domain import FLASH_NAMESPACE, RestrictedOptions, LogoutOptions, \
    Allow, Reject, RedirectWithFlash
from .flash import current_flash, has_flash

logger = logging.getLogger(__name__)


def original_url() -> str:
    """
    Path and query string of the current request, exactly as requested.

    The result is a WSGI string: each character stands for one byte of the
    raw request line, so percent-escapes and non-ASCII bytes are kept as sent.
    """
    # Raw URI as set by gunicorn, uWSGI, mod_wsgi and the werkzeug server.
    raw = request.environ.get('RAW_URI') \
        or request.environ.get('REQUEST_URI')
    if raw and raw.startswith('/'):
        uri: str = raw
        return uri
    # PATH_INFO is already unquoted; an encoded slash cannot be recovered.
    path = request.environ.get('SCRIPT_NAME', '') \
        + request.environ.get('PATH_INFO', '')
    url = quote(path, safe="/:@!$&'()*+,;=~", encoding='latin-1')
    if request.query_string:
        url += '?' + request.query_string.decode('latin-1')
    return url


def enforce(options: RestrictedOptions) -> Optional[Response]:
    """
    Apply the gate to the current request.

    Returns
    -------
    :class:`flask.Response` or None
        ``None`` if the request may proceed, otherwise a redirect.

    Raises
    ------
    :class:`werkzeug.exceptions.HTTPException`
        Raised when the request is rejected with a status code.
    :class:`.ConfigurationError`
        Raised when ``options`` are not valid for this request.

    """
    outcome = gate.evaluate(sessions.current_marker(), options,
                            original_url(), has_flash())
    if isinstance(outcome, Allow):
        return None
    if isinstance(outcome, Reject):
        logger.debug('Rejecting unauthenticated request with %i',
                     outcome.status)
        abort(outcome.status)
    if isinstance(outcome, RedirectWithFlash):
        current_flash().enqueue(FLASH_NAMESPACE, outcome.message)
    logger.debug('Redirecting unauthenticated request to %s',
                 outcome.location)
    response: Response = redirect(outcome.location)
    return response


def restricted(**options: Any) -> Callable:
    """
    Generate a decorator that only lets authenticated requests through.

    Parameters
    ----------
    not_auth_redirect : str
        Redirect here instead of answering ``403``.
    origin_url_param : str
        Pass the requested URL to the redirect target in this parameter.
    failure_redirect : str
        Older name for ``not_auth_redirect``.
    flash_user_not_auth : str
        Flash this message before redirecting.

    Returns
    -------
    function

    """
    opts = RestrictedOptions(**options)

    def protector(func: Callable) -> Callable:
        """Decorator that provides the authentication check."""
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            response = enforce(opts)
            if response is not None:
                return response
            return func(*args, **kwargs)
        return wrapper
    return protector


def restricted_hook(**options: Any) -> Callable[[], Optional[Response]]:
    """Generate a ``before_request`` hook; takes the same options."""
    opts = RestrictedOptions(**options)

    def check() -> Optional[Response]:
        return enforce(opts)
    return check


def logout(**options: Any) -> Callable:
    """
    Generate a decorator that drops the authenticated marker.

    Parameters
    ----------
    success_flash : str
        Flash this message after logging out. Requires ``success_redirect``.
    success_redirect : str
        Redirect here instead of calling the decorated route.

    """
    opts = LogoutOptions(**options)

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            gate.resolve_logout(opts, has_flash())
            sessions.forget()
            logger.debug('Logged out')
            if opts.success_flash:
                current_flash().enqueue(FLASH_NAMESPACE, opts.success_flash)
            if opts.success_redirect:
                return redirect(opts.success_redirect)
            return func(*args, **kwargs)
        return wrapper
    return decorator
