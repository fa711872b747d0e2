"""
Authorization decision for restricted routes.

Nothing in this module touches Flask. :func:`evaluate` takes the
authenticated marker (or ``None``), the route's :class:`.RestrictedOptions`,
the URL that was requested and whether a flash capability is present, and
returns one of the outcomes defined in :mod:`passwordless.domain`. The Flask
bindings in :mod:`passwordless.decorators` turn that outcome into a response.

Options are checked on every call by :func:`resolve`. The check only reads
the (immutable) options and the capability flag, so it is safe to run
concurrently for requests sharing the same options. An authenticated request
always passes, whatever the options. A bad configuration raises a
:class:`.ConfigurationError` on the first unauthenticated request that reaches
the gate; it is never downgraded to a ``403``.
"""

from typing import Any, Optional, Union
from urllib.parse import quote
import logging

from .domain import RestrictedOptions, AcceptOptions, LogoutOptions, \
    Allow, Reject, Redirect, RedirectWithFlash
from .exceptions import FlashRequiresRedirect, FlashMiddlewareMissing

logger = logging.getLogger(__name__)

Outcome = Union[Allow, Reject, Redirect, RedirectWithFlash]


def _check_flash(message: Optional[str], redirect: Optional[str],
                 has_flash: bool, option: str) -> None:
    if not message:
        return
    if not redirect:
        raise FlashRequiresRedirect(option)
    if not has_flash:
        raise FlashMiddlewareMissing(option)


def resolve(options: RestrictedOptions, has_flash: bool) -> RestrictedOptions:
    """
    Validate the options of a restricted route.

    Parameters
    ----------
    options : :class:`.RestrictedOptions`
    has_flash : bool
        Whether a flash capability is registered on the current request.

    Returns
    -------
    :class:`.RestrictedOptions`
        The same options, unchanged.

    Raises
    ------
    :class:`.FlashRequiresRedirect`
        ``flash_user_not_auth`` is set without a redirect target.
    :class:`.FlashMiddlewareMissing`
        ``flash_user_not_auth`` is set but no flash capability is present.

    """
    _check_flash(options.flash_user_not_auth, options.redirect_to,
                 has_flash, 'flash_user_not_auth')
    return options


def resolve_accept(options: AcceptOptions, has_flash: bool) -> AcceptOptions:
    """
    Validate the flash/redirect pairs of the acceptance stage.

    ``success_flash`` needs ``success_redirect`` even when origin redirects
    are enabled, since the origin may be missing or refused.
    """
    _check_flash(options.success_flash, options.success_redirect,
                 has_flash, 'success_flash')
    _check_flash(options.failure_flash, options.failure_redirect,
                 has_flash, 'failure_flash')
    return options


def resolve_logout(options: LogoutOptions, has_flash: bool) -> LogoutOptions:
    """Validate the logout options."""
    _check_flash(options.success_flash, options.success_redirect,
                 has_flash, 'success_flash')
    return options


def _quote_origin(original_url: str) -> str:
    try:
        return quote(original_url, safe='', encoding='latin-1')
    except UnicodeEncodeError:
        return quote(original_url, safe='')


def redirect_target(location: str, origin_url_param: Optional[str],
                    original_url: str) -> str:
    """
    Build the URL to redirect an unauthenticated request to.

    When ``origin_url_param`` is set, ``original_url`` (path plus query) is
    percent-encoded as a whole and appended as the last query parameter.

    Parameters
    ----------
    location : str
        Redirect target; may already carry a query string.
    origin_url_param : str or None
    original_url : str
        Path and query string of the request being rejected, as a WSGI
        string (one character per byte, as sent by the client). Text that
        cannot be such a string is encoded as UTF-8.

    Returns
    -------
    str

    """
    if not origin_url_param:
        return location
    separator = '&' if '?' in location else '?'
    return f'{location}{separator}{origin_url_param}=' \
        f'{_quote_origin(original_url)}'


def evaluate(marker: Any, options: RestrictedOptions, original_url: str,
             has_flash: bool) -> Outcome:
    """
    Decide what happens to a request on a restricted route.

    Parameters
    ----------
    marker : object or None
        The authenticated marker on the request. Its presence is the only
        thing that counts.
    options : :class:`.RestrictedOptions`
    original_url : str
        Path and query string of the current request.
    has_flash : bool
        Whether a flash capability is registered on the current request.

    Returns
    -------
    :class:`.Allow`, :class:`.Reject`, :class:`.Redirect` or
    :class:`.RedirectWithFlash`

    """
    if marker is not None:
        return Allow()

    resolve(options, has_flash)
    logger.debug('No authenticated marker on request for %s', original_url)
    if not options.redirect_to:
        return Reject(403)

    target = redirect_target(options.redirect_to, options.origin_url_param,
                             original_url)
    if options.flash_user_not_auth:
        return RedirectWithFlash(target, options.flash_user_not_auth)
    return Redirect(target)
