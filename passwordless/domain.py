"""Defines the values that flow through the passwordless gate."""

from typing import NamedTuple, Optional

FLASH_NAMESPACE = 'passwordless'
"""Namespace under which every flash message of this package is enqueued."""


class RestrictedOptions(NamedTuple):
    """How a restricted route rejects a request that is not authenticated."""

    not_auth_redirect: Optional[str] = None
    """Path to redirect to instead of answering ``403 Forbidden``."""

    origin_url_param: Optional[str] = None
    """
    Name of the query parameter that carries the originally requested URL.

    Only used together with a redirect target.
    """

    failure_redirect: Optional[str] = None
    """Older name for :attr:`not_auth_redirect`."""

    flash_user_not_auth: Optional[str] = None
    """Message flashed before redirecting. Requires a redirect target."""

    @property
    def redirect_to(self) -> Optional[str]:
        """The redirect target; :attr:`not_auth_redirect` wins over the alias."""
        return self.not_auth_redirect or self.failure_redirect


class AcceptOptions(NamedTuple):
    """How the acceptance stage reads tokens and reacts to the result."""

    token_field: str = 'token'
    uid_field: str = 'uid'

    allow_post: bool = False
    """Also read the credential from form data, not only the query string."""

    success_redirect: Optional[str] = None
    failure_redirect: Optional[str] = None
    success_flash: Optional[str] = None
    failure_flash: Optional[str] = None

    enable_origin_redirect: bool = False
    """On success, redirect to the URL passed in :attr:`origin_field`."""

    origin_field: str = 'origin'


class LogoutOptions(NamedTuple):
    """What happens after the authenticated marker is dropped."""

    success_flash: Optional[str] = None
    success_redirect: Optional[str] = None


class TokenCredential(NamedTuple):
    """A token and the user it was issued to, as presented on a request."""

    token: Optional[str]
    uid: Optional[str]

    @property
    def is_complete(self) -> bool:
        """Both parts are present and non-empty."""
        return bool(self.token) and bool(self.uid)


class Allow(NamedTuple):
    """The caller is authenticated; hand over to the route."""


class Reject(NamedTuple):
    """Answer with an error status."""

    status: int = 403


class Redirect(NamedTuple):
    """Send the caller elsewhere."""

    location: str


class RedirectWithFlash(NamedTuple):
    """Flash a one-shot notice, then send the caller elsewhere."""

    location: str
    message: str
