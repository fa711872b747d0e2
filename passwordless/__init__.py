"""
Token-based, passwordless authentication for Flask applications.

Intended for use in a Flask application factory, for example:

.. code-block:: python

   from flask import Flask
   from passwordless import Passwordless
   from passwordless.flash import Flash
   from someapp import routes, stores


   def create_web_app() -> Flask:
      app = Flask('someapp')
      app.config.from_pyfile('config.py')
      Flash(app)
      auth = Passwordless(app, token_store=stores.TokenStore())
      auth.accept_token(app, success_redirect='/')
      auth.restrict(routes.blueprint, not_auth_redirect='/login')
      app.register_blueprint(routes.blueprint)
      return app


Set env var or ``Flask.config`` ``PASSWORDLESS_DEBUG`` to True to get debug
logging from this package.
"""

from typing import Any, Callable, Optional, Union
import os

from flask import Blueprint, Flask, current_app

import logging

from . import acceptance, decorators, sessions
from .exceptions import NotInitialized
from .tokens import TokenStore, TokenVerifier

logger = logging.getLogger(__name__)

Registrable = Union[Flask, Blueprint]


class Passwordless(object):
    """
    Attaches the authenticated marker to requests and guards routes.

    The marker (the id of the authenticated user) is available as
    ``request.user``, or under the name set in
    ``PASSWORDLESS_USER_PROPERTY``.
    """

    def __init__(self, app: Optional[Flask] = None,
                 token_store: Optional[TokenStore] = None) -> None:
        """
        Initialize ``app`` with `Passwordless`.

        Parameters
        ----------
        app : :class:`Flask`
        token_store : :class:`.TokenStore`
            Needed only if tokens are accepted.

        """
        self.token_store = token_store
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """
        Set configuration defaults and restore sessions on ``app``.

        Parameters
        ----------
        app : :class:`Flask`

        """
        app.config.setdefault('PASSWORDLESS_USER_PROPERTY', 'user')
        app.config.setdefault('PASSWORDLESS_SESSION_KEY', 'passwordless')
        app.config.setdefault('PASSWORDLESS_ALLOW_TOKEN_REUSE', False)
        app.config.setdefault('PASSWORDLESS_TOKEN_TTL', 3600)
        app.config.setdefault('PASSWORDLESS_DEBUG',
                              os.environ.get('PASSWORDLESS_DEBUG') == '1')
        if app.config['PASSWORDLESS_DEBUG']:
            logger.setLevel(logging.DEBUG)
        app.extensions['passwordless'] = self
        app.before_request(sessions.restore)

    def verifier(self) -> TokenVerifier:
        """Get a :class:`.TokenVerifier` configured for the current app."""
        if current_app.extensions.get('passwordless') is not self:
            raise NotInitialized('Passwordless is not set up on this app')
        if self.token_store is None:
            raise NotInitialized('No token store configured')
        return TokenVerifier(
            self.token_store,
            allow_token_reuse=current_app.config[
                'PASSWORDLESS_ALLOW_TOKEN_REUSE'],
            token_ttl=int(current_app.config['PASSWORDLESS_TOKEN_TTL'])
        )

    def restricted(self, **options: Any) -> Callable:
        """Route decorator; see :func:`.decorators.restricted`."""
        return decorators.restricted(**options)

    def restrict(self, target: Registrable, **options: Any) -> None:
        """Guard every route of ``target`` (an app or a blueprint)."""
        target.before_request(decorators.restricted_hook(**options))

    def accept_token(self, target: Registrable, **options: Any) -> None:
        """Accept tokens on every route of ``target``.

        See :func:`.acceptance.accept_token` for the options.
        """
        target.before_request(acceptance.accept_token(self.verifier,
                                                      **options))

    def logout(self, **options: Any) -> Callable:
        """Route decorator; see :func:`.decorators.logout`."""
        return decorators.logout(**options)
