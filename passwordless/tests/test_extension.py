"""Tests for :class:`passwordless.Passwordless`."""

from logging import DEBUG

from flask import Flask, request
import pytest

from .. import Passwordless, sessions
from ..exceptions import NotInitialized, SessionStoreError
from ..tokens import TokenVerifier


def test_config_defaults(app):
    """Defaults are set without clobbering existing values."""
    assert app.config['PASSWORDLESS_USER_PROPERTY'] == 'user'
    assert app.config['PASSWORDLESS_SESSION_KEY'] == 'passwordless'
    assert app.config['PASSWORDLESS_ALLOW_TOKEN_REUSE'] is False
    assert app.config['PASSWORDLESS_TOKEN_TTL'] == 3600

    other = Flask('test_other')
    other.config['PASSWORDLESS_TOKEN_TTL'] = 60
    Passwordless(other)
    assert other.config['PASSWORDLESS_TOKEN_TTL'] == 60


def test_debug_logging(mocker):
    """The package logger can be turned up from config."""
    mock_logger = mocker.patch('passwordless.logger')
    app = Flask('test_debug')
    app.config['PASSWORDLESS_DEBUG'] = True
    Passwordless(app)
    mock_logger.setLevel.assert_called_once_with(DEBUG)


def test_deferred_init(token_store):
    """The extension can be created before the app."""
    auth = Passwordless(token_store=token_store)
    app = Flask('test_deferred')
    auth.init_app(app)
    assert app.extensions['passwordless'] is auth
    with app.test_request_context():
        verifier = auth.verifier()
    assert isinstance(verifier, TokenVerifier)
    assert verifier.store is token_store
    assert verifier.allow_token_reuse is False


def test_verifier_needs_init(app, token_store):
    """Using the extension with a foreign app is a configuration error."""
    auth = Passwordless(token_store=token_store)
    with app.test_request_context():
        with pytest.raises(NotInitialized):
            auth.verifier()


def test_verifier_needs_store():
    """Accepting tokens without a store is a configuration error."""
    app = Flask('test_no_store')
    auth = Passwordless(app)
    with app.test_request_context():
        with pytest.raises(NotInitialized):
            auth.verifier()


def test_logout(app_with_flash):
    """Logging out drops the marker and can flash and redirect."""
    app = app_with_flash
    auth = app.extensions['passwordless']

    @app.route('/logout')
    @auth.logout(success_flash='Bye', success_redirect='/everyone')
    def logout():
        return 'not reached'

    @app.route('/everyone')
    def everyone():
        return f'{request.user}:{",".join(request.flash.drain("passwordless"))}'

    client = app.test_client()
    with client.session_transaction() as session:
        session['passwordless'] = 'user42'
    assert client.get('/everyone').data == b'user42:'

    response = client.get('/logout')
    assert response.status_code == 302
    assert response.headers['Location'] == '/everyone'
    assert client.get('/everyone').data == b'None:Bye'


def test_logout_without_redirect(app, auth):
    """Without a redirect, the decorated route is called."""
    @app.route('/logout')
    @auth.logout()
    def logout():
        return f'logged out {request.user}'

    client = app.test_client()
    with client.session_transaction() as session:
        session['passwordless'] = 'user42'
    assert client.get('/logout').data == b'logged out None'
    with client.session_transaction() as session:
        assert 'passwordless' not in session


def test_persist_without_secret_key():
    """Failing to write the session is reported as such."""
    app = Flask('test_no_secret')
    Passwordless(app)
    with app.test_request_context():
        app.preprocess_request()
        with pytest.raises(SessionStoreError):
            sessions.persist('user42')
