import pytest

from flask import Flask

from passwordless import Passwordless
from passwordless.flash import Flash
from passwordless.tests.util import TokenStoreMock


@pytest.fixture()
def token_store():
    return TokenStoreMock({'token123': 'user42'})


@pytest.fixture()
def app(token_store):
    app = Flask('test_passwordless_app')
    app.config['TESTING'] = True
    app.config['SECRET_KEY'] = '42'
    Passwordless(app, token_store=token_store)
    return app


@pytest.fixture()
def app_with_flash(token_store):
    app = Flask('test_passwordless_flash_app')
    app.config['TESTING'] = True
    app.config['SECRET_KEY'] = '42'
    Flash(app)
    Passwordless(app, token_store=token_store)
    return app


@pytest.fixture()
def auth(app):
    return app.extensions['passwordless']
