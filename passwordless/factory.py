"""Application factory for the example passwordless application."""

from flask import Blueprint, Flask, request

from . import Passwordless
from .domain import FLASH_NAMESPACE
from .flash import Flash, current_flash
from .tokens import TokenStore


def create_web_app(token_store: TokenStore) -> Flask:
    """Initialize and configure the example application."""
    app = Flask('passwordless')
    app.config.from_pyfile('config.py')

    # Flash must come first; the acceptance hook may flash.
    Flash(app)
    auth = Passwordless(app, token_store=token_store)
    auth.accept_token(app, enable_origin_redirect=True,
                      origin_field=app.config['ORIGIN_URL_PARAM'])

    restricted = Blueprint('restricted', __name__, url_prefix='/restricted')
    auth.restrict(restricted,
                  not_auth_redirect=app.config['LOGIN_URL'],
                  origin_url_param=app.config['ORIGIN_URL_PARAM'],
                  flash_user_not_auth=app.config['NOT_AUTH_MESSAGE'])

    @restricted.route('', methods=['GET'])
    def restricted_home() -> str:
        user_property = app.config['PASSWORDLESS_USER_PROPERTY']
        return f'authenticated as {getattr(request, user_property)}'

    public = Blueprint('public', __name__)

    @public.route('/login', methods=['GET'])
    def login() -> str:
        return '\n'.join(current_flash().drain(FLASH_NAMESPACE))

    @public.route('/logout', methods=['GET'])
    @auth.logout(success_redirect=app.config['LOGIN_URL'])
    def logout() -> str:
        return ''

    @public.route('/everyone', methods=['GET'])
    def everyone() -> str:
        return 'everyone'

    app.register_blueprint(restricted)
    app.register_blueprint(public)
    return app
