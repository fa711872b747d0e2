"""Flask configuration for the example passwordless application."""

import os
import secrets

SECRET_KEY = os.environ.get('SECRET_KEY', secrets.token_urlsafe(16))
"""Signs the session cookie that carries the authenticated marker."""

PASSWORDLESS_DEBUG = os.environ.get('PASSWORDLESS_DEBUG', '0') == '1'

PASSWORDLESS_ALLOW_TOKEN_REUSE = \
    os.environ.get('PASSWORDLESS_ALLOW_TOKEN_REUSE', '0') == '1'
"""If set, tokens are extended on use instead of being invalidated."""

PASSWORDLESS_TOKEN_TTL = int(os.environ.get('PASSWORDLESS_TOKEN_TTL', '3600'))
"""Seconds a reusable token stays valid after each use."""

LOGIN_URL = os.environ.get('LOGIN_URL', '/login')
"""Where unauthenticated requests to restricted routes are sent."""

ORIGIN_URL_PARAM = os.environ.get('ORIGIN_URL_PARAM', 'origin')

NOT_AUTH_MESSAGE = os.environ.get('NOT_AUTH_MESSAGE',
                                  'You are not authorized')
