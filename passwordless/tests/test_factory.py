"""End-to-end tests, via requests to the example application."""

from unittest import TestCase
from urllib.parse import quote

from ..factory import create_web_app
from .util import TokenStoreMock


class TestExampleApplication(TestCase):
    """Walk through a login with a token sent out of band."""

    def setUp(self):
        self.store = TokenStoreMock({'token123': 'user42'})
        self.app = create_web_app(self.store)
        self.app.config['TESTING'] = True
        self.client = self.app.test_client()

    def test_everyone(self):
        """Public routes are not gated."""
        response = self.client.get('/everyone')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, b'everyone')

    def test_login_round_trip(self):
        """Redirect to login, flash once, log in, go back, log out."""
        response = self.client.get('/restricted?id=3')
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers['Location'],
                         '/login?origin=%2Frestricted%3Fid%3D3')

        response = self.client.get('/login')
        self.assertEqual(response.data, b'You are not authorized')
        response = self.client.get('/login')
        self.assertEqual(response.data, b'', 'Flash is shown only once')

        origin = quote('/restricted?id=3', safe='')
        response = self.client.get(
            f'/login?token=token123&uid=user42&origin={origin}')
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers['Location'], '/restricted?id=3')
        self.assertEqual(self.store.invalidated, ['token123'])

        response = self.client.get('/restricted?id=3')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, b'authenticated as user42')

        response = self.client.get('/logout')
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers['Location'], '/login')

        response = self.client.get('/restricted')
        self.assertEqual(response.status_code, 302)

    def test_invalid_token(self):
        """A rejected token leaves the request unauthenticated."""
        response = self.client.get('/restricted?token=wrong&uid=user42')
        self.assertEqual(response.status_code, 302)
        self.assertTrue(response.headers['Location'].startswith('/login?'))
