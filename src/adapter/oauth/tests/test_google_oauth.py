"""Tests for the Google OAuth adapter."""

import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock

from authlib.integrations.starlette_client import OAuthError

from adapter.oauth.google import GoogleOAuthClient, identity_from_userinfo
from domain.model.errors import AuthenticationError
from domain.model.user import AuthProvider
from utils.config import Settings

SETTINGS = Settings(
    google_client_id='client-id',
    google_client_secret='client-secret',
    google_callback_url='http://localhost:8000/auth/google/callback',
)


class TestIdentityFromUserinfo(unittest.TestCase):

    def test_maps_claims(self):
        identity = identity_from_userinfo({
            'sub': '1234567890',
            'email': 'g@example.com',
            'name': 'Google User',
            'picture': 'https://example.com/g.png',
        })

        self.assertEqual(identity.provider, AuthProvider.GOOGLE)
        self.assertEqual(identity.provider_id, '1234567890')
        self.assertEqual(identity.email, 'g@example.com')
        self.assertEqual(identity.name, 'Google User')
        self.assertEqual(identity.profile_picture, 'https://example.com/g.png')

    def test_name_falls_back_to_email_local_part(self):
        identity = identity_from_userinfo({'sub': '1', 'email': 'jane.doe@example.com'})

        self.assertEqual(identity.name, 'jane.doe')
        self.assertIsNone(identity.profile_picture)

    def test_missing_subject_or_email_is_rejected(self):
        with self.assertRaises(AuthenticationError):
            identity_from_userinfo({'email': 'g@example.com'})
        with self.assertRaises(AuthenticationError):
            identity_from_userinfo({'sub': '1'})


class TestGoogleOAuthClient(unittest.TestCase):

    def test_requires_credentials(self):
        with self.assertRaises(ValueError):
            GoogleOAuthClient(Settings())

    def test_fetch_identity_uses_id_token_claims(self):
        client = GoogleOAuthClient(SETTINGS)
        google = MagicMock()
        google.authorize_access_token = AsyncMock(return_value={
            'access_token': 'at',
            'userinfo': {'sub': '42', 'email': 'g@example.com', 'name': 'G'},
        })
        client.oauth = MagicMock(google=google)

        identity = asyncio.run(client.fetch_identity(MagicMock()))

        self.assertEqual(identity.provider_id, '42')
        google.userinfo.assert_not_called()

    def test_fetch_identity_wraps_oauth_errors(self):
        client = GoogleOAuthClient(SETTINGS)
        google = MagicMock()
        google.authorize_access_token = AsyncMock(side_effect=OAuthError(error='mismatching_state'))
        client.oauth = MagicMock(google=google)

        with self.assertRaises(AuthenticationError):
            asyncio.run(client.fetch_identity(MagicMock()))

    def test_authorize_redirect_uses_configured_callback(self):
        client = GoogleOAuthClient(SETTINGS)
        google = MagicMock()
        google.authorize_redirect = AsyncMock(return_value='redirect')
        client.oauth = MagicMock(google=google)
        request = MagicMock()

        result = asyncio.run(client.authorize_redirect(request))

        self.assertEqual(result, 'redirect')
        google.authorize_redirect.assert_awaited_once_with(request, SETTINGS.google_callback_url)


if __name__ == '__main__':
    unittest.main()
