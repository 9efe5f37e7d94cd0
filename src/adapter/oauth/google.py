"""Google sign-in via Authlib's Starlette OAuth client.

Authlib performs the redirect, state check and code exchange; this adapter
only turns the verified OpenID Connect claims into an OAuthIdentity.
"""

from logging import getLogger
from typing import Any

from authlib.integrations.starlette_client import OAuth, OAuthError
from starlette.requests import Request
from starlette.responses import Response

from domain.model.errors import AuthenticationError
from domain.model.user import AuthProvider, OAuthIdentity
from utils.config import Settings

logger = getLogger(__name__)

GOOGLE_DISCOVERY_URL = 'https://accounts.google.com/.well-known/openid-configuration'
GOOGLE_SCOPES = ['openid', 'email', 'profile']


def identity_from_userinfo(userinfo: dict[str, Any]) -> OAuthIdentity:
    """Map Google's userinfo claims to an OAuthIdentity.

    Raises:
        AuthenticationError: the claims lack a subject or an email
    """
    subject = userinfo.get('sub')
    email = userinfo.get('email')
    if not subject or not email:
        raise AuthenticationError("Google account did not provide an id and email")

    name = userinfo.get('name') or email.split('@')[0]
    return OAuthIdentity(
        email=email,
        name=name,
        provider=AuthProvider.GOOGLE,
        provider_id=str(subject),
        profile_picture=userinfo.get('picture'),
    )


class GoogleOAuthClient:
    def __init__(self, settings: Settings):
        if not settings.google_client_id or not settings.google_client_secret:
            raise ValueError(
                "Google OAuth is not configured. Set GOOGLE_CLIENT_ID and "
                "GOOGLE_CLIENT_SECRET in environment variables."
            )
        self.callback_url = settings.google_callback_url
        self.oauth = OAuth()
        self.oauth.register(
            name='google',
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            server_metadata_url=GOOGLE_DISCOVERY_URL,
            client_kwargs={'scope': ' '.join(GOOGLE_SCOPES)},
        )

    async def authorize_redirect(self, request: Request) -> Response:
        """Redirect the browser to Google's consent screen."""
        redirect_uri = self.callback_url or str(request.url_for('google_callback'))
        return await self.oauth.google.authorize_redirect(request, redirect_uri)

    async def fetch_identity(self, request: Request) -> OAuthIdentity:
        """Complete the code exchange and return the verified identity."""
        try:
            token = await self.oauth.google.authorize_access_token(request)
        except OAuthError as e:
            logger.warning("Google OAuth exchange failed", extra={"error": e.error})
            raise AuthenticationError("Google sign-in failed") from e

        userinfo = token.get('userinfo')
        if not userinfo:
            userinfo = await self.oauth.google.userinfo(token=token)
        return identity_from_userinfo(dict(userinfo))
