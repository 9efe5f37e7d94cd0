"""In-memory OAuth client for testing the sign-in routes without Google."""

from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from domain.model.errors import AuthenticationError
from domain.model.user import OAuthIdentity


class FakeOAuthClient:
    def __init__(self, identity: OAuthIdentity | None = None,
                 consent_url: str = 'https://accounts.example.com/consent'):
        self.identity = identity
        self.consent_url = consent_url
        self.redirects = 0

    async def authorize_redirect(self, request: Request) -> Response:
        self.redirects += 1
        return RedirectResponse(self.consent_url, status_code=302)

    async def fetch_identity(self, request: Request) -> OAuthIdentity:
        if self.identity is None:
            raise AuthenticationError("OAuth exchange failed")
        return self.identity
